from __future__ import annotations

import threading
from datetime import UTC, datetime

from adplatforms.state.store import IndexStore


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def test_new_store_is_empty() -> None:
    store = IndexStore()

    assert store.has_data() is False
    assert store.lookup("/ru") is None
    assert store.location_exists("/ru") is False
    assert store.snapshot() is None
    assert store.generation == 0
    assert len(store) == 0


def test_replace_installs_snapshot() -> None:
    store = IndexStore(clock=_dt)

    snapshot = store.replace({"/ru": frozenset({"A"}), "/ru/msk": frozenset({"A", "B"})})

    assert store.has_data() is True
    assert snapshot.generation == 1
    assert snapshot.loaded_at == _dt()
    assert len(store) == 2
    assert store.lookup("/ru/msk") == frozenset({"A", "B"})
    assert store.location_exists("/ru") is True
    assert store.location_exists("/us") is False
    assert store.lookup("/us") is None


def test_lookup_is_exact_match_only() -> None:
    store = IndexStore()
    store.replace({"/ru/svrd/revda": frozenset({"A"})})

    assert store.lookup("/ru/svrd") is None
    assert store.lookup("/ru/svrd/revda/") is None
    assert store.location_exists("/ru") is False


def test_replace_discards_previous_index() -> None:
    store = IndexStore()
    store.replace({"/ru": frozenset({"A"})})
    store.replace({"/us": frozenset({"B"})})

    assert store.location_exists("/ru") is False
    assert store.lookup("/us") == frozenset({"B"})
    assert store.generation == 2


def test_replace_copies_the_mapping() -> None:
    store = IndexStore()
    source = {"/ru": frozenset({"A"})}
    store.replace(source)

    source["/us"] = frozenset({"B"})

    assert store.location_exists("/us") is False


def test_replacing_with_same_index_is_idempotent() -> None:
    store = IndexStore()
    closed = {"/ru": frozenset({"A"}), "/ru/msk": frozenset({"A", "B"})}

    store.replace(closed)
    first = {key: store.lookup(key) for key in closed}
    store.replace(closed)
    second = {key: store.lookup(key) for key in closed}

    assert first == second


def test_old_snapshot_stays_consistent_after_replace() -> None:
    store = IndexStore()
    store.replace({"/ru": frozenset({"A"})})
    old = store.snapshot()
    store.replace({"/ru": frozenset({"B"})})

    assert old is not None
    assert old.locations["/ru"] == frozenset({"A"})
    assert store.lookup("/ru") == frozenset({"B"})


def test_readers_never_observe_mixed_batches() -> None:
    keys = [f"/loc/{i}" for i in range(200)]
    batch_a = {key: frozenset({"A"}) for key in keys}
    batch_b = {key: frozenset({"B"}) for key in keys}
    store = IndexStore()
    store.replace(batch_a)

    stop = threading.Event()
    errors: list[str] = []

    def reader() -> None:
        while not stop.is_set():
            snapshot = store.snapshot()
            assert snapshot is not None
            seen = frozenset().union(*snapshot.locations.values())
            if len(seen) != 1 or len(snapshot) != len(keys):
                errors.append(f"mixed snapshot: {sorted(seen)}")
                return

    def writer() -> None:
        for i in range(300):
            store.replace(batch_b if i % 2 else batch_a)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    writers = [threading.Thread(target=writer) for _ in range(2)]
    for thread in readers + writers:
        thread.start()
    for thread in writers:
        thread.join()
    stop.set()
    for thread in readers:
        thread.join()

    assert errors == []
    assert store.generation == 601
