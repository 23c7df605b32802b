"""In-memory index store.

Holds the closed location index and serves point lookups. A new index is
built off to the side and installed with a single reference assignment, so
a reader sees either the previous or the next index, never a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from types import MappingProxyType

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class IndexSnapshot:
    """One installed index. Immutable once created."""

    locations: Mapping[str, frozenset[str]]
    generation: int
    loaded_at: datetime

    def __len__(self) -> int:
        return len(self.locations)


class IndexStore:
    """Atomically replaceable location → platforms index.

    Writers are serialized by a lock; readers take no lock and answer from
    whichever snapshot was current when they read the reference.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._write_lock = threading.Lock()
        self._snapshot: IndexSnapshot | None = None

    def replace(self, closed_index: Mapping[str, frozenset[str]]) -> IndexSnapshot:
        """Discard the current index and install *closed_index*.

        The mapping is copied, so later mutation of the argument has no effect.
        """
        frozen = MappingProxyType({location: frozenset(platforms) for location, platforms in closed_index.items()})
        with self._write_lock:
            previous = self._snapshot
            generation = 1 if previous is None else previous.generation + 1
            snapshot = IndexSnapshot(locations=frozen, generation=generation, loaded_at=self._clock())
            self._snapshot = snapshot
        _logger.info(
            "Installed index generation %d with %d locations (previous: %d)",
            snapshot.generation,
            len(snapshot),
            0 if previous is None else len(previous),
        )
        return snapshot

    def snapshot(self) -> IndexSnapshot | None:
        return self._snapshot

    @property
    def generation(self) -> int:
        snapshot = self._snapshot
        return 0 if snapshot is None else snapshot.generation

    def lookup(self, location: str) -> frozenset[str] | None:
        """Exact-match lookup; ``None`` if *location* is not a key."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return snapshot.locations.get(location)

    def has_data(self) -> bool:
        """Whether at least one index has been installed."""
        return self._snapshot is not None

    def location_exists(self, location: str) -> bool:
        snapshot = self._snapshot
        return snapshot is not None and location in snapshot.locations

    def __len__(self) -> int:
        snapshot = self._snapshot
        return 0 if snapshot is None else len(snapshot)
