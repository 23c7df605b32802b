from __future__ import annotations

import pytest

from adplatforms.exceptions import EmptyBatchError
from adplatforms.state.closure import build_closed_index, close_location, iter_ancestors, parent_path


@pytest.mark.parametrize(
    ("path", "parent"),
    [
        ("/ru/svrd/ekb", "/ru/svrd"),
        ("/ru/svrd", "/ru"),
        ("/ru", ""),
        ("/", ""),
        ("ru/svrd", "ru"),
        ("ru", ""),
        ("/ru/", "/ru"),
    ],
)
def test_parent_path(path: str, parent: str) -> None:
    assert parent_path(path) == parent


def test_iter_ancestors_nearest_first() -> None:
    assert list(iter_ancestors("/ru/svrd/ekb")) == ["/ru/svrd/ekb", "/ru/svrd", "/ru"]
    assert list(iter_ancestors("ru/svrd")) == ["ru/svrd", "ru"]
    assert list(iter_ancestors("")) == []


def test_closure_inherits_from_explicit_ancestors() -> None:
    raw = {
        "/ru": {"Yandex.Direct"},
        "/ru/svrd/revda": {"Revda Gazette"},
        "/ru/svrd/pervik": {"Revda Gazette"},
    }

    closed = build_closed_index(raw)

    assert closed["/ru/svrd/revda"] == frozenset({"Yandex.Direct", "Revda Gazette"})
    assert closed["/ru/svrd/pervik"] == frozenset({"Yandex.Direct", "Revda Gazette"})
    assert closed["/ru"] == frozenset({"Yandex.Direct"})


def test_closure_does_not_synthesize_intermediate_keys() -> None:
    raw = {"/ru": {"A"}, "/ru/svrd/revda": {"B"}}

    closed = build_closed_index(raw)

    assert set(closed) == set(raw)
    assert "/ru/svrd" not in closed


def test_closure_only_crosses_separator_boundaries() -> None:
    closed = build_closed_index({"/ru": {"A"}, "/rus": {"B"}})

    assert closed["/rus"] == frozenset({"B"})


def test_closure_ancestor_sets_are_subsets_of_descendants() -> None:
    raw = {
        "/a": {"p1"},
        "/a/b": {"p2"},
        "/a/b/c": {"p3", "p1"},
        "/a/x/y": {"p4"},
        "/z": {"p5"},
        "/z/q/r/s": {"p6"},
    }

    closed = build_closed_index(raw)

    for key in closed:
        for ancestor in iter_ancestors(key):
            if ancestor in closed:
                assert closed[ancestor] <= closed[key]
    assert closed["/a/b/c"] == frozenset({"p1", "p2", "p3"})
    assert closed["/a/x/y"] == frozenset({"p1", "p4"})
    assert closed["/z/q/r/s"] == frozenset({"p5", "p6"})


def test_closure_works_without_leading_separator() -> None:
    closed = build_closed_index({"ru": {"A"}, "ru/svrd": {"B"}})

    assert closed["ru/svrd"] == frozenset({"A", "B"})


def test_close_location_for_path_not_in_raw_uses_ancestors_only() -> None:
    raw = {"/ru": {"A"}}

    assert close_location(raw, "/ru/svrd") == frozenset({"A"})
    assert close_location(raw, "/us") == frozenset()


def test_closed_index_is_read_only() -> None:
    closed = build_closed_index({"/ru": {"A"}})

    with pytest.raises(TypeError):
        closed["/us"] = frozenset({"B"})  # type: ignore[index]


def test_empty_raw_assignments_fail() -> None:
    with pytest.raises(EmptyBatchError):
        build_closed_index({})


def test_frozenset_assignments_are_accepted() -> None:
    closed = build_closed_index({"/ru": frozenset({"A"}), "/ru/svrd": frozenset({"B"})})

    assert closed["/ru/svrd"] == frozenset({"A", "B"})
