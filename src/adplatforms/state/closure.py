"""Ancestor closure of raw location assignments.

Given the platforms assigned directly to each location, compute for every
location the platforms that apply to it, including the ones inherited from
ancestor locations. Only locations that were explicitly assigned become
keys: ``/ru/svrd`` is not created just because ``/ru/svrd/ekb`` exists.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Set as AbstractSet
from types import MappingProxyType

from adplatforms._constants import PATH_SEPARATOR
from adplatforms.exceptions import EmptyBatchError

ClosedIndex = Mapping[str, frozenset[str]]


def parent_path(path: str) -> str:
    """Return the parent of *path*, or ``""`` when *path* is a root.

    ``/ru/svrd`` → ``/ru``; ``/ru`` → ``""``; ``ru`` → ``""``.
    The walk is purely syntactic, so paths without a leading ``/`` work too.
    """
    cut = path.rfind(PATH_SEPARATOR)
    if cut <= 0:
        return ""
    return path[:cut]


def iter_ancestors(path: str) -> Iterator[str]:
    """Yield *path* followed by each of its ancestors, nearest first."""
    cursor = path
    while cursor:
        yield cursor
        cursor = parent_path(cursor)


def close_location(raw: Mapping[str, AbstractSet[str]], location: str) -> frozenset[str]:
    """Union the platforms of *location* and of every ancestor present in *raw*."""
    accumulated: set[str] = set()
    for cursor in iter_ancestors(location):
        platforms = raw.get(cursor)
        if platforms:
            accumulated.update(platforms)
    return frozenset(accumulated)


def build_closed_index(raw: Mapping[str, AbstractSet[str]]) -> ClosedIndex:
    """Close *raw* over ancestor paths.

    One ancestor walk per distinct key, so the cost is proportional to the
    summed depth of all keys.

    Raises
    ------
    EmptyBatchError
        If *raw* has no keys.
    """
    if not raw:
        raise EmptyBatchError()
    return MappingProxyType({location: close_location(raw, location) for location in raw})
