"""Raw assignment collection.

Turns one batch of lines into the location → platform multimap (not yet
closed over ancestry) plus the list of rejected lines. Lines are consumed
one at a time, so the same collector serves sync and async line sources.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import AsyncIterable, Iterable

from adplatforms.ingestion.parser import try_parse_line
from adplatforms.models.records import PlatformRecord, RejectedLine

RawAssignments = dict[str, set[str]]


class AssignmentCollector:
    """Accumulates parsed lines of a single ingestion batch."""

    def __init__(self) -> None:
        self._assignments: defaultdict[str, set[str]] = defaultdict(set)
        self._rejected: list[RejectedLine] = []
        self._total = 0
        self._accepted = 0

    def feed(self, line: str) -> PlatformRecord | RejectedLine | None:
        """Parse and record one line. Blank lines are ignored and return ``None``."""
        if not line.strip():
            return None
        self._total += 1
        result = try_parse_line(line, self._total)
        if isinstance(result, RejectedLine):
            self._rejected.append(result)
            return result
        self._accepted += 1
        for location in result.locations:
            self._assignments[location].add(result.platform)
        return result

    @property
    def assignments(self) -> RawAssignments:
        return dict(self._assignments)

    @property
    def rejected(self) -> tuple[RejectedLine, ...]:
        return tuple(self._rejected)

    @property
    def total_lines(self) -> int:
        return self._total

    @property
    def accepted_lines(self) -> int:
        return self._accepted


def collect(lines: Iterable[str]) -> AssignmentCollector:
    collector = AssignmentCollector()
    for line in lines:
        collector.feed(line)
    return collector


async def acollect(lines: AsyncIterable[str]) -> AssignmentCollector:
    collector = AssignmentCollector()
    async for line in lines:
        collector.feed(line)
    return collector
