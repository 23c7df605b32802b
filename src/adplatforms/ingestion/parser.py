"""Line parser for ``Platform:loc1,loc2,...`` records."""

from __future__ import annotations

from adplatforms._constants import LOCATION_SEPARATOR, PLATFORM_SEPARATOR
from adplatforms.exceptions import MalformedLineError
from adplatforms.models.records import PlatformRecord, RejectedLine, RejectReason

_REASON_MESSAGES: dict[RejectReason, str] = {
    RejectReason.MISSING_SEPARATOR: f"missing '{PLATFORM_SEPARATOR}' separator",
    RejectReason.EMPTY_PLATFORM: "platform name is empty",
    RejectReason.EMPTY_LOCATION: "location list contains an empty entry",
}


def _split(line: str) -> tuple[str, list[str]] | RejectReason:
    platform, sep, tail = line.partition(PLATFORM_SEPARATOR)
    if not sep:
        return RejectReason.MISSING_SEPARATOR
    platform = platform.strip()
    if not platform:
        return RejectReason.EMPTY_PLATFORM
    locations = [token.strip() for token in tail.split(LOCATION_SEPARATOR)]
    if any(not token for token in locations):
        return RejectReason.EMPTY_LOCATION
    return platform, locations


def parse_line(line: str) -> PlatformRecord:
    """Parse one line into a :class:`PlatformRecord`.

    Only the first ``:`` separates the platform from its locations, so
    ``"A:b:/ru"`` assigns platform ``A`` to location ``b:/ru``.

    Raises
    ------
    MalformedLineError
        If the separator is missing, the platform is empty, or any
        location token is empty after trimming.
    """
    result = _split(line)
    if isinstance(result, RejectReason):
        raise MalformedLineError(f"Malformed line ({_REASON_MESSAGES[result]}): {line!r}", line=line, reason=result)
    platform, locations = result
    return PlatformRecord(platform=platform, locations=tuple(locations))


def try_parse_line(line: str, line_number: int) -> PlatformRecord | RejectedLine:
    """Batch-friendly variant of :func:`parse_line` that never raises for bad input."""
    result = _split(line)
    if isinstance(result, RejectReason):
        return RejectedLine(line_number=line_number, line=line, reason=result)
    platform, locations = result
    return PlatformRecord(platform=platform, locations=tuple(locations))


def describe_reason(reason: RejectReason) -> str:
    return _REASON_MESSAGES[reason]
