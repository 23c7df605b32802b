"""Custom exception hierarchy for adplatforms."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from adplatforms._log_safe import shorten_for_log

if TYPE_CHECKING:
    from adplatforms.models.records import RejectedLine, RejectReason
    from adplatforms.models.report import IngestionReport


def _format_rejected(rejected: Sequence[RejectedLine]) -> str:
    return "; ".join(f"line {item.line_number}: {shorten_for_log(item.line, max_string=120)}" for item in rejected)


class AdPlatformsError(Exception):
    """Base exception for all adplatforms errors."""


class AdPlatformsConfigError(AdPlatformsError):
    """Invalid or missing configuration."""


class MalformedLineError(AdPlatformsError):
    """A single input line does not match ``Platform:loc1,loc2,...``."""

    def __init__(self, message: str, *, line: str, reason: RejectReason) -> None:
        self.line = line
        self.reason = reason
        super().__init__(message)


class BatchError(AdPlatformsError):
    """Base for failures that concern a whole ingestion batch."""

    def __init__(self, message: str, *, rejected: Sequence[RejectedLine] = ()) -> None:
        self.rejected: tuple[RejectedLine, ...] = tuple(rejected)
        super().__init__(message)

    @property
    def rejected_lines(self) -> list[str]:
        """Verbatim text of every rejected line, in input order."""
        return [item.line for item in self.rejected]


class EmptyBatchError(BatchError):
    """The batch contained no valid line; the store was left untouched."""

    def __init__(self, *, rejected: Sequence[RejectedLine] = ()) -> None:
        message = "The file contains no valid advertising platform data."
        if rejected:
            message = f"{message} Errors in lines: {_format_rejected(rejected)}"
        super().__init__(message, rejected=rejected)


class PartialBatchError(BatchError):
    """Some lines were rejected, but the valid ones were loaded.

    The store has already been replaced when this is raised; ``report``
    describes what was installed.
    """

    def __init__(self, report: IngestionReport) -> None:
        self.report = report
        message = (
            f"Loaded {report.accepted_lines} of {report.total_lines} lines. "
            f"Errors in lines: {_format_rejected(report.rejected)}"
        )
        super().__init__(message, rejected=report.rejected)

    @property
    def accepted_lines(self) -> int:
        return self.report.accepted_lines


class NotLoadedError(AdPlatformsError):
    """Queried before any batch was loaded successfully."""

    def __init__(self, message: str = "Advertising platform data has not been loaded.") -> None:
        super().__init__(message)


class LocationNotFoundError(AdPlatformsError):
    """The location is not a key of the current index."""

    def __init__(self, message: str, *, location: str) -> None:
        self.location = location
        super().__init__(message)


class NoPlatformsError(LocationNotFoundError):
    """The location is indexed, but no platform applies to it.

    Cannot happen with indexes built by :func:`adplatforms.state.closure.build_closed_index`
    since every key carries at least one platform.
    """


class InvalidLocationError(AdPlatformsError):
    """The location is empty once decoded and trimmed."""

    def __init__(self, message: str, *, location: str) -> None:
        self.location = location
        super().__init__(message)


class InvalidUploadError(AdPlatformsError):
    """The uploaded file is missing, empty, too large, of the wrong type or undecodable."""
