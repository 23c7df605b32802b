"""Parsed input records."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RejectReason(StrEnum):
    MISSING_SEPARATOR = "missing_separator"
    EMPTY_PLATFORM = "empty_platform"
    EMPTY_LOCATION = "empty_location"


class PlatformRecord(BaseModel):
    """One valid input line: a platform and the locations it is assigned to.

    Parameters
    ----------
    platform : str
        Trimmed platform name.
    locations : tuple of str
        Trimmed location paths, in input order. May repeat.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    platform: str
    locations: tuple[str, ...] = Field(..., min_length=1)

    @field_validator("platform")
    @classmethod
    def _platform_non_empty(cls, value: str) -> str:
        platform = value.strip()
        if not platform:
            raise ValueError("platform must be non-empty")
        return platform

    @field_validator("locations")
    @classmethod
    def _locations_non_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        locations = tuple(item.strip() for item in value)
        if any(not item for item in locations):
            raise ValueError("locations must be non-empty")
        return locations


class RejectedLine(BaseModel):
    """An input line that could not be parsed, kept verbatim for diagnostics."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    line_number: int = Field(..., ge=1, description="1-based position among the non-blank lines")
    line: str = Field(..., description="Line text as received")
    reason: RejectReason
