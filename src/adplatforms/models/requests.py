"""Pydantic request models for service entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`adplatforms.service.IndexService`.
"""

from __future__ import annotations

from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, field_validator


class LocationQuery(BaseModel):
    """A location key as supplied by a caller.

    The value is percent-decoded and then trimmed, so ``"%2Fru%2Fsvrd"``
    and ``" /ru/svrd "`` both normalize to ``"/ru/svrd"``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    location: str

    @field_validator("location")
    @classmethod
    def _decode_and_trim(cls, value: str) -> str:
        location = unquote(value).strip()
        if not location:
            raise ValueError("location must be non-empty")
        return location
