"""Ingestion outcome model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from adplatforms.models.records import RejectedLine


class IngestionReport(BaseModel):
    """Summary of one successful ingestion batch.

    A report exists only when the store was replaced. ``rejected`` is empty
    for a fully valid batch.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_lines: int = Field(..., ge=0)
    accepted_lines: int = Field(..., ge=1)
    rejected: tuple[RejectedLine, ...] = ()
    location_count: int = Field(..., ge=1, description="Locations served by the installed index")
    generation: int = Field(..., ge=1)
    loaded_at: datetime

    @property
    def is_partial(self) -> bool:
        return bool(self.rejected)

    @property
    def rejected_lines(self) -> list[str]:
        return [item.line for item in self.rejected]
