"""Ingestion and query facade over one index store."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Iterable
from os import PathLike

from pydantic import ValidationError

from adplatforms._log_safe import shorten_for_log
from adplatforms.config import AdPlatformsConfig
from adplatforms.exceptions import (
    EmptyBatchError,
    InvalidLocationError,
    InvalidUploadError,
    LocationNotFoundError,
    NoPlatformsError,
    NotLoadedError,
    PartialBatchError,
)
from adplatforms.ingestion.assignments import AssignmentCollector, acollect, collect
from adplatforms.ingestion.parser import describe_reason
from adplatforms.ingestion.reader import iter_lines
from adplatforms.models.report import IngestionReport
from adplatforms.models.requests import LocationQuery
from adplatforms.state.closure import build_closed_index
from adplatforms.state.store import IndexStore

_logger = logging.getLogger(__name__)


class IndexService:
    """Loads platform files into an :class:`IndexStore` and answers location queries.

    Usage::

        service = IndexService()
        service.load(["Yandex.Direct:/ru", "Revda Gazette:/ru/svrd/revda"])
        service.get_platforms("/ru/svrd/revda")  # ['Revda Gazette', 'Yandex.Direct']
    """

    def __init__(self, config: AdPlatformsConfig | None = None, *, store: IndexStore | None = None) -> None:
        self._config = config or AdPlatformsConfig()
        self._store = store or IndexStore()

    @property
    def config(self) -> AdPlatformsConfig:
        return self._config

    @property
    def store(self) -> IndexStore:
        return self._store

    def has_data(self) -> bool:
        return self._store.has_data()

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def load(self, lines: Iterable[str]) -> IngestionReport:
        """Replace the index with the records in *lines*.

        *lines* is consumed exactly once.

        Raises
        ------
        EmptyBatchError
            No line was valid. The current index is kept.
        PartialBatchError
            Some lines were rejected (only when ``config.raise_on_partial``).
            The index has already been replaced.
        InvalidUploadError
            The underlying bytes are not valid in the configured encoding.
            The current index is kept.
        """
        try:
            collector = collect(lines)
        except UnicodeDecodeError as exc:
            raise self._decode_error(exc) from exc
        return self._install(collector)

    async def aload(self, lines: AsyncIterable[str]) -> IngestionReport:
        """Async variant of :meth:`load` for streamed uploads."""
        try:
            collector = await acollect(lines)
        except UnicodeDecodeError as exc:
            raise self._decode_error(exc) from exc
        return self._install(collector)

    def load_file(self, path: str | PathLike[str]) -> IngestionReport:
        """Read *path* with the configured encoding and :meth:`load` it."""
        with open(path, "rb") as fh:
            return self.load(iter_lines(fh, encoding=self._config.encoding))

    def _decode_error(self, exc: UnicodeDecodeError) -> InvalidUploadError:
        _logger.warning("Batch is not valid %s text: %s", self._config.encoding, exc.reason)
        return InvalidUploadError(f"File is not valid {self._config.encoding} text ({exc.reason}).")

    def _install(self, collector: AssignmentCollector) -> IngestionReport:
        rejected = collector.rejected
        for item in rejected:
            _logger.warning(
                "Rejected line %d (%s): %s",
                item.line_number,
                describe_reason(item.reason),
                shorten_for_log(item.line),
            )

        if collector.accepted_lines == 0:
            _logger.warning("Batch of %d lines has no valid record; index left unchanged", collector.total_lines)
            raise EmptyBatchError(rejected=rejected)

        closed = build_closed_index(collector.assignments)
        snapshot = self._store.replace(closed)
        report = IngestionReport(
            total_lines=collector.total_lines,
            accepted_lines=collector.accepted_lines,
            rejected=rejected,
            location_count=len(snapshot),
            generation=snapshot.generation,
            loaded_at=snapshot.loaded_at,
        )
        _logger.info(
            "Loaded %d of %d lines into %d locations",
            report.accepted_lines,
            report.total_lines,
            report.location_count,
        )

        if report.is_partial and self._config.raise_on_partial:
            raise PartialBatchError(report)
        return report

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_platforms(self, location: str) -> list[str]:
        """Return the platforms valid for *location*, sorted by name.

        *location* may be percent-encoded and padded with whitespace.

        Raises
        ------
        InvalidLocationError
            The location is empty once decoded and trimmed.
        NotLoadedError
            No index has been loaded yet.
        LocationNotFoundError
            The location is not a key of the current index.
        """
        try:
            query = LocationQuery(location=location)
        except ValidationError as exc:
            raise InvalidLocationError("Location must not be empty.", location=location) from exc
        normalized = query.location

        # Answer from a single snapshot so a concurrent replace cannot split the checks.
        snapshot = self._store.snapshot()
        if snapshot is None:
            raise NotLoadedError()

        platforms = snapshot.locations.get(normalized)
        if platforms is None:
            _logger.debug("Location %s not found in generation %d", shorten_for_log(normalized), snapshot.generation)
            raise LocationNotFoundError(f"Location {normalized!r} does not exist.", location=normalized)
        if not platforms:
            raise NoPlatformsError(f"No advertising platforms found for location {normalized!r}.", location=normalized)

        _logger.debug("Location %s resolved to %d platforms", shorten_for_log(normalized), len(platforms))
        return sorted(platforms)
