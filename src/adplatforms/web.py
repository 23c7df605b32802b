"""aiohttp HTTP surface for the location index.

Routes
------
``POST /api/advertising-platforms``
    multipart/form-data upload with a ``file`` field; replaces the index.
``GET /api/advertising-platforms/{location}``
    platforms valid for a (percent-encoded) location.

Errors are rendered as ``{"error": "<message>"}`` by :func:`error_middleware`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from aiohttp import BodyPartReader, hdrs, web

from adplatforms._constants import API_PREFIX, UPLOAD_FIELD
from adplatforms._log_safe import shorten_for_log
from adplatforms.config import AdPlatformsConfig
from adplatforms.exceptions import (
    BatchError,
    EmptyBatchError,
    InvalidLocationError,
    InvalidUploadError,
    LocationNotFoundError,
    NotLoadedError,
    PartialBatchError,
)
from adplatforms.ingestion.reader import aiter_lines
from adplatforms.service import IndexService

_logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("service", IndexService)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error_response(status: int, message: str, **extra: Any) -> web.Response:
    return web.json_response({"error": message, **extra}, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Map library exceptions to HTTP responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except PartialBatchError as exc:
        _logger.warning("Partial upload on %s: %s", request.path, exc)
        return _error_response(
            400,
            str(exc),
            accepted_lines=exc.accepted_lines,
            rejected_lines=exc.rejected_lines,
        )
    except BatchError as exc:
        _logger.warning("Rejected upload on %s: %s", request.path, exc)
        return _error_response(400, str(exc), accepted_lines=0, rejected_lines=exc.rejected_lines)
    except (InvalidUploadError, InvalidLocationError) as exc:
        _logger.warning("Bad request on %s: %s", request.path, exc)
        return _error_response(400, str(exc))
    except LocationNotFoundError as exc:
        _logger.info("Not found on %s: %s", request.path, exc)
        return _error_response(404, str(exc))
    except NotLoadedError as exc:
        _logger.warning("Query on %s before data was loaded", request.path)
        return _error_response(503, str(exc))
    except Exception:
        _logger.exception("Error handling request %s", request.path)
        return _error_response(500, "Internal server error.")


def _part_content_type(part: BodyPartReader) -> str:
    raw = part.headers.get(hdrs.CONTENT_TYPE, "")
    return raw.split(";", 1)[0].strip().lower()


async def _find_upload_part(request: web.Request) -> BodyPartReader:
    if not request.content_type.startswith("multipart/"):
        raise InvalidUploadError("Expected a multipart/form-data upload.")
    reader = await request.multipart()
    async for part in reader:
        if isinstance(part, BodyPartReader) and part.name == UPLOAD_FIELD:
            return part
    raise InvalidUploadError("File is missing.")


async def _iter_chunks(part: BodyPartReader, first: bytes, limit: int) -> AsyncIterator[bytes]:
    size = len(first)
    yield first
    while True:
        chunk = await part.read_chunk()
        if not chunk:
            return
        size += len(chunk)
        if size > limit:
            raise InvalidUploadError(f"File exceeds the {limit} byte limit.")
        yield chunk


async def upload_file(request: web.Request) -> web.Response:
    service = request.app[SERVICE_KEY]
    config = service.config

    part = await _find_upload_part(request)
    content_type = _part_content_type(part)
    if content_type not in config.allowed_content_types:
        raise InvalidUploadError(
            f"Unsupported content type {content_type or '<none>'!r}. "
            f"Expected one of: {', '.join(config.allowed_content_types)}."
        )

    first = await part.read_chunk()
    if not first:
        raise InvalidUploadError("File is empty.")
    if len(first) > config.max_upload_bytes:
        raise InvalidUploadError(f"File exceeds the {config.max_upload_bytes} byte limit.")

    _logger.info("Received file %s", shorten_for_log(part.filename or "<unnamed>"))
    chunks = _iter_chunks(part, first, config.max_upload_bytes)
    report = await service.aload(aiter_lines(chunks, encoding=config.encoding))

    return web.json_response(
        {
            "message": "File uploaded successfully.",
            "accepted_lines": report.accepted_lines,
            "rejected_lines": report.rejected_lines,
            "locations": report.location_count,
        }
    )


async def get_platforms(request: web.Request) -> web.Response:
    service = request.app[SERVICE_KEY]
    # match_info is already decoded; the service decodes the raw segment exactly once.
    location = request.rel_url.raw_parts[-1]
    platforms = service.get_platforms(location)
    _logger.info("Found %d platforms for location %s", len(platforms), shorten_for_log(location))
    return web.json_response(platforms)


async def _preload(app: web.Application) -> None:
    service = app[SERVICE_KEY]
    path = service.config.preload_path
    if not path:
        return
    try:
        report = await asyncio.to_thread(service.load_file, path)
    except PartialBatchError as exc:
        _logger.warning("Preloaded %s with errors: %s", path, exc)
    except (EmptyBatchError, InvalidUploadError, OSError) as exc:
        _logger.error("Preload of %s failed: %s", path, exc)
    else:
        _logger.info("Preloaded %s: %d locations", path, report.location_count)


def create_app(service: IndexService | None = None, config: AdPlatformsConfig | None = None) -> web.Application:
    """Build the aiohttp application around *service*.

    When *service* is omitted a new one is created from *config* (or from
    the environment when *config* is omitted too).
    """
    if service is None:
        service = IndexService(config or AdPlatformsConfig.from_env())
    app = web.Application(
        middlewares=[error_middleware],
        client_max_size=service.config.max_upload_bytes + 64 * 1024,
    )
    app[SERVICE_KEY] = service
    app.router.add_post(API_PREFIX, upload_file)
    app.router.add_get(f"{API_PREFIX}/{{location}}", get_platforms)
    app.on_startup.append(_preload)
    return app
