"""adplatforms - hierarchical location index for advertising platforms."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("adplatforms")
except PackageNotFoundError:
    __version__ = "0+local"

from adplatforms.config import AdPlatformsConfig
from adplatforms.exceptions import (
    AdPlatformsConfigError,
    AdPlatformsError,
    BatchError,
    EmptyBatchError,
    InvalidLocationError,
    InvalidUploadError,
    LocationNotFoundError,
    MalformedLineError,
    NoPlatformsError,
    NotLoadedError,
    PartialBatchError,
)
from adplatforms.models import IngestionReport, LocationQuery, PlatformRecord, RejectedLine, RejectReason
from adplatforms.service import IndexService
from adplatforms.state import IndexSnapshot, IndexStore, build_closed_index

__all__ = [
    "__version__",
    "AdPlatformsConfig",
    "AdPlatformsConfigError",
    "AdPlatformsError",
    "BatchError",
    "EmptyBatchError",
    "IndexService",
    "IndexSnapshot",
    "IndexStore",
    "IngestionReport",
    "InvalidLocationError",
    "InvalidUploadError",
    "LocationNotFoundError",
    "LocationQuery",
    "MalformedLineError",
    "NoPlatformsError",
    "NotLoadedError",
    "PartialBatchError",
    "PlatformRecord",
    "RejectReason",
    "RejectedLine",
    "build_closed_index",
]
