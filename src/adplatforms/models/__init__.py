"""Data models for records, reports and requests."""

from adplatforms.models.records import PlatformRecord, RejectedLine, RejectReason
from adplatforms.models.report import IngestionReport
from adplatforms.models.requests import LocationQuery

__all__ = [
    "IngestionReport",
    "LocationQuery",
    "PlatformRecord",
    "RejectReason",
    "RejectedLine",
]
