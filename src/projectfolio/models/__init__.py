"""Data models for projectfolio."""

from .base import FolioBaseModel, FolioRecordModel
from .manifest import (
    Manifest,
    LocalManifest,
    Status,
    Tier,
    Visibility,
    STATUSES,
    TIERS,
    VISIBILITIES,
    LOCAL_SOURCE,
)
from .remote import RawRemoteRecord
from .project import CanonicalProject, Source
from .stats import LoadStats, BuildStats

__all__ = [
    "FolioBaseModel",
    "FolioRecordModel",
    "Manifest",
    "LocalManifest",
    "Status",
    "Tier",
    "Visibility",
    "STATUSES",
    "TIERS",
    "VISIBILITIES",
    "LOCAL_SOURCE",
    "RawRemoteRecord",
    "CanonicalProject",
    "Source",
    "LoadStats",
    "BuildStats",
]
