"""Canonical project record."""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_serializer, field_validator

from .base import FolioRecordModel, ensure_utc, serialize_datetime
from .manifest import Manifest, MetricValue, Status, Tier, Visibility


Source = Literal["remote", "local"]


def unique(values: List[str]) -> List[str]:
    """Drop duplicates, keeping the first appearance of each value."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class CanonicalProject(FolioRecordModel):
    """The single normalized representation of a project.

    Serialized with camelCase keys (``repoUrl``, ``pushedAt``) for the site.
    """

    slug: str = Field(min_length=1, description="Stable identity")
    title: str = Field(min_length=1, description="Display title")
    description: Optional[str] = Field(default=None)
    source: Source = Field(description="Provenance")
    status: Status
    tier: Tier
    visibility: Visibility
    domains: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    stack: List[str] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=list)
    repo_url: Optional[str] = Field(default=None)
    homepage_url: Optional[str] = Field(default=None)
    live_url: Optional[str] = Field(default=None)
    demo_url: Optional[str] = Field(default=None)
    stars: int = Field(default=0, ge=0)
    pushed_at: datetime = Field(description="Last activity")
    og_image: Optional[str] = Field(default=None)
    highlights: Optional[List[str]] = Field(default=None)
    metrics: Optional[Dict[str, MetricValue]] = Field(default=None)
    manifest: Optional[Manifest] = Field(default=None)

    @field_validator("domains", "topics")
    @classmethod
    def dedupe(cls, values: List[str]) -> List[str]:
        return unique(values)

    @field_validator("pushed_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_serializer("pushed_at")
    def serialize_pushed_at(self, dt: datetime, _info) -> str:
        return serialize_datetime(dt)

    def to_artifact(self) -> dict:
        """Dump in the persisted artifact's shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
