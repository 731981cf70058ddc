"""Normalization of raw remote records into canonical projects."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from projectfolio.core.derive import REMOTE_DEFAULTS, derive_fields, merge_topics
from projectfolio.core.manifest_parser import parse_manifest
from projectfolio.models import CanonicalProject, RawRemoteRecord

# Recency used when the host reports no usable push time
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_timestamp = TypeAdapter(datetime)


def parse_pushed_at(value: Optional[str]) -> datetime:
    if not value:
        return EPOCH
    try:
        return _timestamp.validate_python(value)
    except ValidationError:
        return EPOCH


class RemoteNormalizer:
    """Turns raw remote records into canonical projects.

    Normalization never fails. Records are built without validation so that
    a partially populated record degrades to defaults here and is judged
    once, by the merger.
    """

    def __init__(self, namespace: str = "portfolio"):
        self.namespace = namespace

    def normalize(self, raw: RawRemoteRecord) -> CanonicalProject:
        manifest = parse_manifest(raw.manifest_text)
        topics = merge_topics(raw.topics, manifest)
        derived = derive_fields(manifest, topics, self.namespace, REMOTE_DEFAULTS)

        return CanonicalProject.model_construct(
            slug=raw.name,
            title=(manifest.title if manifest else None) or raw.name,
            description=raw.description or None,
            source="remote",
            status=derived.status,
            tier=derived.tier,
            visibility=derived.visibility,
            domains=derived.domains,
            topics=topics,
            stack=(manifest.stack if manifest else None) or [],
            roles=(manifest.roles if manifest else None) or [],
            # The repository link always comes from the host, never the sidecar
            repo_url=raw.url or None,
            homepage_url=raw.homepage_url or (manifest.homepage_url if manifest else None),
            live_url=manifest.live_url if manifest else None,
            demo_url=manifest.demo_url if manifest else None,
            stars=max(raw.stars, 0),
            pushed_at=parse_pushed_at(raw.pushed_at),
            og_image=raw.og_image or None,
            highlights=manifest.highlights if manifest else None,
            metrics=manifest.metrics if manifest else None,
            manifest=manifest,
        )

    def normalize_all(self, records):
        return [self.normalize(raw) for raw in records]
