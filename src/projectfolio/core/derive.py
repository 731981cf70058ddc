"""Derivation of categorical fields from a manifest and tags.

Each field is resolved by its own precedence chain, first match wins:

- status: manifest -> ``<ns>:complete|archived`` tag -> default
- tier: manifest -> default (tiers are never inferred from tags)
- visibility: manifest -> ``<ns>:featured|portfolio|labs|ventures`` tag -> default
- domains: every ``domain:`` tag, prefix stripped

No derivation reads the result of another.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from projectfolio.models import Manifest, VISIBILITIES
from projectfolio.utils.tags import first_in_namespace, strip_domains

# Statuses that may be declared through a tag; in-progress is the default
TAG_STATUSES = ("complete", "archived")


@dataclass(frozen=True)
class Defaults:
    """Fallback values used when neither manifest nor tags decide."""

    status: str = "in-progress"
    tier: str = "experiment"
    visibility: str = "portfolio"


REMOTE_DEFAULTS = Defaults()
LOCAL_DEFAULTS = Defaults(status="in-progress", tier="mvp", visibility="ventures")


@dataclass
class DerivedFields:
    status: str
    tier: str
    visibility: str
    domains: List[str] = field(default_factory=list)


def merge_topics(host_tags: Iterable[str], manifest: Optional[Manifest]) -> List[str]:
    """Union of host tags and manifest topics, host tags first, no duplicates."""
    topics: List[str] = []
    for tag in list(host_tags) + list((manifest.topics if manifest else None) or []):
        if tag not in topics:
            topics.append(tag)
    return topics


def derive_status(
    manifest: Optional[Manifest],
    tags: Iterable[str],
    namespace: str = "portfolio",
    default: str = REMOTE_DEFAULTS.status,
) -> str:
    if manifest and manifest.status:
        return manifest.status
    return first_in_namespace(tags, namespace, TAG_STATUSES) or default


def derive_tier(manifest: Optional[Manifest], default: str = REMOTE_DEFAULTS.tier) -> str:
    if manifest and manifest.tier:
        return manifest.tier
    return default


def derive_visibility(
    manifest: Optional[Manifest],
    tags: Iterable[str],
    namespace: str = "portfolio",
    default: str = REMOTE_DEFAULTS.visibility,
) -> str:
    if manifest and manifest.visibility:
        return manifest.visibility
    return first_in_namespace(tags, namespace, VISIBILITIES) or default


def derive_fields(
    manifest: Optional[Manifest],
    tags: Iterable[str],
    namespace: str = "portfolio",
    defaults: Defaults = REMOTE_DEFAULTS,
) -> DerivedFields:
    """Derive status, tier, visibility and domains.

    Args:
        manifest: Parsed manifest, or None
        tags: All tags of the record (host tags already unioned with manifest topics)
        namespace: Tag namespace for status and visibility tags
        defaults: Fallbacks for the record's source

    Returns:
        DerivedFields
    """
    tags = list(tags)
    return DerivedFields(
        status=derive_status(manifest, tags, namespace, defaults.status),
        tier=derive_tier(manifest, defaults.tier),
        visibility=derive_visibility(manifest, tags, namespace, defaults.visibility),
        domains=strip_domains(tags),
    )
