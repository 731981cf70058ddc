"""Utility modules for projectfolio."""

from projectfolio.utils.tags import (
    DOMAIN_PREFIX,
    INCLUDE_SENTINEL,
    HIDE_SENTINEL,
    namespaced,
    tag_value,
    first_in_namespace,
    has_sentinel,
    strip_domains,
)

__all__ = [
    "DOMAIN_PREFIX",
    "INCLUDE_SENTINEL",
    "HIDE_SENTINEL",
    "namespaced",
    "tag_value",
    "first_in_namespace",
    "has_sentinel",
    "strip_domains",
]
