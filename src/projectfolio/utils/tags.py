"""Helpers for namespaced tags such as ``portfolio:complete`` and ``domain:saas``.

A namespaced tag is ``<namespace>:<value>``. The namespace is matched
exactly; the value is everything after the first colon.
"""

from typing import Iterable, List, Optional


DOMAIN_PREFIX = "domain:"

# Sentinel values inside the configured namespace
INCLUDE_SENTINEL = "include"
HIDE_SENTINEL = "hide"


def namespaced(namespace: str, value: str) -> str:
    """Build ``<namespace>:<value>``."""
    return f"{namespace}:{value}"


def tag_value(tag: str, namespace: str) -> Optional[str]:
    """Return the value of ``tag`` if it lives in ``namespace``, else None."""
    prefix = f"{namespace}:"
    if tag.startswith(prefix):
        return tag[len(prefix):]
    return None


def first_in_namespace(
    tags: Iterable[str], namespace: str, allowed: Iterable[str]
) -> Optional[str]:
    """Return the first namespaced value that is one of ``allowed``."""
    allowed = set(allowed)
    for tag in tags:
        value = tag_value(tag, namespace)
        if value in allowed:
            return value
    return None


def has_sentinel(tags: Iterable[str], namespace: str, sentinel: str) -> bool:
    """Check whether the sentinel tag ``<namespace>:<sentinel>`` is present."""
    return namespaced(namespace, sentinel) in set(tags)


def strip_domains(tags: Iterable[str]) -> List[str]:
    """Values of ``domain:`` tags in order of first appearance, without duplicates."""
    domains: List[str] = []
    for tag in tags:
        if tag.startswith(DOMAIN_PREFIX):
            domain = tag[len(DOMAIN_PREFIX):]
            if domain and domain not in domains:
                domains.append(domain)
    return domains
