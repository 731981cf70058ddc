"""Canonical ordering of projects."""

from typing import Iterable, List, Tuple

from projectfolio.models import CanonicalProject

TIER_ORDER = {"flagship": 0, "mvp": 1, "experiment": 2}
STATUS_ORDER = {"complete": 0, "in-progress": 1, "archived": 2}


def rank_key(project: CanonicalProject) -> Tuple[int, int, float]:
    """Tier, then status, then most recent activity first."""
    return (
        TIER_ORDER[project.tier],
        STATUS_ORDER[project.status],
        -project.pushed_at.timestamp(),
    )


def sort_projects(projects: Iterable[CanonicalProject]) -> List[CanonicalProject]:
    """Return a new list in canonical order.

    The sort is stable, so records equal on every key keep their input order.
    """
    return sorted(projects, key=rank_key)
