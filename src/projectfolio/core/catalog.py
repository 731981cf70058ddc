"""Read-side access to the persisted artifact with an explicit cache."""

from pathlib import Path
from typing import List, Optional

from projectfolio.core.emitter import read_artifact
from projectfolio.core.ranker import sort_projects
from projectfolio.models import CanonicalProject


class ProjectCatalog:
    """Caller-owned cache over a ``projects.json`` artifact.

    The artifact is read on first access and kept until ``invalidate()``.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._projects: Optional[List[CanonicalProject]] = None

    def invalidate(self) -> None:
        """Drop cached records; the next query re-reads the artifact."""
        self._projects = None

    @property
    def is_loaded(self) -> bool:
        return self._projects is not None

    def all(self) -> List[CanonicalProject]:
        if self._projects is None:
            self._projects = read_artifact(self.path)
        return list(self._projects)

    def get(self, slug: str) -> Optional[CanonicalProject]:
        for project in self.all():
            if project.slug == slug:
                return project
        return None

    def domains(self) -> List[str]:
        return sorted({d for p in self.all() for d in p.domains})

    def statuses(self) -> List[str]:
        return sorted({p.status for p in self.all()})

    def _by_visibility(self, *visibilities: str) -> List[CanonicalProject]:
        return _most_recent_first(
            p for p in self.all() if p.visibility in visibilities
        )

    def featured(self) -> List[CanonicalProject]:
        return self._by_visibility("featured")

    def portfolio(self) -> List[CanonicalProject]:
        """Projects shown on the main listing: portfolio and featured."""
        return self._by_visibility("portfolio", "featured")

    def labs(self) -> List[CanonicalProject]:
        return self._by_visibility("labs")

    def ventures(self) -> List[CanonicalProject]:
        return self._by_visibility("ventures")

    def currently_building(self, limit: int = 6) -> List[CanonicalProject]:
        building = _most_recent_first(p for p in self.all() if p.status == "in-progress")
        return building[:limit]

    def filter(
        self,
        search: Optional[str] = None,
        domain: Optional[str] = None,
        status: Optional[str] = None,
        visibility: Optional[str] = None,
    ) -> List[CanonicalProject]:
        """Filter a listing, returned in canonical rank order.

        Args:
            search: Case-insensitive substring of title, description, stack or topics
            domain: Exact domain
            status: Exact status
            visibility: Exact visibility. Without it the portfolio listing
                (portfolio and featured) is filtered
        """
        if visibility:
            projects = [p for p in self.all() if p.visibility == visibility]
        else:
            projects = [p for p in self.all() if p.visibility in ("portfolio", "featured")]

        if search:
            term = search.lower()
            projects = [p for p in projects if _matches(p, term)]

        if domain:
            projects = [p for p in projects if domain in p.domains]

        if status:
            projects = [p for p in projects if p.status == status]

        return sort_projects(projects)


def _most_recent_first(projects) -> List[CanonicalProject]:
    return sorted(projects, key=lambda p: p.pushed_at, reverse=True)


def _matches(project: CanonicalProject, term: str) -> bool:
    return (
        term in project.title.lower()
        or (project.description is not None and term in project.description.lower())
        or any(term in tech.lower() for tech in project.stack)
        or any(term in topic.lower() for topic in project.topics)
    )
