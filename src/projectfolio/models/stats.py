"""Run statistics surfaced to the operator."""

from typing import Dict, List

from pydantic import Field

from .base import FolioBaseModel


class LoadStats(FolioBaseModel):
    """Per-run counters for the local record loader."""

    total_files: int = 0
    valid_files: int = 0
    invalid_files: int = 0
    included: int = 0
    skipped: int = 0
    errors: List[str] = Field(default_factory=list)


class BuildStats(FolioBaseModel):
    """Counters for a whole pipeline run."""

    repos_fetched: int = 0
    manifests_found: int = 0
    remote_normalized: int = 0
    local: LoadStats = Field(default_factory=LoadStats)
    invalid_records: int = 0
    validation_errors: List[str] = Field(default_factory=list)
    duplicates: int = 0
    total: int = 0
    tier_counts: Dict[str, int] = Field(default_factory=dict)
    status_counts: Dict[str, int] = Field(default_factory=dict)
    visibility_counts: Dict[str, int] = Field(default_factory=dict)

    def count_distribution(self, projects) -> None:
        """Tally tier, status and visibility over the final collection."""
        self.tier_counts = {}
        self.status_counts = {}
        self.visibility_counts = {}
        for project in projects:
            self.tier_counts[project.tier] = self.tier_counts.get(project.tier, 0) + 1
            self.status_counts[project.status] = (
                self.status_counts.get(project.status, 0) + 1
            )
            self.visibility_counts[project.visibility] = (
                self.visibility_counts.get(project.visibility, 0) + 1
            )
        self.total = len(projects)
