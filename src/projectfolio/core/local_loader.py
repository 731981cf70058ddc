"""Loading of hand-authored local project records."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from projectfolio.core.derive import LOCAL_DEFAULTS, derive_fields
from projectfolio.core.manifest_parser import load_document, warn_unknown_keys
from projectfolio.exceptions import ManifestError
from projectfolio.models import (
    CanonicalProject,
    LoadStats,
    LocalManifest,
    LOCAL_SOURCE,
)
from projectfolio.utils.tags import (
    HIDE_SENTINEL,
    INCLUDE_SENTINEL,
    has_sentinel,
    namespaced,
)

logger = logging.getLogger(__name__)

RECORD_SUFFIXES = (".yml", ".yaml")


class LocalLoader:
    """Reads every record file in a directory into canonical projects.

    A file is published only if ``include`` is true (the default) and it
    carries the include sentinel tag, and it does not carry the hide
    sentinel tag. Failures are isolated per file and recorded in stats.
    """

    def __init__(self, namespace: str = "portfolio", now: Optional[datetime] = None):
        """Initialize loader.

        Args:
            namespace: Tag namespace of the sentinel tags
            now: Timestamp given to every loaded record (defaults to load time)
        """
        self.namespace = namespace
        self.now = now

    def load_all(self, directory: Path) -> Tuple[List[CanonicalProject], LoadStats]:
        """Load, validate and filter every record file in ``directory``.

        Returns:
            Tuple of (included projects, stats)
        """
        directory = Path(directory)
        stats = LoadStats()
        projects: List[CanonicalProject] = []

        if not directory.is_dir():
            logger.info(f"Local record directory {directory} not found, skipping")
            return projects, stats

        files = sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in RECORD_SUFFIXES
        )
        stats.total_files = len(files)
        logger.info(f"Found {len(files)} local project files")

        loaded_at = self.now or datetime.now(timezone.utc)

        for path in files:
            try:
                project, record = self._load_file(path, loaded_at)
            except (OSError, ManifestError, ValidationError, ValueError) as e:
                stats.invalid_files += 1
                stats.errors.append(f"{path.name}: {_describe(e)}")
                logger.error(f"Error processing {path.name}: {_describe(e)}")
                continue

            stats.valid_files += 1

            if has_sentinel(project.topics, self.namespace, HIDE_SENTINEL):
                stats.skipped += 1
                logger.info(
                    f"Skipped {project.slug} ({namespaced(self.namespace, HIDE_SENTINEL)})"
                )
            elif self._included(record, project.topics):
                projects.append(project)
                stats.included += 1
                logger.info(f"Included {project.slug}")
            else:
                stats.skipped += 1
                logger.info(f"Skipped {project.slug} (not included)")

        return projects, stats

    def _included(self, record: LocalManifest, topics: List[str]) -> bool:
        include = True if record.include is None else record.include
        return include and has_sentinel(topics, self.namespace, INCLUDE_SENTINEL)

    def _load_file(
        self, path: Path, loaded_at: datetime
    ) -> Tuple[CanonicalProject, LocalManifest]:
        data = load_document(path.read_text(encoding="utf-8"))

        if not data.get("title"):
            raise ManifestError("Missing required field: title")
        if data.get("source") != LOCAL_SOURCE:
            raise ManifestError(f'Source must be "{LOCAL_SOURCE}"')

        warn_unknown_keys(data, LocalManifest.known_keys(), source=path.name)
        record = LocalManifest.model_validate(data)

        topics = (
            record.topics
            if record.topics is not None
            else [namespaced(self.namespace, INCLUDE_SENTINEL)]
        )
        declared = record.declared()
        derived = derive_fields(declared, topics, self.namespace, LOCAL_DEFAULTS)

        project = CanonicalProject(
            slug=record.slug or path.stem,
            title=record.title,
            description=record.description,
            source="local",
            status=derived.status,
            tier=derived.tier,
            visibility=derived.visibility,
            domains=derived.domains,
            topics=topics,
            stack=record.stack or [],
            roles=record.roles or [],
            repo_url=record.repo_url,
            homepage_url=record.homepage_url,
            live_url=record.live_url,
            demo_url=record.demo_url,
            stars=0,
            pushed_at=loaded_at,
            highlights=record.highlights,
            metrics=record.metrics,
            manifest=declared,
        )
        return project, record


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or 'record'}: {item['msg']}"
            for item in error.errors()
        )
    return str(error)
