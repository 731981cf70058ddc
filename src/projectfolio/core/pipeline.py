"""The full build: fetch, normalize, load, merge, rank and emit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from projectfolio.config import Config, FolioConfig, resolve_token
from projectfolio.core.emitter import write_artifact
from projectfolio.core.fetcher import RemoteFetcher
from projectfolio.core.local_loader import LocalLoader
from projectfolio.core.merger import merge
from projectfolio.core.normalizer import RemoteNormalizer
from projectfolio.core.ranker import sort_projects
from projectfolio.models import BuildStats, CanonicalProject

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one pipeline run."""

    projects: List[CanonicalProject]
    stats: BuildStats
    output_path: Optional[Path] = None
    login: Optional[str] = None
    written: bool = field(default=False)


class BuildPipeline:
    """Runs one complete, non-incremental build.

    Fatal errors (missing credential, connectivity, auth) propagate;
    per-record problems are collected into the returned stats.
    """

    def __init__(
        self,
        config: FolioConfig,
        project_dir: Optional[Path] = None,
        fetcher: Optional[RemoteFetcher] = None,
        loader: Optional[LocalLoader] = None,
    ):
        """Initialize pipeline.

        Args:
            config: Loaded project configuration
            project_dir: Base for relative paths (defaults to the working directory)
            fetcher: Remote fetcher override; built from config when omitted
            loader: Local loader override
        """
        self.config = config
        self.paths = Config(project_dir or Path.cwd())
        self._fetcher = fetcher
        self.loader = loader or LocalLoader(namespace=config.tag_namespace)
        self.normalizer = RemoteNormalizer(namespace=config.tag_namespace)

    @property
    def fetcher(self) -> RemoteFetcher:
        """Remote fetcher; the credential is checked before it is built."""
        if self._fetcher is None:
            token = resolve_token(self.config)
            self._fetcher = RemoteFetcher(self.config, token)
        return self._fetcher

    @property
    def local_dir(self) -> Path:
        return self.paths.resolve(self.config.local_dir)

    @property
    def output_path(self) -> Path:
        return self.paths.resolve(self.config.output_path)

    def run(self, dry_run: bool = False, check_connection: bool = True) -> BuildResult:
        """Build the ordered collection and write the artifact.

        Args:
            dry_run: Build and report without writing the artifact
            check_connection: Verify the credential before paging

        Returns:
            BuildResult with the final projects and run statistics
        """
        stats = BuildStats()
        fetcher = self.fetcher
        login = None

        if check_connection:
            login = fetcher.test_connection()
            logger.info(f"Connected to remote host as {login}")

        raw_records = fetcher.fetch_all()
        stats.repos_fetched = len(raw_records)
        stats.manifests_found = sum(1 for r in raw_records if r.manifest_text)
        logger.info(f"Found {len(raw_records)} repositories")

        remote_projects = self.normalizer.normalize_all(raw_records)
        stats.remote_normalized = len(remote_projects)

        local_projects, stats.local = self.loader.load_all(self.local_dir)

        merged = merge(remote_projects, local_projects, stats)
        projects = sort_projects(merged)
        stats.count_distribution(projects)

        result = BuildResult(projects=projects, stats=stats, login=login)
        if not dry_run:
            result.output_path = write_artifact(projects, self.output_path)
            result.written = True
        return result
