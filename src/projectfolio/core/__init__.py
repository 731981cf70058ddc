"""Core projectfolio pipeline."""

from projectfolio.core.fetcher import RemoteFetcher
from projectfolio.core.manifest_parser import parse_manifest, load_document
from projectfolio.core.derive import derive_fields, DerivedFields
from projectfolio.core.normalizer import RemoteNormalizer
from projectfolio.core.local_loader import LocalLoader
from projectfolio.core.merger import merge
from projectfolio.core.ranker import sort_projects, rank_key
from projectfolio.core.emitter import write_artifact, read_artifact
from projectfolio.core.pipeline import BuildPipeline, BuildResult
from projectfolio.core.catalog import ProjectCatalog

__all__ = [
    "RemoteFetcher",
    "parse_manifest",
    "load_document",
    "derive_fields",
    "DerivedFields",
    "RemoteNormalizer",
    "LocalLoader",
    "merge",
    "sort_projects",
    "rank_key",
    "write_artifact",
    "read_artifact",
    "BuildPipeline",
    "BuildResult",
    "ProjectCatalog",
]
