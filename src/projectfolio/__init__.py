"""projectfolio - portfolio project metadata aggregation."""

from projectfolio.core.pipeline import BuildPipeline, BuildResult
from projectfolio.core.catalog import ProjectCatalog

try:
    from importlib.metadata import version
    __version__ = version("projectfolio")
except Exception:
    # Package metadata is not available when running from a source checkout
    __version__ = "0.1.0"

__all__ = ["BuildPipeline", "BuildResult", "ProjectCatalog"]
