"""CLI command modules."""

from . import build, catalog

__all__ = ["build", "catalog"]
