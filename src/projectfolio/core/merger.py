"""Merge, validation and de-duplication of canonical projects."""

import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from projectfolio.models import BuildStats, CanonicalProject

logger = logging.getLogger(__name__)


def validate_project(project: CanonicalProject) -> CanonicalProject:
    """Run full schema validation on a (possibly unvalidated) record.

    Raises:
        ValidationError: If the record does not satisfy the canonical schema
    """
    return CanonicalProject.model_validate(dict(project))


def merge(
    remote: Sequence[CanonicalProject],
    local: Sequence[CanonicalProject],
    stats: Optional[BuildStats] = None,
) -> List[CanonicalProject]:
    """Concatenate remote then local records, validate, and de-duplicate.

    Invalid records are dropped with a warning. When two records share a
    slug the first one seen wins, so remote records take precedence over
    local ones.

    Args:
        remote: Normalized remote records
        local: Loaded local records
        stats: Optional run statistics to update

    Returns:
        Valid records with unique slugs, in input order
    """
    merged: List[CanonicalProject] = []
    seen = set()

    for project in list(remote) + list(local):
        try:
            valid = validate_project(project)
        except ValidationError as e:
            slug = getattr(project, "slug", None) or "<unnamed>"
            message = f"{slug}: {e.error_count()} validation error(s): " + "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            logger.warning(f"Dropping invalid record {message}")
            if stats is not None:
                stats.invalid_records += 1
                stats.validation_errors.append(message)
            continue

        if valid.slug in seen:
            logger.warning(
                f"Duplicate slug '{valid.slug}' from {valid.source} source ignored"
            )
            if stats is not None:
                stats.duplicates += 1
            continue

        seen.add(valid.slug)
        merged.append(valid)

    return merged
