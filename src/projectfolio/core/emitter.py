"""Writing of the persisted project artifact."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from projectfolio.models import CanonicalProject

logger = logging.getLogger(__name__)


def render_artifact(projects: Sequence[CanonicalProject]) -> str:
    """Serialize the collection as the JSON document the site reads."""
    return json.dumps(
        [project.to_artifact() for project in projects], indent=2, ensure_ascii=False
    )


def write_artifact(projects: Sequence[CanonicalProject], path: Path) -> Path:
    """Replace the artifact at ``path`` with the given collection.

    The file is written to a temporary sibling and moved into place, so
    readers never observe a partial document.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = render_artifact(projects) + "\n"

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(f"Wrote {len(projects)} projects to {path}")
    return path


def read_artifact(path: Path) -> list:
    """Load a persisted artifact into canonical projects."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return [CanonicalProject.model_validate(item) for item in data]
