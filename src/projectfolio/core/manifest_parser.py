"""YAML manifest parsing shared by remote sidecars and local record files."""

import logging
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from projectfolio.exceptions import ManifestError
from projectfolio.models import Manifest

logger = logging.getLogger(__name__)


def load_document(text: Optional[str]) -> Dict[str, Any]:
    """Parse YAML text into a mapping.

    Args:
        text: Raw document contents

    Returns:
        The top-level mapping

    Raises:
        ManifestError: If the text is empty, not valid YAML, or not a mapping
    """
    if text is None or not text.strip():
        raise ManifestError("Empty document")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML: {e}")
    except RecursionError:
        raise ManifestError("Invalid YAML: document nested too deeply")

    if not isinstance(data, dict):
        raise ManifestError(
            f"Expected a mapping at top level, got {type(data).__name__}"
        )
    return data


def warn_unknown_keys(data: Dict[str, Any], known: set, source: str = "manifest") -> None:
    for key in data:
        if key not in known:
            logger.warning(f"Unknown key '{key}' in {source} will be ignored")


def parse_manifest(raw_text: Optional[str]) -> Optional[Manifest]:
    """Parse a sidecar manifest.

    Never raises: a missing, malformed or schema-invalid document yields None
    and a warning, so one bad sidecar cannot abort a build.
    """
    if raw_text is None:
        return None

    try:
        data = load_document(raw_text)
        warn_unknown_keys(data, Manifest.known_keys())
        return Manifest.model_validate(data)
    except (ManifestError, ValidationError) as e:
        logger.warning(f"Failed to parse manifest: {e}")
        return None
