"""Base models for projectfolio."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FolioBaseModel(BaseModel):
    """Base model for inputs read from manifests, config and the remote host."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )


class FolioRecordModel(BaseModel):
    """Base model for records written to the persisted artifact.

    Field names are snake_case in Python and camelCase on disk.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        alias_generator=to_camel,
        extra="forbid",
    )


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC so aware and naive values compare."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def serialize_datetime(dt: Optional[datetime], _info: Any = None) -> Optional[str]:
    """Serialize datetime to ISO format with a trailing Z for UTC."""
    if dt is None:
        return None
    text = dt.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")
