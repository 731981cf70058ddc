"""Manifest models: curator-declared overrides for a project."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BeforeValidator, ConfigDict, Field

from .base import FolioBaseModel


Status = Literal["complete", "in-progress", "archived"]
Tier = Literal["flagship", "mvp", "experiment"]
Visibility = Literal["featured", "portfolio", "labs", "ventures"]

STATUSES = ("complete", "in-progress", "archived")
TIERS = ("flagship", "mvp", "experiment")
VISIBILITIES = ("featured", "portfolio", "labs", "ventures")

# Value the `source` key of a local record file must carry
LOCAL_SOURCE = "local"


def split_scalar(value: Any) -> Any:
    """Resolve the scalar form of a list field into a list.

    Older records write ``stack: python, django`` instead of a YAML list.
    A single string is split on commas; lists pass through untouched.
    """
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


StringList = Annotated[List[str], BeforeValidator(split_scalar)]
MetricValue = Union[int, float, str]


class Manifest(FolioBaseModel):
    """Sidecar manifest (``.project-manifest.yml``) schema.

    Every field is optional; unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, description="Display title")
    description: Optional[str] = Field(default=None, description="Short description")
    status: Optional[Status] = Field(default=None, description="Lifecycle status")
    tier: Optional[Tier] = Field(default=None, description="Curated tier")
    visibility: Optional[Visibility] = Field(
        default=None, description="Section of the site the project appears in"
    )
    stack: Optional[StringList] = Field(default=None, description="Technologies used")
    roles: Optional[StringList] = Field(default=None, description="Roles held")
    live_url: Optional[str] = Field(default=None, description="Production URL")
    demo_url: Optional[str] = Field(default=None, description="Demo URL")
    repo_url: Optional[str] = Field(default=None, description="Repository URL")
    homepage_url: Optional[str] = Field(default=None, description="Homepage URL")
    highlights: Optional[StringList] = Field(default=None, description="Key highlights")
    metrics: Optional[Dict[str, MetricValue]] = Field(
        default=None, description="Named metrics"
    )
    topics: Optional[StringList] = Field(default=None, description="Extra tags")

    @classmethod
    def known_keys(cls) -> set:
        return set(cls.model_fields)


class LocalManifest(Manifest):
    """A hand-authored local record file."""

    slug: Optional[str] = Field(default=None, description="Slug override")
    title: str = Field(min_length=1, description="Display title")
    source: Literal["local"] = Field(description="Local-source sentinel")
    include: Optional[bool] = Field(default=None, description="Publication flag")

    def declared(self) -> Manifest:
        """Return the manifest fields this record declares."""
        return Manifest.model_validate(
            self.model_dump(include=Manifest.known_keys(), exclude_none=True)
        )
