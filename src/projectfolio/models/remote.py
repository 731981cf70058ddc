"""Raw record as returned by the remote host."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import FolioBaseModel


class RawRemoteRecord(FolioBaseModel):
    """One repository from the host's listing, flattened.

    All fields are lenient: a partially populated record is normal.
    """

    name: str = Field(default="", description="Host-assigned repository name")
    description: Optional[str] = Field(default=None)
    stars: int = Field(default=0, description="Star count")
    pushed_at: Optional[str] = Field(default=None, description="Last push, ISO-8601")
    archived: bool = Field(default=False)
    fork: bool = Field(default=False)
    homepage_url: Optional[str] = Field(default=None)
    url: Optional[str] = Field(default=None, description="Canonical repository URL")
    og_image: Optional[str] = Field(default=None)
    topics: List[str] = Field(default_factory=list)
    manifest_text: Optional[str] = Field(
        default=None, description="Sidecar manifest contents, if the file exists"
    )

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "RawRemoteRecord":
        """Build from a GraphQL repository node."""
        topic_nodes = (node.get("repositoryTopics") or {}).get("nodes") or []
        topics = [
            t["topic"]["name"]
            for t in topic_nodes
            if t and t.get("topic") and t["topic"].get("name")
        ]
        blob = node.get("object") or {}

        return cls(
            name=node.get("name") or "",
            description=node.get("description"),
            stars=node.get("stargazerCount") or 0,
            pushed_at=node.get("pushedAt"),
            archived=bool(node.get("isArchived")),
            fork=bool(node.get("isFork")),
            homepage_url=node.get("homepageUrl"),
            url=node.get("url"),
            og_image=node.get("openGraphImageUrl"),
            topics=topics,
            manifest_text=blob.get("text"),
        )
