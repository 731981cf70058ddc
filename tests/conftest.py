"""Pytest configuration and shared fixtures."""

import pytest

from projectfolio.config import FolioConfig

API_URL = "https://api.example.com/graphql"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in (
        "GH_TOKEN",
        "FOLIO_PROJECT_DIR",
        "FOLIO_OWNER",
        "FOLIO_OUTPUT_PATH",
        "FOLIO_LOCAL_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def config():
    """Configuration pointing at a mocked endpoint with no retry delay."""
    return FolioConfig(
        owner="octocat",
        api_url=API_URL,
        max_retries=2,
        retry_backoff=0,
        timeout=5,
    )


def make_node(name, topics=None, manifest=None, **overrides):
    """Build a GraphQL repository node as the host returns it."""
    node = {
        "name": name,
        "description": f"{name} description",
        "stargazerCount": 3,
        "pushedAt": "2024-05-01T12:00:00Z",
        "isArchived": False,
        "isFork": False,
        "homepageUrl": None,
        "openGraphImageUrl": None,
        "url": f"https://github.com/octocat/{name}",
        "repositoryTopics": {
            "nodes": [{"topic": {"name": t}} for t in (topics or [])]
        },
        "object": {"text": manifest} if manifest is not None else None,
    }
    node.update(overrides)
    return node


def page(nodes, has_next=False, cursor=None):
    """Wrap nodes in a GraphQL listing response body."""
    return {
        "data": {
            "owner": {
                "repositories": {
                    "nodes": nodes,
                    "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                }
            }
        }
    }


IDENTITY = {"data": {"viewer": {"login": "octocat"}}}


@pytest.fixture
def node():
    """Factory for GraphQL repository nodes."""
    return make_node


@pytest.fixture
def listing():
    """Factory for GraphQL listing pages."""
    return page


@pytest.fixture
def identity():
    return IDENTITY


@pytest.fixture
def api_url():
    return API_URL


@pytest.fixture
def write_record(tmp_path):
    """Write a local record file into ``tmp_path / 'manual'``."""
    directory = tmp_path / "manual"
    directory.mkdir()

    def _write(filename, content):
        path = directory / filename
        path.write_text(content)
        return path

    _write.directory = directory
    return _write
