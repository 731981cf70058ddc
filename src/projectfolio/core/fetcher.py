"""Paged listing of repositories from the GitHub GraphQL API."""

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from projectfolio.config import FolioConfig
from projectfolio.exceptions import AuthError, ConnectivityError, FetchError
from projectfolio.models import RawRemoteRecord

logger = logging.getLogger(__name__)


REPOSITORY_FIELDS = """
        nodes {
          name
          description
          stargazerCount
          pushedAt
          isArchived
          isFork
          homepageUrl
          openGraphImageUrl
          url
          repositoryTopics(first: 50) {
            nodes {
              topic {
                name
              }
            }
          }
          object(expression: $manifestExpr) {
            ... on Blob {
              text
            }
          }
        }
        pageInfo {
          hasNextPage
          endCursor
        }
"""

USER_QUERY = (
    """
query GetRepositories($login: String!, $first: Int!, $after: String, $manifestExpr: String!) {
  owner: user(login: $login) {
    repositories(
      first: $first
      after: $after
      ownerAffiliations: OWNER
      orderBy: { field: PUSHED_AT, direction: DESC }
    ) {"""
    + REPOSITORY_FIELDS
    + """    }
  }
}
"""
)

VIEWER_QUERY = (
    """
query GetRepositories($first: Int!, $after: String, $manifestExpr: String!) {
  owner: viewer {
    repositories(
      first: $first
      after: $after
      ownerAffiliations: OWNER
      orderBy: { field: PUSHED_AT, direction: DESC }
    ) {"""
    + REPOSITORY_FIELDS
    + """    }
  }
}
"""
)

IDENTITY_QUERY = "query { viewer { login } }"

# Status codes worth retrying
TRANSIENT_STATUS = {429, 500, 502, 503, 504}


class RemoteFetcher:
    """Lists the owner's repositories, dropping forks and archived ones."""

    def __init__(
        self,
        config: FolioConfig,
        token: str,
        session: Optional[requests.Session] = None,
    ):
        """Initialize fetcher.

        Args:
            config: Project configuration (endpoint, paging, timeout, retries)
            token: Bearer credential for the remote host
            session: Optional pre-built session
        """
        self.config = config
        self.api_url = config.api_url
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"bearer {token}",
                "Content-Type": "application/json",
            }
        )

    def fetch_all(self) -> List[RawRemoteRecord]:
        """Fetch every page of repositories.

        Returns:
            Non-fork, non-archived repositories, in host order

        Raises:
            AuthError: If the credential is rejected
            ConnectivityError: If the host is unreachable after retries
            FetchError: If the host returns an unusable response
        """
        records: List[RawRemoteRecord] = []
        cursor: Optional[str] = None
        page = 0

        while True:
            page += 1
            connection = self._fetch_page(cursor)
            nodes = connection.get("nodes") or []
            kept = [
                record
                for record in (RawRemoteRecord.from_node(node) for node in nodes if node)
                if not record.fork and not record.archived
            ]
            records.extend(kept)
            logger.info(
                f"Fetched page {page}: {len(nodes)} repositories, {len(kept)} kept"
            )

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
            if not cursor:
                raise FetchError("Host reported another page without a cursor")

        return records

    def test_connection(self) -> str:
        """Check the credential and return the authenticated login."""
        data = self._post(IDENTITY_QUERY, {})
        try:
            return data["viewer"]["login"]
        except (KeyError, TypeError):
            raise FetchError("Invalid API response format: missing viewer login")

    def _fetch_page(self, cursor: Optional[str]) -> Dict[str, Any]:
        variables: Dict[str, Any] = {
            "first": self.config.page_size,
            "after": cursor,
            "manifestExpr": f"HEAD:{self.config.manifest_path}",
        }
        if self.config.owner:
            query = USER_QUERY
            variables["login"] = self.config.owner
        else:
            query = VIEWER_QUERY

        data = self._post(query, variables)
        try:
            owner = data["owner"]
            if owner is None:
                raise FetchError(f"Owner '{self.config.owner}' not found")
            return owner["repositories"]
        except (KeyError, TypeError):
            raise FetchError("Invalid API response format: missing repositories")

    def _post(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Send one GraphQL request with bounded retries on transient failures."""
        payload = {"query": query, "variables": variables}
        attempts = self.config.max_retries + 1
        last_error = "unknown error"

        for attempt in range(1, attempts + 1):
            try:
                response = self._session.post(
                    self.api_url, json=payload, timeout=self.config.timeout
                )
            except (requests.ConnectionError, requests.Timeout) as e:
                last_error = str(e)
                logger.warning(f"Request failed (attempt {attempt}/{attempts}): {e}")
            else:
                if response.status_code in (401, 403):
                    raise AuthError(
                        f"Credential rejected by {self.api_url} ({response.status_code})"
                    )
                if response.status_code in TRANSIENT_STATUS:
                    last_error = f"HTTP {response.status_code}"
                    logger.warning(
                        f"Host returned {response.status_code} (attempt {attempt}/{attempts})"
                    )
                elif response.status_code >= 400:
                    raise FetchError(f"API Error ({response.status_code}): {response.text}")
                else:
                    return self._unwrap(response)

            if attempt < attempts:
                time.sleep(self.config.retry_backoff * attempt)

        raise ConnectivityError(
            f"Failed to reach {self.api_url} after {attempts} attempts: {last_error}"
        )

    @staticmethod
    def _unwrap(response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            raise FetchError("Invalid API response format: body is not JSON")

        if not isinstance(body, dict):
            raise FetchError("Invalid API response format: body is not an object")

        if body.get("errors"):
            messages = "; ".join(
                error.get("message", "unknown error") for error in body["errors"]
            )
            raise FetchError(f"GraphQL error: {messages}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise FetchError("Invalid API response format: missing data")
        return data
