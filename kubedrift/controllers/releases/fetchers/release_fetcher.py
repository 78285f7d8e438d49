"""Release fetcher - resolves a repository's release history from GitHub."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from kubedrift.constants.defaults import RELEASES_PER_PAGE_DEFAULT
from kubedrift.constants.values import (
    RATE_LIMIT_REMAINING_HEADER,
    RATE_LIMIT_RESET_HEADER,
)
from kubedrift.controllers.releases.errors import (
    GitHubAPIError,
    GitHubAuthenticationError,
    GitHubDecodeError,
    GitHubNetworkError,
    GitHubRateLimitError,
    GitHubRepositoryNotFoundError,
)
from kubedrift.controllers.releases.parsers.release_parser import ReleaseParser
from kubedrift.models.releases.release_info import ReleaseRecord
from kubedrift.models.state.app_settings import GitHubSettings

logger = logging.getLogger(__name__)

RECENT_TAGS_QUERY = """
query GetTags($owner: String!, $repo: String!, $count: Int!) {
  repository(owner: $owner, name: $repo) {
    refs(refPrefix: "refs/tags/", first: $count, orderBy: {field: TAG_COMMIT_DATE, direction: DESC}) {
      nodes {
        name
        target {
          ... on Commit {
            committedDate
          }
          ... on Tag {
            tagger {
              date
            }
          }
        }
      }
    }
  }
}
"""


class ReleaseFetcher:
    """Fetches release history with a tag-based fallback.

    Formal releases are tried first; when a repository publishes fewer
    than ``history_count`` of them, the newest tags are read through the
    GraphQL API instead, which covers lightweight and annotated tags.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: GitHubSettings,
        parser: ReleaseParser | None = None,
    ) -> None:
        """Initialize release fetcher.

        Args:
            client: HTTP client carrying the GitHub auth headers
            settings: GitHub section of the drift settings
            parser: Parser for release and tag payloads
        """
        self._client = client
        self.settings = settings
        self._parser = parser or ReleaseParser()

    @property
    def organization(self) -> str:
        return self.settings.api.organization

    async def fetch_releases(self, repository: str) -> list[ReleaseRecord]:
        """Resolve the newest-first release history of one repository.

        Args:
            repository: Repository name inside the configured organization

        Returns:
            List of ReleaseRecord objects, empty when nothing usable exists.
        """
        logger.debug("Querying releases for %s", repository)
        releases = await self.fetch_repository_releases(repository)
        if releases and len(releases) >= self.settings.history_count:
            logger.debug("Found %d releases for %s", len(releases), repository)
            return releases

        tags = await self.fetch_recent_tags(repository, self.settings.tag_history_count)
        logger.debug("Found %d tags for %s", len(tags), repository)
        return tags

    async def fetch_repository_releases(self, repository: str) -> list[ReleaseRecord]:
        """Fetch formal releases from the REST API."""
        url = (
            f"{self.settings.api.sanitized_base_url}"
            f"/repos/{self.organization}/{repository}/releases"
        )
        payload = await self._request(
            "GET",
            url,
            repository,
            params={"per_page": RELEASES_PER_PAGE_DEFAULT},
        )
        if not isinstance(payload, list):
            raise GitHubDecodeError(url, "expected a JSON array of releases")
        try:
            return self._parser.parse_releases(payload)
        except (AttributeError, TypeError, ValueError) as exc:
            raise GitHubDecodeError(url, str(exc)) from exc

    async def fetch_recent_tags(self, repository: str, count: int) -> list[ReleaseRecord]:
        """Fetch the newest tags through a single GraphQL query."""
        url = self.settings.api.graphql_url
        body = {
            "query": RECENT_TAGS_QUERY,
            "variables": {
                "owner": self.organization,
                "repo": repository,
                "count": count,
            },
        }
        payload = await self._request("POST", url, repository, json=body)

        try:
            data = payload.get("data") or {}
            repo_data = data.get("repository")
            if repo_data is None:
                errors = payload.get("errors")
                if isinstance(errors, list) and errors:
                    self._raise_for_graphql_errors(errors, url, repository)
                raise GitHubDecodeError(url, "missing 'repository'")
            nodes = (repo_data.get("refs") or {}).get("nodes") or []
            return self._parser.parse_tag_nodes(nodes)
        except (AttributeError, TypeError, ValueError) as exc:
            raise GitHubDecodeError(url, str(exc)) from exc

    async def _request(
        self,
        method: str,
        url: str,
        repository: str,
        **kwargs: Any,
    ) -> Any:
        """Send one request and decode its JSON body."""
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise GitHubNetworkError(url, str(exc) or type(exc).__name__) from exc

        self._raise_for_status(response, url, repository)

        remaining = response.headers.get(RATE_LIMIT_REMAINING_HEADER)
        if remaining is not None:
            logger.debug(
                "%s remaining requests from GitHub API, rate limit resets at %s",
                remaining,
                self._format_reset(response.headers.get(RATE_LIMIT_RESET_HEADER)),
            )

        try:
            return response.json()
        except ValueError as exc:
            raise GitHubDecodeError(url, str(exc)) from exc

    def _raise_for_status(self, response: httpx.Response, url: str, repository: str) -> None:
        """Map error statuses onto GitHub errors."""
        status = response.status_code
        if status == httpx.codes.OK:
            return
        if status == httpx.codes.UNAUTHORIZED:
            raise GitHubAuthenticationError(url)
        if (
            status in (httpx.codes.FORBIDDEN, httpx.codes.TOO_MANY_REQUESTS)
            and response.headers.get(RATE_LIMIT_REMAINING_HEADER) == "0"
        ):
            raise GitHubRateLimitError(
                url,
                self._format_reset(response.headers.get(RATE_LIMIT_RESET_HEADER)),
            )
        if status == httpx.codes.FORBIDDEN:
            raise GitHubAuthenticationError(url)
        if status == httpx.codes.NOT_FOUND:
            raise GitHubRepositoryNotFoundError(f"{self.organization}/{repository}")
        raise GitHubAPIError(status, response.text or "Unknown error")

    def _raise_for_graphql_errors(
        self, errors: list[dict[str, Any]], url: str, repository: str
    ) -> None:
        """Map GraphQL error entries (served with HTTP 200) onto GitHub errors."""
        error_types = {error.get("type") for error in errors if isinstance(error, dict)}
        if "RATE_LIMITED" in error_types:
            raise GitHubRateLimitError(url)
        if "NOT_FOUND" in error_types:
            raise GitHubRepositoryNotFoundError(f"{self.organization}/{repository}")
        first = errors[0] if isinstance(errors[0], dict) else {}
        raise GitHubAPIError(httpx.codes.OK, str(first.get("message") or "GraphQL error"))

    @staticmethod
    def _format_reset(value: str | None) -> str | None:
        """Render an epoch-seconds reset header as ISO time."""
        if not value:
            return None
        try:
            return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat()
        except (ValueError, OverflowError, OSError):
            return value
