"""Tests for GitHub release fetcher."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from kubedrift.controllers.releases.errors import (
    GitHubAPIError,
    GitHubAuthenticationError,
    GitHubDecodeError,
    GitHubNetworkError,
    GitHubRateLimitError,
    GitHubRepositoryNotFoundError,
)
from kubedrift.controllers.releases.fetchers.release_fetcher import ReleaseFetcher
from kubedrift.models.state.app_settings import GitHubApiSettings, GitHubSettings

BASE_URL = "https://api.github.example"


def make_settings(history_count: int = 3, tag_history_count: int = 30) -> GitHubSettings:
    """Create GitHub settings for tests."""
    return GitHubSettings(
        history_count=history_count,
        tag_history_count=tag_history_count,
        api=GitHubApiSettings(base_url=f"{BASE_URL}/", organization="acme"),
    )


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """Create an AsyncClient served by a mock transport."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def release(tag: str, created_at: str) -> dict:
    """Build a REST release entry."""
    return {"tag_name": tag, "created_at": created_at, "draft": False, "prerelease": False}


def tag_node(name: str, committed: str) -> dict:
    """Build a GraphQL tag ref node."""
    return {"name": name, "target": {"committedDate": committed}}


class TestReleaseFetcher:
    """Tests for ReleaseFetcher class."""

    @pytest.mark.asyncio
    async def test_enough_releases_skips_fallback(self) -> None:
        """Test the tag query is not sent when formal releases suffice."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    release("v3.0.0", "2025-03-01T00:00:00Z"),
                    release("v2.5.0", "2025-02-01T00:00:00Z"),
                    release("v2.3.0", "2025-01-01T00:00:00Z"),
                ],
            )

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings(history_count=3))
            records = await fetcher.fetch_releases("checkout")

        assert [str(record.version) for record in records] == ["3.0.0", "2.5.0", "2.3.0"]
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == f"{BASE_URL}/repos/acme/checkout/releases?per_page=100"

    @pytest.mark.asyncio
    async def test_sparse_releases_use_tag_fallback_once(self) -> None:
        """Test too few releases triggers exactly one GraphQL tag query."""
        graphql_bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/graphql"):
                graphql_bodies.append(json.loads(request.content))
                return httpx.Response(
                    200,
                    json={
                        "data": {
                            "repository": {
                                "refs": {
                                    "nodes": [
                                        tag_node("v1.2.0", "2025-03-01T00:00:00Z"),
                                        tag_node("1.2.0", "2025-02-15T00:00:00Z"),
                                        tag_node("v1.1.0", "2025-02-01T00:00:00Z"),
                                    ]
                                }
                            }
                        }
                    },
                )
            return httpx.Response(200, json=[release("v1.2.0", "2025-03-01T00:00:00Z")])

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings(history_count=5, tag_history_count=30))
            records = await fetcher.fetch_releases("cart")

        assert len(graphql_bodies) == 1
        assert graphql_bodies[0]["variables"] == {"owner": "acme", "repo": "cart", "count": 30}
        assert "refs/tags/" in graphql_bodies[0]["query"]
        assert [str(record.version) for record in records] == ["1.2.0", "1.1.0"]

    @pytest.mark.asyncio
    async def test_empty_fallback_discards_sparse_releases(self) -> None:
        """Test an empty tag query yields no history even with sparse releases."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/graphql"):
                return httpx.Response(200, json={"data": {"repository": {"refs": {"nodes": []}}}})
            return httpx.Response(200, json=[release("v1.0.0", "2025-01-01T00:00:00Z")])

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings(history_count=5))
            records = await fetcher.fetch_releases("cart")

        assert records == []

    @pytest.mark.asyncio
    async def test_no_releases_no_tags(self) -> None:
        """Test a repository with nothing usable yields an empty list."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/graphql"):
                return httpx.Response(200, json={"data": {"repository": {"refs": None}}})
            return httpx.Response(200, json=[])

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            assert await fetcher.fetch_releases("empty") == []

    @pytest.mark.asyncio
    async def test_graphql_missing_repository_with_errors(self) -> None:
        """Test a null repository with GraphQL errors means not found."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"data": {"repository": None}, "errors": [{"type": "NOT_FOUND"}]},
            )

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubRepositoryNotFoundError):
                await fetcher.fetch_recent_tags("ghost", 30)

    @pytest.mark.asyncio
    async def test_graphql_rate_limited_error(self) -> None:
        """Test a RATE_LIMITED GraphQL error served with 200 is a rate limit error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "data": {"repository": None},
                    "errors": [{"type": "RATE_LIMITED", "message": "API rate limit exceeded"}],
                },
            )

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubRateLimitError):
                await fetcher.fetch_recent_tags("checkout", 30)

    @pytest.mark.asyncio
    async def test_graphql_other_error_keeps_message(self) -> None:
        """Test an unrecognized GraphQL error surfaces its message as an API error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "data": None,
                    "errors": [{"type": "FORBIDDEN", "message": "Resource not accessible"}],
                },
            )

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubAPIError) as exc_info:
                await fetcher.fetch_recent_tags("checkout", 30)

        assert "Resource not accessible" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_graphql_missing_repository_without_errors(self) -> None:
        """Test a null repository without errors is a decode error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {}})

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubDecodeError):
                await fetcher.fetch_recent_tags("ghost", 30)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "headers", "expected"),
        [
            (401, {}, GitHubAuthenticationError),
            (403, {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"}, GitHubRateLimitError),
            (429, {"X-RateLimit-Remaining": "0"}, GitHubRateLimitError),
            (403, {"X-RateLimit-Remaining": "42"}, GitHubAuthenticationError),
            (403, {}, GitHubAuthenticationError),
            (404, {}, GitHubRepositoryNotFoundError),
            (500, {}, GitHubAPIError),
            (429, {}, GitHubAPIError),
        ],
    )
    async def test_status_mapping(
        self, status: int, headers: dict[str, str], expected: type[Exception]
    ) -> None:
        """Test error statuses map onto the matching GitHub error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, headers=headers, text="boom")

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(expected):
                await fetcher.fetch_releases("checkout")

    @pytest.mark.asyncio
    async def test_rate_limit_error_carries_reset_time(self) -> None:
        """Test the reset header is rendered into the rate limit error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
            )

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubRateLimitError) as exc_info:
                await fetcher.fetch_repository_releases("checkout")

        assert exc_info.value.reset_at == "2023-11-14T22:13:20+00:00"

    @pytest.mark.asyncio
    async def test_api_error_message_includes_body(self) -> None:
        """Test other statuses keep the response body in the message."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubAPIError) as exc_info:
                await fetcher.fetch_repository_releases("checkout")

        assert exc_info.value.status_code == 502
        assert "bad gateway" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """Test transport failures surface as network errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubNetworkError):
                await fetcher.fetch_releases("checkout")

    @pytest.mark.asyncio
    async def test_non_array_release_payload(self) -> None:
        """Test a releases body that is not an array is a decode error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "unexpected"})

        async with make_client(handler) as client:
            fetcher = ReleaseFetcher(client, make_settings())
            with pytest.raises(GitHubDecodeError):
                await fetcher.fetch_repository_releases("checkout")
