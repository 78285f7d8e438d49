"""GitHub API errors raised by the release fetcher."""

from __future__ import annotations


class GitHubError(Exception):
    """Base exception for GitHub API failures."""


class GitHubAuthenticationError(GitHubError):
    """Raised when GitHub rejects the token."""

    def __init__(self, url: str) -> None:
        super().__init__(f"GitHub authentication failed for {url}. Please check your token.")
        self.url = url


class GitHubRateLimitError(GitHubError):
    """Raised when the API quota is exhausted."""

    def __init__(self, url: str, reset_at: str | None = None) -> None:
        message = f"GitHub API rate limit exceeded for {url}"
        if reset_at:
            message += f" (resets at {reset_at})"
        super().__init__(message)
        self.url = url
        self.reset_at = reset_at


class GitHubRepositoryNotFoundError(GitHubError):
    """Raised when the repository does not exist or is not visible."""

    def __init__(self, repository: str) -> None:
        super().__init__(f"GitHub repository not found: {repository}")
        self.repository = repository


class GitHubAPIError(GitHubError):
    """Raised for any other non-success response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"GitHub API error ({status_code}): {message}")
        self.status_code = status_code


class GitHubNetworkError(GitHubError):
    """Raised when GitHub cannot be reached or the request times out."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Network error talking to {url}: {reason}")
        self.url = url


class GitHubDecodeError(GitHubError):
    """Raised when a GitHub response has an unexpected shape."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Error parsing GitHub response from {source}: {reason}")
        self.source = source
