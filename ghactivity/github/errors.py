"""Errors raised while fetching a user's GitHub event feed."""

from __future__ import annotations

# Response bodies quoted in error messages are truncated to this length
_BODY_PREVIEW_LIMIT = 100


class GitHubActivityError(RuntimeError):
    """Base exception for every failure of the event fetch.

    The command catches this single type and reports ``str(exc)`` to the user,
    so subclasses keep their messages user-facing.
    """


class UserNotFoundError(GitHubActivityError):
    """Raised when GitHub answers 404 for the requested user."""

    def __init__(self, username: str) -> None:
        """Initialise with the username that could not be found."""
        self.username = username
        super().__init__(
            f"User '{username}' not found. Please check the username and try again."
        )


class GitHubAPIError(GitHubActivityError):
    """Raised when GitHub returns a non-2xx response other than 404."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(
            f"GitHub API request failed (Status: {status_code})",
            status_code=status_code,
        )


class GitHubNetworkError(GitHubActivityError):
    """Raised when the request never produced an HTTP response."""

    @classmethod
    def timeout(cls) -> GitHubNetworkError:
        """Return an error for a request that timed out."""
        return cls("GitHub API request timed out")

    @classmethod
    def network_error(cls, detail: str) -> GitHubNetworkError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"GitHub API network error: {detail}")


class GitHubResponseShapeError(GitHubActivityError):
    """Raised when a successful response does not hold an event list."""

    @classmethod
    def invalid_json(cls, body: str) -> GitHubResponseShapeError:
        """Return an error for a body that is not valid JSON."""
        preview = body[:_BODY_PREVIEW_LIMIT]
        return cls(f"GitHub API returned invalid JSON: {preview!r}")

    @classmethod
    def not_a_list(cls, received: object) -> GitHubResponseShapeError:
        """Return an error for JSON that is not an array of events."""
        return cls(
            f"GitHub API returned {type(received).__name__}, expected a list of events"
        )
