"""GitHub event feed client."""

from __future__ import annotations

from .client import GitHubEventsClient, GitHubEventsConfig, GitHubEventsSource
from .errors import (
    GitHubActivityError,
    GitHubAPIError,
    GitHubNetworkError,
    GitHubResponseShapeError,
    UserNotFoundError,
)

__all__ = [
    "GitHubAPIError",
    "GitHubActivityError",
    "GitHubEventsClient",
    "GitHubEventsConfig",
    "GitHubEventsSource",
    "GitHubNetworkError",
    "GitHubResponseShapeError",
    "UserNotFoundError",
]
