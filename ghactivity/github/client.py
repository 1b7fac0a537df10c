"""GitHub REST client for a user's public event feed."""

from __future__ import annotations

import dataclasses
import typing as typ
from urllib.parse import quote

import httpx
import msgspec

from ghactivity.logging import get_logger, log_debug, log_info

from .errors import (
    GitHubAPIError,
    GitHubNetworkError,
    GitHubResponseShapeError,
    UserNotFoundError,
)

if typ.TYPE_CHECKING:
    from types import TracebackType

logger = get_logger(__name__)

_HTTP_NOT_FOUND = 404
_HTTP_SUCCESS_MIN = 200
_HTTP_SUCCESS_MAX = 299


class GitHubEventsSource(typ.Protocol):
    """Interface for fetching the raw event feed of a GitHub user."""

    async def fetch_user_events(self, username: str) -> list[typ.Any]:
        """Return the decoded JSON array of the user's public events."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubEventsConfig:
    """Configuration for the GitHub events REST client."""

    api_url: str = "https://api.github.com"
    user_agent: str = "gh-activity/0.1"
    timeout_s: float = 20.0

    def user_events_url(self, username: str) -> str:
        """Return the events endpoint for ``username``."""
        return f"{self.api_url.rstrip('/')}/users/{quote(username, safe='')}/events"


def _decode_event_list(response: httpx.Response) -> list[typ.Any]:
    """Decode a successful response body into the raw event list."""
    try:
        payload = msgspec.json.decode(response.content)
    except msgspec.DecodeError as exc:
        raise GitHubResponseShapeError.invalid_json(response.text) from exc
    if not isinstance(payload, list):
        raise GitHubResponseShapeError.not_a_list(payload)
    return payload


class GitHubEventsClient:
    """Unauthenticated implementation of :class:`GitHubEventsSource`.

    Parameters
    ----------
    config
        Endpoint and transport settings.
    http_client
        Optional ``httpx.AsyncClient`` for testing. If not provided, the
        instance creates and owns its own client.

    Examples
    --------
    >>> import asyncio
    >>> async def demo() -> int:
    ...     async with GitHubEventsClient() as client:
    ...         return len(await client.fetch_user_events("octocat"))
    >>> # asyncio.run(demo())

    """

    def __init__(
        self,
        config: GitHubEventsConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config or GitHubEventsConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._config.timeout_s,
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": "application/vnd.github+json",
            },
        )

    @property
    def config(self) -> GitHubEventsConfig:
        """Read-only access to the client configuration."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GitHubEventsClient:
        """Return the client for use in an ``async with`` block."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close owned HTTP resources on exit."""
        await self.aclose()

    async def fetch_user_events(self, username: str) -> list[typ.Any]:
        """Fetch the public event feed for ``username``.

        Parameters
        ----------
        username
            GitHub login whose events are requested.

        Returns
        -------
        list[Any]
            Decoded JSON array, possibly empty. Items are not validated here.

        Raises
        ------
        ValueError
            If ``username`` is empty.
        UserNotFoundError
            If GitHub answers 404.
        GitHubAPIError
            For any other non-2xx status.
        GitHubNetworkError
            If the request fails before a response arrives.
        GitHubResponseShapeError
            If the body is not a JSON array.

        """
        if not username.strip():
            msg = "username must be non-empty"
            raise ValueError(msg)

        url = self._config.user_events_url(username)
        log_debug(logger, "GET %s", url)
        response = await self._send_request(url)
        self._check_response_errors(response, username)
        events = _decode_event_list(response)
        log_info(logger, "Fetched %d events for %s", len(events), username)
        return events

    async def _send_request(self, url: str) -> httpx.Response:
        """Perform the GET request, translating transport failures."""
        try:
            return await self._client.get(url)
        except httpx.TimeoutException as exc:
            raise GitHubNetworkError.timeout() from exc
        except httpx.RequestError as exc:
            raise GitHubNetworkError.network_error(str(exc)) from exc

    def _check_response_errors(self, response: httpx.Response, username: str) -> None:
        """Raise the classified error for non-2xx responses."""
        status = response.status_code
        if _HTTP_SUCCESS_MIN <= status <= _HTTP_SUCCESS_MAX:
            return
        log_debug(logger, "GitHub answered %d for %s", status, username)
        if status == _HTTP_NOT_FOUND:
            raise UserNotFoundError(username)
        raise GitHubAPIError.http_error(status)
