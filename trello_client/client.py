"""
Trello API Client implementation.
"""

import logging
import os
from collections.abc import Mapping

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ._decode import decode_many, decode_one
from .board import Board
from .exceptions import TrelloAPIError
from .models import Card, Member

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.trello.com/1"


def _is_retryable(exception: BaseException) -> bool:
    """Check if exception is retryable (network errors, 5xx server errors).

    ``_send`` wraps network errors as ``REQUEST_ERROR`` before tenacity sees them.
    """
    if not isinstance(exception, TrelloAPIError):
        return False
    if exception.code == "REQUEST_ERROR":
        return True
    return bool(exception.status_code and exception.status_code >= 500)


def _log_retry(retry_state) -> None:
    """Log retry attempts."""
    logger.warning(
        f"Retrying request (attempt {retry_state.attempt_number}) after error: {retry_state.outcome.exception()}"
    )


def _error_message(response: httpx.Response) -> str:
    """Pull a readable message out of an error response."""
    try:
        error_data = response.json()
    except ValueError:
        return response.text or "Unknown error"
    if isinstance(error_data, dict):
        return error_data.get("message") or error_data.get("error") or response.text or "Unknown error"
    return response.text or "Unknown error"


class TrelloClient:
    """
    Python client for the Trello REST API.

    The client is the session every fetched resource holds on to: boards, lists,
    cards and so on use it to fetch their own children.

    Example:
        >>> with TrelloClient(api_key="...", token="...") as client:
        ...     for board in client.boards():
        ...         print(board.name, [lst.name for lst in board.lists()])
    """

    def __init__(
        self,
        api_key: str,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the Trello API client.

        Args:
            api_key: The application API key
            token: The user token authorizing the application
            base_url: The base URL of the API (default: "https://api.trello.com/1")
            timeout: Request timeout in seconds (default: 30.0)
            transport: Custom httpx transport (proxies, mounts, test doubles)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.token = token
        self.timeout = timeout
        self._client = httpx.Client(
            base_url=self.base_url,
            params={"key": api_key, "token": token},
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_env(cls) -> "TrelloClient":
        """
        Create a client from TRELLO_API_KEY, TRELLO_TOKEN and optionally TRELLO_API_URL.

        Raises:
            ValueError: If the key or token is not set
        """
        api_key = os.environ.get("TRELLO_API_KEY")
        token = os.environ.get("TRELLO_TOKEN")
        if not api_key:
            raise ValueError("TRELLO_API_KEY is required")
        if not token:
            raise ValueError("TRELLO_TOKEN is required")
        return cls(api_key, token, base_url=os.environ.get("TRELLO_API_URL") or DEFAULT_BASE_URL)

    def __enter__(self) -> "TrelloClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    )
    def _send(self, method: str, path: str, data: Mapping[str, str] | None = None) -> bytes:
        """
        Make an API request with automatic retry for transient failures.

        Retries on network errors and 5xx server errors with exponential backoff.
        Does NOT retry on 4xx client errors (auth failures, not found, bad ids).

        Args:
            method: HTTP method (GET or POST)
            path: API path (e.g., "/boards/abc123/lists")
            data: Form parameters for POST requests

        Returns:
            The raw response body

        Raises:
            TrelloAPIError: If the API returns an error (after retries exhausted)
        """
        logger.debug(f"{method} {path}")
        try:
            response = self._client.request(method, path, data=data)
        except httpx.RequestError as e:
            raise TrelloAPIError(f"Request failed: {e}", code="REQUEST_ERROR") from e

        if response.status_code >= 400:
            raise TrelloAPIError(
                message=_error_message(response),
                status_code=response.status_code,
            )

        return response.content

    # =========================================================================
    # Transport
    # =========================================================================

    def get(self, path: str) -> bytes:
        """GET ``path`` and return the raw response body."""
        return self._send("GET", path)

    def post(self, path: str, form: Mapping[str, str]) -> bytes:
        """POST form-encoded ``form`` to ``path`` and return the raw response body."""
        return self._send("POST", path, data=form)

    # =========================================================================
    # Board Methods
    # =========================================================================

    def boards(self) -> list[Board]:
        """
        List all boards visible to the authenticated user.

        Example:
            >>> for board in client.boards():
            ...     print(f"{board.name} ({board.id})")
        """
        return decode_many(Board, self.get("/boards/"), self)

    def board(self, board_id: str) -> Board:
        """
        Get a board by id.

        Args:
            board_id: The id of the board

        Raises:
            TrelloAPIError: If the board does not exist or the request fails
        """
        return decode_one(Board, self.get(f"/boards/{board_id}"), self)

    # =========================================================================
    # Card & Member Methods
    # =========================================================================

    def card(self, card_id: str) -> Card:
        """Get a card by id, regardless of board."""
        return decode_one(Card, self.get(f"/cards/{card_id}"), self)

    def member(self, member_id: str) -> Member:
        """
        Get a member by id or username ("me" is the authenticated user).

        Example:
            >>> me = client.member("me")
            >>> boards = me.boards()
        """
        return decode_one(Member, self.get(f"/members/{member_id}"), self)
