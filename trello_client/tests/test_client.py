"""Tests for the HTTP transport and the client's root accessors."""

import json
import logging
from urllib.parse import parse_qs

import httpx
import pytest
from tenacity import wait_none

from trello_client.client import TrelloClient, _is_retryable
from trello_client.exceptions import TrelloAPIError, TrelloDecodeError

BASE_URL = "https://api.example.test/1"


class Recorder:
    """httpx.MockTransport handler that records requests and replays responses in order."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)


def make_client(handler) -> TrelloClient:
    return TrelloClient("test-key", "test-token", base_url=BASE_URL, transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    """Skip the exponential backoff between retries."""
    monkeypatch.setattr(TrelloClient._send.retry, "wait", wait_none())


class TestTransport:
    """get/post talk to the API with credentials attached."""

    def test_get_adds_credentials_and_returns_body(self):
        recorder = Recorder(httpx.Response(200, content=b'[{"id": "b1"}]'))
        with make_client(recorder) as client:
            body = client.get("/boards/")

        assert body == b'[{"id": "b1"}]'
        request = recorder.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/1/boards/"
        assert request.url.params["key"] == "test-key"
        assert request.url.params["token"] == "test-token"

    def test_post_sends_form_encoded_body(self):
        recorder = Recorder(httpx.Response(200, json={"id": "c1"}))
        with make_client(recorder) as client:
            client.post("/cards", {"name": "Card", "idLabels": "a,b", "due": "null"})

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/1/cards"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {
            "name": ["Card"],
            "idLabels": ["a,b"],
            "due": ["null"],
        }

    def test_trailing_slash_stripped_from_base_url(self):
        client = TrelloClient("k", "t", base_url="https://api.example.test/1/")
        try:
            assert client.base_url == BASE_URL
        finally:
            client.close()


class TestTransportErrors:
    """HTTP and network failures become TrelloAPIError."""

    def test_4xx_with_text_body(self):
        recorder = Recorder(httpx.Response(401, text="invalid token"))
        with make_client(recorder) as client, pytest.raises(TrelloAPIError) as exc_info:
            client.get("/boards/")

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "invalid token"
        assert len(recorder.requests) == 1

    def test_4xx_with_json_message(self):
        recorder = Recorder(httpx.Response(400, json={"message": "invalid value for idList"}))
        with make_client(recorder) as client, pytest.raises(TrelloAPIError) as exc_info:
            client.post("/cards", {"name": "x"})

        assert exc_info.value.message == "invalid value for idList"
        assert str(exc_info.value) == "invalid value for idList [HTTP 400]"

    def test_404_is_not_special_cased(self):
        recorder = Recorder(httpx.Response(404, text="The requested resource was not found."))
        with make_client(recorder) as client, pytest.raises(TrelloAPIError) as exc_info:
            client.board("missing")

        assert exc_info.value.status_code == 404
        assert len(recorder.requests) == 1

    def test_5xx_retried_then_raised(self, caplog):
        recorder = Recorder(httpx.Response(503, text="unavailable"))
        with make_client(recorder) as client, caplog.at_level(logging.WARNING, logger="trello_client.client"):
            with pytest.raises(TrelloAPIError) as exc_info:
                client.get("/boards/")

        assert exc_info.value.status_code == 503
        assert len(recorder.requests) == 3
        assert "Retrying request (attempt 1)" in caplog.text

    def test_5xx_then_success(self):
        recorder = Recorder(
            httpx.Response(502, text="bad gateway"),
            httpx.Response(200, content=b"[]"),
        )
        with make_client(recorder) as client:
            assert client.boards() == []

        assert len(recorder.requests) == 2

    def test_network_error_retried_then_wrapped(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client, pytest.raises(TrelloAPIError) as exc_info:
            client.get("/boards/")

        assert exc_info.value.code == "REQUEST_ERROR"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(calls) == 3


class TestIsRetryable:
    """Only wrapped network errors and 5xx responses are retried."""

    @pytest.mark.parametrize(
        "exception, expected",
        [
            (TrelloAPIError("Request failed: timeout", code="REQUEST_ERROR"), True),
            (TrelloAPIError("unavailable", status_code=503), True),
            (TrelloAPIError("bad gateway", status_code=502), True),
            (TrelloAPIError("invalid token", status_code=401), False),
            (TrelloAPIError("not found", status_code=404), False),
            (TrelloDecodeError("Invalid JSON response"), False),
            (ValueError("boom"), False),
        ],
    )
    def test_classification(self, exception, expected):
        assert _is_retryable(exception) is expected

    def test_bad_json_is_not_retried(self):
        recorder = Recorder(httpx.Response(200, text="<html>maintenance</html>"))
        with make_client(recorder) as client, pytest.raises(TrelloDecodeError):
            client.boards()

        assert len(recorder.requests) == 1


class TestRootAccessors:
    """boards(), board(), card() and member() bind results to the client."""

    def test_boards_end_to_end(self):
        def handler(request):
            routes = {
                "/1/boards/": [{"id": "b1", "name": "X"}],
                "/1/boards/b1/lists": [{"id": "l1", "name": "To Do", "idBoard": "b1"}],
            }
            return httpx.Response(200, content=json.dumps(routes[request.url.path]).encode())

        with make_client(handler) as client:
            boards = client.boards()

            assert len(boards) == 1
            assert boards[0].id == "b1"
            assert boards[0].name == "X"
            assert boards[0].client is client

            lists = boards[0].lists()

        assert [lst.name for lst in lists] == ["To Do"]
        assert lists[0].client is client

    def test_many_boards_share_one_client(self):
        payload = [{"id": f"b{i}", "name": f"Board {i}"} for i in range(5)]
        recorder = Recorder(httpx.Response(200, json=payload))
        with make_client(recorder) as client:
            boards = client.boards()

        assert len(boards) == 5
        assert all(board.id for board in boards)
        assert {id(board.client) for board in boards} == {id(client)}

    def test_board_by_id(self):
        recorder = Recorder(httpx.Response(200, json={"id": "b1", "name": "Roadmap"}))
        with make_client(recorder) as client:
            board = client.board("b1")

        assert recorder.requests[0].url.path == "/1/boards/b1"
        assert board.name == "Roadmap"
        assert board.client is client

    def test_card_by_id(self):
        recorder = Recorder(httpx.Response(200, json={"id": "c1", "idBoard": "b1"}))
        with make_client(recorder) as client:
            card = client.card("c1")

        assert recorder.requests[0].url.path == "/1/cards/c1"
        assert card.id_board == "b1"

    def test_member_me(self):
        recorder = Recorder(httpx.Response(200, json={"id": "m1", "username": "ada"}))
        with make_client(recorder) as client:
            member = client.member("me")

        assert recorder.requests[0].url.path == "/1/members/me"
        assert member.username == "ada"
        assert member.client is client

    def test_empty_board_id_is_decode_error(self):
        recorder = Recorder(httpx.Response(200, json=[{"id": ""}]))
        with make_client(recorder) as client, pytest.raises(TrelloDecodeError):
            client.boards()

    def test_non_json_body_is_decode_error(self):
        recorder = Recorder(httpx.Response(200, text="not json"))
        with make_client(recorder) as client, pytest.raises(TrelloDecodeError):
            client.boards()


class TestFromEnv:
    """Configuration from environment variables."""

    def test_reads_credentials(self, monkeypatch):
        monkeypatch.setenv("TRELLO_API_KEY", "env-key")
        monkeypatch.setenv("TRELLO_TOKEN", "env-token")
        monkeypatch.delenv("TRELLO_API_URL", raising=False)

        with TrelloClient.from_env() as client:
            assert client.api_key == "env-key"
            assert client.token == "env-token"
            assert client.base_url == "https://api.trello.com/1"

    def test_custom_base_url(self, monkeypatch):
        monkeypatch.setenv("TRELLO_API_KEY", "env-key")
        monkeypatch.setenv("TRELLO_TOKEN", "env-token")
        monkeypatch.setenv("TRELLO_API_URL", "http://localhost:9000/1/")

        with TrelloClient.from_env() as client:
            assert client.base_url == "http://localhost:9000/1"

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("TRELLO_API_KEY", raising=False)
        monkeypatch.setenv("TRELLO_TOKEN", "env-token")

        with pytest.raises(ValueError, match="TRELLO_API_KEY"):
            TrelloClient.from_env()

    def test_missing_token(self, monkeypatch):
        monkeypatch.setenv("TRELLO_API_KEY", "env-key")
        monkeypatch.delenv("TRELLO_TOKEN", raising=False)

        with pytest.raises(ValueError, match="TRELLO_TOKEN"):
            TrelloClient.from_env()
