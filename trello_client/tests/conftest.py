"""Shared fixtures: a fake transport that records calls and replays canned bodies."""

import json

import pytest


class FakeTransport:
    """Records every call and answers from a path -> payload table."""

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[tuple] = []

    def _reply(self, path: str) -> bytes:
        payload = self.responses[path]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, bytes):
            return payload
        return json.dumps(payload).encode()

    def get(self, path: str) -> bytes:
        self.calls.append(("GET", path, None))
        return self._reply(path)

    def post(self, path: str, form) -> bytes:
        self.calls.append(("POST", path, dict(form)))
        return self._reply(path)


@pytest.fixture
def transport():
    """Empty fake transport; tests fill in ``responses``."""
    return FakeTransport()
