"""Decoding of JSON response bodies into resource objects."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol, TypeVar

from .exceptions import TrelloDecodeError

T = TypeVar("T")

NUMBER = (int, float)


class Transport(Protocol):
    """Anything that can perform authenticated GET/POST calls against the API."""

    def get(self, path: str) -> bytes: ...

    def post(self, path: str, form: Mapping[str, str]) -> bytes: ...


def _loads(body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        raise TrelloDecodeError(f"Invalid JSON response: {e}") from e


def _build(cls: type[T], data: Any, client: Transport | None) -> T:
    if not isinstance(data, dict):
        raise TrelloDecodeError(f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}")
    try:
        return cls.from_dict(data, client)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise TrelloDecodeError(f"Malformed {cls.__name__} payload: {e!r}") from e


def decode_one(cls: type[T], body: bytes, client: Transport | None) -> T:
    """Decode a single JSON object into ``cls``, bound to ``client``."""
    return _build(cls, _loads(body), client)


def decode_many(cls: type[T], body: bytes, client: Transport | None) -> list[T]:
    """
    Decode a JSON array into a list of ``cls``, bound to ``client``.

    Server order is preserved. Any malformed element fails the whole decode.
    """
    data = _loads(body)
    if not isinstance(data, list):
        raise TrelloDecodeError(f"Expected a JSON array of {cls.__name__}, got {type(data).__name__}")
    return [_build(cls, item, client) for item in data]


def parse_datetime(value: Any) -> datetime | None:
    """Parse an API timestamp such as ``2014-09-24T21:05:32.123Z``."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _as_tuple(type_: type | tuple[type, ...]) -> tuple[type, ...]:
    return type_ if isinstance(type_, tuple) else (type_,)


def expect(data: dict[str, Any], key: str, type_: type | tuple[type, ...], default: Any = None) -> Any:
    """
    Read ``data[key]`` and check its JSON type.

    Missing keys and JSON null give ``default``. ``bool`` is not accepted
    where a number is expected.

    Raises:
        TypeError: If the value has the wrong type
    """
    value = data.get(key)
    if value is None:
        return default
    types = _as_tuple(type_)
    if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
        names = " or ".join(t.__name__ for t in types)
        raise TypeError(f"{key!r} must be {names}, got {type(value).__name__}")
    return value


def expect_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Read a nested JSON object; missing or null gives an empty dict."""
    return expect(data, key, dict, {})


def expect_list(data: dict[str, Any], key: str, item_type: type = str) -> list[Any]:
    """Read a JSON array whose items are all ``item_type``; missing or null gives ``[]``."""
    items = expect(data, key, list, [])
    for item in items:
        if not isinstance(item, item_type):
            raise TypeError(f"{key!r} items must be {item_type.__name__}, got {type(item).__name__}")
    return list(items)


def expect_id(data: dict[str, Any]) -> str:
    """Read the resource ``id``, which must be a non-empty string."""
    value = expect(data, "id", str)
    if not value:
        raise ValueError("'id' must be a non-empty string")
    return value
