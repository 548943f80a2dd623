"""Exceptions raised by the Trello client."""


class TrelloAPIError(Exception):
    """Exception raised for Trello API and transport errors."""

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"(code: {self.code})")
        if self.status_code:
            parts.append(f"[HTTP {self.status_code}]")
        return " ".join(parts)


class TrelloDecodeError(TrelloAPIError):
    """Raised when a response body does not match the expected resource shape."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_RESPONSE")


class InvalidOptionsError(ValueError):
    """Raised when write options fail validation, before any request is made."""
