"""Error taxonomy rendered as JSON error envelopes."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import status
from starlette.exceptions import HTTPException as StarletteHTTPException


class ProxyError(Exception):
    """Base error carrying the HTTP status and envelope fields."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "server_error"
    headers: dict[str, str] | None = None

    def __init__(self, details: str | None = None) -> None:
        super().__init__(details or self.error)
        self.details = details

    def to_dict(self) -> dict[str, str | None]:
        return {"error": self.error, "details": self.details}


class InvalidInputError(ProxyError):
    """Client-supplied data failed validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid text"


class ProviderError(ProxyError):
    """Outbound model call failed or returned a non-success status."""

    error = "LLM provider error"


class ServerError(ProxyError):
    """Any other fault while handling a request."""


class NotFoundError(ProxyError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"


class PayloadTooLargeError(ProxyError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    error = "payload_too_large"


class HTTPStatusError(ProxyError):
    """Routing-level failure raised by the framework, e.g. a wrong method."""

    def __init__(
        self,
        status_code: int,
        error: str,
        details: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(details)
        self.status_code = status_code
        self.error = error
        self.headers = headers

    @classmethod
    def from_http_exception(cls, exc: StarletteHTTPException) -> "HTTPStatusError":
        try:
            error = HTTPStatus(exc.status_code).phrase.lower().replace(" ", "_")
        except ValueError:
            error = "http_error"
        details = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return cls(exc.status_code, error, details, dict(exc.headers) if exc.headers else None)
