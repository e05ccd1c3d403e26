"""Errors raised by the SDK.

Transport failures (httpx.HTTPError and subclasses) are not wrapped: they
propagate to the caller unchanged. Everything here describes a response the
API did return but the SDK could not accept.
"""
from __future__ import annotations

from typing import Any

import httpx

__all__ = [
    "BoxError",
    "InvalidPathError",
    "ResponseError",
    "UnexpectedResponseError",
    "AuthError",
    "response_body",
]


# ------------------------
# Helpers
# ------------------------

def response_body(response: httpx.Response) -> Any:
    """Return the decoded JSON body, or None if the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


# ------------------------
# Errors
# ------------------------
class BoxError(RuntimeError):
    """Base class for every error the SDK raises itself.

    The `code` attribute is a stable machine code callers can switch on.
    """

    code: str = "box_error"


class InvalidPathError(BoxError, ValueError):
    """Raised when a path segment would escape its resource (e.g. "/..")."""

    code = "invalid_path"


class ResponseError(BoxError):
    """An error built from an API response.

    The message carries the status, reason phrase, request id and the API's own
    error code/message when the body provides them, e.g.::

        Unexpected API Response [404 Not Found | abc123] not_found - Item not found
    """

    default_message = "API Response Error"

    def __init__(self, response: httpx.Response | None, message: str | None = None) -> None:
        self.response = response
        self.status_code: int | None = response.status_code if response is not None else None
        body = response_body(response) if response is not None else None
        body = body if isinstance(body, dict) else {}
        self.request_id: str | None = body.get("request_id")
        self.api_code: str | None = body.get("code")
        self.api_message: str | None = body.get("message")
        self.request: httpx.Request | None = _request_of(response)
        super().__init__(self._format(message or self.default_message))

    def _format(self, message: str) -> str:
        reason = httpx.codes.get_reason_phrase(self.status_code) if self.status_code else ""
        request_id = f" | {self.request_id}" if self.request_id else ""
        api_message = ""
        if self.api_code:
            api_message += f" {self.api_code}"
        if self.api_message:
            api_message += f" - {self.api_message}"
        return f"{message} [{self.status_code} {reason}{request_id}]{api_message}"


class UnexpectedResponseError(ResponseError):
    """Raised whenever the API answers with a status the caller did not expect."""

    code = "unexpected_response"
    default_message = "Unexpected API Response"


class AuthError(ResponseError):
    """Raised when the API rejects the access token as expired."""

    code = "auth_expired"
    default_message = "Expired Auth: Auth code or refresh token has expired"
    auth_expired = True


def _request_of(response: httpx.Response | None) -> httpx.Request | None:
    if response is None:
        return None
    try:
        return response.request
    except RuntimeError:  # response built without a request
        return None
