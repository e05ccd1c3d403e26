"""Shared HTTP client every manager delegates to.

One BoxClient owns one httpx.AsyncClient. Managers build a path and a
parameter bag and call `BoxClient.call`, which sends exactly one request and
either returns the decoded body (2xx) or raises UnexpectedResponseError.
"""
from __future__ import annotations

import asyncio
import ipaddress
import platform
import time
import warnings
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from . import __version__
from .config import Config
from .domain.enums import CURRENT_USER_ID
from .errors import AuthError, UnexpectedResponseError, response_body
from .logging_conf import get_logger
from .managers import CollaborationAllowlist, Collaborations, TermsOfService

__all__ = [
    "BoxClient",
    "with_callback",
]

logger = get_logger("boxkit.client")

T = TypeVar("T")

HEADER_AUTHORIZATION = "Authorization"
HEADER_BOXAPI = "BoxApi"
HEADER_XFF = "X-Forwarded-For"
HEADER_AS_USER = "As-User"
HEADER_BOX_UA = "X-Box-UA"

_SUCCESS = range(200, 300)
_URI_SAFE = "-_.!~*'()"


def _box_ua() -> str:
    return f"agent=boxkit/{__version__}; env=Python/{platform.python_version()}"


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    return value


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop None values and render bools/enums the way the API expects."""
    if not params:
        return None
    cleaned = {k: _query_value(v) for k, v in params.items() if v is not None}
    return cleaned or None


def _is_expired_token(response: httpx.Response) -> bool:
    """A 401 with an empty body means the access token expired.

    An empty JSON object or null counts as empty. Any other body, JSON or
    not, is some other authorization failure and is left to the default
    handler.
    """
    if response.status_code != httpx.codes.UNAUTHORIZED:
        return False
    if not response.content:
        return True
    try:
        body = response.json()
    except ValueError:
        return False
    return body is None or body == {}


class BoxClient:
    """Authenticated client for the Box API.

    - Adds Authorization, custom headers and X-Box-UA to every request
    - Exposes one manager per resource family (collaborations, ...)
    - Use as `async with BoxClient(...) as client:` to close the transport
    """

    CURRENT_USER_ID = CURRENT_USER_ID

    def __init__(
        self,
        config: Config | None = None,
        *,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or Config.from_env()
        token = access_token or self.config.access_token
        if not token:
            raise ValueError("an access token is required (pass access_token or set BOX_ACCESS_TOKEN)")
        self._access_token = token
        self._custom_headers: dict[str, str] = {}

        if http_client is None:
            self._http = httpx.AsyncClient(timeout=self.config.timeout, transport=transport)
            self._owns_http = True
        else:
            self._http = http_client
            self._owns_http = False

        if self.config.as_user:
            self.as_user(self.config.as_user)

        self.collaborations = Collaborations(self)
        self.collaboration_allowlist = CollaborationAllowlist(self)
        self.terms_of_service = TermsOfService(self)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def collaboration_whitelist(self) -> CollaborationAllowlist:
        warnings.warn(
            "collaboration_whitelist is deprecated; use collaboration_allowlist",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.collaboration_allowlist

    async def __aenter__(self) -> "BoxClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this BoxClient created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------
    # Headers
    # ------------------------

    def set_custom_header(self, header: str, value: str | None) -> None:
        """Send `header` on every request; a falsy value removes it."""
        if value:
            self._custom_headers[header] = value
        else:
            self._custom_headers.pop(header, None)

    def as_user(self, user_id: str) -> None:
        self.set_custom_header(HEADER_AS_USER, str(user_id))

    def as_self(self) -> None:
        self.set_custom_header(HEADER_AS_USER, None)

    def set_ips(self, ips: Iterable[str]) -> None:
        """Forward end-user IPs; entries that aren't valid addresses are dropped."""
        valid: list[str] = []
        for ip in ips:
            try:
                ipaddress.ip_address(ip)
            except ValueError:
                continue
            valid.append(ip)
        self.set_custom_header(HEADER_XFF, ", ".join(valid))

    def set_shared_context(self, url: str, password: str | None = None) -> None:
        self.set_custom_header(HEADER_BOXAPI, self.build_shared_item_auth_header(url, password))

    def revoke_shared_context(self) -> None:
        self.set_custom_header(HEADER_BOXAPI, None)

    @staticmethod
    def build_shared_item_auth_header(url: str, password: str | None = None) -> str:
        header = f"shared_link={quote(url, safe=_URI_SAFE)}"
        if password:
            header += f"&shared_link_password={quote(password, safe=_URI_SAFE)}"
        return header

    def _headers_for_request(self, caller_headers: Mapping[str, str] | None) -> httpx.Headers:
        # httpx.Headers matches names case-insensitively, so "as-user" replaces "As-User".
        headers = httpx.Headers({HEADER_AUTHORIZATION: f"Bearer {self._access_token}"})
        # Caller headers override our custom ones; X-Box-UA overrides everything.
        headers.update(self._custom_headers)
        headers.update(caller_headers or {})
        headers[HEADER_BOX_UA] = _box_ua()
        return headers

    # ------------------------
    # Requests
    # ------------------------

    async def _make_request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and return the raw response.

        Raises AuthError for an expired token; any other status is returned
        as-is. Transport errors propagate unchanged.
        """
        url = f"{self.base_url}{path}"
        logger.debug(
            "request.start",
            extra={"event": "request_start", "method": method, "path": path},
        )
        start = time.perf_counter()
        response = await self._http.request(
            method,
            url,
            params=_clean_params(params),
            json=json,
            headers=self._headers_for_request(headers),
        )
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

        if _is_expired_token(response):
            raise AuthError(response)
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._make_request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._make_request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._make_request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._make_request("DELETE", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self._make_request("OPTIONS", path, **kwargs)

    async def call(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request with default response handling.

        - 2xx resolves to the decoded JSON body (None when the body is empty)
        - any other status raises UnexpectedResponseError
        """
        response = await self._make_request(method, path, params=params, json=json)
        if response.status_code in _SUCCESS:
            return response_body(response)
        raise self.unexpected(response)

    def unexpected(self, response: httpx.Response) -> UnexpectedResponseError:
        """Log and build the error for a status the caller did not expect."""
        logger.warning(
            "request.unexpected_status",
            extra={
                "event": "unexpected_status",
                "method": response.request.method,
                "path": response.request.url.path,
                "status_code": response.status_code,
            },
        )
        return UnexpectedResponseError(response)

    async def paginate(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        limit: int | None = None,
    ) -> AsyncIterator[Any]:
        """Yield every entry of a collection endpoint, fetching pages lazily.

        Follows `next_marker` when the API returns one (marker paging) and
        falls back to offset/total_count otherwise. Stops on an empty page.
        """
        query: dict[str, Any] = dict(params or {})
        if limit is not None:
            query["limit"] = limit
        while True:
            page = await self.call("GET", path, params=query) or {}
            entries = page.get("entries") or []
            for entry in entries:
                yield entry
            if not entries:
                return

            if page.get("next_marker"):
                query["marker"] = page["next_marker"]
                continue
            if "next_marker" in page or "total_count" not in page:
                return

            offset = int(page.get("offset", query.get("offset", 0))) + len(entries)
            if offset >= int(page["total_count"]):
                return
            query["offset"] = offset


def with_callback(
    awaitable: Awaitable[T],
    callback: Callable[[BaseException | None, T | None], None],
) -> "asyncio.Task[T]":
    """Schedule `awaitable` and report its outcome to `callback(error, result)`.

    Exactly one of error/result is set. The returned task can still be
    awaited; it resolves or raises exactly as the awaitable would. Must be
    called with a running event loop.
    """
    task = asyncio.ensure_future(awaitable)

    def _done(t: "asyncio.Future[T]") -> None:
        if t.cancelled():
            callback(asyncio.CancelledError(), None)
            return
        exc = t.exception()
        if exc is not None:
            callback(exc, None)
        else:
            callback(None, t.result())

    task.add_done_callback(_done)
    return task
