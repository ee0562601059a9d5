"""Shared HTTP client utilities and error handling."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Optional

import requests

from opencitations_mcp.exceptions import OpenCitationsError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": "opencitations-mcp",
    "Accept": "application/json",
}

_shared_session: Optional[requests.Session] = None


class ClientError(OpenCitationsError):
    """Base exception for HTTP client errors."""


class TransportError(ClientError):
    """Raised when the request never produced an HTTP response.

    Covers DNS failures, refused connections and timeouts. The underlying
    ``requests`` exception is available as ``__cause__``.
    """


class RequestFailedError(ClientError):
    """Raised when the upstream answers with a non-2xx status."""

    def __init__(
        self,
        status: int,
        reason: str,
        message: Optional[str] = None,
        body_excerpt: Optional[str] = None,
    ) -> None:
        super().__init__(message or f"API request failed: {status} {reason}".rstrip())
        self.status = status
        self.reason = reason
        self.body_excerpt = body_excerpt


class NotFoundError(RequestFailedError):
    """Raised for HTTP 404 responses."""


class UnauthorizedError(RequestFailedError):
    """Raised for HTTP 401 responses when authentication is required or has failed."""


class ForbiddenError(RequestFailedError):
    """Raised for HTTP 403 responses when access is forbidden."""


class RateLimitedError(RequestFailedError):
    """Raised for HTTP 429 responses. ``retry_after`` is informational only."""

    def __init__(
        self,
        status: int,
        reason: str,
        retry_after: Optional[float] = None,
        body_excerpt: Optional[str] = None,
    ) -> None:
        super().__init__(status, reason, body_excerpt=body_excerpt)
        self.retry_after = retry_after


class DecodeError(ClientError):
    """Raised when a successful response body is not the expected JSON shape."""


_STATUS_ERRORS = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


def _get_shared_session() -> requests.Session:
    """Return a shared :class:`requests.Session` with default headers."""

    global _shared_session
    if _shared_session is None:
        _shared_session = requests.Session()
        _shared_session.headers.update(DEFAULT_HEADERS)
    else:
        for key, value in DEFAULT_HEADERS.items():
            _shared_session.headers.setdefault(key, value)
    return _shared_session


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None

    if value.isdigit():
        return float(value)

    try:
        retry_time = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None

    if retry_time is None:
        return None

    if retry_time.tzinfo is None:
        retry_time = retry_time.replace(tzinfo=timezone.utc)

    delay = (retry_time - datetime.now(timezone.utc)).total_seconds()
    return max(delay, 0.0)


_BODY_EXCERPT_LIMIT = 200


def _sanitize_excerpt(text: str, max_length: int) -> str:
    cleaned = " ".join(text.split())
    return cleaned[:max_length]


def _get_body_excerpt(response: requests.Response) -> Optional[str]:
    try:
        body_text = response.text
    except (AttributeError, UnicodeDecodeError):
        return None

    if not body_text:
        return None

    return _sanitize_excerpt(body_text, _BODY_EXCERPT_LIMIT)


class BaseHttpClient:
    """Base class providing shared HTTP behavior for API clients.

    Requests are issued with ``requests`` on a worker thread so that awaiting
    one call does not block other tasks on the event loop. Failures are never
    retried.
    """

    BASE_URL = ""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        self.session = session or _get_shared_session()
        for key, value in DEFAULT_HEADERS.items():
            self.session.headers.setdefault(key, value)
        # requests ships "Accept: */*" on every new session, so setdefault is not enough.
        self.session.headers["Accept"] = DEFAULT_HEADERS["Accept"]
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

    def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        headers: Optional[Dict[str, Optional[str]]] = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        merged: Dict[str, Optional[str]] = dict(headers or {})
        merged.setdefault("Accept", DEFAULT_HEADERS["Accept"])
        # A ``None`` value removes the header from the merged session headers.
        merged["Authorization"] = access_token or None
        logger.debug("%s %s (authorized=%s)", method, url, bool(access_token))
        response = self._send(method, url, headers=merged, **kwargs)
        return self._handle_response(response)

    async def _request_json(
        self,
        path: str,
        *,
        access_token: Optional[str] = None,
    ) -> Any:
        # Worker threads share self.session and its connection pool. Per-request
        # state (headers, timeout) is passed as arguments, never set on the session.
        response = await asyncio.to_thread(
            self._request, "GET", path, access_token=access_token
        )
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Response from {path} is not valid JSON") from exc

    def _handle_response(self, response: requests.Response) -> requests.Response:
        status = response.status_code
        if 200 <= status < 300:
            return response

        reason = response.reason or ""
        excerpt = _get_body_excerpt(response)
        if status == 429:
            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            raise RateLimitedError(status, reason, retry_after=retry_after, body_excerpt=excerpt)
        error_cls = _STATUS_ERRORS.get(status, RequestFailedError)
        raise error_cls(status, reason, body_excerpt=excerpt)
