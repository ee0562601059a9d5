"""Client for the OpenCitations Index REST API (v2)."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

import requests

from opencitations_mcp.core.identifiers import normalize_doi, normalize_issn, strip_oci_prefix
from opencitations_mcp.core.models import Citation, CitationCount
from opencitations_mcp.core.settings import DEFAULT_BASE_URL, OpenCitationsSettings
from opencitations_mcp.providers.clients.base import BaseHttpClient, DecodeError

T = TypeVar("T")

_REQUIRED_FIELDS = ("oci", "citing", "cited")
_OPTIONAL_FIELDS = ("creation", "timespan", "journal_sc", "author_sc")


def _expect_list(payload: Any) -> List[Any]:
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array, got {type(payload).__name__}")
    return payload


def _decode_citation(item: Any) -> Citation:
    if not isinstance(item, dict):
        raise DecodeError(f"Expected a citation object, got {type(item).__name__}")

    values = {}
    for name in _REQUIRED_FIELDS:
        value = item.get(name)
        if not isinstance(value, str):
            raise DecodeError(f"Citation field {name!r} is missing or not a string")
        values[name] = value
    for name in _OPTIONAL_FIELDS:
        value = item.get(name)
        if value is not None and not isinstance(value, str):
            raise DecodeError(f"Citation field {name!r} is not a string")
        values[name] = value or ""
    return Citation(**values)


def decode_citations(payload: Any) -> List[Citation]:
    """Decode a ``/citations`` or ``/references`` payload."""

    return [_decode_citation(item) for item in _expect_list(payload)]


def decode_first_citation(payload: Any) -> Optional[Citation]:
    """Decode a ``/citation`` payload; an empty array means no such citation."""

    items = _expect_list(payload)
    if not items:
        return None
    return _decode_citation(items[0])


def decode_count(payload: Any) -> int:
    """Decode a ``*-count`` payload; an empty array counts as zero."""

    items = _expect_list(payload)
    if not items:
        return 0

    first = items[0]
    count = first.get("count") if isinstance(first, dict) else None
    if not isinstance(count, str):
        raise DecodeError("Count response lacks a string 'count' field")
    try:
        return CitationCount(count=count).value
    except ValueError as exc:
        raise DecodeError(str(exc)) from exc


class OpenCitationsClient(BaseHttpClient):
    """Async wrapper around the OpenCitations Index lookups.

    Every method takes the identifier as supplied by the user and normalizes
    it before it is embedded in the request path. ``access_token`` is sent
    verbatim as the ``Authorization`` header when given.
    """

    BASE_URL = DEFAULT_BASE_URL

    def __init__(
        self,
        *,
        settings: Optional[OpenCitationsSettings] = None,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if settings is not None:
            session = session or settings.build_session()
            base_url = base_url or settings.base_url
            timeout = timeout if timeout is not None else settings.timeout
        super().__init__(
            session=session,
            base_url=base_url,
            timeout=timeout if timeout is not None else 10.0,
        )

    async def _fetch(
        self,
        template: str,
        identifier: str,
        decode: Callable[[Any], T],
        access_token: Optional[str],
    ) -> T:
        payload = await self._request_json(
            template.format(id=identifier), access_token=access_token
        )
        return decode(payload)

    async def citation_count(self, doi: str, access_token: Optional[str] = None) -> int:
        """Number of works citing ``doi``."""

        return await self._fetch("/citation-count/{id}", normalize_doi(doi), decode_count, access_token)

    async def citations(self, doi: str, access_token: Optional[str] = None) -> List[Citation]:
        """Citations pointing at ``doi``."""

        return await self._fetch("/citations/{id}", normalize_doi(doi), decode_citations, access_token)

    async def reference_count(self, doi: str, access_token: Optional[str] = None) -> int:
        """Number of works referenced by ``doi``."""

        return await self._fetch("/reference-count/{id}", normalize_doi(doi), decode_count, access_token)

    async def references(self, doi: str, access_token: Optional[str] = None) -> List[Citation]:
        """Citations made by ``doi``."""

        return await self._fetch("/references/{id}", normalize_doi(doi), decode_citations, access_token)

    async def citation(self, oci: str, access_token: Optional[str] = None) -> Optional[Citation]:
        """Metadata for one citation, or ``None`` when the OCI is unknown."""

        return await self._fetch(
            "/citation/{id}", strip_oci_prefix(oci), decode_first_citation, access_token
        )

    async def venue_citation_count(self, issn: str, access_token: Optional[str] = None) -> int:
        """Citations received by all works published in the venue ``issn``."""

        return await self._fetch(
            "/venue-citation-count/{id}", normalize_issn(issn), decode_count, access_token
        )


__all__ = [
    "OpenCitationsClient",
    "decode_citations",
    "decode_count",
    "decode_first_citation",
]
