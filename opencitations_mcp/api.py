"""Module-level lookups backed by a lazily created default client."""

from __future__ import annotations

from typing import List, Optional

from opencitations_mcp.core.models import Citation
from opencitations_mcp.providers.clients.opencitations import OpenCitationsClient

_default_client: Optional[OpenCitationsClient] = None


def get_default_client() -> OpenCitationsClient:
    """Return the default ``OpenCitationsClient`` instance, creating it lazily."""

    global _default_client
    if _default_client is None:
        _default_client = OpenCitationsClient()
    return _default_client


async def get_citation_count(doi: str, access_token: Optional[str] = None) -> int:
    """Count the works citing ``doi`` (``10.x/y``, ``doi:10.x/y`` or a doi.org URL)."""

    return await get_default_client().citation_count(doi, access_token)


async def get_citations(doi: str, access_token: Optional[str] = None) -> List[Citation]:
    """List the citations received by ``doi``."""

    return await get_default_client().citations(doi, access_token)


async def get_reference_count(doi: str, access_token: Optional[str] = None) -> int:
    """Count the works referenced by ``doi``."""

    return await get_default_client().reference_count(doi, access_token)


async def get_references(doi: str, access_token: Optional[str] = None) -> List[Citation]:
    """List the references made by ``doi``."""

    return await get_default_client().references(doi, access_token)


async def get_citation(oci: str, access_token: Optional[str] = None) -> Optional[Citation]:
    """Look up one citation by OCI; returns ``None`` when it does not exist."""

    return await get_default_client().citation(oci, access_token)


async def get_venue_citation_count(issn: str, access_token: Optional[str] = None) -> int:
    """Total citations received by works published in the venue ``issn``."""

    return await get_default_client().venue_citation_count(issn, access_token)


__all__ = [
    "get_citation",
    "get_citation_count",
    "get_citations",
    "get_default_client",
    "get_reference_count",
    "get_references",
    "get_venue_citation_count",
]
