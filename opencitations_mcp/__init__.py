"""OpenCitations Index lookups exposed as MCP tools."""

from __future__ import annotations

from .api import (
    get_citation,
    get_citation_count,
    get_citations,
    get_default_client,
    get_reference_count,
    get_references,
    get_venue_citation_count,
)
from .core.formatting import format_citation, format_citation_list
from .core.identifiers import normalize_doi, normalize_issn
from .core.models import Citation
from .providers.clients.base import ClientError, DecodeError, RequestFailedError, TransportError

__version__ = "0.2.0"

__all__ = [
    "Citation",
    "ClientError",
    "DecodeError",
    "RequestFailedError",
    "TransportError",
    "format_citation",
    "format_citation_list",
    "get_citation",
    "get_citation_count",
    "get_citations",
    "get_default_client",
    "get_reference_count",
    "get_references",
    "get_venue_citation_count",
    "normalize_doi",
    "normalize_issn",
]
