"""Identifier handling, data model, formatting and settings."""

from .formatting import format_citation, format_citation_list
from .identifiers import normalize_doi, normalize_issn, strip_oci_prefix
from .models import Citation, CitationCount

__all__ = [
    "Citation",
    "CitationCount",
    "format_citation",
    "format_citation_list",
    "normalize_doi",
    "normalize_issn",
    "strip_oci_prefix",
]
