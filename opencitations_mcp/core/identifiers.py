from __future__ import annotations

import re

DOI_PREFIX = "doi:"
ISSN_PREFIX = "issn:"
OCI_PREFIX = "oci:"

# Scheme is matched case-insensitively, the resolver host only in lower case.
_DOI_URL_PATTERN = re.compile(r"^(?i:https?)://doi\.org/")


def normalize_doi(doi: str) -> str:
    """Return ``doi`` in the ``doi:<prefix>/<suffix>`` form used by OpenCitations.

    A leading ``http(s)://doi.org/`` resolver URL is removed and the ``doi:``
    prefix is added when missing. The value is otherwise left untouched: no
    whitespace trimming, lowercasing, or validation takes place, so applying
    the function twice yields the same result as applying it once.
    """

    cleaned = _DOI_URL_PATTERN.sub("", doi, count=1)
    if cleaned.startswith(DOI_PREFIX):
        return cleaned
    return f"{DOI_PREFIX}{cleaned}"


def normalize_issn(issn: str) -> str:
    """Return ``issn`` prefixed with ``issn:`` unless it already is."""

    if issn.startswith(ISSN_PREFIX):
        return issn
    return f"{ISSN_PREFIX}{issn}"


def strip_oci_prefix(oci: str) -> str:
    """Drop a single leading ``oci:`` prefix; OCIs are sent to the API bare."""

    if oci.startswith(OCI_PREFIX):
        return oci[len(OCI_PREFIX):]
    return oci


__all__ = ["normalize_doi", "normalize_issn", "strip_oci_prefix"]
