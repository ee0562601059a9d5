"""Plain-text rendering of citation records for tool responses."""

from __future__ import annotations

from typing import Iterable, List

from opencitations_mcp.core.models import Citation

NO_CITATIONS_FOUND = "No citations found."

_MISSING = "N/A"
_FLAG_DEFAULT = "no"


def format_citation(citation: Citation) -> str:
    """Render every field of ``citation`` on its own line."""

    lines = [
        f"OCI: {citation.oci}",
        f"Citing: {citation.citing}",
        f"Cited: {citation.cited}",
        f"Date: {citation.creation or _MISSING}",
        f"Timespan: {citation.timespan or _MISSING}",
        f"Journal self-citation: {citation.journal_sc or _FLAG_DEFAULT}",
        f"Author self-citation: {citation.author_sc or _FLAG_DEFAULT}",
    ]
    return "\n".join(lines)


def format_citation_list(citations: Iterable[Citation]) -> str:
    """Render a numbered, compact listing separated by blank lines.

    Self-citation flags are only mentioned when set to ``"yes"``.
    """

    blocks: List[str] = []
    for index, citation in enumerate(citations, start=1):
        lines = [
            f"[{index}] OCI: {citation.oci}",
            f"    Citing: {citation.citing}",
            f"    Cited: {citation.cited}",
            f"    Date: {citation.creation or _MISSING}",
        ]
        if citation.journal_sc == "yes":
            lines.append("    (Journal self-citation)")
        if citation.author_sc == "yes":
            lines.append("    (Author self-citation)")
        blocks.append("\n".join(lines))

    if not blocks:
        return NO_CITATIONS_FOUND
    return "\n\n".join(blocks)


__all__ = ["NO_CITATIONS_FOUND", "format_citation", "format_citation_list"]
