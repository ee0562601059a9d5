from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class Citation:
    """A single citing -> cited edge from the OpenCitations Index.

    ``oci`` identifies the edge. The descriptive fields mirror the API payload
    verbatim; OpenCitations sends empty strings for unknown values, so none of
    them is ever ``None``. ``journal_sc`` and ``author_sc`` hold ``"yes"`` or
    ``"no"``.
    """

    oci: str
    citing: str
    cited: str
    creation: str = ""
    timespan: str = ""
    journal_sc: str = ""
    author_sc: str = ""


@dataclass(frozen=True)
class CitationCount:
    """One element of a ``*-count`` response. The API reports counts as strings."""

    count: str

    @property
    def value(self) -> int:
        """Parse ``count`` as a base-10 integer, ignoring trailing non-digits.

        Raises ``ValueError`` when the string does not start with a number.
        """

        match = _LEADING_INTEGER.match(self.count)
        if match is None:
            raise ValueError(f"Count is not numeric: {self.count!r}")
        return int(match.group(1))


__all__ = ["Citation", "CitationCount"]
