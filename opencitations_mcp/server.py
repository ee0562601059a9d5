"""MCP tool definitions wrapping the OpenCitations client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Optional, Tuple

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from opencitations_mcp.core.formatting import format_citation, format_citation_list
from opencitations_mcp.providers.clients.base import (
    ClientError,
    DecodeError,
    RequestFailedError,
    TransportError,
)
from opencitations_mcp.providers.clients.opencitations import OpenCitationsClient

logger = logging.getLogger(__name__)

SERVER_NAME = "opencitations-server"

DoiArg = Annotated[str, Field(description="DOI of the paper (e.g., '10.1108/jd-12-2013-0166')")]
IssnArg = Annotated[str, Field(description="ISSN of the journal (e.g., '0138-9130')")]
OciArg = Annotated[str, Field(description="Open Citation Identifier (e.g., '06101801781-06180334099')")]


@dataclass(frozen=True)
class LookupTool:
    """A tool is a client lookup plus a renderer for its result.

    ``method`` names the :class:`OpenCitationsClient` coroutine to call and
    ``render`` receives the identifier exactly as the user supplied it along
    with the lookup result.
    """

    name: str
    description: str
    method: str
    render: Callable[[str, Any], str]


def _render_citation_list(noun: str, preposition: str) -> Callable[[str, Any], str]:
    def render(identifier: str, citations: Any) -> str:
        if not citations:
            return f"No {noun} found for {identifier}"
        return (
            f"Found {len(citations)} {noun} {preposition} {identifier}:\n\n"
            f"{format_citation_list(citations)}"
        )

    return render


def _render_single_citation(identifier: str, citation: Any) -> str:
    if citation is None:
        return f"No citation found for OCI: {identifier}"
    return format_citation(citation)


TOOLS: Tuple[LookupTool, ...] = (
    LookupTool(
        name="citation_count",
        description=(
            "Get the number of citations for a paper (how many papers cite it). "
            "Provide a DOI like '10.1108/jd-12-2013-0166' or 'doi:10.1108/jd-12-2013-0166'."
        ),
        method="citation_count",
        render=lambda doi, count: f"Citation count for {doi}: {count}",
    ),
    LookupTool(
        name="get_citations",
        description=(
            "Get all papers that cite a given paper. "
            "Returns a list of citing papers with their DOIs and metadata. "
            "Provide a DOI like '10.1108/jd-12-2013-0166'."
        ),
        method="citations",
        render=_render_citation_list("citations", "for"),
    ),
    LookupTool(
        name="reference_count",
        description=(
            "Get the number of references in a paper (how many papers it cites). "
            "Provide a DOI like '10.7717/peerj-cs.421'."
        ),
        method="reference_count",
        render=lambda doi, count: f"Reference count for {doi}: {count}",
    ),
    LookupTool(
        name="get_references",
        description=(
            "Get all papers referenced by a given paper. "
            "Returns a list of referenced papers with their DOIs and metadata. "
            "Provide a DOI like '10.7717/peerj-cs.421'."
        ),
        method="references",
        render=_render_citation_list("references", "in"),
    ),
    LookupTool(
        name="get_citation",
        description=(
            "Get metadata for a specific citation using its Open Citation Identifier (OCI). "
            "An OCI is a unique identifier for a citation link between two papers. "
            "Example OCI: '06101801781-06180334099'."
        ),
        method="citation",
        render=_render_single_citation,
    ),
    LookupTool(
        name="venue_citation_count",
        description=(
            "Get the total number of citations for all papers published in a journal/venue. "
            "Provide an ISSN like '0138-9130' or 'issn:0138-9130'."
        ),
        method="venue_citation_count",
        render=lambda issn, count: f"Total citations for venue {issn}: {count}",
    ),
)

TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def describe_error(exc: ClientError) -> str:
    """Turn a client failure into the message shown to the host."""

    if isinstance(exc, RequestFailedError):
        return str(exc)
    if isinstance(exc, TransportError):
        return f"Transport error: {exc}"
    if isinstance(exc, DecodeError):
        return f"Could not decode response: {exc}"
    return f"OpenCitations request failed: {exc}"


class CitationToolset:
    """Binds the tool table to a client and an optional access token."""

    def __init__(self, client: OpenCitationsClient, access_token: Optional[str] = None) -> None:
        self.client = client
        self.access_token = access_token

    async def run(self, tool: LookupTool, identifier: str) -> str:
        lookup = getattr(self.client, tool.method)
        try:
            result = await lookup(identifier, self.access_token)
        except ClientError as exc:
            logger.warning("Tool %s failed for %r: %s", tool.name, identifier, exc)
            raise ToolError(describe_error(exc)) from exc
        return tool.render(identifier, result)

    async def citation_count(self, doi: DoiArg) -> str:
        return await self.run(TOOLS_BY_NAME["citation_count"], doi)

    async def get_citations(self, doi: DoiArg) -> str:
        return await self.run(TOOLS_BY_NAME["get_citations"], doi)

    async def reference_count(self, doi: DoiArg) -> str:
        return await self.run(TOOLS_BY_NAME["reference_count"], doi)

    async def get_references(self, doi: DoiArg) -> str:
        return await self.run(TOOLS_BY_NAME["get_references"], doi)

    async def get_citation(self, oci: OciArg) -> str:
        return await self.run(TOOLS_BY_NAME["get_citation"], oci)

    async def venue_citation_count(self, issn: IssnArg) -> str:
        return await self.run(TOOLS_BY_NAME["venue_citation_count"], issn)


def build_server(client: OpenCitationsClient, access_token: Optional[str] = None) -> FastMCP:
    """Create a FastMCP server with every OpenCitations tool registered."""

    toolset = CitationToolset(client, access_token)
    server = FastMCP(SERVER_NAME)
    for tool in TOOLS:
        server.add_tool(getattr(toolset, tool.name), name=tool.name, description=tool.description)
    return server


__all__ = ["CitationToolset", "LookupTool", "TOOLS", "build_server", "describe_error"]
