import asyncio

import pytest
import responses

import opencitations_mcp
from opencitations_mcp import api
from opencitations_mcp.providers.clients.base import NotFoundError

API = "https://api.opencitations.net/index/v2"


@pytest.fixture(autouse=True)
def _fresh_default_client(monkeypatch):
    monkeypatch.setattr(api, "_default_client", None)


def test_default_client_is_created_once():
    assert api.get_default_client() is api.get_default_client()


@responses.activate
def test_module_level_lookups_use_default_client():
    responses.add(responses.GET, f"{API}/citation-count/doi:10.1/x", json=[{"count": "5"}])
    responses.add(responses.GET, f"{API}/venue-citation-count/issn:0138-9130", json=[])
    responses.add(responses.GET, f"{API}/citation/1-2", json=[])
    responses.add(responses.GET, f"{API}/references/doi:10.1/x", json=[])

    assert asyncio.run(opencitations_mcp.get_citation_count("https://doi.org/10.1/x")) == 5
    assert asyncio.run(opencitations_mcp.get_venue_citation_count("0138-9130", "tok")) == 0
    assert asyncio.run(opencitations_mcp.get_citation("oci:1-2")) is None
    assert asyncio.run(opencitations_mcp.get_references("10.1/x")) == []
    assert responses.calls[1].request.headers["Authorization"] == "tok"


@responses.activate
def test_module_level_lookups_propagate_failures():
    responses.add(responses.GET, f"{API}/citations/doi:10.1/x", status=404)
    responses.add(responses.GET, f"{API}/reference-count/doi:10.1/x", status=404)

    with pytest.raises(NotFoundError):
        asyncio.run(opencitations_mcp.get_citations("10.1/x"))
    with pytest.raises(NotFoundError):
        asyncio.run(opencitations_mcp.get_reference_count("10.1/x"))
