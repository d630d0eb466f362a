"""Unit tests for the web search tool."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from auraflow.tools import WebSearchTool

INSTANT_ANSWER = {
    "Heading": "Solar power",
    "AbstractText": "Solar power is the conversion of sunlight into electricity.",
    "AbstractURL": "https://en.wikipedia.org/wiki/Solar_power",
    "Results": [
        {"Text": "Official site - Solar energy agency", "FirstURL": "https://solar.example"},
    ],
    "RelatedTopics": [
        {"Text": "Photovoltaics - Converting light", "FirstURL": "https://duckduckgo.com/Photovoltaics"},
        {
            "Name": "Related",
            "Topics": [
                {"Text": "Solar panel - A device", "FirstURL": "https://duckduckgo.com/Solar_panel"},
            ],
        },
        {"FirstURL": "https://duckduckgo.com/no_text"},
    ],
}


def mock_client(payload=None, error=None):
    """Patch target for httpx.AsyncClient returning a canned response."""
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status = MagicMock()

    client = MagicMock()
    client.get = AsyncMock(side_effect=error, return_value=response)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


class TestParseResults:
    """Tests for WebSearchTool.parse_results."""

    def test_flattens_all_sections(self):
        results = WebSearchTool.parse_results(INSTANT_ANSWER, limit=10)

        assert [r["title"] for r in results] == ["Solar power", "Official site", "Photovoltaics", "Solar panel"]
        assert results[0]["url"] == "https://en.wikipedia.org/wiki/Solar_power"
        assert results[3]["snippet"] == "Solar panel - A device"

    def test_limit(self):
        assert len(WebSearchTool.parse_results(INSTANT_ANSWER, limit=2)) == 2

    def test_empty_payload(self):
        assert WebSearchTool.parse_results({}, limit=5) == []


@pytest.mark.asyncio
class TestWebSearchTool:
    """Tests for WebSearchTool.execute."""

    async def test_search(self):
        client = mock_client(INSTANT_ANSWER)
        with patch("auraflow.tools.web_search.httpx.AsyncClient", return_value=client):
            result = await WebSearchTool(region="uk-en").execute(query="solar power", maxResults=3)

        assert result.success
        assert len(result.data) == 3
        params = client.get.call_args.kwargs["params"]
        assert params["q"] == "solar power"
        assert params["format"] == "json"
        assert params["kl"] == "uk-en"

    async def test_empty_query(self):
        result = await WebSearchTool().execute(query="  ")

        assert not result.success
        assert "Query parameter is required" in result.error

    async def test_timeout(self):
        client = mock_client(error=httpx.ReadTimeout("timed out"))
        with patch("auraflow.tools.web_search.httpx.AsyncClient", return_value=client):
            result = await WebSearchTool(timeout=10).execute(query="solar")

        assert not result.success
        assert "timed out after 10 seconds" in result.error

    async def test_connection_error(self):
        client = mock_client(error=httpx.ConnectError("refused"))
        with patch("auraflow.tools.web_search.httpx.AsyncClient", return_value=client):
            result = await WebSearchTool().execute(query="solar")

        assert not result.success
        assert "Search request failed" in result.error
