"""Web search tool for AuraFlow.

Searches the DuckDuckGo Instant Answer API over HTTPS.
"""

from typing import Any, Optional

import httpx

from .result import ToolResult

SEARCH_URL = "https://api.duckduckgo.com/"


class WebSearchTool:
    """Tool for searching the web for current information.

    Returns a list of ``{title, url, snippet}`` results. Uses a 10-second
    timeout with 1 retry.
    """

    def __init__(self, max_results: int = 5, region: str = "us-en", timeout: float = 10.0) -> None:
        self.max_results = max_results
        self.region = region
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "web_search"

    @property
    def description(self) -> str:
        return "Search the web for current information and news. Returns relevant search results with sources."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The search query to execute",
                },
                "maxResults": {
                    "type": "number",
                    "description": f"Maximum number of results to return (default: {self.max_results})",
                },
            },
            "required": ["query"],
        }

    async def execute(self, **kwargs) -> ToolResult:
        """Run a web search.

        Args:
            query: Search query
            maxResults: Maximum number of results

        Returns:
            ToolResult with a list of results or an error
        """
        query = (kwargs.get("query") or "").strip()
        if not query:
            return ToolResult.failure("Query parameter is required")

        limit = self._coerce_limit(kwargs.get("maxResults"))
        transport = httpx.AsyncHTTPTransport(retries=1)

        try:
            async with httpx.AsyncClient(transport=transport, timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(
                    SEARCH_URL,
                    params={
                        "q": query,
                        "format": "json",
                        "no_html": "1",
                        "skip_disambig": "1",
                        "kl": self.region,
                    },
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException:
            return ToolResult.failure(f"Search timed out after {self.timeout:g} seconds")
        except httpx.HTTPStatusError as e:
            return ToolResult.failure(f"HTTP error {e.response.status_code}: {e.response.reason_phrase}")
        except httpx.HTTPError as e:
            return ToolResult.failure(f"Search request failed: {e}")
        except ValueError:
            return ToolResult.failure("Search returned a malformed response")

        return ToolResult(success=True, data=self.parse_results(payload, limit))

    def _coerce_limit(self, value: Optional[Any]) -> int:
        try:
            limit = int(value) if value is not None else self.max_results
        except (TypeError, ValueError):
            limit = self.max_results
        return max(1, limit)

    @staticmethod
    def parse_results(payload: dict[str, Any], limit: int) -> list[dict[str, str]]:
        """Flatten an Instant Answer payload into search results.

        Args:
            payload: Decoded API response
            limit: Maximum number of results

        Returns:
            List of result dictionaries
        """
        results: list[dict[str, str]] = []

        if payload.get("AbstractText"):
            results.append(
                {
                    "title": payload.get("Heading", ""),
                    "url": payload.get("AbstractURL", ""),
                    "snippet": payload["AbstractText"],
                }
            )

        def add_topics(topics: list[dict[str, Any]]) -> None:
            for topic in topics:
                if "Topics" in topic:
                    # Category group
                    add_topics(topic["Topics"])
                elif topic.get("Text"):
                    results.append(
                        {
                            "title": topic["Text"].split(" - ")[0],
                            "url": topic.get("FirstURL", ""),
                            "snippet": topic["Text"],
                        }
                    )

        add_topics(payload.get("Results", []))
        add_topics(payload.get("RelatedTopics", []))
        return results[:limit]
