"""
Wikipedia API Integration

Provides the table of contents of an English Wikipedia article through the
MediaWiki parse API.

API Documentation: https://www.mediawiki.org/wiki/API:Parsing_wikitext

Request:
    /w/api.php?action=parse&page=<title>&prop=sections&format=json

Response (abridged):
    {"parse": {"title": "Ephemerality", "sections": [
        {"toclevel": 1, "level": "2", "line": "Etymology", "number": "1",
         "index": "1", "anchor": "Etymology"}
    ]}}

A page that does not exist is answered with HTTP 200 and an ``error`` object
(code ``missingtitle``); that is an empty table of contents.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

from word_explorer.infrastructure.sources.base_client import DEFAULT_TIMEOUT, BaseAPIClient
from word_explorer.models import SourceAttribution, SourceTag, WikiTocItem

logger = logging.getLogger(__name__)

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
WIKIPEDIA_PAGE_BASE = "https://en.wikipedia.org/wiki"


def page_url(title: str) -> str:
    """Public URL of a Wikipedia page."""
    return f"{WIKIPEDIA_PAGE_BASE}/{urllib.parse.quote(title.replace(' ', '_'))}"


class WikipediaClient(BaseAPIClient):
    """
    Wikipedia (MediaWiki) API client.

    Usage:
        client = WikipediaClient()
        toc = await client.fetch_toc("ephemeral")
    """

    _service_name = "Wikipedia"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int | None = None,
    ):
        super().__init__(timeout=timeout, max_retries=max_retries)

    async def fetch_toc(self, title: str) -> list[WikiTocItem]:
        """
        Fetch the table of contents for a page.

        Args:
            title: Page title (the normalized search term)

        Returns:
            Sections in page order; empty when the page is missing or the call failed
        """
        params = {
            "action": "parse",
            "page": title,
            "prop": "sections",
            "format": "json",
            "redirects": 1,
        }
        data = await self._make_request(WIKIPEDIA_API_URL, params=params)

        if not isinstance(data, dict):
            return []
        if "error" in data:
            error = data["error"]
            code = error.get("code", "error") if isinstance(error, dict) else error
            logger.debug(f"Wikipedia: {code} for {title!r}")
            return []

        parsed = data.get("parse")
        sections = parsed.get("sections") if isinstance(parsed, dict) else None
        if not isinstance(sections, list):
            return []

        return self.parse_sections(sections, page_url(title))

    @staticmethod
    def parse_sections(sections: list[Any], url: str) -> list[WikiTocItem]:
        """Convert MediaWiki section records into table-of-contents items."""
        items: list[WikiTocItem] = []
        for section in sections:
            if not isinstance(section, dict) or not isinstance(section.get("line"), str):
                logger.debug(f"Wikipedia: skipping malformed section {section!r}")
                continue
            anchor = section.get("anchor")
            try:
                items.append(
                    WikiTocItem(
                        index=str(section["index"]),
                        title=section["line"],
                        # toclevel is 1-based; "level" is the HTML heading (h2 = top)
                        level=max(1, int(section.get("toclevel") or int(section["level"]) - 1)),
                        anchor=anchor if isinstance(anchor, str) and anchor else None,
                        attribution=SourceAttribution.now(SourceTag.WIKIPEDIA, url),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Wikipedia: skipping malformed section ({e!r})")
        return items
