from abc import ABC, abstractmethod
from typing import List

import httpx
from bs4 import BeautifulSoup

from app.config import SEARCH_PROVIDER
from app.schemas.studyplan import SearchResult
from app.utils.logger import logger

SEARCH_URL = "https://html.duckduckgo.com/html/"
RESULT_SELECTOR = "a.result__a"
MAX_RESULTS = 5

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


class SyllabusSearchProvider(ABC):

    @abstractmethod
    async def search(self, subject: str, exam_type: str = "") -> List[SearchResult]:
        """Best effort: returns an empty list instead of raising."""


class MockSearchProvider(SyllabusSearchProvider):
    """Canned links, no network access."""

    async def search(self, subject: str, exam_type: str = "") -> List[SearchResult]:
        prefix = f"{exam_type} {subject}".strip()
        return [
            SearchResult(title=f"{prefix} Syllabus - Official", link="#"),
            SearchResult(title=f"{prefix} Previous Year Papers", link="#"),
            SearchResult(title=f"{prefix} Study Materials", link="#"),
        ]


def parse_results(html: str) -> List[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results = []

    for anchor in soup.select(RESULT_SELECTOR):
        title = anchor.get_text(strip=True)
        link = anchor.get("href", "")
        if title and link:
            results.append(SearchResult(title=title, link=link))
        if len(results) >= MAX_RESULTS:
            break

    return results


class WebSearchProvider(SyllabusSearchProvider):
    """Scrapes a search engine's HTML results page."""

    def __init__(self, url: str = SEARCH_URL, timeout: float = 10):
        self.url = url
        self.timeout = timeout

    async def search(self, subject: str, exam_type: str = "") -> List[SearchResult]:
        query = f"{subject} syllabus {exam_type} exam weightage topics"
        logger.info(f"[SEARCH] Query: {query}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                resp = await client.get(
                    self.url,
                    params={"q": query},
                    headers={"User-Agent": USER_AGENT},
                )
            resp.raise_for_status()
            results = parse_results(resp.text)
        except Exception as e:
            logger.error(f"[SEARCH] Failed: {e}")
            return []

        logger.info(f"[SEARCH] Found {len(results)} results")
        return results


def build_search_provider(name: str = SEARCH_PROVIDER) -> SyllabusSearchProvider:
    if name == "web":
        return WebSearchProvider()
    if name != "mock":
        logger.warning(f"[SEARCH] Unknown provider '{name}', using mock")
    return MockSearchProvider()
