"""
Search providers.

Every provider satisfies one contract, ``async search(query, max_results) ->
list[str]``: an ordered, capped, de-duplicated list of result URLs. Providers
may raise; search_urls_for_name() tries them in priority order and returns
the first non-empty result.
"""

import logging
from urllib.parse import parse_qs, urlsplit

import httpx
from bs4 import BeautifulSoup

from name_radar.constants import (
    BING_MAX_PAGES,
    BING_PAGE_SIZE,
    BING_SEARCH_URL,
    DDG_SEARCH_URL,
    SERPAPI_MAX_RESULTS,
    SERPAPI_URL,
)
from name_radar.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)


def _unique(urls: list[str], limit: int) -> list[str]:
    return list(dict.fromkeys(urls))[:limit]


def build_query(name: str) -> str:
    """Query that favors pages titled, addressed or quoting the name."""
    return f'intitle:"{name}" OR inurl:{name} OR "{name}"'


class SerpApiSearch:
    """Google results through SerpApi. The API key is injected, never read from the environment."""

    name = "serpapi"

    def __init__(self, client: httpx.AsyncClient, api_key: str):
        if not api_key:
            raise ValueError("SerpApi requires an api_key")
        self.client = client
        self.api_key = api_key

    async def search(self, query: str, max_results: int) -> list[str]:
        response = await self.client.get(
            SERPAPI_URL,
            params={
                "engine": "google",
                "q": query,
                "api_key": self.api_key,
                "num": str(min(max_results, SERPAPI_MAX_RESULTS)),
            },
        )
        response.raise_for_status()
        payload = response.json()
        urls = []
        for item in payload.get("organic_results") or []:
            link = item.get("link") or item.get("url")
            if link:
                urls.append(link)
        return _unique(urls, max_results)


class BingSearch:
    """Scrapes Bing's HTML results, up to three pages."""

    name = "bing"

    def __init__(self, client: httpx.AsyncClient, limiter: RateLimiter | None = None):
        self.client = client
        self.limiter = limiter

    async def search(self, query: str, max_results: int) -> list[str]:
        take = min(max_results, BING_PAGE_SIZE)
        urls: list[str] = []
        first = 0
        for _ in range(BING_MAX_PAGES):
            if len(urls) >= max_results:
                break
            if self.limiter is not None:
                await self.limiter()
            response = await self.client.get(
                BING_SEARCH_URL,
                params={"q": query, "count": str(take), "first": str(first)},
                follow_redirects=True,
            )
            if not response.is_success:
                break
            urls.extend(parse_bing_results(response.text))
            first += take
        return _unique(urls, max_results)


def parse_bing_results(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    urls = []
    for item in soup.select("li.b_algo, .b_algo, ol#b_results > li"):
        link = item.select_one("h2 a") or item.select_one('a[href^="http"]')
        href = link.get("href") if link else None
        if href and href.startswith("http"):
            urls.append(href)
    return urls


class DuckDuckGoSearch:
    """Scrapes DuckDuckGo's no-JavaScript HTML endpoint."""

    name = "ddg"

    def __init__(self, client: httpx.AsyncClient, limiter: RateLimiter | None = None):
        self.client = client
        self.limiter = limiter

    async def search(self, query: str, max_results: int) -> list[str]:
        if self.limiter is not None:
            await self.limiter()
        response = await self.client.get(
            DDG_SEARCH_URL,
            params={"q": query, "s": "0"},
            follow_redirects=True,
        )
        if not response.is_success:
            return []
        return _unique(parse_ddg_results(response.text), max_results)


def _unwrap_ddg_link(href: str) -> str:
    # Result links are often //duckduckgo.com/l/?uddg=<encoded target>
    if "uddg=" in href:
        target = parse_qs(urlsplit(href).query).get("uddg")
        if target:
            return target[0]
    return href


def parse_ddg_results(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    urls = []
    for link in soup.select("a.result__a, a.result__url, div.result h2 a"):
        href = _unwrap_ddg_link(link.get("href") or "")
        if href.startswith("http"):
            urls.append(href)
    return urls


def build_providers(
    engine: str,
    client: httpx.AsyncClient,
    serpapi_key: str | None = None,
    limiter: RateLimiter | None = None,
) -> list:
    """
    Providers to try, in priority order.

    auto: SerpApi (only with a key), Bing, DuckDuckGo
    multi: Bing, DuckDuckGo
    serpapi / bing / ddg: that provider only (serpapi without a key yields none)
    """
    providers: list = []
    if engine in ("auto", "serpapi") and serpapi_key:
        providers.append(SerpApiSearch(client, serpapi_key))
    if engine in ("auto", "multi", "bing"):
        providers.append(BingSearch(client, limiter))
    if engine in ("auto", "multi", "ddg"):
        providers.append(DuckDuckGoSearch(client, limiter))
    if not providers:
        logger.warning(f"No search provider available for engine={engine!r}")
    return providers


async def search_urls_for_name(name: str, providers: list, limit: int) -> list[str]:
    """
    Search for a name, falling through providers until one returns results.

    Provider errors are logged and skipped.

    Returns:
        Up to limit URLs, possibly empty
    """
    query = build_query(name)
    for provider in providers:
        try:
            urls = await provider.search(query, limit)
        except Exception as e:
            logger.warning(f"Search via {provider.name} failed for {name!r}: {e}")
            continue
        logger.debug(f"{provider.name} returned {len(urls)} URL(s) for {name!r}")
        if urls:
            return urls[:limit]
    return []
