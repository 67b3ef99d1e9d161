"""
Page fetching and title/snippet extraction.
"""

import logging
import re
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from name_radar.constants import SNIPPET_MAX_WORDS
from name_radar.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class PageSummary:
    title: str | None
    snippet: str | None


def _first_words(text: str, max_words: int) -> str:
    return " ".join(_WHITESPACE.sub(" ", text).strip().split(" ")[:max_words])


def extract_title_and_snippet(html: str | None, max_words: int = SNIPPET_MAX_WORDS) -> PageSummary:
    """
    Pull a title and a short snippet out of an HTML page.

    The snippet is the meta description (or og:description); failing that,
    the first paragraphs up to max_words; failing that, the body text.
    """
    if not html:
        return PageSummary(title=None, snippet=None)

    soup = BeautifulSoup(html, "html.parser")
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    meta = soup.find("meta", attrs={"name": "description"}) or soup.find(
        "meta", attrs={"property": "og:description"}
    )
    snippet = (meta.get("content") or "") if meta else ""

    if not snippet:
        texts: list[str] = []
        for paragraph in soup.find_all("p"):
            text = paragraph.get_text().strip()
            if text:
                texts.append(text)
            if len(" ".join(texts).split()) >= max_words:
                break
        snippet = " ".join(texts)
        if not snippet and soup.body:
            snippet = soup.body.get_text(" ")

    snippet = _first_words(snippet, max_words)
    return PageSummary(title=title or None, snippet=snippet or None)


async def fetch_page(
    client: httpx.AsyncClient,
    url: str,
    limiter: RateLimiter | None = None,
) -> str | None:
    """
    Fetch a page body, following redirects.

    Returns:
        HTML text, or None on any HTTP error or non-2xx status
    """
    try:
        if limiter is not None:
            await limiter()
        response = await client.get(url, follow_redirects=True)
    except httpx.HTTPError as e:
        logger.debug(f"Fetch failed for {url}: {e}")
        return None
    if not response.is_success:
        logger.debug(f"Fetch {url}: HTTP {response.status_code}")
        return None
    return response.text


async def fetch_summary(
    client: httpx.AsyncClient,
    url: str,
    limiter: RateLimiter | None = None,
) -> PageSummary | None:
    """Page fetcher contract: resolve a URL to a title/snippet, or None."""
    html = await fetch_page(client, url, limiter)
    if html is None:
        return None
    return extract_title_and_snippet(html)
