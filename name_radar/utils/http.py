"""
HTTP client factory.

All outbound HTTP (search engines, page fetches, crt.sh, social probes) goes
through httpx.AsyncClient. Redirects are never followed automatically: page
fetching follows them per request, social probes must see the 3xx itself.
"""

import httpx

from name_radar.constants import DEFAULT_USER_AGENT, HTTP_TIMEOUT

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}


def create_client(
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = HTTP_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build the shared async client for one run.

    Args:
        user_agent: User-Agent header value
        timeout: Default timeout in seconds for every request
        transport: Optional transport override (httpx.MockTransport in tests)

    Returns:
        An httpx.AsyncClient; the caller owns it and must close it
    """
    return httpx.AsyncClient(
        headers={"User-Agent": user_agent, **BROWSER_HEADERS},
        timeout=httpx.Timeout(timeout),
        follow_redirects=False,
        transport=transport,
    )
