"""
Pytest configuration and shared fixtures for name_radar tests.

No test touches the network: HTTP goes through httpx.MockTransport, DNS
through FakeResolver and WHOIS through FakeWhoisClient.
"""

import os

import httpx
import pytest

# Keep a developer's real key out of provider selection
os.environ.setdefault("SERPAPI_KEY", "")


class FakeRdata:
    def __init__(self, text: str):
        self._text = text

    def to_text(self) -> str:
        return self._text


class FakeResolver:
    """
    Stand-in for dns.asyncresolver.Resolver.

    Args:
        answers: {(domain, rdtype): [addresses] or an exception instance}.
            Missing entries answer with no records.
    """

    def __init__(self, answers: dict | None = None):
        self.answers = answers or {}
        self.calls: list[tuple[str, str]] = []

    async def resolve(self, name, rdtype="A", raise_on_no_answer=True):
        self.calls.append((name, rdtype))
        answer = self.answers.get((name, rdtype), [])
        if isinstance(answer, Exception):
            raise answer
        return [FakeRdata(a) for a in answer]


class FakeWhoisClient:
    """
    Stand-in for PythonWhoisClient.

    Args:
        texts: {domain: raw text or an exception instance}
        default: Text returned for unknown domains
    """

    def __init__(self, texts: dict | None = None, default: str = "No match for domain"):
        self.texts = texts or {}
        self.default = default
        self.calls: list[str] = []

    async def lookup(self, domain: str, timeout: float = 15.0) -> str:
        self.calls.append(domain)
        text = self.texts.get(domain, self.default)
        if isinstance(text, Exception):
            raise text
        return text


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient over httpx.MockTransport; redirects are not followed by default."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=False)


@pytest.fixture
def fake_resolver():
    return FakeResolver()


@pytest.fixture
def fake_whois():
    return FakeWhoisClient()


@pytest.fixture
def tmp_cache(tmp_path):
    """AppCache in a temporary directory, closed after the test."""
    from name_radar.cache import AppCache

    cache = AppCache(tmp_path / "cache")
    yield cache
    cache.close()


@pytest.fixture
def make_resolver():
    """Factory: make_resolver({(domain, rdtype): answers})."""
    return FakeResolver


@pytest.fixture
def make_whois():
    """Factory: make_whois({domain: text}, default=...)."""
    return FakeWhoisClient


@pytest.fixture
def make_client():
    """Factory: make_client(handler) -> AsyncClient over MockTransport."""
    return mock_client
