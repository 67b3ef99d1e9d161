"""
Unit tests for the certificate-transparency collector.
"""

import asyncio
import json

import httpx

from name_radar.domain.models import FailureKind, Presence
from name_radar.sources.crt_sh import check_crt, parse_crt_body

CRT_ROWS = [
    {"common_name": "linkpulse.com", "name_value": "linkpulse.com", "min_cert_id": 1},
    {"common_name": "www.linkpulse.com", "name_value": "www.linkpulse.com", "min_cert_id": 2},
]


class TestParseCrtBody:
    """Parsing crt.sh bodies."""

    def test_entries(self):
        """JSON rows become entries."""
        evidence = parse_crt_body(json.dumps(CRT_ROWS))
        assert evidence.ok
        assert evidence.entry_count == 2
        assert evidence.outcome is Presence.PRESENT
        assert evidence.entries[0].common_name == "linkpulse.com"

    def test_empty_body(self):
        """Empty body is zero entries, not an error."""
        evidence = parse_crt_body("")
        assert evidence.ok
        assert evidence.entry_count == 0
        assert evidence.outcome is Presence.ABSENT

    def test_no_results_phrase(self):
        """The 'no results found' page is zero entries."""
        assert parse_crt_body("No results found").entry_count == 0

    def test_empty_list(self):
        """[] is zero entries."""
        assert parse_crt_body("[]").outcome is Presence.ABSENT

    def test_malformed_json(self):
        """Malformed JSON is zero entries and not fatal."""
        evidence = parse_crt_body("<html>oops")
        assert evidence.ok
        assert evidence.entry_count == 0
        assert evidence.failure is FailureKind.MALFORMED


class TestCheckCrt:
    """check_crt() over a mock transport."""

    def test_query_is_wildcard_prefixed(self, make_client):
        """The request asks for %domain as JSON."""
        seen = []

        def handler(request):
            seen.append(request.url)
            return httpx.Response(200, text=json.dumps(CRT_ROWS))

        async def run():
            async with make_client(handler) as client:
                return await check_crt("linkpulse.com", client)

        evidence = asyncio.run(run())
        assert evidence.entry_count == 2
        assert seen[0].params["q"] == "%linkpulse.com"
        assert seen[0].params["output"] == "json"

    def test_http_error_status(self, make_client):
        """Non-2xx responses are ok=False with the status."""

        async def run():
            async with make_client(lambda r: httpx.Response(502)) as client:
                return await check_crt("linkpulse.com", client)

        evidence = asyncio.run(run())
        assert not evidence.ok
        assert evidence.error == "HTTP 502"
        assert evidence.entry_count == 0

    def test_rate_limited(self, make_client):
        """429 is tagged as rate limiting."""

        async def run():
            async with make_client(lambda r: httpx.Response(429)) as client:
                return await check_crt("linkpulse.com", client)

        assert asyncio.run(run()).failure is FailureKind.RATE_LIMITED

    def test_transport_error(self, make_client):
        """Connection failures are ok=False."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async def run():
            async with make_client(handler) as client:
                return await check_crt("linkpulse.com", client)

        evidence = asyncio.run(run())
        assert not evidence.ok
        assert evidence.failure is FailureKind.TRANSPORT

    def test_cache(self, make_client, tmp_cache):
        """Successful results are served from the cache."""
        calls = []

        def handler(request):
            calls.append(request.url)
            return httpx.Response(200, text=json.dumps(CRT_ROWS))

        async def run():
            async with make_client(handler) as client:
                await check_crt("linkpulse.com", client, cache=tmp_cache)
                return await check_crt("linkpulse.com", client, cache=tmp_cache)

        assert asyncio.run(run()).entry_count == 2
        assert len(calls) == 1
