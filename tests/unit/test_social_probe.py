"""
Unit tests for the social platform probe collector.
"""

import asyncio

import httpx

from name_radar.domain.models import Confidence, FailureKind, Presence
from name_radar.sources.platforms import rules_for
from name_radar.sources.social_probe import (
    SocialProber,
    inspect_body,
    probe_social_handles,
    summarize_social_probes,
)


def _probe(make_client, handler, platform, username="linkpulse"):
    async def run():
        async with make_client(handler) as client:
            return await SocialProber(client, timeout=5).probe(platform, username)

    return asyncio.run(run())


class TestInspectBody:
    """Body marker checks on 200 responses."""

    def test_not_found_marker(self):
        """Soft-404 text means Absent."""
        outcome, _ = inspect_body(
            rules_for("instagram"), "<p>Sorry, this page isn't available.</p>", "linkpulse"
        )
        assert outcome is Presence.ABSENT

    def test_profile_marker(self):
        """Profile markers naming the handle mean Present."""
        outcome, _ = inspect_body(
            rules_for("instagram"), '{"username":"linkpulse"}', "LinkPulse"
        )
        assert outcome is Presence.PRESENT

    def test_no_markers(self):
        """Without markers a 200 proves nothing."""
        outcome, _ = inspect_body(rules_for("instagram"), "<html></html>", "linkpulse")
        assert outcome is Presence.UNKNOWN


class TestSocialProber:
    """Status-code and redirect decision table."""

    def test_404_is_absent(self, make_client):
        """404 is a confident Absent."""
        evidence = _probe(make_client, lambda r: httpx.Response(404), "github")
        assert evidence.outcome is Presence.ABSENT
        assert evidence.confidence is Confidence.HIGH
        assert evidence.status == "available"
        assert evidence.url == "https://github.com/linkpulse"

    def test_200_with_profile_marker(self, make_client):
        """200 plus a profile marker is Present."""
        body = '<meta property="profile:username" content="linkpulse" />'
        evidence = _probe(make_client, lambda r: httpx.Response(200, text=body), "github")
        assert evidence.outcome is Presence.PRESENT
        assert evidence.status == "taken"

    def test_200_without_markers_is_unknown(self, make_client):
        """A bare 200 is never treated as Present."""
        evidence = _probe(make_client, lambda r: httpx.Response(200, text="<html/>"), "github")
        assert evidence.outcome is Presence.UNKNOWN
        assert evidence.confidence is Confidence.NONE

    def test_rate_limited(self, make_client):
        """429 and LinkedIn's 999 are rate limiting."""
        evidence = _probe(make_client, lambda r: httpx.Response(999), "linkedin")
        assert evidence.outcome is Presence.UNKNOWN
        assert evidence.failure is FailureKind.RATE_LIMITED

    def test_forbidden(self, make_client):
        """403 is blocked."""
        evidence = _probe(make_client, lambda r: httpx.Response(403), "tiktok")
        assert evidence.failure is FailureKind.BLOCKED
        assert evidence.outcome is Presence.UNKNOWN

    def test_auth_wall_redirect(self, make_client):
        """Redirects to a login page are Unknown."""
        login = "https://www.instagram.com/accounts/login/?next=/linkpulse/"
        evidence = _probe(
            make_client, lambda r: httpx.Response(302, headers={"location": login}), "instagram"
        )
        assert evidence.outcome is Presence.UNKNOWN
        assert evidence.redirect_target == login

    def test_off_platform_redirect(self, make_client):
        """Redirects away from the platform are Unknown."""
        evidence = _probe(
            make_client,
            lambda r: httpx.Response(301, headers={"location": "https://example.com/"}),
            "github",
        )
        assert evidence.outcome is Presence.UNKNOWN

    def test_redirect_to_home_is_unknown(self, make_client):
        """A redirect to the platform root proves nothing."""
        evidence = _probe(
            make_client,
            lambda r: httpx.Response(302, headers={"location": "https://www.tiktok.com/"}),
            "tiktok",
        )
        assert evidence.outcome is Presence.UNKNOWN

    def test_redirect_within_platform_is_present(self, make_client):
        """A redirect to another profile path is a medium-confidence Present."""
        evidence = _probe(
            make_client,
            lambda r: httpx.Response(
                301, headers={"location": "https://www.linkedin.com/company/linkpulse-inc/"}
            ),
            "linkedin",
        )
        assert evidence.outcome is Presence.PRESENT
        assert evidence.confidence is Confidence.MEDIUM

    def test_same_handle_redirect_is_followed_once(self, make_client):
        """twitter.com -> x.com for the same handle is followed."""

        def handler(request):
            if request.url.host == "twitter.com":
                return httpx.Response(301, headers={"location": "https://x.com/linkpulse"})
            return httpx.Response(200, text='{"screen_name":"linkpulse"}')

        evidence = _probe(make_client, handler, "twitter")
        assert evidence.outcome is Presence.PRESENT
        assert evidence.url == "https://twitter.com/linkpulse"

    def test_redirect_loop_is_unknown(self, make_client):
        """A second redirect to the same handle is inconclusive."""
        evidence = _probe(
            make_client,
            lambda r: httpx.Response(301, headers={"location": "https://x.com/linkpulse"}),
            "twitter",
        )
        assert evidence.outcome is Presence.UNKNOWN
        assert evidence.confidence is Confidence.NONE

    def test_absent_only_when_every_url_absent(self, make_client):
        """One inconclusive URL keeps the platform Unknown."""

        def handler(request):
            if request.url.host == "twitter.com":
                return httpx.Response(404)
            return httpx.Response(200, text="<html/>")

        assert _probe(make_client, handler, "twitter").outcome is Presence.UNKNOWN

    def test_all_urls_absent(self, make_client):
        """Every URL 404 means Absent."""
        assert _probe(make_client, lambda r: httpx.Response(404), "twitter").outcome is (
            Presence.ABSENT
        )

    def test_facebook_zero_user_id(self, make_client):
        """Facebook's userID 0 page is Absent."""
        evidence = _probe(
            make_client, lambda r: httpx.Response(200, text='{"userID":"0"}'), "facebook"
        )
        assert evidence.outcome is Presence.ABSENT

    def test_transport_error(self, make_client):
        """Network errors are Unknown with a transport failure."""

        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        evidence = _probe(make_client, handler, "github")
        assert evidence.outcome is Presence.UNKNOWN
        assert evidence.failure is FailureKind.TRANSPORT

    def test_unprobed_platform(self, make_client):
        """Platforms without profile URLs return Unknown without a request."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        evidence = _probe(make_client, handler, "medium")
        assert evidence.outcome is Presence.UNKNOWN
        assert calls == []


class TestProbeSocialHandles:
    """Probing several platforms."""

    def test_results_in_platform_order(self, make_client):
        """Each platform is probed once, in order."""
        hosts = []

        def handler(request):
            hosts.append(request.url.host)
            return httpx.Response(404)

        async def run():
            async with make_client(handler) as client:
                return await probe_social_handles(
                    SocialProber(client), "linkpulse", ("github", "tiktok")
                )

        results = asyncio.run(run())
        assert list(results) == ["github", "tiktok"]
        assert hosts == ["github.com", "www.tiktok.com"]

    def test_summary(self, make_client):
        """Summary counts taken, available and unknown."""

        def handler(request):
            if request.url.host == "github.com":
                return httpx.Response(404)
            return httpx.Response(403)

        async def run():
            async with make_client(handler) as client:
                return await probe_social_handles(
                    SocialProber(client), "linkpulse", ("github", "tiktok")
                )

        summary = summarize_social_probes(asyncio.run(run()))
        assert summary["total"] == 2
        assert summary["available"] == 1
        assert summary["unknown"] == 1
        assert summary["platforms"] == {"github": "available", "tiktok": "unknown"}
