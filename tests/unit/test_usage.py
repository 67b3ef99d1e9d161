"""
End-to-end tests for the usage pipeline with fake network collaborators.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx

from name_radar.config import RateLimits, RunConfig
from name_radar.consensus.usage import (
    UsagePipeline,
    check_names,
    merge_social_probes,
    should_probe,
)
from name_radar.domain.candidates import build_candidate_domains
from name_radar.domain.models import (
    MatchType,
    Origin,
    Presence,
    Record,
    SocialProbeEvidence,
    UsageVerdict,
)
from name_radar.scoring.brand import calculate_brand_score

FAST = RateLimits(whois=1000, dns=1000, crt=1000, page=1000, search=1000, social=1000)

MISSING_PROFILE_SITES = ("facebook", "youtube", "twitter", "x", "tiktok", "linkedin", "github")

SEARCH_URLS = [
    "https://linkpulse.com/",
    "https://instagram.com/linkpulse/",
    "https://blog.example.org/post",
    "https://linkpulsehq.com/",
]


class FakeProvider:
    name = "fake"

    def __init__(self, urls):
        self.urls = urls

    async def search(self, query, max_results):
        return self.urls[:max_results]


def web_handler(request):
    host = request.url.host
    if host == "crt.sh":
        if request.url.params.get("q") == "%linkpulse.com":
            return httpx.Response(200, json=[{"common_name": "linkpulse.com"}])
        return httpx.Response(200, text="[]")
    if host.endswith("instagram.com"):
        return httpx.Response(200, text='<script>{"username":"linkpulse"}</script>')
    if host.split(".")[-2] in MISSING_PROFILE_SITES:
        return httpx.Response(404)
    return httpx.Response(200, text="<title>Some page</title>")


def run_pipeline(make_client, make_resolver, make_whois, name="LinkPulse", **config):
    resolver = make_resolver({("linkpulse.com", "A"): ["1.2.3.4"]})
    whois = make_whois({"linkpulse.com": "Registrar: Example"})

    async def run():
        async with make_client(web_handler) as client:
            pipeline = UsagePipeline(
                RunConfig(rate_limits=FAST, concurrency=4, **config),
                client,
                resolver,
                whois,
                [FakeProvider(SEARCH_URLS)],
            )
            return await pipeline.find_name_usage(name)

    return asyncio.run(run()), whois


def by_key(verdict):
    return {r.dedup_key: r for r in verdict.records}


class TestFindNameUsage:
    """find_name_usage() end to end."""

    def test_records(self, make_client, make_resolver, make_whois):
        """Probe and search records are merged, enriched and tagged."""
        verdict, whois = run_pipeline(make_client, make_resolver, make_whois)
        records = by_key(verdict)

        # every candidate, the Instagram profile and the containing domain
        assert len(records) == len(build_candidate_domains("LinkPulse")) + 2
        assert "example.org" not in records

        com = records["linkpulse.com"]
        assert com.origin is Origin.PROBE
        assert com.usage_sources == ("WHOIS", "DNS", "crt.sh", "domain_present", "probe_hit")

        hq = records["linkpulsehq.com"]
        assert hq.match_type is MatchType.DOMAIN_CONTAINS
        assert hq.whois is not None
        assert hq.usage_sources == ("domain_present", "search_hit")

        # Each domain is looked up once
        assert whois.calls.count("linkpulse.com") == 1
        assert whois.calls.count("linkpulsehq.com") == 1

    def test_social_probe_attached_to_search_record(self, make_client, make_resolver, make_whois):
        """A probe for an already-found handle enriches that record."""
        verdict, _ = run_pipeline(make_client, make_resolver, make_whois)
        instagram = by_key(verdict)["instagram:linkpulse"]
        assert instagram.origin is Origin.SEARCH
        assert instagram.social_probe.outcome is Presence.PRESENT
        assert verdict.social_probes["github"].outcome is Presence.ABSENT
        assert instagram.usage_sources == ("social", "search_hit")

    def test_absent_probes_dropped_when_only_found(self, make_client, make_resolver, make_whois):
        """Absent social probes add no records by default."""
        verdict, _ = run_pipeline(make_client, make_resolver, make_whois)
        assert not any(r.origin is Origin.SOCIAL_PROBE for r in verdict.records)

    def test_show_candidates_keeps_probe_records(self, make_client, make_resolver, make_whois):
        """With only_found off, unconfirmed social probes are reported."""
        verdict, _ = run_pipeline(make_client, make_resolver, make_whois, only_found=False)
        probe_records = [r for r in verdict.records if r.origin is Origin.SOCIAL_PROBE]
        assert {r.social_platform for r in probe_records} == {
            "facebook",
            "youtube",
            "twitter",
            "tiktok",
            "linkedin",
            "github",
        }
        assert all(r.match_type is MatchType.SOCIAL_PROBE for r in probe_records)
        assert all(r.match_score == 0 for r in probe_records)

    def test_probe_off(self, make_client, make_resolver, make_whois):
        """probe_mode off only enriches search records."""
        verdict, whois = run_pipeline(
            make_client, make_resolver, make_whois, probe_mode="off", social_probe_enabled=False
        )
        assert not any(r.origin is Origin.PROBE for r in verdict.records)
        assert sorted(whois.calls) == ["instagram.com", "linkpulse.com", "linkpulsehq.com"]
        assert by_key(verdict)["linkpulse.com"].origin is Origin.SEARCH
        assert verdict.social_probes == {}

    def test_strict(self, make_client, make_resolver, make_whois):
        """strict drops non-exact matches."""
        verdict, _ = run_pipeline(make_client, make_resolver, make_whois, strict=True)
        assert "linkpulsehq.com" not in by_key(verdict)

    def test_validation_metadata(self, make_client, make_resolver, make_whois):
        """Validation results ride along with the verdict."""
        verdict, _ = run_pipeline(
            make_client, make_resolver, make_whois, name="PT LinkPulse", probe_mode="off"
        )
        assert verdict.metadata["entity_type"] == "PT"
        assert verdict.metadata["validation"].warnings

    def test_brand_score_from_verdict(self, make_client, make_resolver, make_whois):
        """Only .com is taken among the critical TLDs."""
        verdict, _ = run_pipeline(make_client, make_resolver, make_whois)
        score = calculate_brand_score(verdict.name, verdict.records)
        assert score.breakdown["domain_availability"].score == 80
        # Instagram is taken, the other critical platforms are free
        assert score.breakdown["social_media_availability"].score == 75


class TestShouldProbe:
    """Probe mode decisions."""

    def test_modes(self):
        """off never probes; auto needs a valid label; always needs a base."""
        assert not should_probe("LinkPulse", "off")
        assert should_probe("LinkPulse", "auto")
        assert not should_probe("a" * 64, "auto")
        assert should_probe("a" * 64, "always")
        assert not should_probe("!!!", "always")


class TestMergeSocialProbes:
    """Folding probe results into records."""

    def test_present_probe_creates_social_exact(self):
        """A Present profile with no matching record becomes social_exact."""
        probes = {
            "tiktok": SocialProbeEvidence(
                outcome=Presence.PRESENT,
                platform="tiktok",
                username="linkpulse",
                url="https://www.tiktok.com/@linkpulse",
            )
        }
        merged = merge_social_probes([], probes, "linkpulse")
        assert len(merged) == 1
        assert merged[0].origin is Origin.SOCIAL_PROBE
        assert merged[0].match_type is MatchType.SOCIAL_EXACT
        assert merged[0].match_score == 90
        assert merged[0].url == "https://www.tiktok.com/@linkpulse"

    def test_attach_is_case_insensitive(self):
        """Existing records match the handle case-insensitively."""
        record = Record(
            url="https://instagram.com/LinkPulse",
            origin=Origin.SEARCH,
            match_type=MatchType.SOCIAL_EXACT,
            match_score=90,
            social_platform="instagram",
            social_username="LinkPulse",
        )
        probe = SocialProbeEvidence(outcome=Presence.ABSENT, platform="instagram")
        merged = merge_social_probes([record], {"instagram": probe}, "linkpulse")
        assert merged == [record]
        assert record.social_probe is probe


class TestCheckNames:
    """Sequential batch runner."""

    def test_failure_does_not_stop_batch(self):
        """A failing name is recorded and the next one still runs."""
        ok = UsageVerdict(name="LinkPulse", records=())
        pipeline = MagicMock()
        pipeline.find_name_usage = AsyncMock(side_effect=[RuntimeError("boom"), ok])
        seen = []

        result = asyncio.run(check_names(pipeline, ["Broken", "LinkPulse"], on_verdict=seen.append))

        assert result.failures == {"Broken": "boom"}
        assert result.verdicts == [ok]
        assert seen == [ok]
        pipeline.stats.increment.assert_called_with("failed_names")

    def test_report_failure_does_not_stop_batch(self):
        """A callback error for one name is contained to that name."""
        first = UsageVerdict(name="alpha", records=())
        second = UsageVerdict(name="beta", records=())
        pipeline = MagicMock()
        pipeline.find_name_usage = AsyncMock(side_effect=[first, second])
        seen = []

        def on_verdict(verdict):
            if verdict.name == "alpha":
                raise OSError("disk full")
            seen.append(verdict)

        result = asyncio.run(check_names(pipeline, ["alpha", "beta"], on_verdict=on_verdict))

        assert result.failures == {"alpha": "disk full"}
        assert seen == [second]
