"""
Unit tests for record filtering, deduplication and provenance.
"""

import pytest

from name_radar.consensus.aggregation import (
    aggregate_records,
    allowed_match_types,
    dedupe_records,
    filter_records,
)
from name_radar.consensus.provenance import apply_provenance, usage_sources
from name_radar.domain.models import (
    CrtEntry,
    CrtEvidence,
    DnsEvidence,
    MatchType,
    Origin,
    Record,
    WhoisEvidence,
)
from name_radar.matching.classifier import MATCH_SCORES


def make_record(match_type, origin=Origin.SEARCH, **kwargs):
    kwargs.setdefault("url", f"https://{kwargs.get('domain') or 'example.com'}/")
    return Record(
        origin=origin,
        match_type=match_type,
        match_score=MATCH_SCORES[match_type],
        **kwargs,
    )


class TestFilter:
    """Match-type filtering policy."""

    def test_default_drops_mentions(self):
        """Mentions are dropped unless allowed."""
        records = [
            make_record(MatchType.MENTION, domain="news.com"),
            make_record(MatchType.DOMAIN_CONTAINS, domain="linkpulsehq.com"),
        ]
        assert [r.domain for r in filter_records(records)] == ["linkpulsehq.com"]

    def test_allow_mentions(self):
        """allow_mentions keeps mentions."""
        records = [make_record(MatchType.MENTION, domain="news.com")]
        assert len(filter_records(records, allow_mentions=True)) == 1

    def test_strict_keeps_only_exact(self):
        """strict keeps the three exact types, even with mentions allowed."""
        assert allowed_match_types(strict=True, allow_mentions=True) == {
            MatchType.EXACT_DOMAIN,
            MatchType.SOCIAL_EXACT,
            MatchType.ORG_TITLE_EXACT,
        }

    def test_non_strict_keeps_six_types(self):
        """Default policy keeps every non-mention classifier type."""
        allowed = allowed_match_types()
        assert len(allowed) == 6
        assert MatchType.MENTION not in allowed


class TestDedupe:
    """Deduplication and tie-break."""

    def test_keeps_highest_score_per_key(self):
        """The retained record per key has the maximum score."""
        low = make_record(MatchType.DOMAIN_CONTAINS, domain="linkpulse.com")
        high = make_record(MatchType.EXACT_DOMAIN, domain="linkpulse.com")
        survivors = dedupe_records([low, high])
        assert survivors == [high]

    def test_keys_are_unique(self):
        """No two survivors share a key."""
        records = [
            make_record(MatchType.EXACT_DOMAIN, domain="LinkPulse.com"),
            make_record(MatchType.EXACT_DOMAIN, domain="linkpulse.com"),
            make_record(MatchType.DOMAIN_CONTAINS, domain="linkpulse.io"),
        ]
        keys = [r.dedup_key for r in dedupe_records(records)]
        assert len(keys) == len(set(keys)) == 2

    def test_social_key_is_platform_and_username(self):
        """Social matches dedupe on platform:username, case-insensitively."""
        a = make_record(
            MatchType.SOCIAL_EXACT,
            url="https://instagram.com/LinkPulse",
            social_platform="instagram",
            social_username="LinkPulse",
        )
        b = make_record(
            MatchType.SOCIAL_EXACT,
            url="https://www.instagram.com/linkpulse/",
            social_platform="instagram",
            social_username="linkpulse",
        )
        assert a.dedup_key == "instagram:linkpulse"
        assert dedupe_records([a, b]) == [a]

    def test_equal_scores_keep_first(self):
        """On equal scores the earlier record wins."""
        probe = make_record(MatchType.EXACT_DOMAIN, Origin.PROBE, domain="linkpulse.com")
        search = make_record(MatchType.EXACT_DOMAIN, domain="linkpulse.com")
        assert dedupe_records([probe, search])[0] is probe

    def test_sorted_by_score(self):
        """Survivors come out highest score first."""
        records = [
            make_record(MatchType.ORG_TITLE_CONTAINS, domain="a.com"),
            make_record(MatchType.EXACT_DOMAIN, domain="b.com"),
            make_record(MatchType.SOCIAL_CONTAINS, domain="c.com"),
        ]
        assert [r.match_score for r in dedupe_records(records)] == [100, 70, 60]

    def test_aggregate(self):
        """Probe and search records are merged, filtered and deduped."""
        probe = [make_record(MatchType.EXACT_DOMAIN, Origin.PROBE, domain="linkpulse.com")]
        search = [
            make_record(MatchType.EXACT_DOMAIN, domain="linkpulse.com"),
            make_record(MatchType.MENTION, domain="blog.com"),
        ]
        result = aggregate_records(probe, search)
        assert result == probe


class TestProvenance:
    """Provenance tags."""

    def test_tags_in_order(self):
        """Evidence tags come before match and origin tags."""
        record = make_record(
            MatchType.EXACT_DOMAIN,
            domain="linkpulse.com",
            whois=WhoisEvidence(ok=True, likely_available=False),
            dns=DnsEvidence(resolves=True),
            crt=CrtEvidence(ok=True, entries=(CrtEntry(common_name="linkpulse.com"),)),
        )
        assert usage_sources(record) == ["WHOIS", "DNS", "crt.sh", "domain_present", "search_hit"]

    def test_available_whois_is_not_a_tag(self):
        """A likely-available WHOIS answer is not usage evidence."""
        record = make_record(
            MatchType.EXACT_DOMAIN,
            Origin.PROBE,
            domain="free.io",
            whois=WhoisEvidence(ok=True, likely_available=True),
        )
        assert usage_sources(record) == ["domain_present", "probe_hit"]

    def test_failed_whois_is_not_a_tag(self):
        """A failed lookup proves nothing."""
        record = make_record(MatchType.DOMAIN_CONTAINS, whois=WhoisEvidence(ok=False, error="x"))
        assert "WHOIS" not in usage_sources(record)

    @pytest.mark.parametrize(
        "match_type,tag",
        [
            (MatchType.SOCIAL_EXACT, "social"),
            (MatchType.SOCIAL_CONTAINS, "social"),
            (MatchType.ORG_TITLE_EXACT, "org_title"),
            (MatchType.ORG_TITLE_CONTAINS, "org_title"),
        ],
    )
    def test_match_tags(self, match_type, tag):
        """Social and org-title matches are tagged."""
        assert tag in usage_sources(make_record(match_type))

    def test_social_probe_origin_has_no_origin_tag(self):
        """Unconfirmed social-probe records carry no tags at all."""
        record = make_record(MatchType.SOCIAL_PROBE, Origin.SOCIAL_PROBE)
        assert usage_sources(record) == []

    def test_only_found_drops_untagged(self):
        """only_found removes records with no tags; otherwise all are kept."""
        tagged = make_record(MatchType.EXACT_DOMAIN, domain="a.com")
        untagged = make_record(MatchType.SOCIAL_PROBE, Origin.SOCIAL_PROBE)
        assert apply_provenance([tagged, untagged]) == [tagged]
        assert tagged.usage_sources == ("domain_present", "search_hit")
        assert tagged.in_use

        kept = apply_provenance([make_record(MatchType.SOCIAL_PROBE, Origin.SOCIAL_PROBE)], False)
        assert len(kept) == 1
        assert not kept[0].in_use
