"""
Brand-viability scoring.

Rolls a name's surviving records into five weighted categories:

    domain_availability        30  critical TLDs free of DNS / crt.sh / WHOIS evidence
    social_media_availability  25  critical platforms with no verified or search-found profile
    trademark_risk             20  exact and org-title matches (inverted: higher is safer)
    seo_friendly               15  name shape, see name_quality.seo_score
    memorability               10  see name_quality.memorability_score

The weights and bucket thresholds are fixed; reports and tests depend on
their exact values.
"""

import math
from collections.abc import Iterable, Sequence

from name_radar.constants import CRITICAL_PLATFORMS, CRITICAL_TLDS, SCORING_WEIGHTS
from name_radar.domain.models import (
    BrandScore,
    CategoryScore,
    Grade,
    Origin,
    Presence,
    Recommendation,
    Record,
)
from name_radar.scoring.name_quality import memorability_score, seo_score

GRADE_THRESHOLDS = (
    (90, Grade.A_PLUS),
    (80, Grade.A),
    (70, Grade.B),
    (60, Grade.C),
    (50, Grade.D),
)


def grade_for(overall: int) -> Grade:
    """Map an overall score to its grade; lower bounds are inclusive."""
    for threshold, grade in GRADE_THRESHOLDS:
        if overall >= threshold:
            return grade
    return Grade.F


def _tld_taken(records: Sequence[Record], tld: str) -> bool:
    return any(
        r.match_type.is_domain
        and r.tld == tld
        and (r.resolves or r.crt_count > 0 or r.whois_taken)
        for r in records
    )


def domain_score(records: Sequence[Record], critical_tlds: Sequence[str] = CRITICAL_TLDS) -> dict:
    """
    Score availability of the critical TLDs.

    A TLD is taken when any domain record under it resolves, has logged
    certificates, or has a WHOIS answer that does not look available.
    """
    total = len(critical_tlds)
    available = sum(1 for tld in critical_tlds if not _tld_taken(records, tld))

    if available == total:
        score, status = 100, "All critical domains available"
    elif available >= total * 0.75:
        score, status = 80, "Most critical domains available"
    elif available >= total * 0.5:
        score, status = 60, "Some critical domains available"
    elif available > 0:
        score, status = 40, "Few critical domains available"
    else:
        score, status = 20, "No critical domains available"

    return {
        "score": score,
        "details": {
            "critical_tlds": {
                "total": total,
                "available": available,
                "unavailable": total - available,
            },
            "status": status,
        },
    }


def _platform_taken(records: Sequence[Record], platform: str) -> bool:
    for r in records:
        if r.social_platform != platform:
            continue
        probe = r.social_probe
        if probe is not None and probe.outcome is Presence.PRESENT:
            return True
        if r.origin is Origin.SEARCH:
            return True
    return False


def social_score(
    records: Sequence[Record], critical_platforms: Sequence[str] = CRITICAL_PLATFORMS
) -> dict:
    """Score availability of the critical social platforms."""
    platforms = {
        p: "taken" if _platform_taken(records, p) else "available" for p in critical_platforms
    }
    available = sum(1 for status in platforms.values() if status == "available")
    score = round(available / len(critical_platforms) * 100) if critical_platforms else 100

    if score == 100:
        status = "All major platforms available"
    elif score >= 75:
        status = "Most major platforms available"
    elif score >= 50:
        status = "Some platforms available"
    else:
        status = "Most platforms taken"

    return {"score": score, "details": {"platforms": platforms, "status": status}}


def trademark_score(records: Sequence[Record]) -> dict:
    """
    Score trademark conflict risk from exact and org-title matches.

    Higher means lower risk.
    """
    exact = sum(1 for r in records if r.match_type.is_exact)
    org = sum(1 for r in records if r.match_type.is_org_title)

    if exact == 0 and org == 0:
        score, risk, note = 100, "Low Risk", "No existing businesses found with this name"
    elif exact == 0 and org <= 2:
        score, risk, note = 80, "Low-Medium Risk", "Few similar businesses found"
    elif exact <= 2:
        score, risk, note = 60, "Medium Risk", "Some businesses with similar names exist"
    elif exact <= 5:
        score, risk, note = 40, "Medium-High Risk", "Multiple businesses with similar names"
    else:
        score, risk, note = (
            20,
            "High Risk",
            "Many existing businesses with this name - high trademark conflict risk",
        )

    return {
        "score": score,
        "details": {"exact_matches": exact, "org_matches": org, "risk": risk, "note": note},
    }


def generate_recommendations(
    breakdown: dict[str, CategoryScore], overall: int
) -> list[Recommendation]:
    """Threshold rules per category, then at most one overall recommendation."""
    recs = []
    if breakdown["domain_availability"].score < 70:
        recs.append(
            Recommendation(
                "high",
                "Domain",
                "Consider alternative TLDs or name variations. Critical domains are taken.",
                "Review available domain alternatives in the report",
            )
        )
    if breakdown["social_media_availability"].score < 70:
        recs.append(
            Recommendation(
                "medium",
                "Social Media",
                "Major social media handles are taken. Consider name variations.",
                "Secure available platforms immediately or modify the name",
            )
        )
    if breakdown["trademark_risk"].score < 60:
        recs.append(
            Recommendation(
                "high",
                "Legal",
                "High trademark conflict risk detected. Legal issues may arise.",
                "Conduct professional trademark search before proceeding",
            )
        )
    if breakdown["seo_friendly"].score < 60:
        recs.append(
            Recommendation(
                "low",
                "SEO",
                "Name may not be optimal for search engine visibility.",
                "Consider shorter, more memorable alternatives",
            )
        )

    if overall >= 80:
        recs.append(
            Recommendation(
                "info",
                "Overall",
                "Excellent name choice! Good availability across channels.",
                "Proceed with registration and secure all available platforms",
            )
        )
    elif overall < 50:
        recs.append(
            Recommendation(
                "high",
                "Overall",
                "This name faces significant challenges. Consider alternatives.",
                "Generate and evaluate alternative names",
            )
        )
    return recs


def _category(result: dict, key: str, details_key: str = "details") -> CategoryScore:
    weight = SCORING_WEIGHTS[key]
    score = result["score"]
    return CategoryScore(
        score=score,
        weight=weight,
        weighted=score * weight / 100,
        details=result[details_key],
    )


def calculate_brand_score(name: str, records: Iterable[Record]) -> BrandScore:
    """
    Compute the weighted brand score for a name.

    Pure function of the name and its records.

    Args:
        name: Raw queried name
        records: Surviving records from the usage pipeline

    Returns:
        BrandScore with overall 0-100, per-category breakdown, grade and
        recommendations
    """
    records = list(records)
    breakdown = {
        "domain_availability": _category(domain_score(records), "domain_availability"),
        "social_media_availability": _category(social_score(records), "social_media_availability"),
        "trademark_risk": _category(trademark_score(records), "trademark_risk"),
        "seo_friendly": _category(seo_score(name), "seo_friendly", "factors"),
        "memorability": _category(memorability_score(name), "memorability", "factors"),
    }
    # Round half up
    overall = math.floor(sum(c.weighted for c in breakdown.values()) + 0.5)
    overall = max(0, min(100, overall))

    return BrandScore(
        overall=overall,
        breakdown=breakdown,
        grade=grade_for(overall),
        recommendations=tuple(generate_recommendations(breakdown, overall)),
    )
