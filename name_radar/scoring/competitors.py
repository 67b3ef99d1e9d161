"""Competitor analysis and the executive summary shown per name."""

from collections import Counter
from collections.abc import Iterable

from name_radar.domain.models import BrandScore, Record


def threat_level(count: int) -> str:
    if count == 0:
        return "none"
    if count <= 2:
        return "low"
    if count <= 5:
        return "medium"
    return "high"


def analyze_competitors(records: Iterable[Record]) -> dict:
    """
    Summarize exact and org-title matches as potential competitors.

    Returns:
        {"count", "by_type", "by_domain", "by_social", "threat"}
    """
    competitors = [r for r in records if r.match_type.is_exact or r.match_type.is_org_title]
    by_type = Counter(r.match_type.value for r in competitors)
    by_domain = Counter(r.tld or "unknown" for r in competitors if r.domain)
    by_social = Counter(r.social_platform for r in competitors if r.social_platform)
    return {
        "count": len(competitors),
        "by_type": dict(by_type),
        "by_domain": dict(by_domain),
        "by_social": dict(by_social),
        "threat": threat_level(len(competitors)),
    }


def generate_executive_summary(name: str, brand_score: BrandScore) -> dict:
    """Headline recommendation, next steps and key findings for a name."""
    overall = brand_score.overall
    if overall >= 80:
        recommendation = "HIGHLY RECOMMENDED - Proceed with confidence"
        next_steps = [
            "Register domain and social media accounts immediately",
            "File trademark application",
            "Develop brand identity and guidelines",
        ]
    elif overall >= 60:
        recommendation = "CONDITIONALLY RECOMMENDED - Minor concerns exist"
        next_steps = [
            "Secure available domains and social accounts",
            "Consider trademark search for peace of mind",
            "Monitor competitor activity",
        ]
    else:
        recommendation = "NOT RECOMMENDED - Significant challenges detected"
        next_steps = [
            "Brainstorm alternative names",
            "Run additional name searches",
            "Consult with branding professionals",
        ]

    breakdown = brand_score.breakdown
    findings = [
        "✓ Primary domains are available"
        if breakdown["domain_availability"].score >= 80
        else "⚠ Limited domain availability",
        "✓ Major social media handles available"
        if breakdown["social_media_availability"].score >= 80
        else "⚠ Some social media handles taken",
        "✓ Low trademark conflict risk"
        if breakdown["trademark_risk"].score >= 80
        else "⚠ Potential trademark conflicts detected",
    ]

    return {
        "name": name,
        "overall_score": overall,
        "grade": brand_score.grade.label,
        "recommendation": recommendation,
        "key_findings": findings,
        "next_steps": next_steps,
    }
