"""Domain model, name normalization, candidate generation and name validation."""

from name_radar.domain.candidates import build_candidate_domains
from name_radar.domain.models import (
    BrandScore,
    Candidate,
    Confidence,
    MatchType,
    Origin,
    Presence,
    Record,
    UsageVerdict,
)
from name_radar.domain.normalize import domain_base, domain_info, slug

__all__ = [
    "BrandScore",
    "Candidate",
    "Confidence",
    "MatchType",
    "Origin",
    "Presence",
    "Record",
    "UsageVerdict",
    "build_candidate_domains",
    "domain_base",
    "domain_info",
    "slug",
]
