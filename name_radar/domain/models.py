"""
Data models for name usage evidence and scoring.

Evidence values are frozen: a collector builds one and nothing downstream
changes it. Record is the only mutable type; it is filled in once during
enrichment and tagged once by the provenance step.
"""

from dataclasses import dataclass, field
from enum import Enum


class Presence(str, Enum):
    """Tri-state outcome of one evidence source."""

    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class Confidence(str, Enum):
    """Reliability of a Presence outcome."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class FailureKind(str, Enum):
    """Why a collector could not reach a conclusion."""

    TRANSPORT = "transport"  # timeout, connection refused, resolver failure
    RATE_LIMITED = "rate_limited"  # 429 / 999
    BLOCKED = "blocked"  # 403
    MALFORMED = "malformed"  # unparseable payload


class MatchType(str, Enum):
    """How an observation relates to the queried name."""

    EXACT_DOMAIN = "exact_domain"
    DOMAIN_CONTAINS = "domain_contains"
    SOCIAL_EXACT = "social_exact"
    SOCIAL_CONTAINS = "social_contains"
    ORG_TITLE_EXACT = "org_title_exact"
    ORG_TITLE_CONTAINS = "org_title_contains"
    MENTION = "mention"
    # Unconfirmed direct social probe, never produced by the classifier
    SOCIAL_PROBE = "social_probe"

    @property
    def is_domain(self) -> bool:
        return self in (MatchType.EXACT_DOMAIN, MatchType.DOMAIN_CONTAINS)

    @property
    def is_social(self) -> bool:
        return self in (MatchType.SOCIAL_EXACT, MatchType.SOCIAL_CONTAINS)

    @property
    def is_org_title(self) -> bool:
        return self.value.startswith("org_title")

    @property
    def is_exact(self) -> bool:
        return "exact" in self.value


class Origin(str, Enum):
    """Which pipeline stage created a Record."""

    PROBE = "probe"
    SEARCH = "search"
    SOCIAL_PROBE = "social_probe"


@dataclass(frozen=True)
class EvidenceResult:
    """
    Result of one evidence source.

    UNKNOWN means "no conclusion"; it must never be read as ABSENT.
    """

    outcome: Presence = Presence.UNKNOWN
    confidence: Confidence = Confidence.NONE
    note: str | None = None
    error: str | None = None
    failure: FailureKind | None = None


@dataclass(frozen=True)
class WhoisEvidence(EvidenceResult):
    """
    WHOIS lookup result.

    ok=False means the lookup itself failed. likely_available is only
    meaningful when ok is True; False there means "taken or unknown".
    """

    ok: bool = False
    likely_available: bool = False
    raw_text: str | None = None


@dataclass(frozen=True)
class DnsEvidence(EvidenceResult):
    """A/AAAA resolution result. An attached error separates failures from empty answers."""

    resolves: bool = False
    records: tuple[str, ...] = ()


@dataclass(frozen=True)
class CrtEntry:
    """One certificate-transparency log entry (summary fields only)."""

    common_name: str | None = None
    name_value: str | None = None
    not_before: str | None = None
    not_after: str | None = None
    id: int | None = None


@dataclass(frozen=True)
class CrtEvidence(EvidenceResult):
    """crt.sh query result."""

    ok: bool = False
    entries: tuple[CrtEntry, ...] = ()

    @property
    def entry_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class SocialProbeEvidence(EvidenceResult):
    """Direct profile probe on one social platform."""

    platform: str = ""
    username: str = ""
    url: str = ""
    status_code: int | None = None
    redirect_target: str | None = None

    @property
    def status(self) -> str:
        """Human label used in reports: taken / available / unknown."""
        if self.outcome is Presence.PRESENT:
            return "taken"
        if self.outcome is Presence.ABSENT:
            return "available"
        return "unknown"


@dataclass(frozen=True)
class Candidate:
    """A generated domain to probe."""

    domain: str
    sld: str
    tld: str


@dataclass(frozen=True)
class DomainInfo:
    """Host parts of an observed URL. All None when the URL cannot be parsed."""

    domain: str | None = None
    hostname: str | None = None
    tld: str | None = None
    sld: str | None = None


@dataclass(frozen=True)
class SocialHandle:
    """Platform and username extracted from a profile URL."""

    platform: str
    username: str


@dataclass(frozen=True)
class Classification:
    """Output of the match classifier."""

    match_type: MatchType
    score: int
    social: SocialHandle | None = None


@dataclass
class Record:
    """One observed usage of a name: a domain, a social identity or a page."""

    url: str
    origin: Origin
    match_type: MatchType
    match_score: int
    domain: str | None = None
    hostname: str | None = None
    tld: str | None = None
    sld: str | None = None
    title: str | None = None
    snippet: str | None = None
    social_platform: str | None = None
    social_username: str | None = None
    whois: WhoisEvidence | None = None
    dns: DnsEvidence | None = None
    crt: CrtEvidence | None = None
    social_probe: SocialProbeEvidence | None = None
    usage_sources: tuple[str, ...] = ()
    metadata: dict = field(default_factory=dict)

    @property
    def dedup_key(self) -> str:
        """platform:username for social matches, else domain / hostname / url."""
        if self.match_type.is_social and self.social_platform and self.social_username:
            return f"{self.social_platform}:{self.social_username}".lower()
        return (self.domain or self.hostname or self.url or "").lower()

    @property
    def crt_count(self) -> int:
        if self.crt is None or not self.crt.ok:
            return 0
        return self.crt.entry_count

    @property
    def resolves(self) -> bool:
        return bool(self.dns and self.dns.resolves)

    @property
    def whois_taken(self) -> bool:
        """WHOIS answered and did not look available (registered or unknown)."""
        return bool(self.whois and self.whois.ok and not self.whois.likely_available)

    @property
    def in_use(self) -> bool:
        return bool(self.usage_sources)


@dataclass(frozen=True)
class UsageVerdict:
    """All surviving records for one queried name."""

    name: str
    records: tuple[Record, ...]
    social_probes: dict[str, SocialProbeEvidence] = field(default_factory=dict)
    metadata: dict = field(default_factory=dict)

    @property
    def found_count(self) -> int:
        return len(self.records)


class Grade(str, Enum):
    """Letter grade for an overall brand score."""

    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def description(self) -> str:
        return _GRADE_DESCRIPTIONS[self]

    @property
    def label(self) -> str:
        """e.g. ``A+ (Excellent)``."""
        return f"{self.value} ({self.description})"


_GRADE_DESCRIPTIONS = {
    Grade.A_PLUS: "Excellent",
    Grade.A: "Very Good",
    Grade.B: "Good",
    Grade.C: "Fair",
    Grade.D: "Poor",
    Grade.F: "Not Recommended",
}


@dataclass(frozen=True)
class CategoryScore:
    """One weighted category of a brand score."""

    score: int
    weight: int
    weighted: float
    details: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Recommendation:
    priority: str  # high / medium / low / info
    category: str
    message: str
    action: str


@dataclass(frozen=True)
class BrandScore:
    """Weighted brand-viability score for a name."""

    overall: int
    breakdown: dict[str, CategoryScore]
    grade: Grade
    recommendations: tuple[Recommendation, ...] = ()
