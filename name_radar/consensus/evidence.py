"""
Domain evidence collection.

Bundles the WHOIS, DNS and crt.sh collectors behind one object so candidate
probing and search-record enrichment gather evidence the same way. The
three lookups for one domain run sequentially, each paced by its own
limiter; different domains run concurrently under the caller's executor.
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from name_radar.cache import AppCache
from name_radar.config import RunConfig
from name_radar.domain.models import (
    Candidate,
    CrtEvidence,
    DnsEvidence,
    MatchType,
    Origin,
    Record,
    WhoisEvidence,
)
from name_radar.matching.classifier import MATCH_SCORES
from name_radar.sources.crt_sh import check_crt
from name_radar.sources.dns_check import check_dns
from name_radar.sources.whois_check import check_whois
from name_radar.utils.rate_limiting import RateLimiterRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvidence:
    whois: WhoisEvidence | None
    dns: DnsEvidence
    crt: CrtEvidence | None


class DomainEvidenceCollector:
    """
    Collects WHOIS / DNS / crt.sh evidence for domains.

    Args:
        config: Run configuration (enable flags, timeouts)
        http_client: Shared async HTTP client (crt.sh)
        resolver: Async DNS resolver
        whois_client: Object with ``async lookup(domain, timeout) -> str``
        limiters: Per-run rate limiter registry
        cache: Optional evidence cache
    """

    def __init__(
        self,
        config: RunConfig,
        http_client: httpx.AsyncClient,
        resolver,
        whois_client,
        limiters: RateLimiterRegistry,
        cache: AppCache | None = None,
    ):
        self.config = config
        self.http_client = http_client
        self.resolver = resolver
        self.whois_client = whois_client
        self.limiters = limiters
        self.cache = cache
        self._inflight: dict[str, asyncio.Task] = {}

    async def _gather(self, domain: str) -> DomainEvidence:
        whois_evidence = None
        if self.config.whois_enabled:
            whois_evidence = await check_whois(
                domain,
                self.whois_client,
                timeout=self.config.timeouts.whois,
                limiter=self.limiters.get("whois"),
                cache=self.cache,
            )
        dns_evidence = await check_dns(domain, self.resolver, limiter=self.limiters.get("dns"))
        crt_evidence = None
        if self.config.crt_enabled:
            crt_evidence = await check_crt(
                domain,
                self.http_client,
                limiter=self.limiters.get("crt"),
                cache=self.cache,
            )
        return DomainEvidence(whois=whois_evidence, dns=dns_evidence, crt=crt_evidence)

    async def collect(self, domain: str) -> DomainEvidence:
        """
        Collect evidence for a domain, at most once per collector instance.

        Concurrent callers asking for the same domain share one lookup.
        """
        key = domain.lower()
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._gather(key))
            self._inflight[key] = task
        return await task

    async def probe_candidate(self, candidate: Candidate) -> Record:
        """Build an evidence-backed probe record for a generated domain."""
        evidence = await self.collect(candidate.domain)
        return Record(
            url=f"http://{candidate.domain}",
            origin=Origin.PROBE,
            match_type=MatchType.EXACT_DOMAIN,
            match_score=MATCH_SCORES[MatchType.EXACT_DOMAIN],
            domain=candidate.domain,
            hostname=candidate.domain,
            tld=candidate.tld,
            sld=candidate.sld,
            whois=evidence.whois,
            dns=evidence.dns,
            crt=evidence.crt,
        )

    async def enrich(self, record: Record) -> Record:
        """Attach domain evidence to a search record (its one enrichment)."""
        if not record.domain:
            return record
        evidence = await self.collect(record.domain)
        record.whois = evidence.whois
        record.dns = evidence.dns
        record.crt = evidence.crt
        return record
