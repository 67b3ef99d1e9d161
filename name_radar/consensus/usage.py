"""
Per-name usage pipeline and batch runner.

For one name:
1. Validate the name (advisory only)
2. Probe candidate domains and search the web, concurrently, under one
   bounded executor
3. Classify search hits, filter and dedupe against the probe records
4. Enrich surviving search records with WHOIS / DNS / crt.sh evidence
5. Probe the name's handle on social platforms, one request at a time
6. Tag provenance and drop records with no evidence (only-found mode)

A batch processes names sequentially; a failure on one name is logged and
the batch moves on.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import httpx
from tqdm import tqdm

from name_radar.cache import AppCache
from name_radar.config import RunConfig
from name_radar.consensus.aggregation import aggregate_records
from name_radar.consensus.evidence import DomainEvidenceCollector
from name_radar.consensus.provenance import apply_provenance
from name_radar.constants import PROBE_PLATFORMS
from name_radar.domain.candidates import build_candidate_domains, is_probeable_base
from name_radar.domain.models import (
    MatchType,
    Origin,
    Presence,
    Record,
    SocialProbeEvidence,
    UsageVerdict,
)
from name_radar.domain.normalize import domain_base, domain_info
from name_radar.domain.validation import detect_entity_type, validate_business_name
from name_radar.matching.classifier import MATCH_SCORES, classify
from name_radar.sources.pages import fetch_summary
from name_radar.sources.search import search_urls_for_name
from name_radar.sources.social_probe import SocialProber, probe_social_handles
from name_radar.utils.parallel import BoundedExecutor
from name_radar.utils.rate_limiting import RateLimiterRegistry
from name_radar.utils.stats import ExecutionStats

logger = logging.getLogger(__name__)


def should_probe(name: str, probe_mode: str) -> bool:
    """
    Decide whether candidate domains are probed for a name.

    off: never. auto: only when the domain base is a valid DNS label.
    always: whenever there is a base at all.
    """
    base = domain_base(name)
    if probe_mode == "off" or not base:
        return False
    if probe_mode == "auto":
        return is_probeable_base(base)
    return True


def merge_social_probes(
    records: list[Record],
    probes: dict[str, SocialProbeEvidence],
    username: str,
    only_found: bool = True,
) -> list[Record]:
    """
    Fold direct social probe results into the record list.

    A probe for a platform/handle already present among the records is
    attached to that record. Otherwise a new social-probe record is added:
    social_exact when the profile is Present, or an unconfirmed
    social_probe record (score 0) when only_found is off.

    Returns:
        New list: the input records followed by any added records
    """
    added: list[Record] = []
    for platform, evidence in probes.items():
        existing = next(
            (
                r
                for r in records
                if r.social_platform == platform
                and (r.social_username or "").lower() == username.lower()
            ),
            None,
        )
        if existing is not None:
            existing.social_probe = evidence
            continue

        present = evidence.outcome is Presence.PRESENT
        if not present and only_found:
            continue
        match_type = MatchType.SOCIAL_EXACT if present else MatchType.SOCIAL_PROBE
        added.append(
            Record(
                url=evidence.url,
                origin=Origin.SOCIAL_PROBE,
                match_type=match_type,
                match_score=MATCH_SCORES[match_type],
                social_platform=platform,
                social_username=username,
                social_probe=evidence,
            )
        )
    return [*records, *added]


class UsagePipeline:
    """
    Finds where a name is already in use.

    One pipeline serves one run (one name or a batch). It owns no network
    resources; the caller creates and closes the HTTP client.

    Args:
        config: Run configuration
        http_client: Async HTTP client that does not follow redirects by default
        resolver: Async DNS resolver
        whois_client: Object with ``async lookup(domain, timeout) -> str``
        providers: Search providers in priority order
        cache: Optional evidence cache
        limiters: Rate limiters to share with other components (search
            providers); a fresh registry is built when omitted
    """

    def __init__(
        self,
        config: RunConfig,
        http_client: httpx.AsyncClient,
        resolver,
        whois_client,
        providers: list,
        cache: AppCache | None = None,
        limiters: RateLimiterRegistry | None = None,
    ):
        self.config = config
        self.http_client = http_client
        self.resolver = resolver
        self.whois_client = whois_client
        self.providers = providers
        self.cache = cache
        self.limiters = limiters or RateLimiterRegistry(config.rate_limits)
        self.prober = SocialProber(http_client, timeout=config.timeouts.social_probe)
        self.stats = ExecutionStats()

    async def _probe_candidates(
        self,
        name: str,
        executor: BoundedExecutor,
        collector: DomainEvidenceCollector,
    ) -> list[Record]:
        if not should_probe(name, self.config.probe_mode):
            logger.info("Domain probing skipped")
            return []
        candidates = build_candidate_domains(name)
        logger.info(f"Probing {len(candidates)} domain variation(s)")
        results = await executor.map(
            candidates,
            collector.probe_candidate,
            desc="Probing domains",
            unit="domain",
            show_progress=self.config.show_progress,
            stats=self.stats,
            stats_key="domains_probed",
        )
        return [record for _, record, error in results if error is None]

    async def _process_url(self, name: str, url: str) -> Record:
        summary = await fetch_summary(self.http_client, url, self.limiters.get("page"))
        title = summary.title if summary else None
        info = domain_info(url)
        classification = classify(name, url, info, title)
        social = classification.social
        return Record(
            url=url,
            origin=Origin.SEARCH,
            match_type=classification.match_type,
            match_score=classification.score,
            domain=info.domain,
            hostname=info.hostname,
            tld=info.tld,
            sld=info.sld,
            title=title,
            snippet=summary.snippet if summary else None,
            social_platform=social.platform if social else None,
            social_username=social.username if social else None,
        )

    async def _search(self, name: str, executor: BoundedExecutor) -> list[Record]:
        urls = await search_urls_for_name(name, self.providers, self.config.limit)
        logger.info(f"Found {len(urls)} URL(s) to analyze")
        self.stats.increment("urls_found", len(urls))
        results = await executor.map(
            urls,
            lambda url: self._process_url(name, url),
            desc="Analyzing URLs",
            unit="url",
            show_progress=self.config.show_progress,
            error_handler=lambda url, e: logger.warning(f"Could not analyze {url}: {e}"),
        )
        return [record for _, record, error in results if error is None]

    async def find_name_usage(self, name: str) -> UsageVerdict:
        """
        Run the full pipeline for one name.

        Args:
            name: Raw business name

        Returns:
            UsageVerdict with the surviving records, the direct social probe
            results and validation metadata
        """
        logger.info(f'Analyzing: "{name}"')

        entity_type = detect_entity_type(name)
        if entity_type:
            logger.info(f"Entity type detected: {entity_type}")
        validation = validate_business_name(name, entity_type)
        for error in validation.errors:
            logger.warning(f"Validation error: {error}")
        for warning in validation.warnings:
            logger.warning(f"Validation warning: {warning}")

        executor = BoundedExecutor(self.config.concurrency)
        collector = DomainEvidenceCollector(
            self.config,
            self.http_client,
            self.resolver,
            self.whois_client,
            self.limiters,
            cache=self.cache,
        )

        probe_records, search_records = await asyncio.gather(
            self._probe_candidates(name, executor, collector),
            self._search(name, executor),
        )

        records = aggregate_records(
            probe_records,
            search_records,
            strict=self.config.strict,
            allow_mentions=self.config.allow_mentions,
        )

        probed_domains = {r.domain for r in probe_records}
        to_enrich = [
            r
            for r in records
            if r.origin is Origin.SEARCH and r.domain and r.domain not in probed_domains
        ]
        if to_enrich:
            logger.info(f"Enriching {len(to_enrich)} record(s) with WHOIS, DNS and certificates")
            await executor.map(to_enrich, collector.enrich, stats=self.stats, stats_key="enriched")

        social_probes: dict[str, SocialProbeEvidence] = {}
        handle = domain_base(name)
        if self.config.social_probe_enabled and handle:
            logger.info("Verifying social media accounts")
            social_probes = await probe_social_handles(
                self.prober,
                handle,
                PROBE_PLATFORMS,
                limiter=self.limiters.get("social"),
            )
            records = merge_social_probes(
                records, social_probes, handle, only_found=self.config.only_found
            )

        records = apply_provenance(records, only_found=self.config.only_found)
        logger.info(f"Analysis complete: {len(records)} result(s) found")
        self.stats.increment("names")

        return UsageVerdict(
            name=name,
            records=tuple(records),
            social_probes=social_probes,
            metadata={
                "entity_type": entity_type,
                "validation": validation,
                "candidates_probed": len(probe_records),
                "search_hits": len(search_records),
            },
        )


@dataclass
class BatchResult:
    verdicts: list[UsageVerdict] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)


async def check_names(
    pipeline: UsagePipeline,
    names: Iterable[str],
    on_verdict=None,
    show_progress: bool = False,
) -> BatchResult:
    """
    Run the pipeline over names sequentially.

    Args:
        pipeline: Configured UsagePipeline
        names: Names to check, in order
        on_verdict: Optional callback(verdict) invoked as each name finishes
        show_progress: Show a per-name tqdm progress bar

    Returns:
        BatchResult with the verdicts of successful names and the error
        message of each failed one
    """
    result = BatchResult()
    names_list = list(names)
    for name in tqdm(names_list, desc="Names", unit="name", disable=not show_progress):
        try:
            verdict = await pipeline.find_name_usage(name)
        except Exception as e:
            logger.error(f'Error analyzing "{name}": {e}', exc_info=True)
            result.failures[name] = str(e) or type(e).__name__
            pipeline.stats.increment("failed_names")
            continue
        result.verdicts.append(verdict)
        if on_verdict is not None:
            try:
                on_verdict(verdict)
            except Exception as e:
                logger.error(f'Error reporting "{name}": {e}', exc_info=True)
                result.failures[name] = str(e) or type(e).__name__
                pipeline.stats.increment("failed_names")
    return result
