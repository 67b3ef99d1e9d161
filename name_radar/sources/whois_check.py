"""
WHOIS evidence collector.

Runs python-whois in a worker thread (it is blocking) under a timeout and
classifies the raw registration text. A phrase like "No match for" means
the domain is probably unregistered; the absence of such a phrase does NOT
prove registration, so that case is reported as "taken or unknown".
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

import whois
from whois.exceptions import PywhoisError

from name_radar.cache import AppCache
from name_radar.constants import (
    CACHE_NAMESPACE_WHOIS,
    WHOIS_AVAILABLE_PHRASES,
    WHOIS_MAX_THREADS,
    WHOIS_TIMEOUT,
)
from name_radar.domain.models import Confidence, FailureKind, Presence, WhoisEvidence
from name_radar.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)


class PythonWhoisClient:
    """
    WHOIS client backed by the python-whois package.

    Lookups run on a small dedicated thread pool. A timed-out lookup keeps
    its thread until the socket gives up, so the pool size caps how many
    abandoned lookups can pile up during a bulk run.
    """

    def __init__(self, max_threads: int = WHOIS_MAX_THREADS):
        self._pool = ThreadPoolExecutor(max_workers=max_threads, thread_name_prefix="whois")

    def close(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    async def lookup(self, domain: str, timeout: float = WHOIS_TIMEOUT) -> str:
        """
        Fetch raw registration text for a domain.

        python-whois raises PywhoisError when the registry answers "no match";
        the error message carries the registry text, so it is returned as-is.

        Raises:
            asyncio.TimeoutError: If the lookup exceeds timeout
            OSError: On socket failures
        """

        def _query() -> str:
            try:
                entry = whois.whois(domain)
            except PywhoisError as e:
                return str(e)
            return entry.text or ""

        loop = asyncio.get_running_loop()
        return await asyncio.wait_for(loop.run_in_executor(self._pool, _query), timeout=timeout)


def is_likely_available(raw_text: str) -> bool:
    """True if the WHOIS text contains any 'not registered' phrase (case-insensitive)."""
    lowered = raw_text.lower()
    return any(phrase in lowered for phrase in WHOIS_AVAILABLE_PHRASES)


def whois_evidence_from_text(raw_text: str) -> WhoisEvidence:
    """Classify raw WHOIS text into evidence."""
    if not raw_text.strip():
        return WhoisEvidence(
            ok=False,
            error="empty WHOIS response",
            failure=FailureKind.MALFORMED,
            note="Could not verify - check manually",
        )
    if is_likely_available(raw_text):
        return WhoisEvidence(
            outcome=Presence.ABSENT,
            confidence=Confidence.MEDIUM,
            ok=True,
            likely_available=True,
            raw_text=raw_text,
            note="Registry reports no match",
        )
    return WhoisEvidence(
        outcome=Presence.PRESENT,
        confidence=Confidence.LOW,
        ok=True,
        likely_available=False,
        raw_text=raw_text,
        note="Registered or unknown",
    )


async def check_whois(
    domain: str,
    client,
    timeout: float = WHOIS_TIMEOUT,
    limiter: RateLimiter | None = None,
    cache: AppCache | None = None,
) -> WhoisEvidence:
    """
    Collect WHOIS evidence for one domain. Never raises.

    Args:
        domain: Domain to look up
        client: Object with ``async lookup(domain, timeout) -> str``
        timeout: Seconds before the lookup is abandoned
        limiter: Optional WHOIS rate limiter
        cache: Optional evidence cache; only successful lookups are stored

    Returns:
        WhoisEvidence (ok=False with an error on any failure)
    """
    if cache is not None:
        cached = cache.get(CACHE_NAMESPACE_WHOIS, domain)
        if cached is not None:
            logger.debug(f"WHOIS cache hit for {domain}")
            return cached

    try:
        if limiter is not None:
            await limiter()
        raw_text = await client.lookup(domain, timeout)
    except asyncio.TimeoutError:
        logger.debug(f"WHOIS timeout for {domain}")
        return WhoisEvidence(
            ok=False,
            error=f"timeout after {timeout}s",
            failure=FailureKind.TRANSPORT,
            note="WHOIS timed out - check manually",
        )
    except Exception as e:
        logger.debug(f"WHOIS error for {domain}: {e}")
        return WhoisEvidence(
            ok=False,
            error=str(e) or type(e).__name__,
            failure=FailureKind.TRANSPORT,
            note="WHOIS failed - check manually",
        )

    evidence = whois_evidence_from_text(raw_text)
    if cache is not None and evidence.ok:
        cache.set(CACHE_NAMESPACE_WHOIS, domain, evidence)
    return evidence
