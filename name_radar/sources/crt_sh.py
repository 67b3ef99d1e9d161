"""
Certificate-transparency evidence collector (crt.sh).

Queries crt.sh for certificates matching a wildcard-prefixed domain. Only the
entry count drives scoring; entries are summarized for reports.
"""

import json
import logging

import httpx

from name_radar.cache import AppCache
from name_radar.constants import CACHE_NAMESPACE_CRT, CRT_NO_RESULTS_PHRASE, CRT_SH_URL
from name_radar.domain.models import Confidence, CrtEntry, CrtEvidence, FailureKind, Presence
from name_radar.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)


def parse_crt_body(text: str) -> CrtEvidence:
    """
    Parse a crt.sh JSON body.

    Empty bodies, the "no results found" page and malformed JSON all mean
    zero entries; none of them is an error.
    """
    if not text or text.strip().lower() == CRT_NO_RESULTS_PHRASE:
        return CrtEvidence(outcome=Presence.ABSENT, confidence=Confidence.LOW, ok=True)

    try:
        payload = json.loads(text)
    except ValueError:
        return CrtEvidence(
            outcome=Presence.UNKNOWN,
            confidence=Confidence.NONE,
            ok=True,
            failure=FailureKind.MALFORMED,
            note="Unparseable crt.sh response",
        )

    items = payload if isinstance(payload, list) else []
    entries = tuple(
        CrtEntry(
            common_name=item.get("common_name"),
            name_value=item.get("name_value"),
            not_before=item.get("not_before"),
            not_after=item.get("not_after"),
            id=item.get("min_cert_id") or item.get("id"),
        )
        for item in items
        if isinstance(item, dict)
    )
    if not entries:
        return CrtEvidence(outcome=Presence.ABSENT, confidence=Confidence.LOW, ok=True)
    return CrtEvidence(
        outcome=Presence.PRESENT,
        confidence=Confidence.MEDIUM,
        ok=True,
        entries=entries,
        note=f"{len(entries)} certificate(s) logged",
    )


async def check_crt(
    domain: str,
    client: httpx.AsyncClient,
    limiter: RateLimiter | None = None,
    cache: AppCache | None = None,
) -> CrtEvidence:
    """
    Collect certificate-transparency evidence for one domain. Never raises.

    Args:
        domain: Domain to query (wildcard-prefixed in the request)
        client: Shared async HTTP client
        limiter: Optional crt.sh rate limiter
        cache: Optional evidence cache; only successful queries are stored

    Returns:
        CrtEvidence (ok=False with "HTTP <status>" or a transport error)
    """
    if cache is not None:
        cached = cache.get(CACHE_NAMESPACE_CRT, domain)
        if cached is not None:
            logger.debug(f"crt.sh cache hit for {domain}")
            return cached

    try:
        if limiter is not None:
            await limiter()
        response = await client.get(CRT_SH_URL, params={"q": f"%{domain}", "output": "json"})
    except httpx.HTTPError as e:
        logger.debug(f"crt.sh error for {domain}: {e}")
        return CrtEvidence(
            ok=False,
            error=str(e) or type(e).__name__,
            failure=FailureKind.TRANSPORT,
            note="crt.sh unreachable - check manually",
        )

    if not response.is_success:
        failure = FailureKind.RATE_LIMITED if response.status_code == 429 else FailureKind.TRANSPORT
        return CrtEvidence(
            ok=False,
            error=f"HTTP {response.status_code}",
            failure=failure,
            note="crt.sh unavailable - check manually",
        )

    evidence = parse_crt_body(response.text)
    if cache is not None and evidence.failure is None:
        cache.set(CACHE_NAMESPACE_CRT, domain, evidence)
    return evidence
