"""
DNS evidence collector.

Resolves A records, falling back to AAAA. NXDOMAIN and empty answers are
"no records"; resolver failures (timeouts, no nameservers) carry an error so
callers can tell them apart, though both count as "does not resolve".
"""

import logging

import dns.asyncresolver
import dns.exception
import dns.resolver

from name_radar.constants import DNS_TIMEOUT
from name_radar.domain.models import Confidence, DnsEvidence, FailureKind, Presence
from name_radar.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)


def create_resolver(timeout: float = DNS_TIMEOUT) -> dns.asyncresolver.Resolver:
    """System-configured async resolver with an overall lifetime per query."""
    resolver = dns.asyncresolver.Resolver(configure=True)
    resolver.timeout = timeout
    resolver.lifetime = timeout
    return resolver


async def _resolve(resolver, domain: str, rdtype: str) -> list[str]:
    answer = await resolver.resolve(domain, rdtype, raise_on_no_answer=False)
    return [rdata.to_text() for rdata in answer]


async def check_dns(
    domain: str,
    resolver,
    limiter: RateLimiter | None = None,
) -> DnsEvidence:
    """
    Collect DNS evidence for one domain. Never raises.

    Args:
        domain: Domain to resolve
        resolver: Object with ``async resolve(name, rdtype, raise_on_no_answer=False)``
            (dns.asyncresolver.Resolver or a test double)
        limiter: Optional DNS rate limiter

    Returns:
        DnsEvidence with resolves=True if A or AAAA yields addresses
    """
    errors: list[str] = []
    for rdtype in ("A", "AAAA"):
        try:
            if limiter is not None:
                await limiter()
            records = await _resolve(resolver, domain, rdtype)
        except dns.resolver.NXDOMAIN:
            return DnsEvidence(
                outcome=Presence.ABSENT,
                confidence=Confidence.LOW,
                resolves=False,
                note="NXDOMAIN",
            )
        except (dns.exception.DNSException, OSError) as e:
            logger.debug(f"DNS {rdtype} lookup failed for {domain}: {e}")
            errors.append(f"{rdtype}: {e or type(e).__name__}")
            continue

        if records:
            return DnsEvidence(
                outcome=Presence.PRESENT,
                confidence=Confidence.HIGH,
                resolves=True,
                records=tuple(records),
            )

    if errors:
        return DnsEvidence(
            resolves=False,
            error="; ".join(errors),
            failure=FailureKind.TRANSPORT,
            note="DNS lookup failed - check manually",
        )
    return DnsEvidence(outcome=Presence.ABSENT, confidence=Confidence.LOW, resolves=False)
