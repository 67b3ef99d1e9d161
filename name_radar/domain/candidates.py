"""
Candidate domain generation.

Cross-products the domain base of a name with the configured TLD groups.
"""

import logging
from collections.abc import Iterable

from name_radar.constants import BUSINESS_TLDS, CANDIDATE_TLD_GROUPS, MAX_DNS_LABEL_LENGTH
from name_radar.domain.models import Candidate
from name_radar.domain.normalize import domain_base

logger = logging.getLogger(__name__)


def candidate_tlds(groups: Iterable[str] = CANDIDATE_TLD_GROUPS) -> list[str]:
    """Concatenate TLD groups in order, keeping the first occurrence of each TLD."""
    return list(dict.fromkeys(tld for group in groups for tld in BUSINESS_TLDS[group]))


def is_probeable_base(base: str) -> bool:
    """True if base can be used as a single DNS label."""
    return 0 < len(base) <= MAX_DNS_LABEL_LENGTH


def build_candidate_domains(
    name: str,
    tlds: Iterable[str] | None = None,
) -> list[Candidate]:
    """
    Build the candidate domains to probe for a name.

    Args:
        name: Raw business name
        tlds: TLDs to combine with the base (default: global + indonesia + startup)

    Returns:
        Candidates in TLD order with no duplicates; empty if the name has no
        domain-safe characters
    """
    base = domain_base(name)
    if not base:
        logger.debug(f"No domain base for {name!r}, skipping candidates")
        return []

    tld_list = candidate_tlds() if tlds is None else list(dict.fromkeys(tlds))
    return [Candidate(domain=f"{base}.{tld}", sld=base, tld=tld) for tld in tld_list]
