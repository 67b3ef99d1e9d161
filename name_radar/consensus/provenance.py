"""
Provenance tags: which evidence sources justify treating a record as "in use".
"""

from collections.abc import Iterable

from name_radar.domain.models import Origin, Record


def usage_sources(record: Record) -> list[str]:
    """
    Compute provenance tags for a record.

    Tags, in order: WHOIS (answered, not likely available), DNS (resolves),
    crt.sh (certificates logged), social, org_title, domain_present,
    search_hit / probe_hit.
    """
    tags = []
    if record.whois_taken:
        tags.append("WHOIS")
    if record.resolves:
        tags.append("DNS")
    if record.crt_count > 0:
        tags.append("crt.sh")
    if record.match_type.is_social:
        tags.append("social")
    if record.match_type.is_org_title:
        tags.append("org_title")
    if record.match_type.is_domain:
        tags.append("domain_present")
    if record.origin is Origin.SEARCH:
        tags.append("search_hit")
    elif record.origin is Origin.PROBE:
        tags.append("probe_hit")
    return tags


def apply_provenance(records: Iterable[Record], only_found: bool = True) -> list[Record]:
    """
    Tag every record and, in only-found mode, drop records with no tags.

    This is the last mutation a record receives.
    """
    kept = []
    for record in records:
        record.usage_sources = tuple(usage_sources(record))
        if not only_found or record.usage_sources:
            kept.append(record)
    return kept
