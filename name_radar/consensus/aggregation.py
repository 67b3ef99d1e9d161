"""
Record filtering and deduplication.

Probe-origin and search-origin records are merged into one list, filtered
by match-type policy, then collapsed to one record per dedup key. Sorting by
score before collapsing makes the retained record the strongest one; the
sort is stable, so on equal scores the earlier record (probes come first)
wins.
"""

import logging
from collections.abc import Iterable

from name_radar.domain.models import MatchType, Record

logger = logging.getLogger(__name__)

STRICT_MATCH_TYPES = frozenset(
    {MatchType.EXACT_DOMAIN, MatchType.SOCIAL_EXACT, MatchType.ORG_TITLE_EXACT}
)
DEFAULT_MATCH_TYPES = frozenset(
    {
        MatchType.EXACT_DOMAIN,
        MatchType.DOMAIN_CONTAINS,
        MatchType.SOCIAL_EXACT,
        MatchType.SOCIAL_CONTAINS,
        MatchType.ORG_TITLE_EXACT,
        MatchType.ORG_TITLE_CONTAINS,
    }
)


def allowed_match_types(strict: bool = False, allow_mentions: bool = False) -> frozenset[MatchType]:
    """
    Match types that survive filtering.

    strict keeps only the exact types, even when mentions are allowed.
    """
    if strict:
        return STRICT_MATCH_TYPES
    if allow_mentions:
        return DEFAULT_MATCH_TYPES | {MatchType.MENTION}
    return DEFAULT_MATCH_TYPES


def filter_records(
    records: Iterable[Record],
    strict: bool = False,
    allow_mentions: bool = False,
) -> list[Record]:
    allowed = allowed_match_types(strict, allow_mentions)
    return [r for r in records if r.match_type in allowed]


def dedupe_records(records: Iterable[Record]) -> list[Record]:
    """
    Keep the highest-scoring record per dedup key.

    Records with an empty key are dropped.

    Returns:
        Surviving records, highest score first
    """
    seen: set[str] = set()
    survivors: list[Record] = []
    for record in sorted(records, key=lambda r: r.match_score, reverse=True):
        key = record.dedup_key
        if not key or key in seen:
            continue
        seen.add(key)
        survivors.append(record)
    return survivors


def aggregate_records(
    probe_records: Iterable[Record],
    search_records: Iterable[Record],
    strict: bool = False,
    allow_mentions: bool = False,
) -> list[Record]:
    """Merge probe and search records, filter by policy, then dedupe."""
    combined = [*probe_records, *search_records]
    filtered = filter_records(combined, strict=strict, allow_mentions=allow_mentions)
    survivors = dedupe_records(filtered)
    logger.debug(
        f"Aggregated {len(combined)} record(s): {len(filtered)} after filtering, "
        f"{len(survivors)} after dedup"
    )
    return survivors
