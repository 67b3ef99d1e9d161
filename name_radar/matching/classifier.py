"""
Match classification.

Relates one observed URL (plus its page title) to the queried name. Rules are
evaluated in a fixed precedence order and each category has a fixed score;
deduplication relies on those scores to keep the strongest observation.
"""

import re

from name_radar.domain.models import Classification, DomainInfo, MatchType
from name_radar.domain.normalize import slug
from name_radar.sources.platforms import extract_social_username

MATCH_SCORES = {
    MatchType.EXACT_DOMAIN: 100,
    MatchType.SOCIAL_EXACT: 90,
    MatchType.DOMAIN_CONTAINS: 80,
    MatchType.ORG_TITLE_EXACT: 75,
    MatchType.SOCIAL_CONTAINS: 70,
    MatchType.ORG_TITLE_CONTAINS: 60,
    MatchType.MENTION: 20,
    MatchType.SOCIAL_PROBE: 0,
}

# Titles that look like an organization's own page
ORG_TITLE_PATTERN = re.compile(
    r"(^|\b)(pt|cv|inc|ltd|llc|company|perusahaan|studio|ventures|labs)\b",
    re.IGNORECASE,
)


def _contains_either_way(a: str, b: str) -> bool:
    return bool(a) and bool(b) and (a in b or b in a)


def classify(
    query: str,
    url: str,
    info: DomainInfo | None = None,
    title: str | None = None,
) -> Classification:
    """
    Classify one observation against a query name.

    Precedence (first match wins):
        1. SLD equals the query slug            -> exact_domain (100)
        2. SLD and query slug contain each other -> domain_contains (80)
        3. Social username equals / contains    -> social_exact (90) / social_contains (70)
        4. Org-style title equals / contains    -> org_title_exact (75) / org_title_contains (60)
        5. Anything else                        -> mention (20)

    Args:
        query: Raw queried name
        url: Observed URL
        info: Domain parts of url (sld is the only field used)
        title: Page title, if fetched

    Returns:
        Classification with the match type, its fixed score, and the social
        handle for social matches
    """
    q = slug(query)
    sld = slug(info.sld if info else None)

    if q and sld:
        if sld == q:
            return _result(MatchType.EXACT_DOMAIN)
        if _contains_either_way(sld, q):
            return _result(MatchType.DOMAIN_CONTAINS)

    handle = extract_social_username(url)
    if handle is not None and q:
        user_slug = slug(handle.username)
        if user_slug == q:
            return _result(MatchType.SOCIAL_EXACT, handle)
        if _contains_either_way(user_slug, q):
            return _result(MatchType.SOCIAL_CONTAINS, handle)

    if q and title and ORG_TITLE_PATTERN.search(title):
        title_slug = slug(title)
        if title_slug == q:
            return _result(MatchType.ORG_TITLE_EXACT)
        if q in title_slug:
            return _result(MatchType.ORG_TITLE_CONTAINS)

    return _result(MatchType.MENTION)


def _result(match_type: MatchType, handle=None) -> Classification:
    return Classification(match_type=match_type, score=MATCH_SCORES[match_type], social=handle)
