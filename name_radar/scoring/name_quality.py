"""
Name-quality sub-scores computed from the raw name alone.

Both scores are 0-100 and need no network evidence.
"""

import re

from name_radar.constants import SEO_COMMON_WORDS
from name_radar.domain.normalize import domain_base

_VOWELS = set("aeiou")
_CONSONANT_CLUSTER = re.compile(r"[bcdfghjklmnpqrstvwxyz]{4,}")
_REPEATED_CHUNK = re.compile(r"(.{2,})\1")
_SYLLABLE = re.compile(r"[aeiou]+[^aeiou]*")


def seo_score(name: str) -> dict:
    """
    Score how search-engine friendly the domain-base form of a name is.

    Sub-factors: length, character composition, vowel ratio, hard consonant
    clusters and overused common words.

    Returns:
        {"score": int, "factors": {factor: points}}
    """
    base = domain_base(name)
    factors = {}

    length = len(base)
    if 6 <= length <= 15:
        factors["length"] = 15
    elif 4 <= length <= 20:
        factors["length"] = 10
    else:
        factors["length"] = 5

    if re.fullmatch(r"[a-z]+", base):
        factors["characters"] = 20
    elif re.fullmatch(r"[a-z0-9]+", base):
        factors["characters"] = 15
    elif "-" in base:
        factors["characters"] = 10
    else:
        factors["characters"] = 0

    letters = [c for c in base if c.isalpha()]
    vowel_ratio = sum(1 for c in letters if c in _VOWELS) / len(letters) if letters else 0.0
    factors["memorability"] = 25 if 0.3 <= vowel_ratio <= 0.5 else 15

    factors["pronounceability"] = 10 if _CONSONANT_CLUSTER.search(base) else 20

    factors["uniqueness"] = 10 if any(word in base for word in SEO_COMMON_WORDS) else 20

    return {"score": sum(factors.values()), "factors": factors}


def memorability_score(name: str) -> dict:
    """
    Score how easy a name is to remember.

    Length bucket plus bonuses for a repeated chunk, two or three syllables
    and alliteration across words. Capped at 100.
    """
    lowered = name.lower()
    letters = re.sub(r"[^a-z]", "", lowered)
    factors = {}

    if len(letters) <= 8:
        factors["length"] = 30
    elif len(letters) <= 12:
        factors["length"] = 20
    else:
        factors["length"] = 10

    factors["repetition"] = 20 if _REPEATED_CHUNK.search(letters) else 0

    syllables = len(_SYLLABLE.findall(letters))
    factors["syllables"] = 25 if 2 <= syllables <= 3 else 0

    words = [w for w in re.split(r"[\s-]+", lowered) if w]
    alliterative = len(words) >= 2 and len({w[0] for w in words}) == 1
    factors["alliteration"] = 25 if alliterative else 0

    return {"score": min(100, sum(factors.values())), "factors": factors}
