"""
Name and URL normalization.

slug() produces a comparison key; domain_base() produces a DNS-label-safe
string that can be used to build literal domains. domain_info() splits an
observed URL into registrable domain, hostname, public suffix and SLD.
"""

import re
import unicodedata
from urllib.parse import urlsplit

import tldextract

from name_radar.domain.models import DomainInfo

# Bundled Public Suffix List snapshot only: no network fetch, no cache writes
_extract = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)

_SEPARATORS = re.compile(r"[\s_]+")
_NON_LABEL = re.compile(r"[^a-z0-9-]+")
_HYPHENS = re.compile(r"-+")


def _fold(s: str) -> str:
    return unicodedata.normalize("NFKD", (s or "").lower())


def slug(s: str | None) -> str:
    """
    Lowercase, NFKD-fold, keep only letters, digits and hyphens.

    Used for comparison only. Letters and digits are any Unicode letter or
    number category, so non-Latin names still produce a usable key.

    Examples:
        "LinkPulse" -> "linkpulse"
        "Link Pulse!" -> "linkpulse"
        "Café-Bar" -> "cafe-bar"
    """
    return "".join(ch for ch in _fold(s) if ch == "-" or unicodedata.category(ch)[0] in "LN")


def domain_base(s: str | None) -> str:
    """
    Turn a name into a DNS-label-safe base.

    Lowercase, NFKD-fold, whitespace/underscore to hyphen, strip everything
    outside [a-z0-9-], collapse repeated hyphens, trim edge hyphens.
    Idempotent; may return "".

    Examples:
        "Link Pulse" -> "link-pulse"
        "  __Kopi  Kenangan__ " -> "kopi-kenangan"
        "Ñandú" -> "nandu"
    """
    base = _SEPARATORS.sub("-", _fold(s))
    base = _NON_LABEL.sub("", base)
    base = _HYPHENS.sub("-", base)
    return base.strip("-")


def domain_info(url: str) -> DomainInfo:
    """
    Extract domain parts from a URL.

    Args:
        url: Absolute URL as returned by a search engine

    Returns:
        DomainInfo; every field is None if the URL has no hostname. When the
        public suffix is unknown (IP addresses, intranet hosts) domain falls
        back to the hostname and tld/sld are empty strings.
    """
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        return DomainInfo()
    if not hostname:
        return DomainInfo()

    ext = _extract(hostname)
    if ext.domain and ext.suffix:
        return DomainInfo(
            domain=f"{ext.domain}.{ext.suffix}",
            hostname=hostname,
            tld=ext.suffix,
            sld=ext.domain,
        )
    return DomainInfo(domain=hostname, hostname=hostname, tld="", sld="")
