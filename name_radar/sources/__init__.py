"""
Evidence sources: WHOIS, DNS, certificate transparency, social platforms,
search engines and page fetching.

Every collector returns an evidence value and never raises past its boundary.
"""

from name_radar.sources.crt_sh import check_crt
from name_radar.sources.dns_check import check_dns, create_resolver
from name_radar.sources.search import build_providers, search_urls_for_name
from name_radar.sources.social_probe import SocialProber, probe_social_handles
from name_radar.sources.whois_check import PythonWhoisClient, check_whois

__all__ = [
    "PythonWhoisClient",
    "SocialProber",
    "build_providers",
    "check_crt",
    "check_dns",
    "check_whois",
    "create_resolver",
    "probe_social_handles",
    "search_urls_for_name",
]
