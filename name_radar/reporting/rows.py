"""Flattening records into report rows."""

from name_radar.domain.models import Record

REPORT_COLUMNS = (
    "query_name",
    "domain",
    "tld",
    "hostname",
    "url",
    "title",
    "snippet",
    "resolves",
    "whois_available_guess",
    "crt_count",
    "match_type",
    "match_score",
    "social_platform",
    "social_username",
    "social_probe_status",
    "usage_detected_from",
    "in_use",
)


def whois_guess(record: Record) -> str:
    """likely | taken_or_unknown | err:<msg> | empty when WHOIS never ran."""
    whois = record.whois
    if whois is None:
        return ""
    if not whois.ok:
        return f"err:{whois.error or 'unknown'}"
    return "likely" if whois.likely_available else "taken_or_unknown"


def record_to_row(query_name: str, record: Record) -> dict[str, str | int]:
    """Flatten one record into the report column set."""
    return {
        "query_name": query_name,
        "domain": record.domain or "",
        "tld": record.tld or "",
        "hostname": record.hostname or "",
        "url": record.url or "",
        "title": record.title or "",
        "snippet": record.snippet or "",
        "resolves": "yes" if record.resolves else "no",
        "whois_available_guess": whois_guess(record),
        "crt_count": record.crt_count,
        "match_type": record.match_type.value,
        "match_score": record.match_score,
        "social_platform": record.social_platform or "",
        "social_username": record.social_username or "",
        "social_probe_status": record.social_probe.status if record.social_probe else "",
        "usage_detected_from": ",".join(record.usage_sources),
        "in_use": "yes" if record.in_use else "no",
    }
