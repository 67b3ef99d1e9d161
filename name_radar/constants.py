"""
Constants for name_radar package.

Centralizes TLD lists, scoring weights, rate limits and other fixed heuristics.
"""

# TLD groups used for candidate domain generation
BUSINESS_TLDS = {
    "global": ["com", "net", "org", "io", "co", "ai", "app", "dev", "biz", "tech", "inc"],
    "indonesia": ["id", "co.id", "web.id", "sch.id", "ac.id", "or.id"],
    "startup": ["io", "ai", "tech", "dev", "app", "digital", "cloud"],
    "professional": ["co", "inc", "pro", "consulting", "agency"],
}

# Groups probed by default (professional is available but not probed)
CANDIDATE_TLD_GROUPS = ("global", "indonesia", "startup")

# Brand scoring
CRITICAL_TLDS = ("com", "co.id", "id", "io")
CRITICAL_PLATFORMS = ("instagram", "facebook", "linkedin", "twitter")
SCORING_WEIGHTS = {
    "domain_availability": 30,
    "social_media_availability": 25,
    "trademark_risk": 20,
    "seo_friendly": 15,
    "memorability": 10,
}

# Platforms probed directly for the domain-base handle
PROBE_PLATFORMS = ("instagram", "facebook", "youtube", "twitter", "tiktok", "linkedin", "github")

# WHOIS phrases that indicate a domain is unregistered (case-insensitive)
WHOIS_AVAILABLE_PHRASES = (
    "no match for",
    "not found",
    "no data found",
    "no entries found",
    "status: free",
    "domain not found",
    "not registered",
    "no object found",
)

# Certificate transparency
CRT_SH_URL = "https://crt.sh/"
CRT_NO_RESULTS_PHRASE = "no results found"

# Search
SERPAPI_URL = "https://serpapi.com/search.json"
BING_SEARCH_URL = "https://www.bing.com/search"
DDG_SEARCH_URL = "https://duckduckgo.com/html/"
SERPAPI_MAX_RESULTS = 100
BING_MAX_PAGES = 3
BING_PAGE_SIZE = 50
SNIPPET_MAX_WORDS = 80

# Longest valid DNS label
MAX_DNS_LABEL_LENGTH = 63

# HTTP defaults
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Timeouts (seconds)
HTTP_TIMEOUT = 15.0
WHOIS_TIMEOUT = 15.0
WHOIS_MAX_THREADS = 4
DNS_TIMEOUT = 5.0
SOCIAL_PROBE_TIMEOUT = 20.0

# API rate limits (requests per second)
WHOIS_RATE_LIMIT = 5.0  # 200ms between WHOIS queries
DNS_RATE_LIMIT = 10.0  # 100ms between DNS queries
CRT_RATE_LIMIT = 5.0  # crt.sh throttles aggressively
PAGE_RATE_LIMIT = 8.0  # ~120ms stagger between page fetches
SEARCH_RATE_LIMIT = 6.0  # ~150ms between search result pages
SOCIAL_RATE_LIMIT = 1.25  # 800ms between social probes

# Parallel processing defaults
DEFAULT_CONCURRENCY = 6
DEFAULT_SEARCH_LIMIT = 30

# Cache namespaces and TTL (Time To Live) in days
CACHE_NAMESPACE_WHOIS = "whois"
CACHE_NAMESPACE_CRT = "crt"
CACHE_TTL_WHOIS = 7
CACHE_TTL_CRT = 3

# Business-name validation
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
RESERVED_WORDS = (
    "indonesia",
    "republik",
    "negara",
    "pemerintah",
    "kementerian",
    "presiden",
    "gubernur",
    "bank indonesia",
    "polri",
    "tni",
    "nasional",
    "international",
)
BRAND_RISKY_WORDS = (
    "google",
    "facebook",
    "microsoft",
    "apple",
    "amazon",
    "alibaba",
    "tencent",
    "samsung",
    "toyota",
    "honda",
)

# Indonesian business entity types
ENTITY_TYPES = {
    "PT": {
        "full_name": "Perseroan Terbatas",
        "description": "Limited Liability Company",
        "min_capital": 50_000_000,  # IDR
        "min_shareholders": 2,
        "rules": [
            "Nama harus unik dan tidak sama dengan PT yang sudah terdaftar",
            "Tidak boleh menggunakan kata yang bertentangan dengan ketertiban umum",
            "Minimal 3 kata (termasuk PT)",
            "Tidak boleh menggunakan nama negara, kementerian, atau lembaga negara",
        ],
    },
    "CV": {
        "full_name": "Commanditaire Vennootschap",
        "description": "Limited Partnership",
        "min_capital": 0,
        "min_shareholders": 2,
        "rules": [
            "Nama harus unik",
            "Minimal terdiri dari 2 kata (termasuk CV)",
            "Lebih fleksibel dibanding PT",
        ],
    },
    "UD": {
        "full_name": "Usaha Dagang",
        "description": "Trading Business",
        "min_capital": 0,
        "min_shareholders": 1,
        "rules": [
            "Untuk usaha perorangan",
            "Tidak memerlukan akta notaris",
            "Cukup dengan surat izin usaha",
        ],
    },
    "Firma": {
        "full_name": "Firma",
        "description": "General Partnership",
        "min_capital": 0,
        "min_shareholders": 2,
        "rules": [
            "Semua anggota bertanggung jawab penuh",
            "Nama harus mencerminkan kegiatan usaha",
        ],
    },
}

# SEO heuristics
SEO_COMMON_WORDS = (
    "tech",
    "digital",
    "solutions",
    "group",
    "international",
    "global",
    "indo",
    "nusa",
)
