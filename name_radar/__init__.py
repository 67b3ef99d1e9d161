"""
Name Radar - checks whether a business name is already in use.

This package provides utilities for:
- Normalizing names and generating candidate domains
- Collecting WHOIS, DNS, certificate-transparency and social-platform evidence
- Classifying, deduplicating and tagging observed usages of a name
- Scoring the brand viability of a name
- Rendering CSV/JSON reports from the command line
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from name_radar.config import RunConfig, get_settings
from name_radar.constants import (
    CRITICAL_PLATFORMS,
    CRITICAL_TLDS,
    DEFAULT_CONCURRENCY,
    SCORING_WEIGHTS,
)

__all__ = [
    "__version__",
    # Config
    "RunConfig",
    "get_settings",
    # Constants
    "CRITICAL_PLATFORMS",
    "CRITICAL_TLDS",
    "DEFAULT_CONCURRENCY",
    "SCORING_WEIGHTS",
]
