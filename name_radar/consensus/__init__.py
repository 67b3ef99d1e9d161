"""
Usage consensus: merging, deduplicating and tagging evidence for a name.
"""

from name_radar.consensus.aggregation import aggregate_records, dedupe_records, filter_records
from name_radar.consensus.provenance import apply_provenance, usage_sources
from name_radar.consensus.usage import UsagePipeline, check_names

__all__ = [
    "UsagePipeline",
    "aggregate_records",
    "apply_provenance",
    "check_names",
    "dedupe_records",
    "filter_records",
    "usage_sources",
]
