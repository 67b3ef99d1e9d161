"""Match classification of observed URLs against a queried name."""

from name_radar.matching.classifier import MATCH_SCORES, classify

__all__ = ["MATCH_SCORES", "classify"]
