"""
Brand scoring: weighted viability score, name-quality sub-scores and summaries.
"""

from name_radar.scoring.brand import calculate_brand_score, grade_for
from name_radar.scoring.competitors import analyze_competitors, generate_executive_summary
from name_radar.scoring.name_quality import memorability_score, seo_score

__all__ = [
    "analyze_competitors",
    "calculate_brand_score",
    "generate_executive_summary",
    "grade_for",
    "memorability_score",
    "seo_score",
]
