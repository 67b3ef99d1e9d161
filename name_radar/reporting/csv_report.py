"""
Report writers.

CSV output uses the standard-library csv module with the fixed column set
from rows.REPORT_COLUMNS. The JSON summary carries the brand score and the
derived analyses for one name.
"""

import csv
import json
import logging
from collections.abc import Iterable
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from name_radar.domain.models import BrandScore, UsageVerdict
from name_radar.domain.normalize import slug
from name_radar.domain.validation import generate_name_variants
from name_radar.reporting.rows import REPORT_COLUMNS, record_to_row
from name_radar.scoring.competitors import analyze_competitors, generate_executive_summary
from name_radar.sources.social_probe import summarize_social_probes

logger = logging.getLogger(__name__)


def verdict_rows(verdict: UsageVerdict) -> list[dict]:
    return [record_to_row(verdict.name, record) for record in verdict.records]


def write_csv(path: Path, rows: Iterable[dict]) -> int:
    """
    Write rows to a CSV file with the report header.

    Returns:
        Number of data rows written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=REPORT_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
            count += 1
    logger.info(f"Wrote {count} row(s) to {path}")
    return count


def report_stem(name: str, used: set[str] | None = None) -> str:
    """
    File stem for a name's reports: its slug, or 'name' when the slug is empty.

    When used is given, stems already in it get a -2, -3, ... suffix so two
    names with the same slug in one batch do not overwrite each other. The
    returned stem is added to used.
    """
    stem = slug(name) or "name"
    if used is None:
        return stem
    candidate = stem
    n = 2
    while candidate in used:
        candidate = f"{stem}-{n}"
        n += 1
    if candidate != stem:
        logger.warning(f'Report name "{stem}" already used, writing "{name}" as "{candidate}"')
    used.add(candidate)
    return candidate


def write_combined_csv(path: Path, verdicts: Iterable[UsageVerdict]) -> int:
    """Write every verdict's rows into one file, in batch order."""
    return write_csv(path, (row for v in verdicts for row in verdict_rows(v)))


def build_summary(
    verdict: UsageVerdict,
    brand_score: BrandScore,
    run_meta: dict | None = None,
) -> dict:
    """
    JSON-serializable summary document for one name.

    Sections: meta, brand_score, recommendations, executive_summary,
    competitors, social, validation.
    """
    validation = verdict.metadata.get("validation")
    return {
        "meta": {
            "name": verdict.name,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "records": verdict.found_count,
            "entity_type": verdict.metadata.get("entity_type"),
            "variants": generate_name_variants(verdict.name),
            **(run_meta or {}),
        },
        "brand_score": {
            "overall": brand_score.overall,
            "grade": brand_score.grade.label,
            "breakdown": {key: asdict(category) for key, category in brand_score.breakdown.items()},
        },
        "recommendations": [asdict(r) for r in brand_score.recommendations],
        "executive_summary": generate_executive_summary(verdict.name, brand_score),
        "competitors": analyze_competitors(verdict.records),
        "social": summarize_social_probes(verdict.social_probes),
        "validation": asdict(validation) if validation is not None else None,
    }


def write_json_summary(path: Path, summary: dict) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote summary to {path}")
