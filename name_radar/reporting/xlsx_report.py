"""
Multi-sheet Excel workbook for one name.

Sheets: Executive Summary, Detailed Results, Domain Analysis, Social Media,
SEO & Branding, Competitor Analysis, Recommendations. Built with openpyxl
from the same records, brand score and summaries as the CSV/JSON reports.
"""

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from name_radar.constants import PROBE_PLATFORMS
from name_radar.domain.candidates import candidate_tlds
from name_radar.domain.models import BrandScore, Origin, Record, UsageVerdict
from name_radar.domain.normalize import domain_base
from name_radar.reporting.rows import whois_guess
from name_radar.scoring.competitors import analyze_competitors, generate_executive_summary
from name_radar.scoring.name_quality import seo_score

logger = logging.getLogger(__name__)

SHEET_NAMES = (
    "Executive Summary",
    "Detailed Results",
    "Domain Analysis",
    "Social Media",
    "SEO & Branding",
    "Competitor Analysis",
    "Recommendations",
)

DETAIL_HEADERS = (
    "Domain/Platform",
    "Type",
    "Match Type",
    "Score",
    "DNS",
    "WHOIS Status",
    "Certificates",
    "Social Platform",
    "Username",
    "Title",
    "URL",
    "Usage Source",
)

GREEN = "00B050"
LIGHT_GREEN = "92D050"
AMBER = "FFC000"
RED = "FF0000"
PALE_RED = "FFC7CE"
PALE_YELLOW = "FFEB9C"
PALE_GREEN = "C6EFCE"
HEADER_BLUE = "4472C4"

_HEADER_FONT = Font(bold=True, color="FFFFFF")
_TITLE_FONT = Font(size=14, bold=True)
_BOLD = Font(bold=True)

_PRIORITY_COLORS = {"high": PALE_RED, "medium": PALE_YELLOW, "low": PALE_GREEN}
_THREAT_COLORS = {"high": RED, "medium": AMBER, "low": LIGHT_GREEN}


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def score_color(score: int) -> str:
    if score >= 80:
        return GREEN
    if score >= 60:
        return LIGHT_GREEN
    if score >= 40:
        return AMBER
    return RED


def score_status(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"


def _title(sheet: Worksheet, text: str, last_column: str) -> None:
    sheet.merge_cells(f"A1:{last_column}1")
    cell = sheet["A1"]
    cell.value = text
    cell.font = _TITLE_FONT
    cell.alignment = Alignment(horizontal="center")


def _header_row(sheet: Worksheet, row: int, headers) -> None:
    for col, header in enumerate(headers, start=1):
        cell = sheet.cell(row=row, column=col, value=header)
        cell.font = _HEADER_FONT
        cell.fill = _fill(HEADER_BLUE)


def _widths(sheet: Worksheet, widths) -> None:
    for letter, width in zip("ABCDEFGHIJKL", widths):
        sheet.column_dimensions[letter].width = width


def _usage_label(record: Record) -> str:
    return "; ".join(record.usage_sources)


def _executive_summary_sheet(sheet: Worksheet, verdict: UsageVerdict, brand_score: BrandScore):
    summary = generate_executive_summary(verdict.name, brand_score)
    sheet.sheet_view.showGridLines = False

    sheet.merge_cells("A1:F1")
    sheet["A1"] = "NAME RADAR - Business Name Analysis"
    sheet["A1"].font = Font(size=18, bold=True, color="002060")
    sheet["A1"].alignment = Alignment(horizontal="center", vertical="center")

    sheet.merge_cells("A3:F3")
    sheet["A3"] = f"Business Name: {verdict.name}"
    sheet["A3"].font = Font(size=16, bold=True)
    sheet["A3"].alignment = Alignment(horizontal="center")

    sheet.merge_cells("B5:E5")
    sheet["B5"] = f"Overall Score: {brand_score.overall}/100"
    sheet["B5"].font = Font(size=20, bold=True, color="FFFFFF")
    sheet["B5"].fill = _fill(score_color(brand_score.overall))
    sheet["B5"].alignment = Alignment(horizontal="center", vertical="center")

    sheet.merge_cells("B6:E6")
    sheet["B6"] = brand_score.grade.label
    sheet["B6"].font = Font(size=14, bold=True)
    sheet["B6"].alignment = Alignment(horizontal="center")

    sheet.merge_cells("A8:F8")
    sheet["A8"] = f"Recommendation: {summary['recommendation']}"
    sheet["A8"].font = Font(size=12, bold=True)
    sheet["A8"].alignment = Alignment(horizontal="center", wrap_text=True)

    row = 10
    sheet.cell(row=row, column=1, value="SCORE BREAKDOWN").font = Font(size=12, bold=True)
    row += 1
    _header_row(sheet, row, ("Category", "Score", "Weight", "Weighted", "Status"))
    row += 1
    for key, category in brand_score.breakdown.items():
        sheet.cell(row=row, column=1, value=key.replace("_", " ").title())
        score_cell = sheet.cell(row=row, column=2, value=f"{category.score}/100")
        score_cell.fill = _fill(score_color(category.score))
        sheet.cell(row=row, column=3, value=f"{category.weight}%")
        sheet.cell(row=row, column=4, value=round(category.weighted, 1))
        sheet.cell(row=row, column=5, value=score_status(category.score))
        row += 1

    row += 1
    sheet.cell(row=row, column=1, value="KEY FINDINGS").font = Font(size=12, bold=True)
    row += 1
    for finding in summary["key_findings"]:
        sheet.cell(row=row, column=1, value=finding)
        row += 1

    row += 1
    sheet.cell(row=row, column=1, value="RECOMMENDED NEXT STEPS").font = Font(size=12, bold=True)
    row += 1
    for i, step in enumerate(summary["next_steps"], start=1):
        sheet.cell(row=row, column=1, value=f"{i}. {step}")
        row += 1

    _widths(sheet, (25, 15, 15, 15, 20, 15))


def _detailed_results_sheet(sheet: Worksheet, verdict: UsageVerdict):
    _header_row(sheet, 1, DETAIL_HEADERS)
    for record in verdict.records:
        sheet.append(
            [
                record.domain or record.social_platform or "N/A",
                "Social Media" if record.social_platform else "Domain",
                record.match_type.value,
                record.match_score,
                "Yes" if record.resolves else "No",
                whois_guess(record) or "not checked",
                record.crt_count,
                record.social_platform or "",
                record.social_username or "",
                (record.title or "")[:50],
                record.url or "",
                _usage_label(record),
            ]
        )
    sheet.auto_filter.ref = f"A1:L{max(sheet.max_row, 1)}"
    _widths(sheet, (20,) * 9 + (40, 50, 20))


def _domain_analysis_sheet(sheet: Worksheet, verdict: UsageVerdict):
    _title(sheet, "Domain Availability Analysis", "E")
    _header_row(sheet, 3, ("TLD", "Domain", "Status", "DNS Resolves", "Certificates"))
    base = domain_base(verdict.name)
    by_domain = {r.domain: r for r in verdict.records if r.domain}

    row = 4
    for tld in candidate_tlds() if base else []:
        domain = f"{base}.{tld}"
        sheet.cell(row=row, column=1, value=tld)
        sheet.cell(row=row, column=2, value=domain)
        record = by_domain.get(domain)
        status_cell = sheet.cell(row=row, column=3)
        if record is None:
            status_cell.value = "Not Checked"
            sheet.cell(row=row, column=4, value="-")
            sheet.cell(row=row, column=5, value="-")
        else:
            available = bool(record.whois and record.whois.likely_available)
            status_cell.value = "Likely Available" if available else "Taken/Unknown"
            sheet.cell(row=row, column=4, value="Yes" if record.resolves else "No")
            sheet.cell(row=row, column=5, value=record.crt_count)
            if available and not record.resolves and record.crt_count == 0:
                status_cell.fill = _fill(GREEN)
            elif not record.resolves:
                status_cell.fill = _fill(PALE_YELLOW)
            else:
                status_cell.fill = _fill(PALE_RED)
        row += 1
    _widths(sheet, (20,) * 5)


def _social_media_sheet(sheet: Worksheet, verdict: UsageVerdict):
    _title(sheet, "Social Media Handle Availability", "D")
    _header_row(sheet, 3, ("Platform", "Handle", "Status", "URL"))
    handle = domain_base(verdict.name)

    row = 4
    for platform in PROBE_PLATFORMS:
        found = next((r for r in verdict.records if r.social_platform == platform), None)
        probe = verdict.social_probes.get(platform)
        if found is not None and found.social_probe is not None:
            probe = found.social_probe

        sheet.cell(row=row, column=1, value=platform.capitalize())
        sheet.cell(row=row, column=2, value=f"@{handle}")
        status_cell = sheet.cell(row=row, column=3)
        url = found.url if found is not None else (probe.url if probe else "")

        if probe is not None and probe.status == "taken":
            status_cell.value, color = "Taken (Verified)", PALE_RED
        elif probe is not None and probe.status == "available" and found is None:
            status_cell.value, color = "Available (Verified)", GREEN
        elif found is not None and found.origin is Origin.SEARCH:
            status_cell.value, color = "Taken (Found in Search)", PALE_RED
        else:
            status_cell.value, color = "Check Manually", PALE_YELLOW
        status_cell.fill = _fill(color)
        sheet.cell(row=row, column=4, value=url)
        row += 1
    _widths(sheet, (15, 20, 25, 50))


def _seo_branding_sheet(sheet: Worksheet, verdict: UsageVerdict):
    _title(sheet, "SEO & Branding Analysis", "C")
    seo = seo_score(verdict.name)
    sheet["A3"] = "SEO Score:"
    sheet["A3"].font = _BOLD
    sheet["B3"] = f"{seo['score']}/100"
    sheet["C3"] = score_status(seo["score"])

    _header_row(sheet, 5, ("SEO Factor", "Points"))
    row = 6
    for factor, points in seo["factors"].items():
        sheet.cell(row=row, column=1, value=factor.replace("_", " ").title())
        sheet.cell(row=row, column=2, value=points)
        row += 1

    validation = verdict.metadata.get("validation")
    if validation is not None:
        row += 1
        sheet.cell(row=row, column=1, value="Business Name Validation").font = Font(
            size=12, bold=True
        )
        row += 1
        sections = (
            ("ERRORS:", validation.errors, RED),
            ("WARNINGS:", validation.warnings, "FFA500"),
            ("SUGGESTIONS:", validation.suggestions, "0000FF"),
        )
        for label, items, color in sections:
            if not items:
                continue
            sheet.cell(row=row, column=1, value=label).font = Font(bold=True, color=color)
            row += 1
            for item in items:
                sheet.cell(row=row, column=1, value=f"• {item}")
                row += 1
    _widths(sheet, (25, 15, 50))


def _competitor_sheet(sheet: Worksheet, verdict: UsageVerdict):
    _title(sheet, "Competitor & Conflict Analysis", "D")
    analysis = analyze_competitors(verdict.records)
    sheet["A3"] = "Total Competitors Found:"
    sheet["A3"].font = _BOLD
    sheet["B3"] = analysis["count"]
    sheet["A4"] = "Threat Level:"
    sheet["A4"].font = _BOLD
    sheet["B4"] = analysis["threat"].upper()
    sheet["B4"].font = Font(bold=True, color=_THREAT_COLORS.get(analysis["threat"], GREEN))

    _header_row(sheet, 6, ("Competitor", "Type", "Platform/Domain", "URL"))
    for record in verdict.records:
        if not (record.match_type.is_exact or record.match_type.is_org_title):
            continue
        sheet.append(
            [
                record.title or record.domain or record.social_username,
                record.match_type.value,
                record.domain or record.social_platform or "-",
                record.url,
            ]
        )
    _widths(sheet, (30, 20, 25, 50))


def _recommendations_sheet(sheet: Worksheet, brand_score: BrandScore):
    _title(sheet, "Recommendations", "D")
    _header_row(sheet, 3, ("Priority", "Category", "Finding", "Recommended Action"))
    row = 4
    for rec in brand_score.recommendations:
        priority_cell = sheet.cell(row=row, column=1, value=rec.priority.upper())
        priority_cell.font = _BOLD
        priority_cell.fill = _fill(_PRIORITY_COLORS.get(rec.priority, "FFFFFF"))
        sheet.cell(row=row, column=2, value=rec.category)
        sheet.cell(row=row, column=3, value=rec.message).alignment = Alignment(wrap_text=True)
        sheet.cell(row=row, column=4, value=rec.action).alignment = Alignment(wrap_text=True)
        row += 1
    _widths(sheet, (12, 15, 40, 40))


def build_workbook(verdict: UsageVerdict, brand_score: BrandScore) -> Workbook:
    """Build the seven-sheet workbook for one name."""
    workbook = Workbook()
    sheets = [workbook.active] + [workbook.create_sheet() for _ in SHEET_NAMES[1:]]
    for sheet, title in zip(sheets, SHEET_NAMES):
        sheet.title = title

    summary, details, domains, social, seo, competitors, recommendations = sheets
    _executive_summary_sheet(summary, verdict, brand_score)
    _detailed_results_sheet(details, verdict)
    _domain_analysis_sheet(domains, verdict)
    _social_media_sheet(social, verdict)
    _seo_branding_sheet(seo, verdict)
    _competitor_sheet(competitors, verdict)
    _recommendations_sheet(recommendations, brand_score)
    return workbook


def write_xlsx_report(path: Path, verdict: UsageVerdict, brand_score: BrandScore) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(verdict, brand_score).save(path)
    logger.info(f"Wrote workbook to {path}")
