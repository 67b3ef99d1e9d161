"""Report rows and CSV / JSON / Excel writers."""

from name_radar.reporting.csv_report import (
    build_summary,
    report_stem,
    verdict_rows,
    write_combined_csv,
    write_csv,
    write_json_summary,
)
from name_radar.reporting.rows import REPORT_COLUMNS, record_to_row
from name_radar.reporting.xlsx_report import build_workbook, write_xlsx_report

__all__ = [
    "REPORT_COLUMNS",
    "build_summary",
    "build_workbook",
    "record_to_row",
    "report_stem",
    "verdict_rows",
    "write_combined_csv",
    "write_csv",
    "write_json_summary",
    "write_xlsx_report",
]
