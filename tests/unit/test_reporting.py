"""
Unit tests for CSV rows and the JSON summary.
"""

import csv
import json

from name_radar.domain.models import (
    CrtEntry,
    CrtEvidence,
    DnsEvidence,
    MatchType,
    Origin,
    Presence,
    Record,
    SocialProbeEvidence,
    UsageVerdict,
    WhoisEvidence,
)
from name_radar.domain.validation import validate_business_name
from name_radar.reporting.csv_report import (
    build_summary,
    report_stem,
    write_combined_csv,
    write_csv,
    write_json_summary,
)
from name_radar.reporting.rows import REPORT_COLUMNS, record_to_row, whois_guess
from name_radar.scoring.brand import calculate_brand_score


def probe_record():
    return Record(
        url="http://linkpulse.com",
        origin=Origin.PROBE,
        match_type=MatchType.EXACT_DOMAIN,
        match_score=100,
        domain="linkpulse.com",
        hostname="linkpulse.com",
        tld="com",
        sld="linkpulse",
        whois=WhoisEvidence(outcome=Presence.PRESENT, ok=True, likely_available=False),
        dns=DnsEvidence(outcome=Presence.PRESENT, resolves=True, records=("1.2.3.4",)),
        crt=CrtEvidence(ok=True, entries=(CrtEntry(id=1), CrtEntry(id=2))),
        usage_sources=("WHOIS", "DNS", "crt.sh", "domain_present", "probe_hit"),
    )


def social_record():
    return Record(
        url="https://www.instagram.com/linkpulse/",
        origin=Origin.SOCIAL_PROBE,
        match_type=MatchType.SOCIAL_EXACT,
        match_score=90,
        social_platform="instagram",
        social_username="linkpulse",
        social_probe=SocialProbeEvidence(outcome=Presence.PRESENT, platform="instagram"),
        usage_sources=("social",),
    )


class TestWhoisGuess:
    """whois_available_guess column values."""

    def test_values(self):
        """Each WHOIS state maps to its report label."""
        record = probe_record()
        assert whois_guess(record) == "taken_or_unknown"

        record.whois = WhoisEvidence(ok=True, likely_available=True)
        assert whois_guess(record) == "likely"

        record.whois = WhoisEvidence(ok=False, error="timed out")
        assert whois_guess(record) == "err:timed out"

        record.whois = None
        assert whois_guess(record) == ""


class TestRecordToRow:
    """Flattening records."""

    def test_domain_record(self):
        """Evidence fields are flattened into strings and counts."""
        row = record_to_row("LinkPulse", probe_record())
        assert tuple(row) == REPORT_COLUMNS
        assert row["query_name"] == "LinkPulse"
        assert row["resolves"] == "yes"
        assert row["crt_count"] == 2
        assert row["match_type"] == "exact_domain"
        assert row["usage_detected_from"] == "WHOIS,DNS,crt.sh,domain_present,probe_hit"
        assert row["in_use"] == "yes"
        assert row["social_probe_status"] == ""

    def test_social_record(self):
        """Social records carry the probe status and blank domain fields."""
        row = record_to_row("LinkPulse", social_record())
        assert row["domain"] == ""
        assert row["resolves"] == "no"
        assert row["crt_count"] == 0
        assert row["social_platform"] == "instagram"
        assert row["social_probe_status"] == "taken"

    def test_untagged_record_not_in_use(self):
        """A record with no provenance tags is reported as not in use."""
        record = probe_record()
        record.usage_sources = ()
        assert record_to_row("LinkPulse", record)["in_use"] == "no"


class TestCsvWriters:
    """CSV output."""

    def test_write_csv(self, tmp_path):
        """Header plus one line per row; parent directories are created."""
        path = tmp_path / "out" / "linkpulse.csv"
        rows = [record_to_row("LinkPulse", probe_record())]
        assert write_csv(path, rows) == 1

        with open(path, newline="", encoding="utf-8") as f:
            read = list(csv.DictReader(f))
        assert tuple(read[0]) == REPORT_COLUMNS
        assert read[0]["domain"] == "linkpulse.com"
        assert read[0]["crt_count"] == "2"

    def test_empty_rows_still_write_header(self, tmp_path):
        """A name with no records gets a header-only file."""
        path = tmp_path / "empty.csv"
        assert write_csv(path, []) == 0
        assert path.read_text(encoding="utf-8").strip() == ",".join(REPORT_COLUMNS)

    def test_report_stem(self):
        """File names are slugs, with a fallback for empty slugs."""
        assert report_stem("Link Pulse!") == "linkpulse"
        assert report_stem("!!!") == "name"

    def test_report_stem_collisions(self):
        """Names sharing a slug in one batch get distinct stems."""
        used = set()
        assert report_stem("Foo Bar", used) == "foobar"
        assert report_stem("foo-bar", used) == "foo-bar"
        assert report_stem("FooBar", used) == "foobar-2"
        assert report_stem("foobar!", used) == "foobar-3"
        assert used == {"foobar", "foo-bar", "foobar-2", "foobar-3"}

    def test_combined(self, tmp_path):
        """Rows from every verdict land in one file, in batch order."""
        verdicts = [
            UsageVerdict(name="LinkPulse", records=(probe_record(), social_record())),
            UsageVerdict(name="Kopi Nusa", records=()),
            UsageVerdict(name="Other", records=(probe_record(),)),
        ]
        path = tmp_path / "all.csv"
        assert write_combined_csv(path, verdicts) == 3

        with open(path, newline="", encoding="utf-8") as f:
            names = [row["query_name"] for row in csv.DictReader(f)]
        assert names == ["LinkPulse", "LinkPulse", "Other"]


class TestJsonSummary:
    """JSON summary document."""

    def test_build_and_write(self, tmp_path):
        """The summary is JSON-serializable and has every section."""
        records = (probe_record(), social_record())
        verdict = UsageVerdict(
            name="PT LinkPulse",
            records=records,
            social_probes={"instagram": records[1].social_probe},
            metadata={
                "entity_type": "PT",
                "validation": validate_business_name("PT LinkPulse", "PT"),
            },
        )
        brand_score = calculate_brand_score(verdict.name, verdict.records)
        summary = build_summary(verdict, brand_score, run_meta={"engine": "ddg"})

        assert set(summary) == {
            "meta",
            "brand_score",
            "recommendations",
            "executive_summary",
            "competitors",
            "social",
            "validation",
        }
        assert summary["meta"]["records"] == 2
        assert summary["meta"]["engine"] == "ddg"
        assert summary["meta"]["variants"][0] == "LinkPulse"
        assert summary["brand_score"]["overall"] == brand_score.overall
        assert summary["competitors"]["count"] == 2
        assert summary["social"]["taken"] == 1
        assert summary["validation"]["entity_type"] == "PT"

        path = tmp_path / "json" / "linkpulse.json"
        write_json_summary(path, summary)
        loaded = json.loads(path.read_text(encoding="utf-8"))
        assert loaded["brand_score"]["breakdown"]["domain_availability"]["weight"] == 30

    def test_without_validation(self):
        """Verdicts built without metadata still summarize."""
        verdict = UsageVerdict(name="LinkPulse", records=())
        summary = build_summary(verdict, calculate_brand_score("LinkPulse", []))
        assert summary["validation"] is None
        assert summary["social"]["total"] == 0


class TestXlsxReport:
    """Multi-sheet Excel workbook."""

    def test_sheets_and_rows(self, tmp_path):
        """The workbook reopens with every sheet and one detail row per record."""
        from openpyxl import load_workbook

        from name_radar.domain.candidates import candidate_tlds
        from name_radar.reporting.xlsx_report import SHEET_NAMES, write_xlsx_report

        records = (probe_record(), social_record())
        verdict = UsageVerdict(
            name="LinkPulse",
            records=records,
            social_probes={"instagram": records[1].social_probe},
            metadata={"validation": validate_business_name("LinkPulse")},
        )
        brand_score = calculate_brand_score(verdict.name, verdict.records)
        path = tmp_path / "xlsx" / "linkpulse.xlsx"
        write_xlsx_report(path, verdict, brand_score)

        workbook = load_workbook(path)
        assert tuple(workbook.sheetnames) == SHEET_NAMES

        details = workbook["Detailed Results"]
        assert details.max_row == 1 + len(records)
        assert details["A2"].value == "linkpulse.com"
        assert details["G2"].value == 2

        domains = workbook["Domain Analysis"]
        assert domains.max_row == 3 + len(candidate_tlds())
        assert domains["B4"].value == "linkpulse.com"
        assert domains["C4"].value == "Taken/Unknown"

        social = workbook["Social Media"]
        assert social["A4"].value == "Instagram"
        assert social["C4"].value == "Taken (Verified)"

        recommendations = workbook["Recommendations"]
        assert recommendations.max_row == 3 + len(brand_score.recommendations)
