"""
Tests for the plain-text report.
"""
from core.comparison import DiffMode, compare_documents
from core.report import format_report, format_value_compact

NOW = 1_700_000_000


class TestFormatReport:

    def test_identical(self):
        result = compare_documents([{"a": 1}, {"a": 1}], DiffMode.LINE, now=NOW)
        report = format_report(result, app_version="1.2.0")
        assert "DOCUMENT COMPARISON REPORT" in report
        assert "DocCompare v1.2.0" in report
        assert "RESULT: NO DIFFERENCES FOUND" in report
        assert report.rstrip().endswith("=" * 70)

    def test_line_mode_marks_differing_rows(self):
        result = compare_documents([{"a": 1}, {"a": 2}], DiffMode.LINE, now=NOW)
        report = format_report(result)
        assert "RESULT: 1 DIFFERENCE" in report
        assert '  !    2 |   "a": 2' in report

    def test_character_mode_markup(self):
        result = compare_documents([{"a": 1}, {"a": 2}], DiffMode.CHARACTER, now=NOW)
        report = format_report(result)
        assert '"a": [-1-]{+2+}' in report
        assert "(base)" in report

    def test_semantic_mode(self):
        docs = [{"id": "x", "a": 1, "b": 2}, {"id": "x", "a": 3, "c": [1]}]
        result = compare_documents(docs, DiffMode.SEMANTIC, show_differences_only=True, now=NOW)
        report = format_report(result, sources=["left.json", "right.json"])
        assert "~ a: 1 -> 3" in report
        assert "- b: 2" in report
        assert '+ c: "[Array(1)]"' in report
        assert "+ c[0]: 1" in report
        assert "  - left.json" in report

    def test_age_badges(self):
        docs = [{"_ts": NOW - 120}, {"_ts": NOW - 60}]
        result = compare_documents(docs, DiffMode.LINE, now=NOW)
        report = format_report(result)
        assert "oldest 2m ago" in report
        assert "newest 1m ago" in report


class TestFormatValueCompact:

    def test_short_values(self):
        assert format_value_compact(None) == "null"
        assert format_value_compact({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_long_values_truncated(self):
        text = format_value_compact("x" * 100)
        assert len(text) == 60
        assert text.endswith("...")
