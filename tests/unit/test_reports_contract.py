"""Tests for the report contract and display formatting."""

from datetime import UTC, datetime

from tests.fixtures import build_page, scenario_a_page
from worker.extraction.parser import parse
from worker.extraction.signals import extract_signals
from worker.reports.assembler import assemble_report
from worker.reports.contract import (
    CURRENT_VERSION,
    ReportVersion,
    format_content_size,
    format_heading_summary,
    social_presence_labels,
    truncate_description,
)


class TestTruncateDescription:
    """Tests for truncate_description."""

    def test_short_description_unchanged(self) -> None:
        assert truncate_description("Short") == "Short"

    def test_exactly_160_unchanged(self) -> None:
        text = "a" * 160
        assert truncate_description(text) == text

    def test_long_description_cut_with_ellipsis(self) -> None:
        result = truncate_description("b" * 161)
        assert result == "b" * 160 + "..."
        assert len(result) == 163

    def test_never_longer_than_163(self) -> None:
        for length in (0, 1, 159, 160, 161, 500):
            assert len(truncate_description("c" * length)) <= 163


class TestFormatting:
    """Tests for the smaller display helpers."""

    def test_content_size_rounds_half_up(self) -> None:
        assert format_content_size(0) == "0 KB"
        assert format_content_size(511) == "0 KB"
        assert format_content_size(512) == "1 KB"
        assert format_content_size(1536) == "2 KB"
        assert format_content_size(42 * 1024) == "42 KB"

    def test_heading_summary(self) -> None:
        assert format_heading_summary(1, 4, 0) == "H1: 1, H2: 4, H3: 0"

    def test_social_labels(self) -> None:
        markup = build_page(links=["https://facebook.com/x"])
        signals = extract_signals(parse(markup), markup, "https://example.com")
        labels = social_presence_labels(signals)

        assert labels["facebook"] == "Found"
        assert all(v == "Not found" for k, v in labels.items() if k != "facebook")


class TestAnalysisReport:
    """Tests for AnalysisReport properties and serialization."""

    def test_to_dict(self) -> None:
        markup = scenario_a_page()
        signals = extract_signals(parse(markup), markup, "https://example.com")
        analyzed_at = datetime(2024, 3, 1, 12, 30, tzinfo=UTC)

        data = assemble_report("https://example.com", signals, analyzed_at).to_dict()

        assert data["version"] == CURRENT_VERSION.value == ReportVersion.V1_0.value
        assert data["url"] == "https://example.com"
        assert data["title"] == "Example Domain"
        assert data["analyzed_at"] == "2024-03-01T12:30:00+00:00"
        assert data["scores"]["seo"] == 100
        assert data["scores"]["average"] == 100
        assert data["recommendations"] == []
        assert data["heading_summary"] == "H1: 1, H2: 0, H3: 0"
        assert data["alt_coverage_percent"] == 100.0
        assert data["signals"]["is_https"] is True

    def test_https_score(self) -> None:
        markup = build_page()
        https = extract_signals(parse(markup), markup, "https://example.com")
        http = extract_signals(parse(markup), markup, "http://example.com")

        assert assemble_report("https://example.com", https).https_score == 100
        assert assemble_report("http://example.com", http).https_score == 0
