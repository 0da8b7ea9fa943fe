"""Standalone HTML export of an analysis report.

Renders a single self-contained document: all styling is inline and the
document references no external resources, so it can be saved and opened
offline.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from worker.reports.contract import AnalysisReport

TEMPLATES_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "report.html"

EXPORT_MEDIA_TYPE = "text/html"
EXPORT_FILENAME_PREFIX = "website-benchmark"

# Score bands, used for every score and for the HTTPS flag
BAND_NORMAL = "normal"
BAND_WARNING = "warning"
BAND_DANGER = "danger"


def score_band(score: float) -> str:
    """Band for a 0-100 score: normal >= 80, warning 60-79, danger < 60."""
    if score >= 80:
        return BAND_NORMAL
    elif score >= 60:
        return BAND_WARNING
    else:
        return BAND_DANGER


def export_filename(report: AnalysisReport, on: date | None = None) -> str:
    """File name for an exported report, dated by the analysis unless given."""
    day = on or report.analyzed_at.date()
    return f"{EXPORT_FILENAME_PREFIX}-{day.isoformat()}.html"


@dataclass(frozen=True)
class ExportedDocument:
    """A rendered report ready for download."""

    filename: str
    content: str
    media_type: str = EXPORT_MEDIA_TYPE

    @property
    def content_bytes(self) -> bytes:
        return self.content.encode("utf-8")


class ReportExporter:
    """Renders AnalysisReports with the bundled Jinja2 template."""

    def __init__(self, templates_dir: Path | None = None):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["band"] = score_band

    def render(self, report: AnalysisReport) -> str:
        """Render the report document."""
        template = self.env.get_template(REPORT_TEMPLATE)
        signals = report.signals
        return template.render(
            report=report,
            signals=signals,
            scores=report.scores,
            score_cards=[
                ("SEO", report.scores.seo),
                ("Security", report.scores.security),
                ("Accessibility", report.scores.accessibility),
                ("Performance", report.scores.performance),
            ],
            content_rows=[
                ("Words", signals.word_count),
                ("Images", signals.image_count),
                ("Images with alt text", signals.images_with_alt),
                ("Links", signals.link_count),
                ("External links", signals.external_link_count),
                ("Forms", signals.form_count),
            ],
        )

    def export(self, report: AnalysisReport, on: date | None = None) -> ExportedDocument:
        """Render the report and name it for download."""
        return ExportedDocument(
            filename=export_filename(report, on),
            content=self.render(report),
        )


def export_report(report: AnalysisReport, on: date | None = None) -> ExportedDocument:
    """Convenience function to export a report with the default template."""
    return ReportExporter().export(report, on)
