"""Report assembler.

Combines signals, scores and recommendations into an AnalysisReport. The
assembler only formats; it never scores.
"""

from datetime import UTC, datetime

from worker.extraction.signals import SignalSet
from worker.fixes.recommendations import generate_recommendations
from worker.reports.contract import (
    NO_KEYWORDS,
    NO_META_DESCRIPTION,
    NO_TITLE,
    AnalysisReport,
    format_content_size,
    format_heading_summary,
    social_presence_labels,
    truncate_description,
)
from worker.scoring.calculator import ScoreSet, calculate_scores


class ReportAssembler:
    """Assembles analysis results into a report."""

    def assemble(
        self,
        url: str,
        signals: SignalSet,
        scores: ScoreSet,
        recommendations: list[str],
        analyzed_at: datetime | None = None,
    ) -> AnalysisReport:
        """
        Assemble a report from analysis results.

        Args:
            url: Normalized target address
            signals: Extracted signals
            scores: Scores computed from the signals
            recommendations: Recommendation messages in rule order
            analyzed_at: Capture time, defaults to now (UTC)

        Returns:
            AnalysisReport
        """
        if signals.meta_description is None:
            description = NO_META_DESCRIPTION
        else:
            description = truncate_description(signals.meta_description)

        return AnalysisReport(
            url=url,
            title=signals.title or NO_TITLE,
            analyzed_at=analyzed_at or datetime.now(UTC),
            signals=signals,
            scores=scores,
            recommendations=tuple(recommendations),
            meta_description=description,
            meta_keywords=signals.meta_keywords or NO_KEYWORDS,
            content_size=format_content_size(signals.content_size),
            heading_summary=format_heading_summary(
                signals.h1_count, signals.h2_count, signals.h3_count
            ),
            technologies=signals.technologies,
            social_presence=social_presence_labels(signals),
        )


def assemble_report(
    url: str,
    signals: SignalSet,
    analyzed_at: datetime | None = None,
) -> AnalysisReport:
    """
    Convenience function to score a SignalSet and assemble its report.

    Args:
        url: Normalized target address
        signals: Extracted signals
        analyzed_at: Optional capture time

    Returns:
        AnalysisReport
    """
    scores = calculate_scores(signals)
    recommendations = generate_recommendations(scores, signals)
    return ReportAssembler().assemble(url, signals, scores, recommendations, analyzed_at)
