"""Report contract and presentation formatting.

Defines the AnalysisReport produced for every successful analysis and the
display strings derived from its signals. Display strings live here, not in
the extractor or scorer, so scoring stays independent of rendering.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from worker.extraction.fingerprints import presence_label
from worker.extraction.signals import SignalSet
from worker.scoring.calculator import ScoreSet, round_half_up

# Sentinels shown when a signal is absent
NO_TITLE = "No title found"
NO_META_DESCRIPTION = "No meta description"
NO_KEYWORDS = "No keywords"

META_DESCRIPTION_MAX_LENGTH = 160
ELLIPSIS = "..."


class ReportVersion(str, Enum):
    """Report schema versions."""

    V1_0 = "1.0"


CURRENT_VERSION = ReportVersion.V1_0


def truncate_description(description: str, limit: int = META_DESCRIPTION_MAX_LENGTH) -> str:
    """Cut a description to ``limit`` characters, adding an ellipsis only if cut."""
    if len(description) <= limit:
        return description
    return description[:limit] + ELLIPSIS


def format_content_size(size_bytes: int) -> str:
    """Content size in whole kilobytes, e.g. ``"42 KB"``."""
    return f"{round_half_up(size_bytes / 1024)} KB"


def format_heading_summary(h1: int, h2: int, h3: int) -> str:
    return f"H1: {h1}, H2: {h2}, H3: {h3}"


@dataclass(frozen=True)
class AnalysisReport:
    """Complete, immutable result of analysing one address."""

    url: str
    title: str
    analyzed_at: datetime
    signals: SignalSet
    scores: ScoreSet
    recommendations: tuple[str, ...]

    # Presentation strings
    meta_description: str
    meta_keywords: str
    content_size: str
    heading_summary: str

    technologies: tuple[str, ...] = ()
    social_presence: Mapping[str, str] = field(default_factory=dict, hash=False)
    version: ReportVersion = CURRENT_VERSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "social_presence", MappingProxyType(dict(self.social_presence)))

    @property
    def alt_coverage_percent(self) -> float:
        return self.signals.alt_coverage_percent

    @property
    def alt_coverage_display(self) -> int:
        """Whole-percent alt coverage, rounded half up."""
        return round_half_up(self.alt_coverage_percent)

    @property
    def https_score(self) -> int:
        """HTTPS flag expressed on the 0-100 scale used for banding."""
        return 100 if self.signals.is_https else 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "version": self.version.value,
            "url": self.url,
            "title": self.title,
            "analyzed_at": self.analyzed_at.isoformat(),
            "scores": self.scores.to_dict(),
            "recommendations": list(self.recommendations),
            "meta_description": self.meta_description,
            "meta_keywords": self.meta_keywords,
            "content_size": self.content_size,
            "heading_summary": self.heading_summary,
            "alt_coverage_percent": round(self.alt_coverage_percent, 2),
            "technologies": list(self.technologies),
            "social_presence": dict(self.social_presence),
            "signals": self.signals.to_dict(),
        }


def social_presence_labels(signals: SignalSet) -> Mapping[str, str]:
    """Map each network to "Found" / "Not found", read-only."""
    return MappingProxyType(
        {network: presence_label(found) for network, found in signals.social_links.items()}
    )
