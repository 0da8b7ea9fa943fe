"""Category score calculator.

Four independent scores (SEO, security, accessibility, performance), each
0-100 and each a pure function of a SignalSet. Recomputing from the same
signals always gives the same ScoreSet.
"""

import math
from dataclasses import dataclass

from worker.extraction.signals import SignalSet

# Points per signal within the SEO score (total = 100)
SEO_WEIGHTS = {
    "title": 20,
    "meta_description": 20,
    "h1": 15,
    "canonical": 15,
    "meta_robots": 15,
    "structured_data": 15,
}

SECURITY_WEIGHTS = {
    "https": 70,
    "meta_robots": 30,
}

# Accessibility: alt coverage counts for at most this many points
ALT_COVERAGE_CAP = 50
VIEWPORT_POINTS = 25
HEADING_POINTS = 25

# Performance deductions (applied at most once per category)
LARGE_PAGE_BYTES = 1024 * 1024
MEDIUM_PAGE_BYTES = 512 * 1024
LARGE_PAGE_PENALTY = 30
MEDIUM_PAGE_PENALTY = 15
MANY_IMAGES = 50
SOME_IMAGES = 20
MANY_IMAGES_PENALTY = 20
SOME_IMAGES_PENALTY = 10


@dataclass(frozen=True)
class ScoreSet:
    """The four category scores for one page."""

    seo: int
    security: int
    accessibility: int
    performance: int

    @property
    def average(self) -> int:
        """Rounded mean of the four scores."""
        total = self.seo + self.security + self.accessibility + self.performance
        return round_half_up(total / 4)

    def to_dict(self) -> dict:
        return {
            "seo": self.seo,
            "security": self.security,
            "accessibility": self.accessibility,
            "performance": self.performance,
            "average": self.average,
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _clamp(score: float) -> int:
    return int(max(0, min(100, score)))


def calculate_seo_score(signals: SignalSet) -> int:
    """Sum the weights of the SEO signals that are present."""
    present = {
        "title": signals.has_title,
        "meta_description": signals.has_meta_description,
        "h1": signals.has_h1,
        "canonical": signals.has_canonical,
        "meta_robots": signals.has_meta_robots,
        "structured_data": signals.has_structured_data,
    }
    return _clamp(sum(SEO_WEIGHTS[name] for name, ok in present.items() if ok))


def calculate_security_score(signals: SignalSet) -> int:
    score = 0
    if signals.is_https:
        score += SECURITY_WEIGHTS["https"]
    if signals.has_meta_robots:
        score += SECURITY_WEIGHTS["meta_robots"]
    return _clamp(score)


def calculate_accessibility_score(signals: SignalSet) -> int:
    """
    Alt-text coverage (capped at 50 points) plus viewport and heading points.

    Rounded half up as a whole, not per component.
    """
    score = min(signals.alt_coverage_percent, ALT_COVERAGE_CAP)
    if signals.has_viewport:
        score += VIEWPORT_POINTS
    if signals.has_any_heading:
        score += HEADING_POINTS
    return _clamp(round_half_up(score))


def calculate_performance_score(signals: SignalSet) -> int:
    """Start from 100 and deduct for page weight and image count."""
    score = 100

    if signals.content_size > LARGE_PAGE_BYTES:
        score -= LARGE_PAGE_PENALTY
    elif signals.content_size > MEDIUM_PAGE_BYTES:
        score -= MEDIUM_PAGE_PENALTY

    if signals.image_count > MANY_IMAGES:
        score -= MANY_IMAGES_PENALTY
    elif signals.image_count > SOME_IMAGES:
        score -= SOME_IMAGES_PENALTY

    return _clamp(score)


def calculate_scores(signals: SignalSet) -> ScoreSet:
    """
    Calculate all four category scores.

    Args:
        signals: Signals extracted from one page

    Returns:
        ScoreSet with every score in [0, 100]
    """
    return ScoreSet(
        seo=calculate_seo_score(signals),
        security=calculate_security_score(signals),
        accessibility=calculate_accessibility_score(signals),
        performance=calculate_performance_score(signals),
    )
