"""Recommendation rules.

Each rule checks one condition against the scores and signals and, when it
holds, contributes one fixed message. Rules are evaluated in declaration
order and every rule is checked; the output order is the rule order, never a
severity ranking.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from worker.extraction.signals import SignalSet
from worker.scoring.calculator import ScoreSet


class RecommendationCode(str, Enum):
    """Stable identifiers for recommendation rules."""

    IMPROVE_SEO = "improve_seo"
    ADD_META_DESCRIPTION = "add_meta_description"
    ADD_ALT_TEXT = "add_alt_text"
    ENABLE_HTTPS = "enable_https"
    OPTIMIZE_PERFORMANCE = "optimize_performance"
    IMPROVE_ACCESSIBILITY = "improve_accessibility"


@dataclass(frozen=True)
class RecommendationRule:
    """A condition and the message it produces."""

    code: RecommendationCode
    message: str
    applies: Callable[[ScoreSet, SignalSet], bool]

    def to_dict(self) -> dict:
        return {"code": self.code.value, "message": self.message}


RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        code=RecommendationCode.IMPROVE_SEO,
        message="Improve SEO by adding missing meta tags, canonical links, and structured data",
        applies=lambda scores, signals: scores.seo < 80,
    ),
    RecommendationRule(
        code=RecommendationCode.ADD_META_DESCRIPTION,
        message="Add a meta description to improve search engine visibility",
        applies=lambda scores, signals: not signals.has_meta_description,
    ),
    RecommendationRule(
        code=RecommendationCode.ADD_ALT_TEXT,
        message="Add alt text to images for better accessibility",
        applies=lambda scores, signals: signals.alt_coverage_percent < 80,
    ),
    RecommendationRule(
        code=RecommendationCode.ENABLE_HTTPS,
        message="Enable HTTPS to secure your website and improve trust",
        applies=lambda scores, signals: not signals.is_https,
    ),
    RecommendationRule(
        code=RecommendationCode.OPTIMIZE_PERFORMANCE,
        message="Optimize page size and reduce the number of images to improve performance",
        applies=lambda scores, signals: scores.performance < 70,
    ),
    RecommendationRule(
        code=RecommendationCode.IMPROVE_ACCESSIBILITY,
        message="Improve accessibility with a viewport meta tag, headings, and image alt text",
        applies=lambda scores, signals: scores.accessibility < 70,
    ),
)


def matching_rules(scores: ScoreSet, signals: SignalSet) -> list[RecommendationRule]:
    """Get the rules that fire, in rule order."""
    return [rule for rule in RECOMMENDATION_RULES if rule.applies(scores, signals)]


def generate_recommendations(scores: ScoreSet, signals: SignalSet) -> list[str]:
    """
    Generate recommendation messages for a page.

    Args:
        scores: Category scores for the page
        signals: Signals the scores were computed from

    Returns:
        Messages in rule order, at most one per rule
    """
    return [rule.message for rule in matching_rules(scores, signals)]
