"""Category scoring package (SEO, security, accessibility, performance)."""

# Use explicit imports when needed:
# from worker.scoring.calculator import ScoreSet, calculate_scores

__all__ = [
    "ScoreSet",
    "calculate_scores",
    "calculate_seo_score",
    "calculate_security_score",
    "calculate_accessibility_score",
    "calculate_performance_score",
    "round_half_up",
]
