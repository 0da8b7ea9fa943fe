"""Improvement recommendations derived from scores and signals."""

# Use explicit imports when needed:
# from worker.fixes.recommendations import RecommendationCode, generate_recommendations

__all__ = [
    "RecommendationCode",
    "RecommendationRule",
    "RECOMMENDATION_RULES",
    "generate_recommendations",
    "matching_rules",
]
