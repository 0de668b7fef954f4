"""
Track similarity and recommendation.

Public API:
    RecommendationEngine - recommendation modes bound to one SimilarityConfig
    generate_recommendations / generate_user_preference_recommendations /
    generate_history_based_recommendations - fail-open recommendation calls
    apply_diversity_filter - greedy pruning of a score-sorted list
    calculate_track_similarity, calculate_vector_similarity,
    calculate_diversity_score, calculate_string_similarity - scoring primitives
"""

from ..errors import fail_open
from .diversity import apply_diversity_filter
from .recommender import (
    RecommendationEngine,
    generate_history_based_recommendations,
    generate_recommendations,
    generate_user_preference_recommendations,
)
from .similarity import (
    calculate_diversity_score,
    calculate_string_similarity,
    calculate_track_similarity,
    calculate_vector_similarity,
)

__all__ = [
    'RecommendationEngine',
    'fail_open',
    'generate_recommendations',
    'generate_user_preference_recommendations',
    'generate_history_based_recommendations',
    'apply_diversity_filter',
    'calculate_track_similarity',
    'calculate_vector_similarity',
    'calculate_diversity_score',
    'calculate_string_similarity',
]
