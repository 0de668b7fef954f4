"""
Track feature extraction.

Public API:
    extract_tags / extract_genre - keyword tags and coarse genre from text fields
    create_track_vector          - FeatureVector for a real or synthetic seed
    build_feature_vector         - raw FEATURE_DIM encoding of a descriptor
    cosine_similarity, euclidean_distance, normalize_vector - vector utilities
"""

from .tags import extract_genre, extract_tags, genre_from_tags
from .vectors import (
    FEATURE_DIM,
    FeatureVector,
    build_feature_vector,
    cosine_similarity,
    create_track_vector,
    euclidean_distance,
    normalize_vector,
)

__all__ = [
    'extract_tags',
    'extract_genre',
    'genre_from_tags',
    'FEATURE_DIM',
    'FeatureVector',
    'build_feature_vector',
    'create_track_vector',
    'cosine_similarity',
    'euclidean_distance',
    'normalize_vector',
]
