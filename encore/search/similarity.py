"""
Similarity primitives used by the recommender and the duplicate detector.

Lexical similarity combines five sub-scores with a fixed-weight sum:

    0.2 * title + artist_weight * artist + genre_weight * genre
        + duration_weight * duration + tag_weight * tags

The genre and tag sub-scores are constants (0.5 and 0.3). Tags and genre are
extracted for feature vectors but are not compared here yet.
"""

from __future__ import annotations

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from ..config import SimilarityConfig
from ..extraction.vectors import FeatureVector, cosine_similarity
from ..models import Seed, describe


TITLE_WEIGHT = 0.2
GENRE_SIMILARITY = 0.5
TAG_SIMILARITY = 0.3
UNKNOWN_DURATION_SIMILARITY = 0.5
PARTIAL_ARTIST_SIMILARITY = 0.8
MAX_SHARED_WORD_ARTIST_SIMILARITY = 0.6
GENRE_BONUS = 0.2


def calculate_track_similarity(
    track_a: Seed,
    track_b: Seed,
    config: SimilarityConfig,
) -> float:
    """
    Weighted lexical similarity between two tracks or seeds.

    Not clamped: the result stays in [0, 1] only as long as the configured
    weights plus the fixed title weight do not exceed 1.
    """
    a = describe(track_a)
    b = describe(track_b)

    return (
        title_similarity(a.title, b.title) * TITLE_WEIGHT
        + artist_similarity(a.artist, b.artist) * config.artist_weight
        + genre_similarity(a, b) * config.genre_weight
        + duration_similarity(a.duration_ms, b.duration_ms) * config.duration_weight
        + tag_similarity(a, b) * config.tag_weight
    )


def title_similarity(title_a: str, title_b: str) -> float:
    """1.0 for equal titles, else Jaccard similarity of their word sets."""
    normalized_a = title_a.lower().strip()
    normalized_b = title_b.lower().strip()

    if normalized_a == normalized_b:
        return 1.0

    words_a = set(normalized_a.split())
    words_b = set(normalized_b.split())
    common = words_a & words_b
    if not common:
        return 0.0

    return len(common) / len(words_a | words_b)


def artist_similarity(artist_a: str, artist_b: str) -> float:
    """Exact match 1.0, containment 0.8, shared words up to 0.6, else 0."""
    normalized_a = artist_a.lower().strip()
    normalized_b = artist_b.lower().strip()

    if normalized_a == normalized_b:
        return 1.0

    # Collaborations ("X feat. Y") contain the solo name
    if normalized_a in normalized_b or normalized_b in normalized_a:
        return PARTIAL_ARTIST_SIMILARITY

    words_a = normalized_a.split()
    words_b = normalized_b.split()
    common = set(words_a) & set(words_b)
    if common:
        return min(len(common) / max(len(words_a), len(words_b)), MAX_SHARED_WORD_ARTIST_SIMILARITY)

    return 0.0


def duration_similarity(duration_a: int, duration_b: int) -> float:
    """Ratio of shorter to longer duration; 0.5 when either is unknown."""
    if duration_a <= 0 or duration_b <= 0:
        return UNKNOWN_DURATION_SIMILARITY
    return min(duration_a, duration_b) / max(duration_a, duration_b)


def genre_similarity(_a, _b) -> float:
    # TODO: compare genre_from_tags() results once the weighting is agreed.
    return GENRE_SIMILARITY


def tag_similarity(_a, _b) -> float:
    # TODO: tag-set overlap, wired in together with genre_similarity.
    return TAG_SIMILARITY


def calculate_vector_similarity(
    vector_a: FeatureVector,
    vector_b: FeatureVector,
    config: SimilarityConfig | None = None,
) -> float:
    """Cosine similarity plus a 0.2 bonus for an equal genre, capped at 1.0."""
    cosine = cosine_similarity(vector_a.vector, vector_b.vector)

    genre_bonus = 0.0
    if vector_a.genre and vector_b.genre and vector_a.genre == vector_b.genre:
        genre_bonus = GENRE_BONUS

    return min(cosine + genre_bonus, 1.0)


def calculate_diversity_score(
    tracks: Sequence[Seed],
    config: SimilarityConfig,
) -> float:
    """
    One minus the average pairwise lexical similarity of a set of tracks.

    A set of zero or one tracks is maximally diverse (1.0).
    """
    if len(tracks) <= 1:
        return 1.0

    total = 0.0
    comparisons = 0
    for i in range(len(tracks)):
        for j in range(i + 1, len(tracks)):
            total += calculate_track_similarity(tracks[i], tracks[j], config)
            comparisons += 1

    return 1.0 - total / comparisons


def calculate_string_similarity(str_a: str, str_b: str) -> float:
    """
    Edit-distance similarity: (max_len - levenshtein) / max_len.

    Symmetric, 1.0 for identical strings (including two empty strings).
    """
    max_len = max(len(str_a), len(str_b))
    if max_len == 0:
        return 1.0

    distance = Levenshtein.distance(str_a, str_b)
    return (max_len - distance) / max_len
