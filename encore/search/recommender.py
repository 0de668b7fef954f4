"""
Content-based track recommendations.

All three modes funnel into one scan over the candidate pool:

    generate_recommendations()                  - a real seed track
    generate_user_preference_recommendations()  - a synthetic seed built from
                                                  aggregated preferences
    generate_history_based_recommendations()    - newest history entry as the
                                                  primary seed, blended with
                                                  up to 4 secondary seeds

Each candidate that clears config.similarity_threshold on lexical
similarity is scored as the mean of lexical and vector similarity, sorted,
diversity filtered and truncated to config.max_recommendations.

The public functions are fail-open: they never raise. Any internal error
is logged and an empty list is returned, so playback can carry on without
recommendations.

Usage:
    from encore.config import SimilarityConfig
    from encore.search.recommender import generate_recommendations

    results = generate_recommendations(seed, candidates, SimilarityConfig(), exclude_ids={"abc"})
    for rec in results:
        print(rec.track.title, rec.score, rec.reasons)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..config import SimilarityConfig
from ..errors import fail_open
from ..extraction.vectors import FeatureVector, create_track_vector
from ..models import (
    HistoryEntry,
    PreferenceSeed,
    PreferenceSummary,
    RecommendationResult,
    Seed,
    Track,
    describe,
)
from .diversity import apply_diversity_filter
from .similarity import calculate_track_similarity, calculate_vector_similarity

logger = logging.getLogger(__name__)

MAX_SECONDARY_SEEDS = 4
SIMILAR_DURATION_MS = 30_000

REASON_VERY_SIMILAR = "Very similar to your current track"
REASON_SIMILAR_STYLE = "Similar style to your current track"
REASON_LISTENING_PATTERNS = "Matches your listening patterns"
REASON_SAME_ARTIST = "Same artist"
REASON_SIMILAR_DURATION = "Similar duration"
REASON_FALLBACK = "Recommended based on your preferences"


def _exclusion_set(exclude_ids: Iterable[str] | str | None) -> set[str]:
    """A single id or URL counts as one key, not as its characters."""
    if not exclude_ids:
        return set()
    if isinstance(exclude_ids, str):
        return {exclude_ids}
    return set(exclude_ids)


def _is_excluded(track: Track, excluded: set[str]) -> bool:
    return any(value and value in excluded for value in (track.id, track.url))


def _generate_reasons(
    seed: Seed,
    candidate: Track,
    lexical: float,
    vector: float,
) -> tuple[str, ...]:
    seed_descriptor = describe(seed)
    reasons: list[str] = []

    if lexical > 0.8:
        reasons.append(REASON_VERY_SIMILAR)
    elif lexical > 0.6:
        reasons.append(REASON_SIMILAR_STYLE)

    if vector > 0.7:
        reasons.append(REASON_LISTENING_PATTERNS)

    if seed_descriptor.artist == candidate.artist:
        reasons.append(REASON_SAME_ARTIST)

    if abs(seed_descriptor.duration_ms - candidate.duration_ms) < SIMILAR_DURATION_MS:
        reasons.append(REASON_SIMILAR_DURATION)

    return tuple(reasons) if reasons else (REASON_FALLBACK,)


def _score_candidates(
    seed: Seed,
    candidates: Sequence[Track],
    config: SimilarityConfig,
    excluded: set[str],
    vectors: dict[int, FeatureVector],
) -> list[RecommendationResult]:
    """Run the base scan for one seed. Raises on internal errors."""

    # Keyed by identity; a seed may carry unhashable fields.
    def vector_for(item: Seed) -> FeatureVector:
        key = id(item)
        if key not in vectors:
            vectors[key] = create_track_vector(item)
        return vectors[key]

    seed_vector = vector_for(seed)
    recommendations: list[RecommendationResult] = []

    for candidate in candidates:
        if _is_excluded(candidate, excluded):
            continue

        lexical = calculate_track_similarity(seed, candidate, config)
        if lexical < config.similarity_threshold:
            continue

        vector = calculate_vector_similarity(seed_vector, vector_for(candidate), config)
        score = min(max((lexical + vector) / 2, 0.0), 1.0)

        recommendations.append(
            RecommendationResult(
                track=candidate,
                score=score,
                reasons=_generate_reasons(seed, candidate, lexical, vector),
            )
        )

    recommendations.sort(key=lambda rec: rec.score, reverse=True)
    diverse = apply_diversity_filter(recommendations, config)

    logger.debug(
        f"Seed '{describe(seed).title}': {len(recommendations)} above threshold, "
        f"{len(diverse)} after diversity filter"
    )
    return diverse[:config.max_recommendations]


def _blend(
    primary: list[RecommendationResult],
    secondary_seeds: Sequence[Track],
    candidates: Sequence[Track],
    config: SimilarityConfig,
    excluded: set[str],
    vectors: dict[int, FeatureVector],
) -> list[RecommendationResult]:
    """Merge secondary-seed results into the primary ones by track key."""
    merged: dict[str, RecommendationResult] = {rec.key: rec for rec in primary}

    for seed in secondary_seeds:
        for rec in _score_candidates(seed, candidates, config, excluded, vectors):
            existing = merged.get(rec.key)
            if existing is None:
                merged[rec.key] = rec
            else:
                merged[rec.key] = replace(
                    existing,
                    score=(existing.score + rec.score) / 2,
                    reasons=existing.reasons + rec.reasons,
                )

    blended = sorted(merged.values(), key=lambda rec: rec.score, reverse=True)
    return blended[:config.max_recommendations]


@fail_open(list)
def generate_recommendations(
    seed: Seed,
    candidates: Sequence[Track],
    config: SimilarityConfig,
    exclude_ids: Iterable[str] | str | None = None,
) -> list[RecommendationResult]:
    """
    Recommend candidates similar to a seed track.

    Args:
        seed: Reference track, or a PreferenceSeed
        candidates: Candidate pool supplied by the caller
        config: Scoring configuration (never mutated)
        exclude_ids: Track ids or URLs that must not be returned

    Returns:
        At most config.max_recommendations results, scores non-increasing.
        Never raises; returns [] on internal error.
    """
    excluded = _exclusion_set(exclude_ids)
    return _score_candidates(seed, candidates, config, excluded, {})


@fail_open(list)
def generate_user_preference_recommendations(
    preferences: PreferenceSummary,
    candidates: Sequence[Track],
    config: SimilarityConfig,
    exclude_ids: Iterable[str] | str | None = None,
) -> list[RecommendationResult]:
    """
    Recommend candidates for a listener's aggregated preferences.

    The summary becomes a synthetic seed (top artist, top genre in the
    description, average duration) that runs through the seed-track scan.
    Never raises; returns [] on internal error.
    """
    excluded = _exclusion_set(exclude_ids)
    return _score_candidates(PreferenceSeed(preferences), candidates, config, excluded, {})


@fail_open(list)
def generate_history_based_recommendations(
    recent_history: Sequence[Track | HistoryEntry],
    candidates: Sequence[Track],
    config: SimilarityConfig,
    exclude_ids: Iterable[str] | str | None = None,
) -> list[RecommendationResult]:
    """
    Recommend candidates from recent listening history (newest first).

    The newest entry is the primary seed. Up to 4 further entries act as
    secondary seeds whose results are merged by track key: a track found by
    several seeds gets the running average score and the concatenated
    reasons. With a single entry no blending happens.
    Never raises; returns [] on internal error or empty history.
    """
    if not recent_history:
        return []

    seeds = [
        entry.to_track() if isinstance(entry, HistoryEntry) else entry
        for entry in recent_history[:MAX_SECONDARY_SEEDS + 1]
    ]
    excluded = _exclusion_set(exclude_ids)
    vectors: dict[int, FeatureVector] = {}

    primary = _score_candidates(seeds[0], candidates, config, excluded, vectors)
    if len(seeds) == 1:
        return primary

    return _blend(primary, seeds[1:], candidates, config, excluded, vectors)


class RecommendationEngine:
    """
    A recommendation engine bound to one SimilarityConfig.

    Shared by every caller that needs recommendations (queue autoplay,
    personalised mixes) instead of each holding its own copy.

    Example:
        engine = RecommendationEngine(SimilarityConfig(max_recommendations=5))
        engine.recommend(seed_track, candidates, exclude_ids=recent_ids)
    """

    def __init__(self, config: SimilarityConfig | None = None):
        self.config = config or SimilarityConfig()

    def recommend(
        self,
        seed: Seed,
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        return generate_recommendations(seed, candidates, self.config, exclude_ids)

    def recommend_for_preferences(
        self,
        preferences: PreferenceSummary,
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        return generate_user_preference_recommendations(
            preferences, candidates, self.config, exclude_ids
        )

    def recommend_from_history(
        self,
        recent_history: Sequence[Track | HistoryEntry],
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        return generate_history_based_recommendations(
            recent_history, candidates, self.config, exclude_ids
        )
