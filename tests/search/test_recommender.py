"""Tests for encore.search.recommender."""

import pytest

from encore.config import SimilarityConfig
from encore.models import PreferenceSummary
from encore.search.recommender import (
    RecommendationEngine,
    generate_history_based_recommendations,
    generate_recommendations,
    generate_user_preference_recommendations,
)

pytestmark = pytest.mark.unit


def _keys(results):
    return [rec.key for rec in results]


class TestGenerateRecommendations:
    def test_remix_scenario_reasons(self, seed_track, track_factory, no_diversity_config):
        remix = track_factory(id="c1", title="Song A (Remix)", artist="Artist X", duration_ms=210_000)
        results = generate_recommendations(seed_track, [remix], no_diversity_config)

        assert _keys(results) == ["c1"]
        assert results[0].reasons == (
            "Similar style to your current track",
            "Same artist",
            "Similar duration",
        )
        assert 0.0 <= results[0].score <= 1.0

    def test_scores_non_increasing(self, seed_track, candidate_pool, no_diversity_config):
        results = generate_recommendations(seed_track, candidate_pool, no_diversity_config)
        scores = [rec.score for rec in results]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= score <= 1.0 for score in scores)

    def test_respects_max_recommendations(self, seed_track, candidate_pool):
        config = SimilarityConfig(max_recommendations=2, diversity_factor=0.0)
        assert len(generate_recommendations(seed_track, candidate_pool, config)) == 2

    def test_excludes_by_id(self, seed_track, candidate_pool, no_diversity_config):
        results = generate_recommendations(seed_track, candidate_pool, no_diversity_config, exclude_ids={"c1", "c2"})
        assert "c1" not in _keys(results)
        assert "c2" not in _keys(results)

    def test_excludes_by_url(self, seed_track, track_factory, no_diversity_config):
        candidate = track_factory(id="c9", url="https://example.com/c9")
        results = generate_recommendations(
            seed_track, [candidate], no_diversity_config, exclude_ids=["https://example.com/c9"]
        )
        assert results == []

    def test_single_string_exclude_id(self, seed_track, candidate_pool, no_diversity_config):
        results = generate_recommendations(seed_track, candidate_pool, no_diversity_config, exclude_ids="c1")
        assert sorted(_keys(results)) == ["c2", "c3", "c4", "c5"]

    def test_threshold_filters_weak_candidates(self, seed_track, candidate_pool):
        config = SimilarityConfig(similarity_threshold=0.5, diversity_factor=0.0)
        results = generate_recommendations(seed_track, candidate_pool, config)
        assert "c4" not in _keys(results)
        assert "c1" in _keys(results)

    def test_empty_pool(self, seed_track, similarity_config):
        assert generate_recommendations(seed_track, [], similarity_config) == []

    def test_high_diversity_shrinks_results(self, seed_track, candidate_pool):
        config = SimilarityConfig(diversity_factor=0.99)
        assert len(generate_recommendations(seed_track, candidate_pool, config)) == 1

    def test_zero_diversity_keeps_everything_above_threshold(self, seed_track, candidate_pool, no_diversity_config):
        results = generate_recommendations(seed_track, candidate_pool, no_diversity_config)
        assert sorted(_keys(results)) == ["c1", "c2", "c3", "c4", "c5"]

    def test_bad_seed_fails_open(self, candidate_pool, similarity_config):
        assert generate_recommendations("not a track", candidate_pool, similarity_config) == []

    def test_does_not_mutate_inputs(self, seed_track, candidate_pool, similarity_config):
        pool = list(candidate_pool)
        generate_recommendations(seed_track, pool, similarity_config)
        assert pool == candidate_pool


class TestPreferenceRecommendations:
    def test_top_artist_gets_same_artist_reason(self, candidate_pool, no_diversity_config):
        summary = PreferenceSummary(genres=("rock",), artists=("Artist X",), avg_duration_s=200)
        results = generate_user_preference_recommendations(summary, candidate_pool, no_diversity_config)

        by_key = {rec.key: rec for rec in results}
        assert "Same artist" in by_key["c1"].reasons
        assert "Similar duration" in by_key["c1"].reasons

    def test_list_shaped_summary(self, candidate_pool, no_diversity_config):
        from_lists = PreferenceSummary(genres=["rock"], artists=["Artist X"], avg_duration_s=200)
        from_tuples = PreferenceSummary(genres=("rock",), artists=("Artist X",), avg_duration_s=200)

        results = generate_user_preference_recommendations(from_lists, candidate_pool, no_diversity_config)
        assert len(results) == 5
        assert results == generate_user_preference_recommendations(
            from_tuples, candidate_pool, no_diversity_config
        )

    def test_string_exclude_id(self, candidate_pool, no_diversity_config):
        summary = PreferenceSummary(genres=("rock",), artists=("Artist X",), avg_duration_s=200)
        results = generate_user_preference_recommendations(
            summary, candidate_pool, no_diversity_config, exclude_ids="c1"
        )
        assert "c1" not in _keys(results)
        assert len(results) == 4

    def test_empty_preferences_still_score(self, candidate_pool, no_diversity_config):
        results = generate_user_preference_recommendations(PreferenceSummary(), candidate_pool, no_diversity_config)
        assert all(0.0 <= rec.score <= 1.0 for rec in results)


class TestHistoryRecommendations:
    def test_empty_history(self, candidate_pool, similarity_config):
        assert generate_history_based_recommendations([], candidate_pool, similarity_config) == []

    def test_single_entry_matches_seed_mode(self, seed_track, candidate_pool, similarity_config):
        from_history = generate_history_based_recommendations([seed_track], candidate_pool, similarity_config)
        from_seed = generate_recommendations(seed_track, candidate_pool, similarity_config)
        assert from_history == from_seed

    def test_accepts_history_entries(self, entry_factory, candidate_pool, no_diversity_config):
        entry = entry_factory(title="Song A", artist="Artist X")
        results = generate_history_based_recommendations([entry], candidate_pool, no_diversity_config)
        assert "c1" in _keys(results)

    def test_blends_secondary_seeds(self, seed_track, track_factory, candidate_pool, no_diversity_config):
        second = track_factory(id="h2", title="Song B", artist="Artist X", duration_ms=190_000)
        blended = generate_history_based_recommendations([seed_track, second], candidate_pool, no_diversity_config)

        primary = {rec.key: rec for rec in generate_recommendations(seed_track, candidate_pool, no_diversity_config)}
        secondary = {rec.key: rec for rec in generate_recommendations(second, candidate_pool, no_diversity_config)}

        merged = {rec.key: rec for rec in blended}
        assert merged["c1"].score == pytest.approx((primary["c1"].score + secondary["c1"].score) / 2)
        assert merged["c1"].reasons == primary["c1"].reasons + secondary["c1"].reasons

        scores = [rec.score for rec in blended]
        assert scores == sorted(scores, reverse=True)

    def test_string_exclude_id(self, seed_track, candidate_pool, no_diversity_config):
        results = generate_history_based_recommendations(
            [seed_track], candidate_pool, no_diversity_config, exclude_ids="c2"
        )
        assert "c2" not in _keys(results)
        assert "c1" in _keys(results)

    def test_blend_respects_max(self, seed_track, track_factory, candidate_pool):
        config = SimilarityConfig(max_recommendations=3, diversity_factor=0.0)
        history = [seed_track] + [track_factory(id=f"h{i}", title=f"Song {i}") for i in range(6)]
        assert len(generate_history_based_recommendations(history, candidate_pool, config)) <= 3


class TestRecommendationEngine:
    def test_uses_bound_config(self, seed_track, candidate_pool):
        engine = RecommendationEngine(SimilarityConfig(max_recommendations=1, diversity_factor=0.0))
        assert len(engine.recommend(seed_track, candidate_pool)) == 1

    def test_default_config(self):
        assert RecommendationEngine().config == SimilarityConfig()

    def test_history_mode(self, seed_track, candidate_pool):
        engine = RecommendationEngine()
        assert engine.recommend_from_history([seed_track], candidate_pool) == engine.recommend(seed_track, candidate_pool)
