"""Tests for encore.search.similarity."""

import pytest

from encore.extraction.vectors import create_track_vector
from encore.search.similarity import (
    artist_similarity,
    calculate_diversity_score,
    calculate_string_similarity,
    calculate_track_similarity,
    calculate_vector_similarity,
    duration_similarity,
    title_similarity,
)

pytestmark = pytest.mark.unit


class TestStringSimilarity:
    def test_identity(self):
        assert calculate_string_similarity("Hello", "Hello") == 1.0

    def test_both_empty(self):
        assert calculate_string_similarity("", "") == 1.0

    def test_one_empty(self):
        assert calculate_string_similarity("abc", "") == 0.0

    def test_single_insertion(self):
        assert calculate_string_similarity("Hello World", "Hello World!") == pytest.approx(11 / 12)

    @pytest.mark.parametrize("a, b", [("kitten", "sitting"), ("song", "a longer song"), ("x", "yz")])
    def test_symmetric(self, a, b):
        assert calculate_string_similarity(a, b) == calculate_string_similarity(b, a)


class TestComponentSimilarities:
    def test_title_equal_ignores_case_and_padding(self):
        assert title_similarity(" Song A ", "song a") == 1.0

    def test_title_jaccard(self):
        assert title_similarity("Song A", "Song A (Remix)") == pytest.approx(2 / 3)

    def test_title_disjoint(self):
        assert title_similarity("One", "Two") == 0.0

    def test_artist_exact(self):
        assert artist_similarity("Artist X", "artist x") == 1.0

    def test_artist_containment(self):
        assert artist_similarity("Artist X", "Artist X feat. Y") == 0.8

    def test_artist_shared_words(self):
        assert artist_similarity("The Beatles", "The Rolling Stones") == pytest.approx(1 / 3)

    def test_artist_shared_words_capped(self):
        assert artist_similarity("Big Band Theory", "Theory Big Band Live") == 0.6

    def test_artist_unrelated(self):
        assert artist_similarity("Artist X", "Band Z") == 0.0

    def test_duration_ratio(self):
        assert duration_similarity(100_000, 200_000) == 0.5
        assert duration_similarity(200_000, 200_000) == 1.0

    def test_duration_unknown(self):
        assert duration_similarity(0, 200_000) == 0.5


class TestTrackSimilarity:
    def test_remix_of_same_song(self, seed_track, track_factory, similarity_config):
        remix = track_factory(id="c1", title="Song A (Remix)", artist="Artist X", duration_ms=210_000)
        expected = (2 / 3) * 0.2 + 0.2 + 0.5 * 0.4 + (200 / 210) * 0.05 + 0.3 * 0.3
        assert calculate_track_similarity(seed_track, remix, similarity_config) == pytest.approx(expected)

    def test_identical_tracks(self, seed_track, similarity_config):
        assert calculate_track_similarity(seed_track, seed_track, similarity_config) == pytest.approx(0.74)

    def test_symmetric(self, seed_track, candidate_pool, similarity_config):
        for candidate in candidate_pool:
            forward = calculate_track_similarity(seed_track, candidate, similarity_config)
            backward = calculate_track_similarity(candidate, seed_track, similarity_config)
            assert forward == pytest.approx(backward)


class TestVectorSimilarity:
    def test_same_genre_capped_at_one(self, track_factory):
        fv = create_track_vector(track_factory(title="Jazz Night"))
        assert calculate_vector_similarity(fv, fv) == 1.0

    def test_genre_bonus_applied(self, track_factory):
        a = create_track_vector(track_factory(title="Jazz Night", duration_ms=200_000))
        b = create_track_vector(track_factory(title="Jazz", artist="Someone Else", duration_ms=90_000))
        c = create_track_vector(track_factory(title="Blues", artist="Someone Else", duration_ms=90_000))
        assert calculate_vector_similarity(a, b) > calculate_vector_similarity(a, c)


class TestDiversityScore:
    def test_single_track(self, seed_track, similarity_config):
        assert calculate_diversity_score([seed_track], similarity_config) == 1.0

    def test_empty(self, similarity_config):
        assert calculate_diversity_score([], similarity_config) == 1.0

    def test_identical_pair(self, seed_track, similarity_config):
        assert calculate_diversity_score([seed_track, seed_track], similarity_config) == pytest.approx(0.26)
