"""Tests for encore.formatting."""

import pytest

from encore.cache import LRUCache
from encore.formatting import (
    TrackFormatter,
    TrackInfo,
    format_duration,
    is_duplicate_in_queue,
    separate_tracks,
)

pytestmark = pytest.mark.unit


class TestFormatDuration:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "0:00"),
            (65, "1:05"),
            (65.9, "1:05"),
            (3723, "1:02:03"),
            ("3:05", "3:05"),
            ("01:02:03", "1:02:03"),
            ("125", "2:05"),
        ],
    )
    def test_valid(self, value, expected):
        assert format_duration(value) == expected

    @pytest.mark.parametrize("value", [-1, "abc", "1:xx", None, True, [1, 2]])
    def test_invalid(self, value):
        assert format_duration(value) == "00:00"


class TestTrackFormatter:
    def test_track_info(self, track_factory):
        formatter = TrackFormatter()
        info = formatter.track_info(track_factory(duration_ms=200_000, requested_by="alice"))
        assert info == TrackInfo(title="Song A", duration="3:20", requester="alice", is_autoplay=False)

    def test_unknown_requester(self, track_factory):
        info = TrackFormatter().track_info(track_factory(is_autoplay=True))
        assert info.requester == "Unknown"
        assert info.is_autoplay is True

    def test_cached_by_identity_fields(self, track_factory):
        formatter = TrackFormatter(LRUCache(10, name="track_info"))
        track = track_factory()
        formatter.track_info(track)
        formatter.track_info(track)
        formatter.track_info(track_factory(requested_by="bob"))
        assert formatter.cache.hits == 1
        assert len(formatter.cache) == 2


class TestQueueHelpers:
    def test_duplicate_in_queue(self, track_factory):
        new = track_factory(title="Daft Punk - One More Time (Official Video)")
        queued = [track_factory(id="q1", title="Daft Punk - One More Time")]
        assert is_duplicate_in_queue(new, queued) is True

    def test_not_duplicate(self, track_factory):
        new = track_factory(title="Queen - Bohemian Rhapsody")
        queued = [track_factory(id="q1", title="Queen - Radio Ga Ga")]
        assert is_duplicate_in_queue(new, queued) is False

    def test_empty_queue(self, track_factory):
        assert is_duplicate_in_queue(track_factory(), []) is False

    def test_separate_tracks(self, track_factory):
        manual = track_factory(id="m")
        auto = track_factory(id="a", is_autoplay=True)
        categories = separate_tracks([manual, auto])
        assert categories.manual == [manual]
        assert categories.autoplay == [auto]
