"""
Display helpers for queued tracks.

TrackFormatter memoises TrackInfo per (id, title, duration, requester) in
an LRUCache so the owning service can clear it on its sweep schedule.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple

from .cache import LRUCache
from .dedupe.titles import TitleParser
from .models import UNKNOWN_TITLE, Track


DEFAULT_TRACK_INFO_CACHE_SIZE = 2000
ZERO_DURATION = "00:00"
UNKNOWN_REQUESTER = "Unknown"


class TrackInfo(NamedTuple):
    title: str
    duration: str
    requester: str
    is_autoplay: bool


class TrackCategories(NamedTuple):
    manual: list[Track]
    autoplay: list[Track]


def _total_seconds(duration: Any) -> int | None:
    if isinstance(duration, bool):
        return None
    if isinstance(duration, (int, float)):
        return int(duration)
    if not isinstance(duration, str):
        return None

    parts = duration.strip().split(":")
    try:
        if len(parts) == 3:
            return int(parts[0]) * 3600 + int(parts[1]) * 60 + int(parts[2])
        if len(parts) == 2:
            return int(parts[0]) * 60 + int(parts[1])
        return int(parts[0])
    except ValueError:
        return None


def format_duration(duration: Any) -> str:
    """
    Format seconds, or an "MM:SS" / "HH:MM:SS" string, as "M:SS" or "H:MM:SS".

    Returns "00:00" for anything that is not a non-negative duration.
    """
    total = _total_seconds(duration)
    if total is None or total < 0:
        return ZERO_DURATION

    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


class TrackFormatter:
    """
    Builds TrackInfo values for display, with an LRU cache.

    Example:
        formatter = TrackFormatter()
        formatter.track_info(track)
        # TrackInfo(title='One More Time', duration='5:20', requester='alice', is_autoplay=False)
    """

    def __init__(self, cache: LRUCache | None = None):
        self.cache = cache if cache is not None else LRUCache(DEFAULT_TRACK_INFO_CACHE_SIZE, name="track_info")

    @staticmethod
    def cache_key(track: Track) -> tuple:
        return (track.id, track.title, track.duration_ms, track.requested_by)

    def track_info(self, track: Track) -> TrackInfo:
        key = self.cache_key(track)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        info = TrackInfo(
            title=track.title or UNKNOWN_TITLE,
            duration=format_duration(track.duration_ms // 1000),
            requester=track.requested_by or UNKNOWN_REQUESTER,
            is_autoplay=track.is_autoplay,
        )
        self.cache.set(key, info)
        return info


def is_duplicate_in_queue(
    new_track: Track,
    queued: Sequence[Track],
    parser: TitleParser | None = None,
) -> bool:
    """True if any queued track has a title similar to the new track's."""
    if not queued:
        return False

    parser = parser or TitleParser()
    return any(parser.is_similar_title(new_track.title, track.title) for track in queued)


def separate_tracks(tracks: Sequence[Track]) -> TrackCategories:
    """Split tracks into manually requested and autoplay, keeping order."""
    categories = TrackCategories(manual=[], autoplay=[])
    for track in tracks:
        if track.is_autoplay:
            categories.autoplay.append(track)
        else:
            categories.manual.append(track)
    return categories
