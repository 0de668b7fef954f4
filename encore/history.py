"""
Play-history analytics and preference summarisation.

Everything here works on a caller-supplied list of HistoryEntry values
(newest first); nothing reads or writes a history store.

Usage:
    from encore.history import summarize_preferences, generate_stats

    summary = summarize_preferences(entries)
    engine.recommend_for_preferences(summary, candidates)
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from .extraction.tags import extract_genre
from .models import HistoryEntry, PreferenceSummary

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
STATS_WINDOW_DAYS = 7


@dataclass(frozen=True)
class HistoryStats:
    total_tracks: int = 0
    unique_artists: int = 0
    most_played_artist: str = "Unknown"
    average_plays_per_day: float = 0.0


def _artist_counts(history: Sequence[HistoryEntry]) -> Counter:
    # Counter keeps first-seen order for equal counts
    return Counter(entry.artist for entry in history)


def top_artists(history: Sequence[HistoryEntry], limit: int = 10) -> list[tuple[str, int]]:
    """(artist, plays) pairs, most played first."""
    if limit <= 0:
        return []
    return _artist_counts(history).most_common(limit)


def generate_stats(history: Sequence[HistoryEntry], now_ms: int) -> HistoryStats:
    """
    Summary statistics for a history window.

    Average plays per day counts entries from the last 7 days only and is
    rounded to two decimal places.
    """
    if not history:
        return HistoryStats()

    counts = _artist_counts(history)
    cutoff = now_ms - STATS_WINDOW_DAYS * DAY_MS
    recent = sum(1 for entry in history if entry.timestamp > cutoff)

    stats = HistoryStats(
        total_tracks=len(history),
        unique_artists=len(counts),
        most_played_artist=counts.most_common(1)[0][0],
        average_plays_per_day=round(recent / STATS_WINDOW_DAYS, 2),
    )
    logger.debug(f"Generated stats for {stats.total_tracks} history entries")
    return stats


def summarize_preferences(history: Sequence[HistoryEntry], top_n: int = 5) -> PreferenceSummary:
    """
    Aggregate history into a PreferenceSummary.

    Artists and genres are ranked by play count. Genres come from the keyword
    extractor, so entries without a recognisable genre word contribute none.
    The average duration ignores entries with an unknown (zero) duration.
    """
    if not history:
        return PreferenceSummary()

    artists = [artist for artist, _ in top_artists(history, top_n)]

    genres: Counter = Counter()
    for entry in history:
        genre = extract_genre(entry.title, None, entry.artist)
        if genre:
            genres[genre] += 1

    durations = [entry.duration_ms for entry in history if entry.duration_ms > 0]
    avg_duration_s = sum(durations) / len(durations) / 1000 if durations else 0.0

    return PreferenceSummary(
        genres=tuple(genre for genre, _ in genres.most_common(top_n)),
        artists=tuple(artists),
        avg_duration_s=avg_duration_s,
    )
