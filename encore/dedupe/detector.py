"""
Near-duplicate detection against a window of recently played tracks.

Checks run in a fixed order and stop at the first hit:

    1. exact URL played inside the time window       -> confidence 1.0
    2. fuzzy title AND artist edit-distance match     -> best 0.7*title + 0.3*artist
    3. 3+ recent entries by the same artist           -> confidence 0.6

The caller supplies the history window (newest first); nothing here fetches
or stores history. check_for_duplicate() never raises.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from ..config import DuplicateConfig
from ..errors import fail_open
from ..models import DuplicateCheckResult, HistoryEntry, Track
from ..search.similarity import calculate_string_similarity
from .titles import normalize_title

logger = logging.getLogger(__name__)

MAX_SIMILAR_TRACKS = 3
ARTIST_SATURATION_COUNT = 3
ARTIST_SATURATION_CONFIDENCE = 0.6
TITLE_SCORE_WEIGHT = 0.7
ARTIST_SCORE_WEIGHT = 0.3

NOT_DUPLICATE = DuplicateCheckResult(is_duplicate=False)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _comparable_title(title: str) -> str:
    return normalize_title(title) or title.lower()


def title_artist_similarity(track: Track, entry: HistoryEntry) -> tuple[float, float]:
    """Edit-distance similarity of normalized titles and lowercased artists."""
    title_sim = calculate_string_similarity(
        _comparable_title(track.title), _comparable_title(entry.title)
    )
    artist_sim = calculate_string_similarity(track.artist.lower(), entry.artist.lower())
    return title_sim, artist_sim


def are_tracks_similar(track: Track, entry: HistoryEntry, config: DuplicateConfig) -> bool:
    title_sim, artist_sim = title_artist_similarity(track, entry)
    return title_sim >= config.title_threshold and artist_sim >= config.artist_threshold


def calculate_similarity_score(track: Track, entry: HistoryEntry) -> float:
    """Combined score, weighting the title above the artist."""
    title_sim, artist_sim = title_artist_similarity(track, entry)
    return title_sim * TITLE_SCORE_WEIGHT + artist_sim * ARTIST_SCORE_WEIGHT


def find_tracks_by_title_terms(
    title: str,
    history: Sequence[HistoryEntry],
    limit: int = 5,
) -> list[HistoryEntry]:
    """History entries whose title contains any whitespace-separated term of `title`."""
    terms = [term for term in title.lower().split() if term]
    if not terms:
        return []

    matches = [
        entry for entry in history
        if any(term in entry.title.lower() for term in terms)
    ]
    return matches[:limit]


class DuplicateDetector:
    """
    Decides whether a candidate repeats something from recent history.

    Args:
        config: Thresholds and time window (never mutated)
        clock: Returns the current time in epoch milliseconds
    """

    def __init__(
        self,
        config: DuplicateConfig | None = None,
        clock: Callable[[], int] = _now_ms,
    ):
        self.config = config or DuplicateConfig()
        self.clock = clock

    def check(self, track: Track, recent_history: Sequence[HistoryEntry]) -> DuplicateCheckResult:
        """Run all checks in order. Raises on internal errors."""
        for check in (self._check_exact_url, self._check_similar, self._check_same_artist):
            result = check(track, recent_history)
            if result is not None:
                logger.debug(f"Duplicate '{track.title}': {result.reason}")
                return result
        return NOT_DUPLICATE

    def _check_exact_url(
        self,
        track: Track,
        history: Sequence[HistoryEntry],
    ) -> DuplicateCheckResult | None:
        if not track.url:
            return None

        cutoff = self.clock() - self.config.time_window_ms
        matches = [
            entry for entry in history
            if entry.url == track.url and entry.timestamp > cutoff
        ]
        if not matches:
            return None

        return DuplicateCheckResult(
            is_duplicate=True,
            reason="Track was played recently",
            similar_tracks=tuple(matches[:MAX_SIMILAR_TRACKS]),
            confidence=1.0,
        )

    def _check_similar(
        self,
        track: Track,
        history: Sequence[HistoryEntry],
    ) -> DuplicateCheckResult | None:
        similar = [entry for entry in history if are_tracks_similar(track, entry, self.config)]
        if not similar:
            return None

        best = max(calculate_similarity_score(track, entry) for entry in similar)
        return DuplicateCheckResult(
            is_duplicate=True,
            reason=f"Similar track found ({round(best * 100)}% similarity)",
            similar_tracks=tuple(similar[:MAX_SIMILAR_TRACKS]),
            confidence=best,
        )

    def _check_same_artist(
        self,
        track: Track,
        history: Sequence[HistoryEntry],
    ) -> DuplicateCheckResult | None:
        artist = track.artist.lower()
        same_artist = [entry for entry in history if entry.artist.lower() == artist]
        if len(same_artist) < ARTIST_SATURATION_COUNT:
            return None

        return DuplicateCheckResult(
            is_duplicate=True,
            reason="Too many tracks from the same artist recently",
            similar_tracks=tuple(same_artist[:MAX_SIMILAR_TRACKS]),
            confidence=ARTIST_SATURATION_CONFIDENCE,
        )


@fail_open(lambda: NOT_DUPLICATE)
def check_for_duplicate(
    track: Track,
    recent_history: Sequence[HistoryEntry],
    config: DuplicateConfig | None = None,
    now_ms: int | None = None,
) -> DuplicateCheckResult:
    """
    Check a candidate against recent history.

    Never raises: an internal error is logged and reported as
    DuplicateCheckResult(is_duplicate=False).
    """
    clock = (lambda: now_ms) if now_ms is not None else _now_ms
    return DuplicateDetector(config, clock).check(track, recent_history)
