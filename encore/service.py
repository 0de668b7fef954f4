"""
One service instance per bot process: owns configuration, caches and the
cache sweep, and exposes every recommendation and duplicate-check entry
point.

Usage:
    from encore.service import RecommendationService

    with RecommendationService() as service:
        service.recommendations(seed_track, candidates)
        service.check_duplicate(candidate, recent_history)
        service.recommend_for_scope("guild-1", history_store, candidate_provider)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .cache import CacheSweeper, LRUCache
from .config import EncoreConfig, encore_config
from .dedupe.detector import NOT_DUPLICATE, DuplicateDetector
from .dedupe.titles import TitleParser
from .errors import fail_open
from .formatting import TrackFormatter, TrackInfo, is_duplicate_in_queue
from .history import summarize_preferences
from .models import (
    DuplicateCheckResult,
    HistoryEntry,
    PreferenceSummary,
    RecommendationResult,
    Seed,
    Track,
)
from .search.recommender import RecommendationEngine
from .stores import CandidateProvider, HistoryStore

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    Recommendation and duplicate-detection facade.

    Scoring configuration is frozen at construction. Caches are private to
    the instance and cleared by its CacheSweeper once start() is called.

    Args:
        config: Service settings (defaults to the global encore_config)
    """

    def __init__(self, config: EncoreConfig | None = None):
        self.config = config or encore_config
        self.config.validate_config()

        self.similarity_config = self.config.similarity_config()
        self.duplicate_config = self.config.duplicate_config()

        self.engine = RecommendationEngine(self.similarity_config)
        self.detector = DuplicateDetector(self.duplicate_config)

        self.title_cache = LRUCache(self.config.title_cache_size, name="titles")
        self.track_info_cache = LRUCache(self.config.track_info_cache_size, name="track_info")
        self.title_parser = TitleParser(self.title_cache)
        self.formatter = TrackFormatter(self.track_info_cache)

        self.sweeper = CacheSweeper(
            [self.title_cache, self.track_info_cache],
            interval=self.config.sweep_interval,
        )

        logger.info(
            f"Recommendation service initialized "
            f"(max={self.similarity_config.max_recommendations}, "
            f"threshold={self.similarity_config.similarity_threshold})"
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        self.sweeper.start()

    def stop(self) -> None:
        self.sweeper.stop()

    def __enter__(self) -> RecommendationService:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # =========================================================================
    # Recommendations
    # =========================================================================

    def recommendations(
        self,
        seed: Seed,
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        return self.engine.recommend(seed, candidates, exclude_ids)

    def preference_recommendations(
        self,
        preferences: PreferenceSummary,
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        return self.engine.recommend_for_preferences(preferences, candidates, exclude_ids)

    def history_recommendations(
        self,
        recent_history: Sequence[Track | HistoryEntry],
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        return self.engine.recommend_from_history(recent_history, candidates, exclude_ids)

    def contextual_recommendations(
        self,
        current_track: Track | None,
        recent_history: Sequence[Track | HistoryEntry],
        candidates: Sequence[Track],
        exclude_ids: Iterable[str] | str | None = None,
    ) -> list[RecommendationResult]:
        """Seed from the current track, else from history, else nothing."""
        if current_track is not None:
            return self.recommendations(current_track, candidates, exclude_ids)
        if recent_history:
            return self.history_recommendations(recent_history, candidates, exclude_ids)
        return []

    @fail_open(list)
    def recommend_for_scope(
        self,
        scope: str,
        history_store: HistoryStore,
        candidate_provider: CandidateProvider,
        limit: int = 5,
    ) -> list[RecommendationResult]:
        """
        History-driven recommendations for one scope (e.g. a guild).

        Reads the most recent history entries, excludes the newest few from
        the results, and truncates to `limit`. A failing store or provider is
        logged and treated as empty input.
        """
        try:
            history = list(history_store.get_recent(scope, self.config.HISTORY_FETCH_LIMIT))
        except Exception as e:
            logger.error(f"Failed to read history for {scope}: {e}")
            history = []

        if not history:
            logger.debug(f"No history for {scope}; skipping recommendations")
            return []

        try:
            candidates = list(candidate_provider.get_candidates(scope))
        except Exception as e:
            logger.error(f"Failed to fetch candidates for {scope}: {e}")
            candidates = []

        excluded: set[str] = set()
        for entry in history[:self.config.HISTORY_EXCLUDE_RECENT]:
            excluded.update(value for value in (entry.track_id, entry.url) if value)

        results = self.history_recommendations(history, candidates, excluded)
        return results[:limit]

    # =========================================================================
    # Duplicates and formatting
    # =========================================================================

    @fail_open(lambda: NOT_DUPLICATE)
    def check_duplicate(
        self,
        track: Track,
        recent_history: Sequence[HistoryEntry],
    ) -> DuplicateCheckResult:
        """Fail-open duplicate check: internal errors report no duplicate."""
        return self.detector.check(track, recent_history)

    def is_duplicate_in_queue(self, track: Track, queued: Sequence[Track]) -> bool:
        return is_duplicate_in_queue(track, queued, self.title_parser)

    def track_info(self, track: Track) -> TrackInfo:
        return self.formatter.track_info(track)

    def preference_summary(
        self,
        history: Sequence[HistoryEntry],
        top_n: int = 5,
    ) -> PreferenceSummary:
        return summarize_preferences(history, top_n)
