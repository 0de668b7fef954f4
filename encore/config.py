from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SimilarityConfig:
    """
    Immutable tuning values for recommendation scoring.

    Weights are independent and are not required to sum to 1. The title
    coefficient used by the lexical calculator is fixed and lives in
    encore.search.similarity, not here.
    """

    max_recommendations: int = 10
    similarity_threshold: float = 0.3
    genre_weight: float = 0.4
    tag_weight: float = 0.3
    artist_weight: float = 0.2
    duration_weight: float = 0.05
    popularity_weight: float = 0.05
    diversity_factor: float = 0.3

    def __post_init__(self) -> None:
        if self.max_recommendations <= 0:
            raise ValueError("max_recommendations must be positive")
        for name in (
            'similarity_threshold',
            'genre_weight',
            'tag_weight',
            'artist_weight',
            'duration_weight',
            'popularity_weight',
            'diversity_factor',
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in range [0, 1], got {value}")


@dataclass(frozen=True)
class DuplicateConfig:
    """Thresholds for near-duplicate detection against recent history."""

    title_threshold: float = 0.8
    artist_threshold: float = 0.8
    duration_threshold_ms: int = 10_000
    time_window_ms: int = 300_000

    def __post_init__(self) -> None:
        if not 0.0 <= self.title_threshold <= 1.0:
            raise ValueError("title_threshold must be in range [0, 1]")
        if not 0.0 <= self.artist_threshold <= 1.0:
            raise ValueError("artist_threshold must be in range [0, 1]")
        if self.duration_threshold_ms < 0:
            raise ValueError("duration_threshold_ms must be non-negative")
        if self.time_window_ms <= 0:
            raise ValueError("time_window_ms must be positive")


class EncoreConfig:
    """
    Service-level configuration for the recommendation engine.

    Holds the defaults that feed SimilarityConfig and DuplicateConfig, plus
    cache sizing and the sweep interval. Scoring code never reads this object
    directly: it receives the frozen values built by similarity_config() and
    duplicate_config().
    """

    def __init__(self):
        # Recommendation scoring
        self.MAX_RECOMMENDATIONS: int = 10
        self.SIMILARITY_THRESHOLD: float = 0.3
        self.GENRE_WEIGHT: float = 0.4
        self.TAG_WEIGHT: float = 0.3
        self.ARTIST_WEIGHT: float = 0.2
        self.DURATION_WEIGHT: float = 0.05
        self.POPULARITY_WEIGHT: float = 0.05
        self.DIVERSITY_FACTOR: float = 0.3

        # Near-duplicate detection
        self.DUPLICATE_TITLE_THRESHOLD: float = 0.8
        self.DUPLICATE_ARTIST_THRESHOLD: float = 0.8
        self.DUPLICATE_DURATION_THRESHOLD_MS: int = 10_000
        self.DUPLICATE_TIME_WINDOW_MS: int = 300_000  # 5 minutes

        # History-driven recommendations
        self.HISTORY_FETCH_LIMIT: int = 20
        self.HISTORY_EXCLUDE_RECENT: int = 5

        # Caches
        self.TRACK_INFO_CACHE_SIZE: int = 2000
        self.TITLE_CACHE_SIZE: int = 2000
        self.CACHE_SWEEP_INTERVAL: float = 3600.0  # 1 hour

        self._apply_env_overrides()

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides for deployment flexibility."""
        if os.getenv('ENCORE_MAX_RECOMMENDATIONS'):
            self.MAX_RECOMMENDATIONS = int(os.getenv('ENCORE_MAX_RECOMMENDATIONS'))

        if os.getenv('ENCORE_SIMILARITY_THRESHOLD'):
            self.SIMILARITY_THRESHOLD = float(os.getenv('ENCORE_SIMILARITY_THRESHOLD'))

        if os.getenv('ENCORE_DIVERSITY_FACTOR'):
            self.DIVERSITY_FACTOR = float(os.getenv('ENCORE_DIVERSITY_FACTOR'))

        if os.getenv('ENCORE_DUPLICATE_WINDOW_MS'):
            self.DUPLICATE_TIME_WINDOW_MS = int(os.getenv('ENCORE_DUPLICATE_WINDOW_MS'))

        if os.getenv('ENCORE_CACHE_SIZE'):
            # Override both caches uniformly
            cache_size = int(os.getenv('ENCORE_CACHE_SIZE'))
            self.TRACK_INFO_CACHE_SIZE = cache_size
            self.TITLE_CACHE_SIZE = cache_size

        if os.getenv('ENCORE_SWEEP_INTERVAL'):
            self.CACHE_SWEEP_INTERVAL = float(os.getenv('ENCORE_SWEEP_INTERVAL'))

    # =========================================================================
    # Scoring Configuration
    # =========================================================================

    @property
    def max_recommendations(self) -> int:
        """Upper bound on the length of any recommendation list."""
        return self.MAX_RECOMMENDATIONS

    @property
    def similarity_threshold(self) -> float:
        """Minimum lexical similarity for a candidate to be scored."""
        return self.SIMILARITY_THRESHOLD

    @property
    def diversity_factor(self) -> float:
        """Minimum diversity score a candidate must keep to be accepted."""
        return self.DIVERSITY_FACTOR

    def similarity_config(self) -> SimilarityConfig:
        """Build the immutable scoring config from current settings."""
        return SimilarityConfig(
            max_recommendations=self.MAX_RECOMMENDATIONS,
            similarity_threshold=self.SIMILARITY_THRESHOLD,
            genre_weight=self.GENRE_WEIGHT,
            tag_weight=self.TAG_WEIGHT,
            artist_weight=self.ARTIST_WEIGHT,
            duration_weight=self.DURATION_WEIGHT,
            popularity_weight=self.POPULARITY_WEIGHT,
            diversity_factor=self.DIVERSITY_FACTOR,
        )

    def duplicate_config(self) -> DuplicateConfig:
        """Build the immutable duplicate-detection config from current settings."""
        return DuplicateConfig(
            title_threshold=self.DUPLICATE_TITLE_THRESHOLD,
            artist_threshold=self.DUPLICATE_ARTIST_THRESHOLD,
            duration_threshold_ms=self.DUPLICATE_DURATION_THRESHOLD_MS,
            time_window_ms=self.DUPLICATE_TIME_WINDOW_MS,
        )

    # =========================================================================
    # Cache Configuration
    # =========================================================================

    @property
    def track_info_cache_size(self) -> int:
        return self.TRACK_INFO_CACHE_SIZE

    @property
    def title_cache_size(self) -> int:
        return self.TITLE_CACHE_SIZE

    @property
    def sweep_interval(self) -> float:
        """Seconds between full clears of the formatting caches."""
        return self.CACHE_SWEEP_INTERVAL

    # =========================================================================
    # Validation and Utilities
    # =========================================================================

    def validate_config(self) -> None:
        """Validate settings by building both frozen configs."""
        self.similarity_config()
        self.duplicate_config()

        if self.HISTORY_FETCH_LIMIT < 1:
            raise ValueError("history fetch limit must be at least 1")
        if self.HISTORY_EXCLUDE_RECENT < 0:
            raise ValueError("history exclude count must be non-negative")
        if self.track_info_cache_size < 1 or self.title_cache_size < 1:
            raise ValueError("cache sizes must be at least 1")
        if self.sweep_interval <= 0:
            raise ValueError("sweep_interval must be positive")

    def get_config_info(self) -> dict[str, Any]:
        """Get configuration values for debugging."""
        return {
            'similarity': self.similarity_config().__dict__.copy(),
            'duplicate': self.duplicate_config().__dict__.copy(),
            'history_fetch_limit': self.HISTORY_FETCH_LIMIT,
            'history_exclude_recent': self.HISTORY_EXCLUDE_RECENT,
            'track_info_cache_size': self.track_info_cache_size,
            'title_cache_size': self.title_cache_size,
            'sweep_interval': self.sweep_interval,
        }

    def print_config(self) -> None:
        """Print current configuration for debugging."""
        print("\n" + "=" * 60)
        print("Encore Configuration".center(60))
        print("=" * 60)
        print(f"  Max Recommendations:  {self.MAX_RECOMMENDATIONS}")
        print(f"  Similarity Threshold: {self.SIMILARITY_THRESHOLD}")
        print(f"  Diversity Factor:     {self.DIVERSITY_FACTOR}")
        print(
            "  Weights:              "
            f"genre={self.GENRE_WEIGHT} tag={self.TAG_WEIGHT} "
            f"artist={self.ARTIST_WEIGHT} duration={self.DURATION_WEIGHT} "
            f"popularity={self.POPULARITY_WEIGHT}"
        )
        print("-" * 60)
        print(f"  Duplicate Title:      {self.DUPLICATE_TITLE_THRESHOLD}")
        print(f"  Duplicate Artist:     {self.DUPLICATE_ARTIST_THRESHOLD}")
        print(f"  Duplicate Window:     {self.DUPLICATE_TIME_WINDOW_MS} ms")
        print("-" * 60)
        print(f"  Track Info Cache:     {self.TRACK_INFO_CACHE_SIZE}")
        print(f"  Title Cache:          {self.TITLE_CACHE_SIZE}")
        print(f"  Sweep Interval:       {self.CACHE_SWEEP_INTERVAL}s")
        print("=" * 60 + "\n")


# ============================================================================
# Global Configuration Instance
# ============================================================================

encore_config = EncoreConfig()
