"""Content-based track recommendations and near-duplicate detection."""

from __future__ import annotations

import importlib
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "EncoreConfig",
    "SimilarityConfig",
    "DuplicateConfig",
    "encore_config",
    "Track",
    "HistoryEntry",
    "PreferenceSummary",
    "PreferenceSeed",
    "RecommendationResult",
    "DuplicateCheckResult",
    "RecommendationEngine",
    "DuplicateDetector",
    "RecommendationService",
    "LRUCache",
    "CacheSweeper",
    "fail_open",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "EncoreConfig": (".config", "EncoreConfig"),
    "SimilarityConfig": (".config", "SimilarityConfig"),
    "DuplicateConfig": (".config", "DuplicateConfig"),
    "encore_config": (".config", "encore_config"),
    "Track": (".models", "Track"),
    "HistoryEntry": (".models", "HistoryEntry"),
    "PreferenceSummary": (".models", "PreferenceSummary"),
    "PreferenceSeed": (".models", "PreferenceSeed"),
    "RecommendationResult": (".models", "RecommendationResult"),
    "DuplicateCheckResult": (".models", "DuplicateCheckResult"),
    "RecommendationEngine": (".search.recommender", "RecommendationEngine"),
    "DuplicateDetector": (".dedupe.detector", "DuplicateDetector"),
    "RecommendationService": (".service", "RecommendationService"),
    "LRUCache": (".cache", "LRUCache"),
    "CacheSweeper": (".cache", "CacheSweeper"),
    "fail_open": (".errors", "fail_open"),
}


def __getattr__(name: str) -> Any:
    """Lazily import submodules so `import encore` stays cheap."""
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module 'encore' has no attribute {name!r}")

    module_path, attr_name = _LAZY_IMPORTS[name]
    module = importlib.import_module(module_path, __name__)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
