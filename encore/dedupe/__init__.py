"""
Near-duplicate detection against recently played tracks.

Public API:
    DuplicateDetector - ordered exact-URL / fuzzy / same-artist checks
    check_for_duplicate - fail-open module-level check
    find_tracks_by_title_terms - substring search over history titles
    TitleParser, normalize_title - title cleanup and artist/title splitting
"""

from .detector import (
    DuplicateDetector,
    are_tracks_similar,
    calculate_similarity_score,
    check_for_duplicate,
    find_tracks_by_title_terms,
)
from .titles import ArtistTitle, TitleParser, normalize_title

__all__ = [
    'DuplicateDetector',
    'check_for_duplicate',
    'are_tracks_similar',
    'calculate_similarity_score',
    'find_tracks_by_title_terms',
    'ArtistTitle',
    'TitleParser',
    'normalize_title',
]
