"""
Title cleanup and artist/title splitting for duplicate checks.

Streaming titles carry formatting noise ("(Official Video)", "[HD]",
"Artist - Title | Lyrics") that hides repeats from a plain string
comparison. normalize_title() strips that noise; TitleParser splits
"Artist - Title" style strings and remembers the results in an LRU cache.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from ..cache import LRUCache
from ..search.similarity import calculate_string_similarity

logger = logging.getLogger(__name__)

DEFAULT_TITLE_CACHE_SIZE = 2000
MIN_SUBSTRING_MATCH_LENGTH = 10

_NOISE_PATTERNS = [
    re.compile(r"official\s*(music\s*|lyric\s*|performance\s*)?(video|audio|visualizer)", re.IGNORECASE),
    re.compile(r"\b(with\s*)?lyrics?\b", re.IGNORECASE),
    re.compile(r"\baudio\s*only\b", re.IGNORECASE),
    re.compile(r"\b(hd|hq|4k|mv)\b", re.IGNORECASE),
]
_BRACKETED_RE = re.compile(r"\([^)]*\)|\[[^\]]*\]|\{[^}]*\}")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")

# (pattern, artist group, title group), tried in order
_ARTIST_TITLE_PATTERNS = [
    (re.compile(r"^(.+?)\s+[-–—]\s+(.+)$"), 1, 2),   # Artist - Title
    (re.compile(r"^(.+?)\s*:\s+(.+)$"), 1, 2),        # Artist: Title
    (re.compile(r"^\[(.+?)\]\s*(.+)$"), 1, 2),        # [Artist] Title
    (re.compile(r"^(.+?)\s+by\s+(.+)$", re.IGNORECASE), 2, 1),  # Title by Artist
]


class ArtistTitle(NamedTuple):
    artist: str
    title: str


def normalize_title(title: str) -> str:
    """
    Lowercase a title and strip bracketed annotations, "official video"
    style phrases and punctuation. Falls back to the lowercased title when
    nothing would be left.
    """
    if not title:
        return ""

    text = title.lower()
    for pattern in _NOISE_PATTERNS:
        text = pattern.sub(" ", text)
    text = _BRACKETED_RE.sub(" ", text)
    text = _PUNCTUATION_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    return text or title.lower().strip()


class TitleParser:
    """
    Splits raw titles into artist and title parts, with an LRU cache.

    The cache is passed in so the owning service can register it with its
    CacheSweeper.

    Example:
        parser = TitleParser()
        parser.extract_artist_and_title("Daft Punk - One More Time (Official Video)")
        # ArtistTitle(artist='Daft Punk', title='One More Time (Official Video)')
    """

    def __init__(self, cache: LRUCache | None = None):
        self.cache = cache if cache is not None else LRUCache(DEFAULT_TITLE_CACHE_SIZE, name="titles")

    def extract_artist_and_title(self, raw_title: str) -> ArtistTitle:
        if not raw_title:
            return ArtistTitle("", "")

        cached = self.cache.get(raw_title)
        if cached is not None:
            return cached

        result = ArtistTitle("", raw_title.strip())
        for pattern, artist_group, title_group in _ARTIST_TITLE_PATTERNS:
            match = pattern.match(raw_title.strip())
            if match:
                result = ArtistTitle(
                    match.group(artist_group).strip(),
                    match.group(title_group).strip(),
                )
                break

        self.cache.set(raw_title, result)
        return result

    def is_similar_title(self, first: str, second: str) -> bool:
        """
        Decide whether two raw titles name the same song.

        Matches on equal normalized titles, on containment for titles longer
        than 10 characters, or on edit-distance similarity above 0.6 (0.8
        when either side has no artist). A close artist match (> 0.8) lowers
        the title bar by a fifth.
        """
        if not first or not second:
            return False
        if first == second:
            return True

        first_parts = self.extract_artist_and_title(first)
        second_parts = self.extract_artist_and_title(second)
        first_artist = normalize_title(first_parts.artist)
        second_artist = normalize_title(second_parts.artist)
        first_title = normalize_title(first_parts.title)
        second_title = normalize_title(second_parts.title)

        logger.debug(
            f"Title comparison: '{first_artist}'/'{first_title}' vs "
            f"'{second_artist}'/'{second_title}'"
        )

        if first_title == second_title:
            return True

        if min(len(first_title), len(second_title)) > MIN_SUBSTRING_MATCH_LENGTH:
            if first_title in second_title or second_title in first_title:
                return True

        title_sim = calculate_string_similarity(first_title, second_title)
        has_artists = bool(first_artist and second_artist)
        artist_sim = calculate_string_similarity(first_artist, second_artist) if has_artists else 0.0

        title_threshold = 0.6 if has_artists else 0.8
        return title_sim > title_threshold or (
            artist_sim > 0.8 and title_sim > title_threshold * 0.8
        )
