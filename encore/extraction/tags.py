"""
Keyword-based tag and genre extraction from track text fields.

This is a coarse extractor: it only finds vocabulary words that appear as
standalone tokens in the title, description or artist name. It is not a
genre classifier.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 4

TAG_KEYWORDS = frozenset({
    'rock', 'pop', 'jazz', 'blues', 'country', 'folk', 'rap', 'hip hop',
    'metal', 'classical', 'electronic', 'dance', 'reggae', 'funk', 'soul',
    'r&b', 'indie', 'alternative', 'punk', 'grunge', 'disco', 'techno',
    'house', 'trance', 'ambient', 'acoustic', 'instrumental', 'vocal',
    'samba', 'forro', 'forró', 'sertanejo', 'mpb',
})

# Tags that also count as a genre. Order is irrelevant: the genre is the
# first extracted tag that appears here.
GENRE_KEYWORDS = frozenset({
    'rock', 'pop', 'jazz', 'blues', 'country', 'folk', 'rap', 'hip hop',
    'metal', 'classical', 'electronic', 'dance', 'reggae', 'samba', 'forro',
    'forró', 'sertanejo', 'mpb', 'funk', 'soul', 'r&b', 'indie',
    'alternative', 'punk', 'grunge', 'techno', 'house', 'trance', 'ambient',
    'acoustic', 'instrumental',
})

_NON_WORD_RE = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """Lowercase, replace punctuation with spaces, drop tokens under 4 chars."""
    words = _NON_WORD_RE.sub(" ", text.lower()).split()
    return [word for word in words if len(word) >= MIN_TOKEN_LENGTH]


def extract_tags(
    title: str,
    description: str | None = None,
    artist: str | None = None,
) -> tuple[str, ...]:
    """
    Extract vocabulary tags from a track's text fields.

    Fields are scanned title, description, artist; the result is
    deduplicated and keeps first-seen order. Never raises: on any error the
    problem is logged and an empty tuple returned.
    """
    tags: dict[str, None] = {}
    try:
        for text in (title, description, artist):
            if not text:
                continue
            for word in tokenize(text):
                if word in TAG_KEYWORDS:
                    tags.setdefault(word, None)
    except Exception as e:
        logger.debug(f"Error extracting tags: {e}")
        return ()

    return tuple(tags)


def extract_genre(
    title: str,
    description: str | None = None,
    artist: str | None = None,
) -> str | None:
    """Return the first extracted tag that is a known genre, or None."""
    return genre_from_tags(extract_tags(title, description, artist))


def genre_from_tags(tags: tuple[str, ...]) -> str | None:
    for tag in tags:
        if tag in GENRE_KEYWORDS:
            return tag
    return None
