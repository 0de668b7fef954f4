"""
Value types shared by the recommendation and duplicate-detection code.

Tracks and history entries arrive from external collaborators (catalog
provider, history store) and are only read here. Every seed, real or
synthetic, is reduced to a TrackDescriptor before any scoring happens.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ARTIST = "Unknown Artist"
VIRTUAL_SEED_ID = "virtual-seed"

_CLOCK_RE = re.compile(r"^\d+(:\d{1,2}){1,2}$")


def parse_duration_ms(value: Any) -> int:
    """
    Coerce a duration into whole milliseconds.

    Accepts ints/floats (already milliseconds), numeric strings, and clock
    strings ("3:20", "1:02:03"). Anything else, including negatives, is 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, (int, float)):
        return max(int(value), 0)

    if isinstance(value, str):
        text = value.strip()
        if _CLOCK_RE.match(text):
            seconds = 0
            for part in text.split(":"):
                seconds = seconds * 60 + int(part)
            return seconds * 1000
        try:
            return max(int(float(text)), 0)
        except ValueError:
            return 0

    return 0


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Track:
    """A playable track supplied by the catalog provider."""

    id: str
    title: str
    artist: str
    duration_ms: int
    url: str = ""
    thumbnail: str | None = None
    views: int | None = None
    requested_by: str | None = None
    description: str | None = None
    is_autoplay: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Track:
        """Build a Track from loosely-typed data, defaulting missing fields."""
        return cls(
            id=str(data.get("id") or data.get("track_id") or ""),
            title=_text(data.get("title"), UNKNOWN_TITLE),
            artist=_text(data.get("artist", data.get("author")), UNKNOWN_ARTIST),
            duration_ms=parse_duration_ms(data.get("duration_ms", data.get("duration"))),
            url=str(data.get("url") or ""),
            thumbnail=data.get("thumbnail") or None,
            views=_optional_int(data.get("views")),
            requested_by=data.get("requested_by") or None,
            description=data.get("description") or None,
            is_autoplay=bool(data.get("is_autoplay", False)),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One previously played track, as returned by the history store."""

    url: str
    title: str
    artist: str
    duration_ms: int
    timestamp: int  # epoch milliseconds
    scope: str = ""
    played_by: str = "unknown"
    is_autoplay: bool = False
    track_id: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HistoryEntry:
        return cls(
            url=str(data.get("url") or ""),
            title=_text(data.get("title"), UNKNOWN_TITLE),
            artist=_text(data.get("artist", data.get("author")), UNKNOWN_ARTIST),
            duration_ms=parse_duration_ms(data.get("duration_ms", data.get("duration"))),
            timestamp=_optional_int(data.get("timestamp")) or 0,
            scope=str(data.get("scope") or data.get("guild_id") or ""),
            played_by=str(data.get("played_by") or "unknown"),
            is_autoplay=bool(data.get("is_autoplay", False)),
            track_id=str(data.get("track_id") or ""),
        )

    def to_track(self) -> Track:
        """View this entry as a Track so it can act as a recommendation seed."""
        return Track(
            id=self.track_id,
            title=self.title,
            artist=self.artist,
            duration_ms=self.duration_ms,
            url=self.url,
            requested_by=self.played_by,
            is_autoplay=self.is_autoplay,
        )


@dataclass(frozen=True)
class PreferenceSummary:
    """Aggregated listener preferences, most preferred first."""

    genres: tuple[str, ...] = ()
    artists: tuple[str, ...] = ()
    avg_duration_s: float = 0.0

    def __post_init__(self) -> None:
        # Callers often pass lists; store tuples so the summary stays immutable
        object.__setattr__(self, "genres", tuple(self.genres))
        object.__setattr__(self, "artists", tuple(self.artists))


@dataclass(frozen=True)
class PreferenceSeed:
    """A synthetic seed standing in for a listener's aggregated taste."""

    summary: PreferenceSummary


Seed = Track | PreferenceSeed


@dataclass(frozen=True)
class TrackDescriptor:
    """The minimal view of a seed or candidate that scoring operates on."""

    key: str
    title: str
    artist: str
    duration_ms: int
    description: str | None = None
    views: int | None = None


def track_key(track: Track) -> str:
    """Identity used for exclusion, dedupe and merging: id, else URL."""
    return track.id or track.url


def describe(seed: Seed) -> TrackDescriptor:
    """Reduce a real or synthetic seed to a TrackDescriptor."""
    if isinstance(seed, PreferenceSeed):
        summary = seed.summary
        top_artist = summary.artists[0] if summary.artists else "Various Artists"
        top_genre = summary.genres[0] if summary.genres else "various"
        return TrackDescriptor(
            key=VIRTUAL_SEED_ID,
            title="User Preference Mix",
            artist=top_artist,
            duration_ms=int(summary.avg_duration_s * 1000),
            description=f"Based on {top_genre} music preferences",
            views=0,
        )

    if isinstance(seed, Track):
        return TrackDescriptor(
            key=track_key(seed),
            title=seed.title,
            artist=seed.artist,
            duration_ms=seed.duration_ms,
            description=seed.description,
            views=seed.views,
        )

    raise TypeError(f"Unsupported seed type: {type(seed).__name__}")


@dataclass(frozen=True)
class RecommendationResult:
    """A scored candidate with the reasons it was recommended."""

    track: Track
    score: float
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def key(self) -> str:
        return track_key(self.track)


@dataclass(frozen=True)
class DuplicateCheckResult:
    """Outcome of a near-duplicate check against recent history."""

    is_duplicate: bool
    reason: str | None = None
    similar_tracks: tuple[HistoryEntry, ...] | None = None
    confidence: float | None = None
