"""
Fixed-length numeric feature vectors for tracks and synthetic seeds.

Layout (FEATURE_DIM = 13), in order:
    0  title length / 100
    1  "remix" in title
    2  "cover" in title
    3  artist length / 50
    4  "feat" in artist
    5  duration / 5 min, capped at 1
    6  duration under 2 min
    7  has genre
    8  genre length / 20 (0 without genre)
    9  tag count / 10, capped at 1
    10 any tag contains "instrumental"
    11 any tag contains "acoustic"
    12 views / 1,000,000, capped at 1 (0 when unknown)

Changing the layout invalidates every vector computed so far.

Usage:
    from encore.extraction.vectors import create_track_vector, cosine_similarity

    seed_vec = create_track_vector(seed_track)
    cand_vec = create_track_vector(candidate)
    cosine_similarity(seed_vec.vector, cand_vec.vector)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..models import Seed, TrackDescriptor, describe
from .tags import extract_tags, genre_from_tags

FEATURE_DIM = 13

TITLE_LENGTH_SCALE = 100.0
ARTIST_LENGTH_SCALE = 50.0
GENRE_LENGTH_SCALE = 20.0
FULL_DURATION_MS = 300_000
SHORT_TRACK_MS = 120_000
MAX_TAG_COUNT = 10
MAX_VIEWS = 1_000_000


@dataclass(frozen=True)
class FeatureVector:
    """A track's extracted tags/genre together with its numeric encoding."""

    track_id: str
    title: str
    artist: str
    genre: str | None
    tags: tuple[str, ...]
    duration_ms: int
    views: int | None
    vector: np.ndarray


def build_feature_vector(
    descriptor: TrackDescriptor,
    tags: tuple[str, ...],
    genre: str | None,
) -> np.ndarray:
    """Encode a descriptor and its tags/genre as a FEATURE_DIM float vector."""
    title = descriptor.title.lower()
    artist = descriptor.artist.lower()
    duration = descriptor.duration_ms

    features = [
        len(descriptor.title) / TITLE_LENGTH_SCALE,
        1.0 if "remix" in title else 0.0,
        1.0 if "cover" in title else 0.0,
        len(descriptor.artist) / ARTIST_LENGTH_SCALE,
        1.0 if "feat" in artist else 0.0,
        min(duration / FULL_DURATION_MS, 1.0),
        1.0 if duration < SHORT_TRACK_MS else 0.0,
        1.0 if genre else 0.0,
        len(genre) / GENRE_LENGTH_SCALE if genre else 0.0,
        min(len(tags) / MAX_TAG_COUNT, 1.0),
        1.0 if any("instrumental" in tag for tag in tags) else 0.0,
        1.0 if any("acoustic" in tag for tag in tags) else 0.0,
        min(descriptor.views / MAX_VIEWS, 1.0) if descriptor.views else 0.0,
    ]
    return np.asarray(features, dtype=np.float64)


def create_track_vector(seed: Seed) -> FeatureVector:
    """Describe a seed, extract its tags/genre and build its feature vector."""
    descriptor = describe(seed)
    tags = extract_tags(descriptor.title, descriptor.description, descriptor.artist)
    genre = genre_from_tags(tags)

    return FeatureVector(
        track_id=descriptor.key,
        title=descriptor.title,
        artist=descriptor.artist,
        genre=genre,
        tags=tags,
        duration_ms=descriptor.duration_ms,
        views=descriptor.views,
        vector=build_feature_vector(descriptor, tags, genre),
    )


def cosine_similarity(vector_a: np.ndarray, vector_b: np.ndarray) -> float:
    """Cosine similarity; 0.0 for mismatched lengths or a zero-norm vector."""
    a = np.asarray(vector_a, dtype=np.float64)
    b = np.asarray(vector_b, dtype=np.float64)
    if a.shape != b.shape:
        return 0.0

    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))


def euclidean_distance(vector_a: np.ndarray, vector_b: np.ndarray) -> float:
    """Euclidean distance; infinity for mismatched lengths."""
    a = np.asarray(vector_a, dtype=np.float64)
    b = np.asarray(vector_b, dtype=np.float64)
    if a.shape != b.shape:
        return math.inf
    return float(np.linalg.norm(a - b))


def normalize_vector(vector: np.ndarray) -> np.ndarray:
    """L2-normalize a vector; a zero vector is returned unchanged."""
    v = np.asarray(vector, dtype=np.float64)
    magnitude = float(np.linalg.norm(v))
    if magnitude == 0.0:
        return v
    return v / magnitude
