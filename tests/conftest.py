"""Root test fixtures for the encore test suite."""

import pytest

from encore.config import DuplicateConfig, EncoreConfig, SimilarityConfig
from encore.models import HistoryEntry, Track

NOW_MS = 1_700_000_000_000

_ENV_VARS = (
    "ENCORE_MAX_RECOMMENDATIONS",
    "ENCORE_SIMILARITY_THRESHOLD",
    "ENCORE_DIVERSITY_FACTOR",
    "ENCORE_DUPLICATE_WINDOW_MS",
    "ENCORE_CACHE_SIZE",
    "ENCORE_SWEEP_INTERVAL",
)


def make_track(
    id="t1",
    title="Song A",
    artist="Artist X",
    duration_ms=200_000,
    **kwargs,
):
    return Track(id=id, title=title, artist=artist, duration_ms=duration_ms, **kwargs)


def make_entry(
    url="https://example.com/a",
    title="Song A",
    artist="Artist X",
    duration_ms=200_000,
    timestamp=NOW_MS - 60_000,
    **kwargs,
):
    return HistoryEntry(
        url=url,
        title=title,
        artist=artist,
        duration_ms=duration_ms,
        timestamp=timestamp,
        **kwargs,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ENCORE_* variables from the host out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def encore_config():
    return EncoreConfig()


@pytest.fixture
def similarity_config():
    return SimilarityConfig()


@pytest.fixture
def no_diversity_config():
    return SimilarityConfig(diversity_factor=0.0)


@pytest.fixture
def duplicate_config():
    return DuplicateConfig()


@pytest.fixture
def seed_track():
    return make_track(id="seed", title="Song A", artist="Artist X", duration_ms=200_000)


@pytest.fixture
def candidate_pool():
    """Five candidates with mixed overlap against seed_track."""
    return [
        make_track(id="c1", title="Song A (Remix)", artist="Artist X", duration_ms=210_000),
        make_track(id="c2", title="Song B", artist="Artist X", duration_ms=195_000),
        make_track(id="c3", title="Other Tune", artist="Artist Y", duration_ms=180_000),
        make_track(id="c4", title="Something Else", artist="Band Z", duration_ms=400_000),
        make_track(id="c5", title="Song A Live", artist="Artist X feat. Y", duration_ms=205_000),
    ]


@pytest.fixture
def now_ms():
    return NOW_MS


@pytest.fixture
def track_factory():
    return make_track


@pytest.fixture
def entry_factory():
    return make_entry
