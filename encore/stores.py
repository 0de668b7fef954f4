"""Interfaces for the collaborators that feed the recommendation service."""

from __future__ import annotations

from typing import Protocol

from .models import HistoryEntry, Track


class HistoryStore(Protocol):
    """Protocol for per-scope play history retrieval."""

    def get_recent(self, scope: str, limit: int) -> list[HistoryEntry]:
        """Return up to `limit` entries for one scope, newest first."""
        ...


class CandidateProvider(Protocol):
    """Protocol for candidate track retrieval."""

    def get_candidates(self, scope: str) -> list[Track]:
        """Return the candidate pool for one scope."""
        ...
