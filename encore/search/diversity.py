"""Greedy diversity pruning for score-sorted recommendation lists."""

from __future__ import annotations

import logging

from ..config import SimilarityConfig
from ..models import RecommendationResult
from .similarity import calculate_diversity_score

logger = logging.getLogger(__name__)


def apply_diversity_filter(
    recommendations: list[RecommendationResult],
    config: SimilarityConfig,
) -> list[RecommendationResult]:
    """
    Keep candidates, in order, while the selection stays diverse enough.

    Each candidate is accepted only if 1 - (average pairwise lexical
    similarity of the selection plus the candidate) is at least
    config.diversity_factor. Rejected candidates are dropped, repeated track
    keys are skipped, and accepted items keep their input order.

    Lists of one item, or a diversity_factor <= 0, are returned unchanged.
    """
    if len(recommendations) <= 1 or config.diversity_factor <= 0:
        return recommendations

    selected: list[RecommendationResult] = []
    used_keys = set()

    for rec in recommendations:
        if rec.key in used_keys:
            continue

        candidate_set = [r.track for r in selected] + [rec.track]
        diversity = calculate_diversity_score(candidate_set, config)

        if diversity >= config.diversity_factor:
            selected.append(rec)
            used_keys.add(rec.key)

    logger.debug(
        f"Diversity filter kept {len(selected)}/{len(recommendations)} "
        f"(factor={config.diversity_factor})"
    )
    return selected
