"""Hybrid query ranking: blend two-tower recommendations with query text matching.

Pipeline:
1. Recommendation pool from the orchestrator (cosine score per candidate)
2. Zone + entity + soft-experience text score per candidate
3. Rescale both signals to [0, 1]
4. Query-adaptive weights from dynamic weighting
5. Fused score = w_rec * rec + w_text * text, sorted best first
"""

import logging

from models.schemas.parsed_query import ParsedQuery
from models.schemas.recommendation import HybridResult, RankedCandidate
from models.schemas.weights import WeightPair
from services.dynamic_weighting import adjust_weights, fuse
from services.pipeline.orchestrator import RecommendationService
from services.tracing import NULL_TRACER, ScoringTracer
from services.zone_scorer import text_score_components

logger = logging.getLogger(__name__)


def scale_recommendation_score(cosine: float) -> float:
    """Map cosine similarity from [-1, 1] to [0, 1]."""
    return (max(-1.0, min(1.0, cosine)) + 1.0) / 2.0


def scale_text_scores(scores: list[float]) -> list[float]:
    """Min-max scale raw text scores across a pool to [0, 1].

    When every score is equal there is nothing to rank on: positive scores map
    to 1.0 and zero scores to 0.0.
    """
    if not scores:
        return []
    lo, hi = min(scores), max(scores)
    if hi == lo:
        return [1.0 if hi > 0 else 0.0 for _ in scores]
    return [(s - lo) / (hi - lo) for s in scores]


def rank_pool(
    pool: list[RankedCandidate],
    query: ParsedQuery,
    weights: WeightPair,
    limit: int | None = None,
    now_year: int | None = None,
    tracer: ScoringTracer = NULL_TRACER,
) -> list[HybridResult]:
    """Score an already-retrieved pool against a query and fuse the signals."""
    components = [
        text_score_components(item.profile, query, now_year, tracer) for item in pool
    ]
    raw_text = [sum(c) for c in components]
    scaled_text = scale_text_scores(raw_text)

    results: list[HybridResult] = []
    for item, (zone, entity, experience), text, text_scaled in zip(pool, components, raw_text, scaled_text):
        fused = fuse(weights, scale_recommendation_score(item.score), text_scaled)
        results.append(HybridResult(
            candidate_id=item.candidate_id,
            profile=item.profile,
            recommendation_score=item.score,
            zone_score=zone,
            entity_score=entity,
            experience_score=experience,
            text_score=text,
            fused_score=fused,
        ))

    results.sort(key=lambda r: (-r.fused_score, r.candidate_id))
    return results[:limit] if limit is not None else results


class HybridRanker:
    """Query path on top of the recommendation service."""

    def __init__(
        self,
        recommendation_service: RecommendationService,
        tracer: ScoringTracer = NULL_TRACER,
        now_year: int | None = None,
    ) -> None:
        self._service = recommendation_service
        self._tracer = tracer
        self._now_year = now_year

    async def rank(
        self,
        user_id: str,
        query: ParsedQuery,
        limit: int = 20,
        pool_size: int | None = None,
        force_refresh: bool = False,
    ) -> list[HybridResult]:
        pool_size = max(limit, pool_size or self._service.settings.hybrid_pool_size)
        pool = await self._service.get_recommendations(
            user_id, limit=pool_size, force_refresh=force_refresh
        )
        weights = adjust_weights(query, self._tracer)
        logger.info(
            "Hybrid ranking for %s: %d candidates, %s, query: %s",
            user_id, len(pool), weights.describe(), query.summary(),
        )
        return rank_pool(pool, query, weights, limit, self._now_year, self._tracer)
