import pytest

from config import Settings
from models.schemas.parsed_query import ParsedQuery, QueryEntities
from models.schemas.recommendation import RankedCandidate
from models.schemas.weights import WeightPair
from services.errors import UserNotFoundError
from services.hybrid_ranker import HybridRanker, rank_pool, scale_recommendation_score, scale_text_scores
from services.pipeline.orchestrator import RecommendationService
from services.pipeline.two_tower_encoder import HashingTwoTowerEncoder
from services.stores import InMemoryInteractionSink, InMemoryProfileStore, InMemoryRecommendationCache
from services.tracing import RecordingTracer

NOW_YEAR = 2025

STRIPE_QUERY = ParsedQuery(
    raw_text="stripe",
    tokens=["stripe"],
    entities=QueryEntities(companies=["stripe"]),
)


def test_scale_recommendation_score():
    assert scale_recommendation_score(-1.0) == 0.0
    assert scale_recommendation_score(0.0) == 0.5
    assert scale_recommendation_score(1.0) == 1.0
    assert scale_recommendation_score(1.5) == 1.0


def test_scale_text_scores():
    assert scale_text_scores([]) == []
    assert scale_text_scores([0.0, 5.0, 10.0]) == [0.0, 0.5, 1.0]
    assert scale_text_scores([2.0, 2.0]) == [1.0, 1.0]
    assert scale_text_scores([0.0, 0.0]) == [0.0, 0.0]


class TestRankPool:
    def test_text_match_lifts_candidate(self, stripe_engineer, designer):
        pool = [
            RankedCandidate(candidate_id="u-design", score=0.9, profile=designer),
            RankedCandidate(candidate_id="u-stripe", score=0.2, profile=stripe_engineer),
        ]
        weights = WeightPair(recommendation=0.5, text=0.5)
        results = rank_pool(pool, STRIPE_QUERY, weights, now_year=NOW_YEAR)

        assert [r.candidate_id for r in results] == ["u-stripe", "u-design"]
        top = results[0]
        assert top.zone_score == 3.0
        assert top.entity_score == 5.0
        assert top.text_score == 8.0
        assert top.recommendation_score == 0.2
        assert top.fused_score == pytest.approx(0.5 * 0.6 + 0.5 * 1.0)
        assert results[1].fused_score == pytest.approx(0.5 * 0.95)

    def test_ties_broken_by_id(self, designer):
        pool = [
            RankedCandidate(candidate_id=cid, score=0.5, profile=designer)
            for cid in ("u-c", "u-a", "u-b")
        ]
        results = rank_pool(pool, STRIPE_QUERY, WeightPair())
        assert [r.candidate_id for r in results] == ["u-a", "u-b", "u-c"]

    def test_limit(self, profiles):
        pool = [RankedCandidate(candidate_id=p.user_id, score=0.1, profile=p) for p in profiles]
        assert len(rank_pool(pool, STRIPE_QUERY, WeightPair(), limit=2)) == 2

    def test_empty_pool(self):
        assert rank_pool([], STRIPE_QUERY, WeightPair()) == []


class TestHybridRanker:
    def _ranker(self, profiles, tracer=None):
        service = RecommendationService(
            profile_store=InMemoryProfileStore(profiles),
            cache=InMemoryRecommendationCache(),
            interaction_sink=InMemoryInteractionSink(),
            encoder=HashingTwoTowerEncoder(),
            settings=Settings(hybrid_pool_size=10),
        )
        return HybridRanker(service, tracer=tracer or RecordingTracer(), now_year=NOW_YEAR)

    @pytest.mark.asyncio
    async def test_query_match_ranked_first(self, profiles):
        tracer = RecordingTracer()
        results = await self._ranker(profiles, tracer).rank("u-design", STRIPE_QUERY, limit=2)
        assert [r.candidate_id for r in results][0] == "u-stripe"
        assert results[0].fused_score >= results[1].fused_score
        weights = tracer.named("weights")[0]
        assert weights["recommendation"] + weights["text"] == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_limit_applies_after_fusion(self, profiles):
        results = await self._ranker(profiles).rank("u-design", STRIPE_QUERY, limit=1)
        assert [r.candidate_id for r in results] == ["u-stripe"]

    @pytest.mark.asyncio
    async def test_errors_propagate(self, profiles):
        with pytest.raises(UserNotFoundError):
            await self._ranker(profiles).rank("u-missing", STRIPE_QUERY)

    @pytest.mark.asyncio
    async def test_pool_not_narrowed_by_earlier_short_request(self, data_scientist, designer):
        clones = [data_scientist.model_copy(update={"user_id": f"u-{i:02d}"}) for i in range(8)]
        target = designer.model_copy(update={"user_id": "zz-target", "current_company": "Stripe"})
        service = RecommendationService(
            profile_store=InMemoryProfileStore([data_scientist, *clones, target]),
            cache=InMemoryRecommendationCache(),
            interaction_sink=InMemoryInteractionSink(),
            encoder=HashingTwoTowerEncoder(),
            settings=Settings(hybrid_pool_size=20),
        )
        warm = await service.get_recommendations("u-data", limit=3)
        assert "zz-target" not in {r.candidate_id for r in warm}

        results = await HybridRanker(service, now_year=NOW_YEAR).rank("u-data", STRIPE_QUERY, limit=5)
        assert results[0].candidate_id == "zz-target"
