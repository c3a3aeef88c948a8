import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_hybrid_ranker, get_recommendation_service
from config import settings
from models.requests import InteractionRequest, SearchRequest
from models.responses import (
    InteractionResponse,
    RecommendationItem,
    RecommendationResponse,
    SearchResponse,
    WeightsResponse,
)
from models.schemas.parsed_query import ParsedQuery
from services.dynamic_weighting import adjust_weights, query_complexity, query_difficulty
from services.errors import (
    EncodingFailedError,
    NoCandidatesError,
    ProfileLoadFailedError,
    RecommendationError,
    RecommendationTimeoutError,
    UserNotFoundError,
)
from services.hybrid_ranker import HybridRanker
from services.pipeline.orchestrator import RecommendationService

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

_ERROR_STATUS: dict[type[RecommendationError], int] = {
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    NoCandidatesError: status.HTTP_404_NOT_FOUND,
    EncodingFailedError: status.HTTP_502_BAD_GATEWAY,
    ProfileLoadFailedError: status.HTTP_502_BAD_GATEWAY,
    RecommendationTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
}


def _to_http(error: RecommendationError) -> HTTPException:
    code = _ERROR_STATUS.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info("Recommendation request failed (%s): %s", error.code, error)
    return HTTPException(status_code=code, detail={"code": error.code, "detail": str(error)})


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "encoder": settings.encoder_name,
        "model_version": settings.model_version,
    }


@router.get("/recommendations/{user_id}", response_model=RecommendationResponse)
@limiter.limit(settings.rate_limit)
async def recommendations(
    request: Request,
    user_id: str,
    limit: int = Query(default=settings.default_limit, ge=1, le=100),
    force_refresh: bool = False,
    service: RecommendationService = Depends(get_recommendation_service),
):
    try:
        ranked = await service.get_recommendations(user_id, limit=limit, force_refresh=force_refresh)
    except RecommendationError as e:
        raise _to_http(e) from e

    items = [
        RecommendationItem(candidate_id=r.candidate_id, score=r.score, profile=r.profile)
        for r in ranked
    ]
    return RecommendationResponse(
        user_id=user_id,
        recommendations=items,
        count=len(items),
        model_version=service.settings.model_version,
    )


@router.post("/interactions", response_model=InteractionResponse, status_code=status.HTTP_202_ACCEPTED)
@limiter.limit(settings.rate_limit)
async def interactions(
    request: Request,
    body: InteractionRequest,
    service: RecommendationService = Depends(get_recommendation_service),
):
    await service.record_interaction(body.user_id, body.target_id, body.kind)
    return InteractionResponse()


@router.post("/search/{user_id}", response_model=SearchResponse)
@limiter.limit(settings.rate_limit)
async def search(
    request: Request,
    user_id: str,
    body: SearchRequest,
    ranker: HybridRanker = Depends(get_hybrid_ranker),
):
    try:
        results = await ranker.rank(
            user_id,
            body.query,
            limit=body.limit,
            pool_size=body.pool_size,
            force_refresh=body.force_refresh,
        )
    except RecommendationError as e:
        raise _to_http(e) from e

    return SearchResponse(
        user_id=user_id,
        weights=adjust_weights(body.query),
        difficulty=query_difficulty(body.query),
        results=results,
    )


@router.post("/weights", response_model=WeightsResponse)
@limiter.limit(settings.rate_limit)
async def weights(request: Request, body: ParsedQuery):
    difficulty = query_difficulty(body)
    return WeightsResponse(
        weights=adjust_weights(body),
        complexity=query_complexity(body),
        difficulty=difficulty,
        strategy=difficulty.strategy,
        summary=body.summary(),
    )
