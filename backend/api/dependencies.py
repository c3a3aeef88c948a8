"""Shared dependencies for API routes.

The demo API wires the services to in-memory stores. Deployments replace
`get_recommendation_service` (or `app.state.recommendation_service`) with a
service built on the remote profile/interaction store.
"""

from fastapi import Depends, Request

from config import Settings, settings as default_settings
from services.hybrid_ranker import HybridRanker
from services.pipeline.model_registry import get_encoder
from services.pipeline.orchestrator import RecommendationService
from services.stores import (
    InMemoryInteractionSink,
    InMemoryProfileStore,
    InMemoryRecommendationCache,
    InteractionSink,
    ProfileStore,
    RecommendationCache,
)
from services.tracing import get_tracer


def build_recommendation_service(
    profile_store: ProfileStore | None = None,
    cache: RecommendationCache | None = None,
    interaction_sink: InteractionSink | None = None,
    settings: Settings | None = None,
) -> RecommendationService:
    settings = settings or default_settings
    return RecommendationService(
        profile_store=profile_store or InMemoryProfileStore(),
        cache=cache or InMemoryRecommendationCache(
            maxsize=settings.cache_max_entries, ttl=settings.cache_ttl_seconds
        ),
        interaction_sink=interaction_sink or InMemoryInteractionSink(),
        encoder=get_encoder(settings.encoder_name),
        settings=settings,
        tracer=get_tracer(settings.trace_scoring),
    )


def get_recommendation_service(request: Request) -> RecommendationService:
    service = getattr(request.app.state, "recommendation_service", None)
    if service is None:
        service = build_recommendation_service()
        request.app.state.recommendation_service = service
    return service


def get_hybrid_ranker(
    service: RecommendationService = Depends(get_recommendation_service),
) -> HybridRanker:
    return HybridRanker(service, tracer=get_tracer(service.settings.trace_scoring))
