"""Recommendation orchestrator: two-tower ranking of candidate profiles.

Flow:
    user_id
      ├─ cache lookup ──(hit)──────────────→ profile fetch → [RankedCandidate]
      │        (miss / force_refresh)
      ├─ ProfileStore.get_user_features     → FeatureVector   (UserNotFoundError)
      ├─ encoder.embed(requester)           → 64-d embedding  (EncodingFailedError)
      ├─ ProfileStore.get_all_candidate_features − exclusions (NoCandidatesError)
      ├─ encoder.embed_many + cosine        → similarity per candidate
      ├─ sort (score desc, id asc) → top-K
      ├─ concurrent profile fetch (failures dropped individually)
      └─ cache write (overwrite, top max(limit, hybrid_pool_size) ids)

A cached ranking serves a request only when it is deep enough for the
requested limit; results are always truncated to the limit.

The whole pipeline runs under a request-scoped timeout. Interaction events
are recorded separately and never fail the caller.
"""

import asyncio
import logging

import numpy as np

from config import Settings, settings as default_settings
from models.profile import Profile
from models.schemas.feature_vector import FeatureVector
from models.schemas.recommendation import InteractionKind, RankedCandidate
from services.errors import (
    EncodingFailedError,
    NoCandidatesError,
    ProfileLoadFailedError,
    RecommendationTimeoutError,
    UserNotFoundError,
)
from services.pipeline.base import BaseEncoder
from services.stores import InteractionSink, ProfileStore, RecommendationCache
from services.tracing import NULL_TRACER, ScoringTracer

logger = logging.getLogger(__name__)


class RecommendationService:
    """Two-tower recommendation pipeline with explicit collaborators."""

    def __init__(
        self,
        profile_store: ProfileStore,
        cache: RecommendationCache,
        interaction_sink: InteractionSink,
        encoder: BaseEncoder,
        settings: Settings | None = None,
        tracer: ScoringTracer = NULL_TRACER,
    ) -> None:
        self._store = profile_store
        self._cache = cache
        self._sink = interaction_sink
        self._encoder = encoder
        self._settings = settings or default_settings
        self._tracer = tracer

    @property
    def settings(self) -> Settings:
        return self._settings

    async def get_recommendations(
        self,
        user_id: str,
        limit: int | None = None,
        force_refresh: bool = False,
    ) -> list[RankedCandidate]:
        """Ranked (candidate_id, score, profile) triples for user_id, best first."""
        limit = self._settings.default_limit if limit is None else limit
        if limit <= 0:
            raise ValueError("limit must be positive")

        try:
            return await asyncio.wait_for(
                self._recommend(user_id, limit, force_refresh),
                timeout=self._settings.request_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Recommendation request for %s timed out after %.1fs",
                user_id, self._settings.request_timeout_seconds,
            )
            raise RecommendationTimeoutError(
                f"recommendations for {user_id} timed out", user_id=user_id
            ) from e

    async def _recommend(self, user_id: str, limit: int, force_refresh: bool) -> list[RankedCandidate]:
        # --- Stage 1: Cache ---
        if force_refresh:
            logger.info("Force refresh for %s: skipping cache", user_id)
        else:
            cached = await self._from_cache(user_id, limit)
            if cached is not None:
                return cached

        # --- Stage 2: Requester features + embedding ---
        features = await self._load_user_features(user_id)
        user_vec = self._embed_requester(user_id, features)

        # --- Stage 3: Candidate pool ---
        candidates = await self._load_candidates(user_id)

        # --- Stage 4: Similarity + top-K ---
        scored = await asyncio.to_thread(self._score_candidates, user_vec, candidates)
        top = scored[:limit]
        self._tracer.emit(
            "ranked",
            user_id=user_id,
            candidates=len(scored),
            top_scores=[round(s, 3) for _, s in top[:5]],
        )

        # --- Stage 5: Materialise profiles ---
        results = await self._materialize(top)
        if len(results) < len(top):
            logger.warning(
                "Only %d/%d recommended profiles loaded for %s",
                len(results), len(top), user_id,
            )

        # --- Stage 6: Cache write ---
        # Keep enough of the ranking for the hybrid ranker's default pool
        if results:
            await self._write_cache(user_id, scored[:max(limit, self._settings.hybrid_pool_size)])

        logger.info("Generated %d recommendations for %s (requested %d)", len(results), user_id, limit)
        return results

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def _is_deep_enough(self, cached_count: int, limit: int) -> bool:
        """Whether a cached ranking can serve `limit` results.

        Rankings are written at least `hybrid_pool_size` deep, so a shorter
        entry holds every candidate there was. Anything else must cover limit.
        """
        return cached_count >= limit or cached_count < self._settings.hybrid_pool_size

    async def _from_cache(self, user_id: str, limit: int) -> list[RankedCandidate] | None:
        try:
            cached = await self._cache.get_cached_recommendations(user_id)
        except Exception as e:
            logger.warning("Cache read failed for %s, recomputing: %s", user_id, e)
            return None
        if cached is None:
            return None

        ids, scores = cached
        if not ids or len(ids) != len(scores):
            logger.warning(
                "Invalid cache entry for %s (%d ids, %d scores), regenerating",
                user_id, len(ids), len(scores),
            )
            try:
                await self._cache.clear_recommendations(user_id)
            except Exception as e:
                logger.warning("Failed to clear invalid cache entry for %s: %s", user_id, e)
            return None

        if not self._is_deep_enough(len(ids), limit):
            logger.info(
                "Cached ranking for %s holds %d ids, %d requested: recomputing",
                user_id, len(ids), limit,
            )
            return None

        excluded = await self._excluded_ids(user_id)
        pairs = [(cid, score) for cid, score in zip(ids, scores) if cid not in excluded][:limit]
        results = await self._materialize(pairs)
        logger.info("Loaded %d/%d cached recommendations for %s", len(results), len(ids), user_id)
        self._tracer.emit("cache_hit", user_id=user_id, cached=len(ids), returned=len(results))
        return results

    async def _write_cache(self, user_id: str, ranking: list[tuple[str, float]]) -> None:
        try:
            await self._cache.cache_recommendations(
                user_id,
                [cid for cid, _ in ranking],
                [score for _, score in ranking],
                self._settings.model_version,
            )
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", user_id, e)

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    async def _load_user_features(self, user_id: str) -> FeatureVector:
        try:
            features = await self._store.get_user_features(user_id)
        except Exception as e:
            logger.error("Failed to load features for %s: %s", user_id, e)
            raise ProfileLoadFailedError(f"could not load features for {user_id}", user_id=user_id) from e
        if features is None:
            raise UserNotFoundError(f"no feature record for {user_id}", user_id=user_id)
        logger.debug("User features for %s: %s", user_id, features.summary())
        return features

    async def _excluded_ids(self, user_id: str) -> set[str]:
        try:
            return await self._store.get_excluded_user_ids(user_id)
        except Exception as e:
            logger.error("Failed to load exclusions for %s: %s", user_id, e)
            raise ProfileLoadFailedError(f"could not load exclusions for {user_id}", user_id=user_id) from e

    async def _load_candidates(self, user_id: str) -> list[tuple[str, FeatureVector]]:
        try:
            pool = await self._store.get_all_candidate_features(
                excluding=user_id, limit=self._settings.candidate_pool_limit
            )
        except Exception as e:
            logger.error("Failed to load candidate pool for %s: %s", user_id, e)
            raise ProfileLoadFailedError(f"could not load candidates for {user_id}", user_id=user_id) from e

        excluded = await self._excluded_ids(user_id)
        candidates = [(cid, f) for cid, f in pool if cid != user_id and cid not in excluded]
        logger.info(
            "Candidate pool for %s: %d loaded, %d after exclusions",
            user_id, len(pool), len(candidates),
        )
        if not candidates:
            raise NoCandidatesError(f"no candidates available for {user_id}", user_id=user_id)
        return candidates

    async def _fetch_profile(self, candidate_id: str) -> Profile | None:
        return await self._store.get_profile(candidate_id)

    async def _materialize(self, pairs: list[tuple[str, float]]) -> list[RankedCandidate]:
        """Load profiles concurrently, keeping input order; failed loads are dropped."""
        fetched = await asyncio.gather(
            *(self._fetch_profile(cid) for cid, _ in pairs),
            return_exceptions=True,
        )
        results: list[RankedCandidate] = []
        for (cid, score), profile in zip(pairs, fetched):
            if isinstance(profile, Exception):
                logger.warning("Failed to load profile %s: %s", cid, profile)
                continue
            if profile is None:
                logger.warning("Profile not found for recommended user %s", cid)
                continue
            results.append(RankedCandidate(candidate_id=cid, score=float(score), profile=profile))
        return results

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def _embed_requester(self, user_id: str, features: FeatureVector) -> np.ndarray:
        try:
            return self._encoder.embed(features)
        except Exception as e:
            logger.error("Encoder %s failed for %s: %s", self._encoder.name, user_id, e)
            raise EncodingFailedError(f"could not encode {user_id}", user_id=user_id) from e

    def _score_candidates(
        self, user_vec: np.ndarray, candidates: list[tuple[str, FeatureVector]]
    ) -> list[tuple[str, float]]:
        """Cosine similarity per candidate, sorted by score desc then id asc."""
        try:
            matrix = self._encoder.embed_many([f for _, f in candidates])
        except Exception as e:
            logger.error("Encoder %s failed on candidate pool: %s", self._encoder.name, e)
            raise EncodingFailedError("could not encode candidate pool") from e

        similarities = self._encoder.batch_similarity(user_vec, matrix)
        scored = [(cid, float(s)) for (cid, _), s in zip(candidates, similarities)]
        scored.sort(key=lambda pair: (-pair[1], pair[0]))
        return scored

    # ------------------------------------------------------------------
    # Interaction feedback
    # ------------------------------------------------------------------

    async def record_pass(self, user_id: str, target_id: str) -> None:
        await self._record(user_id, target_id, InteractionKind.PASS)

    async def record_like(self, user_id: str, target_id: str) -> None:
        await self._record(user_id, target_id, InteractionKind.LIKE)

    async def record_match(self, user_id: str, target_id: str) -> None:
        await self._record(user_id, target_id, InteractionKind.MATCH)

    async def record_interaction(self, user_id: str, target_id: str, kind: InteractionKind) -> None:
        await self._record(user_id, target_id, kind)

    async def _record(self, user_id: str, target_id: str, kind: InteractionKind) -> None:
        """Append an interaction event. Failures are logged and never raised."""
        attempts = 1 + max(0, self._settings.interaction_retries)
        for attempt in range(1, attempts + 1):
            try:
                await self._sink.record_interaction(user_id, target_id, kind)
                return
            except Exception as e:
                logger.error(
                    "Failed to record %s %s -> %s (attempt %d/%d): %s",
                    kind.value, user_id, target_id, attempt, attempts, e,
                )
