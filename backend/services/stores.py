"""Collaborator interfaces consumed by the recommendation pipeline.

The real implementations live in the remote profile/interaction store; the
pipeline only depends on the abstract classes below. In-memory versions back
the tests and the demo API.
"""

from abc import ABC, abstractmethod
import logging

from cachetools import TTLCache

from models.profile import Profile
from models.schemas.feature_vector import FeatureVector
from models.schemas.recommendation import CacheEntry, InteractionEvent, InteractionKind
from services.feature_extractor import extract

logger = logging.getLogger(__name__)


class ProfileStore(ABC):
    @abstractmethod
    async def get_profile(self, user_id: str) -> Profile | None:
        """Full profile, or None when not found."""

    @abstractmethod
    async def get_user_features(self, user_id: str) -> FeatureVector | None:
        """Stored two-tower features for a user, or None when absent."""

    @abstractmethod
    async def get_all_candidate_features(
        self, excluding: str, limit: int
    ) -> list[tuple[str, FeatureVector]]:
        """Up to limit (user_id, features) pairs, never including `excluding`."""

    async def get_excluded_user_ids(self, user_id: str) -> set[str]:
        """Users never to recommend to user_id (already invited, matched, ...)."""
        return set()


class RecommendationCache(ABC):
    @abstractmethod
    async def get_cached_recommendations(self, user_id: str) -> tuple[list[str], list[float]] | None:
        """Cached (candidate ids, scores) or None."""

    @abstractmethod
    async def cache_recommendations(
        self, user_id: str, candidate_ids: list[str], scores: list[float], model_version: str
    ) -> None:
        """Store a ranking, overwriting any previous entry for user_id."""

    @abstractmethod
    async def clear_recommendations(self, user_id: str) -> None:
        """Remove any entry for user_id."""


class InteractionSink(ABC):
    @abstractmethod
    async def record_interaction(self, actor_id: str, target_id: str, kind: InteractionKind) -> None:
        """Append one interaction event."""


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

class InMemoryProfileStore(ProfileStore):
    """Profiles held in a dict; features derived with the feature extractor."""

    def __init__(
        self,
        profiles: list[Profile] | None = None,
        excluded: dict[str, set[str]] | None = None,
    ) -> None:
        self._profiles: dict[str, Profile] = {}
        self._features: dict[str, FeatureVector] = {}
        self._excluded: dict[str, set[str]] = {k: set(v) for k, v in (excluded or {}).items()}
        for profile in profiles or []:
            self.add(profile)

    def add(self, profile: Profile) -> None:
        self._profiles[profile.user_id] = profile
        self._features[profile.user_id] = extract(profile)

    def exclude(self, user_id: str, *target_ids: str) -> None:
        self._excluded.setdefault(user_id, set()).update(target_ids)

    async def get_profile(self, user_id: str) -> Profile | None:
        return self._profiles.get(user_id)

    async def get_user_features(self, user_id: str) -> FeatureVector | None:
        return self._features.get(user_id)

    async def get_all_candidate_features(
        self, excluding: str, limit: int
    ) -> list[tuple[str, FeatureVector]]:
        pairs = [(uid, f) for uid, f in self._features.items() if uid != excluding]
        return pairs[:limit]

    async def get_excluded_user_ids(self, user_id: str) -> set[str]:
        return set(self._excluded.get(user_id, set()))


class InMemoryRecommendationCache(RecommendationCache):
    """Cache entries in a cachetools.TTLCache; expiry is this store's policy."""

    def __init__(self, maxsize: int = 10000, ttl: float = 6 * 60 * 60) -> None:
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def entry(self, user_id: str) -> CacheEntry | None:
        return self._entries.get(user_id)

    async def get_cached_recommendations(self, user_id: str) -> tuple[list[str], list[float]] | None:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        return list(entry.candidate_ids), list(entry.scores)

    async def cache_recommendations(
        self, user_id: str, candidate_ids: list[str], scores: list[float], model_version: str
    ) -> None:
        self._entries[user_id] = CacheEntry(
            user_id=user_id,
            candidate_ids=list(candidate_ids),
            scores=list(scores),
            model_version=model_version,
        )
        logger.debug("Cached %d recommendations for %s (%s)", len(candidate_ids), user_id, model_version)

    async def clear_recommendations(self, user_id: str) -> None:
        self._entries.pop(user_id, None)


class InMemoryInteractionSink(InteractionSink):
    def __init__(self) -> None:
        self.events: list[InteractionEvent] = []

    async def record_interaction(self, actor_id: str, target_id: str, kind: InteractionKind) -> None:
        self.events.append(InteractionEvent(actor_id=actor_id, target_id=target_id, kind=kind))
