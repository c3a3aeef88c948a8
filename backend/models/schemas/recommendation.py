"""Recommendation pipeline records: ranked results, cache entries, interactions."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from models.profile import Profile


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RankedCandidate(BaseModel):
    """One recommendation: candidate id, cosine score and the loaded profile."""
    model_config = ConfigDict(frozen=True)

    candidate_id: str
    score: float
    profile: Profile


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    candidate_ids: list[str] = []
    scores: list[float] = []
    model_version: str = ""
    written_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_usable(self) -> bool:
        """Non-empty with one score per candidate id."""
        return bool(self.candidate_ids) and len(self.candidate_ids) == len(self.scores)


class InteractionKind(str, Enum):
    PASS = "pass"
    LIKE = "like"
    MATCH = "match"


class InteractionEvent(BaseModel):
    """Append-only feedback event. Consumers must tolerate duplicates."""
    model_config = ConfigDict(frozen=True)

    actor_id: str
    target_id: str
    kind: InteractionKind
    timestamp: datetime = Field(default_factory=_utcnow)


class HybridResult(BaseModel):
    """A candidate re-scored against a query, with every signal kept for inspection."""
    model_config = ConfigDict(frozen=True)

    candidate_id: str
    profile: Profile
    recommendation_score: float = 0.0  # raw cosine, [-1, 1]
    zone_score: float = 0.0
    entity_score: float = 0.0
    experience_score: float = 0.0
    text_score: float = 0.0  # zone + entity + experience, unscaled
    fused_score: float = 0.0
