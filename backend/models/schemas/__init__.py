"""Pydantic contracts shared by the ranking services."""

from models.schemas.feature_vector import FeatureVector
from models.schemas.parsed_query import ParsedQuery, QueryEntities, QueryModifiers
from models.schemas.recommendation import (
    CacheEntry,
    HybridResult,
    InteractionEvent,
    InteractionKind,
    RankedCandidate,
)
from models.schemas.weights import QueryDifficulty, WeightPair
from models.schemas.zoned_text import FieldZone, ZonedText

__all__ = [
    "FeatureVector",
    "ParsedQuery",
    "QueryEntities",
    "QueryModifiers",
    "CacheEntry",
    "HybridResult",
    "InteractionEvent",
    "InteractionKind",
    "RankedCandidate",
    "QueryDifficulty",
    "WeightPair",
    "FieldZone",
    "ZonedText",
]
