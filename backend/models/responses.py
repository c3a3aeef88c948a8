from pydantic import BaseModel

from models.profile import Profile
from models.schemas.recommendation import HybridResult
from models.schemas.weights import QueryDifficulty, WeightPair


class RecommendationItem(BaseModel):
    candidate_id: str
    score: float
    profile: Profile


class RecommendationResponse(BaseModel):
    user_id: str
    recommendations: list[RecommendationItem] = []
    count: int = 0
    model_version: str = ""


class WeightsResponse(BaseModel):
    weights: WeightPair
    complexity: float = 0.0
    difficulty: QueryDifficulty = QueryDifficulty.SIMPLE
    strategy: str = ""
    summary: str = ""


class SearchResponse(BaseModel):
    user_id: str
    weights: WeightPair
    difficulty: QueryDifficulty = QueryDifficulty.SIMPLE
    results: list[HybridResult] = []


class InteractionResponse(BaseModel):
    status: str = "recorded"
