from pydantic import BaseModel, Field

from models.schemas.parsed_query import ParsedQuery
from models.schemas.recommendation import InteractionKind


class InteractionRequest(BaseModel):
    user_id: str = Field(..., min_length=1, description="User who acted on the recommendation")
    target_id: str = Field(..., min_length=1, description="Recommended user that was acted on")
    kind: InteractionKind


class SearchRequest(BaseModel):
    query: ParsedQuery = Field(..., description="Query as produced by the query parser")
    limit: int = Field(default=20, ge=1, le=100)
    pool_size: int | None = Field(default=None, ge=1, le=1000)
    force_refresh: bool = False
