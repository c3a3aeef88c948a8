"""Dynamic weighting output: recommendation/text split and query difficulty."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class WeightPair(BaseModel):
    """Split between the recommendation score and the text score.

    Both weights lie in [0.1, 0.9] and sum to 1.0.
    """
    model_config = ConfigDict(frozen=True)

    recommendation: float = 0.3
    text: float = 0.7

    def describe(self) -> str:
        return f"Rec={self.recommendation:.1%}, Text={self.text:.1%}"


class QueryDifficulty(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"

    @property
    def strategy(self) -> str:
        return {
            QueryDifficulty.SIMPLE: "Rely more on recommendation system",
            QueryDifficulty.MODERATE: "Balanced approach",
            QueryDifficulty.COMPLEX: "Rely more on text matching",
        }[self]
