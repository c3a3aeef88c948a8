"""Hashing two-tower encoder: sparse profile features -> 64-d unit embedding.

Encoding layout (concatenated, then folded into `dimension` buckets by index
modulo and L2-normalised):

    one-hot     intention, experience level, career stage, industry
    multi-hot   skills, hobbies, sub-intentions, values,
                skills to learn, skills to teach,
                functions to learn, functions to teach   (each block sums to 1)
    numeric     years / 50, min(completion, 1), verified (0/1)

The fold is a fixed linear projection; a learned projection can replace it by
registering another BaseEncoder subclass in model_registry.
"""

import logging

import numpy as np

from models.schemas.feature_vector import FeatureVector
from services.pipeline import vocabularies as vocab
from services.pipeline.base import BaseEncoder

logger = logging.getLogger(__name__)


def _index(categories: list[str]) -> dict[str, int]:
    return {c.lower(): i for i, c in enumerate(categories)}


class HashingTwoTowerEncoder(BaseEncoder):
    name = "two_tower_hashing"

    def __init__(self, dimension: int = 64) -> None:
        self.dimension = dimension
        self._indexes: dict[str, dict[str, int]] = {}
        self._sizes: dict[str, int] = {}

    def load(self) -> None:
        blocks = {
            "intention": vocab.INTENTIONS,
            "experience_level": vocab.EXPERIENCE_LEVELS,
            "career_stage": vocab.CAREER_STAGES,
            "industry": vocab.INDUSTRIES,
            "skills": vocab.SKILLS,
            "hobbies": vocab.HOBBIES,
            "sub_intentions": vocab.SUB_INTENTIONS,
            "values": vocab.VALUES,
            "functions": vocab.FUNCTIONS,
        }
        self._indexes = {name: _index(cats) for name, cats in blocks.items()}
        self._sizes = {name: len(cats) for name, cats in blocks.items()}

    @property
    def feature_dimension(self) -> int:
        """Length of the raw representation before folding."""
        self.ensure_loaded()
        s = self._sizes
        return (
            s["intention"] + s["experience_level"] + s["career_stage"] + s["industry"]
            + s["skills"] * 3 + s["hobbies"] + s["sub_intentions"] + s["values"]
            + s["functions"] * 2
            + 3
        )

    def _one_hot(self, block: str, value: str | None) -> np.ndarray:
        vec = np.zeros(self._sizes[block])
        if value:
            idx = self._indexes[block].get(value.lower())
            if idx is not None:
                vec[idx] = 1.0
        return vec

    def _multi_hot(self, block: str, values: list[str]) -> np.ndarray:
        vec = np.zeros(self._sizes[block])
        index = self._indexes[block]
        for value in values:
            idx = index.get(value.lower())
            if idx is not None:
                vec[idx] = 1.0
        total = vec.sum()
        return vec / total if total > 0 else vec

    def encode_user(self, features: FeatureVector) -> np.ndarray:
        self.ensure_loaded()
        parts = [
            self._one_hot("intention", features.main_intention),
            self._one_hot("experience_level", features.experience_level),
            self._one_hot("career_stage", features.career_stage),
            self._one_hot("industry", features.industry),
            self._multi_hot("skills", features.skills),
            self._multi_hot("hobbies", features.hobbies),
            self._multi_hot("sub_intentions", features.sub_intentions),
            self._multi_hot("values", features.values),
            self._multi_hot("skills", features.skills_to_learn),
            self._multi_hot("skills", features.skills_to_teach),
            self._multi_hot("functions", features.functions_to_learn),
            self._multi_hot("functions", features.functions_to_teach),
            np.array([
                features.years_of_experience / vocab.MAX_YEARS_OF_EXPERIENCE,
                min(features.profile_completion, 1.0),
                float(features.is_verified),
            ]),
        ]
        return np.concatenate(parts)

    def compute_embedding(self, representation: np.ndarray) -> np.ndarray:
        embedding = np.zeros(self.dimension)
        buckets = np.arange(representation.shape[0]) % self.dimension
        np.add.at(embedding, buckets, representation)

        norm = np.linalg.norm(embedding)
        if norm > 1e-10:
            return embedding / norm
        return embedding
