"""Abstract base class for pluggable two-tower embedding encoders."""

from abc import ABC, abstractmethod
import logging

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from models.schemas.feature_vector import FeatureVector

logger = logging.getLogger(__name__)


class BaseEncoder(ABC):
    """Base class for embedding encoders.

    Subclasses must implement:
        - name: identifier used in model_registry
        - load(): load vocabularies/weights into memory
        - encode_user(features): raw (high-dimensional) feature representation
        - compute_embedding(raw): fixed-dimension embedding from that representation
    """

    name: str = ""
    dimension: int = 64
    _loaded: bool = False

    @abstractmethod
    def load(self) -> None:
        """Load encoder artifacts. Called once by model_registry."""

    @abstractmethod
    def encode_user(self, features: FeatureVector) -> np.ndarray:
        """Encode features into the encoder's internal representation."""

    @abstractmethod
    def compute_embedding(self, representation: np.ndarray) -> np.ndarray:
        """Project an internal representation to a `dimension`-d embedding."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load encoder if not already loaded."""
        if not self._loaded:
            logger.info("Loading encoder: %s", self.name)
            self.load()
            self._loaded = True
            logger.info("Encoder loaded: %s", self.name)

    def embed(self, features: FeatureVector) -> np.ndarray:
        return self.compute_embedding(self.encode_user(features))

    def embed_many(self, features_list: list[FeatureVector]) -> np.ndarray:
        """Embeddings stacked into an (N, dimension) matrix."""
        if not features_list:
            return np.zeros((0, self.dimension))
        return np.vstack([self.embed(f) for f in features_list])

    @staticmethod
    def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
        """Cosine similarity in [-1, 1]; 0.0 when either vector is all zeros."""
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)
        if a.shape != b.shape or not np.any(a) or not np.any(b):
            return 0.0
        score = float(sklearn_cosine(a.reshape(1, -1), b.reshape(1, -1))[0][0])
        return max(-1.0, min(1.0, score))

    @staticmethod
    def batch_similarity(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
        """Cosine similarity of one query vector against every row of matrix."""
        if matrix.shape[0] == 0:
            return np.zeros(0)
        scores = sklearn_cosine(np.asarray(query, dtype=float).reshape(1, -1), matrix).flatten()
        return np.clip(scores, -1.0, 1.0)
