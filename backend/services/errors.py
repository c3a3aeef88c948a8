"""Error taxonomy for the recommendation pipeline."""


class RecommendationError(Exception):
    """Base class. ``code`` is a stable identifier surfaced to API clients."""

    code: str = "recommendation_error"

    def __init__(self, message: str = "", *, user_id: str | None = None) -> None:
        self.user_id = user_id
        super().__init__(message or self.code)


class UserNotFoundError(RecommendationError):
    """The requester has no feature record."""
    code = "user_not_found"


class NoCandidatesError(RecommendationError):
    """The candidate pool is empty after excluding the requester."""
    code = "no_candidates"


class EncodingFailedError(RecommendationError):
    """The embedding encoder failed on the requester or the candidate pool."""
    code = "encoding_failed"


class ProfileLoadFailedError(RecommendationError):
    """The profile store failed while loading requester features or the pool."""
    code = "profile_load_failed"


class RecommendationTimeoutError(RecommendationError):
    """The request-scoped deadline elapsed before the pipeline finished."""
    code = "timeout"
