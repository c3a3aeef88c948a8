"""Compact typed projection of a profile, consumed by the embedding encoder."""

from pydantic import BaseModel, ConfigDict, field_validator

_TRUTHY = {"1", "true", "t", "yes", "y"}


class FeatureVector(BaseModel):
    """Two-tower input features for one user.

    Built fresh for every scoring call and never mutated. Store records that
    carry these features directly (``user_features`` rows) are validated into
    the same model, so the validators below accept the loose shapes such rows
    come in with.
    """
    model_config = ConfigDict(frozen=True)

    # Scalar (one-hot) features
    location: str | None = None
    time_zone: str | None = None
    industry: str | None = None
    experience_level: str | None = None
    career_stage: str | None = None
    main_intention: str | None = None

    # Multi-valued (multi-hot) features
    skills: list[str] = []
    hobbies: list[str] = []
    values: list[str] = []
    languages: list[str] = []
    sub_intentions: list[str] = []

    # Learn/teach pairs
    skills_to_learn: list[str] = []
    skills_to_teach: list[str] = []
    functions_to_learn: list[str] = []
    functions_to_teach: list[str] = []

    # Numeric features
    years_of_experience: float = 0.0
    profile_completion: float = 0.5
    is_verified: int = 0

    @field_validator(
        "skills", "hobbies", "values", "languages", "sub_intentions",
        "skills_to_learn", "skills_to_teach", "functions_to_learn", "functions_to_teach",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def _years_default(cls, v):
        return 0.0 if v is None else v

    @field_validator("profile_completion", mode="before")
    @classmethod
    def _completion_default(cls, v):
        return 0.5 if v is None else v

    @field_validator("is_verified", mode="before")
    @classmethod
    def _coerce_verified(cls, v) -> int:
        if isinstance(v, bool):
            return 1 if v else 0
        if isinstance(v, (int, float)):
            return 1 if v else 0
        if isinstance(v, str):
            return 1 if v.strip().lower() in _TRUTHY else 0
        return 0

    @property
    def is_valid(self) -> bool:
        """At least one identity, skill or hobby signal is present."""
        return bool(self.location) or bool(self.skills) or bool(self.hobbies)

    def summary(self) -> str:
        return (
            f"location={self.location or 'N/A'} "
            f"industry={self.industry or 'N/A'} "
            f"skills={', '.join(self.skills[:3])} "
            f"hobbies={', '.join(self.hobbies[:3])} "
            f"intention={self.main_intention or 'N/A'}"
        )
