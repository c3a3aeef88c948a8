"""Profile records as served by the profile store.

Profiles are read-only to the ranking core: every model here is frozen so a
scoring pass can never mutate the record it is looking at.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class VerificationTier(str, Enum):
    UNVERIFIED = "unverified"
    EMAIL_VERIFIED = "email_verified"
    VERIFIED_PROFESSIONAL = "verified_professional"


class WorkExperience(BaseModel):
    """A single work-history entry. ``end_year`` is None for an ongoing role."""
    model_config = ConfigDict(frozen=True)

    company_name: str = ""
    position: str = ""
    start_year: int | None = None
    end_year: int | None = None
    responsibilities: str = ""
    highlighted_skills: list[str] = []


class Education(BaseModel):
    model_config = ConfigDict(frozen=True)

    school_name: str = ""
    degree: str = ""  # e.g. "Bachelor's", "MBA", "Ph.D."
    field_of_study: str = ""
    start_year: int | None = None
    end_year: int | None = None


class SkillInterest(BaseModel):
    """A skill the user wants to learn and/or can guide others in."""
    model_config = ConfigDict(frozen=True)

    skill_name: str
    learn_in: bool = False
    guide_in: bool = False


class CareerFunctionInterest(BaseModel):
    """A career-direction entry: one or more job functions plus learn/guide flags."""
    model_config = ConfigDict(frozen=True)

    functions: list[str] = []
    learn_in: bool = False
    guide_in: bool = False


class Profile(BaseModel):
    """Full user profile.

    ``work_experiences`` is ordered most recent first, which is the order the
    profile store returns it in.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str = ""

    # Core identity
    bio: str = ""
    location: str = ""
    time_zone: str = ""

    # Professional background
    job_title: str = ""
    current_company: str = ""
    industry: str = ""
    experience_level: str = ""  # Intern, Entry, Mid, Senior, Executive
    career_stage: str = ""  # earlyCareer, midLevel, manager, director, executive
    years_of_experience: float | None = None
    skills: list[str] = []
    languages: list[str] = []
    education: str = ""  # free-text education summary
    educations: list[Education] = []
    work_experiences: list[WorkExperience] = []

    # Networking intent
    main_intention: str = ""
    sub_intentions: list[str] = []
    skills_of_interest: list[SkillInterest] = []
    career_functions: list[CareerFunctionInterest] = []

    # Personality & social
    hobbies: list[str] = []
    values_tags: list[str] = []
    self_introduction: str = ""

    # Privacy & trust
    verification: VerificationTier = VerificationTier.UNVERIFIED
    profile_completion: float = 0.0  # 0.0-1.0

    @property
    def is_verified(self) -> bool:
        return self.verification == VerificationTier.VERIFIED_PROFESSIONAL
