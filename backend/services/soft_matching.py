"""Soft-matching primitives: Gaussian decay, fuzzy string similarity, time decay.

Continuous-valued replacements for hard threshold comparisons, used by the
entity scorer and the hybrid ranker.
"""

import logging
import math
from datetime import date

from rapidfuzz.distance import Levenshtein

from models.profile import Profile, WorkExperience
from services.tracing import NULL_TRACER, ScoringTracer

logger = logging.getLogger(__name__)

DEFAULT_SIGMA = 1.5
DEFAULT_HALF_LIFE = 3.0  # years
FUZZY_DISTANCE_THRESHOLD = 2

# softExperienceMatch contributes on the same [0, 2] band as other entity hits
EXPERIENCE_MATCH_SCALE = 2.0


def gaussian_decay(actual: float, target: float, sigma: float = DEFAULT_SIGMA) -> float:
    """exp(-(actual-target)^2 / (2 sigma^2)). Peaks at 1.0 when actual == target."""
    return math.exp(-((actual - target) ** 2) / (2 * sigma ** 2))


def soft_experience_match(
    profile: Profile,
    target_years: list[float],
    tracer: ScoringTracer = NULL_TRACER,
) -> float:
    """Best Gaussian match of the profile's experience against any target, scaled to [0, 2]."""
    actual = profile.years_of_experience
    if actual is None or not target_years:
        return 0.0

    best = max(gaussian_decay(actual, target) for target in target_years)
    tracer.emit("experience_match", user_id=profile.user_id, actual=actual, best=round(best, 4))
    return EXPERIENCE_MATCH_SCALE * best


def levenshtein_distance(a: str, b: str) -> int:
    """Classic unit-cost edit distance. Case-sensitive; callers lowercase."""
    return Levenshtein.distance(a, b)


def fuzzy_string_match(a: str, b: str, threshold: int = FUZZY_DISTANCE_THRESHOLD) -> bool:
    return levenshtein_distance(a.lower(), b.lower()) <= threshold


def fuzzy_similarity(a: str, b: str) -> float:
    """1 - distance / longest length, case-insensitive. 0.0 when both are empty."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 0.0
    return 1.0 - levenshtein_distance(a.lower(), b.lower()) / longest


def time_decay(years_ago: float, half_life: float = DEFAULT_HALF_LIFE) -> float:
    """0.5 ** (years_ago / half_life): 1.0 for the present, halving every half-life."""
    return 0.5 ** (years_ago / half_life)


def current_year() -> int:
    return date.today().year


def years_ago(experience: WorkExperience, now_year: int | None = None) -> float:
    """Years since the role ended. Ongoing roles (no end year) and future end years are 0."""
    now_year = now_year if now_year is not None else current_year()
    end_year = experience.end_year if experience.end_year is not None else now_year
    return float(max(0, now_year - end_year))


def time_weighted_experience_match(
    experiences: list[WorkExperience],
    keyword: str,
    now_year: int | None = None,
    tracer: ScoringTracer = NULL_TRACER,
) -> float:
    """Sum time_decay over work entries whose company or position contains keyword."""
    keyword = keyword.lower()
    if not keyword:
        return 0.0

    total = 0.0
    for experience in experiences:
        company = experience.company_name.lower()
        position = experience.position.lower()
        if keyword in company or keyword in position:
            age = years_ago(experience, now_year)
            weight = time_decay(age)
            total += weight
            tracer.emit(
                "experience_keyword_match",
                keyword=keyword,
                company=experience.company_name,
                years_ago=age,
                weight=round(weight, 4),
            )
    return total
