"""Project a full profile into the compact two-tower feature vector."""

from models.profile import Profile
from models.schemas.feature_vector import FeatureVector


def _learn_teach_skills(profile: Profile) -> tuple[list[str], list[str]]:
    learn = [s.skill_name for s in profile.skills_of_interest if s.learn_in and s.skill_name]
    teach = [s.skill_name for s in profile.skills_of_interest if s.guide_in and s.skill_name]
    return learn, teach


def _learn_teach_functions(profile: Profile) -> tuple[list[str], list[str]]:
    # Only the first declared function of each entry counts.
    learn: list[str] = []
    teach: list[str] = []
    for entry in profile.career_functions:
        if not entry.functions:
            continue
        first = entry.functions[0]
        if entry.learn_in:
            learn.append(first)
        if entry.guide_in:
            teach.append(first)
    return learn, teach


def extract(profile: Profile) -> FeatureVector:
    """Build a FeatureVector from a profile. Never fails on a well-formed profile."""
    skills_to_learn, skills_to_teach = _learn_teach_skills(profile)
    functions_to_learn, functions_to_teach = _learn_teach_functions(profile)

    return FeatureVector(
        location=profile.location or None,
        time_zone=profile.time_zone or None,
        industry=profile.industry or None,
        experience_level=profile.experience_level or None,
        career_stage=profile.career_stage or None,
        main_intention=profile.main_intention or None,
        skills=list(profile.skills),
        hobbies=list(profile.hobbies),
        values=list(profile.values_tags),
        languages=list(profile.languages),
        sub_intentions=list(profile.sub_intentions),
        skills_to_learn=skills_to_learn,
        skills_to_teach=skills_to_teach,
        functions_to_learn=functions_to_learn,
        functions_to_teach=functions_to_teach,
        years_of_experience=profile.years_of_experience or 0.0,
        profile_completion=max(0.0, min(1.0, profile.profile_completion)),
        is_verified=1 if profile.is_verified else 0,
    )


def extract_many(profiles: list[Profile]) -> list[tuple[str, FeatureVector]]:
    return [(p.user_id, extract(p)) for p in profiles]
