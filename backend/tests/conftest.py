"""Shared test configuration, pytest markers and sample profiles."""

import pytest

from models.profile import (
    CareerFunctionInterest,
    Education,
    Profile,
    SkillInterest,
    VerificationTier,
    WorkExperience,
)
from services.pipeline.model_registry import clear as clear_registry
from services.pipeline.two_tower_encoder import HashingTwoTowerEncoder


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: exercises the full API stack through the test client"
    )


@pytest.fixture(autouse=True)
def _reset_registry():
    """Clear encoder registry around each test."""
    clear_registry()
    yield
    clear_registry()


@pytest.fixture
def encoder():
    enc = HashingTwoTowerEncoder(dimension=64)
    enc.ensure_loaded()
    return enc


@pytest.fixture
def stripe_engineer():
    return Profile(
        user_id="u-stripe",
        name="Ada",
        bio="Payments engineer who likes mentoring",
        location="San Francisco",
        job_title="Software Engineer",
        current_company="Stripe",
        industry="FinTech",
        experience_level="Mid",
        career_stage="midLevel",
        years_of_experience=5,
        skills=["Python", "Backend Development", "SQL"],
        educations=[Education(school_name="University of Michigan", degree="Bachelor's", field_of_study="CS")],
        work_experiences=[
            WorkExperience(company_name="Stripe", position="Software Engineer", start_year=2021),
            WorkExperience(company_name="Square", position="Backend Engineer", start_year=2018, end_year=2021),
        ],
        main_intention="connectShare",
        sub_intentions=["peerSupport"],
        skills_of_interest=[
            SkillInterest(skill_name="Machine Learning", learn_in=True),
            SkillInterest(skill_name="Python", guide_in=True),
        ],
        hobbies=["Hiking", "Photography"],
        values_tags=["Integrity"],
        verification=VerificationTier.VERIFIED_PROFESSIONAL,
        profile_completion=0.9,
    )


@pytest.fixture
def designer():
    return Profile(
        user_id="u-design",
        name="Bo",
        location="New York",
        job_title="Product Designer",
        current_company="Figma",
        industry="Software",
        experience_level="Senior",
        career_stage="manager",
        years_of_experience=9,
        skills=["UX Design", "UI Design"],
        work_experiences=[WorkExperience(company_name="Figma", position="Product Designer", start_year=2019)],
        main_intention="learnGrow",
        career_functions=[CareerFunctionInterest(functions=["Design", "Product"], learn_in=True)],
        hobbies=["Art", "Coffee Culture"],
        values_tags=["Curiosity"],
        profile_completion=0.7,
    )


@pytest.fixture
def data_scientist():
    return Profile(
        user_id="u-data",
        name="Cy",
        location="San Francisco",
        job_title="Data Scientist",
        current_company="Airbnb",
        industry="Technology",
        experience_level="Mid",
        career_stage="midLevel",
        years_of_experience=4,
        skills=["Python", "Machine Learning", "SQL"],
        work_experiences=[WorkExperience(company_name="Airbnb", position="Data Scientist", start_year=2020)],
        main_intention="connectShare",
        hobbies=["Hiking", "Reading"],
        values_tags=["Integrity"],
        profile_completion=0.8,
    )


@pytest.fixture
def profiles(stripe_engineer, designer, data_scientist):
    return [stripe_engineer, designer, data_scientist]
