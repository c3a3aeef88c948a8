import pytest

from models.profile import Education, Profile, WorkExperience
from models.schemas.parsed_query import ParsedQuery, QueryEntities
from models.schemas.zoned_text import FieldZone
from services.tracing import RecordingTracer
from services.zone_scorer import (
    build_zoned_text,
    compute_entity_score,
    compute_text_score,
    compute_zone_score,
    contains_with_synonyms,
    match_zone,
    synonym_group_key,
    synonyms_of,
    text_score_components,
)

NOW_YEAR = 2025


class TestZonedText:
    def test_zones(self, stripe_engineer):
        zoned = build_zoned_text(stripe_engineer)
        assert "stripe" in zoned.zone_a
        assert "fintech" in zoned.zone_a
        assert "university of michigan" in zoned.zone_b
        assert "square" in zoned.zone_b
        assert "hiking" in zoned.zone_c
        assert "hiking" not in zoned.zone_b

    def test_only_top_five_skills_in_zone_a(self):
        profile = Profile(user_id="u1", skills=["a1", "b2", "c3", "d4", "e5", "kotlin"])
        zoned = build_zoned_text(profile)
        assert "e5" in zoned.zone_a
        assert "kotlin" not in zoned.zone_a

    def test_only_three_recent_experiences_in_zone_b(self):
        profile = Profile(
            user_id="u1",
            work_experiences=[WorkExperience(company_name=name) for name in ("one", "two", "three", "four")],
        )
        zoned = build_zoned_text(profile)
        assert "three" in zoned.zone_b
        assert "four" not in zoned.zone_b

    def test_match_zone_priority(self, stripe_engineer):
        zoned = build_zoned_text(stripe_engineer)
        assert match_zone(zoned, "engineer") == FieldZone.ZONE_A
        assert match_zone(zoned, "michigan") == FieldZone.ZONE_B
        assert match_zone(zoned, "photography") == FieldZone.ZONE_C
        assert match_zone(zoned, "golang") is None


class TestZoneScore:
    def test_zone_weights(self, stripe_engineer):
        assert compute_zone_score(stripe_engineer, ["stripe"]) == 3.0
        assert compute_zone_score(stripe_engineer, ["michigan"]) == 1.5
        assert compute_zone_score(stripe_engineer, ["hiking"]) == 0.5
        assert compute_zone_score(stripe_engineer, ["golang"]) == 0.0

    def test_zone_a_outranks_zone_c(self, stripe_engineer):
        assert compute_zone_score(stripe_engineer, ["stripe"]) >= compute_zone_score(stripe_engineer, ["hiking"])

    def test_multi_zone_token_counted_once(self, stripe_engineer):
        # "engineer" is in the job title (A) and the work history (B)
        assert compute_zone_score(stripe_engineer, ["engineer"]) == 3.0

    def test_repeated_token_scores_once(self, stripe_engineer):
        assert compute_zone_score(stripe_engineer, ["stripe", "stripe"]) == 3.0

    def test_abbreviation_matches_full_skill(self, data_scientist):
        assert compute_zone_score(data_scientist, ["ml"]) == 3.0

    def test_synonym_group_scores_once(self, data_scientist):
        assert compute_zone_score(data_scientist, ["ml", "machine learning"]) == 3.0
        assert compute_zone_score(data_scientist, ["ai", "deep learning", "ml"]) == 3.0

    def test_synonym_whole_word_only(self):
        profile = Profile(user_id="u1", job_title="Maintenance Lead")
        assert compute_zone_score(profile, ["ml"]) == 0.0

    def test_company_synonym(self):
        profile = Profile(user_id="u1", current_company="Meta")
        assert compute_zone_score(profile, ["facebook"]) == 3.0

    def test_phrase_words_skipped(self, designer):
        assert compute_zone_score(designer, ["product designer", "product", "designer"]) == 3.0

    def test_stop_words_ignored(self, stripe_engineer):
        assert compute_zone_score(stripe_engineer, ["at", "the", "stripe"]) == 3.0

    def test_short_tokens_ignored(self, stripe_engineer):
        assert compute_zone_score(stripe_engineer, ["a", "s", ""]) == 0.0

    def test_case_insensitive(self, stripe_engineer):
        assert compute_zone_score(stripe_engineer, ["STRIPE"]) == 3.0

    def test_trace_events(self, stripe_engineer):
        tracer = RecordingTracer()
        compute_zone_score(stripe_engineer, ["stripe", "hiking"], tracer)
        zones = [e["zone"] for e in tracer.named("zone_match")]
        assert zones == ["A", "C"]


class TestEntityScore:
    def test_current_company_not_double_counted(self, stripe_engineer):
        entities = QueryEntities(companies=["stripe"])
        assert compute_entity_score(stripe_engineer, entities, now_year=NOW_YEAR) == 5.0

    def test_current_company_rule_fires_once(self, stripe_engineer):
        tracer = RecordingTracer()
        compute_entity_score(stripe_engineer, QueryEntities(companies=["stripe"]), NOW_YEAR, tracer)
        assert len(tracer.named("current_company_match")) == 1
        assert tracer.named("past_company_match") == []

    def test_past_company_time_decayed(self, stripe_engineer):
        # Square ended in 2021: four years ago
        score = compute_entity_score(stripe_engineer, QueryEntities(companies=["square"]), now_year=NOW_YEAR)
        assert score == pytest.approx(2.0 * 0.5 ** (4 / 3))

    def test_past_company_only_recent_five(self):
        profile = Profile(
            user_id="u1",
            work_experiences=[
                WorkExperience(company_name=f"co{i}", end_year=NOW_YEAR) for i in range(5)
            ] + [WorkExperience(company_name="google", end_year=NOW_YEAR)],
        )
        assert compute_entity_score(profile, QueryEntities(companies=["google"]), now_year=NOW_YEAR) == 0.0

    def test_current_role(self, stripe_engineer):
        assert compute_entity_score(stripe_engineer, QueryEntities(roles=["engineer"])) == 4.0
        assert compute_entity_score(stripe_engineer, QueryEntities(roles=["sofware engineer"])) == 4.0
        assert compute_entity_score(stripe_engineer, QueryEntities(roles=["designer"])) == 0.0

    def test_current_role_first_match_only(self, stripe_engineer):
        entities = QueryEntities(roles=["engineer", "software engineer"])
        assert compute_entity_score(stripe_engineer, entities) == 4.0

    def test_school_alias(self, stripe_engineer):
        assert compute_entity_score(stripe_engineer, QueryEntities(schools=["umich"])) == 3.0
        assert compute_entity_score(stripe_engineer, QueryEntities(schools=["michigan"])) == 3.0
        assert compute_entity_score(stripe_engineer, QueryEntities(schools=["stanford"])) == 0.0

    def test_school_alias_with_typo(self):
        profile = Profile(user_id="u1", educations=[Education(school_name="Univ. of Michigen")])
        assert compute_entity_score(profile, QueryEntities(schools=["umich"])) == 3.0

    def test_school_per_education_entry(self):
        profile = Profile(
            user_id="u1",
            educations=[
                Education(school_name="Stanford University"),
                Education(school_name="Stanford GSB"),
            ],
        )
        assert compute_entity_score(profile, QueryEntities(schools=["stanford"])) == 6.0

    def test_skills_capped(self, stripe_engineer):
        assert compute_entity_score(stripe_engineer, QueryEntities(skills=["python", "sql", "rust"])) == 2.0
        profile = Profile(user_id="u1", skills=[f"python {i}" for i in range(8)])
        assert compute_entity_score(profile, QueryEntities(skills=["python"])) == 5.0

    def test_industries(self, stripe_engineer):
        assert compute_entity_score(stripe_engineer, QueryEntities(industries=["fintech"]), now_year=NOW_YEAR) == 6.0

    def test_past_industry_time_decayed(self):
        profile = Profile(
            user_id="u1",
            work_experiences=[
                WorkExperience(company_name="Acme", responsibilities="Built fintech payment rails", end_year=NOW_YEAR - 3),
            ],
        )
        score = compute_entity_score(profile, QueryEntities(industries=["fintech"]), now_year=NOW_YEAR)
        assert score == pytest.approx(1.5)

    def test_empty_entities(self, stripe_engineer):
        assert compute_entity_score(stripe_engineer, QueryEntities()) == 0.0

    def test_empty_profile_fields_never_match(self):
        entities = QueryEntities(companies=["stripe"], roles=["engineer"], industries=["fintech"])
        assert compute_entity_score(Profile(user_id="u1"), entities) == 0.0


def test_text_score_components(stripe_engineer):
    query = ParsedQuery(
        raw_text="stripe 5 years",
        tokens=["stripe"],
        entities=QueryEntities(companies=["stripe"], numbers=[5]),
    )
    zone, entity, experience = text_score_components(stripe_engineer, query, now_year=NOW_YEAR)
    assert zone == 3.0
    assert entity == 5.0
    assert experience == pytest.approx(2.0)
    assert compute_text_score(stripe_engineer, query, now_year=NOW_YEAR) == pytest.approx(10.0)


def test_synonym_helpers():
    assert "machine learning" in synonyms_of("ml")
    assert "ml" in synonyms_of("deep learning")
    assert synonyms_of("stripe") == frozenset()
    assert synonym_group_key("ml") == synonym_group_key("machine learning")
    assert synonym_group_key("k8s") == synonym_group_key("kubernetes")
    assert synonym_group_key("stripe") == "stripe"
    assert contains_with_synonyms("senior kubernetes admin", "k8s")
    assert not contains_with_synonyms("senior admin", "k8s")
