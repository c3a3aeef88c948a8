import pytest

from models.schemas.parsed_query import ParsedQuery, QueryEntities, QueryModifiers
from models.schemas.weights import QueryDifficulty, WeightPair
from services.dynamic_weighting import adjust_weights, fuse, query_complexity, query_difficulty
from services.tracing import RecordingTracer


def _query(tokens, **entities):
    return ParsedQuery(raw_text=" ".join(tokens), tokens=tokens, entities=QueryEntities(**entities))


class TestAdjustWeights:
    def test_single_domain_term(self):
        tracer = RecordingTracer()
        weights = adjust_weights(_query(["founder"]), tracer)
        # Short-query base (0.5, 0.5), then the domain-term shift
        assert tracer.named("weight_rule")[0]["rule"] == "short_query"
        assert weights.recommendation == pytest.approx(0.45)
        assert weights.text == pytest.approx(0.55)

    def test_short_query_balanced(self):
        weights = adjust_weights(_query(["designer"]))
        assert weights.recommendation == pytest.approx(0.5)
        assert weights.text == pytest.approx(0.5)

    def test_long_query_with_one_company(self):
        weights = adjust_weights(_query(["ai", "infra", "lead", "at", "stripe", "ny"], companies=["stripe"]))
        assert weights.recommendation == pytest.approx(0.2)
        assert weights.text == pytest.approx(0.8)

    def test_prior_for_medium_query(self):
        weights = adjust_weights(_query(["product", "designer", "in", "nyc"]))
        assert weights.recommendation == pytest.approx(0.3)
        assert weights.text == pytest.approx(0.7)

    def test_entity_rich_shift(self):
        weights = adjust_weights(_query(
            ["pm", "at", "google", "stanford"], companies=["google"], roles=["pm"], schools=["stanford"],
        ))
        assert weights.recommendation == pytest.approx(0.2)

    def test_number_shift(self):
        weights = adjust_weights(_query(["engineer", "with", "5", "years"], numbers=[5]))
        assert weights.recommendation == pytest.approx(0.2)

    def test_concept_tag_shift(self):
        query = ParsedQuery(tokens=["people", "in", "climate", "tech"], concept_tags=["sustainability"])
        assert adjust_weights(query).recommendation == pytest.approx(0.25)

    def test_clamped_for_extreme_query(self):
        query = ParsedQuery(
            tokens=["founder", "from", "stanford", "at", "google", "with", "10", "years"],
            entities=QueryEntities(companies=["google"], roles=["founder"], schools=["stanford"], numbers=[10]),
            concept_tags=["entrepreneur"],
        )
        weights = adjust_weights(query)
        assert weights.recommendation == pytest.approx(0.1)
        assert weights.text == pytest.approx(0.9)

    @pytest.mark.parametrize("tokens", [
        [],
        ["founder"],
        ["mentor", "startup", "alumni"],
        ["a", "b", "c", "d", "e", "f", "g", "h", "i", "j"],
    ])
    def test_weights_sum_to_one_and_bounded(self, tokens):
        query = ParsedQuery(
            tokens=tokens,
            entities=QueryEntities(companies=["x", "y", "z"], numbers=[3]),
            concept_tags=["tag"],
        )
        weights = adjust_weights(query)
        assert weights.recommendation + weights.text == pytest.approx(1.0)
        assert 0.1 <= weights.recommendation <= 0.9


def test_fuse():
    assert fuse(WeightPair(recommendation=0.3, text=0.7), 1.0, 0.5) == pytest.approx(0.65)
    assert fuse(WeightPair(recommendation=0.5, text=0.5), 0.0, 0.0) == 0.0


class TestQueryComplexity:
    def test_components(self):
        query = ParsedQuery(
            tokens=["ai", "infra", "lead", "at", "stripe", "ny"],
            entities=QueryEntities(companies=["stripe"], skills=["ai"], numbers=[5]),
            modifiers=QueryModifiers(negations=["not"]),
        )
        assert query_complexity(query) == pytest.approx(0.6 + 0.3 + 0.2 + 0.5 + 0.2)

    def test_capped(self):
        assert query_complexity(ParsedQuery(tokens=["word"] * 200)) == 10.0


class TestQueryDifficulty:
    def test_simple(self):
        assert query_difficulty(_query(["founder"])) == QueryDifficulty.SIMPLE
        assert query_difficulty(_query(["people", "who", "like", "hiking"])) == QueryDifficulty.SIMPLE

    def test_moderate(self):
        assert query_difficulty(_query(["engineer", "at", "stripe"], companies=["stripe"])) == QueryDifficulty.MODERATE

    def test_complex(self):
        query = _query(["ai", "infra", "lead", "at", "stripe", "ny"], companies=["stripe"])
        assert query_difficulty(query) == QueryDifficulty.COMPLEX
        assert query_difficulty(query).strategy == "Rely more on text matching"
