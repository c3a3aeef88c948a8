"""Query-adaptive split between the recommendation score and the text score.

Short, vague queries lean on the two-tower recommendation signal; long,
entity-rich queries lean on text matching. Rules are applied in order on top
of a (0.3, 0.7) prior:

    1. token count    <= 2 -> (0.5, 0.5);  >= 6 -> (0.2, 0.8)
    2. entities       companies + roles + schools + skills >= 3 -> text +0.10
    3. numbers        any numeric mention -> text +0.10
    4. domain terms   alumni/founder/mentor/startup vocabulary -> text +0.05
    5. concept tags   non-empty -> text +0.05

Every shift moves weight symmetrically. The pair is then normalised and the
recommendation weight clamped to [0.1, 0.9]; the clamp runs last and may
override the cumulative rule total for extreme queries.
"""

import logging

from models.schemas.parsed_query import ParsedQuery
from models.schemas.weights import QueryDifficulty, WeightPair
from services.tracing import NULL_TRACER, ScoringTracer

logger = logging.getLogger(__name__)

PRIOR = (0.3, 0.7)
SHORT_QUERY_WEIGHTS = (0.5, 0.5)
LONG_QUERY_WEIGHTS = (0.2, 0.8)
SHORT_QUERY_MAX_TOKENS = 2
LONG_QUERY_MIN_TOKENS = 6

ENTITY_RICH_THRESHOLD = 3
ENTITY_SHIFT = 0.1
NUMBER_SHIFT = 0.1
DOMAIN_TERM_SHIFT = 0.05
CONCEPT_TAG_SHIFT = 0.05

MIN_WEIGHT = 0.1
MAX_WEIGHT = 0.9

DOMAIN_TERMS: frozenset[str] = frozenset({
    "alumni", "alum", "founder", "mentor", "mentoring", "startup",
})

MAX_COMPLEXITY = 10.0


def adjust_weights(query: ParsedQuery, tracer: ScoringTracer = NULL_TRACER) -> WeightPair:
    """Compute the (recommendation, text) weight pair for a parsed query."""
    rec, text = PRIOR

    token_count = len(query.tokens)
    if token_count <= SHORT_QUERY_MAX_TOKENS:
        rec, text = SHORT_QUERY_WEIGHTS
        tracer.emit("weight_rule", rule="short_query", tokens=token_count)
    elif token_count >= LONG_QUERY_MIN_TOKENS:
        rec, text = LONG_QUERY_WEIGHTS
        tracer.emit("weight_rule", rule="long_query", tokens=token_count)

    shifts: list[tuple[str, float]] = []
    if query.entity_count >= ENTITY_RICH_THRESHOLD:
        shifts.append(("entities", ENTITY_SHIFT))
    if query.entities.has_number:
        shifts.append(("numbers", NUMBER_SHIFT))
    if any(token.lower() in DOMAIN_TERMS for token in query.tokens):
        shifts.append(("domain_terms", DOMAIN_TERM_SHIFT))
    if query.concept_tags:
        shifts.append(("concept_tags", CONCEPT_TAG_SHIFT))

    for rule, shift in shifts:
        text += shift
        rec -= shift
        tracer.emit("weight_rule", rule=rule, shift=shift)

    total = rec + text
    rec /= total

    rec = max(MIN_WEIGHT, min(MAX_WEIGHT, rec))
    weights = WeightPair(recommendation=rec, text=1.0 - rec)
    tracer.emit("weights", recommendation=round(weights.recommendation, 4), text=round(weights.text, 4))
    return weights


def fuse(weights: WeightPair, recommendation_score: float, text_score: float) -> float:
    """Weighted sum. Both scores must already be on comparable scales."""
    return weights.recommendation * recommendation_score + weights.text * text_score


def query_complexity(query: ParsedQuery) -> float:
    """Descriptive complexity in [0, 10]; not used by adjust_weights."""
    e = query.entities
    complexity = len(query.tokens) * 0.1
    complexity += len(e.companies) * 0.3
    complexity += len(e.roles) * 0.3
    complexity += len(e.schools) * 0.3
    complexity += len(e.skills) * 0.2
    if e.has_number:
        complexity += 0.5
    complexity += len(query.modifiers.negations) * 0.2
    complexity += len(query.modifiers.emphasis) * 0.2
    return min(complexity, MAX_COMPLEXITY)


def query_difficulty(query: ParsedQuery) -> QueryDifficulty:
    token_count = len(query.tokens)
    e = query.entities
    entity_count = len(e.companies) + len(e.roles) + len(e.schools)

    if token_count <= 2 or entity_count == 0:
        return QueryDifficulty.SIMPLE
    if token_count <= 5 and entity_count <= 2:
        return QueryDifficulty.MODERATE
    return QueryDifficulty.COMPLEX
