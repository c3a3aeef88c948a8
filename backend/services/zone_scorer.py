"""Zoned lexical scoring and structured entity scoring of a profile against a query.

Two independent scorers whose sum is the "text score" fused with the
recommendation score:

    compute_zone_score    token containment in three importance zones,
                          weighted A=3.0 > B=1.5 > C=0.5
    compute_entity_score  higher-precision rules for companies, roles,
                          schools, skills and industries

The zone pass encodes a recency/importance bias: the same keyword is worth
more in a user's current role and skills than in their background.
"""

import logging
import re

from models.profile import Education, Profile, WorkExperience
from models.schemas.parsed_query import ParsedQuery, QueryEntities
from models.schemas.zoned_text import FieldZone, ZonedText
from services.soft_matching import (
    fuzzy_similarity,
    soft_experience_match,
    time_decay,
    years_ago,
)
from services.tracing import NULL_TRACER, ScoringTracer

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 2
TOP_SKILLS_IN_ZONE_A = 5
RECENT_EXPERIENCES_IN_ZONE_B = 3

# Entity rule contributions
CURRENT_COMPANY_SCORE = 5.0
PAST_COMPANY_SCORE = 2.0
CURRENT_ROLE_SCORE = 4.0
SCHOOL_SCORE = 3.0
MAX_SKILL_SCORE = 5.0
CURRENT_INDUSTRY_SCORE = 6.0
PAST_INDUSTRY_SCORE = 3.0

RECENT_EXPERIENCES_FOR_ENTITIES = 5
ROLE_FUZZY_THRESHOLD = 0.7
SCHOOL_FUZZY_THRESHOLD = 0.85
ENTITY_HALF_LIFE = 3.0

# Zone matching also credits these equivalents; each group scores at most once
SYNONYMS: dict[str, frozenset[str]] = {
    "engineer": frozenset({"developer", "programmer", "swe", "sde"}),
    "developer": frozenset({"engineer", "programmer", "swe", "sde"}),
    "pm": frozenset({"product manager", "program manager"}),
    "swe": frozenset({"software engineer", "engineer", "developer"}),
    "frontend": frozenset({"front-end", "fe", "client side"}),
    "backend": frozenset({"back-end", "be", "server side"}),
    "fullstack": frozenset({"full-stack", "fs", "full stack"}),
    "ml": frozenset({"machine learning", "ai", "artificial intelligence", "deep learning"}),
    "ai": frozenset({"artificial intelligence", "machine learning", "ml", "deep learning"}),
    "machine learning": frozenset({"ml", "ai", "artificial intelligence", "deep learning"}),
    "deep learning": frozenset({"ml", "ai", "machine learning", "artificial intelligence"}),
    "artificial intelligence": frozenset({"ai", "ml", "machine learning", "deep learning"}),
    "js": frozenset({"javascript"}),
    "javascript": frozenset({"js"}),
    "ts": frozenset({"typescript"}),
    "typescript": frozenset({"ts"}),
    "py": frozenset({"python"}),
    "python": frozenset({"py"}),
    "react": frozenset({"reactjs"}),
    "reactjs": frozenset({"react"}),
    "vue": frozenset({"vuejs"}),
    "vuejs": frozenset({"vue"}),
    "k8s": frozenset({"kubernetes"}),
    "kubernetes": frozenset({"k8s"}),
    "aws": frozenset({"amazon web services"}),
    "amazon web services": frozenset({"aws"}),
    "google": frozenset({"alphabet"}),
    "alphabet": frozenset({"google"}),
    "facebook": frozenset({"meta"}),
    "meta": frozenset({"facebook"}),
}

# Query words that carry no profile signal on their own
STOP_WORDS: frozenset[str] = frozenset({
    "in", "at", "on", "to", "for", "of", "with", "from", "by", "as",
    "across", "through", "into", "over", "under", "between", "among",
    "within", "without", "during", "before", "after", "above", "below",
    "a", "an", "the",
    "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
    "my", "your", "his", "its", "our", "their",
    "and", "or", "but", "so", "yet", "nor",
    "is", "am", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did",
    "will", "would", "can", "could", "may", "might", "should", "must",
    "get", "got", "getting", "make", "made", "making",
    "work", "works", "worked", "working",
    "go", "goes", "went", "going",
    "come", "comes", "came", "coming",
    "take", "takes", "took", "taking",
    "give", "gives", "gave", "giving",
    "use", "uses", "used", "using",
    "teach", "teaches", "taught", "teaching",
    "build", "builds", "built", "building",
    "create", "creates", "created", "creating",
    "develop", "develops", "developed", "developing",
    "design", "designs", "designed", "designing",
    "manage", "manages", "managed", "managing",
    "lead", "leads", "led", "leading",
    "that", "this", "these", "those", "there", "here",
    "who", "what", "where", "when", "why", "how",
    "want", "wanna", "looking", "find", "person", "someone", "anyone",
    "very", "much", "more", "most", "many", "some", "any", "all",
    "experience", "exp", "experienced", "graduate", "graduated", "graduating",
    "learn", "learning", "learned",
    "train", "training", "trained",
})

# Common school abbreviations -> words/phrases that identify the full name
SCHOOL_ALIASES: dict[str, list[str]] = {
    "umich": ["michigan"],
    "mit": ["massachusetts institute"],
    "stanford": ["stanford"],
    "berkeley": ["berkeley"],
    "fudan": ["fudan"],
    "cmu": ["carnegie mellon"],
    "nyu": ["new york university"],
    "ucla": ["los angeles"],
}


# ---------------------------------------------------------------------------
# Zoned text
# ---------------------------------------------------------------------------

def _join(parts: list[str]) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip()).lower()


def _education_parts(education: Education) -> list[str]:
    return [education.school_name, education.degree, education.field_of_study]


def _experience_parts(experience: WorkExperience) -> list[str]:
    return [
        experience.company_name,
        experience.position,
        experience.responsibilities,
        *experience.highlighted_skills,
    ]


def build_zoned_text(profile: Profile) -> ZonedText:
    """Split a profile's text into the three importance zones."""
    zone_a = [
        profile.job_title,
        profile.current_company,
        profile.industry,
        *profile.skills[:TOP_SKILLS_IN_ZONE_A],
    ]

    zone_b = [profile.bio, profile.location, profile.education]
    for education in profile.educations:
        zone_b.extend(_education_parts(education))
    for experience in profile.work_experiences[:RECENT_EXPERIENCES_IN_ZONE_B]:
        zone_b.extend(_experience_parts(experience))

    zone_c = [*profile.hobbies, *profile.values_tags, profile.self_introduction]

    return ZonedText(zone_a=_join(zone_a), zone_b=_join(zone_b), zone_c=_join(zone_c))


def synonyms_of(term: str) -> frozenset[str]:
    """Known equivalents of term, looked up in both directions."""
    term = term.lower()
    reverse = {key for key, values in SYNONYMS.items() if term in values}
    return SYNONYMS.get(term, frozenset()) | reverse


def synonym_group_key(term: str) -> str:
    """Stable key shared by every member of term's synonym group."""
    term = term.lower()
    if term in SYNONYMS:
        return min(SYNONYMS[term] | {term})
    for key, values in SYNONYMS.items():
        if term in values:
            return min(values | {key})
    return term


def contains_with_synonyms(text: str, token: str) -> bool:
    """Substring containment of token, or a whole-word match of any synonym."""
    if token in text:
        return True
    return any(
        re.search(rf"\b{re.escape(synonym)}\b", text)
        for synonym in synonyms_of(token)
    )


def match_zone(zoned: ZonedText, token: str) -> FieldZone | None:
    """Highest-priority zone containing token or one of its synonyms, or None."""
    for zone, text in zoned.ordered():
        if contains_with_synonyms(text, token):
            return zone
    return None


def compute_zone_score(
    profile: Profile,
    tokens: list[str],
    tracer: ScoringTracer = NULL_TRACER,
) -> float:
    """Sum of zone weights for the query tokens found in the profile.

    A token is credited in the first zone (A, B, C) that contains it or a
    synonym of it, and each synonym group scores at most once. Stop words,
    tokens shorter than two characters and the single words of a multi-word
    phrase token are ignored.
    """
    zoned = build_zoned_text(profile)
    normalized = [raw.strip().lower() for raw in tokens]
    phrase_words = {word for token in normalized if " " in token for word in token.split()}

    score = 0.0
    matched_groups: set[str] = set()
    for token in normalized:
        if len(token) < MIN_TOKEN_LENGTH or token in STOP_WORDS or token in phrase_words:
            continue
        group = synonym_group_key(token)
        if group in matched_groups:
            continue
        zone = match_zone(zoned, token)
        if zone is None:
            continue
        matched_groups.add(group)
        score += zone.weight
        tracer.emit("zone_match", user_id=profile.user_id, token=token, zone=zone.value, weight=zone.weight)
    return score


# ---------------------------------------------------------------------------
# Entity scoring
# ---------------------------------------------------------------------------

def _overlaps(a: str, b: str) -> bool:
    """Substring match in either direction; empty strings never match."""
    if not a or not b:
        return False
    return a in b or b in a


def _first_match(candidates: list[str], value: str) -> str | None:
    for candidate in candidates:
        if _overlaps(value, candidate.lower()):
            return candidate
    return None


def _school_matches(query_school: str, school_name: str) -> bool:
    query_school = query_school.lower()
    school_name = school_name.lower()
    if _overlaps(school_name, query_school):
        return True

    for alias in SCHOOL_ALIASES.get(query_school, []):
        if alias in school_name:
            return True
        if " " not in alias:
            # Tolerate typos in the identifying word ("michigna")
            if any(fuzzy_similarity(word, alias) > SCHOOL_FUZZY_THRESHOLD for word in school_name.split()):
                return True

    return fuzzy_similarity(query_school, school_name) > SCHOOL_FUZZY_THRESHOLD


def _role_matches(current_role: str, query_role: str) -> bool:
    return _overlaps(current_role, query_role) or fuzzy_similarity(current_role, query_role) > ROLE_FUZZY_THRESHOLD


def _current_company_score(profile: Profile, entities: QueryEntities, tracer: ScoringTracer) -> float:
    current = profile.current_company.lower()
    company = _first_match(entities.companies, current)
    if company is None:
        return 0.0
    tracer.emit("current_company_match", user_id=profile.user_id, company=company, score=CURRENT_COMPANY_SCORE)
    return CURRENT_COMPANY_SCORE


def _past_company_score(
    profile: Profile,
    entities: QueryEntities,
    now_year: int | None,
    skip_current: bool,
    tracer: ScoringTracer,
) -> float:
    current = profile.current_company.lower()
    score = 0.0
    for experience in profile.work_experiences[:RECENT_EXPERIENCES_FOR_ENTITIES]:
        past = experience.company_name.lower()
        if skip_current and experience.end_year is None and _overlaps(past, current):
            # Same role the current-company rule already credited
            continue
        company = _first_match(entities.companies, past)
        if company is None:
            continue
        weighted = PAST_COMPANY_SCORE * time_decay(years_ago(experience, now_year), ENTITY_HALF_LIFE)
        score += weighted
        tracer.emit("past_company_match", user_id=profile.user_id, company=company, score=round(weighted, 4))
    return score


def _current_role_score(profile: Profile, entities: QueryEntities, tracer: ScoringTracer) -> float:
    current_role = profile.job_title.lower()
    if not current_role:
        return 0.0
    for role in entities.roles:
        if _role_matches(current_role, role.lower()):
            tracer.emit("current_role_match", user_id=profile.user_id, role=role, score=CURRENT_ROLE_SCORE)
            return CURRENT_ROLE_SCORE
    return 0.0


def _school_score(profile: Profile, entities: QueryEntities, tracer: ScoringTracer) -> float:
    score = 0.0
    for education in profile.educations:
        if not education.school_name:
            continue
        for school in entities.schools:
            if _school_matches(school, education.school_name):
                score += SCHOOL_SCORE
                tracer.emit("school_match", user_id=profile.user_id, school=school, matched=education.school_name)
                break
    return score


def _skill_score(profile: Profile, entities: QueryEntities, tracer: ScoringTracer) -> float:
    query_skills = [s.lower() for s in entities.skills if s]
    if not query_skills:
        return 0.0
    matched = [
        skill for skill in profile.skills
        if any(_overlaps(skill.lower(), q) for q in query_skills)
    ]
    if not matched:
        return 0.0
    score = min(float(len(matched)), MAX_SKILL_SCORE)
    tracer.emit("skill_match", user_id=profile.user_id, skills=matched[:3], score=score)
    return score


def _industry_score(
    profile: Profile,
    entities: QueryEntities,
    now_year: int | None,
    tracer: ScoringTracer,
) -> float:
    industries = [i.lower() for i in entities.industries if i]
    if not industries:
        return 0.0

    score = 0.0
    current = profile.industry.lower()
    for industry in industries:
        if _overlaps(current, industry):
            score += CURRENT_INDUSTRY_SCORE
            tracer.emit("current_industry_match", user_id=profile.user_id, industry=industry)
            break

    for experience in profile.work_experiences[:RECENT_EXPERIENCES_FOR_ENTITIES]:
        text = _join([experience.company_name, experience.position, experience.responsibilities])
        for industry in industries:
            if industry in text:
                weighted = PAST_INDUSTRY_SCORE * time_decay(years_ago(experience, now_year), ENTITY_HALF_LIFE)
                score += weighted
                tracer.emit("past_industry_match", user_id=profile.user_id, industry=industry, score=round(weighted, 4))
                break
    return score


def compute_entity_score(
    profile: Profile,
    entities: QueryEntities,
    now_year: int | None = None,
    tracer: ScoringTracer = NULL_TRACER,
) -> float:
    """Structured entity score, independent of the zone pass.

    current company +5.0 (first match only), past companies +2.0 x time decay
    over the five most recent roles, current role +4.0 (substring or fuzzy
    similarity > 0.7), +3.0 per matching school, min(matched skills, 5.0),
    current industry +6.0 and past industry +3.0 x time decay.
    """
    current_company = _current_company_score(profile, entities, tracer)
    return (
        current_company
        + _past_company_score(profile, entities, now_year, current_company > 0, tracer)
        + _current_role_score(profile, entities, tracer)
        + _school_score(profile, entities, tracer)
        + _skill_score(profile, entities, tracer)
        + _industry_score(profile, entities, now_year, tracer)
    )


def text_score_components(
    profile: Profile,
    query: ParsedQuery,
    now_year: int | None = None,
    tracer: ScoringTracer = NULL_TRACER,
) -> tuple[float, float, float]:
    """(zone score, entity score, soft experience score) for one profile."""
    zone = compute_zone_score(profile, query.tokens, tracer)
    entity = compute_entity_score(profile, query.entities, now_year, tracer)
    experience = soft_experience_match(profile, query.entities.numbers, tracer)
    return zone, entity, experience


def compute_text_score(
    profile: Profile,
    query: ParsedQuery,
    now_year: int | None = None,
    tracer: ScoringTracer = NULL_TRACER,
) -> float:
    return sum(text_score_components(profile, query, now_year, tracer))
