"""Structured query produced by the external natural-language query parser."""

from pydantic import BaseModel, ConfigDict


class QueryEntities(BaseModel):
    """Entities recognised in the query. All strings arrive lowercased."""
    model_config = ConfigDict(frozen=True)

    companies: list[str] = []
    roles: list[str] = []
    schools: list[str] = []
    skills: list[str] = []
    industries: list[str] = []
    numbers: list[float] = []  # numeric mentions, e.g. years of experience

    @property
    def has_number(self) -> bool:
        return bool(self.numbers)


class QueryModifiers(BaseModel):
    model_config = ConfigDict(frozen=True)

    negations: list[str] = []  # "not", "except"
    emphasis: list[str] = []  # "must", "only"
    fuzzy: list[str] = []  # "around", "about"


class ParsedQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    tokens: list[str] = []
    entities: QueryEntities = QueryEntities()
    modifiers: QueryModifiers = QueryModifiers()
    concept_tags: list[str] = []

    @property
    def entity_count(self) -> int:
        """Companies + roles + schools + skills (industries are not counted)."""
        e = self.entities
        return len(e.companies) + len(e.roles) + len(e.schools) + len(e.skills)

    def summary(self) -> str:
        parts: list[str] = []
        e = self.entities
        if e.companies:
            parts.append(f"Company: {', '.join(e.companies)}")
        if e.roles:
            parts.append(f"Role: {', '.join(e.roles)}")
        if e.schools:
            parts.append(f"School: {', '.join(e.schools)}")
        if e.numbers:
            parts.append(f"Years: {', '.join(str(int(n)) for n in e.numbers)}")
        return " | ".join(parts) if parts else "General query"
