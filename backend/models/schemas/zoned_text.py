"""Zone-partitioned searchable text of a profile."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FieldZone(str, Enum):
    ZONE_A = "A"  # current title, company, industry, top skills
    ZONE_B = "B"  # bio, location, education, recent work history
    ZONE_C = "C"  # hobbies, values, self-introduction

    @property
    def weight(self) -> float:
        return _ZONE_WEIGHTS[self]


_ZONE_WEIGHTS = {
    FieldZone.ZONE_A: 3.0,
    FieldZone.ZONE_B: 1.5,
    FieldZone.ZONE_C: 0.5,
}


class ZonedText(BaseModel):
    """Three lowercase joined strings, rebuilt per scoring call."""
    model_config = ConfigDict(frozen=True)

    zone_a: str = ""
    zone_b: str = ""
    zone_c: str = ""

    def ordered(self) -> list[tuple[FieldZone, str]]:
        """Zones in priority order (A first)."""
        return [
            (FieldZone.ZONE_A, self.zone_a),
            (FieldZone.ZONE_B, self.zone_b),
            (FieldZone.ZONE_C, self.zone_c),
        ]
