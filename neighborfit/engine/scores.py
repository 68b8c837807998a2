"""Derived area quality scores.

Safety (0-100):
  mean of the inverted violent-crime rate (floored at 0) and the
  chargesheeting rate, rounded half up.

Lifestyle (0-100, capped):
  Public transport:  20
  Pet friendly:      15
  Each park:          5
  Each school:        5
  Walkability:       20 High / 10 Medium / 0 Low
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from neighborfit.models.attributes import DerivedScores, Walkability

TRANSIT_POINTS = 20
PET_FRIENDLY_POINTS = 15
PARK_POINTS = 5
SCHOOL_POINTS = 5
WALKABILITY_BONUS: dict[Walkability, int] = {
    Walkability.HIGH: 20,
    Walkability.MEDIUM: 10,
    Walkability.LOW: 0,
}


def round_half_up(value: Decimal | float | int) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_safety_score(violent_crime_rate: Decimal, chargesheeting_rate: Decimal) -> int:
    crime_score = max(Decimal("0"), Decimal("100") - Decimal(str(violent_crime_rate)))
    return round_half_up((crime_score + Decimal(str(chargesheeting_rate))) / 2)


def compute_lifestyle_score(
    public_transport_access: bool,
    pet_friendly: bool,
    park_count: int,
    school_count: int,
    walkability: Walkability | str,
) -> int:
    score = 0
    if public_transport_access:
        score += TRANSIT_POINTS
    if pet_friendly:
        score += PET_FRIENDLY_POINTS
    score += park_count * PARK_POINTS
    score += school_count * SCHOOL_POINTS
    score += WALKABILITY_BONUS[Walkability(walkability)]
    return min(100, score)


def derive_scores(raw: Any) -> DerivedScores:
    """Compute safety and lifestyle scores from an area's raw attributes.

    `raw` is anything exposing the raw area fields (Area, AreaRecord, ...).
    """
    return DerivedScores(
        safety_score=compute_safety_score(raw.violent_crime_rate, raw.chargesheeting_rate),
        lifestyle_score=compute_lifestyle_score(
            raw.public_transport_access,
            raw.pet_friendly,
            raw.park_count,
            raw.school_count,
            raw.walkability,
        ),
    )
