"""Weighted match scoring and ranking.

Each term is scored 0-100, then weighted by the profile:
  Safety:        derived safety score
  Lifestyle:     derived lifestyle score
  Walkability:   100 High / 60 Medium / 20 Low (separate from lifestyle)
  Affordability: 100 at or under budget, linear to 0 at 2x budget;
                 0 when rent or budget is unknown
"""

from decimal import Decimal

from neighborfit.engine.scores import round_half_up
from neighborfit.errors import ValidationError
from neighborfit.models.area import Area
from neighborfit.models.attributes import Walkability
from neighborfit.models.preferences import PreferenceProfile
from neighborfit.models.results import MatchBreakdown, MatchResult

WALKABILITY_TERM: dict[Walkability, Decimal] = {
    Walkability.HIGH: Decimal("100"),
    Walkability.MEDIUM: Decimal("60"),
    Walkability.LOW: Decimal("20"),
}

HUNDRED = Decimal("100")


def _walkability_term(area: Area) -> Decimal:
    return WALKABILITY_TERM[area.walkability]


def _affordability_term(area: Area, profile: PreferenceProfile) -> Decimal:
    """Score 0-100 for average rent against the user's max rent."""
    if area.average_rent is None or not profile.max_rent:
        return Decimal("0")
    overshoot_pct = (area.average_rent - profile.max_rent) / profile.max_rent * HUNDRED
    return min(HUNDRED, max(Decimal("0"), HUNDRED - overshoot_pct))


def _weighted(term: Decimal | int, weight: Decimal) -> Decimal:
    return Decimal(term) / HUNDRED * weight * HUNDRED


def score_match(area: Area, profile: PreferenceProfile) -> MatchResult:
    """Score one area against one preference profile.

    Returns a MatchResult whose total is 0-100. Missing rent data degrades the
    affordability term to 0 instead of failing.
    """
    w = profile.weights
    safety = _weighted(area.safety_score, w.safety)
    lifestyle = _weighted(area.lifestyle_score, w.lifestyle)
    walkability = _weighted(_walkability_term(area), w.walkability)
    affordability = _weighted(_affordability_term(area, profile), w.affordability)

    total = round_half_up(safety + lifestyle + walkability + affordability)

    return MatchResult(
        area=area,
        total_score=total,
        breakdown=MatchBreakdown(
            safety=round_half_up(safety),
            lifestyle=round_half_up(lifestyle),
            walkability=round_half_up(walkability),
            affordability=round_half_up(affordability),
        ),
    )


def validate_limit(limit) -> int:
    """Result-size bound must be a positive integer. Never clamped."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"limit must be a positive integer, got {limit!r}")
    if limit < 1:
        raise ValidationError(f"limit must be a positive integer, got {limit}")
    return limit


def rank_matches(matches: list[MatchResult], limit: int) -> list[MatchResult]:
    """Order by total score (highest first) and keep the top `limit`.

    The sort is stable: equal scores keep their input order.
    """
    limit = validate_limit(limit)
    ordered = sorted(matches, key=lambda m: m.total_score, reverse=True)
    return ordered[:limit]


def score_and_rank(areas: list[Area], profile: PreferenceProfile, limit: int) -> tuple[list[MatchResult], int]:
    """Score every candidate and rank them. Returns (top matches, candidate count)."""
    validate_limit(limit)
    scored = [score_match(area, profile) for area in areas]
    return rank_matches(scored, limit), len(scored)
