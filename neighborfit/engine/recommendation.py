"""Favorites-based recommendations.

The mean safety and lifestyle scores of a user's favorites define a
similarity band (+/- 10 points on each axis, inclusive). Non-favorited areas
inside the band on both axes are returned safest first, then by lifestyle.
"""

from decimal import Decimal

from neighborfit.engine.matching import validate_limit
from neighborfit.engine.scores import round_half_up
from neighborfit.models.area import Area
from neighborfit.models.criteria import Operator, Predicate, StructuralFilter
from neighborfit.models.results import RecommendationBasis, RecommendationResult

DEFAULT_BAND = 10
NO_FAVORITES = "no favorites"


def _mean(values: list[int]) -> Decimal:
    return Decimal(sum(values)) / len(values)


def similarity_band(favorites: list[Area], width: int = DEFAULT_BAND) -> StructuralFilter:
    """Filter selecting non-favorited areas within the favorites' band.

    Handed to the storage collaborator so the band is applied where the data
    lives. Caller guarantees favorites is non-empty.
    """
    avg_safety = _mean([a.safety_score for a in favorites])
    avg_lifestyle = _mean([a.lifestyle_score for a in favorites])
    return StructuralFilter((
        Predicate("id", Operator.NOT_IN, frozenset(a.id for a in favorites)),
        Predicate("safety_score", Operator.GTE, avg_safety - width),
        Predicate("safety_score", Operator.LTE, avg_safety + width),
        Predicate("lifestyle_score", Operator.GTE, avg_lifestyle - width),
        Predicate("lifestyle_score", Operator.LTE, avg_lifestyle + width),
    ))


def recommend_areas(
    favorites: list[Area],
    candidates: list[Area],
    limit: int,
    width: int = DEFAULT_BAND,
) -> RecommendationResult:
    """Recommend areas similar to the user's favorites.

    Zero favorites is not an error: the result is empty with a reason.
    """
    limit = validate_limit(limit)
    if not favorites:
        return RecommendationResult(results=[], reason=NO_FAVORITES)

    band = similarity_band(favorites, width)
    survivors = [a for a in candidates if band.matches(a)]
    # Two-level ordering, not a weighted score
    survivors.sort(key=lambda a: (-a.safety_score, -a.lifestyle_score))

    return RecommendationResult(
        results=survivors[:limit],
        based_on=RecommendationBasis(
            favorite_count=len(favorites),
            avg_safety=round_half_up(_mean([a.safety_score for a in favorites])),
            avg_lifestyle=round_half_up(_mean([a.lifestyle_score for a in favorites])),
        ),
    )
