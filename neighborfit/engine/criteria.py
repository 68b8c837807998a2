"""Translate preferences into a structural filter for the storage collaborator."""

from decimal import Decimal

from neighborfit.models.attributes import AreaType, Walkability
from neighborfit.models.criteria import Operator, Predicate, StructuralFilter
from neighborfit.models.preferences import PreferenceProfile


def _city_predicate(city: str | None) -> list[Predicate]:
    if city and city.strip():
        return [Predicate("city", Operator.CONTAINS_CI, city.strip())]
    return []


def build_criteria(profile: PreferenceProfile, city: str | None = None) -> StructuralFilter:
    """Build the candidate filter for a user's profile.

    Every predicate is optional: "Any" / no-preference / zero thresholds
    contribute nothing.
    """
    predicates: list[Predicate] = []

    area_type = profile.desired_type.area_type
    if area_type is not None:
        predicates.append(Predicate("type", Operator.EQ, area_type))

    walkability = profile.desired_walkability.walkability
    if walkability is not None:
        predicates.append(Predicate("walkability", Operator.EQ, walkability))

    pet_friendly = profile.pet_friendly.required_value
    if pet_friendly is not None:
        predicates.append(Predicate("pet_friendly", Operator.EQ, pet_friendly))

    transit = profile.public_transport.required_value
    if transit is not None:
        predicates.append(Predicate("public_transport_access", Operator.EQ, transit))

    if profile.min_parks > 0:
        predicates.append(Predicate("park_count", Operator.GTE, profile.min_parks))

    if profile.require_schools_nearby:
        predicates.append(Predicate("school_count", Operator.GT, 0))

    if profile.min_safety_score > 0:
        predicates.append(Predicate("safety_score", Operator.GTE, profile.min_safety_score))

    predicates.extend(_city_predicate(city))
    return StructuralFilter(tuple(predicates))


def build_search_criteria(
    city: str | None = None,
    area_type: AreaType | None = None,
    walkability: Walkability | None = None,
    pet_friendly: bool | None = None,
    public_transport: bool | None = None,
    min_parks: int | None = None,
    schools_nearby: bool = False,
    min_safety_score: int | None = None,
    max_crime_rate: Decimal | None = None,
) -> StructuralFilter:
    """Filter from ad-hoc search fields (anonymous matching, area search)."""
    predicates = _city_predicate(city)
    if area_type is not None:
        predicates.append(Predicate("type", Operator.EQ, area_type))
    if walkability is not None:
        predicates.append(Predicate("walkability", Operator.EQ, walkability))
    if pet_friendly is not None:
        predicates.append(Predicate("pet_friendly", Operator.EQ, pet_friendly))
    if public_transport is not None:
        predicates.append(Predicate("public_transport_access", Operator.EQ, public_transport))
    if min_parks:
        predicates.append(Predicate("park_count", Operator.GTE, min_parks))
    if schools_nearby:
        predicates.append(Predicate("school_count", Operator.GT, 0))
    if min_safety_score:
        predicates.append(Predicate("safety_score", Operator.GTE, min_safety_score))
    if max_crime_rate is not None:
        predicates.append(Predicate("violent_crime_rate", Operator.LTE, max_crime_rate))
    return StructuralFilter(tuple(predicates))
