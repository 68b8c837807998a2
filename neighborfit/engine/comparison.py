"""Side-by-side comparison of a small set of areas."""

from neighborfit.errors import ValidationError
from neighborfit.models.area import Area
from neighborfit.models.attributes import Walkability
from neighborfit.models.results import AreaMetrics, ComparisonResult

MIN_AREAS = 2


def area_metrics(area: Area) -> AreaMetrics:
    return AreaMetrics(
        area_id=area.id,
        name=area.full_location,
        population=area.population,
        crime_rate=area.violent_crime_rate,
        safety_score=area.safety_score,
        lifestyle_score=area.lifestyle_score,
        parks=area.park_count,
        schools=area.school_count,
        walkability=area.walkability,
        pet_friendly=area.pet_friendly,
        public_transport=area.public_transport_access,
    )


def compare_areas(areas: list[Area]) -> ComparisonResult:
    """Compare two or more areas.

    best_safety / best_lifestyle go to the first area holding the maximum,
    in input order.
    """
    if len({a.id for a in areas}) < MIN_AREAS:
        raise ValidationError(f"Please provide at least {MIN_AREAS} distinct areas to compare")

    per_area = [area_metrics(a) for a in areas]

    # max() keeps the first of equal keys
    return ComparisonResult(
        per_area=per_area,
        best_safety=max(per_area, key=lambda m: m.safety_score),
        best_lifestyle=max(per_area, key=lambda m: m.lifestyle_score),
        most_walkable=[m for m in per_area if m.walkability is Walkability.HIGH],
        pet_friendly=[m for m in per_area if m.pet_friendly],
    )
