"""Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from neighborfit.errors import ValidationError
from neighborfit.models.area import Area, Favorite
from neighborfit.models.preferences import PreferenceProfile
from neighborfit.models.results import (
    AreaMetrics,
    AreaPage,
    AreaStats,
    ComparisonResult,
    MatchResult,
    RankedMatches,
    RecommendationResult,
)


# ---- Request schemas ----

class ComparisonRequest(BaseModel):
    area_ids: list[str] = Field(..., description="Two or more area IDs")


class RegisterRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=36)


class FavoriteRequest(BaseModel):
    area_id: str = Field(..., min_length=1)


class WeightsUpdate(BaseModel):
    safety: Decimal | None = None
    lifestyle: Decimal | None = None
    affordability: Decimal | None = None
    walkability: Decimal | None = None


class PreferencesUpdate(BaseModel):
    """Partial update. An explicit null for a tri-state preference or a
    budget clears it; omitted fields are left unchanged."""

    _NULLABLE: ClassVar[frozenset[str]] = frozenset({"pet_friendly", "public_transport", "max_rent", "max_home_price"})

    desired_type: str | None = None
    desired_walkability: str | None = None
    pet_friendly: bool | None = None
    public_transport: bool | None = None
    min_safety_score: int | None = None
    max_rent: Decimal | None = None
    max_home_price: Decimal | None = None
    min_parks: int | None = None
    require_schools_nearby: bool | None = None
    weights: WeightsUpdate | None = None

    def changes(self) -> dict[str, Any]:
        """Fields the client sent. Explicit null is only accepted where it
        clears a value; anywhere else it is rejected."""
        data = self.model_dump(exclude_unset=True)
        cleared = [k for k, v in data.items() if v is None and k not in self._NULLABLE]
        cleared += [f"weights.{k}" for k, v in (data.get("weights") or {}).items() if v is None]
        if cleared:
            raise ValidationError(f"Fields cannot be null: {', '.join(sorted(cleared))}")
        return data


# ---- Response schemas ----

class AreaResponse(BaseModel):
    id: str
    city: str
    name: str
    full_location: str
    type: str
    population: int
    violent_crime_count: int
    violent_crime_rate: Decimal
    chargesheeting_rate: Decimal
    public_transport_access: bool
    park_count: int
    school_count: int
    pet_friendly: bool
    walkability: str
    average_rent: Decimal | None = None
    average_home_price: Decimal | None = None
    safety_score: int
    lifestyle_score: int

    @classmethod
    def from_area(cls, area: Area) -> "AreaResponse":
        scores = area.scores
        return cls(
            id=area.id,
            city=area.city,
            name=area.name,
            full_location=area.full_location,
            type=area.type.value,
            population=area.population,
            violent_crime_count=area.violent_crime_count,
            violent_crime_rate=area.violent_crime_rate,
            chargesheeting_rate=area.chargesheeting_rate,
            public_transport_access=area.public_transport_access,
            park_count=area.park_count,
            school_count=area.school_count,
            pet_friendly=area.pet_friendly,
            walkability=area.walkability.value,
            average_rent=area.average_rent,
            average_home_price=area.average_home_price,
            safety_score=scores.safety_score,
            lifestyle_score=scores.lifestyle_score,
        )


class AreaListResponse(BaseModel):
    areas: list[AreaResponse]
    count: int


class AreaPageResponse(BaseModel):
    areas: list[AreaResponse]
    total: int
    total_pages: int
    current_page: int

    @classmethod
    def from_page(cls, page: AreaPage) -> "AreaPageResponse":
        return cls(
            areas=[AreaResponse.from_area(a) for a in page.areas],
            total=page.total,
            total_pages=page.total_pages,
            current_page=page.page,
        )


class AreaStatsResponse(BaseModel):
    total_areas: int
    avg_population: float | None = None
    avg_crime_rate: float | None = None
    avg_safety_score: float | None = None
    avg_lifestyle_score: float | None = None
    cities: list[str]
    by_walkability: dict[str, int]
    by_type: dict[str, int]

    @classmethod
    def from_stats(cls, stats: AreaStats) -> "AreaStatsResponse":
        return cls(**stats.__dict__)


class MatchBreakdownResponse(BaseModel):
    safety: int
    lifestyle: int
    walkability: int
    affordability: int


class MatchResponse(BaseModel):
    area: AreaResponse
    total_score: int
    breakdown: MatchBreakdownResponse

    @classmethod
    def from_result(cls, match: MatchResult) -> "MatchResponse":
        b = match.breakdown
        return cls(
            area=AreaResponse.from_area(match.area),
            total_score=match.total_score,
            breakdown=MatchBreakdownResponse(
                safety=b.safety,
                lifestyle=b.lifestyle,
                walkability=b.walkability,
                affordability=b.affordability,
            ),
        )


class MatchesResponse(BaseModel):
    results: list[MatchResponse]
    total_candidates: int
    applied_filters: dict[str, Any]

    @classmethod
    def from_ranked(cls, ranked: RankedMatches) -> "MatchesResponse":
        return cls(
            results=[MatchResponse.from_result(m) for m in ranked.results],
            total_candidates=ranked.total_candidates,
            applied_filters=ranked.applied_filters.to_dict(),
        )


class AreaMetricsResponse(BaseModel):
    id: str
    name: str
    population: int
    crime_rate: Decimal
    safety_score: int
    lifestyle_score: int
    parks: int
    schools: int
    walkability: str
    pet_friendly: bool
    public_transport: bool

    @classmethod
    def from_metrics(cls, m: AreaMetrics) -> "AreaMetricsResponse":
        return cls(
            id=m.area_id,
            name=m.name,
            population=m.population,
            crime_rate=m.crime_rate,
            safety_score=m.safety_score,
            lifestyle_score=m.lifestyle_score,
            parks=m.parks,
            schools=m.schools,
            walkability=m.walkability.value,
            pet_friendly=m.pet_friendly,
            public_transport=m.public_transport,
        )


class ComparisonResponse(BaseModel):
    per_area: list[AreaMetricsResponse]
    best_safety: AreaMetricsResponse
    best_lifestyle: AreaMetricsResponse
    most_walkable: list[AreaMetricsResponse]
    pet_friendly: list[AreaMetricsResponse]

    @classmethod
    def from_result(cls, result: ComparisonResult) -> "ComparisonResponse":
        convert = AreaMetricsResponse.from_metrics
        return cls(
            per_area=[convert(m) for m in result.per_area],
            best_safety=convert(result.best_safety),
            best_lifestyle=convert(result.best_lifestyle),
            most_walkable=[convert(m) for m in result.most_walkable],
            pet_friendly=[convert(m) for m in result.pet_friendly],
        )


class RecommendationBasisResponse(BaseModel):
    favorite_count: int
    avg_safety: int
    avg_lifestyle: int


class RecommendationResponse(BaseModel):
    results: list[AreaResponse]
    based_on: RecommendationBasisResponse | None = None
    reason: str | None = None

    @classmethod
    def from_result(cls, result: RecommendationResult) -> "RecommendationResponse":
        based_on = None
        if result.based_on is not None:
            based_on = RecommendationBasisResponse(**result.based_on.__dict__)
        return cls(
            results=[AreaResponse.from_area(a) for a in result.results],
            based_on=based_on,
            reason=result.reason,
        )


class WeightsResponse(BaseModel):
    safety: Decimal
    lifestyle: Decimal
    affordability: Decimal
    walkability: Decimal


class PreferencesResponse(BaseModel):
    desired_type: str
    desired_walkability: str
    pet_friendly: bool | None
    public_transport: bool | None
    min_safety_score: int
    max_rent: Decimal | None = None
    max_home_price: Decimal | None = None
    min_parks: int
    require_schools_nearby: bool
    weights: WeightsResponse

    @classmethod
    def from_profile(cls, profile: PreferenceProfile) -> "PreferencesResponse":
        return cls(
            desired_type=profile.desired_type.value,
            desired_walkability=profile.desired_walkability.value,
            pet_friendly=profile.pet_friendly.required_value,
            public_transport=profile.public_transport.required_value,
            min_safety_score=profile.min_safety_score,
            max_rent=profile.max_rent,
            max_home_price=profile.max_home_price,
            min_parks=profile.min_parks,
            require_schools_nearby=profile.require_schools_nearby,
            weights=WeightsResponse(**profile.weights.as_dict()),
        )


class FavoriteResponse(BaseModel):
    area: AreaResponse
    added_at: datetime

    @classmethod
    def from_favorite(cls, favorite: Favorite) -> "FavoriteResponse":
        return cls(area=AreaResponse.from_area(favorite.area), added_at=favorite.added_at)
