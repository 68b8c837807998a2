"""Area browsing routes: listing, search, statistics."""

from decimal import Decimal
from typing import Literal

from fastapi import APIRouter, Depends

from neighborfit.api.deps import get_area_repository
from neighborfit.api.schemas import AreaListResponse, AreaPageResponse, AreaResponse, AreaStatsResponse
from neighborfit.data.base import AreaRepository
from neighborfit.engine.criteria import build_search_criteria
from neighborfit.engine.matching import validate_limit
from neighborfit.errors import ValidationError
from neighborfit.models.attributes import AreaType, Walkability
from neighborfit.models.criteria import SortField, SortKey
from neighborfit.models.results import AreaPage

router = APIRouter(prefix="/api/v1/areas", tags=["areas"])


@router.get("", response_model=AreaPageResponse)
async def list_areas(
    page: int = 1,
    limit: int = 10,
    city: str | None = None,
    type: AreaType | None = None,
    walkability: Walkability | None = None,
    sort_by: SortField = SortField.CITY,
    areas: AreaRepository = Depends(get_area_repository),
):
    """Paginated area listing."""
    validate_limit(limit)
    if page < 1:
        raise ValidationError(f"page must be a positive integer, got {page}")

    criteria = build_search_criteria(city=city, area_type=type, walkability=walkability)
    found = await areas.find(criteria, sort=(SortKey(sort_by),), limit=limit, offset=(page - 1) * limit)
    total = await areas.count(criteria)
    return AreaPageResponse.from_page(AreaPage(areas=found, total=total, page=page, limit=limit))


@router.get("/search", response_model=AreaListResponse)
async def search_areas(
    city: str | None = None,
    type: AreaType | None = None,
    walkability: Walkability | None = None,
    pet_friendly: bool | None = None,
    public_transport: bool | None = None,
    min_parks: int | None = None,
    schools_nearby: bool = False,
    min_safety_score: int | None = None,
    max_crime_rate: Decimal | None = None,
    sort_by: SortField = SortField.CITY,
    order: Literal["asc", "desc"] = "asc",
    areas: AreaRepository = Depends(get_area_repository),
):
    """Search areas with the full filter set."""
    criteria = build_search_criteria(
        city=city,
        area_type=type,
        walkability=walkability,
        pet_friendly=pet_friendly,
        public_transport=public_transport,
        min_parks=min_parks,
        schools_nearby=schools_nearby,
        min_safety_score=min_safety_score,
        max_crime_rate=max_crime_rate,
    )
    found = await areas.find(criteria, sort=(SortKey(sort_by, descending=order == "desc"),))
    return AreaListResponse(areas=[AreaResponse.from_area(a) for a in found], count=len(found))


@router.get("/stats", response_model=AreaStatsResponse)
async def area_stats(areas: AreaRepository = Depends(get_area_repository)):
    """Population-wide statistics."""
    return AreaStatsResponse.from_stats(await areas.stats())


@router.get("/cities")
async def list_cities(areas: AreaRepository = Depends(get_area_repository)):
    return {"cities": await areas.cities()}


@router.get("/{area_id}", response_model=AreaResponse)
async def get_area(area_id: str, areas: AreaRepository = Depends(get_area_repository)):
    return AreaResponse.from_area(await areas.get(area_id))
