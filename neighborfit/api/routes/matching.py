"""Matching routes: personalized matches, comparison, recommendations."""

from fastapi import APIRouter, Depends

from neighborfit.api.deps import get_matcher
from neighborfit.api.schemas import (
    AreaListResponse,
    AreaResponse,
    ComparisonRequest,
    ComparisonResponse,
    MatchesResponse,
    RecommendationResponse,
)
from neighborfit.config import settings
from neighborfit.data.matcher import NeighborhoodMatcher
from neighborfit.models.attributes import AreaType, Walkability

router = APIRouter(prefix="/api/v1", tags=["matching"])


@router.get("/users/{user_id}/matches", response_model=MatchesResponse)
async def get_matches(
    user_id: str,
    limit: int = settings.default_match_limit,
    city: str | None = None,
    matcher: NeighborhoodMatcher = Depends(get_matcher),
):
    """Areas matching the user's preferences, best match first."""
    ranked = await matcher.matches_for_user(user_id, limit=limit, city=city)
    return MatchesResponse.from_ranked(ranked)


@router.get("/matches/anonymous", response_model=AreaListResponse)
async def get_anonymous_matches(
    city: str | None = None,
    type: AreaType | None = None,
    walkability: Walkability | None = None,
    pet_friendly: bool | None = None,
    public_transport: bool | None = None,
    min_safety_score: int = settings.default_min_safety_score,
    limit: int = settings.default_match_limit,
    matcher: NeighborhoodMatcher = Depends(get_matcher),
):
    """Best areas for visitors without a profile, safest first."""
    found = await matcher.anonymous_matches(
        limit=limit,
        city=city,
        area_type=type,
        walkability=walkability,
        pet_friendly=pet_friendly,
        public_transport=public_transport,
        min_safety_score=min_safety_score,
    )
    return AreaListResponse(areas=[AreaResponse.from_area(a) for a in found], count=len(found))


@router.post("/compare", response_model=ComparisonResponse)
async def compare(req: ComparisonRequest, matcher: NeighborhoodMatcher = Depends(get_matcher)):
    """Side-by-side metrics for two or more areas."""
    return ComparisonResponse.from_result(await matcher.compare(req.area_ids))


@router.get("/users/{user_id}/recommendations", response_model=RecommendationResponse)
async def get_recommendations(
    user_id: str,
    limit: int = settings.default_recommendation_limit,
    matcher: NeighborhoodMatcher = Depends(get_matcher),
):
    """Areas similar to the user's favorites."""
    result = await matcher.recommendations_for_user(user_id, limit=limit)
    return RecommendationResponse.from_result(result)
