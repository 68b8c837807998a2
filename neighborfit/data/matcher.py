"""Matching service: wires the storage/account collaborators to the engine.

Flow: user id → preferences → structural filter → storage → score → rank
Also: anonymous search, comparison by id, favorites-based recommendations.
"""

import logging

from neighborfit.data.base import AccountRepository, AreaRepository
from neighborfit.engine.comparison import compare_areas
from neighborfit.engine.criteria import build_criteria, build_search_criteria
from neighborfit.engine.matching import score_and_rank, validate_limit
from neighborfit.engine.recommendation import DEFAULT_BAND, recommend_areas, similarity_band
from neighborfit.errors import ValidationError
from neighborfit.models.area import Area
from neighborfit.models.attributes import AreaType, Walkability
from neighborfit.models.criteria import BEST_FIRST
from neighborfit.models.results import ComparisonResult, RankedMatches, RecommendationResult

logger = logging.getLogger(__name__)


class NeighborhoodMatcher:
    def __init__(self, areas: AreaRepository, accounts: AccountRepository, band: int = DEFAULT_BAND):
        self.areas = areas
        self.accounts = accounts
        self.band = band

    async def matches_for_user(self, user_id: str, limit: int, city: str | None = None) -> RankedMatches:
        """Personalized matches: filter by preferences, score, rank."""
        validate_limit(limit)
        profile = await self.accounts.get_preferences(user_id)
        criteria = build_criteria(profile, city)

        candidates = await self.areas.find(criteria)
        results, total = score_and_rank(candidates, profile, limit)
        logger.info("Matched user %s: %d candidates, returning %d", user_id, total, len(results))

        return RankedMatches(results=results, total_candidates=total, applied_filters=criteria)

    async def anonymous_matches(
        self,
        limit: int,
        city: str | None = None,
        area_type: AreaType | None = None,
        walkability: Walkability | None = None,
        pet_friendly: bool | None = None,
        public_transport: bool | None = None,
        min_safety_score: int | None = 50,
    ) -> list[Area]:
        """Best areas for visitors without a profile: filter, then safest first."""
        validate_limit(limit)
        criteria = build_search_criteria(
            city=city,
            area_type=area_type,
            walkability=walkability,
            pet_friendly=pet_friendly,
            public_transport=public_transport,
            min_safety_score=min_safety_score,
        )
        return await self.areas.find(criteria, sort=BEST_FIRST, limit=limit)

    async def compare(self, area_ids: list[str]) -> ComparisonResult:
        """Compare areas by id, in the order given. Duplicate ids count once."""
        unique_ids = list(dict.fromkeys(area_ids))
        if len(unique_ids) < 2:
            raise ValidationError("Please provide at least 2 area IDs to compare")
        areas = await self.areas.get_many(unique_ids)
        return compare_areas(areas)

    async def recommendations_for_user(self, user_id: str, limit: int) -> RecommendationResult:
        validate_limit(limit)
        favorites = [f.area for f in await self.accounts.get_favorites(user_id)]
        if not favorites:
            logger.info("No favorites for user %s, skipping recommendations", user_id)
            return recommend_areas(favorites, [], limit, self.band)

        # Storage narrows to the band; the engine re-checks and orders it
        candidates = await self.areas.find(similarity_band(favorites, self.band))
        return recommend_areas(favorites, candidates, limit, self.band)
