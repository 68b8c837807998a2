"""In-memory storage and account repositories.

Used for local development, tests, and as the default backend. Filters are
evaluated predicate by predicate against each stored Area.
"""

import asyncio
import logging
from collections import Counter, defaultdict
from datetime import datetime, timezone
from statistics import fmean

from neighborfit.config import settings
from neighborfit.errors import NotFoundError, ValidationError
from neighborfit.models.area import Area, Favorite
from neighborfit.models.criteria import SortKey, StructuralFilter
from neighborfit.models.preferences import PreferenceProfile, default_profile, merge_preferences
from neighborfit.models.results import AreaStats

logger = logging.getLogger(__name__)


def sort_areas(areas: list[Area], sort: tuple[SortKey, ...]) -> list[Area]:
    """Multi-key sort; applied last key first so earlier keys dominate."""
    ordered = list(areas)
    for key in reversed(sort):
        ordered.sort(key=lambda a: getattr(a, key.field.value), reverse=key.descending)
    return ordered


class InMemoryAreaRepository:
    def __init__(self, areas: list[Area] | None = None):
        self._areas: dict[str, Area] = {}
        for area in areas or []:
            self.put(area)

    def put(self, area: Area) -> None:
        self._areas[area.id] = area

    async def find(
        self,
        criteria: StructuralFilter,
        sort: tuple[SortKey, ...] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Area]:
        matched = [a for a in self._areas.values() if criteria.matches(a)]
        matched = sort_areas(matched, sort)
        end = None if limit is None else offset + limit
        logger.debug("find %s -> %d areas", criteria.to_dict(), len(matched))
        return matched[offset:end]

    async def count(self, criteria: StructuralFilter) -> int:
        return sum(1 for a in self._areas.values() if criteria.matches(a))

    async def get(self, area_id: str) -> Area:
        try:
            return self._areas[area_id]
        except KeyError:
            raise NotFoundError(f"Area not found: {area_id}") from None

    async def get_many(self, area_ids: list[str]) -> list[Area]:
        found = [self._areas[i] for i in area_ids if i in self._areas]
        if len(found) != len(area_ids):
            raise NotFoundError("One or more areas not found")
        return found

    async def cities(self) -> list[str]:
        return sorted({a.city for a in self._areas.values()})

    async def stats(self) -> AreaStats:
        areas = list(self._areas.values())
        if not areas:
            return AreaStats()
        return AreaStats(
            total_areas=len(areas),
            avg_population=fmean(a.population for a in areas),
            avg_crime_rate=fmean(float(a.violent_crime_rate) for a in areas),
            avg_safety_score=fmean(a.safety_score for a in areas),
            avg_lifestyle_score=fmean(a.lifestyle_score for a in areas),
            cities=sorted({a.city for a in areas}),
            by_walkability=dict(Counter(a.walkability.value for a in areas)),
            by_type=dict(Counter(a.type.value for a in areas)),
        )


class InMemoryAccountRepository:
    """Preferences and favorites per user.

    Mutations for a user are serialized by a per-user lock so readers never
    see a half-applied update.
    """

    def __init__(self, areas: InMemoryAreaRepository):
        self.areas = areas
        self._profiles: dict[str, PreferenceProfile] = {}
        self._favorites: dict[str, list[tuple[str, datetime]]] = {}
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def register(self, user_id: str, profile: PreferenceProfile | None = None) -> PreferenceProfile:
        if user_id in self._profiles:
            raise ValidationError(f"User already registered: {user_id}")
        if profile is None:
            profile = default_profile(settings.default_weights, settings.default_min_safety_score)
        self._profiles[user_id] = profile
        self._favorites[user_id] = []
        logger.info("Registered user %s", user_id)
        return profile

    def _require_user(self, user_id: str) -> None:
        if user_id not in self._profiles:
            raise NotFoundError(f"User not found: {user_id}")

    async def get_preferences(self, user_id: str) -> PreferenceProfile:
        self._require_user(user_id)
        return self._profiles[user_id]

    async def update_preferences(self, user_id: str, changes: dict) -> PreferenceProfile:
        self._require_user(user_id)
        async with self._locks[user_id]:
            updated = merge_preferences(self._profiles[user_id], changes)
            self._profiles[user_id] = updated
        logger.info("Updated preferences for user %s: %s", user_id, sorted(changes))
        return updated

    async def get_favorites(self, user_id: str) -> list[Favorite]:
        self._require_user(user_id)
        entries = list(self._favorites[user_id])
        areas = await self.areas.get_many([area_id for area_id, _ in entries])
        return [
            Favorite(user_id=user_id, area=area, added_at=added_at)
            for area, (_, added_at) in zip(areas, entries)
        ]

    async def add_favorite(self, user_id: str, area_id: str) -> list[Favorite]:
        self._require_user(user_id)
        await self.areas.get(area_id)
        async with self._locks[user_id]:
            entries = self._favorites[user_id]
            if any(existing == area_id for existing, _ in entries):
                raise ValidationError("Area already in favorites")
            entries.append((area_id, datetime.now(timezone.utc)))
        logger.info("User %s favorited area %s", user_id, area_id)
        return await self.get_favorites(user_id)

    async def remove_favorite(self, user_id: str, area_id: str) -> list[Favorite]:
        self._require_user(user_id)
        async with self._locks[user_id]:
            self._favorites[user_id] = [e for e in self._favorites[user_id] if e[0] != area_id]
        return await self.get_favorites(user_id)
