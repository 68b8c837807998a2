"""Protocol definitions for the storage and account collaborators.

Each protocol defines the interface that concrete repositories must satisfy.
"""

from typing import Protocol, runtime_checkable

from neighborfit.models.area import Area, Favorite
from neighborfit.models.criteria import SortKey, StructuralFilter
from neighborfit.models.preferences import PreferenceProfile
from neighborfit.models.results import AreaStats


@runtime_checkable
class AreaRepository(Protocol):
    async def find(
        self,
        criteria: StructuralFilter,
        sort: tuple[SortKey, ...] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Area]:
        """Return areas matching every predicate in `criteria`."""
        ...

    async def count(self, criteria: StructuralFilter) -> int:
        """Count areas matching `criteria`."""
        ...

    async def get(self, area_id: str) -> Area:
        """Fetch one area. Raises NotFoundError."""
        ...

    async def get_many(self, area_ids: list[str]) -> list[Area]:
        """Fetch areas in the order requested. Raises NotFoundError if any is missing."""
        ...

    async def cities(self) -> list[str]:
        """Distinct city names, sorted."""
        ...

    async def stats(self) -> AreaStats:
        """Population-wide aggregates."""
        ...


@runtime_checkable
class AccountRepository(Protocol):
    async def register(self, user_id: str, profile: PreferenceProfile | None = None) -> PreferenceProfile:
        """Create an account with `profile` or the configured defaults.
        Raises ValidationError if the id is taken."""
        ...

    async def get_preferences(self, user_id: str) -> PreferenceProfile:
        """Current profile. Raises NotFoundError for unknown users."""
        ...

    async def update_preferences(self, user_id: str, changes: dict) -> PreferenceProfile:
        """Merge `changes` into the profile, validate, and store it."""
        ...

    async def get_favorites(self, user_id: str) -> list[Favorite]:
        """Favorites with their areas resolved, oldest first."""
        ...

    async def add_favorite(self, user_id: str, area_id: str) -> list[Favorite]:
        ...

    async def remove_favorite(self, user_id: str, area_id: str) -> list[Favorite]:
        ...
