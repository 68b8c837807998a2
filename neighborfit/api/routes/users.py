"""User preference and favorites routes."""

from fastapi import APIRouter, Depends

from neighborfit.api.deps import get_account_repository
from neighborfit.api.schemas import (
    FavoriteRequest,
    FavoriteResponse,
    PreferencesResponse,
    PreferencesUpdate,
    RegisterRequest,
)
from neighborfit.data.base import AccountRepository

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", response_model=PreferencesResponse, status_code=201)
async def register_user(req: RegisterRequest, accounts: AccountRepository = Depends(get_account_repository)):
    """Create an account with the default preference profile."""
    return PreferencesResponse.from_profile(await accounts.register(req.user_id))


@router.get("/{user_id}/preferences", response_model=PreferencesResponse)
async def get_preferences(user_id: str, accounts: AccountRepository = Depends(get_account_repository)):
    return PreferencesResponse.from_profile(await accounts.get_preferences(user_id))


@router.put("/{user_id}/preferences", response_model=PreferencesResponse)
async def update_preferences(
    user_id: str,
    req: PreferencesUpdate,
    accounts: AccountRepository = Depends(get_account_repository),
):
    """Partial update; the merged profile is validated as a whole."""
    profile = await accounts.update_preferences(user_id, req.changes())
    return PreferencesResponse.from_profile(profile)


@router.get("/{user_id}/favorites", response_model=list[FavoriteResponse])
async def get_favorites(user_id: str, accounts: AccountRepository = Depends(get_account_repository)):
    return [FavoriteResponse.from_favorite(f) for f in await accounts.get_favorites(user_id)]


@router.post("/{user_id}/favorites", response_model=list[FavoriteResponse])
async def add_favorite(
    user_id: str,
    req: FavoriteRequest,
    accounts: AccountRepository = Depends(get_account_repository),
):
    favorites = await accounts.add_favorite(user_id, req.area_id)
    return [FavoriteResponse.from_favorite(f) for f in favorites]


@router.delete("/{user_id}/favorites/{area_id}", response_model=list[FavoriteResponse])
async def remove_favorite(
    user_id: str,
    area_id: str,
    accounts: AccountRepository = Depends(get_account_repository),
):
    favorites = await accounts.remove_favorite(user_id, area_id)
    return [FavoriteResponse.from_favorite(f) for f in favorites]
