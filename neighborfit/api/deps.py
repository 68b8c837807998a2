"""FastAPI dependency injection."""

import functools
from collections.abc import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from neighborfit.config import settings
from neighborfit.data.base import AccountRepository, AreaRepository
from neighborfit.data.matcher import NeighborhoodMatcher
from neighborfit.data.memory import InMemoryAccountRepository, InMemoryAreaRepository
from neighborfit.data.sql import SqlAccountRepository, SqlAreaRepository

memory_areas = InMemoryAreaRepository()
memory_accounts = InMemoryAccountRepository(memory_areas)


@functools.lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    engine = create_async_engine(settings.database_url, echo=settings.debug)
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_area_repository() -> AsyncIterator[AreaRepository]:
    if settings.storage_backend == "sql":
        async with get_sessionmaker()() as session:
            yield SqlAreaRepository(session)
    else:
        yield memory_areas


async def get_account_repository() -> AsyncIterator[AccountRepository]:
    if settings.storage_backend == "sql":
        async with get_sessionmaker()() as session:
            yield SqlAccountRepository(session)
    else:
        yield memory_accounts


def get_matcher(
    areas: AreaRepository = Depends(get_area_repository),
    accounts: AccountRepository = Depends(get_account_repository),
) -> NeighborhoodMatcher:
    return NeighborhoodMatcher(areas, accounts, band=settings.similarity_band)
