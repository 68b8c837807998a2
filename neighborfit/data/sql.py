"""SQLAlchemy-backed storage and account repositories."""

import logging

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from neighborfit.config import settings
from neighborfit.errors import NotFoundError, ValidationError
from neighborfit.models.area import Area, Favorite
from neighborfit.models.criteria import Operator, Predicate, SortKey, StructuralFilter
from neighborfit.models.db import AreaRecord, FavoriteRecord, UserRecord
from neighborfit.models.preferences import PreferenceProfile, default_profile, merge_preferences
from neighborfit.models.results import AreaStats

logger = logging.getLogger(__name__)


def _sql_value(value):
    return getattr(value, "value", value)  # enums are stored by value


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    column = getattr(AreaRecord, predicate.field)
    value = predicate.value
    if predicate.op is Operator.EQ:
        return column == _sql_value(value)
    if predicate.op is Operator.GT:
        return column > value
    if predicate.op is Operator.GTE:
        return column >= value
    if predicate.op is Operator.LTE:
        return column <= value
    if predicate.op is Operator.CONTAINS_CI:
        return column.icontains(str(value), autoescape=True)
    if predicate.op is Operator.NOT_IN:
        return column.not_in(list(value))
    raise ValueError(f"Unsupported operator: {predicate.op}")


def compile_filter(criteria: StructuralFilter) -> list[ColumnElement[bool]]:
    """Translate a structural filter into WHERE clauses on AreaRecord."""
    return [compile_predicate(p) for p in criteria.predicates]


def _order_by(sort: tuple[SortKey, ...]) -> list:
    clauses = []
    for key in sort:
        column = getattr(AreaRecord, key.field.value)
        clauses.append(column.desc() if key.descending else column.asc())
    return clauses


class SqlAreaRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(
        self,
        criteria: StructuralFilter,
        sort: tuple[SortKey, ...] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Area]:
        stmt = select(AreaRecord).where(*compile_filter(criteria)).order_by(*_order_by(sort))
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await self.session.scalars(stmt)).all()
        logger.debug("find %s -> %d areas", criteria.to_dict(), len(rows))
        return [r.to_area() for r in rows]

    async def count(self, criteria: StructuralFilter) -> int:
        stmt = select(func.count()).select_from(AreaRecord).where(*compile_filter(criteria))
        return await self.session.scalar(stmt)

    async def get(self, area_id: str) -> Area:
        record = await self.session.get(AreaRecord, area_id)
        if record is None:
            raise NotFoundError(f"Area not found: {area_id}")
        return record.to_area()

    async def get_many(self, area_ids: list[str]) -> list[Area]:
        rows = (await self.session.scalars(select(AreaRecord).where(AreaRecord.id.in_(area_ids)))).all()
        by_id = {r.id: r.to_area() for r in rows}
        if len(by_id) != len(set(area_ids)):
            raise NotFoundError("One or more areas not found")
        return [by_id[i] for i in area_ids]

    async def cities(self) -> list[str]:
        stmt = select(AreaRecord.city).distinct().order_by(AreaRecord.city)
        return list((await self.session.scalars(stmt)).all())

    async def stats(self) -> AreaStats:
        general = (await self.session.execute(
            select(
                func.count(AreaRecord.id),
                func.avg(AreaRecord.population),
                func.avg(AreaRecord.violent_crime_rate),
                func.avg(AreaRecord.safety_score),
                func.avg(AreaRecord.lifestyle_score),
            )
        )).one()
        if not general[0]:
            return AreaStats()

        by_walkability = (await self.session.execute(
            select(AreaRecord.walkability, func.count()).group_by(AreaRecord.walkability)
        )).all()
        by_type = (await self.session.execute(
            select(AreaRecord.type, func.count()).group_by(AreaRecord.type)
        )).all()

        return AreaStats(
            total_areas=general[0],
            avg_population=float(general[1]),
            avg_crime_rate=float(general[2]),
            avg_safety_score=float(general[3]),
            avg_lifestyle_score=float(general[4]),
            cities=await self.cities(),
            by_walkability={w: n for w, n in by_walkability},
            by_type={t: n for t, n in by_type},
        )


class SqlAccountRepository:
    """Preference and favorite storage.

    Mutations take a row lock on the user (SELECT ... FOR UPDATE) so
    concurrent updates for one user are applied one at a time.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def register(self, user_id: str, profile: PreferenceProfile | None = None) -> PreferenceProfile:
        if profile is None:
            profile = default_profile(settings.default_weights, settings.default_min_safety_score)
        user = UserRecord(id=user_id)
        user.apply_profile(profile)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ValidationError(f"User already registered: {user_id}") from e
        logger.info("Registered user %s", user_id)
        return profile

    async def _user(self, user_id: str, for_update: bool = False) -> UserRecord:
        stmt = select(UserRecord).where(UserRecord.id == user_id).options(selectinload(UserRecord.favorites))
        if for_update:
            stmt = stmt.with_for_update()
        user = await self.session.scalar(stmt)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    async def get_preferences(self, user_id: str) -> PreferenceProfile:
        return (await self._user(user_id)).to_profile()

    async def update_preferences(self, user_id: str, changes: dict) -> PreferenceProfile:
        user = await self._user(user_id, for_update=True)
        updated = merge_preferences(user.to_profile(), changes)
        user.apply_profile(updated)
        await self.session.commit()
        logger.info("Updated preferences for user %s: %s", user_id, sorted(changes))
        return updated

    async def get_favorites(self, user_id: str) -> list[Favorite]:
        user = await self._user(user_id)
        return [
            Favorite(user_id=user_id, area=f.area.to_area(), added_at=f.added_at)
            for f in user.favorites
        ]

    async def add_favorite(self, user_id: str, area_id: str) -> list[Favorite]:
        user = await self._user(user_id, for_update=True)
        if await self.session.get(AreaRecord, area_id) is None:
            raise NotFoundError(f"Area not found: {area_id}")
        if any(f.area_id == area_id for f in user.favorites):
            raise ValidationError("Area already in favorites")
        self.session.add(FavoriteRecord(user_id=user_id, area_id=area_id))
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ValidationError("Area already in favorites") from e
        logger.info("User %s favorited area %s", user_id, area_id)
        self.session.expire_all()
        return await self.get_favorites(user_id)

    async def remove_favorite(self, user_id: str, area_id: str) -> list[Favorite]:
        user = await self._user(user_id, for_update=True)
        user.favorites = [f for f in user.favorites if f.area_id != area_id]
        await self.session.commit()
        self.session.expire_all()
        return await self.get_favorites(user_id)
