"""SQLAlchemy ORM models for PostgreSQL persistence.

Safety and lifestyle scores are hybrid properties: computed in Python on
loaded rows and as SQL expressions in queries, never stored as columns.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    ColumnElement,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    case,
    func,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from neighborfit.engine.scores import (
    PARK_POINTS,
    PET_FRIENDLY_POINTS,
    SCHOOL_POINTS,
    TRANSIT_POINTS,
    WALKABILITY_BONUS,
    compute_lifestyle_score,
    compute_safety_score,
)
from neighborfit.models.area import Area
from neighborfit.models.attributes import AreaType, Walkability
from neighborfit.models.preferences import (
    AreaTypePreference,
    FeaturePreference,
    PreferenceProfile,
    PreferenceWeights,
    WalkabilityPreference,
)


class Base(DeclarativeBase):
    pass


class AreaRecord(Base):
    __tablename__ = "areas"
    __table_args__ = (Index("ix_areas_city_name", "city", "name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    city: Mapped[str] = mapped_column(String(100), index=True)
    name: Mapped[str] = mapped_column(String(100))
    type: Mapped[str] = mapped_column(String(20))  # Urban / Suburban / Rural
    population: Mapped[int] = mapped_column(Integer, default=0)

    # Crime
    violent_crime_count: Mapped[int] = mapped_column(Integer, default=0)
    violent_crime_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    chargesheeting_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0)

    # Amenities
    public_transport_access: Mapped[bool] = mapped_column(Boolean, default=False)
    park_count: Mapped[int] = mapped_column(Integer, default=0)
    school_count: Mapped[int] = mapped_column(Integer, default=0)
    pet_friendly: Mapped[bool] = mapped_column(Boolean, default=False)
    walkability: Mapped[str] = mapped_column(String(10))  # Low / Medium / High

    # Cost
    average_rent: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    average_home_price: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)

    @hybrid_property
    def safety_score(self) -> int:
        return compute_safety_score(self.violent_crime_rate, self.chargesheeting_rate)

    @safety_score.inplace.expression
    @classmethod
    def _safety_score_expression(cls) -> ColumnElement[int]:
        crime_score = case((cls.violent_crime_rate > 100, 0), else_=100 - cls.violent_crime_rate)
        # round() on numeric rounds half away from zero; scores are non-negative
        return func.round((crime_score + cls.chargesheeting_rate) / 2, type_=Integer)

    @hybrid_property
    def lifestyle_score(self) -> int:
        return compute_lifestyle_score(
            self.public_transport_access,
            self.pet_friendly,
            self.park_count,
            self.school_count,
            self.walkability,
        )

    @lifestyle_score.inplace.expression
    @classmethod
    def _lifestyle_score_expression(cls) -> ColumnElement[int]:
        raw = (
            case((cls.public_transport_access, TRANSIT_POINTS), else_=0)
            + case((cls.pet_friendly, PET_FRIENDLY_POINTS), else_=0)
            + cls.park_count * PARK_POINTS
            + cls.school_count * SCHOOL_POINTS
            + case(
                (cls.walkability == Walkability.HIGH.value, WALKABILITY_BONUS[Walkability.HIGH]),
                (cls.walkability == Walkability.MEDIUM.value, WALKABILITY_BONUS[Walkability.MEDIUM]),
                else_=0,
            )
        )
        return case((raw > 100, 100), else_=raw)

    def to_area(self) -> Area:
        return Area(
            id=self.id,
            city=self.city,
            name=self.name,
            type=AreaType(self.type),
            population=self.population,
            violent_crime_count=self.violent_crime_count,
            violent_crime_rate=Decimal(self.violent_crime_rate),
            chargesheeting_rate=Decimal(self.chargesheeting_rate),
            public_transport_access=self.public_transport_access,
            park_count=self.park_count,
            school_count=self.school_count,
            pet_friendly=self.pet_friendly,
            walkability=Walkability(self.walkability),
            average_rent=self.average_rent,
            average_home_price=self.average_home_price,
        )


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Preferences; NULL pet_friendly / public_transport means no preference
    desired_type: Mapped[str] = mapped_column(String(20), default="Any")
    desired_walkability: Mapped[str] = mapped_column(String(10), default="Any")
    pet_friendly: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    public_transport: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    min_safety_score: Mapped[int] = mapped_column(Integer, default=50)
    max_rent: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    max_home_price: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    min_parks: Mapped[int] = mapped_column(Integer, default=0)
    require_schools_nearby: Mapped[bool] = mapped_column(Boolean, default=False)

    # Weights (validated to sum to 1.0 before they are written)
    weight_safety: Mapped[Decimal] = mapped_column(Numeric(4, 3))
    weight_lifestyle: Mapped[Decimal] = mapped_column(Numeric(4, 3))
    weight_affordability: Mapped[Decimal] = mapped_column(Numeric(4, 3))
    weight_walkability: Mapped[Decimal] = mapped_column(Numeric(4, 3))

    favorites: Mapped[list["FavoriteRecord"]] = relationship(
        back_populates="user", order_by="FavoriteRecord.added_at", cascade="all, delete-orphan",
    )

    def to_profile(self) -> PreferenceProfile:
        return PreferenceProfile(
            weights=PreferenceWeights(
                safety=Decimal(self.weight_safety),
                lifestyle=Decimal(self.weight_lifestyle),
                affordability=Decimal(self.weight_affordability),
                walkability=Decimal(self.weight_walkability),
            ),
            desired_type=AreaTypePreference(self.desired_type),
            desired_walkability=WalkabilityPreference(self.desired_walkability),
            pet_friendly=FeaturePreference.from_bool(self.pet_friendly),
            public_transport=FeaturePreference.from_bool(self.public_transport),
            min_safety_score=self.min_safety_score,
            max_rent=self.max_rent,
            max_home_price=self.max_home_price,
            min_parks=self.min_parks,
            require_schools_nearby=self.require_schools_nearby,
        )

    def apply_profile(self, profile: PreferenceProfile) -> None:
        self.desired_type = profile.desired_type.value
        self.desired_walkability = profile.desired_walkability.value
        self.pet_friendly = profile.pet_friendly.required_value
        self.public_transport = profile.public_transport.required_value
        self.min_safety_score = profile.min_safety_score
        self.max_rent = profile.max_rent
        self.max_home_price = profile.max_home_price
        self.min_parks = profile.min_parks
        self.require_schools_nearby = profile.require_schools_nearby
        self.weight_safety = profile.weights.safety
        self.weight_lifestyle = profile.weights.lifestyle
        self.weight_affordability = profile.weights.affordability
        self.weight_walkability = profile.weights.walkability


class FavoriteRecord(Base):
    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "area_id", name="uq_favorites_user_area"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    area_id: Mapped[str] = mapped_column(ForeignKey("areas.id"))
    added_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    user: Mapped["UserRecord"] = relationship(back_populates="favorites")
    area: Mapped["AreaRecord"] = relationship(lazy="joined")
