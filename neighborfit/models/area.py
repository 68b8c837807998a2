"""Area (neighborhood) records as seen by the matching engine."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from neighborfit.engine.scores import derive_scores
from neighborfit.errors import ValidationError
from neighborfit.models.attributes import AreaType, DerivedScores, Walkability


@dataclass(frozen=True)
class Area:
    id: str
    city: str
    name: str
    type: AreaType
    population: int
    violent_crime_count: int
    violent_crime_rate: Decimal  # per 100K
    chargesheeting_rate: Decimal  # 0-100
    public_transport_access: bool
    park_count: int
    school_count: int
    pet_friendly: bool
    walkability: Walkability

    # Unknown for most imported areas
    average_rent: Decimal | None = None
    average_home_price: Decimal | None = None

    def __post_init__(self):
        if not 0 <= self.chargesheeting_rate <= 100:
            raise ValidationError(f"chargesheeting_rate must be between 0 and 100, got {self.chargesheeting_rate}")
        for name in ("population", "violent_crime_count", "violent_crime_rate", "park_count", "school_count"):
            value = getattr(self, name)
            if value < 0:
                raise ValidationError(f"{name} must be non-negative, got {value}")

    @property
    def scores(self) -> DerivedScores:
        # Recomputed on every read so it always tracks the raw attributes.
        return derive_scores(self)

    @property
    def safety_score(self) -> int:
        return self.scores.safety_score

    @property
    def lifestyle_score(self) -> int:
        return self.scores.lifestyle_score

    @property
    def full_location(self) -> str:
        return f"{self.name}, {self.city}"


@dataclass(frozen=True)
class Favorite:
    user_id: str
    area: Area
    added_at: datetime
