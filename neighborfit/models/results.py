from dataclasses import dataclass, field
from decimal import Decimal

from neighborfit.models.area import Area
from neighborfit.models.attributes import Walkability
from neighborfit.models.criteria import StructuralFilter


@dataclass(frozen=True)
class MatchBreakdown:
    """Weighted contribution of each term to the total (rounded half up)."""

    safety: int = 0
    lifestyle: int = 0
    walkability: int = 0
    affordability: int = 0


@dataclass(frozen=True)
class MatchResult:
    area: Area
    total_score: int  # 0-100
    breakdown: MatchBreakdown = field(default_factory=MatchBreakdown)


@dataclass(frozen=True)
class RankedMatches:
    results: list[MatchResult] = field(default_factory=list)
    total_candidates: int = 0
    applied_filters: StructuralFilter = field(default_factory=StructuralFilter)


@dataclass(frozen=True)
class AreaMetrics:
    """Flat side-by-side snapshot used by area comparison."""

    area_id: str
    name: str
    population: int
    crime_rate: Decimal
    safety_score: int
    lifestyle_score: int
    parks: int
    schools: int
    walkability: Walkability
    pet_friendly: bool
    public_transport: bool


@dataclass(frozen=True)
class ComparisonResult:
    per_area: list[AreaMetrics]
    best_safety: AreaMetrics
    best_lifestyle: AreaMetrics
    most_walkable: list[AreaMetrics] = field(default_factory=list)
    pet_friendly: list[AreaMetrics] = field(default_factory=list)


@dataclass(frozen=True)
class RecommendationBasis:
    favorite_count: int
    avg_safety: int
    avg_lifestyle: int


@dataclass(frozen=True)
class RecommendationResult:
    results: list[Area] = field(default_factory=list)
    based_on: RecommendationBasis | None = None
    reason: str | None = None  # set when no recommendation could be made


@dataclass(frozen=True)
class AreaStats:
    """Population-wide aggregates computed by the storage collaborator."""

    total_areas: int = 0
    avg_population: float | None = None
    avg_crime_rate: float | None = None
    avg_safety_score: float | None = None
    avg_lifestyle_score: float | None = None
    cities: list[str] = field(default_factory=list)
    by_walkability: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AreaPage:
    areas: list[Area] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
