"""Shared test fixtures.

Reference area: Koramangala, Bengaluru. Violent crime rate 20, chargesheeting
60 -> safety 70. Transit, not pet friendly, 3 parks, 2 schools, high
walkability -> lifestyle 65.
Reference profile: default weights 0.3 / 0.3 / 0.2 / 0.2, no filters.
"""

import asyncio
from decimal import Decimal

import pytest

from neighborfit.data.memory import InMemoryAccountRepository, InMemoryAreaRepository
from neighborfit.models.area import Area
from neighborfit.models.attributes import AreaType, Walkability
from neighborfit.models.preferences import PreferenceProfile, PreferenceWeights


@pytest.fixture
def make_area():
    """Factory for areas; keyword overrides on top of the reference area."""
    def factory(**overrides) -> Area:
        fields = dict(
            id="koramangala",
            city="Bengaluru",
            name="Koramangala",
            type=AreaType.URBAN,
            population=350_000,
            violent_crime_count=70,
            violent_crime_rate=Decimal("20"),
            chargesheeting_rate=Decimal("60"),
            public_transport_access=True,
            park_count=3,
            school_count=2,
            pet_friendly=False,
            walkability=Walkability.HIGH,
        )
        fields.update(overrides)
        return Area(**fields)
    return factory


@pytest.fixture
def area_with_scores(make_area):
    """Factory for an area with exact safety / lifestyle scores.

    Lifestyle must be a multiple of 5 (built from parks only).
    """
    def factory(area_id: str, safety: int, lifestyle: int, **overrides) -> Area:
        assert lifestyle % 5 == 0
        if safety >= 50:
            crime_rate, chargesheeting = Decimal("0"), Decimal(2 * safety - 100)
        else:
            crime_rate, chargesheeting = Decimal(100 - 2 * safety), Decimal("0")
        fields = dict(
            id=area_id,
            name=area_id.title(),
            violent_crime_rate=crime_rate,
            chargesheeting_rate=chargesheeting,
            public_transport_access=False,
            pet_friendly=False,
            park_count=lifestyle // 5,
            school_count=0,
            walkability=Walkability.LOW,
        )
        fields.update(overrides)
        return make_area(**fields)
    return factory


@pytest.fixture
def default_weights() -> PreferenceWeights:
    return PreferenceWeights(
        safety=Decimal("0.3"),
        lifestyle=Decimal("0.3"),
        affordability=Decimal("0.2"),
        walkability=Decimal("0.2"),
    )


@pytest.fixture
def open_profile(default_weights) -> PreferenceProfile:
    """No filters at all: every area is a candidate."""
    return PreferenceProfile(weights=default_weights, min_safety_score=0)


@pytest.fixture
def sample_areas(make_area) -> list[Area]:
    """Five areas across two cities with distinct scores."""
    return [
        # safety 70, lifestyle 65
        make_area(),
        # safety 85, lifestyle 100 (capped)
        make_area(
            id="indiranagar", name="Indiranagar",
            violent_crime_rate=Decimal("10"), chargesheeting_rate=Decimal("80"),
            pet_friendly=True, park_count=6, school_count=4,
            average_rent=Decimal("30000"),
        ),
        # safety 45, lifestyle 10
        make_area(
            id="whitefield", name="Whitefield", type=AreaType.SUBURBAN,
            violent_crime_rate=Decimal("50"), chargesheeting_rate=Decimal("40"),
            public_transport_access=False, park_count=1, school_count=1,
            walkability=Walkability.LOW,
        ),
        # safety 75, lifestyle 60
        make_area(
            id="bandra", city="Mumbai", name="Bandra",
            violent_crime_rate=Decimal("30"), chargesheeting_rate=Decimal("80"),
            pet_friendly=True, park_count=2, school_count=1,
            walkability=Walkability.MEDIUM,
        ),
        # safety 60, lifestyle 15
        make_area(
            id="alibag", city="Mumbai", name="Alibag", type=AreaType.RURAL,
            violent_crime_rate=Decimal("40"), chargesheeting_rate=Decimal("60"),
            public_transport_access=False, park_count=0, school_count=0,
            pet_friendly=True, walkability=Walkability.LOW,
        ),
    ]


@pytest.fixture
def area_repo(sample_areas) -> InMemoryAreaRepository:
    return InMemoryAreaRepository(sample_areas)


@pytest.fixture
def account_repo(area_repo, open_profile) -> InMemoryAccountRepository:
    repo = InMemoryAccountRepository(area_repo)
    asyncio.run(repo.register("asha", open_profile))
    return repo
