"""Tests for side-by-side area comparison."""

from decimal import Decimal

import pytest

from neighborfit.engine.comparison import compare_areas
from neighborfit.errors import ValidationError
from neighborfit.models.attributes import Walkability


class TestCompareAreas:
    def test_best_safety_is_the_safer_area(self, area_with_scores):
        first = area_with_scores("north", safety=70, lifestyle=40, walkability=Walkability.MEDIUM)
        second = area_with_scores("south", safety=85, lifestyle=30, walkability=Walkability.LOW)
        result = compare_areas([first, second])
        assert result.best_safety.area_id == "south"
        assert result.best_lifestyle.area_id == "north"
        assert result.most_walkable == []

    def test_ties_go_to_first_in_input_order(self, area_with_scores):
        a = area_with_scores("a", safety=80, lifestyle=50)
        b = area_with_scores("b", safety=80, lifestyle=50)
        assert compare_areas([a, b]).best_safety.area_id == "a"
        assert compare_areas([b, a]).best_lifestyle.area_id == "b"

    def test_per_area_snapshot(self, make_area):
        result = compare_areas([make_area(), make_area(id="other", name="Other")])
        snapshot = result.per_area[0]
        assert snapshot.area_id == "koramangala"
        assert snapshot.name == "Koramangala, Bengaluru"
        assert snapshot.population == 350_000
        assert snapshot.crime_rate == Decimal("20")
        assert snapshot.safety_score == 70
        assert snapshot.lifestyle_score == 65
        assert snapshot.parks == 3
        assert snapshot.schools == 2
        assert snapshot.walkability is Walkability.HIGH
        assert snapshot.public_transport is True
        assert snapshot.pet_friendly is False

    def test_walkable_and_pet_friendly_lists(self, sample_areas):
        result = compare_areas(sample_areas)
        assert [m.area_id for m in result.most_walkable] == ["koramangala", "indiranagar"]
        assert [m.area_id for m in result.pet_friendly] == ["indiranagar", "bandra", "alibag"]

    def test_requires_two_distinct_areas(self, make_area):
        area = make_area()
        with pytest.raises(ValidationError):
            compare_areas([area])
        with pytest.raises(ValidationError):
            compare_areas([area, area])
