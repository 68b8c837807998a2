"""Tests for building structural filters from preferences."""

from decimal import Decimal

from neighborfit.engine.criteria import build_criteria, build_search_criteria
from neighborfit.models.attributes import AreaType, Walkability
from neighborfit.models.criteria import Operator, Predicate
from neighborfit.models.preferences import (
    AreaTypePreference,
    FeaturePreference,
    PreferenceProfile,
    WalkabilityPreference,
)


class TestBuildCriteria:
    def test_open_profile_has_no_predicates(self, open_profile):
        assert build_criteria(open_profile).predicates == ()

    def test_default_min_safety_adds_safety_predicate(self, default_weights):
        profile = PreferenceProfile(weights=default_weights)
        criteria = build_criteria(profile)
        assert criteria.predicates == (Predicate("safety_score", Operator.GTE, 50),)

    def test_every_preference_maps_to_a_predicate(self, default_weights):
        profile = PreferenceProfile(
            weights=default_weights,
            desired_type=AreaTypePreference.SUBURBAN,
            desired_walkability=WalkabilityPreference.HIGH,
            pet_friendly=FeaturePreference.REQUIRED,
            public_transport=FeaturePreference.EXCLUDED,
            min_safety_score=60,
            min_parks=2,
            require_schools_nearby=True,
        )
        criteria = build_criteria(profile, city="mumbai")
        assert criteria.predicates == (
            Predicate("type", Operator.EQ, AreaType.SUBURBAN),
            Predicate("walkability", Operator.EQ, Walkability.HIGH),
            Predicate("pet_friendly", Operator.EQ, True),
            Predicate("public_transport_access", Operator.EQ, False),
            Predicate("park_count", Operator.GTE, 2),
            Predicate("school_count", Operator.GT, 0),
            Predicate("safety_score", Operator.GTE, 60),
            Predicate("city", Operator.CONTAINS_CI, "mumbai"),
        )

    def test_no_preference_features_are_omitted(self, open_profile):
        criteria = build_criteria(open_profile)
        assert "pet_friendly" not in criteria.fields
        assert "public_transport_access" not in criteria.fields

    def test_blank_city_is_ignored(self, open_profile):
        assert build_criteria(open_profile, city="  ").predicates == ()

    def test_to_dict(self, default_weights):
        profile = PreferenceProfile(
            weights=default_weights,
            desired_type=AreaTypePreference.URBAN,
            min_parks=2,
        )
        assert build_criteria(profile, city="Ben").to_dict() == {
            "type": "Urban",
            "park_count": {"gte": 2},
            "safety_score": {"gte": 50},
            "city": {"contains": "Ben"},
        }


class TestCityMatching:
    def test_city_substring_is_case_insensitive(self, open_profile, make_area):
        criteria = build_criteria(open_profile, city="GALURU")
        assert criteria.matches(make_area(city="Bengaluru"))
        assert not criteria.matches(make_area(city="Mumbai"))


class TestBuildSearchCriteria:
    def test_empty(self):
        assert build_search_criteria().predicates == ()

    def test_max_crime_rate(self, make_area):
        criteria = build_search_criteria(max_crime_rate=Decimal("25"))
        assert criteria.matches(make_area(violent_crime_rate=Decimal("20")))
        assert not criteria.matches(make_area(violent_crime_rate=Decimal("30")))

    def test_zero_thresholds_are_omitted(self):
        criteria = build_search_criteria(min_parks=0, min_safety_score=0)
        assert criteria.predicates == ()
