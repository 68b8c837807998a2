"""Tests for preference profiles, weight validation and partial updates."""

from decimal import Decimal

import pytest

from neighborfit.errors import ValidationError
from neighborfit.models.preferences import (
    AreaTypePreference,
    FeaturePreference,
    PreferenceProfile,
    PreferenceWeights,
    default_profile,
    merge_preferences,
)


class TestPreferenceWeights:
    def test_valid_weights(self, default_weights):
        assert default_weights.total == Decimal("1.0")

    def test_within_tolerance_is_accepted(self):
        weights = PreferenceWeights(
            safety=Decimal("0.33"), lifestyle=Decimal("0.33"),
            affordability=Decimal("0.17"), walkability=Decimal("0.16"),
        )
        assert weights.total == Decimal("0.99")

    def test_sum_off_by_more_than_tolerance_rejected(self):
        with pytest.raises(ValidationError, match="sum to 1.0"):
            PreferenceWeights(
                safety=Decimal("0.5"), lifestyle=Decimal("0.3"),
                affordability=Decimal("0.2"), walkability=Decimal("0.2"),
            )

    def test_weight_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            PreferenceWeights(
                safety=Decimal("1.2"), lifestyle=Decimal("-0.2"),
                affordability=Decimal("0"), walkability=Decimal("0"),
            )

    def test_from_dict_missing_key(self):
        with pytest.raises(ValidationError, match="walkability"):
            PreferenceWeights.from_dict({"safety": 0.5, "lifestyle": 0.3, "affordability": 0.2})

    def test_from_dict_accepts_floats(self):
        weights = PreferenceWeights.from_dict(
            {"safety": 0.3, "lifestyle": 0.3, "affordability": 0.2, "walkability": 0.2}
        )
        assert weights.safety == Decimal("0.3")


class TestPreferenceProfile:
    def test_min_safety_out_of_range(self, default_weights):
        with pytest.raises(ValidationError):
            PreferenceProfile(weights=default_weights, min_safety_score=120)

    def test_negative_budget(self, default_weights):
        with pytest.raises(ValidationError):
            PreferenceProfile(weights=default_weights, max_rent=Decimal("-1"))

    def test_feature_preference_from_bool(self):
        assert FeaturePreference.from_bool(True) is FeaturePreference.REQUIRED
        assert FeaturePreference.from_bool(False) is FeaturePreference.EXCLUDED
        assert FeaturePreference.from_bool(None) is FeaturePreference.NO_PREFERENCE

    def test_default_profile_uses_given_weights(self):
        profile = default_profile(
            {"safety": "0.4", "lifestyle": "0.2", "affordability": "0.2", "walkability": "0.2"},
            min_safety_score=40,
        )
        assert profile.weights.safety == Decimal("0.4")
        assert profile.min_safety_score == 40
        assert profile.desired_type is AreaTypePreference.ANY


class TestMergePreferences:
    def test_partial_update(self, open_profile):
        updated = merge_preferences(open_profile, {"desired_type": "Urban", "pet_friendly": True})
        assert updated.desired_type is AreaTypePreference.URBAN
        assert updated.pet_friendly is FeaturePreference.REQUIRED
        assert updated.weights == open_profile.weights

    def test_null_clears_feature_preference(self, open_profile):
        required = merge_preferences(open_profile, {"public_transport": True})
        cleared = merge_preferences(required, {"public_transport": None})
        assert cleared.public_transport is FeaturePreference.NO_PREFERENCE

    def test_weights_merge_key_by_key(self, open_profile):
        updated = merge_preferences(open_profile, {"weights": {"safety": "0.4", "lifestyle": "0.2"}})
        assert updated.weights.safety == Decimal("0.4")
        assert updated.weights.affordability == Decimal("0.2")

    def test_invalid_merged_weights_rejected(self, open_profile):
        with pytest.raises(ValidationError):
            merge_preferences(open_profile, {"weights": {"safety": "0.9"}})

    def test_unknown_field_rejected(self, open_profile):
        with pytest.raises(ValidationError, match="Unknown"):
            merge_preferences(open_profile, {"favourite_colour": "blue"})

    def test_bad_enum_value_rejected(self, open_profile):
        with pytest.raises(ValidationError):
            merge_preferences(open_profile, {"desired_walkability": "Extreme"})
