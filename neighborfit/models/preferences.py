"""User preference profile and matching weights."""

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from neighborfit.errors import ValidationError
from neighborfit.models.attributes import AreaType, Walkability

WEIGHT_TOLERANCE = Decimal("0.01")


class AreaTypePreference(Enum):
    URBAN = "Urban"
    SUBURBAN = "Suburban"
    RURAL = "Rural"
    ANY = "Any"

    @property
    def area_type(self) -> AreaType | None:
        if self is AreaTypePreference.ANY:
            return None
        return AreaType(self.value)


class WalkabilityPreference(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    ANY = "Any"

    @property
    def walkability(self) -> Walkability | None:
        if self is WalkabilityPreference.ANY:
            return None
        return Walkability(self.value)


class FeaturePreference(Enum):
    """Yes / no / don't care for a boolean area feature."""

    REQUIRED = "required"
    EXCLUDED = "excluded"
    NO_PREFERENCE = "no_preference"

    @property
    def required_value(self) -> bool | None:
        if self is FeaturePreference.REQUIRED:
            return True
        if self is FeaturePreference.EXCLUDED:
            return False
        return None

    @classmethod
    def from_bool(cls, value: bool | None) -> "FeaturePreference":
        if value is None:
            return cls.NO_PREFERENCE
        return cls.REQUIRED if value else cls.EXCLUDED


@dataclass(frozen=True)
class PreferenceWeights:
    """Four-way split of a match score. Must sum to 1.0 (+/- 0.01)."""

    safety: Decimal
    lifestyle: Decimal
    affordability: Decimal
    walkability: Decimal

    def __post_init__(self):
        for name, value in self.as_dict().items():
            if not Decimal("0") <= value <= Decimal("1"):
                raise ValidationError(f"Weight '{name}' must be between 0 and 1, got {value}")
        if abs(self.total - Decimal("1")) > WEIGHT_TOLERANCE:
            raise ValidationError(f"Weights must sum to 1.0, got {self.total}")

    @property
    def total(self) -> Decimal:
        return self.safety + self.lifestyle + self.affordability + self.walkability

    def as_dict(self) -> dict[str, Decimal]:
        return {
            "safety": self.safety,
            "lifestyle": self.lifestyle,
            "affordability": self.affordability,
            "walkability": self.walkability,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PreferenceWeights":
        try:
            return cls(**{k: Decimal(str(data[k])) for k in ("safety", "lifestyle", "affordability", "walkability")})
        except KeyError as e:
            raise ValidationError(f"Missing weight: {e.args[0]}") from e
        except ArithmeticError as e:
            raise ValidationError(f"Weights must be numbers, got {data!r}") from e


@dataclass(frozen=True)
class PreferenceProfile:
    weights: PreferenceWeights
    desired_type: AreaTypePreference = AreaTypePreference.ANY
    desired_walkability: WalkabilityPreference = WalkabilityPreference.ANY
    pet_friendly: FeaturePreference = FeaturePreference.NO_PREFERENCE
    public_transport: FeaturePreference = FeaturePreference.NO_PREFERENCE
    min_safety_score: int = 50

    # Budget
    max_rent: Decimal | None = None
    max_home_price: Decimal | None = None

    # Amenities
    min_parks: int = 0
    require_schools_nearby: bool = False

    def __post_init__(self):
        if not 0 <= self.min_safety_score <= 100:
            raise ValidationError(f"min_safety_score must be between 0 and 100, got {self.min_safety_score}")
        if self.min_parks < 0:
            raise ValidationError(f"min_parks must be non-negative, got {self.min_parks}")
        for name in ("max_rent", "max_home_price"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValidationError(f"{name} must be non-negative, got {value}")


def _optional_decimal(value) -> Decimal | None:
    return None if value is None else Decimal(str(value))


_CONVERTERS = {
    "desired_type": AreaTypePreference,
    "desired_walkability": WalkabilityPreference,
    "pet_friendly": lambda v: v if isinstance(v, FeaturePreference) else FeaturePreference.from_bool(v),
    "public_transport": lambda v: v if isinstance(v, FeaturePreference) else FeaturePreference.from_bool(v),
    "min_safety_score": int,
    "max_rent": _optional_decimal,
    "max_home_price": _optional_decimal,
    "min_parks": int,
    "require_schools_nearby": bool,
}


def merge_preferences(profile: PreferenceProfile, changes: dict) -> PreferenceProfile:
    """Apply a partial update and return a new, fully validated profile.

    Weights merge key by key; the merged set must still sum to 1.0.
    Unknown keys are rejected.
    """
    unknown = set(changes) - set(_CONVERTERS) - {"weights"}
    if unknown:
        raise ValidationError(f"Unknown preference fields: {', '.join(sorted(unknown))}")

    fields = {}
    for name, value in changes.items():
        if name == "weights":
            continue
        try:
            fields[name] = _CONVERTERS[name](value)
        except (TypeError, ValueError, ArithmeticError) as e:
            raise ValidationError(f"Invalid value for {name}: {value!r}") from e

    weights = profile.weights
    if changes.get("weights"):
        weights = PreferenceWeights.from_dict({**weights.as_dict(), **changes["weights"]})

    return replace(profile, weights=weights, **fields)


def default_profile(weights: dict, min_safety_score: int = 50) -> PreferenceProfile:
    """Profile given to a newly registered user, with configured default weights."""
    return PreferenceProfile(
        weights=PreferenceWeights.from_dict(weights),
        min_safety_score=min_safety_score,
    )
