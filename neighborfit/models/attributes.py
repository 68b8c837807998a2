"""Value types shared by area records, preferences and the score deriver."""

from dataclasses import dataclass
from enum import Enum


class AreaType(Enum):
    URBAN = "Urban"
    SUBURBAN = "Suburban"
    RURAL = "Rural"


class Walkability(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class DerivedScores:
    safety_score: int  # 0-100
    lifestyle_score: int  # 0-100
