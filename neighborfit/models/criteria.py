"""Structural filter handed to the storage collaborator to narrow candidates.

A filter is a conjunction of simple field predicates. The engine only builds
filters; repositories decide how to evaluate them (Python or SQL).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Operator(Enum):
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LTE = "lte"
    CONTAINS_CI = "contains"  # case-insensitive substring
    NOT_IN = "nin"


@dataclass(frozen=True)
class Predicate:
    field: str
    op: Operator
    value: Any

    def matches(self, record: Any) -> bool:
        actual = getattr(record, self.field)
        expected = self.value
        if self.op is Operator.EQ:
            return actual == expected
        if self.op is Operator.GT:
            return actual > expected
        if self.op is Operator.GTE:
            return actual >= expected
        if self.op is Operator.LTE:
            return actual <= expected
        if self.op is Operator.CONTAINS_CI:
            return str(expected).lower() in str(actual).lower()
        if self.op is Operator.NOT_IN:
            return actual not in expected
        raise ValueError(f"Unsupported operator: {self.op}")


@dataclass(frozen=True)
class StructuralFilter:
    predicates: tuple[Predicate, ...] = field(default_factory=tuple)

    def matches(self, record: Any) -> bool:
        return all(p.matches(record) for p in self.predicates)

    @property
    def fields(self) -> list[str]:
        return [p.field for p in self.predicates]

    def to_dict(self) -> dict[str, Any]:
        """Readable form for API responses, e.g. {"park_count": {"gte": 2}}."""
        out: dict[str, Any] = {}
        for p in self.predicates:
            value = p.value.value if isinstance(p.value, Enum) else p.value
            if isinstance(value, (set, frozenset, tuple)):
                value = sorted(value)
            if p.op is Operator.EQ:
                out[p.field] = value
            else:
                out.setdefault(p.field, {})[p.op.value] = value
        return out


class SortField(Enum):
    """Sortable area fields exposed to callers."""

    CITY = "city"
    NAME = "name"
    POPULATION = "population"
    VIOLENT_CRIME_RATE = "violent_crime_rate"
    SAFETY_SCORE = "safety_score"
    LIFESTYLE_SCORE = "lifestyle_score"
    PARK_COUNT = "park_count"
    SCHOOL_COUNT = "school_count"


@dataclass(frozen=True)
class SortKey:
    field: SortField
    descending: bool = False


# Safety desc, then lifestyle desc: the "best areas first" ordering
BEST_FIRST: tuple[SortKey, ...] = (
    SortKey(SortField.SAFETY_SCORE, descending=True),
    SortKey(SortField.LIFESTYLE_SCORE, descending=True),
)
