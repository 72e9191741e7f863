from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class Interval(BaseModel, Generic[T]):
    """Closed interval ``[lower, upper]`` over an ordered bound type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    lower: T = Field(description="Inclusive lower bound")
    upper: T = Field(description="Inclusive upper bound")

    @model_validator(mode="after")
    def validate_order(self) -> "Interval[T]":
        if not self.lower <= self.upper:
            raise ValueError(
                f"interval is malformed: lower ({self.lower!r}) "
                f"must be <= upper ({self.upper!r})"
            )
        return self

    @classmethod
    def of(cls, lower: Any, upper: Any) -> "Interval[Any]":
        return cls(lower=lower, upper=upper)

    @classmethod
    def unchecked(cls, lower: Any, upper: Any) -> "Interval[Any]":
        """Build an interval without validating ``lower <= upper``.

        Only use this when the caller already guarantees the ordering.
        """
        return cls.model_construct(lower=lower, upper=upper)

    @property
    def is_point(self) -> bool:
        return self.lower == self.upper

    def contains(self, value: Any) -> bool:
        return self.lower <= value <= self.upper

    def overlaps(self, other: "Interval[Any]") -> bool:
        return self.lower <= other.upper and other.lower <= self.upper

    def intersection(self, other: "Interval[Any]") -> "Interval[Any] | None":
        lo = max(self.lower, other.lower)
        hi = min(self.upper, other.upper)
        if lo > hi:
            return None
        return Interval.unchecked(lo, hi)

    def __str__(self) -> str:
        return f"[{self.lower!r}, {self.upper!r}]"


class RemovalShape(str, Enum):
    """How a removed range sits against one stored interval."""

    COVERED = "covered"
    INTERIOR = "interior"
    LEFT_OVERHANG = "left_overhang"
    RIGHT_OVERHANG = "right_overhang"
    TOUCH_LOWER = "touch_lower"
    TOUCH_UPPER = "touch_upper"


class OverlapShape(str, Enum):
    """Relative ordering of the endpoints of two overlapping intervals."""

    EQUAL = "equal"
    NESTED = "nested"
    LEFT_OVERHANG = "left_overhang"
    RIGHT_OVERHANG = "right_overhang"
    STAGGERED_LEFT = "staggered_left"
    STAGGERED_RIGHT = "staggered_right"


class IntervalWeighting(str, Enum):
    SPAN = "span"
    UNIFORM = "uniform"


class SamplingOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(
        default=1000,
        ge=1,
        description="Draws attempted before giving up on a single value",
    )
    weighting: IntervalWeighting = Field(
        default=IntervalWeighting.SPAN,
        description="How the interval to draw from is chosen",
    )


DEFAULT_SAMPLING_OPTIONS = SamplingOptions()
