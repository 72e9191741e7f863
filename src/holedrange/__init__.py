"""holedrange: ordered value domains built from closed intervals with holes."""

from holedrange.algebra import (
    classify_overlap,
    classify_removal,
    split_overlap,
    subtract_interval,
)
from holedrange.capabilities import (
    BoundRandomizer,
    BoundSplitter,
    BoundStepper,
    register_randomizer,
    register_splitter,
    register_stepper,
)
from holedrange.domain import Domain, HoledRange
from holedrange.errors import (
    ArithmeticDomainError,
    CapabilityError,
    HoledRangeError,
    InvariantViolationError,
    SamplingExhaustedError,
)
from holedrange.models import (
    DEFAULT_SAMPLING_OPTIONS,
    Interval,
    IntervalWeighting,
    OverlapShape,
    RemovalShape,
    SamplingOptions,
)
from holedrange.trace import TraceStep

__all__ = [
    "DEFAULT_SAMPLING_OPTIONS",
    "ArithmeticDomainError",
    "BoundRandomizer",
    "BoundSplitter",
    "BoundStepper",
    "CapabilityError",
    "Domain",
    "HoledRange",
    "HoledRangeError",
    "Interval",
    "IntervalWeighting",
    "InvariantViolationError",
    "OverlapShape",
    "RemovalShape",
    "SamplingExhaustedError",
    "SamplingOptions",
    "TraceStep",
    "classify_overlap",
    "classify_removal",
    "register_randomizer",
    "register_splitter",
    "register_stepper",
    "split_overlap",
    "subtract_interval",
]
