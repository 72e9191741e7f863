"""Opt-in capabilities for bound types.

A bound type only needs to be ordered and hashable to live in a ``Domain``.
Everything else is layered on through independent capabilities, each with
its own registry:

- ``BoundSplitter``: distance and advance, used by ``amplitude``/``split``.
- ``BoundRandomizer``: random draws, used by ``random_element``.
- ``BoundStepper``: successor/predecessor for discrete types, used by
  iteration, single-value detection and the discrete normalizer.

Lookups walk the value's MRO, so subclasses inherit the capabilities of
their bases unless they register their own.
"""

import logging
import math
import random
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from holedrange.errors import CapabilityError
from holedrange.strings import (
    advance_string,
    levenshtein,
    random_string,
    random_string_in,
)

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

INT64_MAX = (1 << 63) - 1


class BoundSplitter(ABC, Generic[T]):
    @abstractmethod
    def distance(self, start: T, end: T) -> float:
        """Distance travelled going from ``start`` to ``end``."""
        ...

    @abstractmethod
    def advance(self, value: T, distance: float) -> T:
        """Value reached by moving ``distance`` away from ``value``."""
        ...


class BoundRandomizer(ABC, Generic[T]):
    @abstractmethod
    def random_value(self, rng: random.Random) -> T | None:
        """Unconstrained random value of the bound type."""
        ...

    @abstractmethod
    def random_in(self, lower: T, upper: T, rng: random.Random) -> T | None:
        """Random value in ``[lower, upper]``, or ``None`` on a failed draw."""
        ...


class BoundStepper(ABC, Generic[T]):
    @abstractmethod
    def successor(self, value: T) -> T | None:
        """Next value, or ``None`` past the largest representable value."""
        ...

    @abstractmethod
    def predecessor(self, value: T) -> T | None:
        """Previous value, or ``None`` below the smallest one."""
        ...


# ---------------------------------------------------------------------------
# Built-in capabilities
# ---------------------------------------------------------------------------


class IntSplitter(BoundSplitter[int]):
    def distance(self, start: int, end: int) -> float:
        return float(end - start)

    def advance(self, value: int, distance: float) -> int:
        return int(value + distance)


class FloatSplitter(BoundSplitter[float]):
    def distance(self, start: float, end: float) -> float:
        return end - start

    def advance(self, value: float, distance: float) -> float:
        return value + distance


class BoolSplitter(BoundSplitter[bool]):
    def distance(self, start: bool, end: bool) -> float:
        return 1.0 if start != end else 0.0

    def advance(self, value: bool, distance: float) -> bool:
        if int(distance) % 2 == 0:
            return value
        return not value


class StrSplitter(BoundSplitter[str]):
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def distance(self, start: str, end: str) -> float:
        return float(levenshtein(start, end))

    def advance(self, value: str, distance: float) -> str:
        return advance_string(value, distance, self.rng)


class IntRandomizer(BoundRandomizer[int]):
    def random_value(self, rng: random.Random) -> int:
        return rng.randint(0, INT64_MAX) * rng.choice((1, -1))

    def random_in(self, lower: int, upper: int, rng: random.Random) -> int:
        return rng.randint(lower, upper)


class FloatRandomizer(BoundRandomizer[float]):
    def random_value(self, rng: random.Random) -> float:
        return rng.uniform(0.0, sys.float_info.max) * rng.choice((1.0, -1.0))

    def random_in(
        self, lower: float, upper: float, rng: random.Random
    ) -> float | None:
        value = rng.uniform(lower, upper)
        if not math.isfinite(value):
            return None
        return value


class BoolRandomizer(BoundRandomizer[bool]):
    def random_value(self, rng: random.Random) -> bool:
        return rng.random() < 0.5

    def random_in(self, lower: bool, upper: bool, rng: random.Random) -> bool:
        if lower == upper:
            return lower
        return self.random_value(rng)


class StrRandomizer(BoundRandomizer[str]):
    def random_value(self, rng: random.Random) -> str:
        return random_string(rng)

    def random_in(self, lower: str, upper: str, rng: random.Random) -> str:
        return random_string_in(lower, upper, rng)


class IntStepper(BoundStepper[int]):
    def successor(self, value: int) -> int:
        return value + 1

    def predecessor(self, value: int) -> int:
        return value - 1


class BoolStepper(BoundStepper[bool]):
    def successor(self, value: bool) -> bool | None:
        return None if value else True

    def predecessor(self, value: bool) -> bool | None:
        return False if value else None


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

SPLITTER_REGISTRY: dict[type, BoundSplitter[Any]] = {}
RANDOMIZER_REGISTRY: dict[type, BoundRandomizer[Any]] = {}
STEPPER_REGISTRY: dict[type, BoundStepper[Any]] = {}


def register_splitter(bound_type: type, splitter: BoundSplitter[Any]) -> None:
    SPLITTER_REGISTRY[bound_type] = splitter
    _LOGGER.debug(
        "registered splitter %s for %s",
        type(splitter).__name__,
        bound_type.__qualname__,
    )


def register_randomizer(
    bound_type: type, randomizer: BoundRandomizer[Any]
) -> None:
    RANDOMIZER_REGISTRY[bound_type] = randomizer
    _LOGGER.debug(
        "registered randomizer %s for %s",
        type(randomizer).__name__,
        bound_type.__qualname__,
    )


def register_stepper(bound_type: type, stepper: BoundStepper[Any]) -> None:
    STEPPER_REGISTRY[bound_type] = stepper
    _LOGGER.debug(
        "registered stepper %s for %s",
        type(stepper).__name__,
        bound_type.__qualname__,
    )


def _lookup(registry: dict[type, T], value: Any) -> T | None:
    for klass in type(value).__mro__:
        found = registry.get(klass)
        if found is not None:
            return found
    return None


def find_splitter(value: Any) -> BoundSplitter[Any] | None:
    return _lookup(SPLITTER_REGISTRY, value)


def find_randomizer(value: Any) -> BoundRandomizer[Any] | None:
    return _lookup(RANDOMIZER_REGISTRY, value)


def find_stepper(value: Any) -> BoundStepper[Any] | None:
    return _lookup(STEPPER_REGISTRY, value)


def splitter_for(value: Any) -> BoundSplitter[Any]:
    splitter = find_splitter(value)
    if splitter is None:
        raise CapabilityError(value, "distance/advance splitting")
    return splitter


def randomizer_for(value: Any) -> BoundRandomizer[Any]:
    randomizer = find_randomizer(value)
    if randomizer is None:
        raise CapabilityError(value, "random sampling")
    return randomizer


def shared_stepper(values: Iterable[Any]) -> BoundStepper[Any] | None:
    """Stepper used by every value, or ``None`` if they do not agree."""
    stepper: BoundStepper[Any] | None = None
    for value in values:
        found = find_stepper(value)
        if found is None:
            return None
        if stepper is None:
            stepper = found
        elif found is not stepper:
            return None
    return stepper


def _register_builtins() -> None:
    """Populate the registries with the built-in bound types."""
    register_splitter(int, IntSplitter())
    register_splitter(float, FloatSplitter())
    register_splitter(bool, BoolSplitter())
    register_splitter(str, StrSplitter())
    register_randomizer(int, IntRandomizer())
    register_randomizer(float, FloatRandomizer())
    register_randomizer(bool, BoolRandomizer())
    register_randomizer(str, StrRandomizer())
    register_stepper(int, IntStepper())
    register_stepper(bool, BoolStepper())


_register_builtins()
