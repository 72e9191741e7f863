"""The ``Domain`` value type: closed intervals minus punched-out values."""

from __future__ import annotations

import itertools
import logging
import numbers
import random
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from holedrange.algebra import split_overlap, subtract_interval
from holedrange.capabilities import BoundStepper, splitter_for
from holedrange.errors import CapabilityError
from holedrange.models import (
    DEFAULT_SAMPLING_OPTIONS,
    Interval,
    SamplingOptions,
)
from holedrange.normalize import discrete_stepper, normalize
from holedrange.sampling import draw_value
from holedrange.splitting import split_bounds
from holedrange.trace import TraceStep
from holedrange.transforms import map_storage

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
Q = TypeVar("Q")

_VALUE_COLLECTIONS = (list, set, frozenset)


def _range_intervals(values: range) -> list[Interval[int]]:
    if values.step != 1:
        raise ValueError(f"only unit-step ranges are supported, got {values}")
    if len(values) == 0:
        return []
    return [Interval.unchecked(values.start, values[-1])]


class Domain(Generic[T]):
    """Subset of an ordered type as closed intervals with excluded values.

    Storage is kept in canonical form after every mutation: intervals sorted
    by lower bound, pairwise disjoint and non-adjacent, and exclusions only
    for values that a stored interval would otherwise contain. Methods named
    like Python's ``set`` API mutate in place (``update``,
    ``intersection_update``...) or return a new domain (``union``,
    ``intersection``...); operators follow the same convention as ``set``.
    """

    __hash__ = None

    def __init__(
        self,
        intervals: Iterable[Interval[T]] = (),
        excluded: Iterable[T] = (),
    ) -> None:
        self._intervals: list[Interval[T]] = list(intervals)
        self._excluded: set[T] = set(excluded)
        self._normalize()

    @classmethod
    def of(cls, lower: T, upper: T) -> Domain[T]:
        """Domain over ``[lower, upper]``, validating the bound order."""
        return cls([Interval.of(lower, upper)])

    @classmethod
    def of_value(cls, value: T) -> Domain[T]:
        return cls([Interval.unchecked(value, value)])

    @classmethod
    def of_interval(cls, interval: Interval[T]) -> Domain[T]:
        return cls([interval])

    @classmethod
    def unchecked(cls, lower: T, upper: T) -> Domain[T]:
        """Domain over ``[lower, upper]`` trusting ``lower <= upper``."""
        return cls([Interval.unchecked(lower, upper)])

    @classmethod
    def from_range(cls, values: range) -> Domain[int]:
        return cls(_range_intervals(values))

    def copy(self) -> Domain[T]:
        clone = type(self).__new__(type(self))
        clone._intervals = list(self._intervals)
        clone._excluded = set(self._excluded)
        return clone

    __copy__ = copy

    def _normalize(self) -> None:
        self._intervals, self._excluded = normalize(
            self._intervals, self._excluded
        )

    # -- queries -----------------------------------------------------------

    @property
    def intervals(self) -> tuple[Interval[T], ...]:
        return tuple(self._intervals)

    @property
    def excluded(self) -> frozenset[T]:
        return frozenset(self._excluded)

    @property
    def interval_count(self) -> int:
        return len(self._intervals)

    @property
    def lower_bound(self) -> T | None:
        if not self._intervals:
            return None
        return min(interval.lower for interval in self._intervals)

    @property
    def upper_bound(self) -> T | None:
        if not self._intervals:
            return None
        return max(interval.upper for interval in self._intervals)

    @property
    def is_empty(self) -> bool:
        return not self._intervals

    def __bool__(self) -> bool:
        return bool(self._intervals)

    @property
    def is_single_value(self) -> bool:
        """Whether exactly one value is contained.

        Generic bounds only qualify as a single point interval. Discrete
        bounds also qualify when excluded values leave a single survivor,
        e.g. ``[1, 2]`` without ``2``.
        """
        if not self._intervals:
            return False
        lower, upper = self.lower_bound, self.upper_bound
        if lower == upper:
            return lower not in self._excluded
        stepper = self._stepper()
        if stepper is None:
            return False
        return len(list(itertools.islice(self._walk(stepper), 2))) == 1

    @property
    def single_value(self) -> T | None:
        if not self.is_single_value:
            return None
        lower = self.lower_bound
        if lower == self.upper_bound:
            return lower
        stepper = self._stepper()
        assert stepper is not None
        return next(self._walk(stepper))

    def contains(self, value: T) -> bool:
        if value in self._excluded:
            return False
        for interval in self._intervals:
            if interval.contains(value):
                return True
        return False

    def __contains__(self, value: object) -> bool:
        return self.contains(value)

    def overlaps(self, other: Interval[T] | Domain[T] | range) -> bool:
        """Whether any stored interval meets ``other``'s intervals.

        Purely geometric: excluded values are ignored.
        """
        return any(
            stored.overlaps(candidate)
            for candidate in self._intervals_of(other)
            for stored in self._intervals
        )

    @staticmethod
    def _intervals_of(
        other: Interval[Any] | Domain[Any] | range,
    ) -> list[Interval[Any]]:
        if isinstance(other, Domain):
            return other._intervals
        if isinstance(other, Interval):
            return [other]
        if isinstance(other, range):
            return _range_intervals(other)
        raise TypeError(
            f"expected Interval, Domain or range, got {type(other).__name__}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return (
            self._excluded == other._excluded
            and len(self._intervals) == len(other._intervals)
            and set(self._intervals) == set(other._intervals)
        )

    def __repr__(self) -> str:
        spans = ", ".join(str(interval) for interval in self._intervals)
        holes = ", ".join(sorted(repr(value) for value in self._excluded))
        return f"Domain([{spans}], excluded={{{holes}}})"

    # -- mutation ----------------------------------------------------------

    def append(self, item: T | Interval[T] | Domain[T] | range) -> None:
        """Add a value, an interval or another domain to this one."""
        if isinstance(item, Domain):
            self.update(item)
            return
        if isinstance(item, range):
            self.update(Domain(_range_intervals(item)))
            return
        if isinstance(item, Interval):
            self._excluded = {
                value for value in self._excluded if not item.contains(value)
            }
            self._intervals.append(item)
        else:
            self._excluded.discard(item)
            self._intervals.append(Interval.unchecked(item, item))
        self._normalize()

    def remove(
        self, item: T | Iterable[T] | Interval[T] | Domain[T] | range
    ) -> None:
        """Punch a value, several values, an interval or a domain out.

        Lists, sets and frozensets are read as several values; a tuple is a
        single value.
        """
        if isinstance(item, Domain):
            self.difference_update(item)
            return
        if isinstance(item, range):
            for removed in _range_intervals(item):
                self._remove_interval(removed)
            return
        if isinstance(item, Interval):
            self._remove_interval(item)
            return
        if isinstance(item, _VALUE_COLLECTIONS):
            self._excluded.update(item)
        else:
            self._excluded.add(item)
        self._normalize()

    def _remove_interval(self, removed: Interval[T]) -> None:
        kept: list[Interval[T]] = []
        for stored in self._intervals:
            if not stored.overlaps(removed):
                kept.append(stored)
                continue
            pieces, holes = subtract_interval(stored, removed)
            kept.extend(pieces)
            self._excluded.update(holes)
        self._intervals = kept
        self._normalize()

    def _include_value(self, value: T) -> None:
        self._excluded.discard(value)
        if not self.contains(value):
            self._intervals.append(Interval.unchecked(value, value))
        self._normalize()

    def _exclude_value(self, value: T) -> None:
        self._excluded.add(value)
        self._normalize()

    # -- set algebra -------------------------------------------------------

    def update(self, other: Domain[T]) -> None:
        """In-place union; a hole survives only if neither side has it."""
        if other is self:
            return
        holes = {
            value for value in self._excluded if not other.contains(value)
        }
        holes.update(
            value for value in other._excluded if not self.contains(value)
        )
        self._intervals.extend(other._intervals)
        self._excluded = holes
        self._normalize()

    def intersection_update(self, other: Domain[T]) -> None:
        overlaps: list[Interval[T]] = []
        for stored in self._intervals:
            for candidate in other._intervals:
                shared = stored.intersection(candidate)
                if shared is not None:
                    overlaps.append(shared)
        self._intervals = overlaps
        self._excluded = self._excluded | other._excluded
        self._normalize()

    def symmetric_difference_update(self, other: Domain[T]) -> None:
        """Keep the values contained by exactly one of the two domains.

        Intervals that meet nothing on the other side are kept whole. Each
        overlapping pair contributes the pieces only one of them covers, with
        the split points excluded. The shared part of every pair is then
        removed from the assembled pieces, and the holes of both operands are
        settled value by value.
        """
        if other is self:
            other = other.copy()

        pieces = [
            stored for stored in self._intervals if not other.overlaps(stored)
        ]
        pieces.extend(
            candidate
            for candidate in other._intervals
            if not self.overlaps(candidate)
        )
        split_points: set[T] = set()
        shared_parts: list[Interval[T]] = []
        for stored in self._intervals:
            for candidate in other._intervals:
                shared = stored.intersection(candidate)
                if shared is None:
                    continue
                remainder, points = split_overlap(stored, candidate)
                pieces.extend(remainder)
                split_points.update(points)
                shared_parts.append(shared)

        result: Domain[T] = Domain(pieces, split_points)
        for shared in shared_parts:
            result._remove_interval(shared)
        for value in self._excluded | other._excluded:
            if self.contains(value) != other.contains(value):
                result._include_value(value)
            else:
                result._exclude_value(value)

        self._intervals = result._intervals
        self._excluded = result._excluded

    def difference_update(self, other: Domain[T]) -> None:
        """Remove every value ``other`` contains, keeping its holes."""
        if other is self:
            self._intervals = []
            self._excluded = set()
            return
        restored = [value for value in other._excluded if self.contains(value)]
        for removed in other._intervals:
            self._remove_interval(removed)
        for value in restored:
            self._include_value(value)

    def union(self, other: T | Interval[T] | Domain[T]) -> Domain[T]:
        result = self.copy()
        result.append(other)
        return result

    def intersection(self, other: Domain[T]) -> Domain[T]:
        result = self.copy()
        result.intersection_update(other)
        return result

    def symmetric_difference(self, other: Domain[T]) -> Domain[T]:
        result = self.copy()
        result.symmetric_difference_update(other)
        return result

    def difference(self, other: Domain[T]) -> Domain[T]:
        result = self.copy()
        result.difference_update(other)
        return result

    def __or__(self, other: object) -> Domain[T]:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> Domain[T]:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.intersection(other)

    def __xor__(self, other: object) -> Domain[T]:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.symmetric_difference(other)

    def __sub__(self, other: object) -> Domain[T]:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.difference(other)

    # -- iteration ---------------------------------------------------------

    def _stepper(self) -> BoundStepper[T] | None:
        return discrete_stepper(self._intervals, self._excluded)

    def _walk(self, stepper: BoundStepper[T]) -> Iterator[T]:
        intervals = list(self._intervals)
        excluded = frozenset(self._excluded)
        for interval in intervals:
            value: T | None = interval.lower
            while value is not None and value <= interval.upper:
                if value not in excluded:
                    yield value
                value = stepper.successor(value)

    def __iter__(self) -> Iterator[T]:
        if not self._intervals:
            return iter(())
        stepper = self._stepper()
        if stepper is None:
            raise CapabilityError(self._intervals[0].lower, "iteration")
        return self._walk(stepper)

    # -- splitting ---------------------------------------------------------

    def amplitude(self) -> float:
        lower, upper = self.lower_bound, self.upper_bound
        if lower is None or upper is None:
            return 0.0
        return splitter_for(lower).distance(lower, upper)

    def split(
        self, minimal_step: float = 1.0, count: int = 2
    ) -> list[Domain[T]]:
        """Cut the span into up to ``count`` consecutive sub-domains.

        Each piece is intersected with this domain, so holes and gaps stay
        where they are. Neighbouring pieces share their boundary value.
        """
        lower, upper = self.lower_bound, self.upper_bound
        if count < 1 or lower is None or upper is None:
            return [self.copy()]

        bounds = split_bounds(
            lower,
            upper,
            splitter_for(lower),
            minimal_step,
            count,
            stepper=self._stepper(),
        )
        if len(bounds) == 1:
            return [self.copy()]

        pieces: list[Domain[T]] = []
        for start, end in bounds:
            piece: Domain[T] = Domain.unchecked(start, end)
            piece.intersection_update(self)
            pieces.append(piece)
        _LOGGER.debug(
            "split %r into %d piece(s) with minimal step %s",
            self,
            len(pieces),
            minimal_step,
        )
        return pieces

    # -- sampling ----------------------------------------------------------

    def random_element(
        self,
        rng: random.Random | None = None,
        options: SamplingOptions | None = None,
        trace: list[TraceStep] | None = None,
    ) -> T | None:
        if not self._intervals:
            return None
        if rng is None:
            rng = random.Random()
        if options is None:
            options = DEFAULT_SAMPLING_OPTIONS
        return draw_value(self._intervals, self.contains, rng, options, trace)

    def random_sample(
        self,
        count: int,
        rng: random.Random | None = None,
        options: SamplingOptions | None = None,
        trace: list[TraceStep] | None = None,
    ) -> list[T] | None:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if not self._intervals:
            return None
        if rng is None:
            rng = random.Random()
        return [
            self.random_element(rng=rng, options=options, trace=trace)
            for _ in range(count)
        ]

    # -- transforms --------------------------------------------------------

    def apply(self, f: Callable[[T], T]) -> None:
        """Map every bound and excluded value through ``f`` in place.

        Raises ``ArithmeticDomainError`` on the first NaN/infinite result;
        the domain must be discarded afterwards.
        """
        self._intervals, self._excluded = map_storage(
            f, self._intervals, self._excluded
        )
        self._normalize()

    def transform(self, f: Callable[[T], Q]) -> Domain[Q]:
        """New domain over ``f``'s result type, validated like ``apply``."""
        intervals, excluded = map_storage(f, self._intervals, self._excluded)
        return Domain(intervals, excluded)

    def _values(self) -> Iterator[Any]:
        for interval in self._intervals:
            yield interval.lower
            yield interval.upper
        yield from self._excluded

    def _require(
        self, accepts: Callable[[Any], bool], capability: str
    ) -> None:
        for value in self._values():
            if not accepts(value):
                raise CapabilityError(value, capability)

    def _mapped(self, f: Callable[[T], T]) -> Domain[T]:
        result = self.copy()
        result.apply(f)
        return result

    def add(self, operand: T) -> Domain[T]:
        self._require(_is_numeric, "addition")
        return self._mapped(lambda value: value + operand)

    def subtract(self, operand: T) -> Domain[T]:
        self._require(_is_numeric, "subtraction")
        return self._mapped(lambda value: value - operand)

    def multiply(self, operand: T) -> Domain[T]:
        self._require(_is_numeric, "multiplication")
        return self._mapped(lambda value: value * operand)

    def divide(self, operand: T) -> Domain[T]:
        self._require(_is_floating, "division")
        return self._mapped(lambda value: value / operand)

    def concat(self, suffix: str) -> Domain[T]:
        self._require(_is_string, "concatenation")
        return self._mapped(lambda value: value + suffix)

    def concat_repeated(self, times: int, suffix: str) -> Domain[T]:
        if times < 1:
            raise ValueError(f"times must be >= 1, got {times}")
        self._require(_is_string, "concatenation")
        repeated = suffix * times
        return self._mapped(lambda value: value + repeated)


def _is_numeric(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _is_floating(value: Any) -> bool:
    return isinstance(value, float)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


HoledRange = Domain
