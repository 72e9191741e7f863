from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Sequence
from typing import Any

from holedrange.capabilities import find_splitter, find_stepper, randomizer_for
from holedrange.errors import SamplingExhaustedError
from holedrange.models import Interval, IntervalWeighting, SamplingOptions
from holedrange.trace import TraceStep, trace_step

_LOGGER = logging.getLogger(__name__)


def interval_weights(
    intervals: Sequence[Interval[Any]], weighting: IntervalWeighting
) -> list[float] | None:
    """Per-interval draw weights, or ``None`` for a uniform choice.

    Span weighting needs a splitter for the bound type; discrete types count
    both endpoints so point intervals keep a chance of being drawn. Falls back
    to uniform when the spans cannot be measured.
    """
    if weighting == IntervalWeighting.UNIFORM or not intervals:
        return None
    first = intervals[0].lower
    splitter = find_splitter(first)
    if splitter is None:
        return None
    offset = 1.0 if find_stepper(first) is not None else 0.0
    weights = [
        splitter.distance(interval.lower, interval.upper) + offset
        for interval in intervals
    ]
    total = sum(weights)
    if not math.isfinite(total) or total <= 0.0:
        return None
    return weights


def pick_interval(
    intervals: Sequence[Interval[Any]],
    weights: list[float] | None,
    rng: random.Random,
) -> Interval[Any]:
    if weights is None:
        return rng.choice(intervals)
    return rng.choices(intervals, weights=weights, k=1)[0]


def draw_value(
    intervals: Sequence[Interval[Any]],
    accepts: Callable[[Any], bool],
    rng: random.Random,
    options: SamplingOptions,
    trace: list[TraceStep] | None = None,
) -> Any:
    """Rejection-sample a value accepted by ``accepts``.

    Each attempt picks an interval, draws inside it and keeps the draw only
    when ``accepts`` agrees. Raises ``SamplingExhaustedError`` once
    ``options.max_attempts`` draws have been rejected.
    """
    randomizer = randomizer_for(intervals[0].lower)
    weights = interval_weights(intervals, options.weighting)

    for attempt in range(1, options.max_attempts + 1):
        interval = pick_interval(intervals, weights, rng)
        candidate = randomizer.random_in(interval.lower, interval.upper, rng)
        if candidate is None or not accepts(candidate):
            continue
        trace_step(
            trace,
            "draw_value",
            f"Accepted draw from {interval} after {attempt} attempt(s)",
            candidate,
        )
        return candidate

    _LOGGER.debug(
        "sampling exhausted: %d attempts over %d interval(s)",
        options.max_attempts,
        len(intervals),
    )
    trace_step(
        trace,
        "sampling_exhausted",
        f"No accepted draw after {options.max_attempts} attempts",
        options.max_attempts,
    )
    raise SamplingExhaustedError(options.max_attempts)
