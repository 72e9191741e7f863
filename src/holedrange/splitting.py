from __future__ import annotations

from typing import Any

from holedrange.capabilities import BoundSplitter, BoundStepper


def split_bounds(
    lower: Any,
    upper: Any,
    splitter: BoundSplitter[Any],
    minimal_step: float,
    count: int,
    stepper: BoundStepper[Any] | None = None,
) -> list[tuple[Any, Any]]:
    """Consecutive ``(start, end)`` pairs walking from ``lower`` to ``upper``.

    Steps are ``max(minimal_step, span / count)`` long; the last pair is
    clamped to ``upper`` and at most ``count`` pairs are produced. Pairs
    share their boundary values. With a ``stepper``, a step too short to
    move a discrete cursor is rounded up to the cursor's successor.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    span = splitter.distance(lower, upper)
    if span <= minimal_step:
        return [(lower, upper)]

    step = max(minimal_step, span / count)
    bounds: list[tuple[Any, Any]] = []
    current = lower
    while current < upper:
        if len(bounds) == count - 1:
            following = upper
        else:
            following = min(upper, splitter.advance(current, step))
        if not current < following and stepper is not None:
            successor = stepper.successor(current)
            if successor is not None:
                following = min(upper, successor)
        if not current < following:
            raise ValueError(
                f"advancing {current!r} by {step} made no progress"
            )
        bounds.append((current, following))
        current = following
    return bounds
