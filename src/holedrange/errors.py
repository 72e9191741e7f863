from typing import Any


class HoledRangeError(Exception):
    """Base class for errors raised by holedrange."""


class InvariantViolationError(HoledRangeError, AssertionError):
    """Raised when interval storage reaches a shape that cannot happen."""


class ArithmeticDomainError(HoledRangeError, ArithmeticError):
    """Raised when mapping a value produces NaN, infinity or fails."""

    def __init__(self, value: Any, result: Any = None) -> None:
        if result is None:
            message = f"mapping {value!r} failed"
        else:
            message = f"mapping {value!r} produced {result!r}"
        super().__init__(message)
        self.value = value
        self.result = result


class SamplingExhaustedError(HoledRangeError, RuntimeError):
    """Raised when rejection sampling runs out of attempts."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"no contained value drawn after {attempts} attempts"
        )
        self.attempts = attempts


class CapabilityError(HoledRangeError, TypeError):
    """Raised when a bound type lacks the capability an operation needs."""

    def __init__(self, value: Any, capability: str) -> None:
        super().__init__(
            f"{type(value).__qualname__} bounds do not support {capability}"
        )
        self.value = value
        self.capability = capability
