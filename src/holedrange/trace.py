from typing import Any

from pydantic import BaseModel, Field


class TraceStep(BaseModel):
    """Single step in a sampling trace."""

    step: str = Field(description="Step identifier, e.g., 'draw_value'")
    choice: str = Field(description="Human-readable description of the step")
    value: Any = Field(description="The value involved in the step")


def trace_step(
    trace: list[TraceStep] | None, step: str, choice: str, value: Any
) -> None:
    if trace is not None:
        trace.append(TraceStep(step=step, choice=choice, value=value))
