from __future__ import annotations

from datetime import date, timedelta

import pytest

from holedrange.capabilities import STEPPER_REGISTRY, BoundStepper


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--verification-level",
        action="store",
        default="standard",
        choices=("fast", "standard", "full"),
        help=(
            "Select test verification level: "
            "fast (skip slow), "
            "standard and full (run all)."
        ),
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    level = config.getoption("--verification-level")
    if level != "fast":
        return

    skip_slow = pytest.mark.skip(reason="skipped in fast verification level")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class DateStepper(BoundStepper[date]):
    def successor(self, value: date) -> date | None:
        if value == date.max:
            return None
        return value + timedelta(days=1)

    def predecessor(self, value: date) -> date | None:
        if value == date.min:
            return None
        return value - timedelta(days=1)


@pytest.fixture
def date_stepper(monkeypatch: pytest.MonkeyPatch) -> DateStepper:
    """Make ``date`` a discrete bound type for the duration of a test."""
    stepper = DateStepper()
    monkeypatch.setitem(STEPPER_REGISTRY, date, stepper)
    return stepper
