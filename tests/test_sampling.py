import logging
import random
from datetime import date

import pytest

from holedrange import Domain, Interval
from holedrange.capabilities import RANDOMIZER_REGISTRY, BoundRandomizer
from holedrange.errors import SamplingExhaustedError
from holedrange.models import IntervalWeighting, SamplingOptions
from holedrange.sampling import interval_weights
from holedrange.trace import TraceStep


class NeverRandomizer(BoundRandomizer[float]):
    def random_value(self, rng: random.Random) -> float | None:
        return None

    def random_in(
        self, lower: float, upper: float, rng: random.Random
    ) -> float | None:
        return None


class TestRandomElement:
    @pytest.mark.slow
    def test_draws_are_always_contained(self) -> None:
        domain = Domain(
            [
                Interval.of(0.0, 1.0),
                Interval.of(5.0, 6.0),
                Interval.of(7.5, 7.5),
            ]
        )
        domain.remove([0.5, 5.5])
        domain.remove(Interval.of(0.2, 0.3))
        rng = random.Random(42)
        for _ in range(10_000):
            assert domain.contains(domain.random_element(rng=rng))

    def test_ints_with_holes(self) -> None:
        domain = Domain.of(0, 10)
        domain.remove([2, 4, 6, 8])
        rng = random.Random(0)
        draws = [domain.random_element(rng=rng) for _ in range(200)]
        assert all(domain.contains(value) for value in draws)
        assert set(draws) <= {0, 1, 3, 5, 7, 9, 10}

    def test_strings(self) -> None:
        domain = Domain.of("a", "z")
        domain.remove(Interval.of("m", "n"))
        rng = random.Random(1)
        for _ in range(50):
            assert domain.contains(domain.random_element(rng=rng))

    @pytest.mark.parametrize(
        "domain",
        [
            Domain.of("hello", "help"),
            Domain.of("abc", "abd"),
            Domain.of_value("hello"),
        ],
    )
    def test_narrow_strings(self, domain: Domain) -> None:
        rng = random.Random(2)
        for _ in range(50):
            assert domain.contains(domain.random_element(rng=rng))

    def test_empty_returns_none(self) -> None:
        assert Domain().random_element() is None

    def test_seeded_draws_repeat(self) -> None:
        domain = Domain.of(0.0, 100.0)
        first = domain.random_sample(5, rng=random.Random(7))
        second = domain.random_sample(5, rng=random.Random(7))
        assert first == second

    def test_missing_randomizer(self) -> None:
        domain = Domain.of(date(2024, 1, 1), date(2024, 1, 9))
        with pytest.raises(TypeError, match="random sampling"):
            domain.random_element()

    def test_records_trace(self) -> None:
        trace: list[TraceStep] = []
        value = Domain.of(0.0, 1.0).random_element(
            rng=random.Random(3), trace=trace
        )
        assert len(trace) == 1
        assert trace[0].step == "draw_value"
        assert trace[0].value == value

    def test_exhaustion(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setitem(RANDOMIZER_REGISTRY, float, NeverRandomizer())
        trace: list[TraceStep] = []
        options = SamplingOptions(max_attempts=7)

        with caplog.at_level(logging.DEBUG, logger="holedrange.sampling"):
            with pytest.raises(SamplingExhaustedError) as exc_info:
                Domain.of(0.0, 1.0).random_element(
                    rng=random.Random(0), options=options, trace=trace
                )

        assert exc_info.value.attempts == 7
        assert trace[-1].step == "sampling_exhausted"
        assert "sampling exhausted: 7 attempts over 1 interval(s)" in (
            caplog.text
        )


class TestRandomSample:
    def test_count(self) -> None:
        sample = Domain.of(0, 3).random_sample(5, rng=random.Random(0))
        assert sample is not None
        assert len(sample) == 5
        assert all(0 <= value <= 3 for value in sample)

    def test_zero(self) -> None:
        assert Domain.of(0, 3).random_sample(0) == []

    def test_empty_returns_none(self) -> None:
        assert Domain().random_sample(3) is None

    def test_negative_count(self) -> None:
        with pytest.raises(ValueError, match="count must be >= 0"):
            Domain.of(0, 3).random_sample(-1)


class TestIntervalWeights:
    def test_discrete_spans_count_endpoints(self) -> None:
        weights = interval_weights(
            [Interval.of(0, 9), Interval.of(20, 20)], IntervalWeighting.SPAN
        )
        assert weights == [10.0, 1.0]

    def test_continuous_spans(self) -> None:
        weights = interval_weights(
            [Interval.of(0.0, 1.0), Interval.of(2.0, 5.0)],
            IntervalWeighting.SPAN,
        )
        assert weights == [1.0, 3.0]

    def test_uniform(self) -> None:
        weights = interval_weights(
            [Interval.of(0.0, 1.0)], IntervalWeighting.UNIFORM
        )
        assert weights is None

    def test_zero_total_falls_back(self) -> None:
        weights = interval_weights(
            [Interval.of(1.0, 1.0), Interval.of(2.0, 2.0)],
            IntervalWeighting.SPAN,
        )
        assert weights is None

    def test_unmeasurable_type_falls_back(self) -> None:
        weights = interval_weights(
            [Interval.of(date(2024, 1, 1), date(2024, 2, 1))],
            IntervalWeighting.SPAN,
        )
        assert weights is None

    def test_span_weighting_favours_wide_intervals(self) -> None:
        domain = Domain([Interval.of(0.0, 1.0), Interval.of(10.0, 109.0)])
        rng = random.Random(5)
        narrow = sum(
            1
            for _ in range(1000)
            if domain.random_element(rng=rng) <= 1.0
        )
        assert narrow < 100

    def test_uniform_weighting_ignores_width(self) -> None:
        domain = Domain([Interval.of(0.0, 1.0), Interval.of(10.0, 109.0)])
        rng = random.Random(5)
        options = SamplingOptions(weighting=IntervalWeighting.UNIFORM)
        narrow = sum(
            1
            for _ in range(1000)
            if domain.random_element(rng=rng, options=options) <= 1.0
        )
        assert narrow > 300
