import logging
import math
import random
from datetime import date

import pytest

from holedrange import capabilities
from holedrange.capabilities import (
    BoolRandomizer,
    BoolSplitter,
    BoolStepper,
    FloatRandomizer,
    IntRandomizer,
    IntSplitter,
    IntStepper,
    StrRandomizer,
    find_randomizer,
    find_splitter,
    find_stepper,
    randomizer_for,
    register_stepper,
    shared_stepper,
    splitter_for,
)
from holedrange.errors import CapabilityError
from holedrange.strings import (
    LETTERS,
    MAX_RANDOM_LENGTH,
    MIN_RANDOM_LENGTH,
    advance_string,
    levenshtein,
    random_string,
)


class TestLevenshtein:
    @pytest.mark.parametrize(
        ("source", "target", "expected"),
        [
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("", "abc", 3),
            ("abc", "", 3),
            ("same", "same", 0),
        ],
    )
    def test_distance(self, source: str, target: str, expected: int) -> None:
        assert levenshtein(source, target) == expected


class TestAdvanceString:
    def test_zero_distance_is_identity(self) -> None:
        assert advance_string("abc", 0, random.Random(0)) == "abc"

    def test_substitutions_keep_length(self) -> None:
        result = advance_string("abcdef", 2, random.Random(1))
        assert len(result) == 6
        assert levenshtein("abcdef", result) == 2

    def test_negative_distance_deletes(self) -> None:
        result = advance_string("abcdef", -2, random.Random(2))
        assert len(result) == 4

    def test_deletions_stop_at_empty(self) -> None:
        assert advance_string("ab", -5, random.Random(3)) == ""

    def test_long_distance_inserts(self) -> None:
        result = advance_string("ab", 5, random.Random(4))
        assert len(result) == 5
        assert set(result).isdisjoint("ab")


class TestRandomString:
    def test_length_and_alphabet(self) -> None:
        rng = random.Random(5)
        for _ in range(20):
            value = random_string(rng)
            assert MIN_RANDOM_LENGTH <= len(value) <= MAX_RANDOM_LENGTH
            assert set(value) <= set(LETTERS)


class TestSplitters:
    def test_int(self) -> None:
        splitter = IntSplitter()
        assert splitter.distance(2, 7) == 5.0
        assert splitter.advance(2, 2.9) == 4

    def test_bool(self) -> None:
        splitter = BoolSplitter()
        assert splitter.distance(False, True) == 1.0
        assert splitter.distance(True, True) == 0.0
        assert splitter.advance(False, 1.0) is True
        assert splitter.advance(True, 2.0) is True

    def test_str_uses_edit_distance(self) -> None:
        assert splitter_for("kitten").distance("kitten", "sitting") == 3.0

    def test_bool_is_not_treated_as_int(self) -> None:
        assert isinstance(find_splitter(True), BoolSplitter)
        assert isinstance(find_splitter(1), IntSplitter)

    def test_missing_splitter(self) -> None:
        assert find_splitter(date(2024, 1, 1)) is None
        with pytest.raises(CapabilityError, match="date bounds do not"):
            splitter_for(date(2024, 1, 1))

    def test_capability_error_is_a_type_error(self) -> None:
        with pytest.raises(TypeError) as exc_info:
            splitter_for(date(2024, 1, 1))
        assert exc_info.value.capability == "distance/advance splitting"


class TestRandomizers:
    def test_int_in_range(self) -> None:
        rng = random.Random(6)
        randomizer = IntRandomizer()
        assert randomizer.random_in(3, 3, rng) == 3
        assert all(
            -2 <= randomizer.random_in(-2, 2, rng) <= 2 for _ in range(50)
        )

    def test_float_in_range(self) -> None:
        rng = random.Random(7)
        value = FloatRandomizer().random_in(0.0, 1.0, rng)
        assert value is not None
        assert 0.0 <= value <= 1.0

    def test_float_unbounded_draw_fails(self) -> None:
        value = FloatRandomizer().random_in(
            -math.inf, math.inf, random.Random(8)
        )
        assert value is None

    def test_float_random_value_is_finite(self) -> None:
        rng = random.Random(9)
        assert all(
            math.isfinite(FloatRandomizer().random_value(rng))
            for _ in range(50)
        )

    def test_bool(self) -> None:
        rng = random.Random(10)
        randomizer = BoolRandomizer()
        assert randomizer.random_in(True, True, rng) is True
        draws = {randomizer.random_in(False, True, rng) for _ in range(50)}
        assert draws == {False, True}

    @pytest.mark.parametrize(
        ("lower", "upper"),
        [
            ("b", "d"),
            ("apple", "banana"),
            ("hello", "help"),
            ("abc", "abd"),
            ("abc", "abcd"),
        ],
    )
    def test_str_in_range(self, lower: str, upper: str) -> None:
        rng = random.Random(11)
        randomizer = StrRandomizer()
        for _ in range(20):
            value = randomizer.random_in(lower, upper, rng)
            assert value is not None
            assert lower <= value <= upper

    def test_str_point_interval(self) -> None:
        randomizer = StrRandomizer()
        assert randomizer.random_in("hello", "hello", random.Random(12)) == (
            "hello"
        )

    def test_str_narrow_range_varies(self) -> None:
        rng = random.Random(13)
        randomizer = StrRandomizer()
        draws = {randomizer.random_in("hello", "help", rng) for _ in range(30)}
        assert len(draws) > 1

    def test_missing_randomizer(self) -> None:
        assert find_randomizer(date(2024, 1, 1)) is None
        with pytest.raises(CapabilityError, match="random sampling"):
            randomizer_for(date(2024, 1, 1))


class TestSteppers:
    def test_int(self) -> None:
        assert IntStepper().successor(4) == 5
        assert IntStepper().predecessor(4) == 3

    def test_bool_edges(self) -> None:
        stepper = BoolStepper()
        assert stepper.successor(False) is True
        assert stepper.successor(True) is None
        assert stepper.predecessor(True) is False
        assert stepper.predecessor(False) is None

    def test_subclass_inherits(self) -> None:
        class Port(int):
            pass

        assert isinstance(find_stepper(Port(80)), IntStepper)

    def test_shared_stepper(self) -> None:
        assert isinstance(shared_stepper([1, 2, 3]), IntStepper)
        assert shared_stepper([1, True]) is None
        assert shared_stepper([1, 2.5]) is None
        assert shared_stepper([]) is None

    def test_register_stepper(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        registry: dict = {}
        monkeypatch.setattr(capabilities, "STEPPER_REGISTRY", registry)
        stepper = IntStepper()

        with caplog.at_level(logging.DEBUG, logger="holedrange.capabilities"):
            register_stepper(date, stepper)

        assert registry[date] is stepper
        assert find_stepper(date(2024, 1, 1)) is stepper
        assert "registered stepper IntStepper for date" in caplog.text
