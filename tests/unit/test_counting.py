# tests/unit/test_counting.py
"""Unit tests for element count parsing and evaluation."""

import pytest

from browser_assertions.core.counting import (
    CountCase,
    CountSpec,
    classify,
    count_message,
    describe_count,
    evaluate,
    parse_count_input
)
from browser_assertions.core.exceptions.assertion import InvalidInputException
from browser_assertions.core.exceptions.enums import ErrorKind


class TestParseCountInput:
    """Every accepted form canonicalizes to an inclusive range."""

    @pytest.mark.parametrize("count, spec", [
        (0, CountSpec(0, 0)),
        (3, CountSpec(3, 3)),
        ({"op": "==", "value": 2}, CountSpec(2, 2)),
        ({"op": "<", "value": 3}, CountSpec(0, 2)),
        ({"op": "<=", "value": 3}, CountSpec(0, 3)),
        ({"op": ">", "value": 3}, CountSpec(4, None)),
        ({"op": ">=", "value": 3}, CountSpec(3, None)),
        ({"op": "between", "low": 2, "high": 4}, CountSpec(2, 4)),
        ({"equal": 5}, CountSpec(5, 5)),
        ({"atLeast": 2}, CountSpec(2, None)),
        ({"atMost": 4}, CountSpec(0, 4)),
        ({"atLeast": 2, "atMost": 4}, CountSpec(2, 4)),
        ({"at_least": 1, "at_most": 1}, CountSpec(1, 1)),
    ])
    def test_accepted_forms(self, count, spec):
        assert parse_count_input(count) == spec

    @pytest.mark.parametrize("count", [
        -1,
        True,
        2.0,
        "3",
        None,
        [1],
        {},
        {"op": "between", "low": 4, "high": 2},
        {"op": "between", "low": 2},
        {"op": "between", "low": -1, "high": 2},
        {"op": "<", "value": 0},
        {"op": ">=", "value": -2},
        {"op": "!=", "value": 1},
        {"op": ">", "low": 1, "high": 2},
        {"atLeast": 4, "atMost": 2},
        {"equal": 1, "atLeast": 1},
        {"atLeast": "2"},
        {"between": [1, 2]},
    ])
    def test_invalid_forms(self, count):
        with pytest.raises(InvalidInputException) as exc_info:
            parse_count_input(count)

        assert exc_info.value.kind == ErrorKind.INVALID_INPUT
        assert exc_info.value.assertion_name == "assert.elements"
        assert "is not valid" in exc_info.value.message

    def test_assertion_name_is_configurable(self):
        with pytest.raises(InvalidInputException) as exc_info:
            parse_count_input(-1, assertion_name="assert.element")
        assert exc_info.value.assertion_name == "assert.element"


class TestEvaluate:

    def test_exact(self):
        spec = CountSpec.exactly(3)
        assert evaluate(spec, 3)
        assert not evaluate(spec, 2)
        assert not evaluate(spec, 4)

    def test_between_is_inclusive(self):
        spec = CountSpec(2, 4)
        assert [evaluate(spec, n) for n in range(6)] == [False, False, True, True, True, False]

    def test_open_upper_bound(self):
        spec = CountSpec(2, None)
        assert not evaluate(spec, 1)
        assert evaluate(spec, 2)
        assert evaluate(spec, 10000)


class TestClassify:

    @pytest.mark.parametrize("spec, case", [
        (CountSpec(3, 3), CountCase.EXACT),
        (CountSpec(0, 0), CountCase.EXACT),
        (CountSpec(2, None), CountCase.AT_LEAST),
        (CountSpec(0, 4), CountCase.AT_MOST),
        (CountSpec(2, 4), CountCase.BETWEEN),
        (CountSpec(-1, 2), CountCase.INVALID),
        (CountSpec(4, 2), CountCase.INVALID),
    ])
    def test_cases(self, spec, case):
        assert classify(spec) == case


class TestCountMessages:

    def test_each_case_has_its_own_wording(self):
        assert describe_count(CountSpec(3, 3)) == "exactly 3"
        assert describe_count(CountSpec(2, None)) == "at least 2"
        assert describe_count(CountSpec(0, 4)) == "up to 4"
        assert describe_count(CountSpec(2, 4)) == "between 2 and 4"

    def test_between_message(self):
        message = count_message("li.item", CountSpec(2, 4), 5)
        assert message == 'Expected selector "li.item" to find between 2 and 4 elements, 5 found.'

    def test_single_element_is_singular(self):
        message = count_message("#main", CountSpec(1, 1), 0)
        assert message == 'Expected selector "#main" to find exactly 1 element, 0 found.'
