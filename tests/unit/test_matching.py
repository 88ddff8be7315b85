# tests/unit/test_matching.py
"""Unit tests for expectation matching."""

import re

import pytest

from browser_assertions.core.matching import (
    ABSENT,
    Literal,
    OneOf,
    Pattern,
    describe,
    first_unmatched,
    matches,
    matches_all,
    matches_list,
    to_expectation
)


class TestMatches:
    """Single value against a literal or a pattern."""

    def test_literal_is_exact_and_case_sensitive(self):
        assert matches("Hello", Literal("Hello"))
        assert not matches("hello", Literal("Hello"))
        assert not matches("Hello world", Literal("Hello"))

    def test_none_never_matches_a_literal(self):
        assert not matches(None, Literal("x"))
        assert not matches(None, Literal(""))

    def test_empty_string_matches_empty_literal(self):
        assert matches("", Literal(""))

    def test_pattern_searches_anywhere(self):
        assert matches("Hello World", Pattern(re.compile(r"Wor")))
        assert not matches("Hello World", Pattern(re.compile(r"^Wor")))

    def test_pattern_respects_flags(self):
        assert matches("WORLD", Pattern(re.compile(r"world", re.IGNORECASE)))

    def test_none_never_matches_a_pattern(self):
        assert not matches(None, Pattern(re.compile(r".*")))

    def test_non_scalar_expectation_is_rejected(self):
        with pytest.raises(TypeError):
            matches("x", OneOf((Literal("x"),)))
        with pytest.raises(TypeError):
            matches("x", ABSENT)


class TestListSemantics:
    """OR across elements, AND across alternatives."""

    def test_matches_list_needs_one_element(self):
        assert matches_list(["a", "b", "c"], Literal("b"))
        assert not matches_list(["a", "c"], Literal("b"))

    def test_matches_list_empty_is_false(self):
        assert not matches_list([], Literal(""))
        assert not matches_list([], Pattern(re.compile("")))

    def test_every_alternative_satisfied_by_some_element(self):
        expected = to_expectation(["Hello", re.compile(r"^Wor")])
        assert matches_all(["Hello", "World"], expected)
        assert matches_all(["World", "Hello"], expected)

    def test_unsatisfied_alternative_is_reported(self):
        wor = re.compile(r"^Wor")
        expected = to_expectation(["Hello", wor])

        assert not matches_all(["Hello", "Hello"], expected)
        assert first_unmatched(["Hello", "Hello"], expected) == Pattern(wor)

    def test_first_unmatched_preserves_alternative_order(self):
        expected = to_expectation(["a", "b", "c"])
        assert first_unmatched(["c"], expected) == Literal("a")
        assert first_unmatched(["a", "b", "c"], expected) is None

    def test_scalar_behaves_as_single_alternative(self):
        assert matches_all(["x", "y"], Literal("y"))
        assert first_unmatched(["x"], Literal("y")) == Literal("y")


class TestToExpectation:

    def test_normalization(self):
        regex = re.compile("a+")
        assert to_expectation("a") == Literal("a")
        assert to_expectation(regex) == Pattern(regex)
        assert to_expectation(["a", regex]) == OneOf((Literal("a"), Pattern(regex)))
        assert to_expectation(("a",)) == OneOf((Literal("a"),))

    def test_expectations_pass_through(self):
        assert to_expectation(ABSENT) is ABSENT
        assert to_expectation(Literal("a")) == Literal("a")

    @pytest.mark.parametrize("value", [None, 3, {"a": 1}, [["nested"]], [None]])
    def test_unsupported_values(self, value):
        with pytest.raises(TypeError):
            to_expectation(value)


class TestDescribe:

    def test_regex_rendered_with_flags(self):
        assert describe(re.compile(r"^Wor", re.IGNORECASE)) == "/^Wor/i"
        assert describe(Pattern(re.compile(r"\d+"))) == r"/\d+/"

    def test_literals_and_lists(self):
        assert describe("Home") == "Home"
        assert describe(["a", re.compile("b")]) == "a, /b/"
        assert describe(Literal("x")) == "x"
