# tests/integration/test_soft_assertions.py
"""Integration tests for assertion outcomes and soft assertions."""

import pytest

from browser_assertions.assertions.soft import (
    AssertionOutcome,
    SoftAssertions,
    capture_outcome
)
from browser_assertions.core.exceptions.assertion import (
    InvalidInputException,
    QueryException,
    TestAssertionException
)
from browser_assertions.core.types import UNSET


class TestCaptureOutcome:

    @pytest.mark.asyncio
    async def test_pass(self, assertions, browser):
        browser.page_title = "Home"
        outcome = await capture_outcome(assertions.title("Home"))

        assert outcome.passed
        assert outcome.message is None
        assert outcome.actual is UNSET

    @pytest.mark.asyncio
    async def test_fail_carries_message_and_values(self, assertions, browser):
        browser.page_title = "Login"
        outcome = await capture_outcome(assertions.title("Home"))

        assert not outcome.passed
        assert outcome.assertion_name == "assert.title"
        assert outcome.message == 'Expected page title to be "Home", "Login" found.'
        assert outcome.actual == "Login"
        assert outcome.expected == "Home"

    @pytest.mark.asyncio
    async def test_other_failures_propagate(self, assertions):
        with pytest.raises(QueryException):
            await capture_outcome(assertions.checked("#missing"))
        with pytest.raises(InvalidInputException):
            await capture_outcome(assertions.elements("li", -1))

    def test_outcome_to_dict(self):
        data = AssertionOutcome(passed=False, assertion_name="assert.url", message="x", actual="/a").to_dict()

        assert data["actual"] == "/a"
        assert "expected" not in data


class TestSoftAssertions:

    @pytest.mark.asyncio
    async def test_all_failures_reported_together(self, assertions, browser):
        browser.page_title = "Login"
        browser.add("h1", text="Welcome")

        with pytest.raises(TestAssertionException) as exc_info:
            async with SoftAssertions(assertions) as soft:
                await soft.title("Home")
                await soft.text("h1", "Welcome")
                await soft.exists("#cart")

        error = exc_info.value
        assert error.assertion_name == "soft_assertions"
        assert "Soft assertions failed: 2 of 3" in error.message
        assert '1. [assert.title] Expected page title to be "Home", "Login" found.' in error.message
        assert '2. [assert.exists] Expected element "#cart" to exist.' in error.message
        assert error.error_context.data["failure_count"] == 2

    @pytest.mark.asyncio
    async def test_no_failures(self, assertions, browser):
        browser.add("#cart")

        async with SoftAssertions(assertions) as soft:
            outcome = await soft.exists("#cart")

        assert outcome.passed
        assert not soft.has_failures()
        assert soft.get_failure_count() == 0

    @pytest.mark.asyncio
    async def test_errors_stop_the_block(self, assertions):
        soft = SoftAssertions(assertions)

        with pytest.raises(QueryException):
            async with soft:
                await soft.exists("#missing")
                await soft.class_("#missing", "active")

        assert soft.get_failure_count() == 1

    @pytest.mark.asyncio
    async def test_clear(self, assertions):
        soft = SoftAssertions(assertions)
        await soft.exists("#missing")
        assert soft.has_failures()

        soft.clear()
        soft.assert_all()

    def test_unknown_assertion(self, assertions):
        soft = SoftAssertions(assertions)
        with pytest.raises(AttributeError):
            soft.no_such_assertion
