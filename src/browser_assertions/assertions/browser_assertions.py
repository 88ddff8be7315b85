# src/browser_assertions/assertions/browser_assertions.py
"""
Browser Assertions

One coroutine per assertion kind. Every assertion follows the same steps:

1. Validate its arguments. Invalid input raises ``InvalidInputException``
   before the browser is touched.
2. Make exactly one call to the ``Browser`` capability. Driver failures are
   relabeled with this assertion's name (``assert.text``, ...).
3. Judge the result with the matching, counting or membership primitives.
4. Return ``None`` on success; otherwise raise ``TestAssertionException``
   with the caller's message, or a synthesized one.

Example:
    >>> assertions = BrowserAssertions(PlaywrightBrowser(page))
    >>> await assertions.text("h1", ["Hello", re.compile(r"^Wor")])
    >>> await assertions.elements("li.item", {"op": "between", "low": 2, "high": 4})
    >>> await assertions.attribute("button", "disabled", ABSENT)
"""

from typing import Any, Awaitable, List, NoReturn, Optional, Sequence, TypeVar, Union

from browser_assertions.browser import scripts
from browser_assertions.browser.protocol import Browser
from browser_assertions.config.settings import Settings, get_settings
from browser_assertions.core.counting import evaluate, parse_count_input
from browser_assertions.core.exceptions.assertion import (
    FatalException,
    InvalidInputException,
    QueryException
)
from browser_assertions.core.exceptions.base import AutomationException
from browser_assertions.core.exceptions.utils import reject_assertion, relabel
from browser_assertions.core.logger import get_logger, log_assertion
from browser_assertions.core.matching import (
    ABSENT,
    Absent,
    Literal,
    OneOf,
    Pattern,
    Scalar,
    first_unmatched,
    matches,
    matches_list,
    to_expectation
)
from browser_assertions.core.membership import same_members
from browser_assertions.core.messages import (
    no_match_message,
    not_found_message,
    resolve_message
)
from browser_assertions.core.types import UNSET, Selector, is_set

T = TypeVar("T")


def _strict_equals(actual: Any, expected: Any) -> bool:
    """Equality without bool/int coercion (``True`` is not ``1``)."""
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    return actual == expected


class BrowserAssertions:
    """
    Assertions over the state of a page.

    Args:
        browser: object implementing the ``Browser`` capability
        settings: reporting settings (``get_settings()`` if None)
    """

    def __init__(self, browser: Browser, settings: Optional[Settings] = None):
        self._browser = browser
        self.settings = settings or get_settings()
        self.logger = get_logger("browser_assertions")

    @property
    def browser(self) -> Browser:
        return self._browser

    async def _call(self, assertion_name: str, operation: Awaitable[T]) -> T:
        """Await a browser call, relabeling any failure as ``assertion_name``."""
        try:
            return await operation
        except Exception as err:
            raise relabel(err, assertion_name) from err

    def _message(self, custom: Optional[str], assertion_name: str, **kwargs: Any) -> str:
        return resolve_message(
            custom,
            assertion_name,
            max_length=self.settings.assertions.max_value_length,
            **kwargs
        )

    def _passed(self, assertion_name: str, expected: Any = None, actual: Any = None, **details: Any) -> None:
        log_assertion(assertion_name, expected, actual, True, settings=self.settings.assertions, **details)

    def _reject(self, assertion_name: str, message: str, **kwargs: Any) -> NoReturn:
        reject_assertion(assertion_name, message, settings=self.settings.assertions, **kwargs)

    def _option_list(self, assertion_name: str, expected: Any) -> List[str]:
        """Validate an option expectation: a string or a sequence of strings."""
        if expected is None:
            raise InvalidInputException(
                "Missing expected options for assertion.",
                assertion_name=assertion_name
            )
        if isinstance(expected, str):
            return [expected]
        if isinstance(expected, (list, tuple)) and all(isinstance(item, str) for item in expected):
            return list(expected)
        raise InvalidInputException(
            f"Expected options must be a string or a list of strings, got {expected!r}.",
            assertion_name=assertion_name
        )

    def _scalar(self, assertion_name: str, expected: Any, what: str) -> Scalar:
        """Validate a single string/regex expectation."""
        if expected is None:
            raise InvalidInputException(
                f"Missing expected {what} for assertion.",
                assertion_name=assertion_name
            )
        try:
            expectation = to_expectation(expected)
        except TypeError as err:
            raise InvalidInputException(str(err), assertion_name=assertion_name) from err
        if not isinstance(expectation, (Literal, Pattern)):
            raise InvalidInputException(
                f"Expected {what} must be a string or a regular expression, got {expected!r}.",
                assertion_name=assertion_name
            )
        return expectation

    async def exists(self, selector: Selector, msg: Optional[str] = None) -> None:
        """At least one element matches ``selector``."""
        name = "assert.exists"
        element = await self._call(name, self._browser.query(selector))
        if element is None:
            self._reject(name, self._message(msg, name, selector=selector), selector=selector)
        self._passed(name, selector=selector)

    async def visible(self, selector: Selector, msg: Optional[str] = None) -> None:
        """At least one element matching ``selector`` is visible."""
        name = "assert.visible"
        visible = await self._call(name, self._browser.evaluate(scripts.VISIBILITY, selector))
        if visible is None:
            self._reject(name, self._message(None, name, selector=selector, no_match=True), selector=selector)
        if not visible:
            self._reject(name, self._message(msg, name, selector=selector), selector=selector)
        self._passed(name, selector=selector)

    async def tag(self, selector: Selector, expected: str, msg: Optional[str] = None) -> None:
        """At least one element matching ``selector`` has tag ``expected``."""
        name = "assert.tag"
        if not expected:
            raise InvalidInputException("Missing expected tag for assertion.", assertion_name=name)

        tags: List[str] = await self._call(name, self._browser.evaluate(scripts.TAG_NAMES, selector))
        if expected not in tags:
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=expected, actual=tags),
                actual=tags,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, tags, selector=selector)

    async def text(self, selector: Selector, expected: Any, msg: Optional[str] = None) -> None:
        """
        Element texts satisfy ``expected``.

        A string or regex passes if any element matches it. A list passes
        if every item is matched by some element.
        """
        name = "assert.text"
        if expected is None:
            raise InvalidInputException("Missing expected text for assertion.", assertion_name=name)
        try:
            expectation = to_expectation(expected)
        except TypeError as err:
            raise InvalidInputException(str(err), assertion_name=name) from err
        if isinstance(expectation, Absent) or (isinstance(expectation, OneOf) and not expectation.alternatives):
            raise InvalidInputException("Missing expected text for assertion.", assertion_name=name)

        texts: List[str] = await self._call(name, self._browser.text(selector))
        unmatched = first_unmatched(texts, expectation)
        if unmatched is not None:
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=unmatched, actual=texts),
                actual=texts,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, texts, selector=selector)

    async def text_contains(self, selector: Selector, expected: str, msg: Optional[str] = None) -> None:
        """Some element's text contains the substring ``expected``."""
        name = "assert.textContains"
        if not isinstance(expected, str):
            raise InvalidInputException("Missing expected text for assertion.", assertion_name=name)

        texts: List[str] = await self._call(name, self._browser.text(selector))
        if not any(text is not None and expected in text for text in texts):
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=expected, actual=texts),
                actual=texts,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, texts, selector=selector)

    async def title(self, expected: Any, msg: Optional[str] = None) -> None:
        """Page title equals (or, for a regex, matches) ``expected``."""
        name = "assert.title"
        expectation = self._scalar(name, expected, "title")

        title = await self._call(name, self._browser.title())
        if not matches(title, expectation):
            self._reject(
                name,
                self._message(msg, name, expected=expected, actual=title),
                actual=title,
                expected=expected
            )
        self._passed(name, expected, title)

    async def class_(self, selector: Selector, expected: str, msg: Optional[str] = None) -> None:
        """The first element matching ``selector`` has class ``expected``."""
        name = "assert.class"
        try:
            classes = await self._browser.class_list(selector)
        except Exception as err:
            raise QueryException(
                no_match_message(selector),
                assertion_name=name,
                original_exception=err
            ).add_context("selector", selector) from err

        if expected not in classes:
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=expected, actual=classes),
                actual=classes,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, classes, selector=selector)

    async def url(self, expected: Any, msg: Optional[str] = None) -> None:
        """Current page url equals (or, for a regex, matches) ``expected``."""
        name = "assert.url"
        expectation = self._scalar(name, expected, "url")
        try:
            url = await self._browser.url()
        except Exception as err:
            raise FatalException(
                f"Can't obtain page url. {err}",
                assertion_name=name,
                original_exception=err
            ) from err

        if not matches(url, expectation):
            self._reject(
                name,
                self._message(msg, name, expected=expected, actual=url),
                actual=url,
                expected=expected
            )
        self._passed(name, expected, url)

    async def value(self, selector: Selector, expected: Any, msg: Optional[str] = None) -> None:
        """
        Element value equals ``expected``.

        ``None`` asserts that the element has no value; a regex is matched
        against the value.
        """
        name = "assert.value"
        expectation = None if expected is None else self._scalar(name, expected, "value")

        value = await self._call(name, self._browser.value(selector))
        if expectation is None:
            passed = value is None
        else:
            passed = matches(value, expectation)

        if not passed:
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=expected, actual=value),
                actual=value,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, value, selector=selector)

    async def element(self, selector: Selector, msg: Optional[str] = None) -> None:
        """Exactly one element matches ``selector``."""
        try:
            await self.elements(selector, 1, msg)
        except AutomationException as err:
            raise relabel(err, "assert.element") from err

    async def elements(self, selector: Selector, count: Any, msg: Optional[str] = None) -> None:
        """
        The number of elements matching ``selector`` satisfies ``count``.

        ``count`` is an integer, ``{"op": ..., "value"|"low"/"high": ...}``
        or ``{"equal"|"atLeast"|"atMost": ...}``.
        """
        name = "assert.elements"
        spec = parse_count_input(count, assertion_name=name)

        elements = await self._call(name, self._browser.query_all(selector))
        found = len(elements)
        if not evaluate(spec, found):
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=spec, actual=found),
                actual=found,
                expected=count,
                selector=selector
            )
        self._passed(name, count, found, selector=selector)

    async def attribute(
            self,
            selector: Selector,
            attribute: str,
            expected: Any = UNSET,
            msg: Optional[str] = None
    ) -> None:
        """
        Attribute assertion with three modes:

        - ``expected`` omitted: some element has the attribute, any value
        - string or regex: some element's attribute value matches
        - ``ABSENT`` (or ``None``): no matched element has the attribute

        No matched element at all always fails, whatever the mode.
        """
        name = "assert.attribute"
        if not attribute:
            raise InvalidInputException("Missing attribute name for assertion.", assertion_name=name)
        if expected is None:
            expected = ABSENT
        expectation = expected
        if is_set(expected) and expected is not ABSENT:
            expectation = self._scalar(name, expected, "attribute value")

        values: List[Optional[str]] = await self._call(
            name,
            self._browser.evaluate(scripts.ATTRIBUTE_VALUES, selector, attribute)
        )

        present = [value for value in values if value is not None]
        if values:
            if expectation is ABSENT:
                passed = not present
            elif not is_set(expectation):
                passed = bool(present)
            else:
                passed = matches_list(present, expectation)
            if passed:
                self._passed(name, expected, values, selector=selector, attribute=attribute)
                return

        self._reject(
            name,
            self._message(
                msg, name,
                selector=selector,
                expected=expected,
                actual=values,
                attribute=attribute
            ),
            actual=values,
            expected=expected,
            selector=selector,
            attribute=attribute
        )

    async def style(self, selector: Selector, style: str, expected: str, msg: Optional[str] = None) -> None:
        """The first matched element's computed ``style`` equals ``expected``."""
        name = "assert.style"
        try:
            value = await self._browser.evaluate(scripts.COMPUTED_STYLE, selector, style)
        except Exception as err:
            raise QueryException(
                not_found_message(selector),
                assertion_name=name,
                original_exception=err
            ) from err
        if value is None:
            raise QueryException(not_found_message(selector), assertion_name=name)

        if value != expected:
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=expected, actual=value, style=style),
                actual=value,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, value, selector=selector, style=style)

    async def href(self, selector: Selector, expected: Any, msg: Optional[str] = None) -> None:
        """Some matched element has an ``href`` matching ``expected``."""
        try:
            await self.attribute(selector, "href", expected, msg)
        except AutomationException as err:
            raise relabel(err, "assert.href") from err

    async def inner_html(self, selector: Selector, expected: Any, msg: Optional[str] = None) -> None:
        """Some matched element's inner html equals (or matches) ``expected``."""
        name = "assert.innerHtml"
        expectation = self._scalar(name, expected, "html")

        found: List[str] = await self._call(name, self._browser.inner_html(selector))
        if not found:
            raise QueryException(not_found_message(selector), assertion_name=name)
        if not matches_list(found, expectation):
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=expected, actual=found),
                actual=found,
                expected=expected,
                selector=selector
            )
        self._passed(name, expected, found, selector=selector)

    async def options(self, selector: Selector, expected: Union[str, Sequence[str]], msg: Optional[str] = None) -> None:
        """The select's options are exactly ``expected``, in any order."""
        name = "assert.options"
        parsed = self._option_list(name, expected)

        options: List[str] = await self._call(name, self._browser.options(selector))
        if not same_members(parsed, options):
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=parsed, actual=options),
                actual=options,
                expected=expected,
                selector=selector
            )
        self._passed(name, parsed, options, selector=selector)

    async def selected_options(
            self,
            selector: Selector,
            expected: Union[str, Sequence[str]],
            msg: Optional[str] = None
    ) -> None:
        """The selected options are exactly ``expected``, in any order."""
        name = "assert.selectedOptions"
        parsed = self._option_list(name, expected)

        selected: List[str] = await self._call(name, self._browser.selected_options(selector))
        if not same_members(parsed, selected):
            self._reject(
                name,
                self._message(msg, name, selector=selector, expected=parsed, actual=selected),
                actual=selected,
                expected=expected,
                selector=selector
            )
        self._passed(name, parsed, selected, selector=selector)

    async def global_(self, key: str, expected: Any = UNSET, msg: Optional[str] = None) -> None:
        """
        ``window[key]`` is defined, or strictly equals ``expected`` when given.
        """
        name = "assert.global"
        result = await self._call(name, self._browser.evaluate(scripts.GLOBAL_VALUE, key))
        defined = bool(result.get("defined"))
        value = result.get("value")

        if not is_set(expected):
            if not defined:
                self._reject(name, self._message(msg, name, selector=key), key=key)
        elif not defined or not _strict_equals(value, expected):
            actual = value if defined else None
            self._reject(
                name,
                self._message(msg, name, selector=key, expected=expected, actual=actual),
                actual=actual,
                expected=expected,
                key=key
            )
        self._passed(name, None if expected is UNSET else expected, value, key=key)

    async def checked(self, selector: Selector, msg: Optional[str] = None) -> None:
        """The first element matching ``selector`` is checked."""
        name = "assert.checked"
        try:
            value = await self._browser.checked(selector)
        except Exception as err:
            raise QueryException(
                not_found_message(selector),
                assertion_name=name,
                original_exception=err
            ) from err
        if value is None:
            raise QueryException(not_found_message(selector), assertion_name=name)

        if value is not True:
            self._reject(
                name,
                self._message(msg, name, selector=selector),
                actual=value,
                expected=True,
                selector=selector
            )
        self._passed(name, True, value, selector=selector)

    async def _disabled_attribute(self, assertion_name: str, selector: Selector) -> Optional[str]:
        try:
            return await self._browser.attribute(selector, "disabled")
        except Exception as err:
            raise QueryException(
                not_found_message(selector),
                assertion_name=assertion_name,
                original_exception=err
            ) from err

    async def disabled(self, selector: Selector, msg: Optional[str] = None) -> None:
        """The element has a ``disabled`` attribute."""
        name = "assert.disabled"
        value = await self._disabled_attribute(name, selector)
        if value is None:
            self._reject(name, self._message(msg, name, selector=selector), selector=selector)
        self._passed(name, selector=selector)

    async def enabled(self, selector: Selector, msg: Optional[str] = None) -> None:
        """The element has no ``disabled`` attribute."""
        name = "assert.enabled"
        value = await self._disabled_attribute(name, selector)
        if value is not None:
            self._reject(name, self._message(msg, name, selector=selector), selector=selector)
        self._passed(name, selector=selector)

    async def focus(self, selector: Selector, msg: Optional[str] = None) -> None:
        """One of the elements matching ``selector`` has focus."""
        name = "assert.focus"
        try:
            focused = await self._browser.evaluate(scripts.FOCUSED, selector)
        except Exception as err:
            raise QueryException(
                not_found_message(selector),
                assertion_name=name,
                original_exception=err
            ) from err
        if focused is None:
            raise QueryException(not_found_message(selector), assertion_name=name)

        if not focused:
            self._reject(name, self._message(msg, name, selector=selector), selector=selector)
        self._passed(name, selector=selector)

    async def redirect(self, msg: Optional[str] = None) -> None:
        """
        The last opened page was reached through at least one redirect.

        Without a recorded navigation response this is a plain failure.
        """
        name = "assert.redirect"
        try:
            response = self._browser.initial_response
            chain = response.request.redirect_chain() if response is not None else []
        except Exception as err:
            raise relabel(err, name) from err

        if not chain:
            self._reject(name, self._message(msg, name), actual=len(chain))
        self._passed(name, actual=len(chain))

