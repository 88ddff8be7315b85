# tests/conftest.py
"""
Shared fixtures.

``FakeBrowser`` is an in-memory implementation of the ``Browser``
capability. Pages are described as plain dictionaries per selector, and
any capability can be made to fail through ``fail``.
"""

from typing import Any, Dict, List, Optional

import pytest

from browser_assertions.assertions.browser_assertions import BrowserAssertions
from browser_assertions.browser.protocol import PageScript
from browser_assertions.config.settings import Settings, get_settings
from browser_assertions.core.logger import setup_logging


class FakeRequest:
    def __init__(self, chain: List[str]):
        self._chain = list(chain)

    def redirect_chain(self) -> List[str]:
        return list(self._chain)


class FakeResponse:
    def __init__(self, chain: Optional[List[str]] = None):
        self.request = FakeRequest(chain or [])


class FakeBrowser:
    """
    Page model: ``elements[selector]`` is a list of element dicts with the
    optional keys ``tag``, ``text``, ``value``, ``classes``, ``attributes``,
    ``style``, ``checked``, ``html``, ``visible``, ``focused``, ``options``
    and ``selected``.
    """

    def __init__(self):
        self.elements: Dict[str, List[Dict[str, Any]]] = {}
        self.page_title: Optional[str] = ""
        self.page_url = "about:blank"
        self.globals: Dict[str, Any] = {}
        self.initial_response: Optional[FakeResponse] = None
        self.failures: Dict[str, BaseException] = {}
        self.calls: List[str] = []

    def add(self, selector: str, **element: Any) -> "FakeBrowser":
        self.elements.setdefault(selector, []).append(element)
        return self

    def fail(self, capability: str, error: BaseException) -> "FakeBrowser":
        """Make ``capability`` (method or page script name) raise ``error``."""
        self.failures[capability] = error
        return self

    def _enter(self, capability: str) -> None:
        self.calls.append(capability)
        if capability in self.failures:
            raise self.failures[capability]

    def _first(self, selector: str) -> Optional[Dict[str, Any]]:
        found = self.elements.get(selector, [])
        return found[0] if found else None

    async def query(self, selector):
        self._enter("query")
        return self._first(selector)

    async def query_all(self, selector):
        self._enter("query_all")
        return list(self.elements.get(selector, []))

    async def evaluate(self, script: PageScript, *args):
        self._enter("evaluate")
        self._enter(script.name)
        found = self.elements.get(args[0], []) if args else []

        if script.name == "tagNames":
            return [e.get("tag", "div") for e in found]
        if script.name == "visibility":
            return any(e.get("visible", True) for e in found) if found else None
        if script.name == "attributeValues":
            return [e.get("attributes", {}).get(args[1]) for e in found]
        if script.name == "computedStyle":
            return found[0].get("style", {}).get(args[1], "") if found else None
        if script.name == "focused":
            return any(e.get("focused", False) for e in found) if found else None
        if script.name == "globalValue":
            return {"defined": args[0] in self.globals, "value": self.globals.get(args[0])}
        raise NotImplementedError(script.name)

    async def text(self, selector):
        self._enter("text")
        return [e.get("text") for e in self.elements.get(selector, [])]

    async def value(self, selector):
        self._enter("value")
        element = self._first(selector)
        return element.get("value") if element else None

    async def class_list(self, selector):
        self._enter("class_list")
        element = self._first(selector)
        if element is None:
            raise LookupError(selector)
        return list(element.get("classes", []))

    async def options(self, selector):
        self._enter("options")
        element = self._first(selector)
        return list(element.get("options", [])) if element else []

    async def selected_options(self, selector):
        self._enter("selected_options")
        element = self._first(selector)
        return list(element.get("selected", [])) if element else []

    async def title(self):
        self._enter("title")
        return self.page_title

    async def url(self):
        self._enter("url")
        return self.page_url

    async def attribute(self, selector, name):
        self._enter("attribute")
        element = self._first(selector)
        if element is None:
            raise LookupError(selector)
        return element.get("attributes", {}).get(name)

    async def checked(self, selector):
        self._enter("checked")
        element = self._first(selector)
        return bool(element.get("checked")) if element else None

    async def inner_html(self, selector):
        self._enter("inner_html")
        return [e.get("html", "") for e in self.elements.get(selector, [])]


@pytest.fixture(scope="session", autouse=True)
def configured_logging():
    """Configure logging up front so that log capture is not replaced mid-test."""
    setup_logging(**Settings().get_logging_options())


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def assertions(browser, settings) -> BrowserAssertions:
    return BrowserAssertions(browser, settings=settings)


@pytest.fixture
def navigation_response():
    """Factory for recorded navigation responses with a given redirect chain."""
    return FakeResponse
