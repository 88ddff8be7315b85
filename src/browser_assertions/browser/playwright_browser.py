# src/browser_assertions/browser/playwright_browser.py
"""
Playwright Browser Adapter

Implements the ``Browser`` capability on top of a
``playwright.async_api.Page``. Launching browsers and creating pages is
left to the caller (usually pytest-playwright fixtures):

    >>> browser = PlaywrightBrowser(page)
    >>> await browser.open("https://example.com/login")
    >>> assertions = BrowserAssertions(browser)
    >>> await assertions.title("Login")
"""

from typing import Any, List, Optional

from playwright.async_api import ElementHandle, Page, Request, Response

from browser_assertions.browser import scripts
from browser_assertions.browser.protocol import PageScript
from browser_assertions.config.settings import Settings, get_settings
from browser_assertions.core.exceptions.assertion import QueryException
from browser_assertions.core.logger import get_logger
from browser_assertions.core.messages import not_found_message
from browser_assertions.core.types import Selector


def engine_selector(selector: Selector) -> str:
    """
    Selector in Playwright engine syntax.

    Selectors starting with ``//`` or ``(`` are XPath, as in the page
    scripts; Playwright itself would read ``(//a)[1]`` as CSS.
    """
    if selector.startswith("//") or selector.startswith("("):
        return f"xpath={selector}"
    return selector


class PlaywrightNavigationRequest:
    """Navigation request exposing its redirect chain."""

    def __init__(self, request: Request):
        self._request = request

    @property
    def url(self) -> str:
        return self._request.url

    def redirect_chain(self) -> List[Request]:
        """Requests that redirected to this one, oldest first."""
        chain: List[Request] = []
        current = self._request.redirected_from
        while current is not None:
            chain.append(current)
            current = current.redirected_from
        chain.reverse()
        return chain


class PlaywrightNavigationResponse:
    """Response of a navigation started by ``PlaywrightBrowser.open``."""

    def __init__(self, response: Response):
        self._response = response

    @property
    def url(self) -> str:
        return self._response.url

    @property
    def status(self) -> int:
        return self._response.status

    @property
    def request(self) -> PlaywrightNavigationRequest:
        return PlaywrightNavigationRequest(self._response.request)


class PlaywrightBrowser:
    """
    ``Browser`` implementation backed by a Playwright page.

    Readers run the page-side scripts from ``browser.scripts``; element
    lookups go through Playwright's selector engine with the same CSS/XPath
    detection as those scripts (see ``engine_selector``).
    """

    def __init__(self, page: Page, settings: Optional[Settings] = None):
        self.page = page
        self.settings = settings or get_settings()
        self.logger = get_logger("browser")
        self._initial_response: Optional[PlaywrightNavigationResponse] = None

    @property
    def initial_response(self) -> Optional[PlaywrightNavigationResponse]:
        return self._initial_response

    async def open(self, url: str) -> Optional[PlaywrightNavigationResponse]:
        """
        Navigate to ``url`` and record the navigation response.

        The response is what ``assert.redirect`` inspects. Navigations that
        produce no response (same-document, ``about:blank``) clear it.
        """
        response = await self.page.goto(
            url,
            timeout=self.settings.browser.timeout,
            wait_until=self.settings.browser.wait_until
        )
        self._initial_response = PlaywrightNavigationResponse(response) if response else None
        self.logger.debug(
            "Page opened",
            target_url=url,
            final_url=self.page.url,
            status=response.status if response else None
        )
        return self._initial_response

    async def query(self, selector: Selector) -> Optional[ElementHandle]:
        return await self.page.query_selector(engine_selector(selector))

    async def query_all(self, selector: Selector) -> List[ElementHandle]:
        return await self.page.query_selector_all(engine_selector(selector))

    async def evaluate(self, script: PageScript, *args: Any) -> Any:
        self.logger.debug("Evaluating page script", script=script.name)
        return await self.page.evaluate(script.source, list(args))

    async def text(self, selector: Selector) -> List[str]:
        return await self.evaluate(scripts.TEXTS, selector)

    async def value(self, selector: Selector) -> Optional[str]:
        return await self.evaluate(scripts.VALUE, selector)

    async def class_list(self, selector: Selector) -> List[str]:
        classes = await self.evaluate(scripts.CLASS_LIST, selector)
        if classes is None:
            raise QueryException(not_found_message(selector), assertion_name="browser.classList")
        return classes

    async def options(self, selector: Selector) -> List[str]:
        return await self.evaluate(scripts.OPTIONS, selector)

    async def selected_options(self, selector: Selector) -> List[str]:
        return await self.evaluate(scripts.SELECTED_OPTIONS, selector)

    async def title(self) -> Optional[str]:
        return await self.page.title()

    async def url(self) -> str:
        return self.page.url

    async def attribute(self, selector: Selector, name: str) -> Optional[str]:
        result = await self.evaluate(scripts.ATTRIBUTE, selector, name)
        if not result["found"]:
            raise QueryException(not_found_message(selector), assertion_name="browser.attribute")
        return result["value"]

    async def checked(self, selector: Selector) -> Optional[bool]:
        return await self.evaluate(scripts.CHECKED, selector)

    async def inner_html(self, selector: Selector) -> List[str]:
        return await self.evaluate(scripts.INNER_HTML, selector)
