# src/browser_assertions/browser/protocol.py
"""
Browser Capability Interface

The assertion engine never drives a browser itself. It calls an object
implementing ``Browser`` and judges the values it returns. Any driver can
be plugged in; ``PlaywrightBrowser`` is the bundled implementation.

Contract notes:
- ``class_list`` and ``attribute`` raise when the selector matches nothing
  (``None`` from ``attribute`` means "element found, attribute absent").
- ``value``, ``checked`` return ``None`` when nothing matches.
- ``evaluate`` runs a ``PageScript`` in the page with the given arguments
  and may raise (invalid selector, script error).
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, runtime_checkable

from browser_assertions.core.types import Selector


@dataclass(frozen=True)
class PageScript:
    """
    A named page-side function.

    ``source`` is a JavaScript arrow function receiving the argument list
    as a single array parameter. Scripts are self-contained: the element
    query helper they need is part of their source.
    """

    name: str
    source: str


@runtime_checkable
class NavigationRequest(Protocol):
    """Request behind a navigation response."""

    def redirect_chain(self) -> List[Any]:
        """Requests that redirected to this one, oldest first."""
        ...


@runtime_checkable
class NavigationResponse(Protocol):
    """Response of the page's initial navigation."""

    @property
    def request(self) -> NavigationRequest:
        ...


@runtime_checkable
class Browser(Protocol):
    """Capabilities the assertion engine consumes."""

    @property
    def initial_response(self) -> Optional[NavigationResponse]:
        """Response recorded for the last ``open``, if any."""
        ...

    async def query(self, selector: Selector) -> Optional[Any]:
        ...

    async def query_all(self, selector: Selector) -> List[Any]:
        ...

    async def evaluate(self, script: PageScript, *args: Any) -> Any:
        ...

    async def text(self, selector: Selector) -> List[str]:
        ...

    async def value(self, selector: Selector) -> Optional[str]:
        ...

    async def class_list(self, selector: Selector) -> List[str]:
        ...

    async def options(self, selector: Selector) -> List[str]:
        ...

    async def selected_options(self, selector: Selector) -> List[str]:
        ...

    async def title(self) -> Optional[str]:
        ...

    async def url(self) -> str:
        ...

    async def attribute(self, selector: Selector, name: str) -> Optional[str]:
        ...

    async def checked(self, selector: Selector) -> Optional[bool]:
        ...

    async def inner_html(self, selector: Selector) -> List[str]:
        ...
