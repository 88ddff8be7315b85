# src/browser_assertions/core/messages.py
"""
Default Failure Messages

Message synthesis is a pure function of the assertion name, the subject
(selector or key), the expected value and the actual value:

    >>> synthesize_message("assert.title", expected="Home", actual="Login")
    'Expected page title to be "Home", "Login" found.'

Each assertion registers its own template, so every assertion kind (and
every sub-case, such as "no value" versus "wrong value") produces a
specific sentence instead of a generic one. Custom messages supplied by
the caller always win; see ``resolve_message``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from browser_assertions.core.counting import count_message
from browser_assertions.core.matching import ABSENT, describe
from browser_assertions.core.types import UNSET, is_set


@dataclass(frozen=True)
class MessageContext:
    """Inputs of a message template."""

    assertion_name: str
    selector: Optional[str] = None
    expected: Any = UNSET
    actual: Any = UNSET
    max_length: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def clip(self, value: Any) -> str:
        text = str(value)
        if self.max_length is not None and len(text) > self.max_length:
            return text[:self.max_length] + "..."
        return text

    def found(self, values: Iterable[Any], empty: str, sep: str = " ") -> str:
        """Quoted, joined values, or ``empty`` when there are none."""
        values = [v for v in values if v is not None]
        if not values:
            return empty
        return f'"{self.clip(sep.join(str(v) for v in values))}"'


MessageBuilder = Callable[[MessageContext], str]

_TEMPLATES: Dict[str, MessageBuilder] = {}


def template(*assertion_names: str) -> Callable[[MessageBuilder], MessageBuilder]:
    """Register a message builder for one or more assertion names."""
    def decorator(builder: MessageBuilder) -> MessageBuilder:
        for name in assertion_names:
            _TEMPLATES[name] = builder
        return builder
    return decorator


def registered_assertions() -> List[str]:
    return sorted(_TEMPLATES)


def synthesize_message(
        assertion_name: str,
        selector: Optional[str] = None,
        expected: Any = UNSET,
        actual: Any = UNSET,
        max_length: Optional[int] = None,
        **details: Any
) -> str:
    """
    Build the default failure message for an assertion.

    Raises:
        KeyError: if no template is registered for ``assertion_name``
    """
    builder = _TEMPLATES[assertion_name]
    return builder(MessageContext(
        assertion_name=assertion_name,
        selector=selector,
        expected=expected,
        actual=actual,
        max_length=max_length,
        details=details
    ))


def resolve_message(custom: Optional[str], assertion_name: str, **kwargs: Any) -> str:
    """The caller's custom message if given, else the synthesized default."""
    if custom:
        return custom
    return synthesize_message(assertion_name, **kwargs)


def not_found_message(selector: str) -> str:
    return f'Element "{selector}" not found.'


def no_match_message(selector: str) -> str:
    return f'Selector "{selector}" doesn\'t match any elements.'


@template("assert.exists")
def _exists(ctx: MessageContext) -> str:
    return f'Expected element "{ctx.selector}" to exist.'


@template("assert.visible")
def _visible(ctx: MessageContext) -> str:
    if ctx.details.get("no_match"):
        return no_match_message(ctx.selector)
    return f'Expected element "{ctx.selector}" to be visible.'


@template("assert.tag")
def _tag(ctx: MessageContext) -> str:
    return f'No element with tag "{ctx.expected}" found.'


@template("assert.text")
def _text(ctx: MessageContext) -> str:
    found = ctx.found(ctx.actual or [], "no text")
    return f'Expected element "{ctx.selector}" to have text "{describe(ctx.expected)}", {found} found.'


@template("assert.textContains")
def _text_contains(ctx: MessageContext) -> str:
    found = ctx.found(ctx.actual or [], "no text")
    return f'Expected element "{ctx.selector}" to contain text "{ctx.expected}", {found} found.'


@template("assert.title")
def _title(ctx: MessageContext) -> str:
    found = ctx.found([ctx.actual] if ctx.actual else [], "no title")
    return f'Expected page title to be "{describe(ctx.expected)}", {found} found.'


@template("assert.class")
def _class(ctx: MessageContext) -> str:
    found = ctx.found(ctx.actual or [], "no classes")
    return f'Expected element "{ctx.selector}" to contain class "{ctx.expected}", {found} found.'


@template("assert.url")
def _url(ctx: MessageContext) -> str:
    return f'Expected url to be "{describe(ctx.expected)}", "{ctx.clip(ctx.actual)}" found.'


@template("assert.value")
def _value(ctx: MessageContext) -> str:
    if ctx.expected is None:
        wanted = "no value"
    else:
        wanted = f'value "{describe(ctx.expected)}"'
    found = "no value" if ctx.actual is None else f'"{ctx.clip(ctx.actual)}"'
    return f'Expected element "{ctx.selector}" to have {wanted}, {found} found.'


@template("assert.elements", "assert.element")
def _elements(ctx: MessageContext) -> str:
    return count_message(ctx.selector, ctx.expected, ctx.actual)


@template("assert.attribute", "assert.href")
def _attribute(ctx: MessageContext) -> str:
    attribute = ctx.details["attribute"]
    if ctx.expected is ABSENT:
        base = f'Expected element "{ctx.selector}" not to have attribute "{attribute}"'
    else:
        base = f'Expected element "{ctx.selector}" to have attribute "{attribute}"'
        if is_set(ctx.expected):
            base = f'{base} with value "{describe(ctx.expected)}"'

    values = ctx.actual if is_set(ctx.actual) else []
    if not values:
        return f"{base}, no element found."

    present = list(dict.fromkeys(v for v in values if v is not None))
    if not present or ctx.expected is ABSENT:
        return f"{base}."
    found = '", "'.join(ctx.clip(v) for v in present)
    return f'{base}, ["{found}"] found.'


@template("assert.style")
def _style(ctx: MessageContext) -> str:
    base = (
        f'Expected element "{ctx.selector}" to have style "{ctx.details["style"]}" '
        f'with value "{ctx.expected}"'
    )
    if ctx.actual:
        return f'{base}, "{ctx.clip(ctx.actual)}" found.'
    return f"{base}, style not found."


@template("assert.innerHtml")
def _inner_html(ctx: MessageContext) -> str:
    found = ctx.found(ctx.actual or [], '""')
    return f'Expected element "{ctx.selector}" to have inner html "{describe(ctx.expected)}", {found} found.'


@template("assert.options")
def _options(ctx: MessageContext) -> str:
    expected = ", ".join(ctx.expected)
    found = ", ".join(ctx.actual)
    return f'Expected element "{ctx.selector}" to have options "{expected}", "{ctx.clip(found)}" found.'


@template("assert.selectedOptions")
def _selected_options(ctx: MessageContext) -> str:
    expected = ", ".join(ctx.expected)
    found = ", ".join(ctx.actual)
    return (
        f'Expected element "{ctx.selector}" to have options "{expected}" selected, '
        f'"{ctx.clip(found)}" found.'
    )


@template("assert.global")
def _global(ctx: MessageContext) -> str:
    if not is_set(ctx.expected):
        return f'Expected "{ctx.selector}" to be defined as global variable.'
    return (
        f'Expected "{ctx.selector}" to be defined as global variable with value '
        f'"{ctx.expected}", "{ctx.clip(ctx.actual)}" found.'
    )


@template("assert.checked")
def _checked(ctx: MessageContext) -> str:
    return f'Expected element "{ctx.selector}" to be checked.'


@template("assert.disabled")
def _disabled(ctx: MessageContext) -> str:
    return f'Expected element "{ctx.selector}" to be disabled.'


@template("assert.enabled")
def _enabled(ctx: MessageContext) -> str:
    return f'Expected element "{ctx.selector}" to be enabled.'


@template("assert.focus")
def _focus(ctx: MessageContext) -> str:
    return f'Expected element "{ctx.selector}" to be focused.'


@template("assert.redirect")
def _redirect(ctx: MessageContext) -> str:
    return "Expected current url to be a redirection."
