# src/browser_assertions/browser/scripts.py
"""
Page-Side Scripts

Every script embeds ``QUERY_HELPERS`` so that it can resolve CSS and
XPath selectors without any helper object injected into the page
beforehand. Selectors starting with ``//`` or ``(`` are treated as XPath.
"""

from browser_assertions.browser.protocol import PageScript

QUERY_HELPERS = """
    const queryAll = (q) => {
        if (q.startsWith("//") || q.startsWith("(")) {
            const result = document.evaluate(q, document, null, XPathResult.ORDERED_NODE_SNAPSHOT_TYPE, null);
            const nodes = [];
            for (let i = 0; i < result.snapshotLength; i++) nodes.push(result.snapshotItem(i));
            return nodes;
        }
        return Array.from(document.querySelectorAll(q));
    };
    const isVisible = (e) => {
        const style = window.getComputedStyle(e);
        if (style.display === "none" || style.visibility === "hidden" || style.opacity === "0") return false;
        const rect = e.getBoundingClientRect();
        return rect.width > 0 && rect.height > 0;
    };
"""


def page_script(name: str, params: str, body: str) -> PageScript:
    """Wrap ``body`` into an arrow function with the query helpers in scope."""
    return PageScript(name=name, source=f"({params}) => {{{QUERY_HELPERS}\n{body}\n}}")


# Assertion projections

TAG_NAMES = page_script(
    "tagNames", "[q]",
    "return queryAll(q).map((e) => e.tagName.toLowerCase());"
)

VISIBILITY = page_script(
    "visibility", "[q]",
    """
    const elements = queryAll(q);
    if (elements.length === 0) return null;
    return elements.some((e) => isVisible(e));
    """
)

ATTRIBUTE_VALUES = page_script(
    "attributeValues", "[q, name]",
    "return queryAll(q).map((e) => e.getAttribute(name));"
)

COMPUTED_STYLE = page_script(
    "computedStyle", "[q, style]",
    """
    const element = queryAll(q)[0];
    if (!element) return null;
    return window.getComputedStyle(element).getPropertyValue(style);
    """
)

FOCUSED = page_script(
    "focused", "[q]",
    """
    const elements = queryAll(q);
    if (elements.length === 0) return null;
    return elements.some((e) => document.activeElement === e);
    """
)

GLOBAL_VALUE = page_script(
    "globalValue", "[key]",
    "return {defined: window[key] !== undefined, value: window[key]};"
)

# Readers used by the Playwright adapter

TEXTS = page_script(
    "texts", "[q]",
    "return queryAll(q).map((e) => e.innerText !== undefined ? e.innerText : e.textContent);"
)

VALUE = page_script(
    "value", "[q]",
    """
    const element = queryAll(q)[0];
    if (!element || element.value === undefined) return null;
    return element.value;
    """
)

CLASS_LIST = page_script(
    "classList", "[q]",
    """
    const element = queryAll(q)[0];
    if (!element) return null;
    return Array.from(element.classList);
    """
)

OPTIONS = page_script(
    "options", "[q]",
    """
    const element = queryAll(q)[0];
    if (!element || !element.options) return [];
    return Array.from(element.options).map((o) => o.value);
    """
)

SELECTED_OPTIONS = page_script(
    "selectedOptions", "[q]",
    """
    const element = queryAll(q)[0];
    if (!element || !element.options) return [];
    return Array.from(element.options).filter((o) => o.selected).map((o) => o.value);
    """
)

ATTRIBUTE = page_script(
    "attribute", "[q, name]",
    """
    const element = queryAll(q)[0];
    if (!element) return {found: false, value: null};
    return {found: true, value: element.getAttribute(name)};
    """
)

CHECKED = page_script(
    "checked", "[q]",
    """
    const element = queryAll(q)[0];
    if (!element) return null;
    return Boolean(element.checked);
    """
)

INNER_HTML = page_script(
    "innerHtml", "[q]",
    "return queryAll(q).map((e) => e.innerHTML);"
)
