"""Structural checks on a generated HTML document.

Parses the document with BeautifulSoup and reports anything that breaks
the converter's output contract:

- a ``.figma-container`` div exists in the body
- element class tokens only use ``[A-Za-z0-9_-]`` and are unique
- image wrappers carry exactly one of ``src`` / ``data-placeholder``
- every per-element CSS rule targets an element that exists
"""

import logging
import re

from bs4 import BeautifulSoup, Tag

from .html_renderer import RESERVED_CLASSES

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_RULE_SELECTOR_RE = re.compile(r"^\s*\.([A-Za-z0-9_-]+)\s*\{", re.MULTILINE)


def _element_wrappers(container: Tag) -> list[Tag]:
    """Wrapper divs: every div below the container whose first class is an element id."""
    wrappers = []
    for div in container.find_all("div"):
        classes = div.get("class") or []
        if len(classes) >= 2 and classes[1].startswith("figma-"):
            wrappers.append(div)
    return wrappers


def _stylesheet_selectors(soup: BeautifulSoup) -> list[str]:
    selectors: list[str] = []
    for style_tag in soup.find_all("style"):
        css_text = style_tag.string or ""
        selectors.extend(_RULE_SELECTOR_RE.findall(css_text))
    return selectors


def check_html(html: str) -> list[str]:
    """Return a list of human-readable issues; empty means the document is clean."""
    soup = BeautifulSoup(html, "html.parser")
    issues: list[str] = []

    container = soup.find("div", class_="figma-container")
    if container is None:
        return ["Missing .figma-container div"]

    seen: set[str] = set()
    for wrapper in _element_wrappers(container):
        classes = wrapper.get("class") or []
        element_id, type_class = classes[0], classes[1]

        for token in classes:
            if not _TOKEN_RE.match(token):
                issues.append(f"Class token '{token}' contains characters outside [A-Za-z0-9_-]")

        if element_id in seen:
            issues.append(f"Duplicate element id '{element_id}'")
        seen.add(element_id)

        if type_class == "figma-image":
            has_src = wrapper.has_attr("src")
            has_placeholder = wrapper.get("data-placeholder") == "true"
            if has_src and has_placeholder:
                issues.append(f"Image '{element_id}' has both src and data-placeholder")
            elif not has_src and not has_placeholder:
                issues.append(f"Image '{element_id}' has neither src nor data-placeholder")

    for selector in _stylesheet_selectors(soup):
        if selector in RESERVED_CLASSES:
            continue
        if selector not in seen:
            issues.append(f"CSS rule '.{selector}' has no matching element")

    logger.debug(f"Checked {len(seen)} elements, {len(issues)} issue(s)")
    return issues
