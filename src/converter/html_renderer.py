"""Assemble a design-node tree into one self-contained HTML document.

Every design node becomes a ``ProcessedElement`` and then a wrapper
``<div>`` carrying the element's classes and attributes, with the semantic
tag (``p``, ``div`` or ``img``) nested inside.  The wrapper keeps nesting
valid whatever the tag is: an image can still hold overlay text.

Styles are not inlined.  Each element gets a class token derived from its
node id and one rule in the embedded stylesheet:

    <style>
      ...base rules...
      .figma-1-2 { position: absolute; ...; left: 10.0000%; top: ...; }
    </style>
    <div class="figma-container">
      <div class="figma-1-2 figma-frame"><div>...</div></div>
    </div>

A class (not an ``id`` attribute) is used because raw Figma ids contain
colons, which would need escaping in a CSS selector.
"""

import logging
import re
from html import escape
from typing import Any, Mapping, Optional

from src.schemas.conversion_options import ConversionOptions
from src.schemas.design_node import DesignNode, ImageNode, NodeKind, TextNode
from src.schemas.html_element import ConversionResult, ProcessedElement

from .errors import MAX_TREE_DEPTH, TreeDepthError
from .position_calculator import calculate_position, validate_container
from .style_extractor import FontRegistry, extract_styles, format_number

logger = logging.getLogger(__name__)


_TAG_MAP = {
    NodeKind.TEXT: "p",
    NodeKind.FRAME: "div",
    NodeKind.IMAGE: "img",
    NodeKind.GENERIC: "div",
}

_UNSAFE_TOKEN_CHARS = re.compile(r"[^a-zA-Z0-9_-]")

# Class names the base stylesheet defines; element ids must not reuse them.
RESERVED_CLASSES = frozenset({"figma-container", "figma-text", "figma-frame", "figma-image"})

# Light-grey picture glyph shown centered in unresolved image boxes.
PLACEHOLDER_ICON = (
    "data:image/svg+xml;utf8,"
    "%3Csvg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 24 24' fill='none' "
    "stroke='%23bbbbbb' stroke-width='1.5'%3E"
    "%3Crect x='3' y='3' width='18' height='18' rx='2'/%3E"
    "%3Ccircle cx='8.5' cy='8.5' r='1.5'/%3E"
    "%3Cpath d='M21 15l-5-5L5 21'/%3E%3C/svg%3E"
)


# ---------------------------------------------------------------------------
# Base CSS stylesheet (resets and per-type utility classes)
# ---------------------------------------------------------------------------

BASE_CSS = """\
*, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }

.figma-text {
    white-space: pre-wrap;
    word-wrap: break-word;
}

.figma-frame {
    overflow: hidden;
}

.figma-image {
    object-fit: cover;
    object-position: center;
    max-width: 100%;
    max-height: 100%;
}
.figma-image > img {
    display: block;
    width: 100%;
    height: 100%;
    object-fit: cover;
}
.figma-image[data-placeholder="true"] {
    background-image: url("PLACEHOLDER_ICON");
    background-repeat: no-repeat;
    background-position: center;
    background-size: 48px 48px;
    border: 1px dashed #ccc;
}
.figma-image[data-placeholder="true"] > img {
    visibility: hidden;
}
""".replace("PLACEHOLDER_ICON", PLACEHOLDER_ICON)


# ---------------------------------------------------------------------------
# Element ids
# ---------------------------------------------------------------------------

def sanitize_id(value: str) -> str:
    """Replace every character outside ``[a-zA-Z0-9_-]`` with ``-``."""
    return _UNSAFE_TOKEN_CHARS.sub("-", value)


class _IdAllocator:
    """Hands out sanitized element ids, unique within one conversion.

    Ids differing only in punctuation ("1:2" vs "1;2") sanitize to the same
    token; later ones get a numeric suffix in document order.  Tokens in
    ``reserved`` (the stylesheet's own class names) are never handed out.
    """

    def __init__(self, reserved: set[str] | None = None) -> None:
        self._used: set[str] = set(reserved or ())

    def allocate(self, raw: str) -> str:
        base = sanitize_id(raw)
        token = base
        suffix = 2
        while token in self._used:
            token = f"{base}-{suffix}"
            suffix += 1
        self._used.add(token)
        return token


# ---------------------------------------------------------------------------
# Tree assembly
# ---------------------------------------------------------------------------

def _type_class(node: DesignNode) -> str:
    return f"figma-{sanitize_id(node.css_type)}"


def _type_classes(root: DesignNode) -> set[str]:
    classes: set[str] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        classes.add(_type_class(node))
        stack.extend(node.children)
    return classes


def _node_content(node: DesignNode) -> str:
    if isinstance(node, TextNode):
        return node.characters
    return ""


def _node_attributes(node: DesignNode) -> dict[str, str]:
    attributes: dict[str, str] = {}
    if isinstance(node, ImageNode):
        if node.image_url:
            attributes["src"] = node.image_url
            attributes["alt"] = node.name or "Image"
        else:
            attributes["data-placeholder"] = "true"
            attributes["alt"] = f"{node.name or 'Image'} (placeholder)"
    return attributes


class _Assembler:
    """Walks one design tree.  Holds the per-conversion state."""

    def __init__(self, container: DesignNode, options: ConversionOptions, fonts: FontRegistry):
        self.container = container
        self.options = options
        self.fonts = fonts
        self.ids = _IdAllocator(RESERVED_CLASSES | _type_classes(container))
        self.counter = 0

    def process(self, node: DesignNode, depth: int = 0) -> ProcessedElement:
        if depth > MAX_TREE_DEPTH:
            raise TreeDepthError(depth, node.id)

        self.counter += 1
        element_id = self.ids.allocate(f"figma-{node.id or self.counter}")

        styles = extract_styles(node, self.options, self.fonts)
        position = calculate_position(node, self.container, self.options)
        # Position properties always come after the semantic styles.
        styles.update(position.to_styles())

        return ProcessedElement(
            id=element_id,
            tag=_TAG_MAP[node.kind],
            content=_node_content(node),
            styles=styles,
            position=position,
            classes=[_type_class(node)],
            attributes=_node_attributes(node),
            children=[self.process(child, depth + 1) for child in node.children],
        )


def build_element_tree(
    root: DesignNode,
    options: ConversionOptions | None = None,
    fonts: FontRegistry | None = None,
) -> ProcessedElement:
    """Turn a design tree into the element tree, measuring against ``root``."""
    options = options or ConversionOptions()
    validate_container(root)
    assembler = _Assembler(root, options, fonts if fonts is not None else FontRegistry())
    return assembler.process(root)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _css_value(value: str) -> str:
    # "<" must not appear raw inside <style>; CSS hex escape keeps the value intact.
    return value.replace("<", "\\3c ")


def _css_rule(element: ProcessedElement, compact: bool) -> str:
    declarations = [f"{key}: {_css_value(value)};" for key, value in element.styles.items()]
    if compact:
        return f".{element.id} {{ {' '.join(declarations)} }}"
    body = "\n".join(f"    {d}" for d in declarations)
    return f".{element.id} {{\n{body}\n}}"


def _container_css(root: DesignNode, options: ConversionOptions) -> str:
    bounds = root.bounds
    width = options.container_width or bounds.width
    height = options.container_height or bounds.height
    lines = [
        ".figma-container {",
        f"    width: {format_number(width)}px;",
        f"    height: {format_number(height)}px;",
        "    position: relative;",
        "    overflow: hidden;",
    ]
    if options.scale_factor != 1:
        lines.append(f"    transform: scale({format_number(options.scale_factor)});")
        lines.append("    transform-origin: left top;")
    lines.append("}")
    return "\n".join(lines)


def generate_css(root: DesignNode, element: ProcessedElement, options: ConversionOptions) -> str:
    """Full stylesheet: base rules, container rule, one rule per element."""
    rules = [_css_rule(el, options.optimize_output) for el in element.walk() if el.styles]
    separator = "\n" if options.optimize_output else "\n\n"
    return "\n".join([BASE_CSS, _container_css(root, options), "", separator.join(rules)])


def _attribute_string(attributes: Mapping[str, str]) -> str:
    return " ".join(f'{key}="{escape(value)}"' for key, value in attributes.items())


def render_element(element: ProcessedElement) -> str:
    """Serialize an element and its descendants to nested markup."""
    wrapper_attrs = {"class": " ".join([element.id, *element.classes]), **element.attributes}
    children_html = "".join(render_element(child) for child in element.children)

    if element.tag == "img":
        img_attrs = {k: element.attributes[k] for k in ("src", "alt") if k in element.attributes}
        img_attr_str = _attribute_string(img_attrs)
        inner = f"<img {img_attr_str}>" if img_attr_str else "<img>"
        inner += children_html
    else:
        inner = f"<{element.tag}>{escape(element.content)}{children_html}</{element.tag}>"

    return f"<div {_attribute_string(wrapper_attrs)}>{inner}</div>"


def _document(title: str, css: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape(title)}</title>
<style>
{css}
</style>
</head>
<body>
<div class="figma-container">
{body}
</div>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve_options(
    options: ConversionOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> ConversionOptions:
    """Accept options as a model, a plain mapping, or keyword overrides."""
    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, ConversionOptions):
        data = options.model_dump()
    else:
        data = dict(options)
    data.update(overrides)
    return ConversionOptions.model_validate(data)


def render_document(
    root: DesignNode,
    options: ConversionOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ConversionResult:
    """Convert a design tree to HTML, returning the document and its fonts."""
    resolved = resolve_options(options, **overrides)
    fonts = FontRegistry()

    tree = build_element_tree(root, resolved, fonts)
    css = generate_css(root, tree, resolved)
    html = _document(root.name or "Figma to HTML", css, render_element(tree))

    element_count = sum(1 for _ in tree.walk())
    logger.debug(
        f"Rendered {element_count} elements from '{root.name or root.id}' "
        f"({len(fonts)} font families)"
    )
    return ConversionResult(html=html, fonts=fonts.used_fonts(), element_count=element_count)


def convert_to_html(
    root: DesignNode,
    options: ConversionOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """Convert a design tree to one HTML document string."""
    return render_document(root, options, **overrides).html


class FigmaHtmlConverter:
    """Object interface over ``render_document``.

    ``get_used_fonts`` reports the fonts of the most recent conversion.
    """

    def __init__(self, options: ConversionOptions | Mapping[str, Any] | None = None):
        self.options = resolve_options(options)
        self._last_fonts: list[str] = []

    def convert(self, root: DesignNode, options: Optional[Mapping[str, Any]] = None) -> str:
        merged = resolve_options(self.options, **dict(options or {}))
        result = render_document(root, merged)
        self._last_fonts = result.fonts
        return result.html

    def get_used_fonts(self) -> list[str]:
        return list(self._last_fonts)
