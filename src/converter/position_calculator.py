"""Compute CSS geometry for a design node relative to the root container.

All percentages are taken against the *root* container's box, never an
intermediate ancestor's.  Text nodes are anchored by their alignment:

    LEFT / TOP        edge,      no translate
    CENTER            midpoint,  translate -50%
    RIGHT / BOTTOM    far edge,  translate -100%

so a text box keeps its anchor when the browser's text metrics differ
from the design tool's.
"""

from src.schemas.conversion_options import ConversionOptions
from src.schemas.design_node import (
    BoundingBox,
    DesignNode,
    TextAlignHorizontal,
    TextAlignVertical,
    TextNode,
)
from src.schemas.html_element import ElementPosition

from .errors import ConversionError


def validate_container(container: DesignNode) -> BoundingBox:
    """Return the container's bounds, rejecting a zero-extent box."""
    bounds = container.bounds
    if bounds.width == 0 or bounds.height == 0:
        raise ConversionError(
            f"Root container '{container.name or container.id}' has zero extent "
            f"({bounds.width}x{bounds.height}); cannot compute relative geometry"
        )
    return bounds


def _fixed(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    # Avoid "-0.0000" for values that round to zero.
    if text.lstrip("-").strip("0.") == "" and text.startswith("-"):
        text = text[1:]
    return text


def _text_anchor(
    node: TextNode, el: BoundingBox, box: BoundingBox
) -> tuple[float, float, int, int]:
    """Anchor point (x, y as fractions of the box) and translate offsets for text."""
    left = (el.x - box.x) / box.width
    top = (el.y - box.y) / box.height

    h_align = node.text_align_horizontal
    if h_align == TextAlignHorizontal.CENTER:
        x = left + (el.width / box.width) / 2
        translate_x = -50
    elif h_align == TextAlignHorizontal.RIGHT:
        x = (el.x + el.width - box.x) / box.width
        translate_x = -100
    else:
        x = left
        translate_x = 0

    v_align = node.text_align_vertical
    if v_align == TextAlignVertical.CENTER:
        y = (el.y + el.height / 2 - box.y) / box.height
        translate_y = -50
    elif v_align == TextAlignVertical.BOTTOM:
        y = (el.y + el.height - box.y) / box.height
        translate_y = -100
    else:
        y = top
        translate_y = 0

    return x, y, translate_x, translate_y


def calculate_transform(
    node: DesignNode, translate_x: int = 0, translate_y: int = 0
) -> tuple[str | None, str | None]:
    """Build the ``transform`` value and its origin, or ``(None, None)``."""
    transforms: list[str] = []

    if translate_x != 0 or translate_y != 0:
        transforms.append(f"translate({translate_x}%, {translate_y}%)")

    # Figma rotates counter-clockwise; CSS rotates clockwise.
    if node.rotation:
        transforms.append(f"rotate({-node.rotation:.2f}deg)")

    if not transforms:
        return None, None
    return " ".join(transforms), "left top"


def calculate_position(
    node: DesignNode,
    container: DesignNode,
    options: ConversionOptions | None = None,
) -> ElementPosition:
    """Position of ``node`` inside ``container`` as formatted CSS values."""
    options = options or ConversionOptions()
    precision = options.precision

    el = node.bounds
    box = validate_container(container)

    if isinstance(node, TextNode):
        x, y, translate_x, translate_y = _text_anchor(node, el, box)
    else:
        x = (el.x - box.x) / box.width
        y = (el.y - box.y) / box.height
        translate_x = translate_y = 0

    if options.enable_responsive:
        width = f"{_fixed(el.width / box.width * 100, precision)}%"
        height = f"{_fixed(el.height / box.height * 100, precision)}%"
    else:
        width = f"{_fixed(el.width, precision)}px"
        height = f"{_fixed(el.height, precision)}px"

    transform, origin = calculate_transform(node, translate_x, translate_y)

    return ElementPosition(
        x=f"{_fixed(x * 100, precision)}%",
        y=f"{_fixed(y * 100, precision)}%",
        width=width,
        height=height,
        transform=transform,
        transform_origin=origin,
    )
