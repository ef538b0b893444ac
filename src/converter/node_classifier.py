"""Classify raw Figma API nodes into typed design nodes.

``classify_node`` is total: unknown node types become ``GenericNode``,
missing style fields take their documented defaults, and unrecognized
enum strings fall back to the neutral member (LEFT, TOP, NONE, ...).

Image detection is deliberately fuzzy.  A RECTANGLE counts as an image
when its name mentions an image-like word or it has an IMAGE fill, so a
decorative rectangle named "background-image-frame" is classified as an
image too.  Downstream output depends on this exact behavior; do not
tighten it here.
"""

import logging
from enum import Enum
from typing import Any, Mapping, Optional, TypeVar

from pydantic import ValidationError

from src.schemas.design_node import (
    AnyDesignNode,
    BoundingBox,
    Color,
    Effect,
    EffectType,
    FontName,
    FrameNode,
    GenericNode,
    ImageNode,
    LetterSpacing,
    LetterSpacingUnit,
    LineHeight,
    LineHeightUnit,
    Offset,
    SolidFill,
    TextAlignHorizontal,
    TextAlignVertical,
    TextAutoResize,
    TextCase,
    TextDecoration,
    TextNode,
    default_text_fills,
)
from src.schemas.figma_api import ApiColor, ApiNode, ApiPaint

from .errors import MAX_TREE_DEPTH, TreeDepthError

logger = logging.getLogger(__name__)

IMAGE_NAME_HINTS = ("image", "img", "photo", "picture")

E = TypeVar("E", bound=Enum)


# ---------------------------------------------------------------------------
# Image heuristic
# ---------------------------------------------------------------------------

def is_image_candidate(node: ApiNode) -> bool:
    """True for a RECTANGLE whose name or fills suggest a bitmap."""
    if node.type != "RECTANGLE":
        return False
    name = (node.name or "").lower()
    if any(hint in name for hint in IMAGE_NAME_HINTS):
        return True
    return any(fill.type == "IMAGE" for fill in node.fills)


def _is_image_node(node: ApiNode, image_urls: Mapping[str, str]) -> bool:
    # A resolved URL wins before the name/fill checks run.
    if image_urls.get(node.id):
        return True
    return is_image_candidate(node)


def collect_image_node_ids(node: ApiNode | Mapping[str, Any]) -> list[str]:
    """Return every node id in the tree the image heuristic matches.

    The API client resolves bitmap URLs for these ids before classification.
    Ids come back in depth-first document order.
    """
    root = _as_api_node(node)
    ids: list[str] = []
    stack = [root]
    while stack:
        current = stack.pop()
        if is_image_candidate(current):
            ids.append(current.id)
        stack.extend(reversed(current.children))
    return ids


# ---------------------------------------------------------------------------
# Field mapping helpers
# ---------------------------------------------------------------------------

def _map_enum(value: Optional[str], enum_cls: type[E], default: E) -> E:
    """Case-insensitive lookup into a closed enum, ``default`` on anything else."""
    if not value:
        return default
    try:
        return enum_cls(value.strip().upper())
    except ValueError:
        return default


def _color(api_color: Optional[ApiColor]) -> Optional[Color]:
    if api_color is None:
        return None
    return Color(
        r=api_color.r,
        g=api_color.g,
        b=api_color.b,
        a=api_color.a if api_color.a is not None else 1.0,
    )


def _solid_fill(paint: ApiPaint) -> SolidFill:
    color = paint.color
    if color is not None and color.a is not None:
        alpha = color.a
    elif paint.opacity is not None:
        alpha = paint.opacity
    else:
        alpha = 1.0
    return SolidFill(
        color=Color(r=color.r, g=color.g, b=color.b) if color else None,
        opacity=alpha,
        blend_mode=paint.blendMode or "NORMAL",
    )


def _first_solid_fill(node: ApiNode) -> Optional[SolidFill]:
    for paint in node.fills:
        if paint.type == "SOLID" and paint.color is not None:
            return _solid_fill(paint)
    return None


def _text_fills(node: ApiNode) -> list[SolidFill]:
    fill = _first_solid_fill(node)
    return [fill] if fill else default_text_fills()


def _line_height(node: ApiNode) -> LineHeight:
    style = node.style
    if style is None:
        return LineHeight()

    unit = (style.lineHeightUnit or "").upper()
    if unit == "PIXELS" and style.lineHeightPx:
        return LineHeight(value=style.lineHeightPx, unit=LineHeightUnit.PIXELS)
    if unit == "FONT_SIZE_%" and style.lineHeightPercentFontSize:
        return LineHeight(value=style.lineHeightPercentFontSize, unit=LineHeightUnit.PERCENT)
    if unit == "INTRINSIC_%":
        return LineHeight()

    if style.lineHeightPx:
        return LineHeight(value=style.lineHeightPx, unit=LineHeightUnit.PIXELS)
    if style.lineHeightPercentFontSize:
        return LineHeight(value=style.lineHeightPercentFontSize, unit=LineHeightUnit.PERCENT)
    if style.lineHeightPercent:
        return LineHeight(value=style.lineHeightPercent, unit=LineHeightUnit.PERCENT)
    return LineHeight()


def _letter_spacing(node: ApiNode) -> LetterSpacing:
    if node.style is not None and node.style.letterSpacing:
        return LetterSpacing(value=node.style.letterSpacing, unit=LetterSpacingUnit.PIXELS)
    return LetterSpacing()


def _effects(node: ApiNode) -> list[Effect]:
    effects: list[Effect] = []
    for api_effect in node.effects:
        try:
            effect_type = EffectType(api_effect.type)
        except ValueError:
            logger.debug(f"Skipping unsupported effect {api_effect.type} on {node.id}")
            continue
        effects.append(Effect(
            type=effect_type,
            visible=api_effect.visible is not False,
            color=_color(api_effect.color),
            offset=Offset(x=api_effect.offset.x, y=api_effect.offset.y) if api_effect.offset else None,
            radius=api_effect.radius or 0.0,
        ))
    return effects


def _common_fields(node: ApiNode) -> dict[str, Any]:
    box = node.absoluteBoundingBox
    return {
        "id": node.id,
        "name": node.name,
        "type": node.type,
        "x": box.x if box else (node.x or 0.0),
        "y": box.y if box else (node.y or 0.0),
        "width": box.width if box else (node.width or 0.0),
        "height": box.height if box else (node.height or 0.0),
        "absolute_bounding_box": (
            BoundingBox(x=box.x, y=box.y, width=box.width, height=box.height) if box else None
        ),
        "rotation": node.rotation,
        "opacity": node.opacity,
        "visible": node.visible,
    }


# ---------------------------------------------------------------------------
# Variant builders
# ---------------------------------------------------------------------------

def _text_node(node: ApiNode, common: dict[str, Any]) -> TextNode:
    style = node.style
    return TextNode(
        **common,
        characters=node.characters or "",
        font_name=FontName(
            family=(style.fontFamily if style and style.fontFamily else "Inter"),
            style=(style.fontStyle if style and style.fontStyle else "Regular"),
        ),
        font_weight=(style.fontWeight if style and style.fontWeight else 400),
        font_size=(style.fontSize if style and style.fontSize else 16),
        line_height=_line_height(node),
        letter_spacing=_letter_spacing(node),
        fills=_text_fills(node),
        text_align_horizontal=_map_enum(
            style.textAlignHorizontal if style else None, TextAlignHorizontal, TextAlignHorizontal.LEFT
        ),
        text_align_vertical=_map_enum(
            style.textAlignVertical if style else None, TextAlignVertical, TextAlignVertical.TOP
        ),
        text_decoration=_map_enum(
            style.textDecoration if style else None, TextDecoration, TextDecoration.NONE
        ),
        text_case=_map_enum(style.textCase if style else None, TextCase, TextCase.ORIGINAL),
        text_auto_resize=_map_enum(
            style.textAutoResize if style else None, TextAutoResize, TextAutoResize.NONE
        ),
        effects=_effects(node),
    )


def _frame_node(node: ApiNode, common: dict[str, Any]) -> FrameNode:
    fill = _first_solid_fill(node)
    return FrameNode(
        **common,
        background_color=_color(node.backgroundColor),
        fills=[fill] if fill else [],
        corner_radius=node.cornerRadius,
    )


def _image_node(node: ApiNode, common: dict[str, Any], image_urls: Mapping[str, str]) -> ImageNode:
    fill = _first_solid_fill(node)
    return ImageNode(
        **common,
        image_url=image_urls.get(node.id) or "",
        fills=[fill] if fill else [],
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _as_api_node(node: ApiNode | Mapping[str, Any]) -> ApiNode:
    if isinstance(node, ApiNode):
        return node
    try:
        return ApiNode.model_validate(node)
    except ValidationError as e:
        # Raw trees past pydantic's nesting limit fail as a recursion loop.
        if any(error["type"] == "recursion_loop" for error in e.errors()):
            raise TreeDepthError(MAX_TREE_DEPTH + 1, str(node.get("id", ""))) from e
        raise


def classify_node(
    node: ApiNode | Mapping[str, Any],
    image_urls: Optional[Mapping[str, str]] = None,
) -> AnyDesignNode:
    """Convert a raw API node (and its subtree) into a typed design node.

    ``image_urls`` maps node ids to resolved bitmap URLs.  Nodes detected as
    images without an entry get an empty ``image_url`` and render as
    placeholders.
    """
    root = _as_api_node(node)
    urls = image_urls or {}
    design_node = _classify(root, urls, depth=0)
    logger.debug(f"Classified tree rooted at {root.id or '<no id>'} ({root.type})")
    return design_node


def _classify(node: ApiNode, image_urls: Mapping[str, str], depth: int) -> AnyDesignNode:
    if depth > MAX_TREE_DEPTH:
        raise TreeDepthError(depth, node.id)

    common = _common_fields(node)
    common["children"] = [_classify(child, image_urls, depth + 1) for child in node.children]

    if node.type == "TEXT":
        return _text_node(node, common)
    if node.type == "FRAME":
        return _frame_node(node, common)
    if _is_image_node(node, image_urls):
        return _image_node(node, common, image_urls)
    return GenericNode(**common)
