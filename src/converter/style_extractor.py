"""Map design-node attributes to CSS declarations.

``extract_styles`` returns an insertion-ordered dict of CSS property →
value.  Order matters: the renderer writes declarations exactly as they
were added, which keeps output byte-stable across runs.

Font families seen along the way are recorded in a ``FontRegistry`` the
caller passes in.  One registry belongs to one conversion.
"""

from typing import Optional

from src.schemas.conversion_options import ConversionOptions
from src.schemas.design_node import (
    Color,
    DesignNode,
    EffectType,
    FrameNode,
    LetterSpacing,
    LetterSpacingUnit,
    LineHeight,
    LineHeightUnit,
    SolidFill,
    TextAlignHorizontal,
    TextAutoResize,
    TextCase,
    TextDecoration,
    TextNode,
)


# Non-default enum values → CSS keywords.
_TEXT_DECORATION_CSS = {
    TextDecoration.UNDERLINE: "underline",
    TextDecoration.STRIKETHROUGH: "line-through",
}
_TEXT_CASE_CSS = {
    TextCase.UPPER: "uppercase",
    TextCase.LOWER: "lowercase",
    TextCase.TITLE: "capitalize",
}
_TEXT_ALIGN_CSS = {
    TextAlignHorizontal.CENTER: "center",
    TextAlignHorizontal.RIGHT: "right",
    TextAlignHorizontal.JUSTIFIED: "justify",
}


class FontRegistry:
    """Font families used during one conversion, in first-seen order."""

    def __init__(self) -> None:
        self._families: dict[str, None] = {}

    def add(self, family: str) -> None:
        if family:
            self._families.setdefault(family, None)

    def used_fonts(self) -> list[str]:
        return list(self._families)

    def __len__(self) -> int:
        return len(self._families)


# ---------------------------------------------------------------------------
# Value formatting
# ---------------------------------------------------------------------------

def format_number(value: float) -> str:
    """Shortest plain rendering of a number: 16.0 → '16', 1.5 → '1.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _channel(value: float) -> int:
    return max(0, min(255, int(value * 255 + 0.5)))


def css_color(color: Color, alpha: float = 1.0) -> str:
    """``rgb(r, g, b)`` for opaque colors, ``rgba(r, g, b, a)`` otherwise."""
    r, g, b = _channel(color.r), _channel(color.g), _channel(color.b)
    if alpha == 1:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {format_number(alpha)})"


def css_blend_mode(mode: Optional[str]) -> Optional[str]:
    """CSS ``mix-blend-mode`` keyword, or None for the default blending."""
    if not mode or mode.upper() in ("NORMAL", "PASS_THROUGH"):
        return None
    return mode.lower().replace("_", "-")


def sanitize_font_family(family: str) -> str:
    """Quote family names containing whitespace."""
    if any(ch.isspace() for ch in family):
        return f'"{family}"'
    return family


def css_line_height(line_height: LineHeight) -> str:
    if line_height.unit == LineHeightUnit.AUTO:
        return "normal"
    if line_height.unit == LineHeightUnit.PERCENT and line_height.value > 0:
        return format_number(line_height.value / 100)
    return f"{format_number(line_height.value)}px"


def css_letter_spacing(letter_spacing: LetterSpacing) -> str:
    if letter_spacing.unit == LetterSpacingUnit.PERCENT and letter_spacing.value > 0:
        return f"{format_number(letter_spacing.value / 100)}em"
    return f"{format_number(letter_spacing.value)}px"


def _first_solid(fills: list[SolidFill]) -> Optional[SolidFill]:
    for fill in fills:
        if fill.type == "SOLID" and fill.color is not None:
            return fill
    return None


# ---------------------------------------------------------------------------
# Style groups
# ---------------------------------------------------------------------------

def _add_basic_styles(node: DesignNode, styles: dict[str, str]) -> None:
    styles["position"] = "absolute"

    if node.opacity is not None and node.opacity != 1:
        styles["opacity"] = format_number(node.opacity)

    if node.visible is False:
        styles["display"] = "none"


def _add_frame_styles(node: FrameNode, styles: dict[str, str]) -> None:
    if node.background_color is not None:
        styles["background-color"] = css_color(node.background_color, node.background_color.a)

    # A solid fill takes precedence over the plain background color.
    if node.fills:
        fill = node.fills[0]
        if fill.type == "SOLID" and fill.color is not None:
            styles["background-color"] = css_color(fill.color, fill.opacity)
            blend = css_blend_mode(fill.blend_mode)
            if blend:
                styles["mix-blend-mode"] = blend

    if node.corner_radius:
        styles["border-radius"] = f"{format_number(node.corner_radius)}px"


def _add_text_styles(node: TextNode, styles: dict[str, str], fonts: FontRegistry) -> None:
    styles["margin-top"] = "0px"
    styles["margin-bottom"] = "0px"

    family = node.font_name.family
    styles["font-family"] = sanitize_font_family(family)
    styles["font-style"] = "italic" if "Italic" in node.font_name.style else "normal"
    fonts.add(family)

    styles["font-weight"] = format_number(node.font_weight)
    styles["font-size"] = f"{format_number(node.font_size)}px"
    styles["line-height"] = css_line_height(node.line_height)
    styles["letter-spacing"] = css_letter_spacing(node.letter_spacing)

    fill = _first_solid(node.fills)
    if fill is not None:
        styles["color"] = css_color(fill.color, fill.opacity)
        blend = css_blend_mode(fill.blend_mode)
        if blend:
            styles["mix-blend-mode"] = blend

    decoration = _TEXT_DECORATION_CSS.get(node.text_decoration)
    if decoration:
        styles["text-decoration"] = decoration

    transform = _TEXT_CASE_CSS.get(node.text_case)
    if transform:
        styles["text-transform"] = transform

    align = _TEXT_ALIGN_CSS.get(node.text_align_horizontal)
    if align:
        styles["text-align"] = align

    if node.text_auto_resize == TextAutoResize.WIDTH_AND_HEIGHT:
        styles["white-space"] = "nowrap"


def _add_effect_styles(node: TextNode, styles: dict[str, str]) -> None:
    shadows: list[str] = []
    blur_radius: Optional[float] = None

    for effect in node.effects:
        if not effect.visible:
            continue
        if effect.type == EffectType.DROP_SHADOW:
            if effect.offset is None or effect.color is None:
                continue
            color = effect.color
            rgba = (
                f"rgba({_channel(color.r)}, {_channel(color.g)}, {_channel(color.b)}, "
                f"{format_number(color.a)})"
            )
            shadows.append(
                f"{format_number(effect.offset.x)}px {format_number(effect.offset.y)}px "
                f"{format_number(effect.radius)}px {rgba}"
            )
        elif effect.type == EffectType.LAYER_BLUR and blur_radius is None:
            blur_radius = effect.radius

    if shadows:
        styles["text-shadow"] = ", ".join(shadows)

    if blur_radius is not None:
        styles["filter"] = f"blur({format_number(blur_radius)}px)"
        styles["-webkit-filter"] = f"blur({format_number(blur_radius)}px)"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_styles(
    node: DesignNode,
    options: ConversionOptions | None = None,
    fonts: FontRegistry | None = None,
) -> dict[str, str]:
    """CSS declarations for one node (position geometry excluded)."""
    options = options or ConversionOptions()
    fonts = fonts if fonts is not None else FontRegistry()
    styles: dict[str, str] = {}

    _add_basic_styles(node, styles)

    if isinstance(node, FrameNode):
        _add_frame_styles(node, styles)

    if isinstance(node, TextNode):
        _add_text_styles(node, styles, fonts)
        if options.preserve_text_effects:
            _add_effect_styles(node, styles)

    return styles


class StyleExtractor:
    """Object wrapper around ``extract_styles`` owning one font registry."""

    def __init__(self, options: ConversionOptions | None = None):
        self.options = options or ConversionOptions()
        self.fonts = FontRegistry()

    def extract_styles(self, node: DesignNode) -> dict[str, str]:
        return extract_styles(node, self.options, self.fonts)

    def get_used_fonts(self) -> list[str]:
        return self.fonts.used_fonts()
