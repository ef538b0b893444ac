"""Pydantic models for the typed design-node tree.

The node classifier turns raw API nodes (``figma_api.ApiNode``) into this
closed set of variants.  Every variant carries a ``kind`` tag and
``AnyDesignNode`` is a discriminated union on it, so a serialized tree
validates back into the right classes.

Nodes are frozen: a tree is built once per conversion and only read
afterwards.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Closed set of domain node variants."""

    TEXT = "TEXT"
    FRAME = "FRAME"
    IMAGE = "IMAGE"
    GENERIC = "GENERIC"


class TextAlignHorizontal(str, Enum):
    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"
    JUSTIFIED = "JUSTIFIED"


class TextAlignVertical(str, Enum):
    TOP = "TOP"
    CENTER = "CENTER"
    BOTTOM = "BOTTOM"


class TextDecoration(str, Enum):
    NONE = "NONE"
    UNDERLINE = "UNDERLINE"
    STRIKETHROUGH = "STRIKETHROUGH"


class TextCase(str, Enum):
    ORIGINAL = "ORIGINAL"
    UPPER = "UPPER"
    LOWER = "LOWER"
    TITLE = "TITLE"


class TextAutoResize(str, Enum):
    NONE = "NONE"
    WIDTH_AND_HEIGHT = "WIDTH_AND_HEIGHT"
    HEIGHT = "HEIGHT"


class LineHeightUnit(str, Enum):
    AUTO = "AUTO"
    PIXELS = "PIXELS"
    PERCENT = "PERCENT"


class LetterSpacingUnit(str, Enum):
    PIXELS = "PIXELS"
    PERCENT = "PERCENT"


class EffectType(str, Enum):
    DROP_SHADOW = "DROP_SHADOW"
    LAYER_BLUR = "LAYER_BLUR"


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Color(_Frozen):
    """RGB color with 0-1 channels and an optional alpha."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class BoundingBox(_Frozen):
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class SolidFill(_Frozen):
    """A solid paint.  ``opacity`` is the effective alpha of the fill."""

    type: str = "SOLID"
    color: Optional[Color] = None
    opacity: float = 1.0
    blend_mode: str = "NORMAL"


class FontName(_Frozen):
    family: str = "Inter"
    style: str = "Regular"


class LineHeight(_Frozen):
    value: float = 1.2
    unit: LineHeightUnit = LineHeightUnit.AUTO


class LetterSpacing(_Frozen):
    value: float = 0.0
    unit: LetterSpacingUnit = LetterSpacingUnit.PIXELS


class Offset(_Frozen):
    x: float = 0.0
    y: float = 0.0


class Effect(_Frozen):
    type: EffectType
    visible: bool = True
    color: Optional[Color] = None
    offset: Optional[Offset] = None
    radius: float = 0.0


def default_text_fills() -> list[SolidFill]:
    """Opaque black, used when a TEXT node has no usable solid fill."""
    return [SolidFill(color=Color(r=0.0, g=0.0, b=0.0))]


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class DesignNode(_Frozen):
    """Fields shared by every node variant.

    ``type`` keeps the source tool's node type (e.g. ``RECTANGLE``) while
    ``kind`` is the variant tag used for dispatch.
    """

    kind: NodeKind
    id: str = ""
    name: str = ""
    type: str = ""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    absolute_bounding_box: Optional[BoundingBox] = None

    rotation: Optional[float] = None
    opacity: Optional[float] = None
    visible: Optional[bool] = None

    children: list["AnyDesignNode"] = Field(default_factory=list)

    @property
    def bounds(self) -> BoundingBox:
        """Absolute bounding box when known, local geometry otherwise."""
        if self.absolute_bounding_box is not None:
            return self.absolute_bounding_box
        return BoundingBox(x=self.x, y=self.y, width=self.width, height=self.height)

    @property
    def css_type(self) -> str:
        """Lower-cased type name used for the ``figma-{type}`` class."""
        return self.kind.value.lower()


class TextNode(DesignNode):
    kind: Literal[NodeKind.TEXT] = NodeKind.TEXT
    type: str = "TEXT"

    characters: str = ""
    font_name: FontName = Field(default_factory=FontName)
    font_weight: float = 400
    font_size: float = 16
    line_height: LineHeight = Field(default_factory=LineHeight)
    letter_spacing: LetterSpacing = Field(default_factory=LetterSpacing)
    fills: list[SolidFill] = Field(default_factory=default_text_fills)
    text_align_horizontal: TextAlignHorizontal = TextAlignHorizontal.LEFT
    text_align_vertical: TextAlignVertical = TextAlignVertical.TOP
    text_decoration: TextDecoration = TextDecoration.NONE
    text_case: TextCase = TextCase.ORIGINAL
    text_auto_resize: TextAutoResize = TextAutoResize.NONE
    effects: list[Effect] = Field(default_factory=list)


class FrameNode(DesignNode):
    kind: Literal[NodeKind.FRAME] = NodeKind.FRAME
    type: str = "FRAME"

    background_color: Optional[Color] = None
    fills: list[SolidFill] = Field(default_factory=list)
    corner_radius: Optional[float] = None


class ImageNode(DesignNode):
    """A rectangle detected as a bitmap.  Empty ``image_url`` means unresolved."""

    kind: Literal[NodeKind.IMAGE] = NodeKind.IMAGE
    type: str = "RECTANGLE"

    image_url: str = ""
    fills: list[SolidFill] = Field(default_factory=list)


class GenericNode(DesignNode):
    """Any node type without a dedicated variant (GROUP, VECTOR, ...)."""

    kind: Literal[NodeKind.GENERIC] = NodeKind.GENERIC

    @property
    def css_type(self) -> str:
        return (self.type or "generic").lower()


AnyDesignNode = Annotated[
    Union[TextNode, FrameNode, ImageNode, GenericNode],
    Field(discriminator="kind"),
]

for _model in (DesignNode, TextNode, FrameNode, ImageNode, GenericNode):
    _model.model_rebuild()
