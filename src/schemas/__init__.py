from .figma_api import (
    ApiColor, ApiEffect, ApiNode, ApiPaint, ApiRect, ApiTypeStyle,
    FigmaFileResponse, FigmaNodesResponse,
)
from .design_node import (
    AnyDesignNode, BoundingBox, Color, DesignNode, Effect, EffectType, FontName,
    FrameNode, GenericNode, ImageNode, LetterSpacing, LetterSpacingUnit, LineHeight,
    LineHeightUnit, NodeKind, Offset, SolidFill, TextAlignHorizontal, TextAlignVertical,
    TextAutoResize, TextCase, TextDecoration, TextNode,
)
from .html_element import ElementPosition, ProcessedElement, ConversionResult
from .conversion_options import ConversionOptions

__all__ = [
    "ApiColor",
    "ApiEffect",
    "ApiNode",
    "ApiPaint",
    "ApiRect",
    "ApiTypeStyle",
    "FigmaFileResponse",
    "FigmaNodesResponse",
    "AnyDesignNode",
    "BoundingBox",
    "Color",
    "DesignNode",
    "Effect",
    "EffectType",
    "FontName",
    "FrameNode",
    "GenericNode",
    "ImageNode",
    "LetterSpacing",
    "LetterSpacingUnit",
    "LineHeight",
    "LineHeightUnit",
    "NodeKind",
    "Offset",
    "SolidFill",
    "TextAlignHorizontal",
    "TextAlignVertical",
    "TextAutoResize",
    "TextCase",
    "TextDecoration",
    "TextNode",
    "ElementPosition",
    "ProcessedElement",
    "ConversionResult",
    "ConversionOptions",
]
