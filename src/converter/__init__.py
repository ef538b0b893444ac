"""Figma → HTML conversion core.

Pipeline: raw API node → ``classify_node`` → design tree →
``render_document`` (position + styles per node) → HTML string.

``convert_figma_node`` runs the whole pipeline on raw API data.
"""

from typing import Any, Mapping, Optional

from src.schemas.conversion_options import ConversionOptions
from src.schemas.figma_api import ApiNode
from src.schemas.html_element import ConversionResult

from .errors import MAX_TREE_DEPTH, ConversionError, TreeDepthError
from .html_renderer import (
    FigmaHtmlConverter,
    build_element_tree,
    convert_to_html,
    render_document,
    sanitize_id,
)
from .node_classifier import classify_node, collect_image_node_ids, is_image_candidate
from .output_checks import check_html
from .position_calculator import calculate_position
from .style_extractor import FontRegistry, StyleExtractor, extract_styles


def convert_figma_node(
    raw_node: ApiNode | Mapping[str, Any],
    image_urls: Optional[Mapping[str, str]] = None,
    options: ConversionOptions | Mapping[str, Any] | None = None,
) -> ConversionResult:
    """Classify a raw API tree and render it in one call."""
    design_tree = classify_node(raw_node, image_urls)
    return render_document(design_tree, options)


__all__ = [
    "MAX_TREE_DEPTH",
    "ConversionError",
    "TreeDepthError",
    "FigmaHtmlConverter",
    "FontRegistry",
    "StyleExtractor",
    "build_element_tree",
    "calculate_position",
    "check_html",
    "classify_node",
    "collect_image_node_ids",
    "convert_figma_node",
    "convert_to_html",
    "extract_styles",
    "is_image_candidate",
    "render_document",
    "sanitize_id",
]
