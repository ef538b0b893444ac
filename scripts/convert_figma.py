#!/usr/bin/env python3
"""Convert a Figma node tree to a static HTML+CSS document.

The input is either a saved API payload (bare node, GET /files response,
or GET /files/:key/nodes response) or a live Figma URL.  Live fetches
need a personal access token in FIGMA_TOKEN (a .env file is read).

Usage:
    # From a saved API response:
    python scripts/convert_figma.py workspace/figma_node.json -o workspace/figma.html \
        --image-urls workspace/image_urls.json

    # Straight from Figma:
    python scripts/convert_figma.py --url "https://www.figma.com/design/AbC123/Page?node-id=1-2" \
        -o workspace/figma.html --config config/default.yaml
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

from src.converter import ConversionError, convert_figma_node
from src.figma_api.client import FigmaApiError, convert_figma_url_to_html
from src.schemas.conversion_options import ConversionOptions
from src.utils.file_utils import load_figma_json, load_json, write_text

logger = logging.getLogger(__name__)


def _build_options(args: argparse.Namespace) -> ConversionOptions:
    """Config file first, then command-line flags on top."""
    options = ConversionOptions()
    if args.config:
        options = ConversionOptions.from_yaml(args.config)

    overrides = {}
    if args.no_responsive:
        overrides["enable_responsive"] = False
    if args.no_effects:
        overrides["preserve_text_effects"] = False
    if args.pretty:
        overrides["optimize_output"] = False
    if args.precision is not None:
        overrides["precision"] = args.precision
    if args.scale is not None:
        overrides["scale_factor"] = args.scale
    if args.width is not None:
        overrides["container_width"] = args.width
    if args.height is not None:
        overrides["container_height"] = args.height

    return ConversionOptions.model_validate({**options.model_dump(), **overrides})


def main():
    parser = argparse.ArgumentParser(description="Convert a Figma node tree to HTML")
    parser.add_argument("input_json", type=Path, nargs="?",
                        help="Saved Figma API JSON (node, file or nodes response)")
    parser.add_argument("--url", type=str, default=None,
                        help="Figma design URL to fetch instead of a local file")
    parser.add_argument("--node-id", type=str, default=None,
                        help="Node to pick from a multi-node nodes response")
    parser.add_argument("-o", "--output", type=Path, default=Path("workspace/figma_output.html"),
                        help="Output HTML path (default: workspace/figma_output.html)")
    parser.add_argument("--image-urls", type=Path, default=None,
                        help="JSON mapping node id → resolved image URL (local input only)")
    parser.add_argument("--config", type=Path, default=None,
                        help="Conversion options YAML (e.g. config/default.yaml)")
    parser.add_argument("--no-responsive", action="store_true",
                        help="Emit px sizes instead of percentages")
    parser.add_argument("--no-effects", action="store_true",
                        help="Drop text shadows and blur filters")
    parser.add_argument("--pretty", action="store_true",
                        help="One CSS declaration per line")
    parser.add_argument("--precision", type=int, default=None,
                        help="Decimal places for geometry (default 4)")
    parser.add_argument("--scale", type=float, default=None,
                        help="Uniform zoom of the container")
    parser.add_argument("--width", type=float, default=None, help="Container width in px")
    parser.add_argument("--height", type=float, default=None, help="Container height in px")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if not args.url and args.input_json is None:
        parser.error("either input_json or --url is required")

    if args.config and not args.config.exists():
        print(f"Error: Config not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    options = _build_options(args)
    logger.debug(f"Options: {options.model_dump()}")

    try:
        if args.url:
            load_dotenv()
            token = os.environ.get("FIGMA_TOKEN")
            if not token:
                print("Error: FIGMA_TOKEN is not set", file=sys.stderr)
                sys.exit(1)
            result = convert_figma_url_to_html(args.url, token, options)
        else:
            if not args.input_json.exists():
                print(f"Error: Input not found: {args.input_json}", file=sys.stderr)
                sys.exit(1)
            api_node = load_figma_json(args.input_json, args.node_id)
            image_urls = load_json(args.image_urls) if args.image_urls else {}
            result = convert_figma_node(api_node, image_urls, options)
    except (ConversionError, FigmaApiError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    write_text(result.html, args.output)

    print(f"HTML: {args.output}")
    print(f"Elements: {result.element_count}")
    if result.fonts:
        print(f"Fonts: {', '.join(result.fonts)}")


if __name__ == "__main__":
    main()
