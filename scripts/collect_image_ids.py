#!/usr/bin/env python3
"""List the node ids the image heuristic flags in a saved Figma tree.

The output is what the API client sends to GET /v1/images before
conversion.  Paste the ids into a URL, or feed them to your own fetcher
and pass the resulting mapping to convert_figma.py --image-urls.

Usage:
    python scripts/collect_image_ids.py workspace/figma_node.json [-o workspace/image_ids.json]
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.converter import collect_image_node_ids
from src.utils.file_utils import load_figma_json, save_json


def main():
    parser = argparse.ArgumentParser(description="Collect candidate image node ids")
    parser.add_argument("input_json", type=Path, help="Saved Figma API JSON")
    parser.add_argument("--node-id", type=str, default=None,
                        help="Node to pick from a multi-node nodes response")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Write ids as a JSON list instead of printing")
    args = parser.parse_args()

    if not args.input_json.exists():
        print(f"Error: Input not found: {args.input_json}", file=sys.stderr)
        sys.exit(1)

    try:
        api_node = load_figma_json(args.input_json, args.node_id)
    except (KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    ids = collect_image_node_ids(api_node)

    if args.output:
        save_json(ids, args.output)
        print(f"{len(ids)} image node id(s) written to: {args.output}")
    else:
        print(json.dumps(ids, indent=2))


if __name__ == "__main__":
    main()
