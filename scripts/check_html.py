#!/usr/bin/env python3
"""Run structural checks on a converted HTML document.

Checks: container present, class tokens safe and unique, image wrappers
carry exactly one of src / data-placeholder, no orphan CSS rules.

Usage:
    python scripts/check_html.py workspace/figma_output.html
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.converter import check_html


def main():
    parser = argparse.ArgumentParser(description="Check converted HTML output")
    parser.add_argument("html_file", type=Path, help="HTML document produced by convert_figma.py")
    args = parser.parse_args()

    if not args.html_file.exists():
        print(f"Error: Not found: {args.html_file}", file=sys.stderr)
        sys.exit(1)

    issues = check_html(args.html_file.read_text(encoding="utf-8"))

    if issues:
        print(f"{len(issues)} issue(s) in {args.html_file}:")
        for issue in issues:
            print(f"  - {issue}")
        sys.exit(1)

    print(f"OK: {args.html_file}")


if __name__ == "__main__":
    main()
