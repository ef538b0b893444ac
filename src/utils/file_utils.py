"""File I/O and path utilities."""

import json
import logging
from pathlib import Path
from typing import Any

from src.schemas.figma_api import ApiNode, FigmaFileResponse, FigmaNodesResponse

logger = logging.getLogger(__name__)


def ensure_directory(path: str | Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_json(path: str | Path) -> Any:
    """Load a JSON file and return its contents."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def save_json(data: Any, path: str | Path, indent: int = 2) -> None:
    """Save data to a JSON file."""
    path = Path(path)
    ensure_directory(path.parent)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)


def write_text(text: str, path: str | Path) -> Path:
    """Write a text file, creating parent directories."""
    path = Path(path)
    ensure_directory(path.parent)
    path.write_text(text, encoding="utf-8")
    return path


def extract_api_node(data: dict[str, Any], node_id: str | None = None) -> ApiNode:
    """Pick the node tree out of any saved Figma API payload.

    Accepts a bare node, a GET /files response (``document``) or a
    GET /files/:key/nodes response (``nodes``).  For a nodes response
    ``node_id`` selects the entry; the first one is used otherwise.
    """
    if "nodes" in data:
        response = FigmaNodesResponse.model_validate(data)
        entries = {key: entry for key, entry in response.nodes.items() if entry is not None}
        if not entries:
            raise ValueError("Nodes response contains no documents")
        if node_id is not None:
            if node_id not in entries:
                raise KeyError(f"Node {node_id} not in response (have: {', '.join(entries)})")
            return entries[node_id].document
        first_key = next(iter(entries))
        if len(entries) > 1:
            logger.warning(f"Nodes response has {len(entries)} entries, using {first_key}")
        return entries[first_key].document

    if "document" in data:
        return FigmaFileResponse.model_validate(data).document

    return ApiNode.model_validate(data)


def load_figma_json(path: str | Path, node_id: str | None = None) -> ApiNode:
    """Load a saved Figma API payload and return its node tree."""
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return extract_api_node(data, node_id)
