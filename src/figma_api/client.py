"""Figma REST API client.

Fetches document nodes and rendered image URLs, then hands the raw tree
to the conversion core.  All network I/O of the project lives here; the
converter itself never touches the network.

Typical use:

    client = FigmaApiClient(os.environ["FIGMA_TOKEN"])
    result = convert_figma_url_to_html(
        "https://www.figma.com/design/AbC123/Landing?node-id=12-34",
        client=client,
    )
    Path("out.html").write_text(result.html)
"""

import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import unquote

import requests

from src.converter import classify_node, collect_image_node_ids, render_document
from src.schemas.conversion_options import ConversionOptions
from src.schemas.figma_api import ApiNode, FigmaFileResponse, FigmaNodesResponse
from src.schemas.html_element import ConversionResult

logger = logging.getLogger(__name__)

FIGMA_API_BASE = "https://api.figma.com/v1"
DEFAULT_TIMEOUT = 30.0

# /images accepts a comma-separated id list; keep URLs well under proxy limits.
IMAGE_BATCH_SIZE = 50

_FILE_KEY_RE = re.compile(r"figma\.com/(?:design|file|proto)/([a-zA-Z0-9]+)")
_NODE_ID_RE = re.compile(r"[?&]node-id=([^&#]+)")


class FigmaApiError(RuntimeError):
    """A Figma API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


def parse_figma_url(url: str) -> tuple[str, Optional[str]]:
    """Extract ``(file_key, node_id)`` from a Figma share URL.

    The URL form ``node-id=12-34`` becomes the API form ``12:34``.
    """
    file_match = _FILE_KEY_RE.search(url)
    if not file_match:
        raise ValueError(f"Invalid Figma URL: {url}")

    node_id = None
    node_match = _NODE_ID_RE.search(url)
    if node_match:
        node_id = unquote(node_match.group(1)).replace("-", ":", 1)

    return file_match.group(1), node_id


class FigmaApiClient:
    """Thin wrapper over the three endpoints the converter needs."""

    def __init__(
        self,
        access_token: str,
        base_url: str = FIGMA_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not access_token:
            raise ValueError("A Figma access token is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"X-Figma-Token": access_token})

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.info(f"GET {url}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise FigmaApiError(f"Figma API request failed: {e}") from e

        if not response.ok:
            raise FigmaApiError(
                f"Figma API Error: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        return response.json()

    def get_file(self, file_key: str) -> FigmaFileResponse:
        """Fetch a whole file (document tree and metadata)."""
        data = self._get(f"/files/{file_key}")
        return FigmaFileResponse.model_validate(data)

    def get_node(self, file_key: str, node_id: str) -> ApiNode:
        """Fetch a single node subtree."""
        data = self._get(f"/files/{file_key}/nodes", params={"ids": node_id})
        response = FigmaNodesResponse.model_validate(data)
        entry = response.nodes.get(node_id)
        if entry is None:
            raise FigmaApiError(f"Node {node_id} not found in file {file_key}", status_code=404)
        return entry.document

    def get_image_urls(
        self,
        file_key: str,
        node_ids: list[str],
        fmt: str = "png",
        scale: float = 2,
    ) -> dict[str, str]:
        """Resolve rendered bitmap URLs for ``node_ids``.

        Failures are logged and yield an empty mapping, so the caller can
        carry on and render those nodes as placeholders.  Ids the API could
        not render (``null`` URLs) are left out.
        """
        urls: dict[str, str] = {}
        for start in range(0, len(node_ids), IMAGE_BATCH_SIZE):
            batch = node_ids[start:start + IMAGE_BATCH_SIZE]
            params = {"ids": ",".join(batch), "format": fmt, "scale": scale}
            try:
                data = self._get(f"/images/{file_key}", params=params)
            except FigmaApiError as e:
                logger.warning(f"Could not resolve image URLs for {len(batch)} node(s): {e}")
                return {}
            if data.get("err"):
                logger.warning(f"Figma image render error: {data['err']}")
                return {}
            for node_id, url in (data.get("images") or {}).items():
                if url:
                    urls[node_id] = url
        return urls


def fetch_node_tree(client: FigmaApiClient, url: str) -> tuple[str, ApiNode]:
    """Fetch the node a URL points at, or the whole document without a node-id."""
    file_key, node_id = parse_figma_url(url)
    if node_id:
        return file_key, client.get_node(file_key, node_id)
    return file_key, client.get_file(file_key).document


def convert_figma_url_to_html(
    url: str,
    access_token: Optional[str] = None,
    options: ConversionOptions | Mapping[str, Any] | None = None,
    client: Optional[FigmaApiClient] = None,
) -> ConversionResult:
    """Fetch a Figma node by URL and convert it to HTML.

    Image URLs are resolved in batches before classification; if that
    fails every detected image renders as a placeholder.
    """
    if client is None:
        if not access_token:
            raise ValueError("Either access_token or client is required")
        client = FigmaApiClient(access_token)

    file_key, api_node = fetch_node_tree(client, url)

    image_ids = collect_image_node_ids(api_node)
    image_urls: dict[str, str] = {}
    if image_ids:
        logger.info(f"Resolving {len(image_ids)} image node(s)")
        image_urls = client.get_image_urls(file_key, image_ids)

    design_tree = classify_node(api_node, image_urls)
    return render_document(design_tree, options)
