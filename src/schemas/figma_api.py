"""Pydantic models for the raw Figma REST API node format.

Field names follow the API payload verbatim (camelCase) so a response body
can be validated directly with ``ApiNode.model_validate(data)``.  Only the
fields the converter reads are declared; everything else in the payload is
ignored.

Units are the API's own:
    colors:       r/g/b/a channels as 0-1 floats
    line height:  px (lineHeightPx) or percent (lineHeightPercent*)
    rotation:     degrees
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

class ApiColor(_ApiModel):
    """RGBA color with 0-1 channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: Optional[float] = None


class ApiRect(_ApiModel):
    """Axis-aligned box in canvas coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class ApiVector(_ApiModel):
    x: float = 0.0
    y: float = 0.0


# ---------------------------------------------------------------------------
# Paints, effects, type style
# ---------------------------------------------------------------------------

class ApiPaint(_ApiModel):
    """A single entry of a node's ``fills`` list."""

    type: str
    visible: Optional[bool] = None
    blendMode: Optional[str] = None
    color: Optional[ApiColor] = None
    opacity: Optional[float] = None
    imageRef: Optional[str] = None


class ApiEffect(_ApiModel):
    """A single entry of a node's ``effects`` list."""

    type: str
    visible: Optional[bool] = None
    color: Optional[ApiColor] = None
    offset: Optional[ApiVector] = None
    radius: Optional[float] = None


class ApiTypeStyle(_ApiModel):
    """The ``style`` block of a TEXT node."""

    fontFamily: Optional[str] = None
    fontPostScriptName: Optional[str] = None
    fontStyle: Optional[str] = None
    fontWeight: Optional[float] = None
    fontSize: Optional[float] = None
    lineHeightPx: Optional[float] = None
    lineHeightPercent: Optional[float] = None
    lineHeightPercentFontSize: Optional[float] = None
    lineHeightUnit: Optional[str] = None
    letterSpacing: Optional[float] = None
    textAlignHorizontal: Optional[str] = None
    textAlignVertical: Optional[str] = None
    textDecoration: Optional[str] = None
    textCase: Optional[str] = None
    textAutoResize: Optional[str] = None


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class ApiNode(_ApiModel):
    """One node of a Figma document tree, as returned by the REST API."""

    id: str = ""
    name: str = ""
    type: str = ""

    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: Optional[float] = None
    opacity: Optional[float] = None
    visible: Optional[bool] = None
    absoluteBoundingBox: Optional[ApiRect] = None
    absoluteRenderBounds: Optional[ApiRect] = None

    children: list["ApiNode"] = Field(default_factory=list)

    # TEXT
    characters: Optional[str] = None
    style: Optional[ApiTypeStyle] = None

    # Paint / effects (all visual nodes)
    fills: list[ApiPaint] = Field(default_factory=list)
    effects: list[ApiEffect] = Field(default_factory=list)

    # FRAME
    backgroundColor: Optional[ApiColor] = None
    cornerRadius: Optional[float] = None


class ApiNodeEntry(_ApiModel):
    """Value of one key in the ``nodes`` map of a /files/:key/nodes response."""

    document: ApiNode


class FigmaFileResponse(_ApiModel):
    """Response body of GET /v1/files/:key."""

    document: ApiNode
    name: str = ""
    lastModified: Optional[str] = None
    thumbnailUrl: Optional[str] = None
    version: Optional[str] = None


class FigmaNodesResponse(_ApiModel):
    """Response body of GET /v1/files/:key/nodes?ids=..."""

    name: str = ""
    nodes: dict[str, Optional[ApiNodeEntry]] = Field(default_factory=dict)
