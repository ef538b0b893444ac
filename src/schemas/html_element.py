"""Pydantic models for the render-time element tree.

``ProcessedElement`` is the intermediate the renderer builds for every
design node during one conversion: the node's computed position, its CSS
declarations and the markup attributes of its wrapper.  Nothing here is
persisted; the tree is thrown away once the HTML string exists.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ElementPosition(BaseModel):
    """Formatted CSS geometry of one element, relative to the root container."""

    x: str = Field(description="left, e.g. '12.5000%'")
    y: str = Field(description="top, e.g. '40.0000%'")
    width: str = Field(description="Percentage in responsive mode, px otherwise")
    height: Optional[str] = None
    transform: Optional[str] = Field(
        default=None,
        description="translate(...) for aligned text, then rotate(...)",
    )
    transform_origin: Optional[str] = None

    def to_styles(self) -> dict[str, str]:
        """CSS declarations for this position, in emission order."""
        styles = {"left": self.x, "top": self.y, "width": self.width}
        if self.height:
            styles["height"] = self.height
        if self.transform:
            styles["transform"] = self.transform
        if self.transform_origin:
            styles["transform-origin"] = self.transform_origin
        return styles


class ProcessedElement(BaseModel):
    """One node ready for serialization."""

    id: str = Field(description="Sanitized, conversion-unique class token")
    tag: str
    content: str = ""
    styles: dict[str, str] = Field(default_factory=dict)
    position: ElementPosition
    classes: list[str] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list["ProcessedElement"] = Field(default_factory=list)

    def walk(self):
        """Yield this element and all descendants, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


class ConversionResult(BaseModel):
    """Everything one conversion produces."""

    html: str
    fonts: list[str] = Field(default_factory=list, description="Font families in first-seen order")
    element_count: int = 0
