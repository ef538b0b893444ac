"""Pydantic model for converter configuration.

Options can be built in code, passed as keyword overrides, or loaded from
a YAML file (see ``config/default.yaml``).
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ConversionOptions(BaseModel):
    """Settings for one Figma → HTML conversion."""

    container_width: Optional[float] = Field(
        default=None,
        gt=0,
        description="Width of the .figma-container div in px. Falls back to the root node's width.",
    )
    container_height: Optional[float] = Field(
        default=None,
        gt=0,
        description="Height of the .figma-container div in px. Falls back to the root node's height.",
    )
    scale_factor: float = Field(
        default=1.0,
        gt=0,
        description="Uniform zoom applied to the container (transform: scale).",
    )
    enable_responsive: bool = Field(
        default=True,
        description="Emit width/height as % of the root instead of px.",
    )
    preserve_text_effects: bool = Field(
        default=True,
        description="Emit text-shadow / blur filters for TEXT node effects.",
    )
    optimize_output: bool = Field(
        default=True,
        description="Compact one-line CSS rules. False writes one declaration per line.",
    )
    precision: int = Field(
        default=4,
        ge=0,
        le=10,
        description="Decimal places for computed geometry.",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ConversionOptions":
        """Load options from a YAML configuration file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Options file not found: {path}")
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)

    def to_yaml(self, path: str | Path) -> None:
        """Save options to a YAML configuration file."""
        path = Path(path)
        data = self.model_dump(exclude_none=True)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
