"""Exceptions raised by the conversion core."""

# Deeper trees are rejected; pydantic validation of nested models stops near 255 levels.
MAX_TREE_DEPTH = 200


class ConversionError(ValueError):
    """A conversion cannot produce valid output (e.g. zero-size root container)."""


class TreeDepthError(ConversionError):
    """The design tree is nested deeper than MAX_TREE_DEPTH."""

    def __init__(self, depth: int, node_id: str = ""):
        self.depth = depth
        self.node_id = node_id
        super().__init__(
            f"Design tree exceeds maximum depth {MAX_TREE_DEPTH} "
            f"(reached {depth} at node '{node_id}')"
        )
