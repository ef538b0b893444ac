"""Tests for geometry relative to the root container."""

import pytest


def _container(width=200, height=100):
    from src.schemas.design_node import BoundingBox, FrameNode

    return FrameNode(id="0:1", absolute_bounding_box=BoundingBox(x=0, y=0, width=width, height=height))


def _text(x, y, width, height, h="LEFT", v="TOP", rotation=None):
    from src.schemas.design_node import BoundingBox, TextNode

    return TextNode(
        id="0:2",
        absolute_bounding_box=BoundingBox(x=x, y=y, width=width, height=height),
        text_align_horizontal=h,
        text_align_vertical=v,
        rotation=rotation,
    )


class TestTextAnchor:
    def test_center_center(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(50, 25, 100, 50, "CENTER", "CENTER"), _container())
        assert pos.x == "50.0000%"
        assert pos.y == "50.0000%"
        assert pos.width == "50.0000%"
        assert pos.height == "50.0000%"
        assert pos.transform == "translate(-50%, -50%)"
        assert pos.transform_origin == "left top"

    def test_left_top_has_no_transform(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(20, 10, 100, 50), _container())
        assert pos.x == "10.0000%"
        assert pos.y == "10.0000%"
        assert pos.transform is None
        assert pos.transform_origin is None

    def test_right_bottom(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(20, 10, 100, 50, "RIGHT", "BOTTOM"), _container())
        assert pos.x == "60.0000%"
        assert pos.y == "60.0000%"
        assert pos.transform == "translate(-100%, -100%)"

    def test_justified_anchors_left(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(20, 10, 100, 50, "JUSTIFIED", "TOP"), _container())
        assert pos.x == "10.0000%"
        assert pos.transform is None

    def test_container_offset(self):
        from src.converter import calculate_position
        from src.schemas.design_node import BoundingBox, FrameNode

        container = FrameNode(absolute_bounding_box=BoundingBox(x=100, y=50, width=400, height=300))
        pos = calculate_position(_text(140, 80, 200, 40, "CENTER"), container)
        assert pos.x == "35.0000%"
        assert pos.y == "10.0000%"
        assert pos.transform == "translate(-50%, 0%)"


class TestRotation:
    def test_rotation_negated(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(0, 0, 10, 10, rotation=90), _container())
        assert pos.transform == "rotate(-90.00deg)"
        assert pos.transform_origin == "left top"

    @pytest.mark.parametrize("rotation", [0, None])
    def test_no_rotation(self, rotation):
        from src.converter import calculate_position

        pos = calculate_position(_text(0, 0, 10, 10, rotation=rotation), _container())
        assert pos.transform is None

    def test_translate_then_rotate(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(0, 0, 10, 10, "CENTER", rotation=-45.5), _container())
        assert pos.transform == "translate(-50%, 0%) rotate(45.50deg)"

    def test_rotated_frame(self):
        from src.converter import calculate_position
        from src.schemas.design_node import BoundingBox, FrameNode

        frame = FrameNode(absolute_bounding_box=BoundingBox(x=0, y=0, width=20, height=20), rotation=30)
        pos = calculate_position(frame, _container())
        assert pos.transform == "rotate(-30.00deg)"


class TestSizing:
    def test_non_text_uses_edges(self):
        from src.converter import calculate_position
        from src.schemas.design_node import BoundingBox, ImageNode

        image = ImageNode(absolute_bounding_box=BoundingBox(x=50, y=25, width=100, height=50))
        pos = calculate_position(image, _container())
        assert (pos.x, pos.y) == ("25.0000%", "25.0000%")
        assert pos.transform is None

    def test_local_geometry_fallback(self):
        from src.converter import calculate_position
        from src.schemas.design_node import GenericNode

        node = GenericNode(type="GROUP", x=100, y=50, width=50, height=25)
        pos = calculate_position(node, _container())
        assert (pos.x, pos.y, pos.width, pos.height) == ("50.0000%", "50.0000%", "25.0000%", "25.0000%")

    def test_px_mode(self):
        from src.converter import calculate_position
        from src.schemas.conversion_options import ConversionOptions

        options = ConversionOptions(enable_responsive=False, precision=1)
        pos = calculate_position(_text(50, 25, 100, 50), _container(), options)
        assert pos.width == "100.0px"
        assert pos.height == "50.0px"
        assert pos.x == "25.0%"

    def test_precision(self):
        from src.converter import calculate_position
        from src.schemas.conversion_options import ConversionOptions

        pos = calculate_position(_text(1, 1, 1, 1), _container(300, 300), ConversionOptions(precision=2))
        assert pos.x == "0.33%"
        assert pos.width == "0.33%"

    def test_no_negative_zero(self):
        from src.converter import calculate_position
        from src.schemas.conversion_options import ConversionOptions

        pos = calculate_position(_text(-0.001, 0, 10, 10), _container(), ConversionOptions(precision=2))
        assert pos.x == "0.00%"

    def test_to_styles_order(self):
        from src.converter import calculate_position

        pos = calculate_position(_text(50, 25, 100, 50, "CENTER", "CENTER"), _container())
        assert list(pos.to_styles()) == ["left", "top", "width", "height", "transform", "transform-origin"]


class TestContainerValidation:
    @pytest.mark.parametrize("width, height", [(0, 100), (200, 0)])
    def test_zero_extent_raises(self, width, height):
        from src.converter import ConversionError, calculate_position

        with pytest.raises(ConversionError):
            calculate_position(_text(0, 0, 10, 10), _container(width, height))
