"""Tests for CSS declaration mapping."""

import pytest


class TestBasicStyles:
    def test_position_only_by_default(self):
        from src.converter import extract_styles
        from src.schemas.design_node import GenericNode

        assert extract_styles(GenericNode(type="GROUP")) == {"position": "absolute"}

    def test_opacity_and_hidden(self):
        from src.converter import extract_styles
        from src.schemas.design_node import GenericNode

        styles = extract_styles(GenericNode(opacity=0.5, visible=False))
        assert styles["opacity"] == "0.5"
        assert styles["display"] == "none"

    def test_full_opacity_omitted(self):
        from src.converter import extract_styles
        from src.schemas.design_node import GenericNode

        assert "opacity" not in extract_styles(GenericNode(opacity=1.0))


class TestFrameStyles:
    def test_fill_overrides_background(self):
        from src.converter import extract_styles
        from src.schemas.design_node import Color, FrameNode, SolidFill

        frame = FrameNode(
            background_color=Color(r=1, g=1, b=1),
            fills=[SolidFill(color=Color(r=1, g=0, b=0), opacity=0.5)],
        )
        assert extract_styles(frame)["background-color"] == "rgba(255, 0, 0, 0.5)"

    def test_background_only(self):
        from src.converter import extract_styles
        from src.schemas.design_node import Color, FrameNode

        frame = FrameNode(background_color=Color(r=0, g=0.5, b=1))
        assert extract_styles(frame)["background-color"] == "rgb(0, 128, 255)"

    def test_no_fill_no_background(self):
        from src.converter import extract_styles
        from src.schemas.design_node import FrameNode

        assert "background-color" not in extract_styles(FrameNode())

    def test_blend_and_radius(self):
        from src.converter import extract_styles
        from src.schemas.design_node import Color, FrameNode, SolidFill

        frame = FrameNode(
            fills=[SolidFill(color=Color(), blend_mode="COLOR_DODGE")],
            corner_radius=12,
        )
        styles = extract_styles(frame)
        assert styles["mix-blend-mode"] == "color-dodge"
        assert styles["border-radius"] == "12px"


class TestTextStyles:
    def test_typography(self):
        from src.converter import extract_styles
        from src.schemas.design_node import FontName, TextNode

        node = TextNode(font_name=FontName(family="Open Sans", style="Semibold Italic"),
                        font_weight=600, font_size=18.5)
        styles = extract_styles(node)
        assert styles["margin-top"] == "0px"
        assert styles["margin-bottom"] == "0px"
        assert styles["font-family"] == '"Open Sans"'
        assert styles["font-style"] == "italic"
        assert styles["font-weight"] == "600"
        assert styles["font-size"] == "18.5px"
        assert styles["color"] == "rgb(0, 0, 0)"

    @pytest.mark.parametrize("value, unit, expected", [
        (150, "PERCENT", "1.5"),
        (24, "PIXELS", "24px"),
        (1.2, "AUTO", "normal"),
    ])
    def test_line_height(self, value, unit, expected):
        from src.converter import extract_styles
        from src.schemas.design_node import LineHeight, TextNode

        node = TextNode(line_height=LineHeight(value=value, unit=unit))
        assert extract_styles(node)["line-height"] == expected

    @pytest.mark.parametrize("value, unit, expected", [
        (2, "PIXELS", "2px"),
        (5, "PERCENT", "0.05em"),
        (0, "PIXELS", "0px"),
    ])
    def test_letter_spacing(self, value, unit, expected):
        from src.converter import extract_styles
        from src.schemas.design_node import LetterSpacing, TextNode

        node = TextNode(letter_spacing=LetterSpacing(value=value, unit=unit))
        assert extract_styles(node)["letter-spacing"] == expected

    def test_keywords_only_when_not_default(self):
        from src.converter import extract_styles
        from src.schemas.design_node import TextNode

        styles = extract_styles(TextNode())
        for key in ("text-decoration", "text-transform", "text-align", "white-space"):
            assert key not in styles

    def test_css_keywords(self):
        from src.converter import extract_styles
        from src.schemas.design_node import TextNode

        node = TextNode(
            text_decoration="STRIKETHROUGH",
            text_case="TITLE",
            text_align_horizontal="JUSTIFIED",
            text_auto_resize="WIDTH_AND_HEIGHT",
        )
        styles = extract_styles(node)
        assert styles["text-decoration"] == "line-through"
        assert styles["text-transform"] == "capitalize"
        assert styles["text-align"] == "justify"
        assert styles["white-space"] == "nowrap"

    def test_translucent_color(self):
        from src.converter import extract_styles
        from src.schemas.design_node import Color, SolidFill, TextNode

        node = TextNode(fills=[SolidFill(color=Color(r=1, g=1, b=1), opacity=0.25)])
        assert extract_styles(node)["color"] == "rgba(255, 255, 255, 0.25)"


class TestEffects:
    def _shadowed(self):
        from src.schemas.design_node import Color, Effect, Offset, TextNode

        return TextNode(effects=[
            Effect(type="DROP_SHADOW", color=Color(a=0.25), offset=Offset(x=0, y=4), radius=4),
            Effect(type="DROP_SHADOW", color=Color(r=1, a=1), offset=Offset(x=1, y=1), visible=False),
            Effect(type="DROP_SHADOW", color=Color(b=1, a=0.5), offset=Offset(x=-2, y=2)),
            Effect(type="LAYER_BLUR", radius=3),
            Effect(type="LAYER_BLUR", radius=9),
        ])

    def test_shadows_and_first_blur(self):
        from src.converter import extract_styles

        styles = extract_styles(self._shadowed())
        assert styles["text-shadow"] == (
            "0px 4px 4px rgba(0, 0, 0, 0.25), -2px 2px 0px rgba(0, 0, 255, 0.5)"
        )
        assert styles["filter"] == "blur(3px)"
        assert styles["-webkit-filter"] == "blur(3px)"

    def test_effects_disabled(self):
        from src.converter import extract_styles
        from src.schemas.conversion_options import ConversionOptions

        styles = extract_styles(self._shadowed(), ConversionOptions(preserve_text_effects=False))
        assert "text-shadow" not in styles
        assert "filter" not in styles


class TestFonts:
    def test_registry_first_seen_order(self):
        from src.converter import FontRegistry, extract_styles
        from src.schemas.design_node import FontName, TextNode

        fonts = FontRegistry()
        for family in ("Roboto", "Inter", "Roboto"):
            extract_styles(TextNode(font_name=FontName(family=family)), fonts=fonts)
        assert fonts.used_fonts() == ["Roboto", "Inter"]
        assert len(fonts) == 2

    def test_style_extractor_object(self):
        from src.converter import StyleExtractor
        from src.schemas.design_node import FrameNode, TextNode

        extractor = StyleExtractor()
        extractor.extract_styles(FrameNode())
        extractor.extract_styles(TextNode())
        assert extractor.get_used_fonts() == ["Inter"]
