"""Shared fixtures: small raw Figma API trees."""

import pytest


def rect(x, y, width, height):
    return {"x": x, "y": y, "width": width, "height": height}


def solid(r, g, b, a=1.0, **extra):
    return {"type": "SOLID", "color": {"r": r, "g": g, "b": b, "a": a}, **extra}


def text_node(node_id, characters, box, **style):
    return {
        "id": node_id,
        "name": characters[:20],
        "type": "TEXT",
        "characters": characters,
        "absoluteBoundingBox": box,
        "style": {"fontFamily": "Inter", "fontSize": 16, **style},
        "fills": [solid(0.0, 0.0, 0.0)],
    }


@pytest.fixture
def raw_frame():
    """A 400x300 frame holding a heading, a photo and an unresolved image."""
    return {
        "id": "1:1",
        "name": "Landing",
        "type": "FRAME",
        "absoluteBoundingBox": rect(100, 50, 400, 300),
        "backgroundColor": {"r": 1, "g": 1, "b": 1, "a": 1},
        "fills": [solid(0.9, 0.9, 0.9)],
        "children": [
            text_node(
                "1:2",
                "Hello <world>",
                rect(140, 80, 200, 40),
                fontFamily="Open Sans",
                fontWeight=700,
                textAlignHorizontal="CENTER",
                lineHeightPx=24,
                lineHeightUnit="PIXELS",
            ),
            {
                "id": "1:3",
                "name": "Hero Photo",
                "type": "RECTANGLE",
                "absoluteBoundingBox": rect(100, 150, 200, 150),
            },
            {
                "id": "1:4",
                "name": "Avatar",
                "type": "RECTANGLE",
                "absoluteBoundingBox": rect(320, 150, 100, 100),
                "fills": [{"type": "IMAGE", "imageRef": "abc"}],
            },
            {
                "id": "1:5",
                "name": "Divider",
                "type": "VECTOR",
                "absoluteBoundingBox": rect(100, 140, 400, 1),
            },
        ],
    }


@pytest.fixture
def image_urls():
    return {"1:3": "https://cdn.example.com/hero.png"}
