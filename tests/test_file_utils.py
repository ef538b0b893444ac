"""Tests for JSON loading and API payload unwrapping."""

import pytest

from src.utils.file_utils import extract_api_node, load_figma_json, load_json, save_json, write_text


class TestJsonFiles:
    def test_save_and_load(self, tmp_path):
        path = tmp_path / "nested" / "data.json"
        save_json({"1:3": "a.png"}, path)
        assert load_json(path) == {"1:3": "a.png"}

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    def test_write_text_creates_parents(self, tmp_path):
        path = write_text("<html></html>", tmp_path / "out" / "page.html")
        assert path.read_text(encoding="utf-8") == "<html></html>"


class TestExtractApiNode:
    def test_bare_node(self, raw_frame):
        assert extract_api_node(raw_frame).id == "1:1"

    def test_file_response(self, raw_frame):
        assert extract_api_node({"name": "Site", "document": raw_frame}).name == "Landing"

    def test_nodes_response_first_entry(self, raw_frame):
        data = {"nodes": {"1:1": {"document": raw_frame}, "9:9": None}}
        assert extract_api_node(data).id == "1:1"

    def test_nodes_response_by_id(self, raw_frame):
        other = {"id": "2:1", "type": "FRAME"}
        data = {"nodes": {"1:1": {"document": raw_frame}, "2:1": {"document": other}}}
        assert extract_api_node(data, "2:1").id == "2:1"

    def test_nodes_response_unknown_id(self, raw_frame):
        with pytest.raises(KeyError):
            extract_api_node({"nodes": {"1:1": {"document": raw_frame}}}, "7:7")

    def test_empty_nodes_response(self):
        with pytest.raises(ValueError):
            extract_api_node({"nodes": {"1:1": None}})

    def test_load_figma_json(self, tmp_path, raw_frame):
        path = tmp_path / "node.json"
        save_json({"nodes": {"1:1": {"document": raw_frame}}}, path)
        node = load_figma_json(path)
        assert [child.id for child in node.children] == ["1:2", "1:3", "1:4", "1:5"]

    def test_load_figma_json_rejects_list(self, tmp_path):
        path = tmp_path / "list.json"
        save_json([1, 2], path)
        with pytest.raises(ValueError):
            load_figma_json(path)
