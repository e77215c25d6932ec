"""Tests for makerbench.services.directory — tools.json codec and helpers."""

import json

import pytest

from makerbench.api.middleware.error_handler import DirectoryDocumentError
from makerbench.models.schemas import ToolRecord
from makerbench.services.directory import ToolDirectory, parse_tags


# ── parse_tags ───────────────────────────────────────────────────────────────


class TestParseTags:
    def test_json_array(self):
        assert parse_tags('["a","b"]') == ["a", "b"]

    def test_comma_fallback(self):
        assert parse_tags("a, b ,c") == ["a", "b", "c"]

    def test_single_tag(self):
        assert parse_tags("css") == ["css"]

    def test_empty_segments_dropped(self):
        assert parse_tags("x,,y, ") == ["x", "y"]

    def test_json_non_array_falls_back(self):
        assert parse_tags('"solo"') == ['"solo"']

    def test_json_numbers_become_strings(self):
        assert parse_tags("[1, 2]") == ["1", "2"]


# ── ToolDirectory ────────────────────────────────────────────────────────────


class TestToolDirectory:
    def test_next_id_after_gap(self, existing_tools):
        directory = ToolDirectory(existing_tools)
        assert directory.next_id() == 6

    def test_next_id_empty(self):
        assert ToolDirectory([]).next_id() == 1

    def test_next_id_unordered(self):
        directory = ToolDirectory([{"id": 9}, {"id": 3}])
        assert directory.next_id() == 10

    def test_next_id_missing_id(self):
        with pytest.raises(DirectoryDocumentError, match="integer id"):
            ToolDirectory([{"title": "no id"}]).next_id()

    def test_next_id_string_id(self):
        with pytest.raises(DirectoryDocumentError):
            ToolDirectory([{"id": "3"}]).next_id()

    def test_round_trip(self, existing_tools):
        text = ToolDirectory(existing_tools).to_json()
        assert ToolDirectory.from_json(text).records == existing_tools

    def test_round_trip_keeps_unknown_keys_and_unicode(self):
        records = [{"id": 1, "title": "Ünïcode ✓", "featured": True, "logo": None}]
        text = ToolDirectory(records).to_json()
        assert "Ünïcode ✓" in text
        assert ToolDirectory.from_json(text).records == records

    def test_serialized_with_two_space_indent(self, existing_tools):
        text = ToolDirectory(existing_tools).to_json()
        assert text == json.dumps(existing_tools, indent=2)

    def test_invalid_json(self):
        with pytest.raises(DirectoryDocumentError, match="not valid JSON"):
            ToolDirectory.from_json("{not json")

    def test_not_an_array(self):
        with pytest.raises(DirectoryDocumentError, match="array"):
            ToolDirectory.from_json('{"id": 1}')

    def test_append_preserves_order(self, existing_tools):
        directory = ToolDirectory(existing_tools)
        directory.append(
            ToolRecord(id=6, title="Foo", url="https://x.test", description="d", tag=["x"])
        )
        assert [r["id"] for r in directory.records] == [1, 2, 5, 6]
        assert len(directory) == 4

    def test_append_omits_absent_optionals(self):
        directory = ToolDirectory([])
        directory.append(
            ToolRecord(id=1, title="Foo", url="https://x.test", description="d", tag=["x"])
        )
        assert directory.records[0] == {
            "id": 1,
            "title": "Foo",
            "url": "https://x.test",
            "description": "d",
            "tag": ["x"],
        }

    def test_append_key_order(self):
        directory = ToolDirectory([])
        directory.append(
            ToolRecord(
                id=1,
                title="Foo",
                url="https://x.test",
                description="d",
                tag=["x"],
                logo="tool-1.png",
                repo="https://github.com/o/r",
            )
        )
        assert list(directory.records[0]) == [
            "id", "title", "url", "description", "tag", "logo", "repo"
        ]
