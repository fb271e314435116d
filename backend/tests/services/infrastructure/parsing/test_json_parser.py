"""
Tests for app.services.infrastructure.parsing.json_parser
"""

import json

import pytest

from app.services.infrastructure.parsing.json_parser import (
    extract_largest_balanced_json,
    fix_json_escapes,
    parse_json_payload,
    strip_code_fences,
)


class TestStripCodeFences:
    def test_json_fence(self):
        assert strip_code_fences('```json\n["a", "b"]\n```') == '["a", "b"]'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"k": 1}\n```') == '{"k": 1}'

    def test_unterminated_fence(self):
        assert strip_code_fences('```json\n["a"]') == '["a"]'

    def test_no_fence_is_unchanged(self):
        assert strip_code_fences('  ["a"]  ') == '["a"]'

    def test_empty(self):
        assert strip_code_fences("") == ""


class TestJsonEscapes:
    """Test fixing common JSON escape sequence issues."""

    def test_invalid_escape_is_doubled(self):
        text = r'{"key": "value\nwith\invalid"}'
        fixed = fix_json_escapes(text)
        assert r"\n" in fixed
        assert r"\\i" in fixed
        json.loads(fixed)

    def test_lone_backslash(self):
        assert fix_json_escapes(r"C:\Users\Name") == r"C:\\Users\\Name"

    def test_unicode_preserved(self):
        assert fix_json_escapes(r'"\u1234"') == r'"\u1234"'

    def test_escaped_backslash_preserved(self):
        assert fix_json_escapes(r'"a\\d"') == r'"a\\d"'


class TestExtractLargestBalancedJson:
    def test_picks_largest_fragment(self):
        text = 'prefix {"a": 1} middle ["x", "y", "z"] suffix'
        assert extract_largest_balanced_json(text) == '["x", "y", "z"]'

    def test_brackets_inside_strings_ignored(self):
        text = 'Here: ["a ] tricky", "b"] done'
        assert extract_largest_balanced_json(text) == '["a ] tricky", "b"]'

    def test_none_found(self):
        assert extract_largest_balanced_json("no json here") is None


class TestParseJsonPayload:
    def test_plain_json(self):
        assert parse_json_payload('["a", "b"]') == ["a", "b"]

    def test_fenced_json(self):
        assert parse_json_payload('```json\n{"scenes": ["a"]}\n```') == {"scenes": ["a"]}

    def test_json_embedded_in_prose(self):
        assert parse_json_payload('Sure! Here you go: ["a", "b"] Enjoy.') == ["a", "b"]

    def test_invalid_escapes_repaired(self):
        assert parse_json_payload(r'["C:\path"]') == [r"C:\path"]

    @pytest.mark.parametrize("text", ["", "   ", "not json at all", "```\n```"])
    def test_unrecoverable(self, text):
        with pytest.raises(ValueError):
            parse_json_payload(text)
