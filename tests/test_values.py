"""Tests for values module (lossless decoding and value formatting)."""

import json

from tfs.values import Number, decode_json, format_value


class TestDecodeJson:
    # Tests that integer and float literals keep their exact text.
    def test_numbers_keep_literal_text(self):
        data = decode_json('{"a": 1.10, "b": 12345678901234567890, "c": 1e3}')
        assert data["a"] == "1.10"
        assert data["b"] == "12345678901234567890"
        assert data["c"] == "1e3"
        assert all(isinstance(v, Number) for v in data.values())

    # Tests that strings, bools and nulls decode as plain Python values.
    def test_other_scalars_unchanged(self):
        data = decode_json('{"s": "x", "t": true, "n": null}')
        assert data == {"s": "x", "t": True, "n": None}
        assert not isinstance(data["s"], Number)


class TestFormatScalars:
    # Tests that None formats as null.
    def test_null(self):
        assert format_value(None) == "null"

    # Tests that strings are quoted with escaping.
    def test_string_quoted_and_escaped(self):
        assert format_value('say "hi"\nbye') == '"say \\"hi\\"\\nbye"'

    # Tests that a formatted string parses back to the same string.
    def test_string_round_trip(self):
        for s in ["plain", 'with "quotes"', "multi\nline", "tab\there", "unicode é"]:
            assert json.loads(format_value(s)) == s

    # Tests that numbers are emitted exactly as decoded.
    def test_number_verbatim(self):
        n = decode_json("[0.000000000000000000001]")[0]
        assert format_value(n) == "0.000000000000000000001"
        assert decode_json(format_value(n)) == n

    # Tests that bools format in lower case.
    def test_bools(self):
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    # Tests that a numeric string is still quoted.
    def test_numeric_string_is_quoted(self):
        assert format_value("1") == '"1"'
        assert format_value(Number("1")) == "1"


class TestFormatCollections:
    # Tests that an empty list formats on one line.
    def test_empty_list(self):
        assert format_value([]) == "[]"

    # Tests that list items go on their own lines with trailing commas.
    def test_list_multiline(self):
        assert format_value(["a", "b"]) == '[\n    "a",\n    "b",\n]'

    # Tests that list nesting follows the caller's indent.
    def test_list_respects_indent(self):
        assert format_value(["a"], 6) == '[\n          "a",\n      ]'

    # Tests that an empty map is still multi-line.
    def test_empty_map(self):
        assert format_value({}) == "{\n}"

    # Tests that map keys are emitted in sorted order.
    def test_map_keys_sorted(self):
        text = format_value({"zeta": 1, "alpha": 2, "mid": 3})
        assert text == "{\n    alpha = 2\n    mid = 3\n    zeta = 1\n}"

    # Tests that nested structures indent by one step per level.
    def test_nested(self):
        text = format_value({"tags": {"env": "prod"}, "ports": [Number("80")]})
        assert text == (
            "{\n"
            "    ports = [\n"
            "        80,\n"
            "    ]\n"
            "    tags = {\n"
            '        env = "prod"\n'
            "    }\n"
            "}"
        )

    # Tests that map formatting does not depend on insertion order.
    def test_map_order_independent(self):
        assert format_value({"a": 1, "b": 2}) == format_value({"b": 2, "a": 1})
