"""Tests for the embedded array literal decoder."""

import pytest

from saih_scraper.core.literal import LiteralDecodeError, decode_array_literal, to_json


class TestDecodeArrayLiteral:
    """Tests for decode_array_literal function."""

    def test_strict_json(self):
        """Plain JSON is decoded as-is."""
        result = decode_array_literal('[{"d": "20/11/2025 00:00", "v": 1.18}]')
        assert result == [{"d": "20/11/2025 00:00", "v": 1.18}]

    def test_unquoted_keys(self):
        """Identifier keys are accepted."""
        result = decode_array_literal('[{d: "20/11/2025 00:00", v: 1.18}]')
        assert result == [{"d": "20/11/2025 00:00", "v": 1.18}]

    def test_single_quotes(self):
        """Single-quoted strings are accepted."""
        result = decode_array_literal("[{'d': '20/11/2025 00:00', v: 2}]")
        assert result == [{"d": "20/11/2025 00:00", "v": 2}]

    def test_trailing_commas(self):
        """Trailing commas in objects and arrays are dropped."""
        result = decode_array_literal('[{d: "a", v: 1,}, {d: "b", v: 2,},]')
        assert result == [{"d": "a", "v": 1}, {"d": "b", "v": 2}]

    def test_comments(self):
        """Line and block comments are ignored."""
        text = """[
            // first reading
            {d: "a", v: 1}, /* second */ {d: "b", v: -0.5e1}
        ]"""
        assert decode_array_literal(text) == [{"d": "a", "v": 1}, {"d": "b", "v": -5.0}]

    def test_literal_words(self):
        """true/false/null/undefined are mapped to JSON values."""
        result = decode_array_literal("[{a: true, b: false, c: null, e: undefined}]")
        assert result == [{"a": True, "b": False, "c": None, "e": None}]

    def test_quotes_inside_strings(self):
        """Double quotes inside single-quoted strings survive."""
        result = decode_array_literal("""[{label: 'río "Duero"', note: 'it\\'s'}]""")
        assert result == [{"label": 'río "Duero"', "note": "it's"}]

    def test_empty_array(self):
        """An empty array decodes to an empty list."""
        assert decode_array_literal("[]") == []

    def test_rejects_code(self):
        """Function calls are not data."""
        with pytest.raises(LiteralDecodeError):
            decode_array_literal("[alert(1)]")

    def test_rejects_identifier_values(self):
        """Bare identifiers as values are rejected."""
        with pytest.raises(LiteralDecodeError):
            decode_array_literal("[{d: someVariable}]")

    def test_rejects_non_objects(self):
        """Elements must be objects."""
        with pytest.raises(LiteralDecodeError):
            decode_array_literal("[1, 2, 3]")

    def test_rejects_unterminated_string(self):
        """Unterminated strings are a decode error."""
        with pytest.raises(LiteralDecodeError):
            decode_array_literal('[{d: "20/11/2025}]')

    def test_rejects_garbage(self):
        """Malformed structure is a decode error."""
        with pytest.raises(LiteralDecodeError):
            decode_array_literal("[{d: 1,, v: 2}]")


class TestToJson:
    """Tests for to_json function."""

    def test_keys_are_quoted(self):
        """Identifier keys come out double-quoted."""
        assert to_json("{d: 1}") == '{"d": 1}'

    def test_slashes_in_strings_kept(self):
        """Slashes inside strings are not taken as comments."""
        assert to_json("{u: 'http://x/y'}") == '{"u": "http://x/y"}'
