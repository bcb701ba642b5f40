"""
Decoder for JavaScript array literals embedded in page scripts.

The chart pages declare their data as a JavaScript literal, which is
usually valid JSON but may use unquoted keys, single-quoted strings or
trailing commas. The literal is rewritten into JSON and parsed strictly;
nothing is ever evaluated.
"""

import json
from typing import Any

# Bare words allowed as values (JSON spelling on the right)
LITERAL_WORDS = {
    "true": "true",
    "false": "false",
    "null": "null",
    "undefined": "null",
    "NaN": "NaN",
    "Infinity": "Infinity",
}

NUMBER_CHARS = set("0123456789.eE+-")


class LiteralDecodeError(ValueError):
    """Raised when an embedded literal is not plain data."""


def _is_ident_start(char: str) -> bool:
    return char.isalpha() or char in "_$"


def _is_ident_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def _skip_blank(text: str, pos: int) -> int:
    """Return index of the next char that is neither whitespace nor comment."""
    n = len(text)
    while pos < n:
        if text[pos].isspace():
            pos += 1
        elif text.startswith("//", pos):
            end = text.find("\n", pos)
            pos = n if end == -1 else end + 1
        elif text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            if end == -1:
                raise LiteralDecodeError("Unterminated comment")
            pos = end + 2
        else:
            break
    return pos


def _read_string(text: str, pos: int) -> tuple[str, int]:
    """Read a quoted string starting at pos and return it JSON-encoded."""
    quote = text[pos]
    pos += 1
    out = ['"']
    n = len(text)

    while pos < n:
        char = text[pos]
        if char == "\\":
            if pos + 1 >= n:
                break
            escaped = text[pos + 1]
            if escaped == "'":
                out.append("'")
            else:
                out.append("\\" + escaped)
            pos += 2
            continue
        if char == quote:
            out.append('"')
            return "".join(out), pos + 1
        if char == '"':
            out.append('\\"')
        elif char == "\n":
            break
        else:
            out.append(char)
        pos += 1

    raise LiteralDecodeError("Unterminated string literal")


def to_json(literal: str) -> str:
    """
    Rewrite a JavaScript data literal as JSON text.

    Handles unquoted keys, single-quoted strings, trailing commas,
    comments and `undefined`. Any other bare identifier is rejected.
    """
    out: list[str] = []
    pos = 0
    n = len(literal)

    while pos < n:
        char = literal[pos]

        if char in "\"'":
            encoded, pos = _read_string(literal, pos)
            out.append(encoded)
        elif char == "/" and literal.startswith(("//", "/*"), pos):
            pos = _skip_blank(literal, pos)
        elif char == ",":
            # Drop trailing commas before a closing bracket
            nxt = _skip_blank(literal, pos + 1)
            if nxt < n and literal[nxt] in "]}":
                pos = nxt
            else:
                out.append(char)
                pos += 1
        elif char.isdigit() or char in "-.":
            end = pos + 1
            while end < n and literal[end] in NUMBER_CHARS:
                end += 1
            out.append(literal[pos:end])
            pos = end
        elif _is_ident_start(char):
            end = pos
            while end < n and _is_ident_char(literal[end]):
                end += 1
            word = literal[pos:end]
            nxt = _skip_blank(literal, end)
            if nxt < n and literal[nxt] == ":":
                out.append(json.dumps(word))
            elif word in LITERAL_WORDS:
                out.append(LITERAL_WORDS[word])
            else:
                raise LiteralDecodeError(f"Unexpected identifier {word!r}")
            pos = end
        else:
            out.append(char)
            pos += 1

    return "".join(out)


def decode_array_literal(literal: str) -> list[dict[str, Any]]:
    """
    Decode an embedded array-of-objects literal.

    Args:
        literal: Text of the literal, starting with "[" and ending with "]"

    Returns:
        List of decoded objects

    Raises:
        LiteralDecodeError: If the text is not an array of plain objects
    """
    try:
        data = json.loads(literal)
    except json.JSONDecodeError:
        try:
            data = json.loads(to_json(literal))
        except json.JSONDecodeError as e:
            raise LiteralDecodeError(f"Invalid array literal: {e}") from e

    if not isinstance(data, list):
        raise LiteralDecodeError(f"Expected array, got {type(data).__name__}")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise LiteralDecodeError(
                f"Expected object at index {index}, got {type(item).__name__}"
            )

    return data
