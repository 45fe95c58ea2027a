"""
Decoding of serialized characteristics text.

Metadata exports often store each sample's characteristics as a single string
holding a list literal, e.g. ``c("cells: HeLa", "treatment: control")``.
The text is decoded with a small constrained parser that only understands
quoted strings inside a list container; nothing is ever evaluated.

Accepted forms:
  - ``c("a", "b")`` or ``list("a", "b")``
  - ``["a", "b"]``
  - a single quoted string ``"a"``
  - ``character(0)``, ``c()`` and ``[]`` for an empty list
Strings may use single or double quotes; backslash escapes are honoured.
"""

import re
import typing

_CONTAINER = re.compile(r"^(?:(?P<call>c|list)\s*\(|(?P<bracket>\[))")
_EMPTY_VECTOR = re.compile(r"^character\s*\(\s*0\s*\)$")
_QUOTED = re.compile(
    r"""
    "(?P<double>(?:[^"\\]|\\.)*)"      # "double quoted"
    |
    '(?P<single>(?:[^'\\]|\\.)*)'      # 'single quoted'
    """,
    re.VERBOSE | re.DOTALL,
)
_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPE_MAP = {"n": "\n", "t": "\t", "r": "\r"}
_WHITESPACE = re.compile(r"\s*")


class MalformedExpressionError(ValueError):
    """Raised when serialized characteristics cannot be decoded into strings."""

    def __init__(self, text: str, reason: str, sample: typing.Any = None):
        self.text = text
        self.reason = reason
        self.sample = sample
        where = f"Sample {sample!r}: " if sample is not None else ""
        super().__init__(f"{where}cannot decode characteristics {text!r}: {reason}")


def decode_characteristics(
    text: str,
    delimiter: typing.Optional[str] = None,
    sample: typing.Any = None,
) -> list[str]:
    """
    Decode one sample's serialized characteristics into a list of strings.

    With a `delimiter`, the text is treated as plain delimited text: it is split
    on the delimiter and each piece is stripped; empty pieces are dropped.
    Without one, the text must be a list literal (see module docstring).
    `sample` only labels error messages.
    """
    if delimiter is not None:
        if not delimiter:
            raise ValueError("delimiter must be a non-empty string")
        return [piece.strip() for piece in text.split(delimiter) if piece.strip()]

    body = text.strip()
    if _EMPTY_VECTOR.match(body):
        return []

    container = _CONTAINER.match(body)
    if container is None:
        items = _parse_items(body, text, sample)
        if len(items) != 1:
            raise MalformedExpressionError(text, "expected a list or a single quoted string", sample)
        return items

    closer = ")" if container.group("call") else "]"
    if not body.endswith(closer):
        raise MalformedExpressionError(text, f"missing closing {closer!r}", sample)
    return _parse_items(body[container.end():-1], text, sample)


def _parse_items(inner: str, text: str, sample: typing.Any) -> list[str]:
    """Parse comma-separated quoted strings that make up the whole of `inner`."""
    items: list[str] = []
    pos = _WHITESPACE.match(inner).end()
    if pos == len(inner):
        return items

    while True:
        m = _QUOTED.match(inner, pos)
        if not m:
            raise MalformedExpressionError(text, f"expected a quoted string at {inner[pos:]!r}", sample)
        raw = m.group("double") if m.group("double") is not None else m.group("single")
        items.append(_unescape(raw))

        pos = _WHITESPACE.match(inner, m.end()).end()
        if pos == len(inner):
            return items
        if inner[pos] != ",":
            raise MalformedExpressionError(text, f"unexpected text {inner[pos:]!r}", sample)
        pos = _WHITESPACE.match(inner, pos + 1).end()


def _unescape(raw: str) -> str:
    # unknown escapes keep the escaped character, e.g. \" -> "
    return _ESCAPE.sub(lambda m: _ESCAPE_MAP.get(m.group(1), m.group(1)), raw)
