"""Reader: turns source text into values.

Syntax:
    (a b c)   list          [a b]   vector        {k v}   dict
    "text"    string        12 1.5  number        #t #f   boolean
    :name     keyword       'x      (quote x)     ; ...   comment
"""

from __future__ import annotations

import re
from fractions import Fraction

from capharness.lang.errors import ParseError
from capharness.lang.values import Atom, Dict, Keyword, List, Value, Vec

_TOKEN_RE = re.compile(
    r"""
    (?P<skip>\s+|;[^\n]*)
    |(?P<open>[(\[{])
    |(?P<close>[)\]}])
    |(?P<quote>')
    |(?P<string>"(?:\\.|[^"\\])*")
    |(?P<unterminated>")
    |(?P<atom>[^\s()\[\]{}";']+)
    """,
    re.VERBOSE,
)

_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")

_CLOSERS = {"(": ")", "[": "]", "{": "}"}

_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


def _tokenize(source: str, source_name: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    for match in _TOKEN_RE.finditer(source):
        kind = match.lastgroup
        if kind == "skip":
            continue
        if kind == "unterminated":
            raise ParseError(source_name, "unterminated string literal")
        tokens.append((kind or "", match.group()))
    return tokens


def _unescape(literal: str, source_name: str) -> str:
    body = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            escaped = body[i + 1]
            if escaped not in _ESCAPES:
                raise ParseError(source_name, f"unknown escape sequence \\{escaped}")
            out.append(_ESCAPES[escaped])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _read_atom(text: str) -> Value:
    if _NUMBER_RE.fullmatch(text):
        if "." in text:
            return Fraction(text)
        return int(text)
    if text == "#t":
        return True
    if text == "#f":
        return False
    if text.startswith(":") and len(text) > 1:
        return Keyword(text[1:])
    return Atom(text)


class _Reader:
    def __init__(self, tokens: list[tuple[str, str]], source_name: str) -> None:
        self.tokens = tokens
        self.pos = 0
        self.source_name = source_name

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def read(self) -> Value:
        if self.at_end():
            raise ParseError(self.source_name, "unexpected end of input")
        kind, text = self.tokens[self.pos]
        self.pos += 1
        if kind == "open":
            return self._read_seq(text)
        if kind == "close":
            raise ParseError(self.source_name, f"unexpected '{text}'")
        if kind == "quote":
            return List((Atom("quote"), self.read()))
        if kind == "string":
            return _unescape(text, self.source_name)
        return _read_atom(text)

    def _read_seq(self, opener: str) -> Value:
        closer = _CLOSERS[opener]
        items: list[Value] = []
        while True:
            if self.at_end():
                raise ParseError(self.source_name, f"missing '{closer}'")
            kind, text = self.tokens[self.pos]
            if kind == "close":
                if text != closer:
                    raise ParseError(
                        self.source_name, f"expected '{closer}', got '{text}'"
                    )
                self.pos += 1
                break
            items.append(self.read())
        if opener == "(":
            return List(tuple(items))
        if opener == "[":
            return Vec(tuple(items))
        if len(items) % 2:
            raise ParseError(self.source_name, "dict literal needs an even number of forms")
        try:
            return Dict.from_pairs(zip(items[::2], items[1::2], strict=True))
        except TypeError as e:
            raise ParseError(self.source_name, f"invalid dict key: {e}") from e


def read_many(source: str, source_name: str = "[input]") -> list[Value]:
    """Read every top-level form in source.

    Raises:
        ParseError: If the source is not well formed.
    """
    reader = _Reader(_tokenize(source, source_name), source_name)
    forms: list[Value] = []
    while not reader.at_end():
        forms.append(reader.read())
    return forms
