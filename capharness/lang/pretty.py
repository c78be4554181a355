"""Render values back to source-like text."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

from capharness.lang.values import (
    Atom,
    Dict,
    Keyword,
    Lambda,
    List,
    PrimFn,
    Value,
    Vec,
)


# Inverse of the reader's escape table. Other characters are written as is.
_STRING_ESCAPES = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}
)


def _render_fraction(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    text = format(Decimal(value.numerator) / Decimal(value.denominator), "f")
    return text.rstrip("0").rstrip(".") if "." in text else text


def render(value: Value) -> str:
    """Render a value the way it would be written in source."""
    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Fraction):
        return _render_fraction(value)
    if isinstance(value, str):
        return '"' + value.translate(_STRING_ESCAPES) + '"'
    if isinstance(value, Atom):
        return value.name
    if isinstance(value, Keyword):
        return f":{value.name}"
    if isinstance(value, List):
        return "(" + " ".join(render(v) for v in value.items) + ")"
    if isinstance(value, Vec):
        return "[" + " ".join(render(v) for v in value.items) + "]"
    if isinstance(value, Dict):
        pairs = (f"{render(k)} {render(v)}" for k, v in value.items())
        return "{" + " ".join(pairs) + "}"
    if isinstance(value, PrimFn):
        return f"<prim:{value.name}>"
    if isinstance(value, Lambda):
        return "<lambda>"
    return repr(value)
