"""Binding sets used to start an evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from capharness.lang.primitives import pure_prim_fns, repl_prim_fns

if TYPE_CHECKING:
    from collections.abc import Mapping

    from capharness.lang.values import PrimFn, Value


@dataclass(frozen=True)
class Bindings:
    """An immutable starting environment.

    Runs copy ``env`` before evaluating, so one Bindings can seed any number
    of independent runs.
    """

    env: dict[str, Value] = field(default_factory=dict)


def add_binding(name: str, value: Value, bindings: Bindings) -> Bindings:
    """Return bindings with name bound to value."""
    return Bindings({**bindings.env, name: value})


def add_prim_fns(prim_fns: Mapping[str, PrimFn], bindings: Bindings) -> Bindings:
    """Return bindings with prim_fns added, replacing same-named bindings."""
    return Bindings({**bindings.env, **prim_fns})


def pure_bindings() -> Bindings:
    """Bindings with no effectful primitives."""
    return Bindings(dict(pure_prim_fns()))


def repl_bindings() -> Bindings:
    """Bindings for the interactive runtime: pure plus effectful primitives."""
    return add_prim_fns(repl_prim_fns(), pure_bindings())
