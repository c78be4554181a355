"""Evaluator for the scripting language.

Lang owns one environment and one Capabilities set. Primitives receive the
running Lang so effectful ones reach their capability through it rather than
through module state.

Special forms: quote, def, fn, if, do.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from capharness.core.models import Failure, Success
from capharness.lang.errors import (
    LangError,
    LangTypeError,
    NonFunctionCalled,
    OtherError,
    UnknownIdentifier,
    WrongNumberOfArgs,
)
from capharness.lang.reader import read_many
from capharness.lang.values import (
    EMPTY,
    Atom,
    Dict,
    Lambda,
    List,
    PrimFn,
    Value,
    Vec,
)

if TYPE_CHECKING:
    from capharness.core.models import EvalOutcome
    from capharness.core.protocols import Capabilities

logger = logging.getLogger(__name__)


class Lang:
    """A running evaluator.

    Attributes:
        env: Top-level bindings. Mutated by ``def``.
        capabilities: Effects available to primitives.
        state: Opaque per-run state for primitives that need more than the
            capability surface (e.g. the simulated chain logs in tests).
    """

    def __init__(
        self,
        env: dict[str, Value],
        capabilities: Capabilities,
        state: Any = None,  # noqa: ANN401
    ) -> None:
        self.env = env
        self.capabilities = capabilities
        self.state = state
        self._special_forms = {
            "quote": self._eval_quote,
            "def": self._eval_def,
            "fn": self._eval_fn,
            "if": self._eval_if,
            "do": self._eval_do,
        }

    def eval(self, expr: Value, env: dict[str, Value] | None = None) -> Value:
        if env is None:
            env = self.env
        if isinstance(expr, Atom):
            if expr.name not in env:
                raise UnknownIdentifier(expr.name)
            return env[expr.name]
        if isinstance(expr, List):
            if not expr.items:
                return expr
            head, *rest = expr.items
            if isinstance(head, Atom) and head.name in self._special_forms:
                return self._special_forms[head.name](rest, env)
            fn = self.eval(head, env)
            args = [self.eval(arg, env) for arg in rest]
            return self.apply(fn, args)
        if isinstance(expr, Vec):
            return Vec(tuple(self.eval(item, env) for item in expr.items))
        if isinstance(expr, Dict):
            pairs = [(self.eval(k, env), self.eval(v, env)) for k, v in expr.items()]
            try:
                return Dict.from_pairs(pairs)
            except TypeError as e:
                raise LangTypeError(f"invalid dict key: {e}") from e
        return expr

    def apply(self, fn: Value, args: list[Value]) -> Value:
        if isinstance(fn, PrimFn):
            return fn.fn(self, args)
        if isinstance(fn, Lambda):
            if len(args) != len(fn.params):
                raise WrongNumberOfArgs("lambda", len(fn.params), len(args))
            local = dict(fn.env)
            local.update(zip(fn.params, args, strict=True))
            return self._eval_body(fn.body, local)
        raise NonFunctionCalled(fn)

    def interpret_many(self, source: str, source_name: str = "[input]") -> Value:
        """Read and evaluate every top-level form, returning the last value."""
        forms = read_many(source, source_name)
        logger.debug("Evaluating %d top-level form(s) from %s", len(forms), source_name)
        return self._eval_body(tuple(forms), self.env)

    def _eval_body(self, body: tuple[Value, ...], env: dict[str, Value]) -> Value:
        result: Value = EMPTY
        for form in body:
            result = self.eval(form, env)
        return result

    def _eval_quote(self, args: list[Value], env: dict[str, Value]) -> Value:
        if len(args) != 1:
            raise WrongNumberOfArgs("quote", 1, len(args))
        return args[0]

    def _eval_def(self, args: list[Value], env: dict[str, Value]) -> Value:
        if len(args) != 2:
            raise WrongNumberOfArgs("def", 2, len(args))
        name, expr = args
        if not isinstance(name, Atom):
            raise LangTypeError("def: first argument should be an atom")
        env[name.name] = self.eval(expr, env)
        return EMPTY

    def _eval_fn(self, args: list[Value], env: dict[str, Value]) -> Value:
        if not args or not isinstance(args[0], Vec):
            raise LangTypeError("fn: first argument should be a vector of atoms")
        params = args[0].items
        if not all(isinstance(p, Atom) for p in params):
            raise LangTypeError("fn: parameters should be atoms")
        return Lambda(tuple(p.name for p in params), tuple(args[1:]), env)

    def _eval_if(self, args: list[Value], env: dict[str, Value]) -> Value:
        if len(args) != 3:
            raise WrongNumberOfArgs("if", 3, len(args))
        cond, then, otherwise = args
        if self.eval(cond, env) is False:
            return self.eval(otherwise, env)
        return self.eval(then, env)

    def _eval_do(self, args: list[Value], env: dict[str, Value]) -> Value:
        return self._eval_body(tuple(args), env)


def run_program(
    env: dict[str, Value],
    capabilities: Capabilities,
    source: str,
    *,
    source_name: str = "[input]",
    state: Any = None,  # noqa: ANN401
) -> EvalOutcome:
    """Evaluate source against env and report the outcome.

    LangError (parse errors included) becomes Failure, and so does running out
    of Python stack on deep recursion. Any other exception propagates.
    """
    lang = Lang(env, capabilities, state)
    try:
        return Success(lang.interpret_many(source, source_name))
    except LangError as e:
        logger.debug("Evaluation of %s failed: %s", source_name, e)
        return Failure(e)
    except RecursionError:
        logger.debug("Evaluation of %s exceeded the recursion limit", source_name)
        return Failure(OtherError("maximum recursion depth exceeded"))
