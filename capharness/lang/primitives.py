"""Primitive functions.

Two sets:
- pure_prim_fns(): arithmetic, comparison, sequences, strings. No effects.
- repl_prim_fns(): the effectful primitives, each going through one
  capability of the running Lang. send!/receive! have no remote backend
  outside the test harness and fail with a domain error.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from capharness.core.models import FileNotFound
from capharness.lang.errors import (
    ExitError,
    LangTypeError,
    OtherError,
    WrongNumberOfArgs,
)
from capharness.lang.pretty import render
from capharness.lang.values import (
    EMPTY,
    Atom,
    Dict,
    Keyword,
    Lambda,
    List,
    PrimFn,
    Value,
    Vec,
    as_whole_number,
    is_number,
    normalize_number,
    values_equal,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from capharness.lang.evaluator import Lang


def expect_arity(name: str, expected: int, args: list[Value]) -> None:
    if len(args) != expected:
        raise WrongNumberOfArgs(name, expected, len(args))


def _numbers(name: str, args: list[Value]) -> list[int | Fraction]:
    for arg in args:
        if not is_number(arg):
            raise LangTypeError(f"{name}: expecting number, got {render(arg)}")
    return args


# =============================================================================
# Pure primitives
# =============================================================================


def _add(lang: Lang, args: list[Value]) -> Value:
    return normalize_number(sum(_numbers("+", args), 0))


def _sub(lang: Lang, args: list[Value]) -> Value:
    nums = _numbers("-", args)
    if not nums:
        raise WrongNumberOfArgs("-", 1, 0)
    if len(nums) == 1:
        return -nums[0]
    result = nums[0]
    for n in nums[1:]:
        result -= n
    return normalize_number(result)


def _mul(lang: Lang, args: list[Value]) -> Value:
    result: int | Fraction = 1
    for n in _numbers("*", args):
        result *= n
    return normalize_number(result)


def _div(lang: Lang, args: list[Value]) -> Value:
    expect_arity("/", 2, args)
    a, b = _numbers("/", args)
    if b == 0:
        raise OtherError("/: division by zero")
    return normalize_number(Fraction(a) / Fraction(b))


def _comparison(name: str, op: Callable[[Fraction, Fraction], bool]) -> PrimFn:
    def compare(lang: Lang, args: list[Value]) -> Value:
        expect_arity(name, 2, args)
        a, b = _numbers(name, args)
        return op(a, b)

    return PrimFn(name, compare, f"Numeric comparison {name}.")


def _equal(lang: Lang, args: list[Value]) -> Value:
    expect_arity("=", 2, args)
    return values_equal(args[0], args[1])


def _not(lang: Lang, args: list[Value]) -> Value:
    expect_arity("not", 1, args)
    if not isinstance(args[0], bool):
        raise LangTypeError("not: expecting boolean")
    return not args[0]


def _list(lang: Lang, args: list[Value]) -> Value:
    return List(tuple(args))


def _vector(lang: Lang, args: list[Value]) -> Value:
    return Vec(tuple(args))


def _sequence(name: str, value: Value) -> tuple[Value, ...]:
    if isinstance(value, (List, Vec)):
        return value.items
    raise LangTypeError(f"{name}: expecting list or vector")


def _rebuild(original: Value, items: tuple[Value, ...]) -> Value:
    return Vec(items) if isinstance(original, Vec) else List(items)


def _nth(lang: Lang, args: list[Value]) -> Value:
    expect_arity("nth", 2, args)
    index, seq = args
    if not is_number(index):
        raise LangTypeError("nth: first argument should be a number")
    i = as_whole_number(index)
    if i is None:
        raise OtherError("nth: expecting int argument")
    items = _sequence("nth", seq)
    if not 0 <= i < len(items):
        raise OtherError(f"nth: index {i} out of bounds")
    return items[i]


def _count(lang: Lang, args: list[Value]) -> Value:
    expect_arity("count", 1, args)
    value = args[0]
    if isinstance(value, str):
        return len(value)
    if isinstance(value, Dict):
        return len(value)
    return len(_sequence("count", value))


def _head(lang: Lang, args: list[Value]) -> Value:
    expect_arity("head", 1, args)
    items = _sequence("head", args[0])
    if not items:
        raise OtherError("head: empty sequence")
    return items[0]


def _tail(lang: Lang, args: list[Value]) -> Value:
    expect_arity("tail", 1, args)
    items = _sequence("tail", args[0])
    if not items:
        raise OtherError("tail: empty sequence")
    return _rebuild(args[0], items[1:])


def _cons(lang: Lang, args: list[Value]) -> Value:
    expect_arity("cons", 2, args)
    item, seq = args
    return _rebuild(seq, (item, *_sequence("cons", seq)))


def _string_append(lang: Lang, args: list[Value]) -> Value:
    for arg in args:
        if not isinstance(arg, str):
            raise LangTypeError("string-append: non-string argument")
    return "".join(args)


def _show(lang: Lang, args: list[Value]) -> Value:
    expect_arity("show", 1, args)
    return render(args[0])


def _type(lang: Lang, args: list[Value]) -> Value:
    expect_arity("type", 1, args)
    value = args[0]
    if isinstance(value, bool):
        return Keyword("boolean")
    if is_number(value):
        return Keyword("number")
    kinds: list[tuple[type, str]] = [
        (str, "string"),
        (Atom, "atom"),
        (Keyword, "keyword"),
        (List, "list"),
        (Vec, "vector"),
        (Dict, "dict"),
        (PrimFn, "function"),
        (Lambda, "function"),
    ]
    for kind, name in kinds:
        if isinstance(value, kind):
            return Keyword(name)
    raise LangTypeError(f"type: unknown value {value!r}")


def pure_prim_fns() -> dict[str, PrimFn]:
    """Primitives with no effects."""
    prims = [
        PrimFn("+", _add, "Sum of numbers."),
        PrimFn("-", _sub, "Difference, or negation of a single number."),
        PrimFn("*", _mul, "Product of numbers."),
        PrimFn("/", _div, "Exact division."),
        _comparison("<", lambda a, b: a < b),
        _comparison(">", lambda a, b: a > b),
        PrimFn("=", _equal, "Structural equality."),
        PrimFn("not", _not, "Boolean negation."),
        PrimFn("list", _list, "Build a list from the arguments."),
        PrimFn("vector", _vector, "Build a vector from the arguments."),
        PrimFn("nth", _nth, "Element at a zero-based index."),
        PrimFn("count", _count, "Length of a sequence, string or dict."),
        PrimFn("head", _head, "First element of a sequence."),
        PrimFn("tail", _tail, "All but the first element of a sequence."),
        PrimFn("cons", _cons, "Prepend an element to a sequence."),
        PrimFn("string-append", _string_append, "Concatenate strings."),
        PrimFn("show", _show, "Render a value as source text."),
        PrimFn("type", _type, "Keyword naming the type of a value."),
    ]
    return {p.name: p for p in prims}


# =============================================================================
# Effectful primitives
# =============================================================================


def _put_str(lang: Lang, args: list[Value]) -> Value:
    expect_arity("put-str!", 1, args)
    if not isinstance(args[0], str):
        raise LangTypeError("put-str!: expecting string")
    lang.capabilities.stdout.emit(args[0])
    return EMPTY


def _get_line(lang: Lang, args: list[Value]) -> Value:
    expect_arity("get-line!", 0, args)
    line = lang.capabilities.stdin.next()
    if line is None:
        raise ExitError("get-line!: no more input")
    return line


def _read_file(lang: Lang, args: list[Value]) -> Value:
    expect_arity("read-file!", 1, args)
    if not isinstance(args[0], str):
        raise LangTypeError("read-file!: expecting string")
    content = lang.capabilities.files.read(args[0])
    if isinstance(content, FileNotFound):
        raise OtherError(content.message)
    return content


def _uuid(lang: Lang, args: list[Value]) -> Value:
    expect_arity("uuid!", 0, args)
    return lang.capabilities.uuids.next()


def _random_bytes(lang: Lang, args: list[Value]) -> Value:
    expect_arity("random-bytes!", 1, args)
    if not is_number(args[0]):
        raise LangTypeError("random-bytes!: expecting number")
    n = as_whole_number(args[0])
    if n is None or n < 0:
        raise OtherError("random-bytes!: expecting non-negative int argument")
    return lang.capabilities.random.draw(n).hex()


def _no_chain_backend(name: str) -> PrimFn:
    def unavailable(lang: Lang, args: list[Value]) -> Value:
        raise OtherError(f"{name}: no remote chain backend is configured")

    return PrimFn(name, unavailable, f"{name} against a remote chain.")


def repl_prim_fns() -> dict[str, PrimFn]:
    """Effectful primitives, all going through Lang.capabilities."""
    prims = [
        PrimFn("put-str!", _put_str, "Write a line to stdout."),
        PrimFn("get-line!", _get_line, "Read a line from stdin."),
        PrimFn("read-file!", _read_file, "Read a file's content."),
        PrimFn("uuid!", _uuid, "A fresh unique identifier."),
        PrimFn("random-bytes!", _random_bytes, "n random bytes as hex."),
        _no_chain_backend("send!"),
        _no_chain_backend("receive!"),
    ]
    return {p.name: p for p in prims}
