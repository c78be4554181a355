"""Value types of the scripting language.

Numbers are Python ``int`` or ``fractions.Fraction`` (decimal literals are
read exactly), strings are ``str`` and booleans are ``bool``. Everything else
has a dedicated type here.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass, field
from fractions import Fraction
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from capharness.lang.evaluator import Lang

Value = Any
"""Any value the evaluator can produce."""


@dataclass(frozen=True)
class Atom:
    """An identifier."""

    name: str


@dataclass(frozen=True)
class Keyword:
    """A self-evaluating ``:name`` keyword."""

    name: str


@dataclass(frozen=True)
class List:
    """A parenthesised sequence. Evaluating a non-empty list is a call."""

    items: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Vec:
    """A bracketed sequence. Evaluates each element."""

    items: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Dict:
    """A braced mapping. Evaluates keys and values.

    Entries are indexed by dict_key(), so #t and 1 are distinct keys. Build
    instances with from_pairs().
    """

    entries: dict[Hashable, tuple[Value, Value]] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Value, Value]]) -> Dict:
        """Later pairs win over earlier pairs with the same key.

        Raises:
            TypeError: If a key is unhashable.
        """
        return cls({dict_key(k): (k, v) for k, v in pairs})

    def items(self) -> Iterator[tuple[Value, Value]]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(eq=False)
class PrimFn:
    """A primitive function implemented in Python.

    Attributes:
        name: Name the primitive is bound to.
        fn: Called with the running evaluator and the evaluated arguments.
        doc: One-line description.
    """

    name: str
    fn: Callable[[Lang, list[Value]], Value]
    doc: str = ""


@dataclass(eq=False)
class Lambda:
    """A user-defined function closing over the environment it was made in."""

    params: tuple[str, ...]
    body: tuple[Value, ...]
    env: dict[str, Value]


def is_number(value: Value) -> bool:
    # bool is an int subclass but is never a number here
    return isinstance(value, (int, Fraction)) and not isinstance(value, bool)


def dict_key(value: Value) -> Hashable:
    """Hashable identity of a dict key.

    Python hashes True like 1, so booleans are tagged and sequences are keyed
    element by element.

    Raises:
        TypeError: If the value cannot be a key.
    """
    if isinstance(value, bool):
        return (bool, value)
    if isinstance(value, (List, Vec)):
        return (type(value), tuple(dict_key(item) for item in value.items))
    hash(value)
    return value


def normalize_number(value: int | Fraction) -> int | Fraction:
    """Collapse integral fractions to int."""
    if isinstance(value, Fraction) and value.denominator == 1:
        return value.numerator
    return value


def as_whole_number(value: int | Fraction) -> int | None:
    """Return value as an int if it is integral, else None."""
    value = normalize_number(value)
    if isinstance(value, int):
        return value
    return None


def values_equal(a: Value, b: Value) -> bool:
    """Structural equality that keeps booleans apart from numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a is b
    if isinstance(a, (List, Vec)) and type(a) is type(b):
        return len(a) == len(b) and all(
            values_equal(x, y) for x, y in zip(a.items, b.items, strict=True)
        )
    if isinstance(a, Dict) and isinstance(b, Dict):
        if a.entries.keys() != b.entries.keys():
            return False
        return all(
            values_equal(v, b.entries[key][1]) for key, (_, v) in a.entries.items()
        )
    if is_number(a) and is_number(b):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


EMPTY = List(())
"""The empty list, returned by forms evaluated only for their effect."""
