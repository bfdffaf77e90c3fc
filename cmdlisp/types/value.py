"""Runtime values for cmdlisp.

Every command receives and returns instances of the closed hierarchy below:

    - Int  -> 64-bit signed integer
    - Str  -> text
    - Bool -> true / false
    - List -> ordered, immutable sequence of values
    - Nil  -> the nil singleton

Values convert to and from the reader's plain-data representation
(see cmdlisp.reader.parser) so that a value can be turned back into code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from cmdlisp import SExpression
from cmdlisp.errors import ValueConversionError, CommandTypeError
from cmdlisp.types.symbol import Symbol

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


class Value:
    """Base class of all runtime values."""

    __slots__ = ()

    def is_truthy(self) -> bool:
        return True

    def to_string(self) -> str:
        raise NotImplementedError

    def to_sexpr(self) -> SExpression:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()

    @staticmethod
    def from_sexpr(node: SExpression) -> Value:
        """Convert a reader node into a Value.

        Symbols become strings. Floats are truncated toward zero, saturating
        at the 64-bit bounds; this is a lossy conversion, not an error.
        A dotted form (items, tail) flattens to a list with the tail appended.
        """
        if isinstance(node, Value):
            return node
        if node is None:
            return Nil
        # bool before int: bool is an int subclass
        if isinstance(node, bool):
            return Bool(node)
        if isinstance(node, int):
            if not INT_MIN <= node <= INT_MAX:
                raise ValueConversionError(f"Unsupported literal: integer {node} out of 64-bit range")
            return Int(node)
        if isinstance(node, float):
            if math.isnan(node):
                raise ValueConversionError("Unsupported literal: nan")
            if node >= INT_MAX:
                return Int(INT_MAX)
            if node <= INT_MIN:
                return Int(INT_MIN)
            return Int(int(node))
        if isinstance(node, str):
            return Str(node)
        if isinstance(node, Symbol):
            return Str(node.id)
        if isinstance(node, list):
            return List(Value.from_sexpr(item) for item in node)
        if isinstance(node, tuple) and len(node) == 2 and isinstance(node[0], list):
            items, tail = node
            return List([*(Value.from_sexpr(item) for item in items), Value.from_sexpr(tail)])
        raise ValueConversionError(f"Unsupported literal: {node!r}")


@dataclass(frozen=True)
class Int(Value):
    value: int

    def __post_init__(self):
        if type(self.value) is not int:
            raise TypeError(f"Int requires an int, got {type(self.value).__name__}")
        if not INT_MIN <= self.value <= INT_MAX:
            raise ValueConversionError(f"Integer {self.value} out of 64-bit range")

    def is_truthy(self) -> bool:
        return self.value != 0

    def to_string(self) -> str:
        return str(self.value)

    def to_sexpr(self) -> SExpression:
        return self.value


@dataclass(frozen=True)
class Str(Value):
    value: str

    def to_string(self) -> str:
        return self.value

    def to_sexpr(self) -> SExpression:
        return self.value


@dataclass(frozen=True)
class Bool(Value):
    value: bool

    def is_truthy(self) -> bool:
        return self.value

    def to_string(self) -> str:
        return "true" if self.value else "false"

    def to_sexpr(self) -> SExpression:
        return self.value


@dataclass(frozen=True)
class List(Value):
    items: tuple[Value, ...] = ()

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"List items must be Values, got {item!r}")
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def to_string(self) -> str:
        return "(" + " ".join(item.to_string() for item in self.items) + ")"

    def to_sexpr(self) -> SExpression:
        return [item.to_sexpr() for item in self.items]


class NilType(Value):
    __slots__ = ()
    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)

    def is_truthy(self) -> bool:
        return False

    def to_string(self) -> str:
        return "nil"

    def to_sexpr(self) -> SExpression:
        return self


Nil = NilType()


# -------------------------------
# Extraction helpers for handlers
# -------------------------------
def value_to_int(value: Value) -> int:
    if isinstance(value, Int):
        return value.value
    raise CommandTypeError(f"Expected integer, got: {value}")


def value_to_string(value: Value) -> str:
    if isinstance(value, Str):
        return value.value
    raise CommandTypeError(f"Expected string, got: {value}")


def value_to_list(value: Value) -> list[Value]:
    if isinstance(value, List):
        return list(value.items)
    raise CommandTypeError(f"Expected list, got: {value}")


def value_to_bool(value: Value) -> bool:
    if isinstance(value, Bool):
        return value.value
    raise CommandTypeError(f"Expected boolean, got: {value}")


def ints_to_values(ints: Iterable[int]) -> list[Value]:
    return [Int(i) for i in ints]


def strings_to_values(strings: Iterable[str]) -> list[Value]:
    return [Str(s) for s in strings]


def bools_to_values(bools: Iterable[bool]) -> list[Value]:
    return [Bool(b) for b in bools]
