"""Value tree produced by the nixc parser.

Scalar values are hashable. Lists, attrsets and let-in expressions hold a
``list`` or ``dict`` and are not, so value trees cannot be set members or
dict keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union, assert_never


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Float:
    value: float


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class List:
    items: list[Value] = field(default_factory=list)

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class AttrSet:
    bindings: dict[str, Value] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]


# No production reaches this yet; evaluation is not implemented.
@dataclass(frozen=True)
class LetIn:
    bindings: dict[str, Value]
    body: Value

    __hash__ = None  # type: ignore[assignment]


Value = Union[Null, Bool, Integer, Float, String, List, AttrSet, LetIn]


def to_python(value: Value) -> Any:
    """Convert a value tree into plain Python objects.

    ``Null`` becomes ``None``, lists become ``list`` and attrsets become
    ``dict``. ``LetIn`` has no plain form and raises ``TypeError``.
    """
    match value:
        case Null():
            return None
        case Bool(b):
            return b
        case Integer(n):
            return n
        case Float(x):
            return x
        case String(s):
            return s
        case List(items):
            return [to_python(item) for item in items]
        case AttrSet(bindings):
            return {key: to_python(v) for key, v in bindings.items()}
        case LetIn():
            raise TypeError("let-in expressions have no plain Python form")
        case _:
            assert_never(value)
