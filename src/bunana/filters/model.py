"""Closed set of filter expression nodes and their canonical string form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

EQUAL: Final = "="
GREATER_EQUAL: Final = ">="
LESS_EQUAL: Final = "<="
APPROX: Final = "~="

COMPARISON_OPERATORS: Final = (EQUAL, GREATER_EQUAL, LESS_EQUAL, APPROX)

_ESCAPED_CHARS = frozenset("\\()*")


@dataclass(slots=True, frozen=True)
class AndFilter:
    """Conjunction over an ordered list of operands."""

    operands: tuple[FilterNode, ...]

    def __str__(self) -> str:
        return format_filter(self)


@dataclass(slots=True, frozen=True)
class OrFilter:
    """Disjunction over an ordered list of operands."""

    operands: tuple[FilterNode, ...]

    def __str__(self) -> str:
        return format_filter(self)


@dataclass(slots=True, frozen=True)
class NotFilter:
    """Negation of exactly one operand."""

    operand: FilterNode

    def __str__(self) -> str:
        return format_filter(self)


@dataclass(slots=True, frozen=True)
class Comparison:
    """Single attribute comparison such as ``(version>=1.0.0)``."""

    name: str
    operator: str
    value: str

    def __post_init__(self) -> None:
        if self.operator not in COMPARISON_OPERATORS:
            raise ValueError(f"Unsupported comparison operator: {self.operator!r}")

    def __str__(self) -> str:
        return format_filter(self)


@dataclass(slots=True, frozen=True)
class SubstringFilter:
    """Wildcard match; an empty first or last piece marks a leading or trailing ``*``."""

    name: str
    pieces: tuple[str, ...]

    def __str__(self) -> str:
        return format_filter(self)


@dataclass(slots=True, frozen=True)
class PresentFilter:
    """Attribute presence test ``(name=*)``."""

    name: str

    def __str__(self) -> str:
        return format_filter(self)


FilterNode = AndFilter | OrFilter | NotFilter | Comparison | SubstringFilter | PresentFilter


def is_comparison(node: FilterNode, name: str, operator: str) -> bool:
    """Return True when node compares ``name`` with ``operator``."""
    return isinstance(node, Comparison) and node.name == name and node.operator == operator


def encode_value(value: str) -> str:
    """Escape characters that carry meaning inside a filter value."""
    return "".join(f"\\{char}" if char in _ESCAPED_CHARS else char for char in value)


def format_filter(node: FilterNode) -> str:
    """Render a filter tree in canonical LDAP syntax."""
    if isinstance(node, AndFilter):
        return "(&" + "".join(format_filter(operand) for operand in node.operands) + ")"
    if isinstance(node, OrFilter):
        return "(|" + "".join(format_filter(operand) for operand in node.operands) + ")"
    if isinstance(node, NotFilter):
        return "(!" + format_filter(node.operand) + ")"
    if isinstance(node, Comparison):
        return f"({node.name}{node.operator}{encode_value(node.value)})"
    if isinstance(node, SubstringFilter):
        return f"({node.name}=" + "*".join(encode_value(piece) for piece in node.pieces) + ")"
    if isinstance(node, PresentFilter):
        return f"({node.name}=*)"
    raise TypeError(f"Unsupported filter node: {type(node).__name__}")
