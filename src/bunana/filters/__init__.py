"""Filter expression trees used by requirements."""

from .model import (
    APPROX,
    EQUAL,
    GREATER_EQUAL,
    LESS_EQUAL,
    AndFilter,
    Comparison,
    FilterNode,
    NotFilter,
    OrFilter,
    PresentFilter,
    SubstringFilter,
    encode_value,
    format_filter,
    is_comparison,
)
from .parser import parse_filter

__all__ = [
    "APPROX",
    "AndFilter",
    "Comparison",
    "EQUAL",
    "FilterNode",
    "GREATER_EQUAL",
    "LESS_EQUAL",
    "NotFilter",
    "OrFilter",
    "PresentFilter",
    "SubstringFilter",
    "encode_value",
    "format_filter",
    "is_comparison",
    "parse_filter",
]
