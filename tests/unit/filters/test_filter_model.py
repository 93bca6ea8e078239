from __future__ import annotations

import pytest

from bunana.filters import (
    AndFilter,
    Comparison,
    NotFilter,
    PresentFilter,
    encode_value,
    format_filter,
    is_comparison,
)


def test_format_nested_tree() -> None:
    node = AndFilter(
        operands=(
            Comparison(name="osgi.wiring.package", operator="=", value="p"),
            NotFilter(operand=PresentFilter(name="x")),
        )
    )

    assert format_filter(node) == "(&(osgi.wiring.package=p)(!(x=*)))"


def test_encode_value_escapes_filter_metacharacters() -> None:
    assert encode_value(r"a\b(c)*") == r"a\\b\(c\)\*"
    assert encode_value("plain") == "plain"


def test_is_comparison_checks_name_and_operator() -> None:
    node = Comparison(name="version", operator=">=", value="1.0.0")

    assert is_comparison(node, "version", ">=")
    assert not is_comparison(node, "version", "<=")
    assert not is_comparison(node, "other", ">=")
    assert not is_comparison(PresentFilter(name="version"), "version", ">=")


def test_unknown_operator_is_rejected() -> None:
    with pytest.raises(ValueError, match="operator"):
        Comparison(name="a", operator="<", value="1")
