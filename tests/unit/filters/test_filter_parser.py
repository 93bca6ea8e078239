from __future__ import annotations

import pytest

from bunana.errors import FilterSyntaxError
from bunana.filters import (
    AndFilter,
    Comparison,
    NotFilter,
    OrFilter,
    PresentFilter,
    SubstringFilter,
    format_filter,
    parse_filter,
)


def test_parse_version_range_filter_into_and_tree() -> None:
    node = parse_filter("(&(osgi.wiring.package=com.example)(version>=1.0.0)(!(version>=2.0.0)))")

    assert node == AndFilter(
        operands=(
            Comparison(name="osgi.wiring.package", operator="=", value="com.example"),
            Comparison(name="version", operator=">=", value="1.0.0"),
            NotFilter(operand=Comparison(name="version", operator=">=", value="2.0.0")),
        )
    )


def test_parse_presence_and_substring_items() -> None:
    assert parse_filter("(osgi.wiring.package=*)") == PresentFilter(name="osgi.wiring.package")
    assert parse_filter("(osgi.wiring.package=com.foo.*)") == SubstringFilter(
        name="osgi.wiring.package", pieces=("com.foo.", "")
    )
    assert parse_filter("(name=*mid*)") == SubstringFilter(name="name", pieces=("", "mid", ""))


def test_parse_comparison_operators() -> None:
    assert parse_filter("(version<=3.0)") == Comparison(name="version", operator="<=", value="3.0")
    assert parse_filter("(vendor~=acme)") == Comparison(name="vendor", operator="~=", value="acme")


def test_escaped_characters_are_literal_values() -> None:
    node = parse_filter(r"(label=a\(b\)\*c)")

    assert node == Comparison(name="label", operator="=", value="a(b)*c")
    assert format_filter(node) == r"(label=a\(b\)\*c)"


def test_whitespace_between_operands_is_ignored() -> None:
    node = parse_filter("( & (a=b) (c=d) )")

    assert node == AndFilter(
        operands=(
            Comparison(name="a", operator="=", value="b"),
            Comparison(name="c", operator="=", value="d"),
        )
    )


@pytest.mark.parametrize(
    "text",
    [
        "(|(a=b)(c=d))",
        "(&(osgi.wiring.package=p)(version>=1.0.0)(!(version>=2.0.0)))",
        "(!(&(x=1)(|(y=2)(z=*))))",
        "(osgi.wiring.package=com.foo.*)",
        r"(path=C:\\temp\(1\))",
    ],
)
def test_canonical_text_round_trips(text: str) -> None:
    node = parse_filter(text)

    assert format_filter(node) == text
    assert parse_filter(format_filter(node)) == node
    assert str(node) == text


@pytest.mark.parametrize(
    "text",
    ["(a=b", "a=b", "(&(a=b))x", "(=b)", "(a)", "(a=b(c)", "(!(a=b)(c=d))"],
)
def test_malformed_filters_raise_syntax_error(text: str) -> None:
    with pytest.raises(FilterSyntaxError):
        parse_filter(text)


def test_or_filter_keeps_operand_order() -> None:
    node = parse_filter("(|(b=2)(a=1))")

    assert isinstance(node, OrFilter)
    assert [operand.name for operand in node.operands] == ["b", "a"]
