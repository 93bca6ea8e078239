"""Recursive-descent parser for LDAP-style requirement filters."""

from __future__ import annotations

from bunana.errors import FilterSyntaxError
from bunana.filters.model import (
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
)

_ATTRIBUTE_STOP = frozenset("=<>~()")


def parse_filter(text: str) -> FilterNode:
    """Parse a filter string such as ``(&(a=b)(!(c>=1)))`` into a node tree."""
    parser = _FilterParser(text)
    parser.skip_whitespace()
    node = parser.parse_filter()
    parser.skip_whitespace()
    if not parser.at_end():
        raise FilterSyntaxError("Trailing characters after filter", text, parser.position)
    return node


class _FilterParser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0

    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def peek(self) -> str:
        if self.at_end():
            return ""
        return self.text[self.position]

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.position].isspace():
            self.position += 1

    def expect(self, char: str) -> None:
        if self.peek() != char:
            found = self.peek() or "end of input"
            raise FilterSyntaxError(f"Expected {char!r} but found {found!r}", self.text, self.position)
        self.position += 1

    def parse_filter(self) -> FilterNode:
        self.expect("(")
        self.skip_whitespace()
        marker = self.peek()
        if marker == "&":
            self.position += 1
            node: FilterNode = AndFilter(operands=self.parse_operands())
        elif marker == "|":
            self.position += 1
            node = OrFilter(operands=self.parse_operands())
        elif marker == "!":
            self.position += 1
            self.skip_whitespace()
            node = NotFilter(operand=self.parse_filter())
            self.skip_whitespace()
        else:
            node = self.parse_item()
        self.expect(")")
        return node

    def parse_operands(self) -> tuple[FilterNode, ...]:
        operands: list[FilterNode] = []
        self.skip_whitespace()
        while self.peek() == "(":
            operands.append(self.parse_filter())
            self.skip_whitespace()
        return tuple(operands)

    def parse_item(self) -> FilterNode:
        start = self.position
        while not self.at_end() and self.text[self.position] not in _ATTRIBUTE_STOP:
            self.position += 1
        name = self.text[start : self.position].strip()
        if not name:
            raise FilterSyntaxError("Missing attribute name", self.text, start)

        operator = self.parse_operator()
        pieces = self.parse_value_pieces()
        if operator != EQUAL:
            return Comparison(name=name, operator=operator, value="*".join(pieces))
        if len(pieces) == 1:
            return Comparison(name=name, operator=EQUAL, value=pieces[0])
        if pieces == ["", ""]:
            return PresentFilter(name=name)
        return SubstringFilter(name=name, pieces=tuple(pieces))

    def parse_operator(self) -> str:
        for operator in (GREATER_EQUAL, LESS_EQUAL, APPROX, EQUAL):
            if self.text.startswith(operator, self.position):
                self.position += len(operator)
                return operator
        raise FilterSyntaxError("Expected comparison operator", self.text, self.position)

    def parse_value_pieces(self) -> list[str]:
        """Read a value up to the closing paren, splitting on unescaped ``*``."""
        pieces: list[str] = []
        current: list[str] = []
        while True:
            if self.at_end():
                raise FilterSyntaxError("Unterminated filter value", self.text, self.position)
            char = self.text[self.position]
            if char == ")":
                break
            if char == "(":
                raise FilterSyntaxError("Unescaped '(' in filter value", self.text, self.position)
            if char == "\\":
                self.position += 1
                if self.at_end():
                    raise FilterSyntaxError("Dangling escape", self.text, self.position)
                current.append(self.text[self.position])
            elif char == "*":
                pieces.append("".join(current))
                current = []
            else:
                current.append(char)
            self.position += 1
        pieces.append("".join(current))
        return pieces
