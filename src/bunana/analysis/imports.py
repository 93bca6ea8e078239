"""Recover package imports from requirement filter trees."""

from __future__ import annotations

from collections.abc import Mapping

from bunana.analysis.models import ANY_VERSION, ImportRecord
from bunana.filters import (
    EQUAL,
    GREATER_EQUAL,
    AndFilter,
    Comparison,
    FilterNode,
    NotFilter,
    format_filter,
    is_comparison,
    parse_filter,
)
from bunana.manifest import PACKAGE_NAMESPACE

VERSION_ATTRIBUTE = "version"


def interpret_requirement(node: FilterNode, directives: Mapping[str, str]) -> ImportRecord:
    """Pattern-match a package requirement filter into an import record."""
    optional = directives.get("resolution") == "optional"

    if isinstance(node, AndFilter):
        package_name: str | None = None
        min_version: str | None = None
        max_version: str | None = None
        extra: list[str] = []
        for operand in node.operands:
            if is_comparison(operand, PACKAGE_NAMESPACE, EQUAL):
                package_name = _operand_value(operand)
            elif is_comparison(operand, VERSION_ATTRIBUTE, GREATER_EQUAL):
                min_version = _operand_value(operand)
            elif isinstance(operand, NotFilter) and is_comparison(
                operand.operand, VERSION_ATTRIBUTE, GREATER_EQUAL
            ):
                max_version = _operand_value(operand.operand)
            else:
                extra.append(format_filter(operand))
        if package_name is None:
            return ImportRecord(unparsed_expression=format_filter(node), optional=optional)
        return ImportRecord(
            package_name=package_name,
            min_version=min_version,
            max_version=max_version,
            extra_selectors=tuple(extra),
            optional=optional,
        )

    if is_comparison(node, PACKAGE_NAMESPACE, EQUAL):
        return ImportRecord(
            package_name=_operand_value(node),
            min_version=ANY_VERSION,
            max_version=ANY_VERSION,
            optional=optional,
        )

    return ImportRecord(unparsed_expression=format_filter(node), optional=optional)


def interpret_requirement_filter(filter_text: str, directives: Mapping[str, str]) -> ImportRecord:
    """Parse ``filter_text`` and interpret it as a package requirement."""
    return interpret_requirement(parse_filter(filter_text), directives)


def _operand_value(node: FilterNode) -> str:
    if not isinstance(node, Comparison):
        raise TypeError(f"Expected a comparison node, got {type(node).__name__}")
    return node.value
