"""Parser for OSGi header clauses (``path;path;attr=value;dir:=value,...``)."""

from __future__ import annotations

from dataclasses import dataclass, field

from bunana.errors import ManifestError
from bunana.manifest.versions import Version


@dataclass(slots=True, frozen=True)
class HeaderClause:
    """One comma-separated clause of a manifest header."""

    paths: tuple[str, ...]
    directives: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, object] = field(default_factory=dict)


def parse_header_clauses(header: str, value: str | None) -> list[HeaderClause]:
    """Split a header value into clauses of paths, attributes and directives."""
    if value is None or not value.strip():
        return []
    clauses: list[HeaderClause] = []
    for raw_clause in split_unquoted(value, ",", header):
        if not raw_clause.strip():
            raise ManifestError("Empty clause.", header)
        clauses.append(_parse_clause(header, raw_clause))
    return clauses


def split_unquoted(text: str, separator: str, header: str) -> list[str]:
    """Split on ``separator`` outside double-quoted sections."""
    pieces: list[str] = []
    current: list[str] = []
    quoted = False
    index = 0
    while index < len(text):
        char = text[index]
        if quoted and char == "\\" and index + 1 < len(text):
            current.append(char)
            current.append(text[index + 1])
            index += 2
            continue
        if char == '"':
            quoted = not quoted
        elif char == separator and not quoted:
            pieces.append("".join(current))
            current = []
            index += 1
            continue
        current.append(char)
        index += 1
    if quoted:
        raise ManifestError("Unterminated quoted value.", header)
    pieces.append("".join(current))
    return pieces


def _parse_clause(header: str, raw_clause: str) -> HeaderClause:
    paths: list[str] = []
    directives: dict[str, str] = {}
    attributes: dict[str, object] = {}
    for piece in split_unquoted(raw_clause, ";", header):
        stripped = piece.strip()
        if not stripped:
            raise ManifestError("Empty path or parameter in clause.", header)
        equals = _find_unquoted(stripped, "=")
        if equals < 0:
            if directives or attributes:
                raise ManifestError(f"Path {stripped!r} must precede all parameters.", header)
            paths.append(_unquote(stripped, header))
            continue

        is_directive = equals > 0 and stripped[equals - 1] == ":"
        key_end = equals - 1 if is_directive else equals
        key = stripped[:key_end].strip()
        raw_value = _unquote(stripped[equals + 1 :].strip(), header)
        if not key:
            raise ManifestError(f"Parameter {stripped!r} has no name.", header)
        if is_directive:
            if key in directives:
                raise ManifestError(f"Duplicate directive {key!r}.", header)
            directives[key] = raw_value
            continue
        name, typed_value = _typed_attribute(header, key, raw_value)
        if name in attributes:
            raise ManifestError(f"Duplicate attribute {name!r}.", header)
        attributes[name] = typed_value

    if not paths:
        raise ManifestError("Clause has no path.", header)
    return HeaderClause(paths=tuple(paths), directives=directives, attributes=attributes)


def _find_unquoted(text: str, char: str) -> int:
    quoted = False
    escaped = False
    for index, current in enumerate(text):
        if escaped:
            escaped = False
            continue
        if quoted and current == "\\":
            escaped = True
        elif current == '"':
            quoted = not quoted
        elif current == char and not quoted:
            return index
    return -1


def _unquote(text: str, header: str) -> str:
    if len(text) < 2 or not (text.startswith('"') and text.endswith('"')):
        if '"' in text:
            raise ManifestError(f"Misplaced quote in {text!r}.", header)
        return text
    body = text[1:-1]
    output: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            output.append(body[index + 1])
            index += 2
            continue
        output.append(char)
        index += 1
    return "".join(output)


def _typed_attribute(header: str, key: str, value: str) -> tuple[str, object]:
    name, colon, type_name = key.partition(":")
    name = name.strip()
    if not colon:
        return name, value
    type_name = type_name.strip()
    try:
        if type_name.startswith("List"):
            element_type = "String"
            if type_name != "List":
                if not (type_name.startswith("List<") and type_name.endswith(">")):
                    raise ValueError(f"unknown type {type_name!r}")
                element_type = type_name[5:-1].strip()
            items = [item.strip() for item in split_unquoted(value, ",", header)] if value else []
            return name, [_convert_scalar(element_type, item) for item in items]
        return name, _convert_scalar(type_name, value)
    except ValueError as exc:
        raise ManifestError(f"Invalid typed attribute {key!r}: {exc}", header) from exc


def _convert_scalar(type_name: str, value: str) -> object:
    if type_name == "String":
        return value
    if type_name == "Version":
        return Version.parse(value)
    if type_name == "Long":
        return int(value.strip())
    if type_name == "Double":
        return float(value.strip())
    raise ValueError(f"unknown type {type_name!r}")
