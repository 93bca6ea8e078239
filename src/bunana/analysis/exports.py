"""Classify package capabilities into export records."""

from __future__ import annotations

from collections.abc import Mapping

from bunana.analysis.models import ExportRecord
from bunana.logging import DiagnosticSink, emit
from bunana.manifest import PACKAGE_NAMESPACE, attribute_text

IGNORED_ATTRIBUTES = frozenset({"bundle-symbolic-name", "bundle-version"})
VERSION_ATTRIBUTE = "version"
USES_DIRECTIVE = "uses"
MANDATORY_DIRECTIVE = "mandatory"


def classify_capability(
    attributes: Mapping[str, object],
    directives: Mapping[str, str],
    diagnostics: DiagnosticSink | None = None,
    source: str | None = None,
) -> ExportRecord:
    """Split capability attributes into well-known fields and extra attributes."""
    package_name: str | None = None
    version: str | None = None
    extra: dict[str, str] = {}
    for key, value in attributes.items():
        if key in IGNORED_ATTRIBUTES:
            continue
        if key == PACKAGE_NAMESPACE:
            package_name = str(value)
        elif key == VERSION_ATTRIBUTE:
            version = attribute_text(value)
        else:
            extra[key] = attribute_text(value)

    remaining = dict(directives)
    uses: tuple[str, ...] = ()
    if USES_DIRECTIVE in remaining:
        uses = split_uses(remaining.pop(USES_DIRECTIVE))
    if MANDATORY_DIRECTIVE in remaining:
        extra[MANDATORY_DIRECTIVE] = remaining.pop(MANDATORY_DIRECTIVE)
    if remaining:
        names = sorted(remaining)
        emit(
            diagnostics,
            "warning",
            "unknown_directives",
            f"Unknown directives on export {package_name}: {', '.join(names)}",
            source=source,
            details={"package": package_name, "directives": names},
        )

    return ExportRecord(
        package_name=package_name,
        version=version,
        extra_attributes=tuple(extra.items()),
        uses=uses,
    )


def split_uses(value: str) -> tuple[str, ...]:
    """Split a ``uses`` directive into package names."""
    return tuple(piece.strip() for piece in value.split(",") if piece.strip())
