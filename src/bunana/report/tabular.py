"""Tab-separated import/export report."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import astuple, dataclass
from typing import TextIO

from bunana.analysis import BundleRecord, ExportRecord, ImportRecord

FIELD_SEPARATOR = "\t"
LINE_TERMINATOR = "\n"


@dataclass(slots=True, frozen=True)
class ReportRow:
    """One output row; all fields are already rendered text."""

    bundle_name: str
    bundle_version: str
    package_name: str
    relation: str
    min_version: str
    max_version: str
    other_constraints: str
    optional: str
    note: str

    def to_line(self) -> str:
        return FIELD_SEPARATOR.join(astuple(self)) + LINE_TERMINATOR


def format_sequence(items: Sequence[str]) -> str:
    """Render a list as ``[a, b]``."""
    return "[" + ", ".join(items) + "]"


def format_mapping(items: Mapping[str, str]) -> str:
    """Render a mapping as ``{k=v, ...}`` with sorted keys."""
    return "{" + ", ".join(f"{key}={items[key]}" for key in sorted(items)) + "}"


def import_row(bundle: BundleRecord, record: ImportRecord) -> ReportRow:
    return ReportRow(
        bundle_name=_text(bundle.name),
        bundle_version=_text(bundle.version),
        package_name=_text(record.package_name),
        relation="import",
        min_version=_text(record.min_version),
        max_version=_text(record.max_version),
        other_constraints=format_sequence(record.extra_selectors),
        optional=_flag(record.optional),
        note=_text(record.unparsed_expression),
    )


def export_row(bundle: BundleRecord, record: ExportRecord) -> ReportRow:
    return ReportRow(
        bundle_name=_text(bundle.name),
        bundle_version=_text(bundle.version),
        package_name=_text(record.package_name),
        relation="export",
        min_version=_text(record.version),
        max_version=_text(record.version),
        other_constraints=format_mapping(dict(record.extra_attributes)),
        optional=_flag(False),
        note=format_sequence(record.uses),
    )


def bundle_rows(bundle: BundleRecord) -> list[ReportRow]:
    """Rows for one bundle: imports first, then exports, each in record order."""
    rows = [import_row(bundle, record) for record in bundle.imports]
    rows.extend(export_row(bundle, record) for record in bundle.exports)
    return rows


def write_report(bundles: Iterable[BundleRecord], out: TextIO) -> int:
    """Write every bundle's rows to ``out`` and return the number of rows written."""
    written = 0
    for bundle in bundles:
        for row in bundle_rows(bundle):
            out.write(row.to_line())
            written += 1
    return written


def render_report(bundles: Iterable[BundleRecord]) -> str:
    """Return the full report as one string."""
    return "".join(row.to_line() for bundle in bundles for row in bundle_rows(bundle))


def _text(value: str | None) -> str:
    return "" if value is None else value


def _flag(value: bool) -> str:
    return "true" if value else "false"
