"""Report serialization."""

from .tabular import (
    ReportRow,
    bundle_rows,
    export_row,
    format_mapping,
    format_sequence,
    import_row,
    render_report,
    write_report,
)

__all__ = [
    "ReportRow",
    "bundle_rows",
    "export_row",
    "format_mapping",
    "format_sequence",
    "import_row",
    "render_report",
    "write_report",
]
