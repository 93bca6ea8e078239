"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from bunana import __version__
from bunana.config import DEFAULT_OUTPUT, MALFORMED_POLICIES, CliOverrides, load_effective_config
from bunana.errors import BunanaError
from bunana.logging import (
    DiagnosticCollector,
    DiagnosticSink,
    JsonlDiagnosticLog,
    StreamDiagnosticSink,
    TeeDiagnosticSink,
)
from bunana.scan import run_analysis


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for a scan run."""
    parser = argparse.ArgumentParser(
        prog="bunana",
        description="OSGi bundle analyzer: scans a directory of jar files into a tab-separated "
        "report of package imports and exports.",
    )
    parser.add_argument("modules_dir", nargs="?", default=".", help="OSGi modules directory.")
    parser.add_argument(
        "out_path", nargs="?", default=None, help=f"Output file. Default: {DEFAULT_OUTPUT}"
    )
    parser.add_argument(
        "--on-malformed",
        choices=MALFORMED_POLICIES,
        default=None,
        help="Abort on the first malformed manifest (fail) or report it and continue (skip).",
    )
    parser.add_argument(
        "--diagnostics-log", default=None, help="Append diagnostics as JSON lines to this file."
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print warnings to stderr.")
    parser.add_argument("--version", action="version", version=f"bunana {__version__}")
    return parser


def main(argv: list[str] | None = None, stderr: TextIO | None = None) -> int:
    """Run one scan and return the process exit code."""
    err = stderr if stderr is not None else sys.stderr
    args = build_arg_parser().parse_args(argv)
    overrides = CliOverrides(
        output_path=Path(args.out_path) if args.out_path is not None else None,
        on_malformed=args.on_malformed,
        diagnostics_log=Path(args.diagnostics_log) if args.diagnostics_log is not None else None,
    )
    try:
        config = load_effective_config(Path(args.modules_dir), overrides)
    except ValueError as exc:
        err.write(f"error: {exc}\n")
        return 2

    collector = DiagnosticCollector()
    sinks: list[DiagnosticSink] = [collector]
    if not args.quiet:
        sinks.append(StreamDiagnosticSink(err))
    try:
        if config.diagnostics_log is not None:
            sinks.append(JsonlDiagnosticLog(config.diagnostics_log))
        summary = run_analysis(config, diagnostics=TeeDiagnosticSink(sinks))
    except (BunanaError, OSError) as exc:
        err.write(f"error: {exc}\n")
        return 1

    warnings = collector.count("warning")
    if warnings:
        err.write(f"{warnings} warning(s) reported\n")
    if summary.skipped_malformed:
        err.write(f"Skipped {summary.skipped_malformed} malformed bundle(s)\n")
    err.write(f"Written {config.output_path}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
