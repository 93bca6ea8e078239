"""Scan a modules directory into bundle records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from bunana.analysis import BundleRecord, analyze_manifest
from bunana.config import AnalyzerConfig
from bunana.errors import ManifestError
from bunana.logging import DiagnosticSink, emit
from bunana.manifest import ParserConfig
from bunana.report import write_report
from bunana.scan.discovery import discover_jars, read_jar_manifest


@dataclass(slots=True)
class ScanSummary:
    """Counters for one scan."""

    archives: int = 0
    bundles: int = 0
    missing_manifests: int = 0
    skipped_malformed: int = 0
    rows: int = 0


def analyze_jar(
    path: Path,
    config: ParserConfig | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> BundleRecord | None:
    """Analyze one archive; None means the archive carries no manifest."""
    return analyze_manifest(
        read_jar_manifest(path), config=config, diagnostics=diagnostics, source=str(path)
    )


def scan_directory(
    config: AnalyzerConfig,
    diagnostics: DiagnosticSink | None = None,
    summary: ScanSummary | None = None,
) -> Iterator[BundleRecord]:
    """Yield one record per bundle in discovery order, applying the malformed-manifest policy."""
    counters = summary if summary is not None else ScanSummary()
    root = config.modules_dir
    for path in discover_jars(root, config.scan):
        counters.archives += 1
        source = path.relative_to(root).as_posix()
        try:
            record = analyze_jar(path, config=config.parser, diagnostics=diagnostics)
        except ManifestError as exc:
            if config.on_malformed == "fail":
                raise ManifestError(f"{source}: {exc.reason}", exc.header) from exc
            counters.skipped_malformed += 1
            emit(
                diagnostics,
                "error",
                "malformed_manifest",
                str(exc),
                source=source,
                details={"header": exc.header},
            )
            continue
        if record is None:
            counters.missing_manifests += 1
            emit(diagnostics, "debug", "missing_manifest", "Archive has no manifest.", source=source)
            continue
        counters.bundles += 1
        yield record


def run_analysis(config: AnalyzerConfig, diagnostics: DiagnosticSink | None = None) -> ScanSummary:
    """Scan ``config.modules_dir`` and write the report to ``config.output_path``."""
    summary = ScanSummary()
    emit(
        diagnostics,
        "debug",
        "run_config",
        "Effective configuration.",
        details=config.to_public_dict(),
    )
    output_path = config.output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="\n") as out:
        summary.rows = write_report(scan_directory(config, diagnostics, summary), out)
    return summary
