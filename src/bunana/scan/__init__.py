"""Module directory scanning."""

from .discovery import discover_jars, read_jar_manifest, should_exclude
from .runner import ScanSummary, analyze_jar, run_analysis, scan_directory

__all__ = [
    "ScanSummary",
    "analyze_jar",
    "discover_jars",
    "read_jar_manifest",
    "run_analysis",
    "scan_directory",
    "should_exclude",
]
