"""Interpretation of bundle requirements and capabilities."""

from .bundle import analyze_manifest, build_bundle_record
from .exports import classify_capability, split_uses
from .imports import interpret_requirement, interpret_requirement_filter
from .models import ANY_VERSION, BundleRecord, ExportRecord, ImportRecord

__all__ = [
    "ANY_VERSION",
    "BundleRecord",
    "ExportRecord",
    "ImportRecord",
    "analyze_manifest",
    "build_bundle_record",
    "classify_capability",
    "interpret_requirement",
    "interpret_requirement_filter",
    "split_uses",
]
