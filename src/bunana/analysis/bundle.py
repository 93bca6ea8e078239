"""Group a bundle's requirements and capabilities into one record."""

from __future__ import annotations

from bunana.analysis.exports import classify_capability
from bunana.analysis.imports import interpret_requirement
from bunana.analysis.models import BundleRecord, ExportRecord, ImportRecord
from bunana.errors import ManifestError
from bunana.filters import FilterNode, parse_filter
from bunana.logging import DiagnosticSink
from bunana.manifest import (
    PACKAGE_NAMESPACE,
    BundleMetadata,
    Capability,
    ParserConfig,
    Requirement,
    parse_bundle_metadata,
    read_manifest,
)


def build_bundle_record(
    metadata: BundleMetadata,
    diagnostics: DiagnosticSink | None = None,
    source: str | None = None,
) -> BundleRecord:
    """Route package-wiring entries to the interpreters and keep the rest verbatim.

    A package-wiring requirement without a filter raises ``ManifestError``.
    """
    origin = source or metadata.symbolic_name
    imports: list[ImportRecord] = []
    unknown_requirements: list[Requirement] = []
    for requirement in metadata.requirements:
        if requirement.namespace == PACKAGE_NAMESPACE:
            node = _requirement_filter(requirement)
            imports.append(interpret_requirement(node, requirement.directives))
        else:
            unknown_requirements.append(requirement)

    exports: list[ExportRecord] = []
    unknown_capabilities: list[Capability] = []
    for capability in metadata.capabilities:
        if capability.namespace == PACKAGE_NAMESPACE:
            exports.append(
                classify_capability(
                    capability.attributes,
                    capability.directives,
                    diagnostics=diagnostics,
                    source=origin,
                )
            )
        else:
            unknown_capabilities.append(capability)

    return BundleRecord(
        name=metadata.symbolic_name,
        version=metadata.version,
        imports=tuple(imports),
        exports=tuple(exports),
        unrecognized_requirements=tuple(unknown_requirements),
        unrecognized_capabilities=tuple(unknown_capabilities),
    )


def analyze_manifest(
    data: bytes | None,
    config: ParserConfig | None = None,
    diagnostics: DiagnosticSink | None = None,
    source: str | None = None,
) -> BundleRecord | None:
    """Return the bundle record for raw manifest bytes, or None when there is no manifest.

    Malformed headers raise ``ManifestError``; no partial record is produced.
    """
    if data is None:
        return None
    metadata = parse_bundle_metadata(read_manifest(data), config)
    return build_bundle_record(metadata, diagnostics=diagnostics, source=source)


def _requirement_filter(requirement: Requirement) -> FilterNode:
    if requirement.filter is not None:
        return requirement.filter
    filter_text = requirement.directives.get("filter")
    if filter_text is None:
        raise ManifestError("Package requirement has no filter.")
    return parse_filter(filter_text)
