"""Manifest header parsing into typed requirements and capabilities."""

from .clauses import HeaderClause, parse_header_clauses
from .models import (
    BUNDLE_NAMESPACE,
    HOST_NAMESPACE,
    IDENTITY_NAMESPACE,
    PACKAGE_NAMESPACE,
    BundleMetadata,
    Capability,
    ParserConfig,
    Requirement,
)
from .parser import attribute_text, attributes_to_filter, parse_bundle_metadata
from .reader import MANIFEST_PATH, read_manifest
from .versions import Version, VersionRange

__all__ = [
    "BUNDLE_NAMESPACE",
    "BundleMetadata",
    "Capability",
    "HOST_NAMESPACE",
    "HeaderClause",
    "IDENTITY_NAMESPACE",
    "MANIFEST_PATH",
    "PACKAGE_NAMESPACE",
    "ParserConfig",
    "Requirement",
    "Version",
    "VersionRange",
    "attribute_text",
    "attributes_to_filter",
    "parse_bundle_metadata",
    "parse_header_clauses",
    "read_manifest",
]
