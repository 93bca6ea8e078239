"""Typed requirement and capability models produced from manifest headers."""

from __future__ import annotations

from dataclasses import dataclass, field

from bunana.filters import FilterNode

PACKAGE_NAMESPACE = "osgi.wiring.package"
BUNDLE_NAMESPACE = "osgi.wiring.bundle"
HOST_NAMESPACE = "osgi.wiring.host"
IDENTITY_NAMESPACE = "osgi.identity"


@dataclass(slots=True, frozen=True)
class ParserConfig:
    """Manifest validation switches."""

    reject_java_packages: bool = True
    reject_duplicate_imports: bool = True


@dataclass(slots=True, frozen=True)
class Requirement:
    """Consumer-side constraint in one namespace."""

    namespace: str
    directives: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, object] = field(default_factory=dict)
    filter: FilterNode | None = None


@dataclass(slots=True, frozen=True)
class Capability:
    """Provider-side offer in one namespace."""

    namespace: str
    directives: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class BundleMetadata:
    """Bundle identity plus its parsed requirements and capabilities."""

    symbolic_name: str | None
    version: str
    requirements: tuple[Requirement, ...]
    capabilities: tuple[Capability, ...]
