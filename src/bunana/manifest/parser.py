"""Build typed requirements and capabilities from bundle manifest headers."""

from __future__ import annotations

from collections.abc import Mapping

from bunana.errors import FilterSyntaxError, ManifestError
from bunana.filters import (
    EQUAL,
    GREATER_EQUAL,
    LESS_EQUAL,
    AndFilter,
    Comparison,
    FilterNode,
    NotFilter,
    PresentFilter,
    SubstringFilter,
    format_filter,
    parse_filter,
)
from bunana.manifest.clauses import HeaderClause, parse_header_clauses
from bunana.manifest.models import (
    BUNDLE_NAMESPACE,
    HOST_NAMESPACE,
    IDENTITY_NAMESPACE,
    PACKAGE_NAMESPACE,
    BundleMetadata,
    Capability,
    ParserConfig,
    Requirement,
)
from bunana.manifest.versions import Version, VersionRange

BUNDLE_SYMBOLIC_NAME_ATTRIBUTE = "bundle-symbolic-name"
BUNDLE_VERSION_ATTRIBUTE = "bundle-version"
VERSION_ATTRIBUTE = "version"
SPECIFICATION_VERSION_ATTRIBUTE = "specification-version"


def parse_bundle_metadata(
    headers: Mapping[str, str], config: ParserConfig | None = None
) -> BundleMetadata:
    """Parse main manifest headers into bundle identity, requirements and capabilities."""
    active = config or ParserConfig()
    lookup = {name.strip().lower(): value for name, value in headers.items()}

    manifest_version = _manifest_version(lookup.get("bundle-manifestversion"))
    symbolic_clause = _symbolic_name_clause(lookup.get("bundle-symbolicname"))
    if manifest_version == "2" and symbolic_clause is None:
        raise ManifestError(
            "R4 bundle manifests must include a bundle symbolic name.", "Bundle-SymbolicName"
        )
    symbolic_name = symbolic_clause.paths[0] if symbolic_clause is not None else None
    bundle_version = _bundle_version(lookup.get("bundle-version"))

    host_requirements = _fragment_host_requirements(lookup.get("fragment-host"))
    is_fragment = bool(host_requirements)

    requirements: list[Requirement] = []
    requirements.extend(host_requirements)
    requirements.extend(_require_bundle_requirements(lookup.get("require-bundle")))
    requirements.extend(_import_requirements(lookup.get("import-package"), active))
    requirements.extend(_generic_requirements(lookup.get("require-capability")))
    requirements.extend(_dynamic_import_requirements(lookup.get("dynamicimport-package")))

    capabilities: list[Capability] = []
    if symbolic_clause is not None and symbolic_name is not None:
        capabilities.extend(
            _identity_capabilities(symbolic_clause, symbolic_name, bundle_version, is_fragment)
        )
    capabilities.extend(_generic_capabilities(lookup.get("provide-capability")))
    capabilities.extend(
        _export_capabilities(lookup.get("export-package"), symbolic_name, bundle_version, active)
    )

    return BundleMetadata(
        symbolic_name=symbolic_name,
        version=str(bundle_version),
        requirements=tuple(requirements),
        capabilities=tuple(capabilities),
    )


def attributes_to_filter(
    attributes: Mapping[str, object], first: FilterNode | None = None
) -> FilterNode:
    """Convert requirement attributes into a filter, ANDing when more than one clause results."""
    operands: list[FilterNode] = [first] if first is not None else []
    for name, value in attributes.items():
        if isinstance(value, VersionRange):
            operands.extend(_range_operands(name, value))
            continue
        operands.append(Comparison(name=name, operator=EQUAL, value=attribute_text(value)))
    if len(operands) == 1:
        return operands[0]
    return AndFilter(operands=tuple(operands))


def attribute_text(value: object) -> str:
    """Render an attribute value the way it appears in filters and reports."""
    if isinstance(value, list):
        return "[" + ", ".join(attribute_text(item) for item in value) + "]"
    return str(value)


def _range_operands(name: str, version_range: VersionRange) -> list[FilterNode]:
    operands: list[FilterNode] = []
    floor = str(version_range.floor)
    if version_range.floor_inclusive:
        operands.append(Comparison(name=name, operator=GREATER_EQUAL, value=floor))
    else:
        operands.append(NotFilter(operand=Comparison(name=name, operator=LESS_EQUAL, value=floor)))
    if version_range.ceiling is not None:
        ceiling = str(version_range.ceiling)
        if version_range.ceiling_inclusive:
            operands.append(Comparison(name=name, operator=LESS_EQUAL, value=ceiling))
        else:
            operands.append(
                NotFilter(operand=Comparison(name=name, operator=GREATER_EQUAL, value=ceiling))
            )
    return operands


def _manifest_version(value: str | None) -> str:
    if value is None:
        return "1"
    stripped = value.strip()
    if stripped not in {"1", "2"}:
        raise ManifestError(f"Unknown value {stripped!r}.", "Bundle-ManifestVersion")
    return stripped


def _symbolic_name_clause(value: str | None) -> HeaderClause | None:
    clauses = parse_header_clauses("Bundle-SymbolicName", value)
    if not clauses:
        return None
    if len(clauses) > 1 or len(clauses[0].paths) > 1:
        raise ManifestError("Cannot have multiple symbolic names.", "Bundle-SymbolicName")
    return clauses[0]


def _bundle_version(value: str | None) -> Version:
    if value is None:
        return Version()
    try:
        return Version.parse(value)
    except ValueError as exc:
        raise ManifestError(str(exc), "Bundle-Version") from exc


def _parse_range(header: str, value: object) -> VersionRange:
    if isinstance(value, VersionRange):
        return value
    if isinstance(value, Version):
        return VersionRange(floor=value)
    try:
        return VersionRange.parse(str(value))
    except ValueError as exc:
        raise ManifestError(str(exc), header) from exc


def _parse_version(header: str, value: object) -> Version:
    if isinstance(value, Version):
        return value
    try:
        return Version.parse(str(value))
    except ValueError as exc:
        raise ManifestError(str(exc), header) from exc


def _merge_specification_version(header: str, attributes: dict[str, object]) -> None:
    if SPECIFICATION_VERSION_ATTRIBUTE not in attributes:
        return
    specification = attributes.pop(SPECIFICATION_VERSION_ATTRIBUTE)
    version = attributes.get(VERSION_ATTRIBUTE)
    if version is None:
        attributes[VERSION_ATTRIBUTE] = specification
    elif str(version).strip() != str(specification).strip():
        raise ManifestError(
            "Both version and specification-version are specified, but they are not equal.",
            header,
        )


def _import_requirements(value: str | None, config: ParserConfig) -> list[Requirement]:
    header = "Import-Package"
    requirements: list[Requirement] = []
    seen: set[str] = set()
    for clause in parse_header_clauses(header, value):
        attributes = dict(clause.attributes)
        _merge_specification_version(header, attributes)
        if VERSION_ATTRIBUTE in attributes:
            attributes[VERSION_ATTRIBUTE] = _parse_range(header, attributes[VERSION_ATTRIBUTE])
        if BUNDLE_VERSION_ATTRIBUTE in attributes:
            attributes[BUNDLE_VERSION_ATTRIBUTE] = _parse_range(
                header, attributes[BUNDLE_VERSION_ATTRIBUTE]
            )
        for package in clause.paths:
            if config.reject_java_packages and package.startswith("java."):
                raise ManifestError(f"Importing java.* packages is not allowed: {package}", header)
            if config.reject_duplicate_imports and package in seen:
                raise ManifestError(f"Duplicate import: {package}", header)
            seen.add(package)
            requirements.append(
                _package_requirement(package, attributes, dict(clause.directives))
            )
    return requirements


def _dynamic_import_requirements(value: str | None) -> list[Requirement]:
    header = "DynamicImport-Package"
    requirements: list[Requirement] = []
    for clause in parse_header_clauses(header, value):
        attributes = dict(clause.attributes)
        _merge_specification_version(header, attributes)
        if VERSION_ATTRIBUTE in attributes:
            attributes[VERSION_ATTRIBUTE] = _parse_range(header, attributes[VERSION_ATTRIBUTE])
        directives = dict(clause.directives)
        directives["resolution"] = "dynamic"
        for package in clause.paths:
            requirements.append(_package_requirement(package, attributes, directives))
    return requirements


def _package_requirement(
    package: str, attributes: dict[str, object], directives: dict[str, str]
) -> Requirement:
    if package == "*":
        first: FilterNode = PresentFilter(name=PACKAGE_NAMESPACE)
    elif package.endswith(".*"):
        first = SubstringFilter(name=PACKAGE_NAMESPACE, pieces=(package[:-1], ""))
    else:
        first = Comparison(name=PACKAGE_NAMESPACE, operator=EQUAL, value=package)
    node = attributes_to_filter(attributes, first=first)
    merged_directives = dict(directives)
    merged_directives["filter"] = format_filter(node)
    return Requirement(
        namespace=PACKAGE_NAMESPACE,
        directives=merged_directives,
        attributes={PACKAGE_NAMESPACE: package, **attributes},
        filter=node,
    )


def _export_capabilities(
    value: str | None,
    symbolic_name: str | None,
    bundle_version: Version,
    config: ParserConfig,
) -> list[Capability]:
    header = "Export-Package"
    capabilities: list[Capability] = []
    for clause in parse_header_clauses(header, value):
        attributes = dict(clause.attributes)
        if BUNDLE_SYMBOLIC_NAME_ATTRIBUTE in attributes or BUNDLE_VERSION_ATTRIBUTE in attributes:
            raise ManifestError(
                "Exports must not specify bundle symbolic name or bundle version.", header
            )
        _merge_specification_version(header, attributes)
        attributes[VERSION_ATTRIBUTE] = _parse_version(
            header, attributes.get(VERSION_ATTRIBUTE, "")
        )
        if symbolic_name is not None:
            attributes[BUNDLE_SYMBOLIC_NAME_ATTRIBUTE] = symbolic_name
        attributes[BUNDLE_VERSION_ATTRIBUTE] = bundle_version
        for package in clause.paths:
            if config.reject_java_packages and package.startswith("java."):
                raise ManifestError(f"Cannot export java.* packages: {package}", header)
            capabilities.append(
                Capability(
                    namespace=PACKAGE_NAMESPACE,
                    directives=dict(clause.directives),
                    attributes={PACKAGE_NAMESPACE: package, **attributes},
                )
            )
    return capabilities


def _require_bundle_requirements(value: str | None) -> list[Requirement]:
    header = "Require-Bundle"
    requirements: list[Requirement] = []
    for clause in parse_header_clauses(header, value):
        requirements.extend(_wiring_requirements(header, BUNDLE_NAMESPACE, clause))
    return requirements


def _fragment_host_requirements(value: str | None) -> list[Requirement]:
    header = "Fragment-Host"
    clauses = parse_header_clauses(header, value)
    if not clauses:
        return []
    if len(clauses) > 1 or len(clauses[0].paths) > 1:
        raise ManifestError("Fragments cannot have multiple hosts.", header)
    return _wiring_requirements(header, HOST_NAMESPACE, clauses[0])


def _wiring_requirements(header: str, namespace: str, clause: HeaderClause) -> list[Requirement]:
    attributes = dict(clause.attributes)
    if BUNDLE_VERSION_ATTRIBUTE in attributes:
        attributes[BUNDLE_VERSION_ATTRIBUTE] = _parse_range(
            header, attributes[BUNDLE_VERSION_ATTRIBUTE]
        )
    requirements: list[Requirement] = []
    for name in clause.paths:
        first = Comparison(name=namespace, operator=EQUAL, value=name)
        node = attributes_to_filter(attributes, first=first)
        directives = dict(clause.directives)
        directives["filter"] = format_filter(node)
        requirements.append(
            Requirement(
                namespace=namespace,
                directives=directives,
                attributes={namespace: name, **attributes},
                filter=node,
            )
        )
    return requirements


def _identity_capabilities(
    clause: HeaderClause, symbolic_name: str, bundle_version: Version, is_fragment: bool
) -> list[Capability]:
    attributes: dict[str, object] = {
        BUNDLE_VERSION_ATTRIBUTE: bundle_version,
        **clause.attributes,
    }
    capabilities = [
        Capability(
            namespace=BUNDLE_NAMESPACE,
            directives=dict(clause.directives),
            attributes={BUNDLE_NAMESPACE: symbolic_name, **attributes},
        )
    ]
    if not is_fragment and clause.directives.get("fragment-attachment") != "never":
        capabilities.append(
            Capability(
                namespace=HOST_NAMESPACE,
                directives=dict(clause.directives),
                attributes={HOST_NAMESPACE: symbolic_name, **attributes},
            )
        )
    capabilities.append(
        Capability(
            namespace=IDENTITY_NAMESPACE,
            directives={},
            attributes={
                IDENTITY_NAMESPACE: symbolic_name,
                "type": "osgi.fragment" if is_fragment else "osgi.bundle",
                VERSION_ATTRIBUTE: bundle_version,
            },
        )
    )
    return capabilities


def _generic_requirements(value: str | None) -> list[Requirement]:
    header = "Require-Capability"
    requirements: list[Requirement] = []
    for clause in parse_header_clauses(header, value):
        node: FilterNode | None = None
        filter_text = clause.directives.get("filter")
        if filter_text is not None:
            try:
                node = parse_filter(filter_text)
            except FilterSyntaxError as exc:
                raise ManifestError(str(exc), header) from exc
        for namespace in clause.paths:
            _reject_wiring_namespace(header, namespace)
            requirements.append(
                Requirement(
                    namespace=namespace,
                    directives=dict(clause.directives),
                    attributes=dict(clause.attributes),
                    filter=node,
                )
            )
    return requirements


def _generic_capabilities(value: str | None) -> list[Capability]:
    header = "Provide-Capability"
    capabilities: list[Capability] = []
    for clause in parse_header_clauses(header, value):
        for namespace in clause.paths:
            _reject_wiring_namespace(header, namespace)
            capabilities.append(
                Capability(
                    namespace=namespace,
                    directives=dict(clause.directives),
                    attributes=dict(clause.attributes),
                )
            )
    return capabilities


def _reject_wiring_namespace(header: str, namespace: str) -> None:
    if namespace.startswith("osgi.wiring."):
        raise ManifestError(f"Manifest cannot use {header} for {namespace!r} namespace.", header)
