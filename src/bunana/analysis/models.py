"""Normalized import/export records for one bundle."""

from __future__ import annotations

from dataclasses import dataclass

from bunana.manifest import Capability, Requirement

ANY_VERSION = "<any>"


@dataclass(slots=True, frozen=True)
class ImportRecord:
    """Package import recovered from a requirement filter.

    Either ``package_name`` or ``unparsed_expression`` is set. ``max_version``
    holds the raw value of a ``(!(version>=X))`` clause, so it is an exclusive
    ceiling.
    """

    package_name: str | None = None
    min_version: str | None = None
    max_version: str | None = None
    extra_selectors: tuple[str, ...] = ()
    unparsed_expression: str | None = None
    optional: bool = False


@dataclass(slots=True, frozen=True)
class ExportRecord:
    """Package export classified from capability attributes and directives.

    ``extra_attributes`` holds (key, value) pairs in attribute order.
    """

    package_name: str | None = None
    version: str | None = None
    extra_attributes: tuple[tuple[str, str], ...] = ()
    uses: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class BundleRecord:
    """Everything reported for one scanned bundle."""

    name: str | None
    version: str
    imports: tuple[ImportRecord, ...] = ()
    exports: tuple[ExportRecord, ...] = ()
    unrecognized_requirements: tuple[Requirement, ...] = ()
    unrecognized_capabilities: tuple[Capability, ...] = ()
