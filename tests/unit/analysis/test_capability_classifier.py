from __future__ import annotations

from bunana.analysis import classify_capability, split_uses
from bunana.logging import DiagnosticCollector
from bunana.manifest import Version


def test_classifies_package_version_uses_and_mandatory() -> None:
    record = classify_capability(
        {"osgi.wiring.package": "com.example", "version": "1.2.0", "x-custom": "v"},
        {"uses": "com.a, com.b", "mandatory": "x-custom"},
    )

    assert record.package_name == "com.example"
    assert record.version == "1.2.0"
    assert record.uses == ("com.a", "com.b")
    assert record.extra_attributes == (("x-custom", "v"), ("mandatory", "x-custom"))


def test_bundle_identity_attributes_are_dropped() -> None:
    record = classify_capability(
        {
            "osgi.wiring.package": "p",
            "version": Version(1, 0, 0),
            "bundle-symbolic-name": "com.example.bundle",
            "bundle-version": Version(3, 1, 0),
        },
        {},
    )

    assert record.version == "1.0.0"
    assert record.extra_attributes == ()
    assert record.uses == ()


def test_non_string_attribute_values_are_stringified() -> None:
    record = classify_capability(
        {"osgi.wiring.package": "p", "weight": 3, "tags": ["a", "b"]},
        {},
    )

    assert record.version is None
    assert record.extra_attributes == (("weight", "3"), ("tags", "[a, b]"))


def test_unknown_directives_warn_but_still_build_record() -> None:
    collector = DiagnosticCollector()

    record = classify_capability(
        {"osgi.wiring.package": "p"},
        {"uses": "q", "include": "*", "exclude": "Impl*"},
        diagnostics=collector,
        source="bundles/p.jar",
    )

    assert record.package_name == "p"
    assert record.uses == ("q",)
    assert collector.codes() == ["unknown_directives"]
    diagnostic = collector.items[0]
    assert diagnostic.level == "warning"
    assert diagnostic.source == "bundles/p.jar"
    assert diagnostic.details["directives"] == ["exclude", "include"]


def test_unknown_directives_without_sink_do_not_fail() -> None:
    record = classify_capability({"osgi.wiring.package": "p"}, {"x-internal": "true"})

    assert record.package_name == "p"


def test_known_directives_emit_nothing() -> None:
    collector = DiagnosticCollector()

    classify_capability(
        {"osgi.wiring.package": "p"},
        {"uses": "q", "mandatory": "x"},
        diagnostics=collector,
    )

    assert collector.items == ()


def test_split_uses_trims_and_drops_empty_entries() -> None:
    assert split_uses(" a ,b,, c") == ("a", "b", "c")
    assert split_uses("single") == ("single",)


def test_export_records_are_hashable_values() -> None:
    first = classify_capability({"osgi.wiring.package": "p", "x-custom": "v"}, {"uses": "q"})
    second = classify_capability({"osgi.wiring.package": "p", "x-custom": "v"}, {"uses": "q"})

    assert first == second
    assert len({first, second}) == 1
