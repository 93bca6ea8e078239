from __future__ import annotations

import pytest

from bunana.manifest import Version, VersionRange


def test_version_parse_pads_missing_segments() -> None:
    assert Version.parse("1") == Version(1, 0, 0)
    assert Version.parse(" 1.2 ") == Version(1, 2, 0)
    assert Version.parse("") == Version()
    assert str(Version.parse("1.2")) == "1.2.0"


def test_version_keeps_qualifier() -> None:
    version = Version.parse("1.2.3.RELEASE-2")

    assert version.qualifier == "RELEASE-2"
    assert str(version) == "1.2.3.RELEASE-2"


def test_versions_order_numerically() -> None:
    assert Version.parse("1.10") > Version.parse("1.9")


@pytest.mark.parametrize("text", ["1.x", "-1", "1.2.3.bad qualifier", "1..2"])
def test_invalid_versions_raise(text: str) -> None:
    with pytest.raises(ValueError):
        Version.parse(text)


def test_range_parse_interval() -> None:
    version_range = VersionRange.parse("[1.0,2.0)")

    assert version_range.floor == Version(1, 0, 0)
    assert version_range.floor_inclusive is True
    assert version_range.ceiling == Version(2, 0, 0)
    assert version_range.ceiling_inclusive is False
    assert str(version_range) == "[1.0.0,2.0.0)"


def test_range_parse_bare_floor_is_unbounded() -> None:
    version_range = VersionRange.parse("1.5")

    assert version_range.floor == Version(1, 5, 0)
    assert version_range.ceiling is None
    assert str(version_range) == "1.5.0"


def test_range_parse_exclusive_floor_inclusive_ceiling() -> None:
    version_range = VersionRange.parse("(1,2]")

    assert version_range.floor_inclusive is False
    assert version_range.ceiling_inclusive is True


@pytest.mark.parametrize("text", ["[1.0,2.0", "[1.0]", "(a,b)"])
def test_invalid_ranges_raise(text: str) -> None:
    with pytest.raises(ValueError):
        VersionRange.parse(text)
