from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from bunana.config import ScanConfig
from bunana.errors import ScanError
from bunana.scan import discover_jars, read_jar_manifest


def _write_jar(path: Path, entries: dict[str, bytes]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


def test_discovery_is_recursive_sorted_and_filtered(tmp_path: Path) -> None:
    _write_jar(tmp_path / "z.jar", {})
    _write_jar(tmp_path / "lib" / "b.JAR", {})
    _write_jar(tmp_path / "a.jar", {})
    _write_jar(tmp_path / "target" / "skip.jar", {})
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    found = discover_jars(tmp_path, ScanConfig(exclude_globs=("target/*",)))

    assert [path.relative_to(tmp_path.resolve()).as_posix() for path in found] == [
        "a.jar",
        "lib/b.JAR",
        "z.jar",
    ]


def test_discovery_honors_configured_extensions(tmp_path: Path) -> None:
    _write_jar(tmp_path / "a.jar", {})
    _write_jar(tmp_path / "b.war", {})

    found = discover_jars(tmp_path, ScanConfig(include_extensions=(".war",)))

    assert [path.name for path in found] == ["b.war"]


def test_missing_directory_raises_scan_error(tmp_path: Path) -> None:
    with pytest.raises(ScanError, match="not a directory"):
        discover_jars(tmp_path / "absent", ScanConfig())


def test_read_manifest_bytes_case_insensitively(tmp_path: Path) -> None:
    jar = _write_jar(tmp_path / "a.jar", {"meta-inf/manifest.mf": b"Manifest-Version: 1.0\n"})

    assert read_jar_manifest(jar) == b"Manifest-Version: 1.0\n"


def test_archive_without_manifest_returns_none(tmp_path: Path) -> None:
    jar = _write_jar(tmp_path / "a.jar", {"com/example/A.class": b"\xca\xfe"})

    assert read_jar_manifest(jar) is None


def test_corrupt_archive_raises_scan_error(tmp_path: Path) -> None:
    broken = tmp_path / "broken.jar"
    broken.write_bytes(b"not a zip file")

    with pytest.raises(ScanError, match="archive"):
        read_jar_manifest(broken)
