"""Deterministic module archive discovery and manifest extraction."""

from __future__ import annotations

import fnmatch
import os
import zipfile
from pathlib import Path

from bunana.config import ScanConfig
from bunana.errors import ScanError
from bunana.manifest import MANIFEST_PATH


def discover_jars(root: Path, config: ScanConfig) -> list[Path]:
    """Return module archives under ``root`` sorted by relative POSIX path."""
    resolved = root.resolve()
    if not resolved.is_dir():
        raise ScanError("Modules directory does not exist or is not a directory.", resolved)
    include_extensions = set(config.include_extensions)
    found: list[tuple[str, Path]] = []
    stack: list[Path] = [resolved]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered_entries = sorted(entries, key=lambda item: item.name)
        except OSError as exc:
            raise ScanError(f"Cannot list directory: {exc.strerror or exc}", current) from exc
        for entry in ordered_entries:
            full_path = Path(entry.path)
            relative = full_path.relative_to(resolved).as_posix()
            if entry.is_dir(follow_symlinks=False):
                if not should_exclude(relative, config.exclude_globs):
                    stack.append(full_path)
                continue
            if not entry.is_file():
                continue
            if should_exclude(relative, config.exclude_globs):
                continue
            if full_path.suffix.lower() not in include_extensions:
                continue
            found.append((relative, full_path))
    found.sort(key=lambda item: item[0])
    return [path for _, path in found]


def should_exclude(relative_path: str, exclude_globs: tuple[str, ...]) -> bool:
    """Return True when a path matches configured ignore globs."""
    anchored = f"/{relative_path}"
    return any(
        fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(anchored, pattern)
        for pattern in exclude_globs
    )


def read_jar_manifest(path: Path) -> bytes | None:
    """Return raw ``META-INF/MANIFEST.MF`` bytes, or None when the archive has none."""
    try:
        with zipfile.ZipFile(path) as archive:
            for name in archive.namelist():
                if name.upper() == MANIFEST_PATH:
                    return archive.read(name)
    except zipfile.BadZipFile as exc:
        raise ScanError(f"Not a readable archive: {exc}", path) from exc
    except OSError as exc:
        raise ScanError(f"Cannot read archive: {exc.strerror or exc}", path) from exc
    return None
