from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/bunana/cli.py",
        "src/bunana/config.py",
        "src/bunana/filters/__init__.py",
        "src/bunana/manifest/__init__.py",
        "src/bunana/analysis/__init__.py",
        "src/bunana/report/__init__.py",
        "src/bunana/scan/__init__.py",
        "src/bunana/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
