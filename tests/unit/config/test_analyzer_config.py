from __future__ import annotations

from pathlib import Path

import pytest

from bunana.config import CliOverrides, load_effective_config


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_effective_config(tmp_path, CliOverrides(), working_dir=tmp_path)

    assert config.modules_dir == tmp_path.resolve()
    assert config.output_path == tmp_path.resolve() / "osgi.csv"
    assert config.scan.include_extensions == (".jar",)
    assert config.scan.exclude_globs == ()
    assert config.on_malformed == "fail"
    assert config.diagnostics_log is None
    assert config.parser.reject_java_packages is True


def test_config_file_then_cli_overrides(tmp_path: Path) -> None:
    modules = tmp_path / "modules"
    modules.mkdir()
    (modules / "bunana.toml").write_text(
        "\n".join(
            [
                "[scan]",
                'include_extensions = ["JAR", ".war"]',
                'exclude_globs = ["target/**"]',
                "[report]",
                'output = "from-file.csv"',
                "[errors]",
                'on_malformed = "skip"',
                "[parser]",
                "reject_duplicate_imports = false",
            ]
        ),
        encoding="utf-8",
    )

    from_file = load_effective_config(modules, CliOverrides(), working_dir=tmp_path)
    overridden = load_effective_config(
        modules,
        CliOverrides(output_path=Path("cli.csv"), on_malformed="fail"),
        working_dir=tmp_path,
    )

    assert from_file.scan.include_extensions == (".jar", ".war")
    assert from_file.scan.exclude_globs == ("target/**",)
    assert from_file.output_path == tmp_path.resolve() / "from-file.csv"
    assert from_file.on_malformed == "skip"
    assert from_file.parser.reject_duplicate_imports is False
    assert overridden.output_path == tmp_path.resolve() / "cli.csv"
    assert overridden.on_malformed == "fail"


def test_public_snapshot_is_serializable(tmp_path: Path) -> None:
    config = load_effective_config(
        tmp_path,
        CliOverrides(diagnostics_log=Path("logs/diag.jsonl")),
        working_dir=tmp_path,
    )

    snapshot = config.to_public_dict()

    assert snapshot["errors"] == {"on_malformed": "fail"}
    assert snapshot["diagnostics"] == {
        "log_path": str(tmp_path.resolve() / "logs" / "diag.jsonl")
    }


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('scan = "not-a-table"', "section 'scan'"),
        ("[scan]\ninclude_extensions = \".jar\"", "scan.include_extensions"),
        ("[scan]\nexclude_globs = [1]", "scan.exclude_globs"),
        ('[errors]\non_malformed = "ignore"', "errors.on_malformed"),
        ('[parser]\nreject_java_packages = "yes"', "parser.reject_java_packages"),
        ("[report]\noutput = 3", "report.output"),
    ],
)
def test_invalid_config_values_raise(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / "bunana.toml").write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        load_effective_config(tmp_path, CliOverrides(), working_dir=tmp_path)


def test_invalid_override_policy_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="overrides.on_malformed"):
        load_effective_config(tmp_path, CliOverrides(on_malformed="later"), working_dir=tmp_path)
