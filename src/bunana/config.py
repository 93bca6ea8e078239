"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from bunana.manifest import ParserConfig

CONFIG_FILE_NAME = "bunana.toml"
DEFAULT_OUTPUT = "osgi.csv"
DEFAULT_INCLUDE_EXTENSIONS = (".jar",)
MALFORMED_POLICIES = ("fail", "skip")


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """Module discovery settings."""

    include_extensions: tuple[str, ...] = DEFAULT_INCLUDE_EXTENSIONS
    exclude_globs: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class AnalyzerConfig:
    """Fully merged run configuration."""

    modules_dir: Path
    output_path: Path
    scan: ScanConfig
    parser: ParserConfig
    on_malformed: str = "fail"
    diagnostics_log: Path | None = None

    def to_public_dict(self) -> dict[str, object]:
        """Return a serializable config snapshot."""
        return {
            "modules_dir": str(self.modules_dir),
            "output_path": str(self.output_path),
            "scan": {
                "include_extensions": list(self.scan.include_extensions),
                "exclude_globs": list(self.scan.exclude_globs),
            },
            "parser": {
                "reject_java_packages": self.parser.reject_java_packages,
                "reject_duplicate_imports": self.parser.reject_duplicate_imports,
            },
            "errors": {"on_malformed": self.on_malformed},
            "diagnostics": {
                "log_path": str(self.diagnostics_log) if self.diagnostics_log is not None else None
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional command-line overrides applied at highest precedence."""

    output_path: Path | None = None
    on_malformed: str | None = None
    diagnostics_log: Path | None = None


def default_config(modules_dir: Path, working_dir: Path | None = None) -> AnalyzerConfig:
    """Build default config for a modules directory."""
    base = (working_dir or Path.cwd()).resolve()
    return AnalyzerConfig(
        modules_dir=modules_dir.resolve(),
        output_path=base / DEFAULT_OUTPUT,
        scan=ScanConfig(),
        parser=ParserConfig(),
    )


def load_config_file(modules_dir: Path) -> dict[str, object]:
    """Load optional bunana.toml from the modules directory."""
    config_path = modules_dir / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_string(value: object, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value


def _validate_policy(value: str, name: str) -> str:
    if value not in MALFORMED_POLICIES:
        raise ValueError(f"Config field '{name}' must be one of {', '.join(MALFORMED_POLICIES)}.")
    return value


def _normalize_extensions(extensions: tuple[str, ...]) -> tuple[str, ...]:
    normalized: list[str] = []
    for extension in extensions:
        lowered = extension.strip().lower()
        if not lowered:
            raise ValueError("Config field 'scan.include_extensions' must not contain empty strings.")
        normalized.append(lowered if lowered.startswith(".") else f".{lowered}")
    return tuple(normalized)


def merge_config(
    base: AnalyzerConfig,
    file_payload: dict[str, object],
    overrides: CliOverrides,
    working_dir: Path | None = None,
) -> AnalyzerConfig:
    """Merge defaults, bunana.toml, then command-line overrides."""
    cwd = (working_dir or Path.cwd()).resolve()
    scan_payload = _get_table(file_payload, "scan")
    report_payload = _get_table(file_payload, "report")
    errors_payload = _get_table(file_payload, "errors")
    diagnostics_payload = _get_table(file_payload, "diagnostics")
    parser_payload = _get_table(file_payload, "parser")

    include_extensions = base.scan.include_extensions
    if "include_extensions" in scan_payload:
        include_extensions = _normalize_extensions(
            _tuple_of_strings(scan_payload["include_extensions"], "scan", "include_extensions")
        )
    exclude_globs = base.scan.exclude_globs
    if "exclude_globs" in scan_payload:
        exclude_globs = _tuple_of_strings(scan_payload["exclude_globs"], "scan", "exclude_globs")

    output_path = base.output_path
    raw_output = _optional_string(report_payload.get("output"), "report.output")
    if raw_output is not None:
        output_path = (cwd / raw_output).resolve()

    on_malformed = base.on_malformed
    raw_policy = _optional_string(errors_payload.get("on_malformed"), "errors.on_malformed")
    if raw_policy is not None:
        on_malformed = _validate_policy(raw_policy, "errors.on_malformed")

    diagnostics_log = base.diagnostics_log
    raw_log = _optional_string(diagnostics_payload.get("log_path"), "diagnostics.log_path")
    if raw_log is not None:
        diagnostics_log = (cwd / raw_log).resolve()

    parser = ParserConfig(
        reject_java_packages=_optional_bool(
            parser_payload.get("reject_java_packages"),
            "parser.reject_java_packages",
            base.parser.reject_java_packages,
        ),
        reject_duplicate_imports=_optional_bool(
            parser_payload.get("reject_duplicate_imports"),
            "parser.reject_duplicate_imports",
            base.parser.reject_duplicate_imports,
        ),
    )

    merged = AnalyzerConfig(
        modules_dir=base.modules_dir,
        output_path=output_path,
        scan=ScanConfig(include_extensions=include_extensions, exclude_globs=exclude_globs),
        parser=parser,
        on_malformed=on_malformed,
        diagnostics_log=diagnostics_log,
    )
    return apply_cli_overrides(merged, overrides, working_dir=cwd)


def apply_cli_overrides(
    config: AnalyzerConfig, overrides: CliOverrides, working_dir: Path | None = None
) -> AnalyzerConfig:
    """Apply command-line overrides at highest precedence."""
    cwd = (working_dir or Path.cwd()).resolve()
    output_path = config.output_path
    if overrides.output_path is not None:
        output_path = (cwd / overrides.output_path).resolve()
    on_malformed = config.on_malformed
    if overrides.on_malformed is not None:
        on_malformed = _validate_policy(overrides.on_malformed, "overrides.on_malformed")
    diagnostics_log = config.diagnostics_log
    if overrides.diagnostics_log is not None:
        diagnostics_log = (cwd / overrides.diagnostics_log).resolve()
    return AnalyzerConfig(
        modules_dir=config.modules_dir,
        output_path=output_path,
        scan=config.scan,
        parser=config.parser,
        on_malformed=on_malformed,
        diagnostics_log=diagnostics_log,
    )


def load_effective_config(
    modules_dir: Path, overrides: CliOverrides, working_dir: Path | None = None
) -> AnalyzerConfig:
    """Load defaults, bunana.toml and overrides in deterministic order."""
    base = default_config(modules_dir, working_dir=working_dir)
    payload = load_config_file(base.modules_dir)
    return merge_config(base, payload, overrides, working_dir=working_dir)
