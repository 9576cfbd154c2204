"""Configuration loading for extraction, validation, analysis, and resolution.

Values are read from YAML, checked against a JSON schema, and converted into
fully populated frozen dataclasses so downstream code never has to guess at
missing keys.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import ValidationError, validate

from paths_le.errors import ConfigurationError

_DEFAULT_CONFIG_PATH = Path("config/paths-le.yaml")
_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

OUTPUT_FORMATS = ("text", "json", "csv")
SORT_ORDERS = ("asc", "desc", "length-asc", "length-desc")
PRESETS = ("minimal", "balanced", "comprehensive", "performance", "validation")


@dataclass(frozen=True, slots=True)
class SafetyConfig:
    enabled: bool = True
    file_size_warn_bytes: int = 1_000_000
    large_output_lines_threshold: int = 50_000
    many_documents_threshold: int = 8


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    enabled: bool = True
    include_validation: bool = True
    include_patterns: bool = True


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    enabled: bool = True
    check_existence: bool = True
    check_permissions: bool = False
    resolve_canonical: bool = False


@dataclass(frozen=True, slots=True)
class ResolutionConfig:
    resolve_symlinks: bool = False
    resolve_workspace_relative: bool = False


@dataclass(frozen=True, slots=True)
class PerformanceConfig:
    enabled: bool = True
    max_duration_ms: int = 5000
    max_memory_usage: int = 104_857_600
    max_cpu_usage: int = 1_000_000
    min_throughput: int = 1000
    max_cache_size: int = 1000


@dataclass(frozen=True, slots=True)
class PathsLeConfig:
    """Top-level configuration consumed by the CLI and batch operations."""

    safety: SafetyConfig = field(default_factory=SafetyConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    dedupe: bool = False
    show_parse_errors: bool = False
    output_format: str = "text"
    sort_order: str = "asc"
    preset: str = "balanced"
    workspace_roots: tuple[str, ...] = ()

    @classmethod
    def default(cls) -> "PathsLeConfig":
        return cls()


def _bounded_integer(minimum: int, maximum: int) -> dict[str, Any]:
    return {"type": "integer", "minimum": minimum, "maximum": maximum}


def _section(properties: Mapping[str, Any]) -> dict[str, Any]:
    return {"type": "object", "properties": dict(properties), "additionalProperties": False}


CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "dedupe": {"type": "boolean"},
        "show_parse_errors": {"type": "boolean"},
        "output_format": {"type": "string", "enum": list(OUTPUT_FORMATS)},
        "sort_order": {"type": "string", "enum": list(SORT_ORDERS)},
        "preset": {"type": "string", "enum": list(PRESETS)},
        "workspace_roots": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "safety": _section(
            {
                "enabled": {"type": "boolean"},
                "file_size_warn_bytes": _bounded_integer(1000, 100_000_000),
                "large_output_lines_threshold": _bounded_integer(100, 10_000_000),
                "many_documents_threshold": _bounded_integer(1, 100),
            }
        ),
        "analysis": _section(
            {
                "enabled": {"type": "boolean"},
                "include_validation": {"type": "boolean"},
                "include_patterns": {"type": "boolean"},
            }
        ),
        "validation": _section(
            {
                "enabled": {"type": "boolean"},
                "check_existence": {"type": "boolean"},
                "check_permissions": {"type": "boolean"},
                "resolve_canonical": {"type": "boolean"},
            }
        ),
        "resolution": _section(
            {
                "resolve_symlinks": {"type": "boolean"},
                "resolve_workspace_relative": {"type": "boolean"},
            }
        ),
        "performance": _section(
            {
                "enabled": {"type": "boolean"},
                "max_duration_ms": _bounded_integer(1000, 300_000),
                "max_memory_usage": _bounded_integer(1_048_576, 1_073_741_824),
                "max_cpu_usage": _bounded_integer(100_000, 10_000_000),
                "min_throughput": _bounded_integer(100, 10_000_000),
                "max_cache_size": _bounded_integer(100, 100_000),
            }
        ),
    },
    "additionalProperties": False,
}


def load_config(config_path: Path | None) -> PathsLeConfig:
    """Load configuration from YAML, or fall back to the default file or defaults.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        ConfigurationError: If YAML parsing or schema validation fails.
    """

    if config_path is not None:
        resolved = Path(config_path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Configuration file '{resolved}' does not exist")
        return config_from_mapping(_read_yaml(resolved))

    if _DEFAULT_CONFIG_PATH.exists():
        return config_from_mapping(_read_yaml(_DEFAULT_CONFIG_PATH))

    return PathsLeConfig.default()


def _read_yaml(path: Path) -> Mapping[str, Any]:
    content = path.read_text(encoding="utf-8")
    content = substitute_env_vars(content, source=str(path))
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in configuration file: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError("Configuration must be a mapping at the top level.")
    return data


def substitute_env_vars(content: str, *, source: str = "<string>") -> str:
    """Replace ``${VAR}`` and ``${VAR:default}`` references with environment values."""

    def replace_env_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default_provided = match.group(2) is not None
        env_value = os.getenv(var_name)

        # Empty strings count as unset so YAML does not coerce them to null.
        if env_value not in (None, ""):
            return env_value
        if default_provided:
            return match.group(2) or ""
        raise ConfigurationError(
            f"Environment variable '{var_name}' is required but not set for configuration file '{source}'."
        )

    return _ENV_PATTERN.sub(replace_env_var, content)


def config_from_mapping(data: Mapping[str, Any]) -> PathsLeConfig:
    """Validate ``data`` against :data:`CONFIG_SCHEMA` and build a config object."""

    try:
        validate(instance=dict(data), schema=CONFIG_SCHEMA)
    except ValidationError as exc:
        raise ConfigurationError(f"Configuration validation failed: {exc.message}") from exc

    config = PathsLeConfig(
        safety=SafetyConfig(**data.get("safety", {})),
        analysis=AnalysisConfig(**data.get("analysis", {})),
        validation=ValidationConfig(**data.get("validation", {})),
        resolution=ResolutionConfig(**data.get("resolution", {})),
        performance=PerformanceConfig(**data.get("performance", {})),
        dedupe=bool(data.get("dedupe", False)),
        show_parse_errors=bool(data.get("show_parse_errors", False)),
        output_format=str(data.get("output_format", "text")),
        sort_order=str(data.get("sort_order", "asc")),
        preset=str(data.get("preset", "balanced")),
        workspace_roots=tuple(data.get("workspace_roots", ())),
    )
    return config


def apply_preset(config: PathsLeConfig, name: str) -> PathsLeConfig:
    """Return ``config`` with the analysis/validation flags of a named preset."""

    if name not in PRESETS:
        raise ConfigurationError(f"Unknown preset '{name}'. Choose one of: {', '.join(PRESETS)}")

    if name == "minimal":
        return replace(
            config,
            preset=name,
            analysis=replace(config.analysis, include_validation=False, include_patterns=False),
            validation=replace(config.validation, check_existence=False, check_permissions=False),
        )
    if name == "comprehensive":
        return replace(
            config,
            preset=name,
            analysis=replace(config.analysis, enabled=True, include_validation=True, include_patterns=True),
            validation=replace(config.validation, enabled=True, check_existence=True, check_permissions=True),
        )
    if name == "performance":
        return replace(
            config,
            preset=name,
            analysis=replace(config.analysis, include_patterns=False),
            validation=replace(config.validation, check_existence=False, check_permissions=False),
            resolution=ResolutionConfig(),
        )
    if name == "validation":
        return replace(
            config,
            preset=name,
            analysis=replace(config.analysis, include_validation=True),
            validation=replace(config.validation, enabled=True, check_existence=True, check_permissions=True),
        )
    return replace(config, preset=name)


__all__ = [
    "AnalysisConfig",
    "CONFIG_SCHEMA",
    "OUTPUT_FORMATS",
    "PRESETS",
    "PathsLeConfig",
    "PerformanceConfig",
    "ResolutionConfig",
    "SORT_ORDERS",
    "SafetyConfig",
    "ValidationConfig",
    "apply_preset",
    "config_from_mapping",
    "load_config",
    "substitute_env_vars",
]
