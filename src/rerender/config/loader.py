"""Load and merge configuration from .rerender.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from rerender.config.schema import (
    FAIL_ON_LEVELS,
    OutputConfig,
    RerenderConfig,
    RulesConfig,
    ScanConfig,
    ServerConfig,
)

CONFIG_FILENAME = ".rerender.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: RerenderConfig) -> None:
    """Apply RERENDER_* environment variable overrides."""
    if val := os.environ.get("RERENDER_FAIL_ON"):
        if val.lower() in FAIL_ON_LEVELS:
            cfg.scan.fail_on = val.lower()
    if val := os.environ.get("RERENDER_FORMAT"):
        if val in ("terminal", "json", "sarif"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("RERENDER_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("RERENDER_MAX_INPUT_KB"):
        try:
            kb = int(val)
        except ValueError:
            kb = 0
        if kb > 0:
            cfg.scan.max_input_kb = kb


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _build_allowlist(data: Dict[str, Any]) -> Dict[str, List[str]]:
    section = data.get("allowlist", {})
    if not isinstance(section, dict):
        raise ConfigError("[allowlist] must be a table of name = [values]")
    result: Dict[str, List[str]] = {}
    for name, values in section.items():
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ConfigError(f"[allowlist] {name} must be a list of strings")
        result[name] = list(values)
    return result


def _validate(cfg: RerenderConfig) -> None:
    fail_on = cfg.scan.fail_on
    if not isinstance(fail_on, str) or fail_on.lower() not in FAIL_ON_LEVELS:
        raise ConfigError(f"Invalid scan.fail_on: {cfg.scan.fail_on!r}")
    cfg.scan.fail_on = cfg.scan.fail_on.lower()
    if cfg.output.format not in ("terminal", "json", "sarif"):
        raise ConfigError(f"Invalid output.format: {cfg.output.format!r}")
    if not isinstance(cfg.scan.max_input_kb, int) or cfg.scan.max_input_kb <= 0:
        raise ConfigError("scan.max_input_kb must be positive")


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> RerenderConfig:
    """Load, validate, and return a RerenderConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = RerenderConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = RerenderConfig(
                version=raw.get("version", "1.0"),
                scan=_build_section(raw, ScanConfig, "scan"),
                output=_build_section(raw, OutputConfig, "output"),
                rules=_build_section(raw, RulesConfig, "rules"),
                allowlist=_build_allowlist(raw),
                server=_build_section(raw, ServerConfig, "server"),
            )
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
