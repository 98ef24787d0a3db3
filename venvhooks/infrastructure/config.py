"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all hook settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- The shell variables the hooks historically read (venvDir, venvPatches,
  libraries) are honoured, below the VENVHOOKS_* variables
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

from venvhooks.domain.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UvConfig:
    """uv sync hook configuration."""
    enabled: bool = True
    executable: str = "uv"
    extra_args: tuple[str, ...] = ()
    python_preference: str = "only-system"


@dataclass(frozen=True)
class PatchConfig:
    """Site-packages patching hook configuration."""
    enabled: bool = False
    executable: str = "patch"
    patches: tuple[str, ...] = ()
    strip: int = 1


@dataclass(frozen=True)
class AutoPatchelfConfig:
    """auto-patchelf hook configuration."""
    enabled: bool = False
    executable: str = "auto-patchelf"
    libraries: tuple[str, ...] = ()
    ignore_missing: tuple[str, ...] = ()
    extra_args: tuple[str, ...] = ()
    output_filters: tuple[str, ...] = ("searching for dependencies of",)


@dataclass(frozen=True)
class MaturinConfig:
    """maturin import hook configuration."""
    enabled: bool = False
    extra_args: tuple[str, ...] = ("--detect-uv",)


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class HooksConfig:
    """Root configuration for venvhooks."""
    venv_dir: str = ""
    project_dir: str = "."
    state_dir: str = ".venvhooks"
    site_packages: str = ""
    lock: bool = True
    hash_exclude: tuple[str, ...] = ("__pycache__", "*.pyc")
    log_level: str = "WARNING"
    uv: UvConfig = field(default_factory=UvConfig)
    patch: PatchConfig = field(default_factory=PatchConfig)
    autopatchelf: AutoPatchelfConfig = field(default_factory=AutoPatchelfConfig)
    maturin: MaturinConfig = field(default_factory=MaturinConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)


_SECTIONS = {
    "uv": UvConfig,
    "patch": PatchConfig,
    "autopatchelf": AutoPatchelfConfig,
    "maturin": MaturinConfig,
    "telemetry": TelemetryConfig,
}

# shell variable -> (section or None for top level, field)
_LEGACY_ENV = {
    "venvDir": (None, "venv_dir"),
    "venvPatches": ("patch", "patches"),
    "libraries": ("autopatchelf", "libraries"),
}


def _legacy_env_override(data: dict) -> dict:
    """Map the shell-hook variables onto config keys.

    List-valued variables are whitespace separated, as bash arrays are
    flattened when exported.
    """
    for var, (section, field_name) in _LEGACY_ENV.items():
        value = os.environ.get(var)
        if not value:
            continue
        if field_name in ("patches", "libraries"):
            value = value.split()
        target = data if section is None else data.setdefault(section, {})
        target[field_name] = value
        if field_name == "patches":
            target.setdefault("enabled", True)
    return data


def _env_override(data: dict, prefix: str = "VENVHOOKS") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern VENVHOOKS_SECTION_KEY for
    section fields and VENVHOOKS_KEY for top-level fields.
    For example: VENVHOOKS_VENV_DIR=.venv, VENVHOOKS_UV_EXTRA_ARGS=--all-extras
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        parts = name.split("_", 1)
        if len(parts) == 2 and parts[0] in _SECTIONS:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data[name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Invalid config file %s: top level must be an object", path)
        return {}
    return data


def _build_sub_config(cls, data: dict):
    """Build a config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {
        f.name for f in dataclasses.fields(cls) if f.name not in _SECTIONS
    }
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for f in dataclasses.fields(cls):
        if f.name not in filtered:
            continue
        val = filtered[f.name]

        # Convert comma-separated strings to tuples for tuple fields
        if f.type == "tuple[str, ...]":
            if isinstance(val, str):
                filtered[f.name] = tuple(v.strip() for v in val.split(",") if v.strip())
            elif isinstance(val, list):
                filtered[f.name] = tuple(str(v) for v in val)

        # Convert string numbers to int/bool
        elif isinstance(val, str):
            if f.type == "int":
                try:
                    filtered[f.name] = int(val)
                except ValueError:
                    raise InvalidConfigurationError(
                        f.name, val, "an integer"
                    ) from None
            elif f.type == "bool":
                filtered[f.name] = val.lower() in ("true", "1", "yes")

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "VENVHOOKS",
) -> HooksConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (VENVHOOKS_SECTION_KEY)
    2. Shell-hook variables (venvDir, venvPatches, libraries)
    3. Config file values
    4. Defaults

    Args:
        path: Path to config file (JSON). Defaults to venvhooks.json in CWD.
        env_prefix: Environment variable prefix. Defaults to VENVHOOKS.
    """
    config_path = Path(path) if path else Path("venvhooks.json")
    data = _parse_config_file(config_path)
    data = _legacy_env_override(data)
    data = _env_override(data, env_prefix)

    sections = {
        name: _build_sub_config(
            cls, data[name] if isinstance(data.get(name), dict) else {}
        )
        for name, cls in _SECTIONS.items()
    }
    top = _build_sub_config(HooksConfig, data)
    return dataclasses.replace(top, **sections)
