"""
Configuration loader — reads classjars.yml into a ProjectConfig.

Reads YAML, applies environment overrides, validates against the
Pydantic schema, and returns a typed config.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from classjars.core.models.project import ProjectConfig, SyncMode

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "classjars.yml"

SYNC_MODE_ENV = "CLASSJARS_SYNC_MODE"
EXPERIMENT_ENV_PREFIX = "CLASSJARS_EXPERIMENT_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when project configuration is invalid or missing."""


def find_project_file(start_dir: Path | None = None) -> Path | None:
    """Search for classjars.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to classjars.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_project(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ProjectConfig:
    """Load and validate project configuration.

    Args:
        path: Explicit path to classjars.yml. If None, searches upward.
        env: Environment used for overrides (default: os.environ).

    Returns:
        Validated ProjectConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_project_file()

    if path is None:
        raise ConfigError(
            f"No {PROJECT_CONFIG_FILE} found. Create one at the workspace root, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading project config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    data = apply_env_overrides(data, os.environ if env is None else env)

    try:
        project = ProjectConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid project configuration: {e}") from e

    logger.info(
        "Loaded project '%s' (%s sync, %d modules)",
        project.name,
        project.sync_mode.value,
        len(project.modules),
    )
    return project


def apply_env_overrides(data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Overlay CLASSJARS_SYNC_MODE and CLASSJARS_EXPERIMENT_* onto raw config.

    Raises:
        ConfigError: If an override value cannot be interpreted.
    """
    merged = dict(data)

    mode = env.get(SYNC_MODE_ENV)
    if mode:
        valid = {m.value for m in SyncMode}
        if mode.lower() not in valid:
            raise ConfigError(
                f"{SYNC_MODE_ENV}={mode!r} is not one of: {', '.join(sorted(valid))}"
            )
        merged["sync_mode"] = mode.lower()

    experiments = dict(merged.get("experiments") or {})
    for name, value in env.items():
        if not name.startswith(EXPERIMENT_ENV_PREFIX):
            continue
        flag = name[len(EXPERIMENT_ENV_PREFIX):].lower()
        experiments[flag] = _parse_bool(name, value)
    if experiments:
        merged["experiments"] = experiments

    return merged


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name}={value!r} is not a boolean")


def project_root(config_path: Path) -> Path:
    """Get the project root directory from a config file path."""
    return config_path.parent.resolve()
