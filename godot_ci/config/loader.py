"""
Pipeline configuration loading.

Configuration is read from two sources:
1. Environment variables prefixed with ``GODOT_CI_`` (highest precedence)
2. An optional YAML file passed on the command line
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from godot_ci.config.models import ENV_PREFIX, PipelineConfig
from godot_ci.core.errors import ConfigError


logger = logging.getLogger(__name__)


def _read_yaml_config(config_file: Path) -> dict[str, Any]:
    try:
        with config_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(
            f"Configuration file not found: {config_file}",
            {"config_file": str(config_file)},
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in configuration file {config_file}: {e}",
            {"config_file": str(config_file)},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file {config_file} must contain a mapping",
            {"config_file": str(config_file)},
        )
    return data


def load_pipeline_config(
    config_file: str | Path | None = None, **overrides: Any
) -> PipelineConfig:
    """Build the immutable pipeline configuration.

    Args:
        config_file: Optional YAML file with configuration keys
        **overrides: Explicit values, applied on top of the file data

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file cannot be read or values fail validation
    """
    data: dict[str, Any] = {}
    if config_file:
        path = Path(config_file).expanduser().resolve()
        data = _read_yaml_config(path)
        logger.debug("Loaded pipeline configuration from %s", path)

    data.update({k: v for k, v in overrides.items() if v is not None})

    if logger.isEnabledFor(logging.DEBUG):
        env_vars = sorted(k for k in os.environ if k.upper().startswith(ENV_PREFIX))
        logger.debug("Found %d godot-ci environment variables", len(env_vars))
        for key in env_vars:
            logger.debug("  %s is set", key)

    try:
        return PipelineConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid pipeline configuration: {e}") from e
