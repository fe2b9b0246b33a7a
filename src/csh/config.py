"""Configuration for the shell.

Settings are optional; when no file is given the defaults below apply.
A configuration file is YAML, for example:

    prompt: "> "
    line_buffer_size: 1024
    launcher: auto
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from csh.errors import ConfigurationError

logger = logging.getLogger(__name__)

LAUNCHER_KINDS = ("auto", "fork", "subprocess")


class ShellConfig(BaseModel):
    """Top-level shell configuration."""
    prog_name: str = Field(default="csh", min_length=1)
    prompt: str = "> "
    line_buffer_size: int = Field(default=1024, gt=0)
    token_buffer_size: int = Field(default=64, gt=0)
    launcher: str = "auto"

    @field_validator('launcher')
    @classmethod
    def validate_launcher(cls, v: str) -> str:
        """Ensure launcher is known."""
        if v not in LAUNCHER_KINDS:
            raise ValueError(f"Launcher must be one of {list(LAUNCHER_KINDS)}, got '{v}'")
        return v


def load_config(config_path: Optional[Union[str, Path]] = None) -> ShellConfig:
    """Load and validate a configuration file.

    Args:
        config_path: Path to a YAML file, or None for defaults

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if config_path is None:
        return ShellConfig()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read {config_path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{config_path}: expected a mapping at top level")

    try:
        config = ShellConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return config


def generate_sample_config(output_path: Path) -> None:
    """Generate a sample configuration file.

    Args:
        output_path: Path to write the sample config
    """
    sample_config = """# Name used as the prefix of diagnostic messages
prog_name: csh

# Printed before every line is read
prompt: "> "

# Initial buffer capacities; both double whenever they fill up
line_buffer_size: 1024
token_buffer_size: 64

# How external programs are started: auto, fork or subprocess
launcher: auto
"""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sample_config)
    logger.info(f"Sample configuration written to {output_path}")
