"""Configuration models and loading utilities."""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, field_validator


class AppConfig(BaseModel):
    """Console application configuration."""

    sentinel: str = "End"  # Input line that ends the session
    separator: str = ":"  # Separates command name and arguments
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("separator")
    @classmethod
    def separator_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("separator cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


def load_config(path: Union[str, Path]) -> AppConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return AppConfig(**(data or {}))
