"""Configuration loader for the Gfx documentation extractor.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

CONFIG_ENV_VAR = "GFX_DOCS_CONFIG"

_DEFAULT_EXTENSIONS = [".h", ".hpp", ".cpp", ".mm", ".gfx"]
_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ParserConfig:
    """Configuration for collecting source files to extract docs from."""

    extensions: list[str] = field(default_factory=lambda: list(_DEFAULT_EXTENSIONS))
    exclude_patterns: list[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Configuration for documentation output."""

    default_format: str = "json"
    output_dir: str = "docs/generated"
    include_empty: bool = False
    templates_dir: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _resolve_config_path(config_path: Optional[str]) -> Path:
    """Pick the config file from the argument, environment, or default."""
    if config_path:
        return Path(config_path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return _DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            GFX_DOCS_CONFIG environment variable, then the default path
            at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = _resolve_config_path(config_path)

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    logger.info("Loaded configuration from %s", path)

    parser_data = raw.get("parser", {})
    parser_config = ParserConfig(
        extensions=parser_data.get("extensions", list(_DEFAULT_EXTENSIONS)),
        exclude_patterns=parser_data.get("exclude_patterns", []),
    )

    output_data = raw.get("output", {})
    output_config = OutputConfig(
        default_format=output_data.get("default_format", "json"),
        output_dir=output_data.get("output_dir", "docs/generated"),
        include_empty=output_data.get("include_empty", False),
        templates_dir=output_data.get("templates_dir"),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        parser=parser_config,
        output=output_config,
        logging=logging_config,
    )
