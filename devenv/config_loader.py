# devenv/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the bootstrapper.

Handles loading settings from Pydantic model defaults, environment
variables, a YAML file and command-line arguments, applying this order of
precedence (later wins):
1. Pydantic Model Defaults
2. Environment Variables (``DEVENV_*``, via Pydantic's BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "devenv.yaml"

# argparse destinations that map directly onto AppSettings fields
CLI_SETTING_KEYS = ("toolchain_file", "installer_url", "log_prefix")


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates ``source`` with values from ``overrides``.

    Nested dictionaries are merged key by key. ``None`` values in
    ``overrides`` never replace an existing value.

    Returns:
        The updated ``source`` dictionary.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml_config(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data and isinstance(yaml_data, dict):
        logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
        return yaml_data
    if yaml_data is not None:
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
    return {}


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: str = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings.

    Args:
        cli_args: Parsed command-line arguments (from argparse). Only the
            attributes named in ``CLI_SETTING_KEYS`` are used, and only when
            they are not None.
        config_file_path: Path to the YAML configuration file. Relative
            paths are resolved against the current working directory. A
            missing file is not an error.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration fails validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # Model Defaults < Environment Variables
    try:
        current_values_dict = AppSettings().model_dump(exclude_defaults=False)
    except ValidationError as e:
        logger_to_use.error(f"Environment configuration is invalid: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    yaml_data = _read_yaml_config(Path(config_file_path), logger_to_use)
    current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        cli_arg_dict = vars(cli_args)
        mapped_cli_values: Dict[str, Any] = {
            key: cli_arg_dict[key]
            for key in CLI_SETTING_KEYS
            if cli_arg_dict.get(key) is not None
        }
        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug(
        "Successfully loaded and validated application settings"
    )
    return final_settings
