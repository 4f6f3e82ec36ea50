# File: utils/config_utils.py
# Description: Utility functions for loading, validating, and resolving the visualizer configuration.

import os  # Import OS for file handling and environment lookups
from dataclasses import dataclass  # Typed settings container
from pathlib import Path  # Import Path for OS-independent file paths
from typing import Optional

import yaml  # Import PyYAML for reading and parsing YAML files

# Default YAML settings file shipped next to the database configuration
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "visualizer.yaml"


class ConfigLoaderError(Exception):
    """
    Custom exception for errors encountered during configuration loading or validation.
    """
    pass


@dataclass(frozen=True)
class VisualizerSettings:
    """Resolved settings for the table, its geometry, the animation and the word store."""
    bucket_count: int = 10
    cell_width: float = 100
    cell_height: float = 30
    padding: float = 5
    animation_steps: int = 20
    frame_interval_ms: int = 16
    max_workers: int = 2


def load_config(config_file_path: str, default_config: dict = None) -> dict:
    """
    Load the configuration from a YAML file.

    Args:
        config_file_path (str): Path to the YAML configuration file.
        default_config (dict, optional): Default configuration to use if loading fails.

    Returns:
        dict: Parsed configuration dictionary.

    Raises:
        ConfigLoaderError: If the configuration file does not exist or fails to parse.
    """
    # Step 1: Check if the YAML file exists at the specified path
    if not os.path.exists(config_file_path):
        if default_config is not None:
            return default_config
        raise ConfigLoaderError(f"Config file '{config_file_path}' not found.")

    # Step 2: Attempt to load the YAML file
    try:
        with open(config_file_path, "r") as config_file:
            config = yaml.safe_load(config_file)
    except yaml.YAMLError as e:
        if default_config is not None:
            return default_config
        raise ConfigLoaderError(f"Error parsing YAML file '{config_file_path}': {e}")

    # An empty document parses to None
    if config is None:
        return default_config if default_config is not None else {}
    if not isinstance(config, dict):
        raise ConfigLoaderError(f"Config file '{config_file_path}' must contain a mapping at the top level.")
    return config


def validate_config(config: dict, required_keys: list) -> None:
    """
    Validate that required keys are present in the configuration dictionary.

    Args:
        config (dict): The configuration dictionary to validate.
        required_keys (list): A list of keys that must be present in the configuration.

    Raises:
        ConfigLoaderError: If any required keys are missing.
    """
    missing_keys = [key for key in required_keys if key not in config]
    if missing_keys:
        raise ConfigLoaderError(f"Missing required keys in configuration: {missing_keys}")


def _positive_number(section: dict, key: str, default, cast):
    # Missing keys fall back to the dataclass default
    value = section.get(key, default)
    if isinstance(value, bool):
        raise ConfigLoaderError(f"Setting '{key}' must be a number, got {value!r}.")
    # Integer settings refuse fractional values instead of truncating them
    if cast is int and isinstance(value, float) and not value.is_integer():
        raise ConfigLoaderError(f"Setting '{key}' must be a whole number, got {value!r}.")
    try:
        value = cast(value)
    except (TypeError, ValueError):
        raise ConfigLoaderError(f"Setting '{key}' must be a number, got {value!r}.")
    if value <= 0:
        raise ConfigLoaderError(f"Setting '{key}' must be positive, got {value!r}.")
    return value


def load_visualizer_settings(config_file_path: Optional[str] = None) -> VisualizerSettings:
    """
    Resolve the visualizer settings from YAML.

    The path is taken from the argument, then the `VISUALIZER_CONFIG` environment
    variable, then the bundled `config/visualizer.yaml`. A missing or empty file yields the
    defaults; any other file must have a `table` section with a `bucket_count`.

    Args:
        config_file_path (Optional[str]): Explicit path to a YAML settings file.

    Returns:
        VisualizerSettings: The resolved settings.

    Raises:
        ConfigLoaderError: If the file is malformed, lacks `table.bucket_count`, or a value is
            not a positive number (integer settings must also be whole numbers).
    """
    path = config_file_path or os.getenv("VISUALIZER_CONFIG") or str(DEFAULT_CONFIG_PATH)
    config = load_config(path, default_config={})

    # A settings file that exists must at least size the table
    if config:
        validate_config(config, ["table"])
        if not isinstance(config["table"], dict):
            raise ConfigLoaderError("Section 'table' must be a mapping.")
        validate_config(config["table"], ["bucket_count"])

    table = config["table"] if config else {}
    geometry = config.get("geometry") or {}
    animation = config.get("animation") or {}
    store = config.get("store") or {}
    defaults = VisualizerSettings()

    return VisualizerSettings(
        bucket_count=_positive_number(table, "bucket_count", defaults.bucket_count, int),
        cell_width=_positive_number(geometry, "cell_width", defaults.cell_width, float),
        cell_height=_positive_number(geometry, "cell_height", defaults.cell_height, float),
        padding=_positive_number(geometry, "padding", defaults.padding, float),
        animation_steps=_positive_number(animation, "animation_steps", defaults.animation_steps, int),
        frame_interval_ms=_positive_number(animation, "frame_interval_ms", defaults.frame_interval_ms, int),
        max_workers=_positive_number(store, "max_workers", defaults.max_workers, int),
    )
