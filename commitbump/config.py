#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("commitbump")

ENV_PREFIX = "COMMITBUMP_"
CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
PROJECT_CONFIG_FILENAMES = ['.commitbump.json', '.commitbump.toml', '.commitbump.yaml', '.commitbump.yml']


def get_config_path(working_directory=None):
    """Get the path to the configuration file.

    Checks in order:
    1. COMMITBUMP_CONFIG environment variable
    2. ~/.commitbump/ directory
    3. .commitbump.* in the working directory (or current directory)
    """
    # Check for environment variable override
    if 'COMMITBUMP_CONFIG' in os.environ:
        path = Path(os.environ['COMMITBUMP_CONFIG'])
        if path.exists():
            return path

    # Check ~/.commitbump/ directory
    user_dir = Path.home() / '.commitbump'
    for filename in CONFIG_FILENAMES:
        path = user_dir / filename
        if path.exists() and path.stat().st_size > 10:  # Not empty/trivial
            return path

    # Check project-local config
    project_dir = Path(working_directory) if working_directory else Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        path = project_dir / filename
        if path.exists():
            logger.debug(f"Using project config from {path}")
            return path

    # If no file exists, return default path for saving
    return user_dir / 'config.json'


def load_config(working_directory=None):
    """Load configuration from file.

    Raises:
        ConfigError: The config file exists but cannot be read or parsed
    """
    config_path = get_config_path(working_directory)

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                import yaml
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                # Default to JSON format
                with open(config_path, 'r') as f:
                    file_config = json.load(f)

            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")

            # Merge file config with defaults
            config = merge_configs(config, file_config)
        except Exception as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def save_config(config, config_path=None):
    """Save configuration to file."""
    config_path = Path(config_path) if config_path else get_config_path()

    try:
        # Create directory if it doesn't exist
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.suffix.lower() in ['.toml']:
            # tomllib is read-only
            import toml
            with open(config_path, 'w') as f:
                toml.dump(config, f)
        elif config_path.suffix.lower() in ['.yaml', '.yml']:
            import yaml
            with open(config_path, 'w') as f:
                yaml.safe_dump(config, f, default_flow_style=False)
        else:
            # Default to JSON format
            with open(config_path, 'w') as f:
                json.dump(config, f, indent=2)

        logger.info(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Error saving config to {config_path}: {e}")
    return config_path


def get_default_config():
    """Get default configuration."""
    return {
        "release": {
            "tag_format": "v{version}",
            "patch_types": ["fix", "perf", "refactor", "revert"],
        },
        "git": {
            "timeout_seconds": 30,
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
    }


def configure_logging(config, verbose=False):
    """Apply the logging section of the config to the commitbump logger."""
    log_config = config.get("logging", {})
    level_name = "DEBUG" if verbose else str(log_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    fmt = log_config.get("format")
    if fmt:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(fmt))


def merge_configs(base_config, override_config):
    """Lay override_config over base_config, merging nested sections."""
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_configs(current, value)
        else:
            merged[key] = value
    return merged


def _coerce_env_value(name, value, current):
    """Convert an environment string to the type of the setting it replaces."""
    if isinstance(current, list):
        return [v.strip() for v in value.split(',') if v.strip()]
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError as e:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.

    Variables are named COMMITBUMP_<SECTION>_<KEY>, for example
    COMMITBUMP_RELEASE_TAG_FORMAT=release-{version}. Only settings that
    already exist are overridden. Values take the type of the setting they
    replace; list settings are comma-separated.
    """
    for section, settings in config.items():
        if not isinstance(settings, dict):
            continue
        for key, current in settings.items():
            name = f"{ENV_PREFIX}{section}_{key}".upper()
            if name in os.environ:
                settings[key] = _coerce_env_value(name, os.environ[name], current)
    return config
