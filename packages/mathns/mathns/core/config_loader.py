"""Configuration loading utilities.

This module loads ``MathConfig`` from YAML files through an override chain and
caches the result for namespaces created without an explicit configuration.
"""

from __future__ import annotations

import importlib.resources as ilr
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import MathConfig
from .errors import MathNSConfigError, MathNSIOError, get_logger
from .utils import deep_merge_dicts, load_yaml_file

__all__ = ["load_config", "save_user_config", "get_config_param", "CONFIG_ENV_VAR"]

logger = get_logger()

CONFIG_ENV_VAR = "MATHNS_CONFIG"

_CONFIG_CACHE: MathConfig | None = None


def load_config(
    *, force_reload: bool = False, config_path: str | Path | None = None
) -> MathConfig:
    """Load namespace configuration with override chain.

    Search order (later overrides earlier):
    1. Package default (mathns.core/config.yaml)
    2. ~/.mathns/config.yaml (User-specific)
    3. MATHNS_CONFIG environment variable
    4. Explicitly provided config_path

    Parameters
    ----------
    force_reload : bool
        If True, ignore cache and reload
    config_path : str or Path, optional
        Path to specific config file to override everything else

    Returns
    -------
    MathConfig
        Loaded configuration

    Raises
    ------
    MathNSConfigError
        - [501] The explicit config file cannot be loaded.
        - [502] The merged configuration does not validate.

    """
    global _CONFIG_CACHE

    if _CONFIG_CACHE is not None and not force_reload and config_path is None:
        return _CONFIG_CACHE

    # 1. Package default
    try:
        default_path = ilr.files("mathns.core").joinpath("config.yaml")
        config_dict = load_yaml_file(Path(str(default_path)))
    except (MathNSIOError, MathNSConfigError) as e:
        logger.warning(f"Could not load default config.yaml from package: {e}")
        config_dict = {}

    # 2. User config
    user_path = Path.home() / ".mathns" / "config.yaml"
    if user_path.exists():
        try:
            config_dict = deep_merge_dicts(config_dict, load_yaml_file(user_path))
        except (MathNSIOError, MathNSConfigError) as e:
            logger.warning(f"Failed to load user config {user_path}: {e}")

    # 3. Environment variable
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.exists():
            try:
                config_dict = deep_merge_dicts(config_dict, load_yaml_file(path))
            except (MathNSIOError, MathNSConfigError) as e:
                logger.warning(f"Failed to load env config {path}: {e}")
        else:
            logger.warning(f"{CONFIG_ENV_VAR} points to a missing file: {path}")

    # 4. Explicit path
    if config_path:
        path = Path(config_path)
        try:
            config_dict = deep_merge_dicts(config_dict, load_yaml_file(path))
        except (MathNSIOError, MathNSConfigError) as e:
            raise MathNSConfigError(
                f"[501] Failed to load explicit config {path}: {e}"
            ) from e

    try:
        config = MathConfig(**config_dict)
    except ValidationError as e:
        raise MathNSConfigError(f"[502] Invalid configuration: {e}") from e

    if config_path is None:
        _CONFIG_CACHE = config
    return config


def save_user_config(config: MathConfig) -> Path:
    """Save configuration to the user home directory and drop the cache."""
    global _CONFIG_CACHE

    user_dir = Path.home() / ".mathns"
    user_dir.mkdir(exist_ok=True)
    user_path = user_dir / "config.yaml"
    try:
        with open(user_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.model_dump(), f, sort_keys=False)
    except OSError as e:
        raise MathNSIOError(f"[601] Failed to save config to {user_path}: {e}") from e

    _CONFIG_CACHE = None
    return user_path


def get_config_param(path: str, default: Any = None) -> Any:
    """Get a configuration parameter by dot-separated path."""
    current: Any = load_config().model_dump()

    for segment in path.split("."):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        else:
            return default

    return current
