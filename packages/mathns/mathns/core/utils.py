"""mathns: Core Utilities
---------------------------------------------------------
Shared helpers for configuration management: YAML parsing with error
handling and deep dictionary merging.

Public API
----------
``load_yaml_file`` : Load a YAML mapping with error handling
``deep_merge_dicts`` : Recursive dictionary merge
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import MathNSConfigError, MathNSIOError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file that holds a mapping.

    Parameters
    ----------
    path : Path
        Path to the YAML file

    Returns
    -------
    Dict[str, Any]
        Loaded YAML data as dictionary; an empty file yields ``{}``.

    Raises
    ------
    MathNSIOError
        - [600] File doesn't exist or can't be read
    MathNSConfigError
        - [500] File is not valid YAML or its top level is not a mapping

    """
    if not path.exists():
        raise MathNSIOError(f"[600] File not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise MathNSIOError(f"[600] Failed to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise MathNSConfigError(f"[500] Failed to parse YAML file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MathNSConfigError(f"[500] Expected a mapping at the top of {path}")
    return data


def deep_merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override values taking precedence.

    Parameters
    ----------
    base : Dict[str, Any]
        Base dictionary
    override : Dict[str, Any]
        Override dictionary

    Returns
    -------
    Dict[str, Any]
        Merged dictionary

    """
    result = dict(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
