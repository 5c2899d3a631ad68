from __future__ import annotations

"""
Runtime Configuration.

Dict-based settings driving a build: where the snapshot and code tables
come from, root selection, hidden handling, tokenization and the depth
limit used by the validator.
"""

import json
import logging
import os
from typing import Any, Dict

from drivemap.domain import constants as const

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DRIVEMAP_CONFIG"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Sources
        "snapshot_path": "",
        "snapshot_url": "",
        "codes_file": "",
        "codes_url": "",

        # Build
        "root_id": "",
        "include_hidden": False,

        # Tokenization
        "delimiters": const.DEFAULT_DELIMITERS,
        "prefix_code_lengths": list(const.DEFAULT_PREFIX_CODE_LENGTHS),
        "suffix_code_lengths": list(const.DEFAULT_SUFFIX_CODE_LENGTHS),

        # Validation
        "max_depth": const.DEFAULT_MAX_DEPTH,
    }


def load_config(path: str = "") -> Dict[str, Any]:
    """
    Merge a JSON configuration file over the defaults.

    The path falls back to the DRIVEMAP_CONFIG environment variable. Missing
    or corrupted files leave the defaults untouched; unknown keys are kept
    so the validator can report them.

    Args:
        path: Location of the JSON file.

    Returns:
        Dict[str, Any]: Merged, not yet validated, configuration.
    """
    config = get_default_config()
    target = path or os.environ.get(CONFIG_ENV_VAR, "")
    if not target:
        return config

    if not os.path.exists(target):
        logger.warning(f"Config file '{target}' not found. Using defaults.")
        return config

    try:
        with open(target, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config from '{target}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.error(f"Config file '{target}' must contain a JSON object. Using defaults.")
        return config

    config.update(data)
    logger.debug(f"Configuration loaded from '{target}'")
    return config
