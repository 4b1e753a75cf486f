from __future__ import annotations

"""
Configuration Domain Management.

Resolves the runtime settings of the command from three layers, lowest
priority first: built-in defaults, an optional JSON configuration file,
and NODECAT_* environment variables. Values are returned raw; type
checking is the validator's job.
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from nodecat.domain.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LOG_LEVEL,
    ENV_CONFIG_PATH,
    ENV_OVERRIDES,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "chunk_size": DEFAULT_CHUNK_SIZE,
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": "",
    }


def get_config_path(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Locate the configuration file.

    Args:
        environ: Environment mapping (defaults to os.environ).

    Returns:
        str: $NODECAT_CONFIG when set, else ~/.nodecat/config.json.
    """
    env = os.environ if environ is None else environ
    explicit = (env.get(ENV_CONFIG_PATH) or "").strip()
    if explicit:
        return os.path.abspath(os.path.expanduser(explicit))
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------
def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Merge defaults, the configuration file and environment overrides.

    A missing file is normal. An unreadable or malformed file is reported
    as a warning and skipped.

    Args:
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Dict[str, Any]: Unvalidated configuration.
    """
    env = os.environ if environ is None else environ
    config = get_default_config()

    config.update(_read_config_file(get_config_path(env)))

    for key, var in ENV_OVERRIDES.items():
        value = env.get(var)
        if value is not None and value.strip():
            config[key] = value.strip()

    return config


def _read_config_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.debug(f"Config file not found at {path}. Using defaults.")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config {path}: {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: expected a JSON object.")
        return {}

    known = get_default_config().keys()
    return {k: v for k, v in data.items() if k in known}
