from __future__ import annotations

"""
Configuration Validation Service.

Checks and coerces raw configuration values (which may come from a JSON
file or from environment strings) into typed settings. Invalid values
fall back to defaults with a warning, or raise in strict mode.
"""

import logging
from typing import Any, Dict, List, Tuple

from nodecat.domain.config import get_default_config
from nodecat.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, for values of the wrong type.
        ValueError: In strict mode, for values out of range.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["chunk_size"] = _as_positive_int(
        merged.get("chunk_size"), defaults["chunk_size"], "chunk_size", warnings, strict
    )
    merged["log_level"] = _as_level(
        merged.get("log_level"), defaults["log_level"], "log_level", warnings, strict
    )
    merged["log_file"] = _as_str(
        merged.get("log_file"), defaults["log_file"], "log_file", warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and strip string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept ints and digit strings greater than zero."""
    if value is None:
        return fallback

    number = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number <= 0:
        msg = f"Invalid field '{field}': must be positive, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return number


def _as_level(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept known logging level names, case-insensitively."""
    level = _as_str(value, fallback, field, warnings, strict)
    normalized = level.upper()
    if normalized in _LEVEL_MAP:
        return normalized

    msg = f"Invalid field '{field}': unknown level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
