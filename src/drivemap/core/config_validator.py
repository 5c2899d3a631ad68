from __future__ import annotations

"""
Configuration Validation Service.

Normalizes untrusted configuration (JSON file, CLI overrides) into strictly
typed values, injecting defaults for missing keys, and translates the result
into the option objects consumed by the decoder and the builder.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from drivemap.core.builder import BuildOptions, LinkTransform
from drivemap.core.decoder import DecoderPolicy
from drivemap.domain.config import get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("snapshot_path", "snapshot_url", "codes_file", "codes_url", "root_id")
_BOOL_FIELDS = ("include_hidden",)
_LENGTH_FIELDS = ("prefix_code_lengths", "suffix_code_lengths")

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
        strict: Raise on invalid values instead of coercing or falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, for values of the wrong type.
        ValueError: In strict mode, for values outside their range or unknown keys.
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

    for key in sorted(set(config) - set(defaults)):
        msg = f"Unknown config key '{key}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Ignored.")
        merged.pop(key)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in _LENGTH_FIELDS:
        merged[field] = _as_list_int(merged.get(field), defaults[field], field, warnings, strict)

    merged["max_depth"] = _as_int(merged.get("max_depth"), defaults["max_depth"], "max_depth", warnings, strict)
    merged["delimiters"] = _as_delimiters(merged.get("delimiters"), defaults["delimiters"], warnings, strict)

    for warning in warnings:
        logger.warning(f"Config: {warning}")

    return merged, warnings


def policy_from_config(config: Dict[str, Any]) -> DecoderPolicy:
    return DecoderPolicy(
        delimiters=config["delimiters"],
        prefix_code_lengths=tuple(config["prefix_code_lengths"]),
        suffix_code_lengths=tuple(config["suffix_code_lengths"]),
    )


def options_from_config(
        config: Dict[str, Any],
        link_transform: Optional[LinkTransform] = None,
) -> BuildOptions:
    """Translate a validated configuration into BuildOptions."""
    return BuildOptions(
        root_id=config["root_id"] or None,
        include_hidden=config["include_hidden"],
        policy=policy_from_config(config),
        link_transform=link_transform,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _fail(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()
    _fail(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce 0/1 and yes/no style strings into booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "si", "sí"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _fail(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept non-negative integers; numeric strings are converted outside strict mode."""
    if value is None:
        return fallback

    if isinstance(value, str) and not strict and value.strip().isdigit():
        warnings.append(f"Field '{field}' converted from '{value}' to int.")
        value = int(value.strip())

    if isinstance(value, bool) or not isinstance(value, int):
        _fail(f"Invalid field '{field}': expected int, received {type(value).__name__}.", warnings, strict)
        return fallback
    if value < 0:
        _fail(f"Invalid field '{field}': must be >= 0, received {value}.", warnings, strict, ValueError)
        return fallback
    return value


def _as_list_int(value: Any, fallback: List[int], field: str, warnings: List[str], strict: bool) -> List[int]:
    """Ensure a list of positive code lengths, supporting CSV strings ("4,2")."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        parts = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        value = [int(x) if x.isdigit() else x for x in parts]

    if not isinstance(value, (list, tuple)):
        _fail(f"Invalid field '{field}': expected list[int], received {type(value).__name__}.", warnings, strict)
        return list(fallback)

    out: List[int] = []
    for i, item in enumerate(value):
        if isinstance(item, bool) or not isinstance(item, int) or item <= 0:
            msg = f"Invalid item in '{field}[{i}]': expected positive int."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
            continue
        if item not in out:
            out.append(item)
    return out if out else list(fallback)


def _as_delimiters(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    # Not stripped: a space is a valid delimiter.
    if isinstance(value, str) and value:
        return value
    if value is None:
        return fallback
    _fail("Invalid field 'delimiters': expected a non-empty string.", warnings, strict, ValueError)
    return fallback
