"""
Config normalization - parsing, validation and canonical form of config_json.

Canonical form sorts keys and drops insignificant whitespace so that
semantically identical JSON always serializes to the same text.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

from errors import InvalidConfig

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_config_json(blob: str) -> Dict[str, Any]:
    """
    Parse a config_json blob into a dict.

    Args:
        blob: JSON text that must describe an object.

    Returns:
        The parsed object.

    Raises:
        InvalidConfig: If the text is malformed or not a JSON object.
    """
    try:
        data = json.loads(blob, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise InvalidConfig(f"Invalid JSON in config_json: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfig(
            f"config_json must be a JSON object, got {type(data).__name__}"
        )
    return data


def validate_config_json(blob: str) -> Tuple[bool, Optional[str]]:
    """
    Validate that a config_json blob is a JSON object.

    Args:
        blob: The config_json text to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        parse_config_json(blob)
        return True, None
    except InvalidConfig as e:
        return False, e.message


def canonical_dumps(data: Dict[str, Any]) -> str:
    """Serialize a dict with sorted keys and no insignificant whitespace."""
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def canonicalize(blob: str) -> str:
    """
    Return the canonical form of a config_json blob.

    Raises:
        InvalidConfig: If the blob is not a JSON object.
    """
    return canonical_dumps(parse_config_json(blob))


def normalize_state(blob: str) -> str:
    """
    Canonicalize a config_json value on its way into stored state.

    Unlike canonicalize(), a bad blob is logged and yields an empty string:
    the write path has already validated it, so this only covers values read
    back from elsewhere.
    """
    try:
        return canonicalize(blob)
    except InvalidConfig as e:
        logger.error(f"Invalid JSON data in config_json: {e.message}")
        return ""
