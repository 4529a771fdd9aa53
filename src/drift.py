"""
Drift filtering for remote plugin configuration.

Plugin config is a schemaless blob, so the keys Kong computes on its side
have to be removed before the observed config is stored. Otherwise every
read reintroduces them and the stored value never matches what was declared.
"""

import logging
from typing import AbstractSet, Any, Mapping

from computed import COMPUTED_PLUGIN_PROPERTIES
from normalize import canonical_dumps, parse_config_json

logger = logging.getLogger(__name__)


def strip_computed(
    remote: Mapping[str, Any],
    excluded: AbstractSet[str] = COMPUTED_PLUGIN_PROPERTIES,
) -> str:
    """
    Remove excluded top-level keys from a remote config and canonicalize it.

    Nested values are kept as-is and the input mapping is not modified.

    Args:
        remote: Configuration object as returned by the admin API.
        excluded: Keys to drop.

    Returns:
        Canonical JSON text of the remaining keys.
    """
    kept = {key: value for key, value in remote.items() if key not in excluded}
    dropped = len(remote) - len(kept)
    if dropped:
        logger.debug(f"Stripped {dropped} computed field(s) from remote config")
    return canonical_dumps(kept)


def body_to_config_json(
    body: str,
    excluded: AbstractSet[str] = COMPUTED_PLUGIN_PROPERTIES,
) -> str:
    """
    Parse a raw JSON response body and strip its computed fields.

    Raises:
        InvalidConfig: If the body is not a JSON object.
    """
    return strip_computed(parse_config_json(body), excluded)
