"""
Composite identifiers for consumer plugin configs.

Kong addresses a consumer plugin config by consumer id, plugin name and its
own id, so the local identifier packs all three: `consumer_id|plugin_name|id`.
None of the parts may contain the separator.
"""

from typing import NamedTuple

from errors import MalformedIdentifier

SEPARATOR = "|"


class ConsumerPluginConfigId(NamedTuple):
    consumer_id: str
    plugin_name: str
    config_id: str


def build_id(consumer_id: str, plugin_name: str, config_id: str) -> str:
    """Join the three identifier parts in fixed order."""
    return SEPARATOR.join((consumer_id, plugin_name, config_id))


def parse_id(resource_id: str) -> ConsumerPluginConfigId:
    """
    Split a composite identifier into its parts.

    Raises:
        MalformedIdentifier: If the id does not have exactly three parts.
    """
    parts = resource_id.split(SEPARATOR)
    if len(parts) != 3:
        raise MalformedIdentifier(
            "failed to calculate consumer plugin config id, should be pipe "
            f"separated as consumerId|pluginName|id found: {resource_id}"
        )
    return ConsumerPluginConfigId(*parts)
