"""
Computed plugin properties.

Kong injects these keys into stored plugin configuration. They never take
part in desired/actual comparison and are stripped on every read.
"""

from typing import FrozenSet

COMPUTED_PLUGIN_PROPERTIES: FrozenSet[str] = frozenset(
    {
        "id",
        "created_at",
        "consumer_id",
    }
)
