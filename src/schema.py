"""
Resource attribute tables.

Declarative metadata for each managed resource: which attributes exist,
which are required, which force re-creation when changed and which
conflict with each other. Handlers and the CLI consume these tables; the
reconciliation engine itself does not.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from normalize import canonical_dumps, normalize_state

TYPE_STRING = "string"
TYPE_MAP = "map"


@dataclass(frozen=True)
class Attribute:
    """Metadata for a single resource attribute."""

    name: str
    type: str = TYPE_STRING
    required: bool = False
    force_new: bool = False
    conflicts_with: Tuple[str, ...] = ()
    description: str = ""
    # An empty desired value never counts as a change (synced from upstream)
    suppress_empty_diff: bool = False


PLUGIN_ATTRIBUTES: Tuple[Attribute, ...] = (
    Attribute("name", required=True, force_new=True),
    Attribute("api_id"),
    Attribute("consumer_id"),
    Attribute("service_id"),
    Attribute("route_id"),
    Attribute("config", type=TYPE_MAP, conflicts_with=("config_json",)),
    Attribute(
        "config_json",
        conflicts_with=("config",),
        description=(
            "plugin configuration in JSON format, configuration must be "
            "a valid JSON object."
        ),
        suppress_empty_diff=True,
    ),
)

CONSUMER_PLUGIN_CONFIG_ATTRIBUTES: Tuple[Attribute, ...] = (
    Attribute("consumer_id", required=True, force_new=True),
    Attribute("plugin_name", required=True, force_new=True),
    Attribute(
        "config", type=TYPE_MAP, force_new=True, conflicts_with=("config_json",)
    ),
    Attribute(
        "config_json",
        force_new=True,
        conflicts_with=("config",),
        description="JSON format of plugin config",
        suppress_empty_diff=True,
    ),
)


def to_json_schema(attributes: Sequence[Attribute]) -> Dict[str, Any]:
    """Build a Draft 7 JSON Schema for a resource spec."""
    properties: Dict[str, Any] = {}
    for attr in attributes:
        if attr.type == TYPE_MAP:
            prop: Dict[str, Any] = {
                "type": "object",
                "additionalProperties": {"type": "string"},
            }
        else:
            prop = {"type": "string"}
        if attr.description:
            prop["description"] = attr.description
        properties[attr.name] = prop

    return {
        "type": "object",
        "required": [attr.name for attr in attributes if attr.required],
        "properties": properties,
        "additionalProperties": False,
    }


def _observed(attr: Attribute, current: Mapping[str, Any]) -> Any:
    value = current.get(attr.name)
    if attr.type == TYPE_MAP and not value:
        # Reads only sync the JSON form of a mapping
        for other in attr.conflicts_with:
            if current.get(other):
                return current[other]
    return value


def _comparable(attr: Attribute, value: Any) -> Any:
    if not value:
        return None
    if isinstance(value, Mapping):
        return canonical_dumps(dict(value))
    if attr.type == TYPE_MAP or attr.name == "config_json":
        return normalize_state(value) or value
    return value


def changed_attributes(
    attributes: Sequence[Attribute],
    current: Mapping[str, Any],
    desired: Mapping[str, Any],
    force_new_only: bool = False,
) -> List[str]:
    """
    List declared attributes whose desired value differs from the current one.

    Config is compared in canonical form, and a declared `config` mapping is
    compared against the `config_json` a read stores.

    Args:
        attributes: The resource's attribute table
        current: Attributes observed on the remote object
        desired: Attributes declared by the user
        force_new_only: Only consider attributes that force re-creation

    Returns:
        Names of the differing attributes, in table order.
    """
    changed = []
    for attr in attributes:
        if force_new_only and not attr.force_new:
            continue
        if attr.name not in desired:
            continue
        wanted = desired.get(attr.name)
        if not wanted and (attr.suppress_empty_diff or attr.type == TYPE_MAP):
            continue
        if _comparable(attr, wanted) != _comparable(attr, _observed(attr, current)):
            changed.append(attr.name)
    return changed


def replacement_attributes(
    attributes: Sequence[Attribute],
    current: Mapping[str, Any],
    desired: Mapping[str, Any],
) -> List[str]:
    """Names of force-new attributes that require destroying and re-creating."""
    return changed_attributes(attributes, current, desired, force_new_only=True)
