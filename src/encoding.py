"""
Plugin config encoding - turns declared config into admin API payloads.

A resource declares its configuration either as a flat `config` mapping or
as a `config_json` blob. The two are resolved once into a ConfigInput and
then encoded for the attachment kind:

- kong_plugin sends a JSON object inside the plugin request. A non-empty
  mapping takes precedence over the blob.
- kong_consumer_plugin_config sends a string body: `key=value` pairs joined
  with `&`, or the blob passed through. Declaring both is an error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from errors import ConflictingConfig
from normalize import parse_config_json


@dataclass(frozen=True)
class StructuredConfig:
    """Configuration declared as a key/value mapping."""

    values: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BlobConfig:
    """Configuration declared as config_json text."""

    text: str


@dataclass(frozen=True)
class AbsentConfig:
    """No configuration declared."""


ConfigInput = Union[StructuredConfig, BlobConfig, AbsentConfig]


def resolve_plugin_config_input(
    config: Optional[Mapping[str, Any]], config_json: Optional[str]
) -> ConfigInput:
    """Resolve declared config for a kong_plugin, preferring the mapping."""
    if config:
        return StructuredConfig(dict(config))
    if config_json:
        return BlobConfig(config_json)
    return AbsentConfig()


def resolve_consumer_config_input(
    config: Optional[Mapping[str, Any]], config_json: Optional[str]
) -> ConfigInput:
    """
    Resolve declared config for a kong_consumer_plugin_config.

    Raises:
        ConflictingConfig: If both config and config_json are non-empty.
    """
    if config and config_json:
        raise ConflictingConfig("cannot declare both config and config_json")
    if config:
        return StructuredConfig(dict(config))
    if config_json:
        return BlobConfig(config_json)
    return AbsentConfig()


def encode_plugin_config(config_input: ConfigInput) -> Dict[str, Any]:
    """
    Encode resolved config as the `config` object of a plugin request.

    Raises:
        InvalidConfig: If a blob does not parse as a JSON object.
    """
    if isinstance(config_input, StructuredConfig):
        return dict(config_input.values)
    if isinstance(config_input, BlobConfig):
        return parse_config_json(config_input.text)
    return {}


def encode_consumer_plugin_config(config_input: ConfigInput) -> str:
    """
    Encode resolved config as a consumer plugin config request body.

    Mapping values are inserted verbatim, without percent-encoding.
    """
    if isinstance(config_input, StructuredConfig):
        return "&".join(
            f"{key}={value}" for key, value in config_input.values.items()
        )
    if isinstance(config_input, BlobConfig):
        return config_input.text
    return ""


def build_plugin_config(
    config: Optional[Mapping[str, Any]], config_json: Optional[str]
) -> Dict[str, Any]:
    """Resolve and encode a kong_plugin config in one step."""
    return encode_plugin_config(resolve_plugin_config_input(config, config_json))


def build_consumer_plugin_config(
    config: Optional[Mapping[str, Any]], config_json: Optional[str]
) -> str:
    """Resolve and encode a kong_consumer_plugin_config body in one step."""
    return encode_consumer_plugin_config(
        resolve_consumer_config_input(config, config_json)
    )
