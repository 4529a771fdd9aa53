"""
kong_plugin - a plugin attached globally or to an API, service, route or consumer.

The remote id is used as the resource id. A plugin missing on read is treated
as already deleted: the id is cleared so it gets re-created.
"""

import logging
from typing import Any, Dict, Sequence

from admin import KongAdminClient, PluginRequest
from drift import strip_computed
from encoding import build_plugin_config
from errors import RemoteError
from resources.base import ResourceData, ResourceHandler
from schema import PLUGIN_ATTRIBUTES, Attribute

logger = logging.getLogger(__name__)

SCOPE_KEYS = ("api_id", "service_id", "route_id", "consumer_id")


def _scope_id(plugin: Dict[str, Any], key: str) -> str:
    """Scope reference as either `service_id` or nested `service: {id}`."""
    if plugin.get(key):
        return plugin[key]
    nested = plugin.get(key[: -len("_id")])
    if isinstance(nested, dict):
        return nested.get("id") or ""
    return ""


def plugin_request_from_data(data: ResourceData) -> PluginRequest:
    """
    Build a plugin request from declared attributes.

    Raises:
        InvalidConfig: If config_json is used and is not a JSON object.
    """
    return PluginRequest(
        name=data.get_string("name"),
        api_id=data.get_string("api_id"),
        consumer_id=data.get_string("consumer_id"),
        service_id=data.get_string("service_id"),
        route_id=data.get_string("route_id"),
        config=build_plugin_config(
            data.get_map("config"), data.get_string("config_json")
        ),
    )


class PluginHandler(ResourceHandler):
    """Handler for kong_plugin resources."""

    @property
    def name(self) -> str:
        return "kong_plugin"

    @property
    def attributes(self) -> Sequence[Attribute]:
        return PLUGIN_ATTRIBUTES

    def create(self, data: ResourceData, client: KongAdminClient) -> None:
        plugin_request = plugin_request_from_data(data)

        try:
            plugin = client.plugins().create(plugin_request)
        except RemoteError as e:
            raise RemoteError(
                "create kong plugin",
                f"failed to create kong plugin: {plugin_request} error: {e.message}",
                request=plugin_request,
                status=e.status,
            ) from e

        if not plugin or not plugin.get("id"):
            raise RemoteError(
                "create kong plugin", "response has no id", request=plugin_request
            )

        data.id = plugin["id"]
        logger.info(f"Created kong plugin {plugin_request.name} ({data.id})")

        self.read(data, client)

    def update(self, data: ResourceData, client: KongAdminClient) -> None:
        plugin_request = plugin_request_from_data(data)

        try:
            client.plugins().update_by_id(data.id, plugin_request)
        except RemoteError as e:
            raise RemoteError(
                "update kong plugin",
                f"error updating kong plugin: {e.message}",
                request=plugin_request,
                status=e.status,
            ) from e

        logger.info(f"Updated kong plugin {data.id}")
        self.read(data, client)

    def read(self, data: ResourceData, client: KongAdminClient) -> None:
        try:
            plugin = client.plugins().get_by_id(data.id)
        except RemoteError as e:
            raise RemoteError(
                "read kong plugin",
                f"could not find kong plugin: {e.message}",
                status=e.status,
            ) from e

        if plugin is None:
            logger.info(f"Kong plugin {data.id} no longer exists, clearing id")
            data.id = ""
            return

        data.set("name", plugin.get("name") or "")
        for key in SCOPE_KEYS:
            data.set(key, _scope_id(plugin, key))

        # Track the upstream config so an imported plugin is fully described;
        # `config` itself is left alone, it would never match after a read.
        data.set("config_json", strip_computed(plugin.get("config") or {}))

    def delete(self, data: ResourceData, client: KongAdminClient) -> None:
        try:
            client.plugins().delete_by_id(data.id)
        except RemoteError as e:
            raise RemoteError(
                "delete kong plugin",
                f"could not delete kong plugin: {e.message}",
                status=e.status,
            ) from e
        logger.info(f"Deleted kong plugin {data.id}")
