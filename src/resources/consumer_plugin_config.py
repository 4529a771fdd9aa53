"""
kong_consumer_plugin_config - a plugin config stored against a consumer.

Every attribute forces re-creation, so there is no update. The id is the
composite `consumer_id|plugin_name|id`. Unlike kong_plugin, a config missing
on read is an error.
"""

import logging
from typing import Sequence

from admin import KongAdminClient
from drift import body_to_config_json
from encoding import build_consumer_plugin_config
from errors import ConflictingConfig, InvalidConfig, RemoteError, ResourceNotFound
from identifiers import build_id, parse_id
from resources.base import ResourceData, ResourceHandler
from schema import CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, Attribute

logger = logging.getLogger(__name__)


class ConsumerPluginConfigHandler(ResourceHandler):
    """Handler for kong_consumer_plugin_config resources."""

    supports_update = False

    @property
    def name(self) -> str:
        return "kong_consumer_plugin_config"

    @property
    def attributes(self) -> Sequence[Attribute]:
        return CONSUMER_PLUGIN_CONFIG_ATTRIBUTES

    def create(self, data: ResourceData, client: KongAdminClient) -> None:
        consumer_id = data.get_string("consumer_id")
        plugin_name = data.get_string("plugin_name")

        try:
            payload = build_consumer_plugin_config(
                data.get_map("config"), data.get_string("config_json")
            )
        except ConflictingConfig as e:
            raise ConflictingConfig(f"error configuring plugin: {e.message}") from e

        try:
            created = client.consumers().create_plugin_config(
                consumer_id, plugin_name, payload
            )
        except RemoteError as e:
            raise RemoteError(
                "create kong consumer plugin config",
                f"failed to create kong consumer plugin config, error: {e.message}",
                request=payload,
                status=e.status,
            ) from e

        if created is None:
            logger.warning(
                f"Kong returned no plugin config for consumer {consumer_id}, "
                f"plugin {plugin_name}"
            )
            data.id = ""
            return

        data.id = build_id(consumer_id, plugin_name, created.id)
        logger.info(f"Created kong consumer plugin config {data.id}")

        self.read(data, client)

    def read(self, data: ResourceData, client: KongAdminClient) -> None:
        id_fields = parse_id(data.id)

        try:
            config = client.consumers().get_plugin_config(*id_fields)
        except RemoteError as e:
            raise RemoteError(
                "read kong consumer plugin config",
                f"could not find kong consumer plugin config with id: {data.id} "
                f"error: {e.message}",
                status=e.status,
            ) from e

        if config is None:
            raise ResourceNotFound(
                "read kong consumer plugin config",
                f"could not configure plugin for kong consumer: {data.id}",
            )

        data.set("consumer_id", id_fields.consumer_id)
        data.set("plugin_name", id_fields.plugin_name)

        # Synced from upstream so imports carry the config; `config` is not
        # tracked since it would be a perpetual diff.
        try:
            data.set("config_json", body_to_config_json(config.body))
        except InvalidConfig as e:
            raise InvalidConfig(
                f"could not read in consumer plugin config body: {data.id} "
                f"error: {e.message}"
            ) from e

    def delete(self, data: ResourceData, client: KongAdminClient) -> None:
        id_fields = parse_id(data.id)

        try:
            client.consumers().delete_plugin_config(*id_fields)
        except RemoteError as e:
            raise RemoteError(
                "delete kong consumer plugin config",
                f"could not delete kong consumer plugin config: {e.message}",
                status=e.status,
            ) from e
        logger.info(f"Deleted kong consumer plugin config {data.id}")
