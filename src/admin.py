"""
Kong Admin API client.

Thin synchronous wrappers over the plugin and consumer plugin config
endpoints. Failures are raised as RemoteError; nothing is retried.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

import requests

from errors import RemoteError

logger = logging.getLogger(__name__)


@dataclass
class PluginRequest:
    """Request body for creating or updating a plugin."""

    name: str
    api_id: str = ""
    consumer_id: str = ""
    service_id: str = ""
    route_id: str = ""
    config: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        """Build the JSON payload, omitting unset scope references."""
        payload = asdict(self)
        for key in ("api_id", "consumer_id", "service_id", "route_id"):
            if not payload[key]:
                del payload[key]
        return payload


@dataclass
class ConsumerPluginConfig:
    """A plugin config stored against a consumer, with its raw JSON body."""

    id: str
    body: str


class KongAdminClient:
    """HTTP client for the Kong Admin API."""

    def __init__(
        self,
        admin_url: str = "http://localhost:8001",
        timeout: int = 10,
        verify_tls: bool = True,
        admin_token: str = "",
        session: Optional[requests.Session] = None,
    ):
        self.admin_url = admin_url.rstrip("/")
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.session = session or requests.Session()
        if admin_token:
            self.session.headers["Kong-Admin-Token"] = admin_token

    @classmethod
    def from_config(cls, kong_config) -> "KongAdminClient":
        """Create a client from a KongConfig."""
        return cls(
            admin_url=kong_config.admin_url,
            timeout=kong_config.timeout,
            verify_tls=kong_config.verify_tls,
            admin_token=kong_config.admin_token,
        )

    def plugins(self) -> "PluginsAdmin":
        return PluginsAdmin(self)

    def consumers(self) -> "ConsumersAdmin":
        return ConsumersAdmin(self)

    def request(
        self,
        operation: str,
        method: str,
        endpoint: str,
        allow_not_found: bool = False,
        request_body: Any = None,
        **kwargs,
    ) -> Optional[requests.Response]:
        """
        Make an HTTP request to the admin API.

        Args:
            operation: Operation name used in error messages
            method: HTTP method
            endpoint: Path below the admin URL
            allow_not_found: Return None instead of raising on 404
            request_body: Outbound request attached to errors for diagnostics

        Returns:
            The response, or None for an allowed 404.

        Raises:
            RemoteError: On transport failure or an error status.
        """
        url = f"{self.admin_url}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, timeout=self.timeout, verify=self.verify_tls, **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise RemoteError(operation, str(e), request=request_body) from e

        if response.status_code == 404 and allow_not_found:
            return None

        if not response.ok:
            raise RemoteError(
                operation,
                f"status {response.status_code}: {response.text}",
                request=request_body,
                status=response.status_code,
            )
        return response


class PluginsAdmin:
    """Operations on /plugins."""

    def __init__(self, client: KongAdminClient):
        self.client = client

    def create(self, plugin_request: PluginRequest) -> Dict[str, Any]:
        payload = plugin_request.to_payload()
        response = self.client.request(
            "create plugin", "POST", "/plugins", request_body=payload, json=payload
        )
        return response.json()

    def update_by_id(self, plugin_id: str, plugin_request: PluginRequest) -> Dict[str, Any]:
        payload = plugin_request.to_payload()
        response = self.client.request(
            "update plugin",
            "PATCH",
            f"/plugins/{plugin_id}",
            request_body=payload,
            json=payload,
        )
        return response.json()

    def get_by_id(self, plugin_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a plugin, returning None if it does not exist."""
        response = self.client.request(
            "get plugin", "GET", f"/plugins/{plugin_id}", allow_not_found=True
        )
        if response is None:
            return None
        return response.json()

    def delete_by_id(self, plugin_id: str) -> None:
        self.client.request("delete plugin", "DELETE", f"/plugins/{plugin_id}")


class ConsumersAdmin:
    """Operations on plugin configs stored under /consumers."""

    def __init__(self, client: KongAdminClient):
        self.client = client

    def create_plugin_config(
        self, consumer_id: str, plugin_name: str, payload: str
    ) -> Optional[ConsumerPluginConfig]:
        """
        Store a plugin config for a consumer.

        The payload is sent as JSON when it is a JSON document, otherwise as
        a form body of key=value pairs.
        """
        try:
            json.loads(payload)
            content_type = "application/json"
        except ValueError:
            content_type = "application/x-www-form-urlencoded"

        response = self.client.request(
            "create consumer plugin config",
            "POST",
            f"/consumers/{consumer_id}/{plugin_name}",
            request_body=payload,
            data=payload.encode("utf-8"),
            headers={"Content-Type": content_type},
        )
        return _consumer_plugin_config(response)

    def get_plugin_config(
        self, consumer_id: str, plugin_name: str, config_id: str
    ) -> Optional[ConsumerPluginConfig]:
        """Fetch a consumer plugin config, returning None if it does not exist."""
        response = self.client.request(
            "get consumer plugin config",
            "GET",
            f"/consumers/{consumer_id}/{plugin_name}/{config_id}",
            allow_not_found=True,
        )
        if response is None:
            return None
        return _consumer_plugin_config(response)

    def delete_plugin_config(
        self, consumer_id: str, plugin_name: str, config_id: str
    ) -> None:
        self.client.request(
            "delete consumer plugin config",
            "DELETE",
            f"/consumers/{consumer_id}/{plugin_name}/{config_id}",
        )


def _consumer_plugin_config(response: requests.Response) -> Optional[ConsumerPluginConfig]:
    body = response.text
    if not body:
        return None
    try:
        data = response.json()
    except ValueError as e:
        raise RemoteError(
            "read consumer plugin config", f"response is not JSON: {e}"
        ) from e
    if not isinstance(data, dict):
        raise RemoteError("read consumer plugin config", "response is not an object")
    return ConsumerPluginConfig(id=str(data.get("id", "")), body=body)
