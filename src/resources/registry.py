"""
Resource Registry - Registration and lookup of resource handlers.
"""

import logging
from typing import Dict, Optional, Type

from resources.base import ResourceHandler
from schema import to_json_schema
from validation import validate_openapi_schema

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Central registry for resource handlers.

    Maps resource kind names to handler instances.
    """

    def __init__(self):
        self._handlers: Dict[str, ResourceHandler] = {}

    def register_handler(self, handler_class: Type[ResourceHandler]) -> None:
        """
        Register a resource handler class.

        Args:
            handler_class: The ResourceHandler subclass to register

        Raises:
            ValueError: If the handler's attribute table is not a valid schema
        """
        handler = handler_class()
        name = handler.name

        is_valid, error = validate_openapi_schema(to_json_schema(handler.attributes))
        if not is_valid:
            raise ValueError(f"Resource handler '{name}' has an invalid schema: {error}")

        if name in self._handlers:
            logger.warning(f"Overwriting existing resource handler: {name}")

        self._handlers[name] = handler
        logger.debug(f"Registered resource handler: {name}")

    def get_handler(self, name: str) -> ResourceHandler:
        """
        Get the handler for a resource kind.

        Raises:
            ValueError: If the kind is not registered
        """
        if name not in self._handlers:
            available = ", ".join(self._handlers.keys()) or "none"
            raise ValueError(
                f"Unknown resource kind: {name}. Available kinds: {available}"
            )
        return self._handlers[name]

    def has_handler(self, name: str) -> bool:
        """Check if a resource kind is registered."""
        return name in self._handlers

    def list_handlers(self) -> list[str]:
        """List all registered resource kinds."""
        return list(self._handlers.keys())


# Global registry instance
_registry: Optional[ResourceRegistry] = None


def get_registry() -> ResourceRegistry:
    """Get the global resource registry singleton."""
    global _registry
    if _registry is None:
        _registry = ResourceRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (mainly for testing)."""
    global _registry
    _registry = None


def register_builtin_handlers() -> ResourceRegistry:
    """Register the handlers shipped with the operator."""
    from resources.consumer_plugin_config import ConsumerPluginConfigHandler
    from resources.plugin import PluginHandler

    registry = get_registry()
    for handler_class in (PluginHandler, ConsumerPluginConfigHandler):
        if not registry.has_handler(handler_class().name):
            registry.register_handler(handler_class)
    return registry
