"""
Managed Kong resources.

Each resource kind has a handler implementing its lifecycle against the
Kong Admin API.
"""

from resources.base import ResourceData, ResourceHandler
from resources.registry import (
    ResourceRegistry,
    get_registry,
    register_builtin_handlers,
)

__all__ = [
    "ResourceData",
    "ResourceHandler",
    "ResourceRegistry",
    "get_registry",
    "register_builtin_handlers",
]
