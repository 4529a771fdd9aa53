"""
Resource Handler Base - Abstract interface for managed Kong resources.

A handler owns the create/read/update/delete lifecycle of one resource kind
against the Kong Admin API. The caller keeps the ResourceData between calls;
handlers hold no state of their own.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from admin import KongAdminClient
from schema import Attribute
from validation import validate_resource_spec


@dataclass
class ResourceData:
    """Identity and attributes of one managed resource."""

    id: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_string(self, name: str) -> str:
        return self.attributes.get(name) or ""

    def get_map(self, name: str) -> Optional[Dict[str, Any]]:
        value = self.attributes.get(name)
        return dict(value) if value else None

    @property
    def exists(self) -> bool:
        return bool(self.id)


class ResourceHandler(ABC):
    """
    Abstract base class for resource handlers.

    Each handler declares its attribute table and implements the standard
    lifecycle operations. Create and update end with a read so the stored
    attributes always reflect what Kong reports.
    """

    # Whether mutable attributes can be changed without re-creating
    supports_update: bool = True

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique resource kind (e.g., 'kong_plugin')."""
        pass

    @property
    @abstractmethod
    def attributes(self) -> Sequence[Attribute]:
        """Attribute table for this resource kind."""
        pass

    def validate_spec(self, spec: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Validate declared attributes before any remote call.

        Returns:
            Tuple of (is_valid, error_message). If valid, error_message is None.
        """
        return validate_resource_spec(self.attributes, spec)

    @abstractmethod
    def create(self, data: ResourceData, client: KongAdminClient) -> None:
        """Create the remote object and set data.id."""
        pass

    @abstractmethod
    def read(self, data: ResourceData, client: KongAdminClient) -> None:
        """Refresh data.attributes from the remote object."""
        pass

    def update(self, data: ResourceData, client: KongAdminClient) -> None:
        """
        Replace the mutable attributes of the remote object.

        Handlers that set supports_update = False keep this default.
        """
        raise NotImplementedError(
            f"{self.name} does not support in-place update; it must be re-created"
        )

    @abstractmethod
    def delete(self, data: ResourceData, client: KongAdminClient) -> None:
        """Delete the remote object."""
        pass
