"""
Resource manifests - declared resources loaded from YAML or JSON files.

A manifest names the resource kind, optionally the id of an existing
remote object, and the declared attributes:

    kind: kong_plugin
    spec:
      name: rate-limiting
      service_id: 7d4e...
      config:
        minute: "10"
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from resources.registry import register_builtin_handlers


class ResourceManifest(BaseModel):
    """A single declared resource."""

    kind: str = Field(..., min_length=1)
    id: Optional[str] = None
    spec: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        registry = register_builtin_handlers()
        if not registry.has_handler(v):
            available = ", ".join(registry.list_handlers())
            raise ValueError(f"Unknown resource kind: {v}. Available kinds: {available}")
        return v


def load_manifest(filename: str) -> ResourceManifest:
    """
    Read a manifest from a YAML (.yaml/.yml) or JSON file.

    Raises:
        pydantic.ValidationError: If the manifest is malformed.
    """
    with open(filename, "r") as f:
        if Path(filename).suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return ResourceManifest.model_validate(data or {})
