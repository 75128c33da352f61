"""
Unified input adapter.

Normalizes Swagger 2.0 and OpenAPI 3.0 documents into one shape so the
rest of the pipeline does not care which version it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlparse


class DataType(str, Enum):
    """Document flavour, selects the client config strategy."""

    SWAGGER = "swagger"  # Swagger 2.0
    OPENAPI = "openapi"  # OpenAPI 3.x


@dataclass
class UnifiedInputs:
    """Version-independent view of a document."""

    data_type: DataType = DataType.SWAGGER
    base_path: str = ""
    paths: dict[str, Any] = field(default_factory=dict)
    schemas: dict[str, Any] = field(default_factory=dict)
    parameters: dict[str, Any] = field(default_factory=dict)
    responses: dict[str, Any] = field(default_factory=dict)
    request_bodies: dict[str, Any] = field(default_factory=dict)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _base_path_from_servers(servers: Any) -> str:
    """Take the path of the first server URL ("https://x.io/v1" -> "/v1")."""
    if not isinstance(servers, list) or not servers:
        return ""
    first = servers[0]
    url = first.get("url") if isinstance(first, dict) else None
    if not isinstance(url, str):
        return ""
    return urlparse(url).path.rstrip("/")


def get_data_type(document: dict[str, Any]) -> DataType:
    """Detect the document flavour from its version key."""
    if "openapi" in document:
        return DataType.OPENAPI
    return DataType.SWAGGER


def get_unified_inputs(document: dict[str, Any]) -> UnifiedInputs:
    """
    Normalize a Swagger 2.0 or OpenAPI 3.0 document.

    Args:
        document: The parsed document

    Returns:
        UnifiedInputs with the schema dictionary and shared components
    """
    document = _as_dict(document)
    data_type = get_data_type(document)

    if data_type == DataType.SWAGGER:
        return UnifiedInputs(
            data_type=data_type,
            base_path=document.get("basePath") or "",
            paths=_as_dict(document.get("paths")),
            schemas=_as_dict(document.get("definitions")),
            parameters=_as_dict(document.get("parameters")),
            responses=_as_dict(document.get("responses")),
        )

    components = _as_dict(document.get("components"))
    return UnifiedInputs(
        data_type=data_type,
        base_path=_base_path_from_servers(document.get("servers")),
        paths=_as_dict(document.get("paths")),
        schemas=_as_dict(components.get("schemas")),
        parameters=_as_dict(components.get("parameters")),
        responses=_as_dict(components.get("responses")),
        request_bodies=_as_dict(components.get("requestBodies")),
    )
