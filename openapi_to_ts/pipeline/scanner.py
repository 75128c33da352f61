"""
Document scanner.

Resolves every top-level schema of a document into the declaration
registry, extracts client configs from its paths and optionally applies
the interface/type name prefix convention.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..utils import (
    add_prefix_for_interface,
    add_prefix_for_type,
    capitalize,
    is_object_shaped,
    should_use_extends,
    strip_enum_suffix,
)
from .adapter import get_unified_inputs
from .client_configs import ClientConfig, get_client_configs
from .registry import Declaration, DeclarationRegistry, DeclKind
from .resolver import ResolveContext, SchemaResolver
from .types import iter_references

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Everything downstream rendering needs."""

    client_configs: list[ClientConfig] = field(default_factory=list)
    declarations: Mapping[str, Declaration] = field(default_factory=dict)
    registry: DeclarationRegistry = field(default_factory=DeclarationRegistry)

    # Referenced ids with no declaration
    dangling_references: list[str] = field(default_factory=list)


def get_declaration_kind(schema: Any) -> DeclKind:
    """Interface for object-shaped schemas, type alias for everything else."""
    if not isinstance(schema, dict):
        return DeclKind.TYPE
    if is_object_shaped(schema) or should_use_extends(schema.get("allOf")):
        return DeclKind.INTERFACE
    return DeclKind.TYPE


def _prefixed_name(declaration: Declaration | None, declaration_id: str) -> str:
    """Prefix by the form the declaration is rendered in, not by its kind."""
    name = strip_enum_suffix(declaration_id)
    if declaration is None or declaration.kind == DeclKind.ENUM:
        return name
    if declaration.renders_as_interface:
        return add_prefix_for_interface(name)
    return add_prefix_for_type(name)


def find_dangling_references(registry: DeclarationRegistry, client_configs: list[ClientConfig] | None = None) -> list[str]:
    """List referenced ids that have no registered declaration."""
    declarations = registry.get_declarations()
    referenced = set()
    for declaration in declarations.values():
        referenced.update(ref.target_id for ref in iter_references(declaration.body))
    for config in client_configs or []:
        referenced.update(ref.target_id for ref in iter_references(config.request_type))
        if config.response_type is not None:
            referenced.update(ref.target_id for ref in iter_references(config.response_type))
    return sorted(ref_id for ref_id in referenced if ref_id not in declarations)


def scan(document: dict[str, Any], type_with_prefix: bool = False) -> ScanResult:
    """
    Resolve a Swagger 2.0 or OpenAPI 3.0 document.

    Args:
        document: The parsed document
        type_with_prefix: Prefix interfaces with "I" and type aliases with "T"

    Returns:
        ScanResult with client configs and declarations
    """
    registry = DeclarationRegistry()
    resolver = SchemaResolver(registry)
    inputs = get_unified_inputs(document)

    for key, schema in inputs.schemas.items():
        name = capitalize(key)
        body = resolver.resolve(schema, ResolveContext(name=name, prop_key=key))
        registry.register_declaration(name, get_declaration_kind(schema), body)

    registry.set_data(["parameters"], inputs.parameters)
    registry.set_data(["responses"], inputs.responses)
    registry.set_data(["requestBodies"], inputs.request_bodies)

    client_configs = get_client_configs(inputs.paths, resolver, inputs.data_type, inputs.base_path)

    declarations = registry.get_declarations()
    if type_with_prefix:
        registry.rename_all_references(lambda declaration_id: _prefixed_name(declarations.get(declaration_id), declaration_id))

    for name, ids in registry.record_name_collisions().items():
        logger.warning("Declarations %s are all emitted as %r", ", ".join(sorted(ids)), name)

    if registry.collision_count:
        logger.warning("%d declaration name collisions: %s", registry.collision_count, ", ".join(sorted(registry.collisions)))

    dangling = find_dangling_references(registry, client_configs)
    for ref_id in dangling:
        logger.warning("Reference to undeclared type %r", ref_id)

    logger.debug("Scanned %d declarations and %d operations", len(declarations), len(client_configs))
    return ScanResult(
        client_configs=client_configs,
        declarations=declarations,
        registry=registry,
        dangling_references=dangling,
    )
