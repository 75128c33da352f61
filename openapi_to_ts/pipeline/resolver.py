"""
Schema resolver that turns raw schema nodes into type expressions.

Walks a raw (parsed JSON) schema depth-first. Named enums found on the way
are registered in the declaration registry; ``$ref`` nodes become shared
references, so self-referential schemas terminate.

Malformed or under-specified schemas never raise: they degrade to an
empty or partial type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from ..utils import (
    capitalize,
    get_ref_id,
    is_number,
    is_object_shaped,
    make_enum_id,
    should_use_extends,
    with_optional_name,
)
from .registry import DeclarationRegistry, DeclKind
from .types import (
    FREE_FORM,
    ArrayType,
    EnumType,
    ObjectType,
    Primitive,
    Reference,
    TypeExpression,
    UnionType,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveContext:
    """Naming context for a schema node.

    Attributes:
        name: Name of the enclosing declaration
        prop_key: Key of the property being resolved
    """

    name: str | None = None
    prop_key: str | None = None

    def for_property(self, prop_key: str) -> ResolveContext:
        return replace(self, prop_key=prop_key)


class SchemaResolver:
    """Resolves raw schemas against a declaration registry."""

    def __init__(self, registry: DeclarationRegistry):
        """
        Initialize the resolver.

        Args:
            registry: Registry receiving enum declarations and references
        """
        self.registry = registry
        self._anonymous_enums = 0

    def resolve(self, schema: dict[str, Any] | None, context: ResolveContext | None = None) -> TypeExpression:
        """
        Resolve a raw schema node.

        Keys are checked in a fixed priority order, so schemas that combine
        keywords resolve deterministically.

        Args:
            schema: The raw schema dictionary
            context: Enclosing declaration name and property key

        Returns:
            The resolved type expression
        """
        if not isinstance(schema, dict):
            if schema is not None:
                logger.debug("Schema node of type %s resolved to any", type(schema).__name__)
            return Primitive("")
        context = context or ResolveContext()

        if "oneOf" in schema:
            return self._resolve_union(schema["oneOf"], context)

        if "anyOf" in schema:
            return self._resolve_union(schema["anyOf"], context)

        if "$ref" in schema:
            return self._resolve_ref(schema["$ref"])

        if "items" in schema:
            return self._resolve_array(schema, context)

        if "enum" in schema:
            return self._resolve_enum(schema, context)

        if schema.get("type") == "object" or "properties" in schema or "allOf" in schema:
            return self._resolve_object(schema, context)

        return self._resolve_primitive(schema.get("type"))

    def _resolve_union(self, members: Any, context: ResolveContext) -> UnionType:
        """Resolve oneOf/anyOf members with the same naming context."""
        if not isinstance(members, list):
            return UnionType()
        return UnionType(tuple(self.resolve(member, context) for member in members))

    def _resolve_ref(self, ref: Any) -> Reference:
        """Resolve a $ref to the shared Reference of its target."""
        target_id = capitalize(get_ref_id(ref if isinstance(ref, str) else None))
        return self.registry.reference(target_id)

    def _resolve_array(self, schema: dict[str, Any], context: ResolveContext) -> TypeExpression:
        """Resolve items, keeping the parent's naming context."""
        items = schema["items"]

        # Tuple form
        if isinstance(items, list):
            return ArrayType(tuple(self.resolve(item, context) for item in items))

        item_type = self.resolve(items, context)

        # items without type: array is tolerated and yields the item type
        if schema.get("type") == "array":
            return ArrayType(item_type)
        return item_type

    def _resolve_enum(self, schema: dict[str, Any], context: ResolveContext) -> TypeExpression:
        """Register an enum declaration and return its use-site type."""
        values = schema["enum"]
        if not isinstance(values, list):
            logger.debug("enum of %s is not a list, treating it as empty", context.name or "anonymous schema")
            values = []
        enum_id = make_enum_id(context.name, context.prop_key)
        if not enum_id:
            self._anonymous_enums += 1
            enum_id = make_enum_id(f"Enum{self._anonymous_enums}", None)
            logger.debug("Enum without a naming context registered as %s", enum_id)

        self.registry.register_declaration(enum_id, DeclKind.ENUM, EnumType(enum_id, tuple(values)))

        # Numeric enums cannot be used through keyof typeof
        if any(is_number(value) for value in values):
            return self.registry.reference(enum_id)
        return EnumType(enum_id)

    def _resolve_object(self, schema: dict[str, Any], context: ResolveContext) -> ObjectType:
        """Resolve an object schema, including allOf composition."""
        all_of = schema.get("allOf")
        if all_of:
            return self._resolve_all_of(schema, all_of, context)

        if schema.get("properties") is None:
            return ObjectType(FREE_FORM)

        return ObjectType(self._resolve_properties(schema, context))

    def _resolve_properties(self, schema: dict[str, Any], context: ResolveContext) -> dict[str, TypeExpression]:
        """Resolve the properties of an object schema, marking optional ones."""
        properties = schema.get("properties")
        if not isinstance(properties, dict):
            return {}

        required = schema.get("required")
        if not isinstance(required, list):
            required = []

        resolved = {}
        for key, prop_schema in properties.items():
            resolved[with_optional_name(key, key in required)] = self.resolve(prop_schema, context.for_property(key))
        return resolved

    def _resolve_all_of(self, schema: dict[str, Any], all_of: Any, context: ResolveContext) -> ObjectType:
        """Resolve an allOf composition.

        $ref members are collected as extends references; inline object
        members and the schema's own properties are merged. Any other
        member is kept whole and intersected with the rest.
        """
        if not isinstance(all_of, list):
            logger.debug("Ignoring allOf that is not a list in %s", context.name or "anonymous schema")
            all_of = []
        members = [member for member in all_of if isinstance(member, dict)]

        refs: list[Reference] = []
        properties: dict[str, TypeExpression] = {}
        intersects: list[TypeExpression] = []
        for member in members:
            if "$ref" in member:
                refs.append(self._resolve_ref(member["$ref"]))
            elif is_object_shaped(member) or "allOf" in member:
                nested = self._resolve_object(member, context)
                refs.extend(ref for ref in nested.extends_refs if ref not in refs)
                intersects.extend(nested.intersects)
                if not nested.is_free_form:
                    properties.update(nested.properties)
            elif member:
                # Primitives, unions and arrays cannot be merged into an object
                intersects.append(self.resolve(member, context))

        properties.update(self._resolve_properties(schema, context))

        return ObjectType(
            properties,
            extends_refs=tuple(refs),
            use_extends=should_use_extends(all_of),
            intersects=tuple(intersects),
        )

    def _resolve_primitive(self, type_name: Any) -> TypeExpression:
        """Resolve a primitive type keyword."""
        if isinstance(type_name, list):
            return UnionType(tuple(self._resolve_primitive(name) for name in type_name))

        if type_name == "integer":
            return Primitive("number")

        if type_name == "file":
            return Primitive("File")

        return Primitive(type_name if isinstance(type_name, str) else "")
