"""
Type expression definitions.

These nodes represent a resolved target type expression. They are built
by the schema resolver, stored as declaration bodies in the registry and
turned into TypeScript text by the backend. All nodes are immutable once
constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class _FreeForm(Enum):
    """Marker for an object schema that declares no properties."""

    FREE_FORM = "free_form"


# Renders as an open index signature type
FREE_FORM = _FreeForm.FREE_FORM


@dataclass(frozen=True)
class Primitive:
    """A primitive type ("string", "number", "boolean", "null", "File")."""

    name: str = ""


@dataclass(frozen=True)
class Reference:
    """A pointer to a declaration in the registry, by id."""

    target_id: str = ""


@dataclass(frozen=True)
class ObjectType:
    """An object type.

    Property names carry the optional marker (``"tag?"``), which is the
    only place optionality is recorded.
    """

    properties: dict[str, TypeExpression] | _FreeForm = field(default_factory=dict)

    # allOf references, rendered as "extends" or as an intersection
    extends_refs: tuple[Reference, ...] = ()
    use_extends: bool = False

    # Non-object allOf members (primitives, unions, arrays), always intersected
    intersects: tuple[TypeExpression, ...] = ()

    @property
    def is_free_form(self) -> bool:
        return self.properties is FREE_FORM

    @property
    def can_render_as_interface(self) -> bool:
        """Whether this object can be declared with "interface" instead of "type"."""
        return not self.intersects and (not self.extends_refs or self.use_extends)


@dataclass(frozen=True)
class ArrayType:
    """An array (single element type) or a fixed-length tuple."""

    element: TypeExpression | tuple[TypeExpression, ...] = Primitive()

    @property
    def is_tuple(self) -> bool:
        return isinstance(self.element, tuple)


@dataclass(frozen=True)
class EnumType:
    """An enum, either the declaration body or a ``keyof typeof`` use."""

    id: str = ""
    values: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class UnionType:
    """A oneOf or anyOf union."""

    members: tuple[TypeExpression, ...] = ()


TypeExpression = Primitive | Reference | ObjectType | ArrayType | EnumType | UnionType


def iter_references(expr: TypeExpression):
    """Yield every Reference reachable from a type expression."""
    if isinstance(expr, Reference):
        yield expr
    elif isinstance(expr, ObjectType):
        yield from expr.extends_refs
        for member in expr.intersects:
            yield from iter_references(member)
        if not expr.is_free_form:
            for prop_type in expr.properties.values():
                yield from iter_references(prop_type)
    elif isinstance(expr, ArrayType):
        elements = expr.element if expr.is_tuple else (expr.element,)
        for element in elements:
            yield from iter_references(element)
    elif isinstance(expr, UnionType):
        for member in expr.members:
            yield from iter_references(member)
