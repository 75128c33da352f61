"""
Declaration registry.

Holds every named declaration produced while resolving one document,
the table of shared references, and the name table used to rename
declarations after resolution.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..utils import strip_enum_suffix
from .types import ObjectType, Reference, TypeExpression

logger = logging.getLogger(__name__)


class DeclKind(str, Enum):
    """Kind of an emitted declaration."""

    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"


@dataclass(frozen=True)
class Declaration:
    """A named top-level declaration."""

    id: str
    kind: DeclKind
    body: TypeExpression

    @property
    def renders_as_interface(self) -> bool:
        return self.kind == DeclKind.INTERFACE and isinstance(self.body, ObjectType) and self.body.can_render_as_interface


class DeclarationRegistry:
    """Per-run table of declarations and references."""

    def __init__(self):
        self._declarations: dict[str, Declaration] = {}
        self._references: dict[str, Reference] = {}

        # id -> display name, filled by rename_all_references
        self._names: dict[str, str] = {}

        # Raw shared components (parameters, responses, requestBodies)
        self._data: dict[str, Any] = {}

        # id or display name -> number of declarations lost to or clashing with another
        self.collisions: Counter[str] = Counter()

    def register_declaration(self, declaration_id: str, kind: DeclKind, body: TypeExpression) -> None:
        """Register a declaration. The last registration for an id wins."""
        if declaration_id in self._declarations:
            self.collisions[declaration_id] += 1
            logger.debug("Declaration %r registered again, replacing previous %s", declaration_id, self._declarations[declaration_id].kind.value)
        self._declarations[declaration_id] = Declaration(id=declaration_id, kind=kind, body=body)

    def get_declarations(self) -> Mapping[str, Declaration]:
        """Return a read-only snapshot of the registered declarations."""
        return MappingProxyType(dict(self._declarations))

    def get_declaration(self, declaration_id: str) -> Declaration | None:
        return self._declarations.get(declaration_id)

    def reference(self, declaration_id: str) -> Reference:
        """Return the shared Reference for an id, creating it on first use."""
        ref = self._references.get(declaration_id)
        if ref is None:
            ref = Reference(declaration_id)
            self._references[declaration_id] = ref
        return ref

    @property
    def references(self) -> Mapping[str, Reference]:
        return MappingProxyType(self._references)

    @property
    def collision_count(self) -> int:
        return sum(self.collisions.values())

    def rename_all_references(self, mapper: Callable[[str], str]) -> None:
        """Apply a rename to every declaration and reference id.

        The mapper always receives the original id, so applying the same
        mapper twice gives the same names.
        """
        ids = set(self._declarations) | set(self._references)
        for declaration_id in ids:
            self._names[declaration_id] = mapper(declaration_id)
        logger.debug("Renamed %d declarations and references", len(ids))

    def name_of(self, declaration_id: str) -> str:
        """Return the display name for an id."""
        return self._names.get(declaration_id, strip_enum_suffix(declaration_id))

    def record_name_collisions(self) -> dict[str, list[str]]:
        """Count distinct declarations that render under the same name.

        Ids differ from display names (enum suffix, rename mapper), so two
        declarations can survive registration and still clash in the output.
        Each extra declaration per name is added to ``collisions``.

        Returns:
            Display name -> clashing declaration ids
        """
        by_name: dict[str, list[str]] = defaultdict(list)
        for declaration_id in self._declarations:
            by_name[self.name_of(declaration_id)].append(declaration_id)

        clashes = {name: ids for name, ids in by_name.items() if len(ids) > 1}
        for name, ids in clashes.items():
            self.collisions[name] += len(ids) - 1
            logger.debug("Declarations %s all render as %r", ", ".join(ids), name)
        return clashes

    def set_data(self, key_path: list[str], value: Any) -> None:
        """Store raw document data under a key path (e.g. ["parameters"])."""
        if not key_path:
            return
        target = self._data
        for key in key_path[:-1]:
            target = target.setdefault(key, {})
        target[key_path[-1]] = value or {}

    def get_data(self, key_path: list[str]) -> Any:
        """Look up raw document data by key path; None when missing."""
        target: Any = self._data
        for key in key_path:
            if not isinstance(target, dict) or key not in target:
                return None
            target = target[key]
        return target
