"""
TypeScript code generation backend.

Renders resolved type expressions, registry declarations and client
configs to TypeScript source text using Jinja2 templates.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2

from ...utils import is_number, is_number_like, quote_key, set_deprecated, split_optional_name, to_camel_case
from ..client_configs import ClientConfig
from ..registry import Declaration, DeclarationRegistry, DeclKind
from ..types import (
    ArrayType,
    EnumType,
    ObjectType,
    Primitive,
    Reference,
    TypeExpression,
    UnionType,
)

FREE_FORM_INDEX = "[key: string]"


class TypeScriptBackend:
    """Generates TypeScript from a populated declaration registry."""

    # Template directory name
    TEMPLATE_LANG = "typescript"

    # File extension
    FILE_EXTENSION = "ts"

    def __init__(self, registry: DeclarationRegistry, action_creator_import: str = ""):
        """
        Initialize the backend.

        Args:
            registry: Registry used to look up display names
            action_creator_import: Import line placed at the top of the output
        """
        self.registry = registry
        self.action_creator_import = action_creator_import
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.interface_template = self.jinja_env.get_template(f"interface.{self.FILE_EXTENSION}.jinja2")
        self.type_template = self.jinja_env.get_template(f"type.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")
        self.client_template = self.jinja_env.get_template(f"client.{self.FILE_EXTENSION}.jinja2")

    def generate(self, client_configs: list[ClientConfig], declarations: dict[str, Declaration], generation_comment: str = "") -> str:
        """
        Generate a complete TypeScript module.

        Args:
            client_configs: Request functions to emit
            declarations: Declarations to emit, sorted by id
            generation_comment: Optional header comment

        Returns:
            Generated code as a string
        """
        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            action_creator_import=self.action_creator_import,
        ).strip()
        sections = [self.render_client(config) for config in client_configs]
        sections.extend(self.render_declaration(declarations[key]) for key in sorted(declarations))

        body = "\n\n".join(sections)
        if prefix:
            return f"{prefix}\n\n{body}\n"
        return f"{body}\n"

    def translate_type(self, expr: TypeExpression) -> str:
        """
        Translate a type expression to an inline TypeScript type.

        Args:
            expr: The type expression

        Returns:
            TypeScript type string
        """
        if isinstance(expr, Primitive):
            # Unspecified schemas degrade to any
            return expr.name or "any"

        if isinstance(expr, Reference):
            return self.registry.name_of(expr.target_id)

        if isinstance(expr, EnumType):
            if expr.values is not None:
                return " | ".join(self._literal(value) for value in expr.values) or "never"
            return f"keyof typeof {self.registry.name_of(expr.id)}"

        if isinstance(expr, ArrayType):
            if expr.is_tuple:
                return "[" + ", ".join(self.translate_type(element) for element in expr.element) + "]"
            return f"{self._wrap(expr.element)}[]"

        if isinstance(expr, UnionType):
            if not expr.members:
                return "any"
            return " | ".join(self.translate_type(member) for member in expr.members)

        if isinstance(expr, ObjectType):
            return self._translate_object(expr)

        raise TypeError(f"Unknown type expression: {expr!r}")

    def _translate_object(self, expr: ObjectType) -> str:
        """Translate an object inline; allOf references and members become an intersection."""
        if expr.is_free_form:
            body = f"{{ {FREE_FORM_INDEX}: any }}"
        else:
            members = [f"{key}: {value};" for key, value in self._property_lines(expr)]
            body = "{ " + " ".join(members) + " }" if members else "{}"

        if not expr.extends_refs and not expr.intersects:
            return body

        parts = [self.translate_type(ref) for ref in expr.extends_refs]
        parts.extend(self._wrap_intersected(member) for member in expr.intersects)
        if expr.is_free_form or expr.properties:
            parts.append(body)
        return " & ".join(parts)

    def _wrap_intersected(self, expr: TypeExpression) -> str:
        """Parenthesize unions, which bind looser than "&"."""
        text = self.translate_type(expr)
        if isinstance(expr, UnionType) and len(expr.members) > 1:
            return f"({text})"
        return text

    def _wrap(self, expr: TypeExpression) -> str:
        """Parenthesize types that bind looser than the array suffix."""
        text = self.translate_type(expr)
        needs_parens = (
            (isinstance(expr, UnionType) and len(expr.members) > 1)
            or (isinstance(expr, EnumType) and expr.values is None)
            or (isinstance(expr, ObjectType) and bool(expr.extends_refs or expr.intersects))
        )
        return f"({text})" if needs_parens else text

    def _property_lines(self, expr: ObjectType) -> list[tuple[str, str]]:
        """Sorted (quoted key, type) pairs of an object's properties."""
        keys = sorted(expr.properties, key=lambda k: split_optional_name(k)[0])
        return [(quote_key(key), self.translate_type(expr.properties[key])) for key in keys]

    def render_declaration(self, declaration: Declaration) -> str:
        """
        Render one registry declaration.

        Args:
            declaration: The declaration

        Returns:
            TypeScript declaration source
        """
        name = self.registry.name_of(declaration.id)
        body = declaration.body

        if declaration.kind == DeclKind.ENUM and isinstance(body, EnumType) and body.values is not None:
            return self._render_enum(name, body)

        if declaration.renders_as_interface:
            if body.is_free_form:
                properties = [{"key": FREE_FORM_INDEX, "type": "any"}]
            else:
                properties = [{"key": key, "type": type_str} for key, type_str in self._property_lines(body)]
            extends = [self.translate_type(ref) for ref in body.extends_refs] if body.use_extends else []
            return self.interface_template.render(name=name, extends=extends, properties=properties)

        return self.type_template.render(name=name, type=self.translate_type(body))

    def _render_enum(self, name: str, body: EnumType) -> str:
        if any(is_number(value) for value in body.values):
            return self.type_template.render(name=name, type=self.translate_type(body))

        values = [value if isinstance(value, str) else json.dumps(value) for value in body.values]
        members = [self._literal(value) for value in values]

        # Enum members cannot have numeric names, a const object keeps keyof typeof working
        as_const = any(is_number_like(value) for value in values)
        return self.enum_template.render(name=name, members=members, as_const=as_const)

    def render_client(self, config: ClientConfig) -> str:
        """
        Render a request function for one operation.

        Args:
            config: The client config

        Returns:
            TypeScript source of the request function
        """
        variables = {}
        for key in config.request_type.properties:
            bare, _ = split_optional_name(key)
            variables[bare] = bare if bare.isidentifier() else (to_camel_case(bare) or f"arg{len(variables)}")

        url = config.url
        for name in config.path_params:
            url = url.replace(f"{{{name}}}", f"${{{variables.get(name, name)}}}")

        params = [self._binding(name, variables.get(name, name)) for name in config.query_params]
        args = [self._binding(bare, variable) for bare, variable in variables.items()]
        response_type = self.translate_type(config.response_type) if config.response_type is not None else "void"

        return self.client_template.render(
            operation_id=config.operation_id,
            doc_comment=set_deprecated(config.summary or config.operation_id).strip() if config.deprecated else "",
            summary=config.summary,
            request_type=self.translate_type(config.request_type),
            response_type=response_type,
            args=args,
            url=url,
            method=config.method,
            params=params,
            body_variable=variables.get("requestBody") if config.has_body else None,
            content_type=config.content_type,
        )

    @staticmethod
    def _binding(key: str, variable: str) -> str:
        """Object shorthand when possible, else an explicit key binding."""
        if key == variable:
            return key
        return f"{quote_key(key)}: {variable}"

    @staticmethod
    def _literal(value: Any) -> str:
        """Format a JSON value as a TypeScript literal."""
        if isinstance(value, str):
            return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
        return json.dumps(value)
