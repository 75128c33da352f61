"""
Client config extraction.

Turns the ``paths`` section of a document into request-function
signatures: operation id, method, url, a request type keyed by parameter
names and a response type. Parameter, request body and response
``$ref``s are followed through the registry's shared data table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..utils import capitalize, get_paths_from_ref, to_camel_case, with_optional_name
from .adapter import DataType
from .resolver import ResolveContext, SchemaResolver
from .types import ObjectType, Primitive, TypeExpression

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

JSON_MEDIA_TYPE = "application/json"
MULTIPART_MEDIA_TYPE = "multipart/form-data"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

# Property name of the body in a request type
REQUEST_BODY_KEY = "requestBody"


@dataclass
class ClientConfig:
    """Signature of one generated request function."""

    operation_id: str = ""
    method: str = "get"
    url: str = ""

    # Parameter names by location
    path_params: list[str] = field(default_factory=list)
    query_params: list[str] = field(default_factory=list)
    has_body: bool = False

    # Type of the single argument of the request function
    request_type: ObjectType = field(default_factory=ObjectType)

    # None when no 2xx response declares a schema
    response_type: TypeExpression | None = None

    content_type: str = ""
    deprecated: bool = False
    summary: str = ""


class ClientConfigExtractor:
    """Builds ClientConfigs for every operation of a document."""

    def __init__(self, resolver: SchemaResolver, data_type: DataType, base_path: str = ""):
        """
        Initialize the extractor.

        Args:
            resolver: Resolver sharing the document's registry
            data_type: Swagger 2.0 or OpenAPI 3.x
            base_path: Prefix for every operation url
        """
        self.resolver = resolver
        self.registry = resolver.registry
        self.data_type = data_type
        self.base_path = base_path or ""

    def extract(self, paths: dict[str, Any]) -> list[ClientConfig]:
        """Extract one ClientConfig per (path, method)."""
        configs = []
        for path, path_item in (paths or {}).items():
            if not isinstance(path_item, dict):
                continue
            shared_params = path_item.get("parameters") or []
            for method in HTTP_METHODS:
                operation = path_item.get(method)
                if not isinstance(operation, dict):
                    continue
                configs.append(self._build_config(path, method, operation, shared_params))
        return configs

    def _build_config(self, path: str, method: str, operation: dict[str, Any], shared_params: list[Any]) -> ClientConfig:
        operation_id = operation.get("operationId") or to_camel_case(f"{method} {path}")
        context = ResolveContext(name=capitalize(operation_id))

        config = ClientConfig(
            operation_id=operation_id,
            method=method,
            url=f"{self.base_path}{path}",
            deprecated=bool(operation.get("deprecated")),
            summary=operation.get("summary") or "",
        )

        properties: dict[str, TypeExpression] = {}
        form_fields: dict[str, TypeExpression] = {}
        form_required = False
        has_file = False

        for param in self._merge_parameters(shared_params, operation.get("parameters")):
            location = param.get("in")
            name = param.get("name") or ""
            required = bool(param.get("required")) or location == "path"

            if location == "body":
                properties[with_optional_name(REQUEST_BODY_KEY, required)] = self.resolver.resolve(param.get("schema"), context.for_property(name))
                config.has_body = True
                config.content_type = JSON_MEDIA_TYPE
            elif location == "formData":
                param_type = self._resolve_parameter(param, context.for_property(name))
                has_file = has_file or param_type == Primitive("File")
                form_fields[with_optional_name(name, required)] = param_type
                form_required = form_required or required
            elif location in ("path", "query"):
                properties[with_optional_name(name, required)] = self._resolve_parameter(param, context.for_property(name))
                if location == "path":
                    config.path_params.append(name)
                else:
                    config.query_params.append(name)

        if form_fields:
            properties[with_optional_name(REQUEST_BODY_KEY, form_required)] = ObjectType(form_fields)
            config.has_body = True
            config.content_type = MULTIPART_MEDIA_TYPE if has_file else self._first_consumes(operation, FORM_MEDIA_TYPE)

        if self.data_type == DataType.OPENAPI and "requestBody" in operation:
            self._apply_request_body(config, properties, operation["requestBody"], context)

        config.request_type = ObjectType(properties)
        config.response_type = self._resolve_response(operation.get("responses"), context.for_property("Response"))
        return config

    def _merge_parameters(self, shared_params: Any, operation_params: Any) -> list[dict[str, Any]]:
        """Merge path-level and operation-level parameters.

        Operation parameters override path parameters with the same
        name and location.
        """
        merged: dict[tuple[Any, Any], dict[str, Any]] = {}
        for params in (shared_params, operation_params):
            if not isinstance(params, list):
                continue
            for param in params:
                param = self._dereference(param)
                if not isinstance(param, dict):
                    continue
                merged[(param.get("name"), param.get("in"))] = param
        return list(merged.values())

    def _dereference(self, value: Any) -> Any:
        """Follow a $ref to shared document data, if the value is one."""
        if isinstance(value, dict) and isinstance(value.get("$ref"), str):
            target = self.registry.get_data(get_paths_from_ref(value["$ref"]))
            if target is None:
                logger.warning("Unresolved reference %s", value["$ref"])
            return target
        return value

    def _resolve_parameter(self, param: dict[str, Any], context: ResolveContext) -> TypeExpression:
        # OpenAPI 3 wraps the type in a schema; Swagger 2 puts it on the parameter
        if self.data_type == DataType.OPENAPI or "schema" in param:
            return self.resolver.resolve(param.get("schema"), context)
        return self.resolver.resolve(param, context)

    def _apply_request_body(self, config: ClientConfig, properties: dict[str, TypeExpression], request_body: Any, context: ResolveContext) -> None:
        body = self._dereference(request_body)
        if not isinstance(body, dict):
            return

        media_type, media = self._pick_media(body.get("content"))
        if media is None:
            return

        properties[with_optional_name(REQUEST_BODY_KEY, bool(body.get("required")))] = self.resolver.resolve(media.get("schema"), context.for_property(REQUEST_BODY_KEY))
        config.has_body = True
        config.content_type = media_type

    def _resolve_response(self, responses: Any, context: ResolveContext) -> TypeExpression | None:
        """Resolve the schema of the first successful response."""
        if not isinstance(responses, dict):
            return None

        codes = [code for code in responses if str(code).startswith("2")]
        for code in sorted(codes, key=str):
            response = self._dereference(responses[code])
            if not isinstance(response, dict):
                continue

            if self.data_type == DataType.OPENAPI:
                _, media = self._pick_media(response.get("content"))
                schema = media.get("schema") if media else None
            else:
                schema = response.get("schema")

            if schema is not None:
                return self.resolver.resolve(schema, context)
        return None

    @staticmethod
    def _pick_media(content: Any) -> tuple[str, dict[str, Any] | None]:
        """Pick the preferred media type of an OpenAPI 3 content map."""
        if not isinstance(content, dict) or not content:
            return "", None
        for media_type in (JSON_MEDIA_TYPE, MULTIPART_MEDIA_TYPE, FORM_MEDIA_TYPE):
            if isinstance(content.get(media_type), dict):
                return media_type, content[media_type]
        media_type = next(iter(content))
        media = content[media_type]
        return media_type, media if isinstance(media, dict) else None

    @staticmethod
    def _first_consumes(operation: dict[str, Any], default: str) -> str:
        consumes = operation.get("consumes")
        if isinstance(consumes, list) and consumes:
            return consumes[0]
        return default


def get_client_configs(paths: dict[str, Any], resolver: SchemaResolver, data_type: DataType, base_path: str = "") -> list[ClientConfig]:
    """Extract the client configs of a document."""
    return ClientConfigExtractor(resolver, data_type, base_path).extract(paths)
