"""
Utility functions for the OpenAPI to TypeScript generator.

Pure helpers for deriving declaration names, optional-field markers and
reference paths from schema keys and ``$ref`` strings. None of them raise
on missing input.
"""

from __future__ import annotations

import re
from typing import Any

# Internal tag appended to synthesized enum ids, stripped when rendering
ENUM_SUFFIX = "#EnumSuffix"

OPTIONAL_MARKER = "?"

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

_NUMBER_LIKE_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")


def capitalize(text: str | None = None) -> str:
    """Uppercase the first character and keep the rest unchanged.

    Examples:
        "helloWorld" -> "HelloWorld"
        "pet_status" -> "Pet_status"
        None -> ""
    """
    if not text:
        return ""
    return text[0].upper() + text[1:]


def to_camel_case(text: str) -> str:
    """Convert snake_case, kebab-case or path-like text to camelCase.

    Examples:
        "get /pet/{petId}" -> "getPetPetId"
        "find_pets" -> "findPets"
    """
    if not text:
        return ""
    normalized = re.sub(r"[^A-Za-z0-9]+", " ", text)
    words = _WORD_PATTERN.findall(normalized)
    if not words:
        return ""
    return words[0].lower() + "".join(capitalize(word) for word in words[1:])


def with_optional_name(name: str, required: bool) -> str:
    """Render a property name with the optional marker unless it is required."""
    return name if required else f"{name}{OPTIONAL_MARKER}"


def split_optional_name(name: str) -> tuple[str, bool]:
    """Split ``"limit?"`` into ``("limit", True)``."""
    if name.endswith(OPTIONAL_MARKER):
        return name[: -len(OPTIONAL_MARKER)], True
    return name, False


def quote_key(name: str) -> str:
    """Quote a property key, keeping the optional marker outside the quotes.

    Examples:
        "limit?" -> "'limit'?"
        "001" -> "'001'"
    """
    bare, is_optional = split_optional_name(name)
    quoted = "'" + bare.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return quoted + OPTIONAL_MARKER if is_optional else quoted


def get_ref_id(ref: str | None = None) -> str:
    """Return the last path segment of a ``$ref`` string.

    Examples:
        "#/components/schemas/Cat" -> "Cat"
        "#/definitions/Resource" -> "Resource"
    """
    if not ref:
        return ""
    return ref.split("/")[-1]


def get_paths_from_ref(ref: str | None = None) -> list[str]:
    """Split a ``$ref`` string into the key path used to locate its target.

    The leading ``#`` and the OpenAPI 3 ``components`` container are dropped,
    so both document versions share one lookup table:

        "#/components/requestBodies/PetBody" -> ["requestBodies", "PetBody"]
        "#/definitions/Dog" -> ["definitions", "Dog"]
    """
    if not ref:
        return []
    segments = [segment for segment in ref.split("/") if segment and segment != "#"]
    if segments and segments[0] == "components":
        segments = segments[1:]
    return segments


def make_enum_id(name: str | None, prop_key: str | None) -> str:
    """Build the registry id of an enum nested under ``name.prop_key``."""
    base = capitalize(name) + capitalize(prop_key)
    if not base:
        return ""
    return base + ENUM_SUFFIX


def strip_enum_suffix(declaration_id: str) -> str:
    """Return the display name for a declaration id."""
    return declaration_id.replace(ENUM_SUFFIX, "")


def is_number(value: Any) -> bool:
    """Check for a JSON number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_number_like(value: Any) -> bool:
    """Check if the value is a number or a string that looks like one."""
    if is_number(value):
        return True
    return isinstance(value, str) and bool(_NUMBER_LIKE_PATTERN.match(value))


def is_object_shaped(schema: Any) -> bool:
    """Check whether a raw schema describes an object."""
    return isinstance(schema, dict) and (schema.get("type") == "object" or "properties" in schema)


def should_use_extends(all_of: list[Any] | None) -> bool:
    """Decide whether an ``allOf`` list is rendered with an ``extends`` clause.

    True only when the list holds at least one ``$ref`` member and at least
    one inline object member that declares its own properties. A ref-only
    list, or refs combined with property-less or primitive members, degrade
    to an intersection instead.
    """
    if not all_of:
        return False
    members = [member for member in all_of if isinstance(member, dict)]
    has_ref = any("$ref" in member for member in members)
    has_object = any("$ref" not in member and is_object_shaped(member) and bool(member.get("properties")) for member in members)
    return has_ref and has_object


def add_prefix_for_interface(name: str) -> str:
    return f"I{name}" if name else name


def add_prefix_for_type(name: str) -> str:
    return f"T{name}" if name else name


def get_filename(base_path: str | None = None) -> str:
    """Derive the output file stem from a base path.

    Examples:
        "/v2" -> "v2"
        "/api/web" -> "api.web"
        "" -> "api.client"
    """
    segments = [segment for segment in (base_path or "").split("/") if segment]
    if not segments:
        return "api.client"
    return ".".join(segments)


def set_deprecated(description: str) -> str:
    """Build a JSDoc block marking a client function as deprecated."""
    return f"""
  /**
  * @deprecated {description}
  */
  """
