import unittest
from unittest import TestCase

from openapi_to_ts.pipeline.registry import DeclarationRegistry, DeclKind
from openapi_to_ts.pipeline.resolver import ResolveContext, SchemaResolver
from openapi_to_ts.pipeline.types import (
    FREE_FORM,
    ArrayType,
    EnumType,
    ObjectType,
    Primitive,
    Reference,
    UnionType,
)
from openapi_to_ts.utils import ENUM_SUFFIX


class TestSchemaResolver(TestCase):
    """Test resolution of raw schema nodes into type expressions"""

    def setUp(self):
        self.registry = DeclarationRegistry()
        self.resolver = SchemaResolver(self.registry)

    def test_primitives(self):
        self.assertEqual(self.resolver.resolve({"type": "string"}), Primitive("string"))
        self.assertEqual(self.resolver.resolve({"type": "integer", "format": "int64"}), Primitive("number"))
        self.assertEqual(self.resolver.resolve({"type": "number"}), Primitive("number"))
        self.assertEqual(self.resolver.resolve({"type": "boolean"}), Primitive("boolean"))
        self.assertEqual(self.resolver.resolve({"type": "file"}), Primitive("File"))

    def test_type_list_becomes_union(self):
        result = self.resolver.resolve({"type": ["string", "null"]})
        self.assertEqual(result, UnionType((Primitive("string"), Primitive("null"))))

    def test_malformed_input_degrades(self):
        self.assertEqual(self.resolver.resolve(None), Primitive(""))
        self.assertEqual(self.resolver.resolve("not a schema"), Primitive(""))
        self.assertEqual(self.resolver.resolve({}), Primitive(""))
        self.assertEqual(self.resolver.resolve({"properties": "bad"}), ObjectType({}))

    def test_object_required_and_optional(self):
        schema = {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "tag": {"type": "string"},
            },
        }
        result = self.resolver.resolve(schema, ResolveContext(name="NewPet"))
        self.assertEqual(result, ObjectType({"name": Primitive("string"), "tag?": Primitive("string")}))

    def test_object_without_properties_is_free_form(self):
        result = self.resolver.resolve({"type": "object"})
        self.assertTrue(result.is_free_form)
        self.assertIs(result.properties, FREE_FORM)

    def test_ref_ids_for_both_versions(self):
        v2 = self.resolver.resolve({"$ref": "#/definitions/Pet"})
        v3 = self.resolver.resolve({"$ref": "#/components/schemas/Pet"})
        self.assertEqual(v2, Reference("Pet"))
        self.assertIs(v2, v3)
        self.assertIs(v2, self.registry.reference("Pet"))

    def test_ref_id_is_capitalized(self):
        self.assertEqual(self.resolver.resolve({"$ref": "#/definitions/pet"}), Reference("Pet"))

    def test_self_reference_terminates(self):
        schema = {
            "type": "object",
            "properties": {
                "children": {"type": "array", "items": {"$ref": "#/definitions/Node"}},
            },
        }
        result = self.resolver.resolve(schema, ResolveContext(name="Node"))
        self.assertEqual(result, ObjectType({"children?": ArrayType(Reference("Node"))}))

    def test_one_of_takes_priority(self):
        schema = {
            "oneOf": [{"type": "string"}, {"$ref": "#/definitions/Cat"}],
            "$ref": "#/definitions/Ignored",
            "type": "object",
        }
        result = self.resolver.resolve(schema)
        self.assertEqual(result, UnionType((Primitive("string"), Reference("Cat"))))
        self.assertNotIn("Ignored", self.registry.references)

    def test_any_of(self):
        result = self.resolver.resolve({"anyOf": [{"type": "integer"}, {"type": "boolean"}]})
        self.assertEqual(result, UnionType((Primitive("number"), Primitive("boolean"))))

    def test_ref_takes_priority_over_items(self):
        result = self.resolver.resolve({"$ref": "#/definitions/Pet", "items": {"type": "string"}})
        self.assertEqual(result, Reference("Pet"))

    def test_array(self):
        result = self.resolver.resolve({"type": "array", "items": {"type": "string"}})
        self.assertEqual(result, ArrayType(Primitive("string")))

    def test_items_without_array_type(self):
        result = self.resolver.resolve({"items": {"type": "string"}})
        self.assertEqual(result, Primitive("string"))

    def test_tuple(self):
        result = self.resolver.resolve({"type": "array", "items": [{"type": "string"}, {"type": "integer"}]})
        self.assertTrue(result.is_tuple)
        self.assertEqual(result, ArrayType((Primitive("string"), Primitive("number"))))

    def test_string_enum_registers_declaration(self):
        schema = {"type": "string", "enum": ["available", "pending", "sold"]}
        result = self.resolver.resolve(schema, ResolveContext(name="Pet", prop_key="status"))

        enum_id = "PetStatus" + ENUM_SUFFIX
        self.assertEqual(result, EnumType(enum_id))

        declaration = self.registry.get_declaration(enum_id)
        self.assertEqual(declaration.kind, DeclKind.ENUM)
        self.assertEqual(declaration.body, EnumType(enum_id, ("available", "pending", "sold")))

    def test_numeric_enum_is_referenced(self):
        schema = {"type": "integer", "enum": [1, 2, 3]}
        result = self.resolver.resolve(schema, ResolveContext(name="Order", prop_key="priority"))

        enum_id = "OrderPriority" + ENUM_SUFFIX
        self.assertEqual(result, Reference(enum_id))
        self.assertEqual(self.registry.get_declaration(enum_id).body.values, (1, 2, 3))

    def test_enum_inside_array_uses_parent_context(self):
        schema = {"type": "array", "items": {"type": "string", "enum": ["cute", "fluffy"]}}
        result = self.resolver.resolve(schema, ResolveContext(name="FindPets", prop_key="tags"))
        self.assertEqual(result, ArrayType(EnumType("FindPetsTags" + ENUM_SUFFIX)))

    def test_nested_property_enum(self):
        schema = {
            "type": "object",
            "properties": {"status": {"type": "string", "enum": ["placed", "approved"]}},
        }
        self.resolver.resolve(schema, ResolveContext(name="Order", prop_key="Order"))
        self.assertIsNotNone(self.registry.get_declaration("OrderStatus" + ENUM_SUFFIX))

    def test_anonymous_enums_get_unique_ids(self):
        first = self.resolver.resolve({"enum": ["a"]})
        second = self.resolver.resolve({"enum": ["b"]})
        self.assertEqual(first, EnumType("Enum1" + ENUM_SUFFIX))
        self.assertEqual(second, EnumType("Enum2" + ENUM_SUFFIX))

    def test_malformed_enum(self):
        result = self.resolver.resolve({"enum": "nope"}, ResolveContext(name="Pet", prop_key="kind"))
        self.assertEqual(result, EnumType("PetKind" + ENUM_SUFFIX))
        self.assertEqual(self.registry.get_declaration("PetKind" + ENUM_SUFFIX).body.values, ())

    def test_all_of_with_extends(self):
        schema = {
            "allOf": [
                {"$ref": "#/components/schemas/NewPet"},
                {
                    "type": "object",
                    "required": ["id"],
                    "properties": {"id": {"type": "integer"}},
                },
            ]
        }
        result = self.resolver.resolve(schema, ResolveContext(name="Pet", prop_key="Pet"))
        self.assertEqual(result.extends_refs, (Reference("NewPet"),))
        self.assertTrue(result.use_extends)
        self.assertEqual(result.properties, {"id": Primitive("number")})

    def test_all_of_refs_only_is_intersection(self):
        schema = {"allOf": [{"$ref": "#/definitions/A"}, {"$ref": "#/definitions/B"}]}
        result = self.resolver.resolve(schema)
        self.assertEqual(result, ObjectType({}, extends_refs=(Reference("A"), Reference("B")), use_extends=False))

    def test_all_of_merges_own_properties(self):
        schema = {
            "allOf": [{"$ref": "#/definitions/Base"}],
            "properties": {"extra": {"type": "boolean"}},
        }
        result = self.resolver.resolve(schema)
        self.assertEqual(result.properties, {"extra?": Primitive("boolean")})
        self.assertFalse(result.use_extends)

    def test_all_of_single_plain_member(self):
        result = self.resolver.resolve({"allOf": [{"type": "string"}]})
        self.assertEqual(result, ObjectType({}, intersects=(Primitive("string"),)))

    def test_all_of_ref_and_primitive_intersect(self):
        schema = {"allOf": [{"$ref": "#/definitions/Pet"}, {"type": "string"}]}
        result = self.resolver.resolve(schema)
        self.assertEqual(result.extends_refs, (Reference("Pet"),))
        self.assertEqual(result.intersects, (Primitive("string"),))
        self.assertFalse(result.use_extends)
        self.assertFalse(result.can_render_as_interface)

    def test_all_of_ref_and_union_intersect(self):
        schema = {
            "allOf": [
                {"$ref": "#/definitions/Pet"},
                {"oneOf": [{"$ref": "#/definitions/Cat"}, {"$ref": "#/definitions/Dog"}]},
            ]
        }
        result = self.resolver.resolve(schema)
        self.assertEqual(result.extends_refs, (Reference("Pet"),))
        self.assertEqual(result.intersects, (UnionType((Reference("Cat"), Reference("Dog"))),))

    def test_all_of_plain_members_intersect(self):
        result = self.resolver.resolve({"allOf": [{"type": "string"}, {"type": "integer"}]})
        self.assertEqual(result, ObjectType({}, intersects=(Primitive("string"), Primitive("number"))))

    def test_all_of_keeps_plain_members_next_to_extends(self):
        schema = {
            "allOf": [
                {"$ref": "#/definitions/Pet"},
                {"type": "object", "properties": {"bark": {"type": "boolean"}}},
                {"type": "array", "items": {"type": "string"}},
            ]
        }
        result = self.resolver.resolve(schema)
        self.assertTrue(result.use_extends)
        self.assertEqual(result.properties, {"bark?": Primitive("boolean")})
        self.assertEqual(result.intersects, (ArrayType(Primitive("string")),))
        self.assertFalse(result.can_render_as_interface)

    def test_all_of_empty_member_is_ignored(self):
        result = self.resolver.resolve({"allOf": [{"$ref": "#/definitions/Pet"}, {}]})
        self.assertEqual(result, ObjectType({}, extends_refs=(Reference("Pet"),)))

    def test_degraded_input_is_logged(self):
        with self.assertLogs("openapi_to_ts.pipeline.resolver", level="DEBUG") as logs:
            self.resolver.resolve("not a schema")
            self.resolver.resolve({"enum": "nope"})
        self.assertEqual(len(logs.output), 3)


if __name__ == "__main__":
    unittest.main()
