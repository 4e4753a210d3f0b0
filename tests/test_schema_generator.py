"""
Unit tests for SchemaGenerator

Tests:
- Flat DTOs with constraints
- Nested objects, arrays, enums, unions
- Nullable handling and required lists
- Caching and circular reference detection
- Batch generation with per-type failures
"""

import logging
from unittest.mock import patch

import pytest

from dto_openapi.generator.schema_generator import SchemaGenerator

from tests.fixtures.dtos import (
    AddressDto,
    Author,
    ComplexDto,
    ExampleDto,
    PaymentDto,
    ProfileDto,
    TreeNode,
)


def ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


@pytest.fixture
def generator():
    return SchemaGenerator()


# ============================================================================
# FLAT DTOS
# ============================================================================


class TestFlatSchemas:
    """Test schemas of DTOs without nested objects"""

    def test_example_dto(self, generator):
        schema = generator.generate(ExampleDto)

        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["name", "email", "age", "optional"]
        assert schema["properties"]["name"] == {"type": "string", "minLength": 3, "maxLength": 100}
        assert schema["properties"]["email"] == {"type": "string", "format": "email"}
        assert schema["properties"]["age"] == {"type": "integer", "minimum": 18, "maximum": 120}
        assert schema["properties"]["optional"] == {"type": "string", "nullable": True}
        assert schema["required"] == ["name"]

    def test_required_omitted_when_empty(self, generator):
        schema = generator.generate(TreeNode)
        assert "required" not in schema

    def test_nullable_not_empty_is_never_required(self, generator):
        schema = generator.generate(ProfileDto)

        assert schema["properties"]["nickname"] == {"type": "string", "nullable": True}
        assert schema["properties"]["code"] == {"type": "string", "pattern": "^[A-Z]{3}$"}
        assert schema["properties"]["website"] == {"type": "string", "format": "uri", "nullable": True}
        assert schema["required"] == ["code"]

    def test_enum_fields(self, generator):
        schema = generator.generate(ProfileDto)

        assert schema["properties"]["priority"] == {"type": "integer", "enum": [1, 2]}
        assert schema["properties"]["letter"] == {"type": "string", "enum": ["A", "B", "C"]}

    def test_unknown_type_returns_empty_schema(self, generator):
        assert generator.generate("NoSuchType") == {}
        assert generator.generate("tests.fixtures.dtos.NoSuchType") == {}
        assert generator.generate(int) == {}


# ============================================================================
# NESTED DTOS
# ============================================================================


class TestNestedSchemas:
    """Test nested objects, arrays and unions"""

    def test_complex_dto(self, generator):
        properties = generator.generate(ComplexDto)["properties"]

        assert properties["id"] == {"type": "string", "format": "uuid"}
        assert properties["name"] == {"type": "string"}
        assert properties["status"] == {"type": "string", "enum": ["draft", "active", "archived"]}
        assert properties["primaryAddress"] == ref("AddressDto")
        assert properties["addresses"] == {"type": "array", "items": ref("AddressDto")}
        assert properties["tags"] == {"type": "array", "items": {"type": "string"}}
        assert properties["billingAddress"] == {**ref("AddressDto"), "nullable": True}
        assert properties["createdAt"] == {"type": "string", "format": "date-time"}
        assert "VERSION" not in properties
        assert "_internal" not in properties

    def test_nested_objects_are_not_inlined(self, generator):
        generator.generate(ComplexDto)

        assert "AddressDto" not in generator.get_all_schemas()
        assert generator.referenced_types() == ["tests.fixtures.dtos.AddressDto"]

    def test_unions(self, generator):
        properties = generator.generate(PaymentDto)["properties"]

        assert properties["method"] == {"oneOf": [ref("CardPayment"), ref("BankPayment")]}
        assert properties["amount"] == {"oneOf": [{"type": "integer"}, {"type": "number"}]}
        assert properties["note"] == {
            "oneOf": [{"type": "string"}, {"type": "integer"}],
            "nullable": True,
        }
        assert properties["fallback"] == {**ref("CardPayment"), "nullable": True}


# ============================================================================
# CACHING AND CYCLES
# ============================================================================


class TestCachingAndCycles:
    """Test schema cache and circular reference detection"""

    def test_generate_is_idempotent(self, generator):
        first = generator.generate(ExampleDto)
        second = generator.generate("tests.fixtures.dtos.ExampleDto")

        assert first is second

    def test_self_reference(self, generator):
        properties = generator.generate(TreeNode)["properties"]

        assert properties["children"] == {"type": "array", "items": ref("TreeNode")}
        assert properties["parent"] == {**ref("TreeNode"), "nullable": True}

    def test_type_on_stack_returns_ref(self, generator):
        generator._processing_stack.append("tests.fixtures.dtos.TreeNode")

        assert generator.generate(TreeNode) == ref("TreeNode")

    def test_mutual_cycle_terminates(self, generator):
        schemas = generator.generate_all([Author])

        assert set(schemas) == {"Author", "Book"}
        assert schemas["Author"]["properties"]["books"] == {"type": "array", "items": ref("Book")}
        assert schemas["Book"]["properties"]["author"] == {**ref("Author"), "nullable": True}

    def test_stack_unwinds_on_error(self, generator):
        with patch.object(generator.registry, "fields", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                generator.generate(ExampleDto)

        assert generator._processing_stack == []
        assert generator.generate(ExampleDto)["required"] == ["name"]

    def test_clear_cache(self, generator):
        first = generator.generate(ComplexDto)
        generator.clear_cache()

        assert generator.get_all_schemas() == {}
        assert generator.referenced_types() == []
        assert generator.generate(ComplexDto) is not first


# ============================================================================
# BATCH GENERATION
# ============================================================================


class TestGenerateAll:
    """Test batch generation"""

    def test_referenced_types_are_generated(self, generator):
        schemas = generator.generate_all(["tests.fixtures.dtos.ComplexDto"])

        assert list(schemas) == ["ComplexDto", "AddressDto"]
        assert schemas["AddressDto"]["required"] == ["street", "city", "zipCode"]
        assert schemas["AddressDto"]["properties"]["zipCode"] == {
            "type": "string",
            "minLength": 5,
            "maxLength": 10,
        }

    def test_failing_type_is_recorded(self, generator):
        fields = generator.registry.fields

        def failing_fields(identity):
            if generator.registry.resolve(identity) is AddressDto:
                raise ValueError("broken DTO")
            return fields(identity)

        with patch.object(generator.registry, "fields", side_effect=failing_fields):
            schemas = generator.generate_all([ExampleDto, AddressDto])

        assert "ExampleDto" in schemas
        assert "AddressDto" not in schemas
        assert generator.failures == {"tests.fixtures.dtos.AddressDto": "broken DTO"}

    def test_unknown_types_are_skipped(self, generator):
        assert generator.generate_all(["NoSuchType", ExampleDto]) == {
            "ExampleDto": generator.generate(ExampleDto),
        }

    def test_short_name_collision_is_logged(self, generator, caplog):
        first = type("Address", (), {"__annotations__": {"street": str}, "__module__": "billing"})
        second = type("Address", (), {"__annotations__": {"line": str}, "__module__": "shipping"})

        generator.generate(first)
        generator.generate(second)

        with caplog.at_level(logging.WARNING):
            schemas = generator.get_all_schemas()

        assert list(schemas) == ["Address"]
        assert list(schemas["Address"]["properties"]) == ["line"]
        assert "collision" in caplog.text

    def test_get_schema_name(self, generator):
        assert generator.get_schema_name("app.dto.CreateItemRequest") == "CreateItemRequest"
        assert generator.get_schema_name("app.dto:Item") == "Item"
        assert generator.get_schema_name(ExampleDto) == "ExampleDto"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
