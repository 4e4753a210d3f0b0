"""
Unit tests for TypeRegistry

Tests:
- Identity resolution (dotted, module:attr, aliases)
- Type descriptions (Optional, Annotated, arrays, unions)
- Field listing for dataclasses and annotated classes
- Docstring item hints
- Handler entry points
"""

from typing import Annotated, Dict, List, Optional, Union

import pytest

from dto_openapi.constraints import Length, NotEmpty, Range
from dto_openapi.introspection.type_registry import TypeRegistry
from dto_openapi.schema.models import TypeDescriptor, TypeKind

from tests.fixtures.dtos import AddressDto, ComplexDto, ExampleDto, LegacyDto, StatusEnum
from tests.fixtures.handlers import ExampleHandler, NotAHandler, list_examples_handler


@pytest.fixture
def registry():
    return TypeRegistry()


# ============================================================================
# IDENTITIES
# ============================================================================


class TestIdentityResolution:
    """Test identity resolution"""

    def test_resolve_dotted_path(self, registry):
        assert registry.resolve("tests.fixtures.dtos.ExampleDto") is ExampleDto

    def test_resolve_module_attribute(self, registry):
        assert registry.resolve("tests.fixtures.dtos:AddressDto") is AddressDto

    def test_resolve_object_as_is(self, registry):
        assert registry.resolve(ExampleDto) is ExampleDto

    def test_resolve_unknown(self, registry):
        assert registry.resolve("NoSuchType") is None
        assert registry.resolve("no.such.module.Type") is None
        assert registry.resolve("tests.fixtures.dtos.NoSuchType") is None
        assert registry.resolve(None) is None

    def test_register_alias(self, registry):
        identity = registry.register(ExampleHandler, "Example.Application.Handler.ExampleHandler")

        assert identity == "Example.Application.Handler.ExampleHandler"
        assert registry.resolve(identity) is ExampleHandler
        assert registry.identity_of(ExampleHandler) == identity

    def test_identity_of_defaults_to_qualified_name(self, registry):
        assert registry.identity_of(ExampleDto) == "tests.fixtures.dtos.ExampleDto"
        assert registry.identity_of("app.Foo") == "app.Foo"

    def test_classification(self, registry):
        assert registry.is_object(ExampleDto)
        assert not registry.is_object(StatusEnum)
        assert not registry.is_object(int)
        assert not registry.is_object(None)
        assert registry.is_enum(StatusEnum)
        assert registry.is_primitive(str)

    def test_object_type_unwraps_optional_and_annotated(self, registry):
        assert registry.object_type(ExampleDto) is ExampleDto
        assert registry.object_type(Optional[ExampleDto]) is ExampleDto
        assert registry.object_type(Annotated[Optional[AddressDto], NotEmpty()]) is AddressDto
        assert registry.object_type("tests.fixtures.dtos.AddressDto") is AddressDto

    def test_object_type_rejects_non_objects(self, registry):
        assert registry.object_type(Optional[int]) is None
        assert registry.object_type(StatusEnum) is None
        assert registry.object_type(Union[ExampleDto, AddressDto]) is None
        assert registry.object_type(List[ExampleDto]) is None


# ============================================================================
# DESCRIPTIONS
# ============================================================================


class TestDescribe:
    """Test type descriptions"""

    def test_primitive(self, registry):
        descriptor, nullable, constraints = registry.describe(int)
        assert descriptor == TypeDescriptor.primitive("int")
        assert nullable is False
        assert constraints == []

    def test_optional(self, registry):
        descriptor, nullable, _ = registry.describe(Optional[str])
        assert descriptor == TypeDescriptor.primitive("str")
        assert nullable is True

    def test_annotated_constraints(self, registry):
        descriptor, nullable, constraints = registry.describe(Annotated[str, NotEmpty(), Length(min=3)])
        assert descriptor.kind == TypeKind.PRIMITIVE
        assert nullable is False
        assert constraints == [NotEmpty(), Length(min=3)]

    def test_annotated_optional(self, registry):
        descriptor, nullable, constraints = registry.describe(Optional[Annotated[int, Range(min=1)]])
        assert descriptor == TypeDescriptor.primitive("int")
        assert nullable is True
        assert constraints == [Range(min=1)]

    def test_list_of_objects(self, registry):
        descriptor, _, _ = registry.describe(List[AddressDto])
        assert descriptor.kind == TypeKind.ARRAY
        assert descriptor.items == TypeDescriptor.object("tests.fixtures.dtos.AddressDto")

    def test_bare_list_has_no_items(self, registry):
        descriptor, _, _ = registry.describe(list)
        assert descriptor == TypeDescriptor.array()

    def test_dict_is_primitive_object(self, registry):
        descriptor, _, _ = registry.describe(Dict[str, int])
        assert descriptor == TypeDescriptor.primitive("dict")

    def test_union_with_null(self, registry):
        descriptor, nullable, _ = registry.describe(Union[int, str, None])
        assert nullable is True
        assert descriptor.kind == TypeKind.UNION
        assert [b.name for b in descriptor.branches] == ["int", "str", "null"]

    def test_enum(self, registry):
        descriptor, _, _ = registry.describe(StatusEnum)
        assert descriptor == TypeDescriptor.enum("tests.fixtures.dtos.StatusEnum")

    def test_unknown_forward_reference(self, registry):
        descriptor, _, _ = registry.describe("NoSuchType")
        assert descriptor == TypeDescriptor.primitive("NoSuchType")


# ============================================================================
# FIELDS
# ============================================================================


class TestFields:
    """Test field listing"""

    def test_dataclass_fields_in_order(self, registry):
        fields = registry.fields(ExampleDto)
        assert [f.name for f in fields] == ["name", "email", "age", "optional"]

    def test_metadata_constraints(self, registry):
        age = registry.fields("tests.fixtures.dtos.ExampleDto")[2]
        assert registry.constraints(age) == [Range(min=18, max=120)]

    def test_annotated_class_skips_private_and_class_vars(self, registry):
        names = [f.name for f in registry.fields(ComplexDto)]
        assert names == [
            "id",
            "name",
            "status",
            "primaryAddress",
            "addresses",
            "tags",
            "billingAddress",
            "createdAt",
        ]

    def test_unknown_type_has_no_fields(self, registry):
        assert registry.fields("NoSuchType") == []
        assert registry.fields(StatusEnum) == []


# ============================================================================
# DOCSTRING HINTS
# ============================================================================


class TestElementTypeHint:
    """Test best-effort array item hints"""

    def test_class_docstring_type_line(self, registry):
        hint = registry.element_type_hint(ComplexDto, "addresses")
        assert hint == TypeDescriptor.object("tests.fixtures.dtos.AddressDto")

    def test_init_docstring_args_section(self, registry):
        assert registry.element_type_hint(LegacyDto, "items") == TypeDescriptor.object(
            "tests.fixtures.dtos.AddressDto"
        )
        assert registry.element_type_hint(LegacyDto, "labels") == TypeDescriptor.primitive("str")

    def test_param_line(self, registry):
        class Tagged:
            """
            :param list[int] scores: Scores
            """

        assert registry.element_type_hint(Tagged, "scores") == TypeDescriptor.primitive("int")

    def test_no_hint(self, registry):
        assert registry.element_type_hint(ComplexDto, "tags") is None
        assert registry.element_type_hint("NoSuchType", "tags") is None


# ============================================================================
# HANDLERS
# ============================================================================


class TestEntryPoints:
    """Test handler entry points"""

    def test_class_call_signature(self, registry):
        params, return_annotation = registry.entry_point_signature(ExampleHandler)
        assert len(params) == 2
        assert params[1] is ExampleDto
        assert return_annotation is ExampleDto

    def test_function_handler(self, registry):
        assert registry.entry_point(list_examples_handler) is list_examples_handler
        _, return_annotation = registry.entry_point_signature(list_examples_handler)
        assert return_annotation is ExampleDto

    def test_class_without_call(self, registry):
        assert registry.entry_point(NotAHandler) is None
        assert registry.entry_point_signature(NotAHandler) is None

    def test_unannotated_parameters(self, registry):
        def handler(request, dto):
            return dto

        assert registry.entry_point_signature(handler) == ([None, None], None)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
