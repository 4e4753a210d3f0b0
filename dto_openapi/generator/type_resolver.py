"""
Type Resolver - converts declared Python types to OpenAPI schema fragments.

Supports:
- Primitive mapping (int, float, bool, list, dict, everything else as string)
- Enums (unbacked: member names, backed: member values)
- Arrays with an optional item type
- Union types (oneOf), with null branches dropped
"""

from typing import Any, Callable, Dict, List, Optional

from dto_openapi.introspection.type_registry import TypeRegistry
from dto_openapi.schema.models import TypeDescriptor, TypeKind

REF_PREFIX = "#/components/schemas/"

PRIMITIVE_TYPE_MAP = {
    "int": "integer",
    "float": "number",
    "bool": "boolean",
    "list": "array",
    "tuple": "array",
    "set": "array",
    "frozenset": "array",
    "array": "array",
    "dict": "object",
}

PRIMITIVE_FORMAT_MAP = {
    "UUID": "uuid",
    "datetime": "date-time",
    "date": "date",
}

# Callback: type identity -> schema (short) name
NameResolver = Callable[[str], str]


def schema_ref(schema_name: str) -> Dict[str, str]:
    """Build a $ref fragment pointing at a component schema"""
    return {"$ref": f"{REF_PREFIX}{schema_name}"}


class TypeResolver:
    """Resolves TypeDescriptors to schema fragments. Never raises."""

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self.registry = registry or TypeRegistry()

    @staticmethod
    def map_primitive(kind: str) -> str:
        """Map a primitive type name to an OpenAPI type (string by default)"""
        return PRIMITIVE_TYPE_MAP.get(kind, "string")

    @staticmethod
    def primitive_format(kind: str) -> Optional[str]:
        """Format implied by a stdlib value type (UUID, datetime, date)"""
        return PRIMITIVE_FORMAT_MAP.get(kind)

    def resolve_enum(self, identity: Any) -> Dict[str, Any]:
        """
        Generate schema for an enum type

        Unbacked enums (plain Enum) list their member names. Enums mixing in
        str/int/float list their values, typed by that backing primitive.

        Args:
            identity: Enum identity or class

        Returns:
            Schema fragment with `type` and `enum`
        """
        enum_cls = self.registry.resolve(identity)
        if not self.registry.is_enum(enum_cls):
            return {"type": "string"}

        members = list(enum_cls)
        backing = self._backing_type(enum_cls)

        if backing is None:
            return {
                "type": "string",
                "enum": [member.name for member in members],
            }

        return {
            "type": self.map_primitive(backing),
            "enum": [member.value for member in members],
        }

    @staticmethod
    def _backing_type(enum_cls: type) -> Optional[str]:
        """Name of the mixed-in value type, or None for a plain Enum"""
        for base, name in ((int, "int"), (float, "float"), (str, "str")):
            if issubclass(enum_cls, base):
                return name
        return None

    def resolve_array(
        self,
        item_hint: Optional[TypeDescriptor],
        name_resolver: NameResolver,
    ) -> Dict[str, Any]:
        """
        Generate schema for an array

        Args:
            item_hint: Item type, or None when unknown (untyped items)
            name_resolver: Maps an object identity to its schema name

        Returns:
            `{type: array}` with `items` when the item type is known
        """
        schema: Dict[str, Any] = {"type": "array"}

        if item_hint is not None:
            schema["items"] = self.resolve_single(item_hint, name_resolver)

        return schema

    def resolve_union(
        self,
        branches: List[TypeDescriptor],
        name_resolver: NameResolver,
    ) -> Dict[str, Any]:
        """
        Generate schema for a union type

        Null branches are skipped (nullability is flagged separately). A single
        remaining branch is returned as is, several become `oneOf`.
        """
        types = [
            self.resolve_single(branch, name_resolver)
            for branch in branches
            if not branch.is_null()
        ]

        if not types:
            return {"type": "string"}

        if len(types) == 1:
            return types[0]

        return {"oneOf": types}

    def resolve_single(
        self,
        descriptor: TypeDescriptor,
        name_resolver: NameResolver,
    ) -> Dict[str, Any]:
        """Resolve one type the way a union branch or array item is resolved"""
        if descriptor.kind == TypeKind.ENUM:
            return self.resolve_enum(descriptor.name)

        if descriptor.kind == TypeKind.OBJECT:
            return schema_ref(name_resolver(descriptor.name))

        if descriptor.kind == TypeKind.ARRAY:
            return self.resolve_array(descriptor.items, name_resolver)

        if descriptor.kind == TypeKind.UNION:
            return self.resolve_union(list(descriptor.branches), name_resolver)

        schema = {"type": self.map_primitive(descriptor.name)}
        type_format = self.primitive_format(descriptor.name)
        if type_format:
            schema["format"] = type_format
        return schema
