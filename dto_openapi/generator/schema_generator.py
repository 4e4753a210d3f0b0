"""
Schema Generator - builds OpenAPI component schemas from DTO classes.

Coordinates:
- TypeResolver: enum, array, union and primitive fragments
- ConstraintExtractor: constraint tags to schema keywords

Supports:
- Basic types (str, int, float, bool, list, dict)
- Nested DTOs (emitted as $ref, generated lazily)
- Collections with typed items (list[Type] or docstring hints)
- Enums (unbacked and value-backed)
- Nullable types (Optional[Type])
- Union types (oneOf)
- Circular reference detection
- Schema caching per generator instance
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dto_openapi.generator.constraint_extractor import ConstraintExtractor
from dto_openapi.generator.type_resolver import TypeResolver, schema_ref
from dto_openapi.introspection.type_registry import TypeRegistry
from dto_openapi.schema.models import FieldDescriptor, TypeKind

logger = logging.getLogger(__name__)


class SchemaGenerator:
    """
    Generates OpenAPI schemas from DTO classes

    One instance owns its cache and processing stack; do not share an
    instance between concurrent generation runs.

    Usage:
    ```python
    generator = SchemaGenerator()
    schema = generator.generate("app.item.dto.CreateItemRequest")
    components = generator.get_all_schemas()
    ```
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        type_resolver: Optional[TypeResolver] = None,
        constraint_extractor: Optional[ConstraintExtractor] = None,
    ):
        if registry is None:
            registry = type_resolver.registry if type_resolver else TypeRegistry()
        self.registry = registry
        self.type_resolver = type_resolver or TypeResolver(registry)
        self.constraint_extractor = constraint_extractor or ConstraintExtractor()

        self._schema_cache: Dict[str, Dict[str, Any]] = {}
        self._processing_stack: List[str] = []  # Circular reference detection
        self._referenced: Dict[str, None] = {}  # Ordered set of $ref targets
        self.failures: Dict[str, str] = {}

    def generate(self, dto: Any) -> Dict[str, Any]:
        """
        Generate OpenAPI schema from a DTO

        Args:
            dto: DTO identity or class

        Returns:
            Object schema, `{}` for an unknown type, or a $ref when the type is
            already being generated further up the stack
        """
        cls = self.registry.resolve(dto)
        if not self.registry.is_object(cls):
            logger.debug(f"Unknown DTO type: {dto!r}")
            return {}

        identity = self.registry.identity_of(cls)

        if identity in self._schema_cache:
            return self._schema_cache[identity]

        if identity in self._processing_stack:
            logger.debug(f"Circular reference detected: {identity}")
            return schema_ref(self.get_schema_name(identity))

        self._processing_stack.append(identity)

        try:
            properties: Dict[str, Any] = {}
            required: List[str] = []

            for field in self.registry.fields(cls):
                field_schema, is_required = self._extract_property_schema(cls, field)
                properties[field.name] = field_schema

                if is_required:
                    required.append(field.name)
        finally:
            self._processing_stack.pop()

        schema: Dict[str, Any] = {
            "type": "object",
            "properties": properties,
        }

        if required:
            schema["required"] = required

        self._schema_cache[identity] = schema
        return schema

    def _extract_property_schema(
        self,
        owner: type,
        field: FieldDescriptor,
    ) -> Tuple[Dict[str, Any], bool]:
        """
        Extract schema for a single property

        Returns:
            Tuple of (schema, required). Nullable fields are never required.
        """
        descriptor = field.type
        tags = self.registry.constraints(field)

        if descriptor.kind == TypeKind.ENUM:
            schema = self.type_resolver.resolve_enum(descriptor.name)

        elif descriptor.kind == TypeKind.OBJECT:
            schema = schema_ref(self._reference(descriptor.name))

        elif descriptor.kind == TypeKind.ARRAY:
            item_hint = descriptor.items or self.registry.element_type_hint(owner, field.name)
            schema = self.type_resolver.resolve_array(item_hint, self._reference)

        elif descriptor.kind == TypeKind.UNION:
            schema = self.type_resolver.resolve_union(list(descriptor.branches), self._reference)

        else:
            schema = {"type": self.type_resolver.map_primitive(descriptor.name)}
            type_format = self.type_resolver.primitive_format(descriptor.name)

            if type_format:
                schema["format"] = type_format
            elif schema["type"] == "string" and self.constraint_extractor.has_uuid_constraint(tags):
                schema["format"] = "uuid"

        schema, required = self.constraint_extractor.apply_constraints(tags, schema, False)

        # Set for every kind, refs included
        if field.nullable:
            schema["nullable"] = True

        return schema, required and not field.nullable

    def _reference(self, identity: str) -> str:
        """Record a $ref target and return its schema name"""
        self._referenced[identity] = None
        return self.get_schema_name(identity)

    def get_schema_name(self, dto: Any) -> str:
        """Short schema name: last segment of the type identity"""
        identity = self.registry.identity_of(dto)
        return identity.replace(":", ".").rsplit(".", 1)[-1]

    def get_all_schemas(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all generated schemas keyed by short name

        Two identities sharing a short name collapse into one entry (the
        later one wins); the collision is logged.
        """
        result: Dict[str, Dict[str, Any]] = {}
        owners: Dict[str, str] = {}

        for identity, schema in self._schema_cache.items():
            schema_name = self.get_schema_name(identity)

            self._claim_name(owners, schema_name, identity)
            result[schema_name] = schema

        return result

    @staticmethod
    def _claim_name(owners: Dict[str, str], schema_name: str, identity: str) -> None:
        """Record the owner of a short name, warning when another type held it"""
        previous = owners.get(schema_name)
        if previous is not None and previous != identity:
            logger.warning(
                f"Schema name collision: {previous} and {identity} "
                f"both map to '{schema_name}'"
            )
        owners[schema_name] = identity

    def referenced_types(self) -> List[str]:
        """Identities referenced via $ref by the schemas generated so far"""
        return list(self._referenced)

    def generate_all(self, dtos: Iterable[Any]) -> Dict[str, Dict[str, Any]]:
        """
        Generate schemas for DTOs and every type they reference

        A failing type is logged and recorded in `failures`; the remaining
        types are still generated.

        Args:
            dtos: DTO identities or classes

        Returns:
            Schemas keyed by short name
        """
        pending = list(dtos)
        queued = {self.registry.identity_of(dto) for dto in pending}
        schemas: Dict[str, Dict[str, Any]] = {}
        owners: Dict[str, str] = {}

        while pending:
            dto = pending.pop(0)
            identity = self.registry.identity_of(dto)

            try:
                schema = self.generate(dto)
            except Exception as e:
                logger.error(f"Failed to generate schema for {self.get_schema_name(identity)}: {e}")
                self.failures[identity] = str(e)
                continue

            if schema:
                schema_name = self.get_schema_name(identity)
                owner = self.registry.identity_of(self.registry.resolve(dto))
                self._claim_name(owners, schema_name, owner)
                schemas[schema_name] = schema
            else:
                logger.debug(f"Skipping unknown type {identity}")

            for referenced in self._referenced:
                if referenced not in queued:
                    queued.add(referenced)
                    pending.append(referenced)

        logger.info(f"Generated {len(schemas)} schemas")
        return schemas

    def clear_cache(self) -> None:
        """Reset schema cache, processing stack and reference tracking"""
        self._schema_cache = {}
        self._processing_stack = []
        self._referenced = {}
        self.failures = {}
