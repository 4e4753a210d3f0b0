"""
Models shared by the introspection and generator layers.

- TypeDescriptor: read-only view of a declared Python type
- FieldDescriptor: one DTO property with its type, nullability and constraints
- RouteDescriptor: one routing table entry
- HandlerInfo: request/response DTOs identified on a handler
- OperationDescriptor: one generated (path, method) operation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class TypeKind(str, Enum):
    """Variants of a declared type"""
    PRIMITIVE = "primitive"
    OBJECT = "object"
    ENUM = "enum"
    ARRAY = "array"
    UNION = "union"


NULL_TYPE = "null"


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Declared type of a field, parameter or array element.

    `name` holds the primitive name ("int", "str", "null", ...) for PRIMITIVE
    and the type identity for OBJECT and ENUM. `items` is only meaningful for
    ARRAY and may be None when no element type is known. `branches` is only
    meaningful for UNION.
    """
    kind: TypeKind
    name: str = ""
    items: Optional["TypeDescriptor"] = None
    branches: tuple = ()

    @classmethod
    def primitive(cls, name: str) -> "TypeDescriptor":
        return cls(TypeKind.PRIMITIVE, name)

    @classmethod
    def object(cls, identity: str) -> "TypeDescriptor":
        return cls(TypeKind.OBJECT, identity)

    @classmethod
    def enum(cls, identity: str) -> "TypeDescriptor":
        return cls(TypeKind.ENUM, identity)

    @classmethod
    def array(cls, items: Optional["TypeDescriptor"] = None) -> "TypeDescriptor":
        return cls(TypeKind.ARRAY, "list", items=items)

    @classmethod
    def union(cls, branches: List["TypeDescriptor"]) -> "TypeDescriptor":
        return cls(TypeKind.UNION, "union", branches=tuple(branches))

    def is_null(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE and self.name == NULL_TYPE


@dataclass
class FieldDescriptor:
    """Represents a single DTO property"""
    name: str
    type: TypeDescriptor
    nullable: bool = False
    constraints: List[Any] = field(default_factory=list)


@dataclass
class RouteDescriptor:
    """Single routing table entry"""
    path: str
    allowed_methods: List[str] = field(default_factory=list)
    middleware: List[Any] = field(default_factory=list)  # handler is the last entry
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, route: Mapping[str, Any]) -> "RouteDescriptor":
        """
        Build a route from a mapping record

        Accepts `allowed_methods` (or `methods`) and `middleware` (or
        `handler`). A single middleware entry is wrapped into a list.
        """
        methods = route.get("allowed_methods", route.get("methods")) or []
        if isinstance(methods, str):
            methods = [methods]

        middleware = route.get("middleware", route.get("handler"))
        if middleware is None:
            middleware = []
        elif not isinstance(middleware, (list, tuple)):
            middleware = [middleware]

        return cls(
            path=route.get("path") or "",
            allowed_methods=[str(m).upper() for m in methods],
            middleware=list(middleware),
            name=route.get("name"),
        )

    @property
    def handler(self) -> Any:
        """Last element of the pipeline, or None for an empty pipeline"""
        return self.middleware[-1] if self.middleware else None


@dataclass(frozen=True)
class HandlerInfo:
    """DTO identities found on a handler's entry point"""
    request_type: Optional[str] = None
    response_type: Optional[str] = None


@dataclass
class OperationDescriptor:
    """Generated description of one (path, method) pair"""
    operation_id: str
    summary: str
    tag: str
    parameters: List[Dict[str, Any]] = field(default_factory=list)
    request_body: Optional[Dict[str, Any]] = None
    responses: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an OpenAPI operation object"""
        operation: Dict[str, Any] = {
            "operationId": self.operation_id,
            "summary": self.summary,
            "tags": [self.tag],
        }

        if self.parameters:
            operation["parameters"] = self.parameters

        if self.request_body is not None:
            operation["requestBody"] = self.request_body

        operation["responses"] = self.responses
        return operation
