"""
Type Registry - read-only view of the host type system.

Resolves type identities (dotted paths or registered aliases) to Python
objects and describes them for the generators.

Supports:
- Dataclasses and plain annotated classes (declaration order kept)
- typing.Annotated constraint metadata and dataclass field metadata
- Optional / Union / list / tuple / set annotations
- Enum subclasses
- Best-effort array item types parsed from docstrings
- Handler entry points (`__call__` or plain functions)
"""

import builtins
import dataclasses
import datetime
import decimal
import enum
import importlib
import inspect
import logging
import re
import sys
import types
import uuid
from typing import (
    Annotated,
    Any,
    Callable,
    ClassVar,
    Dict,
    ForwardRef,
    List,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from dto_openapi.constraints import ConstraintTag
from dto_openapi.schema.models import FieldDescriptor, TypeDescriptor, NULL_TYPE

logger = logging.getLogger(__name__)

UnionType = getattr(types, "UnionType", None)

# Built-in and stdlib value types described as primitives
PRIMITIVE_TYPES: Dict[Any, str] = {
    int: "int",
    float: "float",
    bool: "bool",
    str: "str",
    bytes: "bytes",
    dict: "dict",
    list: "list",
    tuple: "tuple",
    set: "set",
    frozenset: "frozenset",
    uuid.UUID: "UUID",
    datetime.datetime: "datetime",
    datetime.date: "date",
    decimal.Decimal: "Decimal",
}

SEQUENCE_ORIGINS = (list, tuple, set, frozenset)
SEQUENCE_NAMES = {"Sequence", "MutableSequence", "Iterable", "Collection", "AbstractSet", "MutableSet"}

# Names that stay primitive when found in a docstring hint
BUILTIN_HINT_NAMES = {"str", "int", "float", "bool", "bytes", "dict", "mixed", "Any", "object"}

# `:type tags: list[str]`, `:param list[str] tags:`, `tags (list[str]):`
_SEQ = r"(?:list|List|Sequence|Iterable|set|Set|tuple|Tuple)"
_ITEM = r"\[\s*(?:(?:int|str)\s*,\s*)?([A-Za-z_][\w.]*)\s*(?:,\s*\.\.\.\s*)?\]"
HINT_PATTERNS = (
    r":type\s+{name}\s*:\s*" + _SEQ + _ITEM,
    r":param\s+" + _SEQ + _ITEM + r"\s+{name}\s*:",
    r"^\s*{name}\s*\(\s*" + _SEQ + _ITEM + r"\s*\)\s*:",
)


class TypeRegistry:
    """
    Resolves and describes Python types for schema generation

    Usage:
    ```python
    registry = TypeRegistry()
    registry.register(GetItemHandler, "Item.Application.Handler.GetItemHandler")
    fields = registry.fields("app.dto.CreateItemRequest")
    ```

    Every lookup fails soft: unknown identities resolve to None.
    """

    def __init__(self):
        self._aliases: Dict[str, Any] = {}
        self._identities: Dict[int, str] = {}

    # ------------------------------------------------------------------
    # Identity resolution
    # ------------------------------------------------------------------

    def register(self, obj: Any, name: Optional[str] = None) -> str:
        """
        Register a class or function under an explicit identity

        Args:
            obj: Class, enum or function
            name: Identity to use (defaults to module.qualname)

        Returns:
            The identity the object is known by
        """
        identity = name or self._qualified_name(obj)
        self._aliases[identity] = obj
        self._identities[id(obj)] = identity
        return identity

    def resolve(self, identity: Any) -> Optional[Any]:
        """
        Resolve an identity to the Python object it names

        Args:
            identity: Class/function (returned as is), registered alias,
                `module:attr` reference or dotted `package.module.Attr`

        Returns:
            The object, or None if it cannot be located
        """
        if identity is None:
            return None

        if not isinstance(identity, str):
            return identity

        if identity in self._aliases:
            return self._aliases[identity]

        if ":" in identity:
            module_name, _, attr_path = identity.partition(":")
            return self._import_attribute(module_name, attr_path.split("."))

        parts = identity.split(".")
        for split in range(len(parts) - 1, 0, -1):
            obj = self._import_attribute(".".join(parts[:split]), parts[split:])
            if obj is not None:
                return obj

        logger.debug(f"Could not resolve type identity: {identity}")
        return None

    def identity_of(self, obj: Any) -> str:
        """Identity of an object (registered alias first, then module.qualname)"""
        if isinstance(obj, str):
            return obj
        return self._identities.get(id(obj)) or self._qualified_name(obj)

    @staticmethod
    def _qualified_name(obj: Any) -> str:
        module = getattr(obj, "__module__", None)
        qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)
        if module and module != "builtins":
            return f"{module}.{qualname}"
        return qualname

    @staticmethod
    def _import_attribute(module_name: str, attr_path: List[str]) -> Optional[Any]:
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            return None
        except Exception as e:
            logger.debug(f"Error importing {module_name}: {e}")
            return None

        for attr in attr_path:
            obj = getattr(obj, attr, None)
            if obj is None:
                return None
        return obj

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_enum(self, obj: Any) -> bool:
        return isinstance(obj, type) and issubclass(obj, enum.Enum)

    def is_primitive(self, obj: Any) -> bool:
        return obj in PRIMITIVE_TYPES or obj is type(None) or obj is Any

    def is_object(self, obj: Any) -> bool:
        """True for a user class that describes as a named object"""
        return (
            isinstance(obj, type)
            and not self.is_enum(obj)
            and not self.is_primitive(obj)
            and obj.__module__ != "builtins"
        )

    def object_type(self, annotation: Any) -> Optional[type]:
        """
        Class named by an annotation, looking through Annotated and Optional

        Returns:
            The class, or None if the annotation is not a single object type
            (primitives, enums, unions of several members)
        """
        while True:
            origin = get_origin(annotation)

            if origin is Annotated:
                annotation = get_args(annotation)[0]
                continue

            if origin is Union or (UnionType is not None and isinstance(annotation, UnionType)):
                members = [a for a in get_args(annotation) if a is not type(None)]
                if len(members) != 1:
                    return None
                annotation = members[0]
                continue

            break

        if isinstance(annotation, ForwardRef):
            annotation = annotation.__forward_arg__

        cls = self.resolve(annotation)
        return cls if self.is_object(cls) else None

    # ------------------------------------------------------------------
    # Type descriptions
    # ------------------------------------------------------------------

    def describe(self, annotation: Any) -> Tuple[TypeDescriptor, bool, List[ConstraintTag]]:
        """
        Describe a type annotation

        Returns:
            Tuple of (descriptor, nullable, constraint tags found in
            Annotated metadata)
        """
        constraints: List[ConstraintTag] = []
        nullable = False

        while True:
            origin = get_origin(annotation)

            if origin is Annotated:
                args = get_args(annotation)
                constraints.extend(m for m in args[1:] if isinstance(m, ConstraintTag))
                annotation = args[0]
                continue

            if origin is Union or (UnionType is not None and isinstance(annotation, UnionType)):
                args = get_args(annotation)
                members = [a for a in args if a is not type(None)]
                if len(members) < len(args):
                    nullable = True
                if len(members) == 1:
                    annotation = members[0]
                    continue

                branches = [self._describe_type(m) for m in members]
                if nullable:
                    branches.append(TypeDescriptor.primitive(NULL_TYPE))
                return TypeDescriptor.union(branches), nullable, constraints

            return self._describe_type(annotation), nullable, constraints

    def _describe_type(self, annotation: Any) -> TypeDescriptor:
        """Describe an annotation with Optional/Annotated already removed"""
        origin = get_origin(annotation)

        if origin is Annotated:
            return self._describe_type(get_args(annotation)[0])

        if origin is Union or (UnionType is not None and isinstance(annotation, UnionType)):
            descriptor, _, _ = self.describe(annotation)
            return descriptor

        if origin is not None:
            if origin in SEQUENCE_ORIGINS or getattr(origin, "__name__", "") in SEQUENCE_NAMES:
                args = [a for a in get_args(annotation) if a is not Ellipsis]
                return TypeDescriptor.array(self._describe_type(args[0]) if args else None)
            if origin is dict:
                return TypeDescriptor.primitive("dict")
            return self._describe_type(origin)

        if annotation in SEQUENCE_ORIGINS:
            return TypeDescriptor.array()

        if annotation is None or annotation is type(None):
            return TypeDescriptor.primitive(NULL_TYPE)

        if isinstance(annotation, (str, ForwardRef)):
            name = annotation if isinstance(annotation, str) else annotation.__forward_arg__
            resolved = self.resolve(name)
            if resolved is None:
                return TypeDescriptor.primitive(name)
            return self._describe_type(resolved)

        if annotation in PRIMITIVE_TYPES:
            return TypeDescriptor.primitive(PRIMITIVE_TYPES[annotation])

        if self.is_enum(annotation):
            return TypeDescriptor.enum(self.identity_of(annotation))

        if self.is_object(annotation):
            return TypeDescriptor.object(self.identity_of(annotation))

        return TypeDescriptor.primitive("mixed")

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def fields(self, identity: Any) -> List[FieldDescriptor]:
        """
        Instance fields of a DTO in declaration order

        Args:
            identity: DTO identity or class

        Returns:
            List of FieldDescriptor (empty if the type cannot be resolved)
        """
        cls = self.resolve(identity)
        if not self.is_object(cls):
            return []

        hints = self._type_hints(cls)
        descriptors = []

        if dataclasses.is_dataclass(cls):
            for dc_field in dataclasses.fields(cls):
                annotation = hints.get(dc_field.name, dc_field.type)
                descriptor = self._field_descriptor(dc_field.name, annotation)
                descriptor.constraints.extend(self._metadata_constraints(dc_field.metadata))
                descriptors.append(descriptor)
            return descriptors

        for name, annotation in hints.items():
            if name.startswith("_") or get_origin(annotation) is ClassVar or annotation is ClassVar:
                continue
            descriptors.append(self._field_descriptor(name, annotation))

        return descriptors

    def constraints(self, field: FieldDescriptor) -> List[ConstraintTag]:
        return list(field.constraints)

    def _field_descriptor(self, name: str, annotation: Any) -> FieldDescriptor:
        type_descriptor, nullable, constraints = self.describe(annotation)
        return FieldDescriptor(
            name=name,
            type=type_descriptor,
            nullable=nullable,
            constraints=constraints,
        )

    @staticmethod
    def _metadata_constraints(metadata: Any) -> List[ConstraintTag]:
        tags = metadata.get("constraints", ()) if metadata else ()
        if isinstance(tags, ConstraintTag):
            tags = [tags]
        return [t for t in tags if isinstance(t, ConstraintTag)]

    @staticmethod
    def _type_hints(obj: Any) -> Dict[str, Any]:
        """Evaluated type hints, falling back to raw annotations"""
        try:
            return get_type_hints(obj, include_extras=True)
        except Exception as e:
            logger.debug(f"Falling back to raw annotations for {obj!r}: {e}")

        if isinstance(obj, type):
            annotations: Dict[str, Any] = {}
            for base in reversed(obj.__mro__):
                annotations.update(base.__dict__.get("__annotations__", {}))
            return annotations
        return dict(getattr(obj, "__annotations__", {}) or {})

    # ------------------------------------------------------------------
    # Array item hints
    # ------------------------------------------------------------------

    def element_type_hint(self, owner: Any, field_name: str) -> Optional[TypeDescriptor]:
        """
        Best-effort array item type from the owner's documentation

        Looks at the `__init__` docstring first, then the class docstring.

        Args:
            owner: DTO identity or class declaring the field
            field_name: Field to look up

        Returns:
            Item TypeDescriptor, or None if the docs say nothing
        """
        cls = self.resolve(owner)
        if not isinstance(cls, type):
            return None

        init = cls.__dict__.get("__init__")
        docs = [getattr(init, "__doc__", None), cls.__doc__]

        for doc in docs:
            if not doc:
                continue
            item_name = self._parse_item_type(doc, field_name)
            if item_name is not None:
                return self._resolve_hint(item_name, cls)

        return None

    @staticmethod
    def _parse_item_type(doc: str, field_name: str) -> Optional[str]:
        name = re.escape(field_name)
        for pattern in HINT_PATTERNS:
            match = re.search(pattern.format(name=name), doc, re.MULTILINE)
            if match:
                return match.group(1)
        return None

    def _resolve_hint(self, item_name: str, owner: type) -> TypeDescriptor:
        if item_name in BUILTIN_HINT_NAMES:
            return TypeDescriptor.primitive(item_name)

        resolved = self._aliases.get(item_name)
        if resolved is None:
            module = sys.modules.get(owner.__module__)
            resolved = getattr(module, item_name, None) if module else None
        if resolved is None and "." in item_name:
            resolved = self.resolve(item_name)
        if resolved is None:
            resolved = getattr(builtins, item_name, None)

        if resolved is None:
            return TypeDescriptor.primitive(item_name)
        return self._describe_type(resolved)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def entry_point(self, handler: Any) -> Optional[Callable]:
        """
        Invocable entry point of a handler

        Classes must define `__call__` themselves (or through a base class);
        plain functions are their own entry point.
        """
        obj = self.resolve(handler)
        if obj is None:
            return None

        if isinstance(obj, type):
            for klass in obj.__mro__:
                if klass is object:
                    continue
                if "__call__" in vars(klass):
                    return vars(klass)["__call__"]
            return None

        if inspect.isfunction(obj) or inspect.ismethod(obj):
            return obj

        # Handler instance: bound __call__ of its class
        call = getattr(obj, "__call__", None)
        if inspect.ismethod(call):
            return call

        return None

    def entry_point_signature(self, handler: Any) -> Optional[Tuple[List[Any], Any]]:
        """
        Parameter annotations (declaration order) and return annotation

        `self`/`cls` and `*args`/`**kwargs` are left out; parameters without an
        annotation are reported as None.

        Returns:
            Tuple of (parameter annotations, return annotation), or None if
            the handler has no entry point
        """
        entry = self.entry_point(handler)
        if entry is None:
            return None

        try:
            signature = inspect.signature(entry)
        except (TypeError, ValueError) as e:
            logger.debug(f"No signature for handler {handler!r}: {e}")
            return None

        hints = self._type_hints(entry)
        owner = self.resolve(handler)
        params = []

        for index, param in enumerate(signature.parameters.values()):
            if index == 0 and isinstance(owner, type) and param.name in ("self", "cls"):
                continue
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            annotation = hints.get(param.name, param.annotation)
            params.append(None if annotation is param.empty else annotation)

        return_annotation = hints.get("return", signature.return_annotation)
        if return_annotation is signature.empty:
            return_annotation = None

        return params, return_annotation
