"""Descriptor models shared by the introspection and generator layers."""

from .models import (
    FieldDescriptor,
    HandlerInfo,
    OperationDescriptor,
    RouteDescriptor,
    TypeDescriptor,
    TypeKind,
)

__all__ = [
    "FieldDescriptor",
    "HandlerInfo",
    "OperationDescriptor",
    "RouteDescriptor",
    "TypeDescriptor",
    "TypeKind",
]
