"""
DTO OpenAPI - OpenAPI 3.0 documentation from handlers and DTO classes.

Generates:
- `paths` from a routing table and handler signatures
- `components.schemas` from dataclasses / annotated classes
"""

__version__ = "0.1.0"

from .config import OpenApiConfig
from .exporter.document_builder import OpenApiDocumentBuilder
from .exporter.document_writer import DocumentWriter
from .generator.route_scanner import RouteScanner
from .generator.schema_generator import SchemaGenerator
from .generator.security_schemes import SecuritySchemes
from .introspection.dto_discovery import find_dtos
from .introspection.type_registry import TypeRegistry

__all__ = [
    "OpenApiConfig",
    "OpenApiDocumentBuilder",
    "DocumentWriter",
    "RouteScanner",
    "SchemaGenerator",
    "SecuritySchemes",
    "TypeRegistry",
    "find_dtos",
]
