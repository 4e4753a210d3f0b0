"""OpenAPI fragment generators."""

from .type_resolver import TypeResolver
from .constraint_extractor import ConstraintExtractor
from .schema_generator import SchemaGenerator
from .route_scanner import RouteScanner
from .security_schemes import SecuritySchemes

__all__ = [
    "TypeResolver",
    "ConstraintExtractor",
    "SchemaGenerator",
    "RouteScanner",
    "SecuritySchemes",
]
