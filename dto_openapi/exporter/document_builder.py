"""
Document Builder - assembles the OpenAPI document.

Merges:
- paths from the RouteScanner
- component schemas from the SchemaGenerator
- static configuration (info, servers, security, tags)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from dto_openapi.config import OpenApiConfig
from dto_openapi.generator.route_scanner import RouteScanner
from dto_openapi.generator.schema_generator import SchemaGenerator
from dto_openapi.introspection.handler_analyzer import HandlerAnalyzer
from dto_openapi.introspection.type_registry import TypeRegistry

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"


class OpenApiDocumentBuilder:
    """
    Builds a complete OpenAPI document from routes and DTOs

    Usage:
    ```python
    builder = OpenApiDocumentBuilder(OpenApiConfig.default())
    document = builder.build(routes, dto_types=find_dtos("app"))
    ```
    """

    def __init__(self, config: Optional[OpenApiConfig] = None, registry: Optional[TypeRegistry] = None):
        self.config = config or OpenApiConfig.default()
        self.registry = registry or TypeRegistry()
        self.schema_generator = SchemaGenerator(self.registry)
        self.route_scanner = RouteScanner(
            HandlerAnalyzer(self.registry, ambient_types=self._resolve_ambient_types()),
            self.schema_generator,
            structural_segments=self.config.tag_skip_segments,
        )

    def _resolve_ambient_types(self) -> List[type]:
        """Classes named by the ambientTypes setting (unresolvable entries are skipped)"""
        ambient_types = []
        for reference in self.config.ambient_types:
            cls = self.registry.resolve(reference)
            if isinstance(cls, type):
                ambient_types.append(cls)
            else:
                logger.warning(f"Ambient type {reference} not found, ignoring")
        return ambient_types

    def build(self, routes: Iterable[Any], dto_types: Iterable[Any] = ()) -> Dict[str, Any]:
        """
        Build the OpenAPI document

        Args:
            routes: Routing table (RouteDescriptor or mapping records)
            dto_types: Extra DTOs to document besides those used by handlers

        Returns:
            OpenAPI document as a dict
        """
        self.schema_generator.clear_cache()

        paths = self.route_scanner.scan_routes(routes)

        dtos = list(self.route_scanner.discovered_types)
        for dto in dto_types:
            if dto not in dtos:
                dtos.append(dto)

        schemas = self.schema_generator.generate_all(dtos)

        for identity, error in self.schema_generator.failures.items():
            logger.error(f"Schema for {identity} was left out: {error}")

        document: Dict[str, Any] = {
            "openapi": OPENAPI_VERSION,
            "info": self.config.info,
            "servers": self.config.servers,
            "paths": paths,
            "components": {
                "schemas": schemas,
            },
        }

        if self.config.security_schemes:
            document["components"]["securitySchemes"] = self.config.security_schemes

        if self.config.security:
            document["security"] = self.config.security

        if self.config.tags:
            document["tags"] = self.config.tags

        return document

    @property
    def failures(self) -> Dict[str, str]:
        """Per-type schema generation errors from the last build"""
        return dict(self.schema_generator.failures)
