"""
Introspection Module

Reads the host application's types:
- Type identities and field descriptions (TypeRegistry)
- Handler request/response types (HandlerAnalyzer)
- DTO discovery by package scan
- Routing table loading
"""

from .type_registry import TypeRegistry
from .handler_analyzer import HandlerAnalyzer
from .dto_discovery import find_dtos
from .route_loader import load_routing_table

__all__ = [
    "TypeRegistry",
    "HandlerAnalyzer",
    "find_dtos",
    "load_routing_table",
]
