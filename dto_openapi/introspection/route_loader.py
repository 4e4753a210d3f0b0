"""Load a routing table from a `module:attribute` reference."""
import logging
from typing import Any, List, Mapping, Optional

from dto_openapi.introspection.type_registry import TypeRegistry
from dto_openapi.schema.models import RouteDescriptor

logger = logging.getLogger(__name__)


def load_routing_table(reference: str, registry: Optional[TypeRegistry] = None) -> List[RouteDescriptor]:
    """
    Load routes from a Python object

    The referenced object may be a list of route records, a mapping with a
    `routes` key (application config style) or a callable returning either.

    Args:
        reference: `package.module:attribute` or `package.module.attribute`
        registry: Registry used to resolve the reference

    Returns:
        List of RouteDescriptor

    Raises:
        ValueError: If the reference cannot be resolved or holds no routes
    """
    registry = registry or TypeRegistry()
    source = registry.resolve(reference)

    if source is None:
        raise ValueError(f"Could not load routing table from '{reference}'")

    if callable(source) and not isinstance(source, (list, tuple, Mapping)):
        source = source()

    if isinstance(source, Mapping):
        source = source.get("routes")

    if not isinstance(source, (list, tuple)):
        raise ValueError(f"'{reference}' does not hold a list of routes")

    routes = []
    for record in source:
        if isinstance(record, RouteDescriptor):
            routes.append(record)
        elif isinstance(record, Mapping):
            routes.append(RouteDescriptor.from_dict(record))
        else:
            logger.debug(f"Ignoring malformed route entry: {record!r}")

    logger.info(f"Loaded {len(routes)} routes from {reference}")
    return routes
