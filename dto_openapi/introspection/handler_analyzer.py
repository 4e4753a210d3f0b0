"""Handler Analyzer - finds the request and response DTOs of a handler."""
import logging
from typing import Any, Iterable, Optional

from dto_openapi.introspection.type_registry import TypeRegistry
from dto_openapi.markers import ServerRequest
from dto_openapi.schema.models import HandlerInfo

logger = logging.getLogger(__name__)


class HandlerAnalyzer:
    """Analyzes handler entry points to extract request and response DTOs"""

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        ambient_types: Iterable[type] = (),
    ):
        """
        Initialize HandlerAnalyzer

        Args:
            registry: Type registry used to resolve handlers and annotations
            ambient_types: Extra framework request types to skip, on top of
                ServerRequest
        """
        self.registry = registry or TypeRegistry()
        self.ambient_types = (ServerRequest,) + tuple(ambient_types)

    def analyze(self, handler: Any) -> HandlerInfo:
        """
        Analyze handler and extract DTO information

        Args:
            handler: Handler identity, class or function

        Returns:
            HandlerInfo (both types None if the handler cannot be located or
            has no entry point)
        """
        signature = self.registry.entry_point_signature(handler)
        if signature is None:
            logger.debug(f"No entry point found for handler {handler!r}")
            return HandlerInfo()

        params, return_annotation = signature

        return HandlerInfo(
            request_type=self._extract_request_type(params),
            response_type=self._extract_response_type(return_annotation),
        )

    def _extract_request_type(self, params: list) -> Optional[str]:
        """First parameter that is neither the ambient request nor a primitive"""
        for annotation in params:
            if annotation is None:
                continue

            cls = self.registry.object_type(annotation)

            if cls is None or self._is_ambient(cls):
                continue

            return self.registry.identity_of(cls)

        return None

    def _extract_response_type(self, annotation: Any) -> Optional[str]:
        """Return annotation, if it names an object type (Optional included)"""
        if annotation is None:
            return None

        cls = self.registry.object_type(annotation)
        if cls is None:
            return None

        return self.registry.identity_of(cls)

    def _is_ambient(self, cls: Any) -> bool:
        mro = getattr(cls, "__mro__", ())
        return any(marker in mro for marker in self.ambient_types)
