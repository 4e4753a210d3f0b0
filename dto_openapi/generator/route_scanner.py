"""
Route Scanner - turns a routing table into OpenAPI path items.

For every route the handler (last entry of the middleware pipeline) is
analyzed once, then one operation is generated per allowed HTTP method:

- tag from the handler's module path (`item.application.GetItemHandler` → `items`)
- summary and operationId from the handler name (`GetItemHandler` → "get item", `getItem`)
- path parameters from `{name}` / `{name:regex}` placeholders
- request body for POST/PUT/PATCH when the handler takes a DTO
- responses by method (201 POST, 204 DELETE, 200 otherwise) plus 400/404
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from dto_openapi.generator.schema_generator import SchemaGenerator
from dto_openapi.generator.type_resolver import schema_ref
from dto_openapi.introspection.handler_analyzer import HandlerAnalyzer
from dto_openapi.schema.models import HandlerInfo, OperationDescriptor, RouteDescriptor

logger = logging.getLogger(__name__)

DEFAULT_STRUCTURAL_SEGMENTS = ("Application", "Handler", "Command")
BODY_METHODS = ("POST", "PUT", "PATCH")
FALLBACK_TAG = "API"

# {id} or {id:[0-9]+}
PATH_PARAMETER_PATTERN = re.compile(r"\{([^:}]+)(?::[^}]+)?\}")
CAMEL_CASE_SPLIT = re.compile(r"(?=[A-Z])")
HANDLER_SUFFIX = re.compile(r"_?Handler$|_handler$")

RouteInput = Union[RouteDescriptor, Mapping[str, Any]]


class RouteScanner:
    """Scans application routes and generates OpenAPI paths"""

    def __init__(
        self,
        handler_analyzer: Optional[HandlerAnalyzer] = None,
        schema_generator: Optional[SchemaGenerator] = None,
        structural_segments: Iterable[str] = DEFAULT_STRUCTURAL_SEGMENTS,
    ):
        """
        Initialize RouteScanner

        Args:
            handler_analyzer: Extracts request/response DTOs from handlers
            schema_generator: Used to name $ref targets
            structural_segments: Module path segments never used as a tag
                (compared case-insensitively)
        """
        self.schema_generator = schema_generator or SchemaGenerator()
        self.registry = self.schema_generator.registry
        self.handler_analyzer = handler_analyzer or HandlerAnalyzer(self.registry)
        self.structural_segments = {s.lower() for s in structural_segments}
        self.discovered_types: List[str] = []

    def scan_routes(self, routes: Union[Iterable[RouteInput], Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Scan all routes and generate OpenAPI paths

        Routes sharing a path are merged. When two routes declare the same
        method for the same path, the later route wins.

        Args:
            routes: Route records, or a mapping holding them under `routes`

        Returns:
            {path: {lowercase method: operation}}
        """
        if isinstance(routes, Mapping):
            routes = routes.get("routes") or []

        paths: Dict[str, Dict[str, Any]] = {}
        self.discovered_types = []

        for route in routes:
            if not isinstance(route, RouteDescriptor):
                route = RouteDescriptor.from_dict(route)

            if not route.path:
                logger.debug(f"Skipping route without path: {route!r}")
                continue

            operations = self._generate_operations(route)
            if not operations:
                continue

            path_item = paths.setdefault(route.path, {})

            for method, operation in operations.items():
                if method in path_item:
                    logger.warning(
                        f"Duplicate operation {method.upper()} {route.path}: "
                        f"{operation['operationId']} replaces {path_item[method]['operationId']}"
                    )
                path_item[method] = operation

        logger.info(f"Scanned {len(paths)} unique paths")
        return paths

    def _generate_operations(self, route: RouteDescriptor) -> Dict[str, Dict[str, Any]]:
        handler = self._extract_handler(route)
        if handler is None:
            logger.debug(f"No handler found for route {route.path}")
            return {}

        handler_info = self.handler_analyzer.analyze(handler)
        self._record_types(handler_info)

        handler_identity = self.registry.identity_of(handler)
        operations = {}

        for http_method in route.allowed_methods:
            operation = self._generate_operation(handler_identity, http_method.upper(), route, handler_info)
            operations[http_method.lower()] = operation.to_dict()

        return operations

    def _extract_handler(self, route: RouteDescriptor) -> Optional[Any]:
        """Handler is the last middleware; it must resolve to a class or function"""
        handler = route.handler
        if handler is None:
            return None

        resolved = self.registry.resolve(handler)
        if resolved is None or not callable(resolved):
            return None

        return resolved

    def _record_types(self, handler_info: HandlerInfo) -> None:
        for dto in (handler_info.request_type, handler_info.response_type):
            if dto and dto not in self.discovered_types:
                self.discovered_types.append(dto)

    def _generate_operation(
        self,
        handler_identity: str,
        http_method: str,
        route: RouteDescriptor,
        handler_info: HandlerInfo,
    ) -> OperationDescriptor:
        operation = OperationDescriptor(
            operation_id=self.generate_operation_id(handler_identity),
            summary=self.generate_summary(handler_identity),
            tag=self.extract_tag(handler_identity),
            parameters=self.extract_path_parameters(route.path),
        )

        if handler_info.request_type and http_method in BODY_METHODS:
            operation.request_body = self._generate_request_body(handler_info.request_type)

        if handler_info.response_type:
            operation.responses = self._generate_responses(handler_info.response_type, http_method)
        else:
            operation.responses = self._generate_default_responses(http_method)

        return operation

    def extract_tag(self, handler_identity: str) -> str:
        """
        First non-structural module segment, pluralized: `item.application.X` → `items`

        A handler without a registered alias is named by its module path, so
        the top-level package usually wins (`myapp.handlers.GetItemHandler`
        gives `myapps`). List the package segments under `tagSkipSegments`,
        or register the handler with `TypeRegistry.register()` under an
        identity such as `Item.Application.GetItemHandler`.
        """
        for part in handler_identity.replace(":", ".").split("."):
            if part and part.lower() not in self.structural_segments:
                return part + "s"

        return FALLBACK_TAG

    @staticmethod
    def _handler_words(handler_identity: str) -> List[str]:
        """Words of the handler's short name with the Handler suffix removed"""
        name = handler_identity.replace(":", ".").rsplit(".", 1)[-1]
        name = HANDLER_SUFFIX.sub("", name)

        words = []
        for part in name.split("_"):
            words.extend(w for w in CAMEL_CASE_SPLIT.split(part) if w)
        return words

    def generate_summary(self, handler_identity: str) -> str:
        words = self._handler_words(handler_identity)
        if not words:
            return "Operation"
        return " ".join(word.lower() for word in words)

    def generate_operation_id(self, handler_identity: str) -> str:
        name = handler_identity.replace(":", ".").rsplit(".", 1)[-1]
        name = HANDLER_SUFFIX.sub("", name)

        if not name:
            return "operation"

        if "_" in name:
            words = [w for w in name.split("_") if w]
            return words[0].lower() + "".join(w[:1].upper() + w[1:] for w in words[1:])

        return name[:1].lower() + name[1:]

    @staticmethod
    def extract_path_parameters(path: str) -> List[Dict[str, Any]]:
        """
        Extract path parameters like {id} or {id:[regex]}

        Type is inferred from the name: `id`/`uuid` are UUID strings,
        `*_id*` and `*Id` are integers, everything else is a string.
        """
        parameters = []

        for param_name in PATH_PARAMETER_PATTERN.findall(path):
            schema: Dict[str, Any] = {"type": "string"}

            if param_name in ("id", "uuid"):
                schema["format"] = "uuid"
            elif "_id" in param_name or param_name.endswith("Id"):
                schema["type"] = "integer"

            parameters.append({
                "name": param_name,
                "in": "path",
                "required": True,
                "schema": schema,
            })

        return parameters

    def _generate_request_body(self, request_type: str) -> Dict[str, Any]:
        schema_name = self.schema_generator.get_schema_name(request_type)

        return {
            "required": True,
            "content": {
                "application/json": {
                    "schema": schema_ref(schema_name),
                },
            },
        }

    @staticmethod
    def _success_code(http_method: str) -> str:
        if http_method == "POST":
            return "201"
        if http_method == "DELETE":
            return "204"
        return "200"

    def _generate_responses(self, response_type: str, http_method: str) -> Dict[str, Dict[str, Any]]:
        schema_name = self.schema_generator.get_schema_name(response_type)
        success_code = self._success_code(http_method)
        responses: Dict[str, Dict[str, Any]] = {}

        if success_code == "204":
            responses[success_code] = {"description": "No Content"}
        else:
            responses[success_code] = {
                "description": "Success",
                "content": {
                    "application/json": {
                        "schema": schema_ref(schema_name),
                    },
                },
            }

        responses["400"] = {"description": "Bad Request"}
        responses["404"] = {"description": "Not Found"}

        return responses

    def _generate_default_responses(self, http_method: str) -> Dict[str, Dict[str, Any]]:
        return {
            self._success_code(http_method): {"description": "Success"},
            "400": {"description": "Bad Request"},
            "404": {"description": "Not Found"},
        }
