"""Command-line driver for OpenAPI generation."""
import logging
from typing import Dict, List, Optional, Sequence

import click
from colorama import Fore, Style

from dto_openapi.config import OpenApiConfig, app_config
from dto_openapi.exporter.document_builder import OpenApiDocumentBuilder
from dto_openapi.exporter.document_writer import DocumentWriter
from dto_openapi.generator.schema_generator import SchemaGenerator
from dto_openapi.generator.security_schemes import SecuritySchemes
from dto_openapi.introspection.dto_discovery import find_dtos
from dto_openapi.introspection.route_loader import load_routing_table
from dto_openapi.introspection.type_registry import TypeRegistry

logger = logging.getLogger(__name__)


class GeneratorCLI:
    """Runs the generate/schema commands and reports progress."""

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self.registry = registry or TypeRegistry()
        self.writer = DocumentWriter()

    def print_header(self, title: str):
        """Print a section header."""
        click.echo(f"\n{Fore.CYAN}{'━' * 45}")
        click.echo(f"{Fore.CYAN}{title}")
        click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")

    def load_config(
        self,
        config_path: Optional[str] = None,
        title: Optional[str] = None,
        version: Optional[str] = None,
        output_path: Optional[str] = None,
        generate_json: bool = False,
        bearer_auth: bool = False,
    ) -> OpenApiConfig:
        """
        Load configuration and apply command-line overrides

        Raises:
            FileNotFoundError: If the config file does not exist
            RuntimeError: If the config file is invalid
        """
        if config_path:
            click.echo(f"{Fore.CYAN}Loading config from {config_path}...")
            config = OpenApiConfig.from_yaml_file(config_path)
        else:
            config = OpenApiConfig.default()

        config = config.with_overrides(
            title=title,
            version=version,
            output_path=output_path,
            generate_json=generate_json,
        )

        if bearer_auth and not config.security_schemes:
            config.security_schemes = SecuritySchemes.bearer_token()
            config.security = [{"bearerAuth": []}]

        return config

    def collect_dtos(self, packages: Sequence[str]) -> List[str]:
        """Find DTOs in the given packages (de-duplicated, in order)"""
        dtos: List[str] = []
        for package in packages:
            for dto in find_dtos(package):
                if dto not in dtos:
                    dtos.append(dto)
        return dtos

    def generate(
        self,
        config: OpenApiConfig,
        routes_reference: Optional[str] = None,
        dto_packages: Sequence[str] = (),
    ) -> bool:
        """
        Generate and write the OpenAPI document

        Args:
            config: Generator configuration
            routes_reference: module:attribute of the routing table
            dto_packages: Packages scanned for extra DTOs

        Returns:
            True on success
        """
        self.print_header("Generate OpenAPI Documentation")

        routes_reference = routes_reference or app_config.routes
        if not routes_reference:
            click.echo(f"{Fore.RED}❌ No routing table given (use --routes or OPENAPI_ROUTES)")
            return False

        try:
            click.echo(f"{Fore.CYAN}Loading routes from {routes_reference}...")
            routes = load_routing_table(routes_reference, self.registry)

            packages = list(dto_packages) or app_config.dto_packages
            dtos = self.collect_dtos(packages)
            if packages:
                click.echo(f"{Fore.CYAN}Found {len(dtos)} DTOs in {', '.join(packages)}")

            builder = OpenApiDocumentBuilder(config, self.registry)
            document = builder.build(routes, dto_types=dtos)

            written = self.writer.write(document, config.output_path, config.generate_json)

        except Exception as e:
            logger.exception("OpenAPI generation failed")
            click.echo(f"{Fore.RED}❌ Generation failed: {e}")
            return False

        click.echo(f"{Fore.GREEN}✅ OpenAPI documentation generated!")
        click.echo(f"{Fore.GREEN}   Paths: {len(document['paths'])}")
        click.echo(f"{Fore.GREEN}   Schemas: {len(document['components']['schemas'])}")
        for path in written:
            click.echo(f"{Fore.GREEN}   Written: {path}")

        self._report_failures(builder.failures)
        return True

    def print_schema(self, identity: str) -> bool:
        """Print the schema of a single DTO as YAML"""
        generator = SchemaGenerator(self.registry)
        schema = generator.generate(identity)

        if not schema:
            click.echo(f"{Fore.RED}❌ Not a DTO class: {identity}", err=True)
            return False

        name = generator.get_schema_name(self.registry.resolve(identity))
        click.echo(self.writer.to_yaml({name: schema}), nl=False)
        return True

    def _report_failures(self, failures: Dict[str, str]):
        if not failures:
            return

        click.echo(f"\n{Fore.YELLOW}⚠️  {len(failures)} schemas could not be generated:")
        for identity, error in failures.items():
            click.echo(f"{Fore.YELLOW}   {identity}: {error}")
