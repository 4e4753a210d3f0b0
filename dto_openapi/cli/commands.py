"""click commands for the dto-openapi tool."""
import logging

import click
from colorama import Fore, Style, init

from dto_openapi import __version__
from dto_openapi.config import app_config
from dto_openapi.cli.generator_cli import GeneratorCLI

# Initialize colorama
init(autoreset=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}DTO OpenAPI Generator{Fore.CYAN}                ║")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}Docs from handlers and DTO classes{Fore.CYAN}   ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


def configure_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else getattr(logging, app_config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.group()
@click.version_option(version=__version__)
def cli():
    """DTO OpenAPI Generator - OpenAPI 3.0 docs from routes and DTOs."""
    pass


@cli.command()
@click.argument("config", required=False, type=click.Path(dir_okay=False))
@click.option("--routes", "-r", help="Routing table as module:attribute (default: $OPENAPI_ROUTES)")
@click.option("--dto-package", "-d", multiple=True, help="Package scanned for extra DTOs (repeatable)")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output YAML file")
@click.option("--json", "-j", "generate_json", is_flag=True, help="Also write JSON output")
@click.option("--title", "-t", help="API title")
@click.option("--api-version", help="API version")
@click.option("--bearer-auth", is_flag=True, help="Add a JWT bearer security scheme if none is configured")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def generate(ctx, config, routes, dto_package, output, generate_json, title, api_version, bearer_auth, verbose):
    """Generate OpenAPI documentation from the routing table."""
    configure_logging(verbose)
    print_banner()

    cli_tool = GeneratorCLI()

    try:
        openapi_config = cli_tool.load_config(
            config_path=config,
            title=title,
            version=api_version,
            output_path=output,
            generate_json=generate_json,
            bearer_auth=bearer_auth,
        )
    except (FileNotFoundError, RuntimeError) as e:
        click.echo(f"{Fore.RED}❌ {e}")
        ctx.exit(1)

    if not cli_tool.generate(openapi_config, routes, dto_package):
        ctx.exit(1)


@cli.command()
@click.argument("identity")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def schema(ctx, identity, verbose):
    """Print the schema of one DTO class as YAML."""
    configure_logging(verbose)

    if not GeneratorCLI().print_schema(identity):
        ctx.exit(1)
