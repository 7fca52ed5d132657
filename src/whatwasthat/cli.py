"""Command-line interface for whatwasthat."""

import asyncio
import json
import sys
from pathlib import Path

import click

from whatwasthat import __version__
from whatwasthat.config import load_config
from whatwasthat.metadata.tmdb import CatalogAuthError
from whatwasthat.service import LookupService
from whatwasthat.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (defaults to environment variables)",
)
@click.pass_context
def cli(ctx, config):
    """whatwasthat - find the movie or episode a scene comes from."""
    try:
        cfg = load_config(config)
        ctx.ensure_object(dict)
        ctx.obj["config"] = cfg

        setup_logging(cfg.logging)

    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("question")
@click.pass_context
def ask(ctx, question):
    """Identify the movie or episode QUESTION is about and print it as JSON."""
    config = ctx.obj["config"]

    try:
        service = LookupService.from_config(config)
    except CatalogAuthError as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)

    async def _ask():
        try:
            return await service.lookup_and_enrich(question)
        finally:
            await service.aclose()

    result = asyncio.run(_ask())

    click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    if not result.is_success:
        sys.exit(1)


@cli.command()
@click.pass_context
def serve(ctx):
    """Start the HTTP API server."""
    config = ctx.obj["config"]

    click.echo("Starting whatwasthat API...")
    click.echo(f"Listening on {config.api.host}:{config.api.port}")
    click.echo("")
    click.echo("Endpoints:")
    click.echo(f"  - Ask:          http://{config.api.host}:{config.api.port}/ask")
    click.echo(f"  - Health check: http://{config.api.host}:{config.api.port}/health")
    click.echo(f"  - Debug:        http://{config.api.host}:{config.api.port}/debug")
    click.echo(f"  - API docs:     http://{config.api.host}:{config.api.port}/docs")
    click.echo("")

    from whatwasthat.server import start_server

    try:
        start_server(config)
    except CatalogAuthError as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\n\nServer stopped")
        sys.exit(0)


@cli.command()
def version():
    """Show version information."""
    click.echo(f"whatwasthat v{__version__}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
