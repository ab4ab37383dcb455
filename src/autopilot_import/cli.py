"""CLI entry point for autopilot-import."""

import asyncio
import logging
from pathlib import Path

import click
import uvicorn

from .config import get_remote_config
from .errors import ImportFailure
from .export import history_to_json, history_to_markdown, messages_to_json, messages_to_markdown
from .importer import import_local_folder, import_remote_project

FORMATS = click.Choice(["json", "md"])


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Import projects as chat histories for a coding assistant."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--port", default=8080, help="Port to serve on.")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
def serve(port: int, host: str):
    """Start the import API server."""
    click.echo(f"Starting autopilot-import on http://{host}:{port}")
    uvicorn.run("autopilot_import.server:app", host=host, port=port, reload=False)


@main.command()
@click.argument("project_hex")
@click.option("--base-url", default=None, help="Autopilot service URL (defaults to $AUTOPILOT_AI_URL).")
@click.option("--format", "fmt", type=FORMATS, default="json", help="Output format.")
def project(project_hex: str, base_url: str | None, fmt: str):
    """Import a remote autopilot project and print its chat history."""
    try:
        item = asyncio.run(import_remote_project(project_hex, get_remote_config(base_url)))
    except ImportFailure as e:
        raise click.ClickException(str(e))

    click.echo(history_to_json(item) if fmt == "json" else history_to_markdown(item))


@main.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--name", default=None, help="Project name (defaults to the folder name).")
@click.option("--format", "fmt", type=FORMATS, default="json", help="Output format.")
def folder(path: Path, name: str | None, fmt: str):
    """Import a local folder and print its chat messages."""
    try:
        messages = asyncio.run(import_local_folder(path, name))
    except ImportFailure as e:
        raise click.ClickException(str(e))

    title = name or path.resolve().name
    click.echo(messages_to_json(messages) if fmt == "json" else messages_to_markdown(title, messages))
