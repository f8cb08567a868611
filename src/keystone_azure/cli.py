"""CLI for keystone-azure."""

import logging
import mimetypes
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .adapter import StorageAdapter
from .config import load_options
from .errors import BackendAuthError, BackendNotFoundError, StorageAdapterError
from .storage_models import FileRecord

DEFAULT_CONFIG = Path("keystone-azure.yaml")

app = typer.Typer(help="""\
Upload, address and delete CMS files in an Azure storage container,
using the same configuration as the site's storage adapter.""")

console = Console()


def _configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _get_adapter(config_path: Path, verbose: bool = False) -> StorageAdapter:
    """Create a StorageAdapter from the YAML options file and the environment.

    Raises:
        typer.Exit: If the configuration is invalid
    """
    _configure_logging(verbose)
    try:
        options = load_options(config_path)
        return StorageAdapter(options, options.get("schema"))
    except StorageAdapterError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        console.print(f"[dim]Configuration file: {config_path}[/dim]")
        raise typer.Exit(1)


def _report_error(e: StorageAdapterError) -> None:
    console.print(f"[red]✗[/red] {escape(str(e))}")
    if isinstance(e, BackendAuthError):
        console.print("[dim]Check the account key or AZURE_STORAGE_CONNECTION_STRING[/dim]")
    elif isinstance(e, BackendNotFoundError):
        console.print("[dim]Check that the container exists and the name is right[/dim]")


@app.command()
def upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local file to upload"),
    mimetype: Optional[str] = typer.Option(None, "--mimetype", "-m", help="Content type (default: guessed from the name)"),
    name: Optional[str] = typer.Option(None, "--name", help="Blob name (default: random name)"),
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="YAML options file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Upload a local file to the configured container.

    Examples:
        keystone-azure upload photo.jpg
        keystone-azure upload report.pdf --name reports/2024.pdf
    """
    adapter = _get_adapter(config, verbose)

    file = FileRecord(
        path=path,
        mimetype=mimetype or mimetypes.guess_type(path.name)[0] or "application/octet-stream",
        originalname=path.name,
        size=path.stat().st_size,
    )

    generate = (lambda _file, _index: name) if name else None
    try:
        stored = adapter.store(file, generate)
    except StorageAdapterError as e:
        _report_error(e)
        raise typer.Exit(1)

    table = Table(show_header=False, box=None)
    table.add_row("Name", stored.filename)
    table.add_row("Container", stored.container)
    table.add_row("ETag", stored.etag or "")
    table.add_row("Type", stored.mimetype)
    table.add_row("URL", adapter.resolve_url(stored))
    console.print("[green]✓[/green] Uploaded")
    console.print(table)


@app.command()
def url(
    filename: str = typer.Argument(..., help="Blob name"),
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="YAML options file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Print the public URL of a stored file.

    The URL only works if the container allows public read access.
    """
    adapter = _get_adapter(config, verbose)
    try:
        console.print(adapter.resolve_url(FileRecord(filename=filename)), soft_wrap=True)
    except StorageAdapterError as e:
        _report_error(e)
        raise typer.Exit(1)


@app.command()
def delete(
    filename: str = typer.Argument(..., help="Blob name"),
    container: Optional[str] = typer.Option(None, "--container", help="Container the file was stored in (default: configured container)"),
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="YAML options file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Delete a stored file."""
    adapter = _get_adapter(config, verbose)
    try:
        adapter.remove(FileRecord(filename=filename, container=container))
    except StorageAdapterError as e:
        _report_error(e)
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Deleted {filename}")


@app.command("show-config")
def show_config(
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="YAML options file"),
):
    """Show the resolved storage configuration (secrets masked)."""
    adapter = _get_adapter(config)

    table = Table(title="Storage configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in adapter.config.masked().items():
        table.add_row(key, "" if value is None else str(value))
    for key, enabled in adapter.schema.items():
        table.add_row(f"schema.{key}", str(enabled))
    console.print(table)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
