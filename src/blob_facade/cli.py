"""CLI for blob-facade."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import FacadeConfig, load_facade_config
from .errors import AuthError, NotFoundError, ValidationError
from .facade import BlobFacade
from .result import Result
from .utils import format_timestamp, humanize_size


app = typer.Typer(help="""\
Read, write, copy, move, delete and list blobs in an Azure storage account.
Authenticates with ambient Azure identity (az login, managed identity,
environment credentials).""")

console = Console()


@app.callback()
def main_callback():
    """Configure logging before any command runs."""
    if os.environ.get("DEBUG"):
        logging.basicConfig(level=logging.DEBUG)


def _get_facade(config: FacadeConfig) -> BlobFacade:
    """Create the facade used by every command."""
    return BlobFacade(compensate_move=config.compensate_move)


def _settings(account: Optional[str], container: Optional[str]) -> FacadeConfig:
    """Merge CLI options over .blob-facade/config.yaml and environment."""
    config = load_facade_config()
    if account:
        config.account = account
    if container:
        config.container = container
    return config


def _unwrap(result: Result, action: str):
    """Return result data, or print the error and exit non-zero.

    Raises:
        typer.Exit: If the result carries an error
    """
    if result.ok:
        return result.data

    err = result.err
    console.print(f"[red]✗[/red] {action} failed: {err}")
    if isinstance(err, ValidationError) and err.field in ("account", "container"):
        console.print(f"[dim]Hint: pass --{err.field} or set it in .blob-facade/config.yaml[/dim]")
    elif isinstance(err, NotFoundError):
        console.print("[dim]Hint: check the container and blob names[/dim]")
    elif isinstance(err, AuthError):
        console.print("[dim]Hint: run 'az login' or check the identity's storage role[/dim]")
    raise typer.Exit(1)


AccountOption = typer.Option(None, "--account", "-a", help="Storage account name")
ContainerOption = typer.Option(None, "--container", "-c", help="Container name")


@app.command()
def read(
    filename: str = typer.Argument(..., help="Blob name"),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """Print a blob's content as UTF-8 text."""
    config = _settings(account, container)
    result = asyncio.run(_get_facade(config).read(
        account=config.account, container=config.container, filename=filename
    ))
    typer.echo(_unwrap(result, "Read"), nl=False)


@app.command()
def write(
    filename: str = typer.Argument(..., help="Blob name"),
    content: Optional[str] = typer.Argument(None, help="Text to upload"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, readable=True,
        help="Upload this local file's text instead",
    ),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """Upload UTF-8 text to a blob, overwriting it.

    Examples:
        blob-facade write x.json '{}' -a myaccount -c c1
        blob-facade write report.csv --file ./report.csv
    """
    config = _settings(account, container)
    if file is not None:
        content = file.read_text(encoding="utf-8")

    result = asyncio.run(_get_facade(config).write(
        account=config.account,
        container=config.container,
        filename=filename,
        content=content or "",
    ))
    request_id = _unwrap(result, "Write")
    console.print(f"[green]✓[/green] Wrote {config.container}/{filename} [dim](request {request_id})[/dim]")


@app.command()
def copy(
    filename: str = typer.Argument(..., help="Blob name"),
    destination: str = typer.Argument(..., help="Destination folder within the container"),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """Copy a blob into a folder of the same container."""
    config = _settings(account, container)
    result = asyncio.run(_get_facade(config).copy(
        account=config.account,
        container=config.container,
        filename=filename,
        destination=destination,
    ))
    copied = _unwrap(result, "Copy")
    console.print(
        f"[green]✓[/green] Copied {filename} to {destination.strip('/')}/{filename} "
        f"[dim]({copied.copy_status})[/dim]"
    )


@app.command()
def move(
    filename: str = typer.Argument(..., help="Blob name"),
    destination: str = typer.Argument(..., help="Destination folder within the container"),
    compensate: Optional[bool] = typer.Option(
        None, "--compensate/--no-compensate",
        help="Delete the copy again if removing the original fails",
    ),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """Move a blob into a folder of the same container (copy, then delete)."""
    config = _settings(account, container)
    result = asyncio.run(_get_facade(config).move(
        account=config.account,
        container=config.container,
        filename=filename,
        destination=destination,
        compensate=compensate,
    ))
    _unwrap(result, "Move")
    console.print(f"[green]✓[/green] Moved {filename} to {destination.strip('/')}/{filename}")


@app.command()
def delete(
    filename: str = typer.Argument(..., help="Blob name"),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """Delete a blob."""
    config = _settings(account, container)
    result = asyncio.run(_get_facade(config).delete(
        account=config.account, container=config.container, filename=filename
    ))
    deleted = _unwrap(result, "Delete")
    console.print(f"[green]✓[/green] Deleted {config.container}/{filename} [dim](request {deleted.request_id})[/dim]")


@app.command("list-containers")
def list_containers(
    page_size: Optional[int] = typer.Option(None, "--page-size", help="Containers fetched per request"),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """List the containers of the storage account."""
    config = _settings(account, container)
    result = asyncio.run(_get_facade(config).list_containers(
        account=config.account,
        container=config.container,
        max_page_size=page_size or config.max_page_size,
    ))
    entries = _unwrap(result, "List containers")

    if not entries:
        console.print("[dim]No containers[/dim]")
        return

    table = Table(title=f"Containers in {config.account}")
    table.add_column("Name", style="cyan")
    table.add_column("Last modified")
    table.add_column("Public access", style="dim")
    for entry in entries:
        table.add_row(entry.name, format_timestamp(entry.last_modified), entry.public_access or "-")
    console.print(table)


@app.command("list-files")
def list_files(
    names_only: bool = typer.Option(False, "--names-only", help="Print blob names, one per line"),
    account: Optional[str] = AccountOption,
    container: Optional[str] = ContainerOption,
):
    """List the blobs in a container."""
    config = _settings(account, container)
    facade = _get_facade(config)

    if names_only:
        result = asyncio.run(facade.list_files_by_name(
            account=config.account, container=config.container
        ))
        for name in _unwrap(result, "List files"):
            typer.echo(name)
        return

    result = asyncio.run(facade.list_files(account=config.account, container=config.container))
    entries = _unwrap(result, "List files")

    if not entries:
        console.print(f"[dim]No blobs in {config.container}[/dim]")
        return

    table = Table(title=f"Blobs in {config.container}")
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Type", style="dim")
    table.add_column("Last modified")
    for entry in entries:
        table.add_row(
            entry.name,
            humanize_size(entry.size),
            entry.content_type or "-",
            format_timestamp(entry.last_modified),
        )
    console.print(table)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
