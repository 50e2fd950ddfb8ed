"""
CLI for bucketsync.

Commands:
- init: Initialize bucketsync and choose a remote store
- upload: Upload files to the remote store
- delete: Delete a remote file by name
- list: List remote files (or the metadata cache)
- sync: Reconcile the metadata cache with the remote store
- status: Show remote files that still need attention
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bucketsync import __version__
from bucketsync.config import Config, StoreBackend
from bucketsync.core.file_manager import FileManager
from bucketsync.core.validation import ValidationError
from bucketsync.models import FileRecord
from bucketsync.storage.repository import RepositoryError
from bucketsync.storage.sqlite_db import SQLiteMetadataRepository
from bucketsync.sync.adapter import StoreError
from bucketsync.sync.events import EventError

console = Console()


def configure_logging(config: Config) -> None:
    """Configure root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def ensure_initialized(config: Config) -> FileManager:
    """Ensure bucketsync is initialized and return a file manager."""
    if not config.sqlite_path.exists():
        console.print("[red]bucketsync not initialized. Run 'bucketsync init' first.[/red]")
        sys.exit(1)

    try:
        return FileManager.from_config(config)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def render_records(title: str, records: list[FileRecord]) -> Table:
    """Build a table of file records."""
    table = Table(title=f"{title} ({len(records)})")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", width=8)
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")
    table.add_column("Checksum", style="dim")
    table.add_column("Version", width=8)

    for record in records:
        table.add_row(
            record.name,
            record.kind.value,
            str(record.size),
            record.modified_at.isoformat(timespec="seconds") if record.modified_at else "-",
            (record.checksum or "-")[:12],
            record.version,
        )
    return table


@click.group()
@click.version_option(__version__, prog_name="bucketsync")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def main(ctx: click.Context, config: Optional[str]) -> None:
    """bucketsync - Track remote object store files against a local metadata cache."""
    ctx.ensure_object(dict)

    if config:
        ctx.obj["config"] = Config.load(Path(config))
        ctx.obj["config_path"] = Path(config)
    else:
        ctx.obj["config"] = Config.load()
        ctx.obj["config_path"] = None

    configure_logging(ctx.obj["config"])


@main.command()
@click.option(
    "--backend", "-b",
    type=click.Choice([b.value for b in StoreBackend]),
    default=None,
    help="Remote store backend (default: keep configured value)",
)
@click.option("--store-path", type=click.Path(file_okay=False), default=None, help="Directory for the local store")
@click.option("--bucket", default=None, help="S3 bucket name")
@click.option("--region", default=None, help="S3 region")
@click.pass_context
def init(
    ctx: click.Context,
    backend: Optional[str],
    store_path: Optional[str],
    bucket: Optional[str],
    region: Optional[str],
) -> None:
    """Initialize bucketsync."""
    config: Config = ctx.obj["config"]

    console.print(Panel.fit(
        f"[bold blue]bucketsync v{__version__}[/bold blue]\n"
        "Remote file tracking and reconciliation",
        border_style="blue",
    ))

    if backend:
        config.store_backend = StoreBackend(backend)
    if store_path:
        config.store_path = Path(store_path).resolve()
    if bucket:
        config.bucket_name = bucket
    if region:
        config.region = region

    if config.store_backend == StoreBackend.S3 and not config.bucket_name:
        console.print("[red]The S3 backend needs a bucket. Pass --bucket.[/red]")
        sys.exit(1)

    config.ensure_directories()
    SQLiteMetadataRepository(config.sqlite_path)
    saved_to = config.save(ctx.obj["config_path"])

    console.print("\n[green]✓ bucketsync initialized[/green]")
    console.print(f"[dim]Store backend: {config.store_backend.value}[/dim]")
    if config.store_backend == StoreBackend.LOCAL:
        console.print(f"[dim]Store path: {config.resolved_store_path}[/dim]")
    else:
        console.print(f"[dim]Bucket: {config.bucket_name}[/dim]")
    console.print(f"[dim]Config: {saved_to}[/dim]")
    console.print(f"[dim]Database: {config.sqlite_path}[/dim]")


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.pass_context
def upload(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Upload files to the remote store."""
    manager = ensure_initialized(ctx.obj["config"])

    failed = 0
    for path in paths:
        try:
            record = manager.upload(Path(path))
            console.print(f"[green]✓ Uploaded {record.name}[/green]")
        except (StoreError, EventError) as e:
            failed += 1
            console.print(f"[red]Upload failed for {path}: {e}[/red]")

    if failed:
        sys.exit(1)


@main.command()
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, name: str, yes: bool) -> None:
    """Delete a remote file by name."""
    manager = ensure_initialized(ctx.obj["config"])

    if not yes and not click.confirm(f"Delete {name}?"):
        return

    try:
        manager.delete(name)
    except (StoreError, EventError) as e:
        console.print(f"[red]Error deleting {name}: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Deleted {name}[/green]")


@main.command("list")
@click.option("--cached", is_flag=True, help="List the metadata cache instead of the remote store")
@click.pass_context
def list_files(ctx: click.Context, cached: bool) -> None:
    """List tracked files."""
    manager = ensure_initialized(ctx.obj["config"])

    try:
        records = manager.list_cached() if cached else manager.list_remote()
    except (StoreError, RepositoryError) as e:
        console.print(f"[red]List failed: {e}[/red]")
        sys.exit(1)

    if not records:
        console.print("[dim]No files found.[/dim]")
        return

    console.print(render_records("Cached files" if cached else "Remote files", records))


@main.command()
@click.pass_context
def sync(ctx: click.Context) -> None:
    """Reconcile the metadata cache with the remote store."""
    manager = ensure_initialized(ctx.obj["config"])

    try:
        with console.status("[bold green]Reconciling..."):
            result = manager.sync()
    except (StoreError, RepositoryError, ValidationError) as e:
        console.print(f"[red]Sync failed: {e}[/red]")
        sys.exit(1)

    console.print("[green]✓ File storage sync completed[/green]")
    console.print(f"  New files absorbed: {len(result.unresolved)}")
    console.print(f"  Conflicts resolved: {len(result.conflicted)}")
    console.print(f"  Records written: {result.written}")

    conflicted = manager.conflicted()
    if conflicted:
        console.print(render_records("Resolved conflicts", conflicted))


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show remote files that differ from the metadata cache."""
    manager = ensure_initialized(ctx.obj["config"])

    try:
        unresolved = manager.status()
    except (StoreError, RepositoryError) as e:
        console.print(f"[red]Status check failed: {e}[/red]")
        sys.exit(1)

    if not unresolved:
        console.print("[green]✓ Fully synchronized[/green]")
        return

    console.print(render_records("Files needing attention", unresolved))
    console.print("[yellow]Run 'bucketsync sync' to reconcile.[/yellow]")


if __name__ == "__main__":
    main()
