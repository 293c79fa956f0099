"""Command-line interface for inspecting and verifying packaged worker archives."""

import zipfile
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table
from rich.console import Console
from rich.markup import escape

from workerpack.core.config import load_build_config
from workerpack.core.errors import BuildError
from workerpack.packaging.archive_reader import WorkerArchive

app = typer.Typer(help="Tools for inspecting the packaged worker archive")
console = Console()
err_console = Console(stderr=True)


def _open_archive(project_root: Optional[Path]):
    try:
        config = load_build_config(project_root)
        return config, WorkerArchive(config.archive_path)
    except (BuildError, FileNotFoundError, zipfile.BadZipFile) as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command("info")
def archive_info(
    project_root: Optional[Path] = typer.Option(None, "--project-root", "-C", help="Worker project directory"),
):
    """Display the entries of dist/worker.zip."""
    config, archive = _open_archive(project_root)
    stats = archive.get_stats()

    console.print(f"[bold]Archive:[/bold] {config.archive_path}")
    console.print(f"[bold]Size:[/bold] {stats['archive_size']} bytes")

    table = Table()
    table.add_column("Entry", style="cyan")
    table.add_column("Size", style="magenta")
    table.add_column("Compressed", style="green")
    table.add_column("Deflated", style="yellow")
    for entry in stats['entries']:
        table.add_row(
            entry['name'],
            str(entry['size']),
            str(entry['compressed_size']),
            "yes" if entry['deflated'] else "no",
        )
    console.print(table)


@app.command("verify")
def archive_verify(
    project_root: Optional[Path] = typer.Option(None, "--project-root", "-C", help="Worker project directory"),
):
    """Check that dist/worker.zip holds exactly dist/worker.js."""
    config, archive = _open_archive(project_root)

    problem = archive.verify_against(config.raw_output_path, config.archive_entry_name)
    if problem:
        err_console.print(f"[bold red]✘[/bold red] Archive mismatch: {escape(problem)}")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]✔[/bold green] {config.archive_name} matches {config.raw_output_name}"
    )
