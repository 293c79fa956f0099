"""
CLI commands for building the worker and inspecting its template pages.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from workerpack.assets.template_store import ERROR_PAGE, TemplateStore
from workerpack.bundling.builder import PAGE_CONSTANTS
from workerpack.bundling.manager import get_compiler
from workerpack.core.config import load_build_config
from workerpack.core.errors import BuildError
from workerpack.pipelines.build_pipeline import BuildPipeline

console = Console()
err_console = Console(stderr=True)

SUCCESS = "[bold green]✔[/bold green]"
FAILURE = "[bold red]✘[/bold red]"


def fail(message: str) -> None:
    err_console.print(f"{FAILURE} Build failed: {escape(message)}")
    raise typer.Exit(code=1)


def build_cmd(
    project_root: Optional[Path] = typer.Option(
        None, "--project-root", "-C", help="Worker project directory (defaults to settings / cwd)"
    ),
    backend: Optional[str] = typer.Option(
        None, "--backend", "-b", help="Bundler back-end: esbuild-node or esbuild-cli"
    ),
):
    """
    Build dist/worker.js and dist/worker.zip from the worker sources.

    Examples:
        workerpack build
        workerpack build -C ./my-worker --backend esbuild-cli
    """
    try:
        config = load_build_config(project_root, backend)
        compiler = get_compiler(config)
    except (BuildError, ValueError) as e:
        fail(str(e))

    def report_stage(stage: str, message: str) -> None:
        console.print(f"{SUCCESS} {message}")

    pipeline = BuildPipeline(config, compiler, on_stage_complete=report_stage)
    report = asyncio.run(pipeline.run())

    if not report.success:
        fail(f"[{report.failed_stage}] {report.error}")

    console.print(f"[dim]Commit {report.artifact.revision} | Version {report.artifact.version}[/dim]")
    console.print(f"{SUCCESS} Done!")


def pages_cmd(
    project_root: Optional[Path] = typer.Option(
        None, "--project-root", "-C", help="Worker project directory (defaults to settings / cwd)"
    ),
):
    """
    List the template pages that a build would embed.
    """
    try:
        config = load_build_config(project_root)
        store = TemplateStore(config.asset_root)
        pages = store.list_pages()
    except BuildError as e:
        err_console.print(f"{FAILURE} {escape(str(e))}")
        raise typer.Exit(code=1)

    table = Table(title=f"Template pages in {config.asset_root}")
    table.add_column("Page", style="cyan")
    table.add_column("Files")
    table.add_column("Constant", style="yellow")
    table.add_column("Status", style="green")

    for name in pages:
        files = store.companion_files(name)
        complete = name == ERROR_PAGE or len(files) == 3
        table.add_row(
            name,
            ", ".join(files),
            PAGE_CONSTANTS.get(name, "(not embedded)"),
            "ok" if complete else "[red]incomplete[/red]",
        )

    console.print(table)
    missing = sorted(set(PAGE_CONSTANTS) - set(pages))
    if missing:
        console.print(f"Roles without a page (embedded as empty string): {', '.join(missing)}")
