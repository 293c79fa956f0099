"""
Top-level CLI that aggregates the build commands and the archive sub-app.
"""

import logging
import typer
from workerpack.cli.build_cli import build_cmd, pages_cmd
from workerpack.cli.archive_cli import app as archive_app


logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s - %(message)s"
)

main_app = typer.Typer(help="workerpack CLI")


@main_app.callback()
def main_callback(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Enable debug logging"),
):
    """
    Build and package edge worker scripts.
    """
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


main_app.command("build")(build_cmd)
main_app.command("pages")(pages_cmd)
main_app.add_typer(archive_app, name="archive")


def main():
    main_app()

if __name__ == "__main__":
    main()
