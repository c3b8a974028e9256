"""
Main CLI dispatcher for cookbook.

Usage:
    cookbook recipes list [-q TEXT] [-t TAG ...]
    cookbook recipes tags
    cookbook recipes show RECIPE_ID
    cookbook comments [show|open] RECIPE_ID
    cookbook config [show|get|set|reset|path]
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from cookbook import __version__

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich; DEBUG with -v, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.console = console


@click.group()
@click.version_option(version=__version__, prog_name="cookbook")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Recipe blog backed by markdown files in a GitHub repository.

    Recipes live in recipes/<id>/README.md; comments are GitHub issues.
    """
    ctx.obj = Context(verbose=verbose)
    setup_logging(verbose)


# Import and register command groups (imports after main definition intentional)
from cookbook.comments.commands import comments  # noqa: E402
from cookbook.config.commands import config  # noqa: E402
from cookbook.content.commands import recipes  # noqa: E402

main.add_command(recipes)
main.add_command(comments)
main.add_command(config)


if __name__ == "__main__":
    main()
