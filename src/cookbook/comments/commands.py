"""CLI commands for recipe comments (GitHub issues)."""

from __future__ import annotations

import asyncio
import json as json_module

import click
from rich.console import Console

from cookbook.comments.resolver import ThreadResolver, open_composer
from cookbook.content import github
from cookbook.content.models import DiscussionThread

console = Console()


async def load_comments(
    recipe_id: str, title: str | None
) -> tuple[DiscussionThread, str, str | None]:
    """Resolve a recipe's thread and the URLs to act on it.

    Without an explicit title the recipe README is fetched for it; if that
    fails the recipe id is used instead.

    Returns:
        The thread state, the composer URL, and the issue URL (if any)
    """
    from cookbook.content.ingest import RecipeIngestor
    from cookbook.core.errors import IngestionError

    async with github.create_client() as client:
        resolver = ThreadResolver(client)
        thread = await resolver.load_thread(recipe_id)
        if title is None:
            try:
                title = (await RecipeIngestor(client).get_recipe(recipe_id)).title
            except IngestionError:
                title = recipe_id
        return thread, resolver.composer_url(recipe_id, title, thread), resolver.thread_url(thread)


@click.group(name="comments")
def comments() -> None:
    """Recipe comments, powered by GitHub Issues."""
    pass


@comments.command(name="show")
@click.argument("recipe_id")
@click.option("--title", default=None, help="Recipe title (fetched if omitted)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_comments(recipe_id: str, title: str | None, as_json: bool) -> None:
    """Show the comments on a recipe."""
    from cookbook.content.commands import print_thread

    thread, url, issue_url = asyncio.run(load_comments(recipe_id, title))

    if as_json:
        output = {
            "thread_id": thread.thread_id,
            "failed": thread.failed,
            "composer_url": url,
            "comments": [
                {
                    "id": c.id,
                    "author": c.author,
                    "avatar_url": c.avatar_url,
                    "author_url": c.author_url,
                    "created_at": c.created_at.isoformat() if c.created_at else None,
                    "body": c.body,
                    "permalink": c.permalink,
                }
                for c in thread.comments
            ],
        }
        click.echo(json_module.dumps(output, indent=2))
        return

    print_thread(thread, url)
    if issue_url:
        console.print(f"[dim]View all on GitHub:[/dim] {issue_url}", soft_wrap=True)


@comments.command(name="open")
@click.argument("recipe_id")
@click.option("--title", default=None, help="Recipe title (fetched if omitted)")
@click.option("--print-only", is_flag=True, help="Print the URL instead of opening it")
def open_cmd(recipe_id: str, title: str | None, print_only: bool) -> None:
    """Open the comment composer for a recipe in the browser.

    Goes to the existing discussion issue, or to a pre-filled new issue
    form if nobody has commented on this recipe yet. The composer is
    offered even when loading the existing thread failed.
    """
    thread, url, _ = asyncio.run(load_comments(recipe_id, title))

    if thread.failed:
        console.print("[yellow]Could not check for an existing thread.[/yellow]")

    if print_only:
        click.echo(url)
        return

    console.print(f"[cyan]Opening[/cyan] {url}", soft_wrap=True)
    open_composer(url)
