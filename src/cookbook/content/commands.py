"""CLI commands for browsing recipes.

``list`` is the listing view (load everything, then filter), ``show`` is the
detail view (one recipe plus its comments), ``tags`` lists the tag facets.
"""

from __future__ import annotations

import asyncio
import json as json_module

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cookbook.content import github
from cookbook.content.ingest import RecipeIngestor
from cookbook.content.models import DiscussionThread, Recipe
from cookbook.core.errors import IngestionError

console = Console()


async def load_recipes() -> list[Recipe]:
    """Load all recipes from the configured repository."""
    async with github.create_client() as client:
        return await RecipeIngestor(client).list_recipes()


async def load_detail(recipe_id: str) -> tuple[Recipe, DiscussionThread, str]:
    """Load one recipe and its discussion thread concurrently.

    Returns:
        The recipe, its thread state, and the composer URL
    """
    from cookbook.comments.resolver import ThreadResolver

    async with github.create_client() as client:
        resolver = ThreadResolver(client)
        # both requests settle before the client closes
        recipe, thread = await asyncio.gather(
            RecipeIngestor(client).get_recipe(recipe_id),
            resolver.load_thread(recipe_id),
            return_exceptions=True,
        )
        for outcome in (recipe, thread):
            if isinstance(outcome, BaseException):
                raise outcome
        return recipe, thread, resolver.composer_url(recipe.id, recipe.title, thread)


def _load_or_exit(coro):
    try:
        return asyncio.run(coro)
    except IngestionError as e:
        console.print(f"[red]{e.message}[/red]")
        raise SystemExit(1)


@click.group(name="recipes")
def recipes() -> None:
    """Browse recipes stored in the GitHub repository."""
    pass


# ---------------------------------------------------------------------------
# cookbook recipes list
# ---------------------------------------------------------------------------


@recipes.command(name="list")
@click.option("-q", "--search", "search_term", default="", help="Search in title/description")
@click.option("-t", "--tag", multiple=True, help="Require tag (can repeat)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON array")
def list_recipes(search_term: str, tag: tuple[str, ...], as_json: bool) -> None:
    """List recipes, newest first, with optional filters."""
    from cookbook.taxonomy.filters import FilterState

    all_recipes = _load_or_exit(load_recipes())

    state = FilterState(search_term=search_term)
    for t in tag:
        if t not in state.selected_tags:
            state.toggle_tag(t)
    items = state.apply(all_recipes)

    if as_json:
        click.echo(json_module.dumps([r.to_dict() for r in items], indent=2))
        return

    if not items:
        console.print("[yellow]No recipes found matching criteria.[/yellow]")
        return

    title = f"Recipes ({len(items)})"
    if state.is_active:
        title = f"Recipes ({len(items)} of {len(all_recipes)})"

    table = Table(title=title)
    table.add_column("Date", style="cyan", width=12)
    table.add_column("ID", style="dim")
    table.add_column("Title", no_wrap=False)
    table.add_column("Tags", style="dim")

    for r in items:
        table.add_row(
            r.published.strftime("%Y-%m-%d"),
            r.id,
            escape(r.title),
            escape(", ".join(r.tags)),
        )

    console.print(table)


# ---------------------------------------------------------------------------
# cookbook recipes tags
# ---------------------------------------------------------------------------


@recipes.command(name="tags")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tags(as_json: bool) -> None:
    """Show the tags available for filtering."""
    from cookbook.taxonomy.filters import tag_counts

    counts = tag_counts(_load_or_exit(load_recipes()))

    if as_json:
        click.echo(json_module.dumps([{"tag": t, "count": c} for t, c in counts.items()], indent=2))
        return

    if not counts:
        console.print("[yellow]No tags found.[/yellow]")
        return

    table = Table(title=f"Tags ({len(counts)})")
    table.add_column("Tag", style="cyan")
    table.add_column("Recipes", justify="right")
    for t, c in counts.items():
        table.add_row(escape(t), str(c))
    console.print(table)


# ---------------------------------------------------------------------------
# cookbook recipes show
# ---------------------------------------------------------------------------


def _meta_lines(recipe: Recipe) -> list[str]:
    lines = [f"[cyan]Published:[/cyan] {recipe.published.strftime('%B %d, %Y')}"]
    for label, value in (
        ("Prep", recipe.prep_time),
        ("Cook", recipe.cook_time),
        ("Serves", recipe.servings),
        ("Difficulty", recipe.difficulty),
    ):
        if value:
            lines.append(f"[cyan]{label}:[/cyan] {escape(value)}")
    if recipe.tags:
        lines.append(f"[cyan]Tags:[/cyan] {escape(', '.join(recipe.tags))}")
    return lines


def print_thread(thread: DiscussionThread, url: str) -> None:
    """Print a recipe's comment section."""
    console.print()
    console.rule(f"Comments ({len(thread.comments)})")

    if thread.failed:
        console.print("[red]Error loading comments[/red]")
    elif not thread.comments:
        console.print("[dim]No comments yet. Be the first to comment![/dim]")
    else:
        for comment in thread.comments:
            when = comment.created_at.strftime("%B %d, %Y") if comment.created_at else ""
            console.print(f"[bold]{escape(comment.author)}[/bold] [dim]{when}[/dim]")
            console.print(Markdown(comment.body))
            console.print(f"[dim]{comment.permalink}[/dim]", soft_wrap=True)
            console.print()

    action = "Add a comment" if thread.exists else "Start the discussion"
    console.print(f"[dim]{action}:[/dim] {url}", soft_wrap=True)


@recipes.command(name="show")
@click.argument("recipe_id")
@click.option("--raw", is_flag=True, help="Print markdown source instead of rendering")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_recipe(recipe_id: str, raw: bool, as_json: bool) -> None:
    """Show one recipe and its comments."""
    recipe, thread, url = _load_or_exit(load_detail(recipe_id))

    if as_json:
        data = recipe.to_dict(include_body=True)
        data["comments"] = {
            "thread_id": thread.thread_id,
            "failed": thread.failed,
            "count": len(thread.comments),
            "composer_url": url,
        }
        click.echo(json_module.dumps(data, indent=2))
        return

    lines = _meta_lines(recipe)
    if recipe.description:
        lines = [escape(recipe.description), "", *lines]
    console.print(Panel("\n".join(lines), title=f"[bold]{escape(recipe.title)}[/bold]", expand=False))

    if raw:
        click.echo(recipe.body)
    else:
        console.print(Markdown(recipe.body))

    print_thread(thread, url)
