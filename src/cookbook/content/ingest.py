"""
Recipe ingestion from the GitHub repository.

Lists the recipes directory, fetches every recipe's README concurrently and
turns each one into a Recipe. A README that fails to load only drops that
recipe; a failed directory listing fails the whole call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from cookbook.content.frontmatter import parse_frontmatter
from cookbook.content.github import GitHubClient
from cookbook.content.models import Recipe
from cookbook.core.errors import GitHubError, IngestionError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecipeIngestor:
    """Builds Recipe records from the remote recipes directory."""

    def __init__(
        self,
        client: GitHubClient,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize ingestor.

        Args:
            client: GitHub client bound to the recipe repository
            clock: Source of the fallback publish date
        """
        self.client = client
        self.clock = clock
        self.recipes_dir = client.config.recipes_dir
        self.readme = client.config.readme

    def readme_path(self, recipe_id: str) -> str:
        return f"{self.recipes_dir}/{recipe_id}/{self.readme}"

    async def list_recipe_ids(self) -> list[str]:
        """List candidate recipe ids (directory entries only).

        Raises:
            IngestionError: If the directory listing fails
        """
        try:
            entries = await self.client.list_directory(self.recipes_dir)
        except GitHubError as e:
            raise IngestionError(f"Failed to list recipes: {e.message}") from e
        return [entry["name"] for entry in entries if entry.get("type") == "dir" and entry.get("name")]

    async def list_recipes(self) -> list[Recipe]:
        """Load every recipe, newest first.

        Raises:
            IngestionError: If the directory listing fails
        """
        recipe_ids = await self.list_recipe_ids()
        now = self.clock()

        outcomes = await asyncio.gather(*(self._try_load(rid, now) for rid in recipe_ids))
        recipes = [recipe for recipe in outcomes if recipe is not None]

        skipped = len(recipe_ids) - len(recipes)
        if skipped:
            logger.warning("Loaded %d recipes, skipped %d", len(recipes), skipped)
        else:
            logger.debug("Loaded %d recipes", len(recipes))

        # sorted() is stable, so equal dates keep listing order
        return sorted(recipes, key=lambda r: r.published, reverse=True)

    async def get_recipe(self, recipe_id: str) -> Recipe:
        """Load a single recipe by id.

        Raises:
            IngestionError: If the README cannot be fetched
        """
        try:
            return await self._load(recipe_id, self.clock())
        except GitHubError as e:
            raise IngestionError(f"Could not fetch recipe {recipe_id}: {e.message}") from e

    async def _try_load(self, recipe_id: str, now: datetime) -> Recipe | None:
        try:
            return await self._load(recipe_id, now)
        except GitHubError as e:
            logger.warning("Could not fetch README for %s: %s", recipe_id, e.message)
            return None

    async def _load(self, recipe_id: str, now: datetime) -> Recipe:
        text = await self.client.fetch_raw(self.readme_path(recipe_id))
        fm = parse_frontmatter(text)
        return Recipe.from_frontmatter(
            recipe_id,
            fm,
            resolve_asset=self.client.asset_url,
            now=now,
        )
