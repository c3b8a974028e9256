"""Faceted filtering over loaded recipes.

Free-text search on title and description combined with tag selection,
where a recipe must carry every selected tag. Each call re-evaluates the
whole list; recipe counts are small enough that no index is kept.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from cookbook.content.models import Recipe


def matches_text(recipe: Recipe, search_term: str) -> bool:
    """Case-insensitive substring match on title or description."""
    if not search_term:
        return True
    needle = search_term.lower()
    return needle in recipe.title.lower() or needle in recipe.description.lower()


def matches_tags(recipe: Recipe, selected_tags: Iterable[str]) -> bool:
    """True if the recipe carries all selected tags (or none are selected)."""
    return all(tag in recipe.tags for tag in selected_tags)


def matches(recipe: Recipe, search_term: str = "", selected_tags: Iterable[str] = ()) -> bool:
    return matches_text(recipe, search_term) and matches_tags(recipe, selected_tags)


def filter_recipes(
    recipes: Sequence[Recipe],
    search_term: str = "",
    selected_tags: Iterable[str] = (),
) -> list[Recipe]:
    """Return the recipes matching both the search term and the selected tags.

    Args:
        recipes: Recipes to filter (order is preserved)
        search_term: Text to look for in title or description
        selected_tags: Tags that must all be present

    Returns:
        Matching recipes
    """
    selected = list(selected_tags)
    return [r for r in recipes if matches(r, search_term, selected)]


def available_tags(recipes: Iterable[Recipe]) -> list[str]:
    """Distinct tags across all recipes, sorted ascending."""
    return sorted({tag for recipe in recipes for tag in recipe.tags})


def tag_counts(recipes: Iterable[Recipe]) -> dict[str, int]:
    """Number of recipes using each tag, in tag order."""
    counts: dict[str, int] = defaultdict(int)
    for recipe in recipes:
        for tag in set(recipe.tags):
            counts[tag] += 1
    return {tag: counts[tag] for tag in sorted(counts)}


@dataclass
class FilterState:
    """Current search term and tag selection of a listing."""

    search_term: str = ""
    selected_tags: list[str] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return bool(self.search_term or self.selected_tags)

    def toggle_tag(self, tag: str) -> None:
        """Deselect the tag if selected, otherwise add it at the end."""
        if tag in self.selected_tags:
            self.selected_tags = [t for t in self.selected_tags if t != tag]
        else:
            self.selected_tags = [*self.selected_tags, tag]

    def clear(self) -> None:
        self.search_term = ""
        self.selected_tags = []

    def apply(self, recipes: Sequence[Recipe]) -> list[Recipe]:
        return filter_recipes(recipes, self.search_term, self.selected_tags)
