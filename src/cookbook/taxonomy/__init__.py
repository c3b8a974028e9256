"""Tag and text filtering over recipes."""

from cookbook.taxonomy.filters import FilterState, available_tags, filter_recipes, tag_counts

__all__ = ["FilterState", "available_tags", "filter_recipes", "tag_counts"]
