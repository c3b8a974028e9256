"""
Recipe content: front matter parsing, GitHub access, and ingestion.

Provides tools for:
- Parsing recipe README front matter
- Listing and fetching recipes from the GitHub repository
- Building typed Recipe records
"""

from cookbook.content.frontmatter import FrontMatter, parse_frontmatter
from cookbook.content.github import GitHubClient
from cookbook.content.ingest import RecipeIngestor
from cookbook.content.models import Comment, DiscussionThread, Recipe

__all__ = [
    "FrontMatter",
    "parse_frontmatter",
    "GitHubClient",
    "RecipeIngestor",
    "Recipe",
    "Comment",
    "DiscussionThread",
]
