"""cookbook - a recipe blog backed by markdown files in a GitHub repository."""

__version__ = "0.3.0"
