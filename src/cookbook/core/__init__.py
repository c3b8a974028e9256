"""Core utilities for cookbook."""

from cookbook.core.config import SiteConfig, get_config
from cookbook.core.errors import CookbookError, GitHubError, IngestionError, ThreadLookupError

__all__ = [
    # Config
    "SiteConfig",
    "get_config",
    # Errors
    "CookbookError",
    "GitHubError",
    "IngestionError",
    "ThreadLookupError",
]
