"""
Exception hierarchy for cookbook.

Errors are raised where they are detected and converted at the component
boundary: a failed README fetch is dropped by the ingestor, while a failed
directory listing or thread lookup reaches the caller as one of these.
"""

from __future__ import annotations


class CookbookError(Exception):
    """Base exception for cookbook errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class GitHubError(CookbookError):
    """A GitHub request failed (transport error, bad status, or bad payload)."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class IngestionError(CookbookError):
    """The recipe listing (or a single requested recipe) could not be loaded."""
    pass


class ThreadLookupError(CookbookError):
    """Searching for a recipe's discussion issue or its comments failed.

    ``thread_id`` is set when the issue was found but its comments could not
    be loaded.
    """

    def __init__(self, message: str, thread_id: int | None = None):
        self.thread_id = thread_id
        super().__init__(message)
