"""
Recipe comments backed by GitHub issues.

Each recipe gets at most one open issue labelled ``recipe-comment`` whose
title contains the recipe id. The issue is not created here; instead we
build the URL of GitHub's new-issue form (or of the existing issue's reply
box) and leave opening it to the caller.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

import click

from cookbook.content.github import GITHUB_WEB, GitHubClient
from cookbook.content.models import Comment, DiscussionThread
from cookbook.core.errors import GitHubError, ThreadLookupError

logger = logging.getLogger(__name__)

COMMENT_LABEL = "recipe-comment"


def thread_title(recipe_id: str, title: str) -> str:
    return f"Comments for recipe: {title} [{recipe_id}]"


def thread_body(title: str) -> str:
    return f'This issue is for comments on the recipe "{title}". Please add your comments below!'


def search_query(owner: str, repo: str, recipe_id: str) -> str:
    """Issue search query for a recipe's discussion thread."""
    return f"repo:{owner}/{repo} label:{COMMENT_LABEL} is:issue is:open {recipe_id} in:title"


def thread_url(owner: str, repo: str, thread_id: int) -> str:
    """Web URL of an existing discussion issue."""
    return f"{GITHUB_WEB}/{owner}/{repo}/issues/{thread_id}"


def composer_url(
    owner: str,
    repo: str,
    recipe_id: str,
    title: str,
    thread_id: int | None = None,
) -> str:
    """URL where a reader can comment on a recipe.

    With an existing thread this is the issue's reply box; otherwise it is
    the new-issue form pre-filled with the thread title, body and label.

    Args:
        owner: Repository owner
        repo: Repository name
        recipe_id: Recipe id
        title: Recipe title
        thread_id: Existing issue number, if known

    Returns:
        Absolute URL on github.com
    """
    if thread_id is not None:
        return f"{thread_url(owner, repo, thread_id)}#new_comment_field"

    query = urlencode(
        {
            "title": thread_title(recipe_id, title),
            "body": thread_body(title),
            "labels": COMMENT_LABEL,
        },
        quote_via=quote,
    )
    return f"{GITHUB_WEB}/{owner}/{repo}/issues/new?{query}"


def open_composer(url: str) -> None:
    """Open a composer URL in the user's browser."""
    click.launch(url)


class ThreadResolver:
    """Finds the discussion issue for a recipe and loads its comments."""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def find_thread(self, recipe_id: str) -> DiscussionThread | None:
        """Look up a recipe's discussion thread.

        Args:
            recipe_id: Recipe id to search for in issue titles

        Returns:
            The thread with its comments, or None if no issue exists yet

        Raises:
            ThreadLookupError: If the search or the comment fetch fails
        """
        query = search_query(self.client.owner, self.client.repo, recipe_id)
        try:
            items = await self.client.search_issues(query)
            if not items:
                return None
            number = int(items[0]["number"])
        except (GitHubError, KeyError, TypeError, ValueError) as e:
            raise ThreadLookupError(f"Could not search comments for {recipe_id}: {e}") from e

        try:
            raw_comments = await self.client.list_issue_comments(number)
            comments = tuple(Comment.from_api_response(c) for c in raw_comments)
        except (GitHubError, TypeError, ValueError) as e:
            raise ThreadLookupError(
                f"Could not load comments for {recipe_id} (issue #{number}): {e}",
                thread_id=number,
            ) from e

        return DiscussionThread(thread_id=number, comments=comments)

    async def load_thread(self, recipe_id: str) -> DiscussionThread:
        """Like find_thread, but reports failure as a thread state.

        Returns:
            Thread with comments, an empty thread if none exists, or a
            thread with ``failed`` set if the lookup failed
        """
        try:
            thread = await self.find_thread(recipe_id)
        except ThreadLookupError as e:
            logger.warning("%s", e.message)
            return DiscussionThread(thread_id=e.thread_id, failed=True)
        return thread or DiscussionThread()

    def composer_url(self, recipe_id: str, title: str, thread: DiscussionThread | None = None) -> str:
        thread_id = thread.thread_id if thread else None
        return composer_url(self.client.owner, self.client.repo, recipe_id, title, thread_id)

    def thread_url(self, thread: DiscussionThread) -> str | None:
        if thread.thread_id is None:
            return None
        return thread_url(self.client.owner, self.client.repo, thread.thread_id)
