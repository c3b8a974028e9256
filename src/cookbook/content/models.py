"""
Typed records for recipes and their discussion threads.

Raw front matter attributes stop at Recipe.from_frontmatter; everything past
that point works with these dataclasses.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cookbook.content.frontmatter import FrontMatter

logger = logging.getLogger(__name__)

THUMBNAIL_PATH = "assets/thumbnail.png"

# Markdown links and images pointing into the recipe's own assets folder
ASSET_LINK_RE = re.compile(r"(!?\[[^\]]*\]\()\./(assets/[^)\s]+)")

AssetResolver = Callable[[str, str], str]


def parse_date(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime; naive values are taken as UTC.

    Returns:
        Aware datetime, or None if the value is missing or unparseable
    """
    if not value:
        return None
    value = value.strip().strip("\"'")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def rewrite_asset_links(body: str, recipe_id: str, resolve: AssetResolver) -> str:
    """Point ``./assets/...`` link targets at absolute URLs for this recipe."""
    return ASSET_LINK_RE.sub(
        lambda m: f"{m.group(1)}{resolve(recipe_id, m.group(2))}",
        body,
    )


@dataclass(frozen=True)
class Recipe:
    """A single recipe, fully defaulted."""

    id: str
    title: str
    description: str
    published: datetime
    thumbnail: str
    tags: tuple[str, ...] = ()
    body: str = ""
    prep_time: str | None = None
    cook_time: str | None = None
    servings: str | None = None
    difficulty: str | None = None

    @classmethod
    def from_frontmatter(
        cls,
        recipe_id: str,
        fm: FrontMatter,
        *,
        resolve_asset: AssetResolver,
        now: datetime,
    ) -> Recipe:
        """Build a Recipe from parsed front matter, filling in defaults.

        Args:
            recipe_id: Directory name of the recipe
            fm: Parsed front matter and body
            resolve_asset: Maps (recipe_id, relative path) to an absolute URL
            now: Fallback publish date
        """
        raw_date = fm.get_str("date")
        published = parse_date(raw_date)
        if published is None:
            if raw_date:
                logger.info("Unparseable date %r in %s, using ingestion time", raw_date, recipe_id)
            published = now

        return cls(
            id=recipe_id,
            title=fm.get_str("title") or recipe_id,
            description=fm.get_str("description") or "",
            published=published,
            thumbnail=resolve_asset(recipe_id, THUMBNAIL_PATH),
            tags=tuple(fm.get_list("tags") or ()),
            body=rewrite_asset_links(fm.body, recipe_id, resolve_asset),
            prep_time=fm.get_str("prepTime") or None,
            cook_time=fm.get_str("cookTime") or None,
            servings=fm.get_str("servings") or None,
            difficulty=fm.get_str("difficulty") or None,
        )

    def to_dict(self, include_body: bool = False) -> dict[str, Any]:
        """JSON-friendly representation."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.published.isoformat(),
            "thumbnail": self.thumbnail,
            "tags": list(self.tags),
        }
        for key, value in (
            ("prepTime", self.prep_time),
            ("cookTime", self.cook_time),
            ("servings", self.servings),
            ("difficulty", self.difficulty),
        ):
            if value is not None:
                data[key] = value
        if include_body:
            data["body"] = self.body
        return data


@dataclass(frozen=True)
class Comment:
    """One comment on a recipe's discussion issue."""

    id: int
    author: str
    avatar_url: str
    author_url: str
    created_at: datetime | None
    body: str
    permalink: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Comment:
        """Create from a GitHub issue comment payload."""
        user = data.get("user")
        if not isinstance(user, dict):
            user = {}
        return cls(
            id=int(data.get("id", 0)),
            author=user.get("login", ""),
            avatar_url=user.get("avatar_url", ""),
            author_url=user.get("html_url", ""),
            created_at=parse_date(data.get("created_at")),
            body=data.get("body") or "",
            permalink=data.get("html_url", ""),
        )


@dataclass(frozen=True)
class DiscussionThread:
    """State of a recipe's comment section.

    ``thread_id`` is None until the issue exists. ``failed`` marks a lookup
    that could not complete, which is different from having no comments.
    """

    thread_id: int | None = None
    comments: tuple[Comment, ...] = field(default_factory=tuple)
    failed: bool = False

    @property
    def exists(self) -> bool:
        return self.thread_id is not None
