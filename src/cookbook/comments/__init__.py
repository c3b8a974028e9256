"""Recipe comments stored as GitHub issues."""

from cookbook.comments.resolver import COMMENT_LABEL, ThreadResolver, composer_url, open_composer

__all__ = ["COMMENT_LABEL", "ThreadResolver", "composer_url", "open_composer"]
