"""
Front matter parsing for recipe READMEs.

Recipes use a small, forgiving subset of YAML front matter::

    ---
    title: Banana Bread
    date: 2024-03-02
    tags: [baking, breakfast]
    ---

Each line is ``key: value``; a value wrapped in ``[`` and ``]`` is a list
split on commas. Nothing is validated here. Defaults are applied when the
result is turned into a Recipe.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DELIMITER = "---"

AttributeValue = str | list[str]


@dataclass
class FrontMatter:
    """Parsed front matter attributes plus the remaining markdown body."""

    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    body: str = ""

    def get_str(self, key: str) -> str | None:
        """Get a scalar attribute, or None if missing or a list."""
        value = self.attributes.get(key)
        return value if isinstance(value, str) else None

    def get_list(self, key: str) -> list[str] | None:
        """Get an attribute as a list; a scalar becomes a one-item list."""
        value = self.attributes.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return [value] if value else []
        return list(value)


def parse_value(value: str) -> AttributeValue:
    """Parse one attribute value.

    ``[a, b, c]`` becomes ``["a", "b", "c"]``. Empty elements are kept, so
    ``[a,,b]`` gives ``["a", "", "b"]``. Anything else is returned unchanged.
    """
    if value.startswith("[") and value.endswith("]"):
        return [item.strip() for item in value[1:-1].split(",")]
    return value


def parse_attributes(lines: list[str]) -> dict[str, AttributeValue]:
    """Parse ``key: value`` lines; blank lines and lines without ``:`` are skipped."""
    attributes: dict[str, AttributeValue] = {}
    for line in lines:
        if not line.strip():
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        attributes[key] = parse_value(value.strip())
    return attributes


def parse_frontmatter(text: str) -> FrontMatter:
    """Split a document into front matter attributes and body.

    The document must open with a line that is exactly ``---`` and contain a
    second such line. Otherwise the whole text is returned as the body with
    no attributes.

    Args:
        text: Raw document text

    Returns:
        FrontMatter with the attributes and the text after the closing delimiter
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n") != DELIMITER:
        return FrontMatter(body=text)

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n") == DELIMITER:
            meta_lines = [line.rstrip("\r\n") for line in lines[1:index]]
            body = "".join(lines[index + 1 :])
            return FrontMatter(attributes=parse_attributes(meta_lines), body=body)

    # Opening delimiter without a closing one
    return FrontMatter(body=text)
