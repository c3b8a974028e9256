"""
Async GitHub client for the recipe repository.

Covers the four read-only, unauthenticated calls the blog needs: listing a
directory, fetching a raw file, searching issues, and listing an issue's
comments. Failures raise GitHubError and are never retried.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from cookbook.core.config import SiteConfig, get_config
from cookbook.core.errors import GitHubError

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
GITHUB_RAW = "https://raw.githubusercontent.com"
GITHUB_WEB = "https://github.com"

USER_AGENT = "cookbook/0.3"


class GitHubClient:
    """Read-only GitHub API client bound to one repository."""

    def __init__(self, config: SiteConfig, http: httpx.AsyncClient | None = None):
        """Initialize client.

        Args:
            config: Repository identifiers
            http: Optional pre-built httpx client (the client owns it otherwise)
        """
        self.config = config
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            headers={
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": USER_AGENT,
            },
            timeout=30,
            follow_redirects=True,
        )

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @property
    def owner(self) -> str:
        return self.config.owner

    @property
    def repo(self) -> str:
        return self.config.repo

    async def _get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        """Issue a GET and raise GitHubError for transport errors or non-2xx status."""
        logger.debug("GET %s %s", url, params or "")
        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as e:
            raise GitHubError(f"Network error: {e}", url=url) from e

        if not response.is_success:
            raise GitHubError(
                f"GitHub API error {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
                url=url,
            )
        return response

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        response = await self._get(url, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubError(f"Invalid JSON from {url}", status_code=response.status_code, url=url) from e

    async def list_directory(self, path: str) -> list[dict[str, Any]]:
        """List a directory through the contents API.

        Args:
            path: Repository-relative directory path

        Returns:
            Entry dicts carrying at least ``name`` and ``type``
        """
        url = f"{GITHUB_API}/repos/{self.owner}/{self.repo}/contents/{quote(path)}"
        data = await self._get_json(url, params={"ref": self.config.branch})
        if not isinstance(data, list):
            raise GitHubError(f"Expected a directory listing at {path}", url=url)
        return [entry for entry in data if isinstance(entry, dict)]

    async def fetch_raw(self, path: str) -> str:
        """Fetch a file's raw text from the configured branch."""
        response = await self._get(self.raw_url(path))
        return response.text

    async def search_issues(self, query: str) -> list[dict[str, Any]]:
        """Run an issue search and return the matched items."""
        data = await self._get_json(f"{GITHUB_API}/search/issues", params={"q": query})
        if not isinstance(data, dict):
            raise GitHubError("Unexpected issue search response")
        items = data.get("items") or []
        return [item for item in items if isinstance(item, dict)]

    async def list_issue_comments(self, number: int) -> list[dict[str, Any]]:
        """List the comments on one issue, oldest first."""
        url = f"{GITHUB_API}/repos/{self.owner}/{self.repo}/issues/{number}/comments"
        data = await self._get_json(url)
        if not isinstance(data, list):
            raise GitHubError(f"Unexpected comments response for issue #{number}", url=url)
        return [comment for comment in data if isinstance(comment, dict)]

    def raw_url(self, path: str) -> str:
        """Absolute raw-content URL for a repository path."""
        return f"{GITHUB_RAW}/{self.owner}/{self.repo}/{self.config.branch}/{quote(path)}"

    def asset_url(self, recipe_id: str, relative: str) -> str:
        """Absolute URL of a file inside a recipe's directory.

        Args:
            recipe_id: Recipe directory name
            relative: Path relative to the recipe directory, already URL-encoded
                as written in markdown (``./`` is dropped)
        """
        directory = self.raw_url(f"{self.config.recipes_dir}/{recipe_id}")
        return f"{directory}/{relative.removeprefix('./')}"


def create_client(config: SiteConfig | None = None) -> GitHubClient:
    """Create a client for the configured recipe repository."""
    if config is None:
        config = get_config()
    return GitHubClient(config)
