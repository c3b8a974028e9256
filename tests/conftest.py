"""Shared test fixtures for cookbook package."""

from __future__ import annotations

import json

import httpx
import pytest

from cookbook.content.github import GitHubClient
from cookbook.core.config import SiteConfig

TEST_CONFIG = SiteConfig(owner="chef", repo="kitchen")


def make_readme(title: str | None = None, body: str = "Some steps.", **fields: str) -> str:
    """Build a recipe README with simple front matter."""
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    for key, value in fields.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


class FakeGitHub:
    """In-memory stand-in for the GitHub API and raw content host.

    Attributes:
        listing: Entries returned for the recipes directory
        files: Raw file contents keyed by repository path
        issues: Items returned by issue search
        comments: Comment payloads keyed by issue number
        fail: Route names answered with HTTP 500
        broken: Route names that raise a connection error
        requests: Every request seen, in order
    """

    def __init__(self, config: SiteConfig = TEST_CONFIG):
        self.config = config
        self.listing: list[dict] = []
        self.files: dict[str, str] = {}
        self.issues: list[dict] = []
        self.comments: dict[int, list[dict]] = {}
        self.fail: set[str] = set()
        self.broken: set[str] = set()
        self.requests: list[httpx.Request] = []

    def add_recipe(self, recipe_id: str, readme: str | None) -> None:
        """Add a recipe directory; ``readme=None`` leaves the README missing."""
        self.listing.append({"name": recipe_id, "type": "dir", "path": f"recipes/{recipe_id}"})
        if readme is not None:
            self.files[f"recipes/{recipe_id}/README.md"] = readme

    def _route(self, request: httpx.Request) -> tuple[str, str]:
        path = request.url.path
        repo_prefix = f"/repos/{self.config.owner}/{self.config.repo}"
        if request.url.host == "raw.githubusercontent.com":
            prefix = f"/{self.config.owner}/{self.config.repo}/{self.config.branch}/"
            return "raw", path.removeprefix(prefix)
        if path.startswith(f"{repo_prefix}/contents/"):
            return "listing", path.removeprefix(f"{repo_prefix}/contents/")
        if path == "/search/issues":
            return "search", request.url.params.get("q", "")
        if path.startswith(f"{repo_prefix}/issues/") and path.endswith("/comments"):
            return "comments", path.split("/")[-2]
        return "unknown", path

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route, arg = self._route(request)

        if route in self.broken or arg in self.broken:
            raise httpx.ConnectError("connection refused", request=request)
        if route in self.fail or arg in self.fail:
            return httpx.Response(500, text="boom")

        if route == "raw":
            if arg not in self.files:
                return httpx.Response(404, text="404: Not Found")
            return httpx.Response(200, text=self.files[arg])
        if route == "listing":
            return httpx.Response(200, content=json.dumps(self.listing))
        if route == "search":
            return httpx.Response(200, content=json.dumps({"total_count": len(self.issues), "items": self.issues}))
        if route == "comments":
            return httpx.Response(200, content=json.dumps(self.comments.get(int(arg), [])))
        return httpx.Response(404, content=json.dumps({"message": "Not Found"}))

    def client(self) -> GitHubClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return GitHubClient(self.config, http=http)

    def requests_for(self, route: str) -> list[httpx.Request]:
        return [r for r in self.requests if self._route(r)[0] == route]


def make_comment(comment_id: int, login: str, body: str, created_at: str = "2024-05-01T12:00:00Z") -> dict:
    return {
        "id": comment_id,
        "user": {
            "login": login,
            "avatar_url": f"https://avatars.example/{login}.png",
            "html_url": f"https://github.com/{login}",
        },
        "created_at": created_at,
        "body": body,
        "html_url": f"https://github.com/chef/kitchen/issues/7#issuecomment-{comment_id}",
    }


@pytest.fixture
def fake_github():
    """A fresh fake GitHub backend."""
    return FakeGitHub()


@pytest.fixture
def client(fake_github):
    """GitHubClient wired to the fake backend."""
    return fake_github.client()


@pytest.fixture
def patched_client(fake_github, monkeypatch):
    """Make CLI commands talk to the fake backend."""
    from cookbook.content import github

    monkeypatch.setattr(github, "create_client", lambda config=None: fake_github.client())
    return fake_github


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the global config file at a temp dir and clear env overrides."""
    from cookbook.core import config

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for env_var in config.ENV_OVERRIDES.values():
        monkeypatch.delenv(env_var, raising=False)
    config.get_config.cache_clear()
    yield tmp_path / "xdg" / "cookbook" / "config.yaml"
    config.get_config.cache_clear()


@pytest.fixture
def readme():
    """Factory for recipe README text."""
    return make_readme


@pytest.fixture
def comment_payload():
    """Factory for GitHub issue comment payloads."""
    return make_comment


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root/httpx logger changes made by ``setup_logging`` between tests."""
    import logging

    root = logging.getLogger()
    httpx_logger = logging.getLogger("httpx")
    saved = (root.handlers[:], root.level, httpx_logger.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    httpx_logger.setLevel(saved[2])
