"""Tests for RecipeIngestor (listing, partial failure, ordering)."""

import asyncio
from datetime import datetime, timezone

import pytest

from cookbook.content.ingest import RecipeIngestor
from cookbook.core.errors import IngestionError

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


def _ingestor(client) -> RecipeIngestor:
    return RecipeIngestor(client, clock=lambda: NOW)


def _list(client):
    return asyncio.run(_ingestor(client).list_recipes())


def test_lists_recipes_newest_first(fake_github, client, readme):
    fake_github.add_recipe("old", readme("Old", date="2023-01-01"))
    fake_github.add_recipe("new", readme("New", date="2024-06-01"))
    fake_github.add_recipe("mid", readme("Mid", date="2023-09-10"))

    recipes = _list(client)

    assert [r.id for r in recipes] == ["new", "mid", "old"]


def test_only_directories_are_candidates(fake_github, client, readme):
    fake_github.add_recipe("pho", readme("Pho"))
    fake_github.listing.append({"name": "index.md", "type": "file"})
    fake_github.listing.append({"name": "link", "type": "symlink"})

    recipes = _list(client)

    assert [r.id for r in recipes] == ["pho"]
    assert len(fake_github.requests_for("raw")) == 1


def test_one_failed_fetch_drops_only_that_recipe(fake_github, client, readme, caplog):
    fake_github.add_recipe("cake", readme("Cake", date="2024-01-01"))
    fake_github.add_recipe("toast", readme("Toast", date="2024-01-02"))
    fake_github.add_recipe("soup", readme("Soup", date="2024-01-03"))
    fake_github.fail.add("recipes/toast/README.md")

    with caplog.at_level("WARNING", logger="cookbook.content.ingest"):
        recipes = _list(client)

    assert [r.id for r in recipes] == ["soup", "cake"]
    assert "toast" in caplog.text


def test_missing_readme_and_network_error_are_skipped(fake_github, client, readme):
    fake_github.add_recipe("ok", readme("Ok"))
    fake_github.add_recipe("no-readme", None)
    fake_github.add_recipe("flaky", readme("Flaky"))
    fake_github.broken.add("recipes/flaky/README.md")

    recipes = _list(client)

    assert [r.id for r in recipes] == ["ok"]


def test_listing_failure_is_fatal(fake_github, client, readme):
    fake_github.add_recipe("cake", readme("Cake"))
    fake_github.fail.add("listing")

    with pytest.raises(IngestionError) as exc:
        _list(client)

    assert "Failed to list recipes" in exc.value.message
    assert fake_github.requests_for("raw") == []


def test_listing_network_error_is_fatal(fake_github, client):
    fake_github.broken.add("listing")
    with pytest.raises(IngestionError):
        _list(client)


def test_empty_repository(fake_github, client):
    assert _list(client) == []


def test_equal_dates_keep_listing_order(fake_github, client, readme):
    for rid in ["b", "a", "c"]:
        fake_github.add_recipe(rid, readme(rid.upper(), date="2024-02-02"))

    assert [r.id for r in _list(client)] == ["b", "a", "c"]


def test_missing_date_uses_ingestion_time(fake_github, client, readme):
    fake_github.add_recipe("dated", readme("Dated", date="2024-02-02"))
    fake_github.add_recipe("undated", readme("Undated"))

    recipes = _list(client)

    assert recipes[0].id == "undated"
    assert recipes[0].published == NOW


def test_records_are_fully_defaulted(fake_github, client):
    fake_github.add_recipe("bare", "Just a body, no metadata.")

    [recipe] = _list(client)

    assert recipe.title == "bare"
    assert recipe.description == ""
    assert recipe.tags == ()
    assert recipe.body == "Just a body, no metadata."
    assert recipe.thumbnail.endswith("/chef/kitchen/main/recipes/bare/assets/thumbnail.png")


def test_asset_links_point_into_recipe_directory(fake_github, client, readme):
    fake_github.add_recipe("ramen", readme("Ramen", body="![bowl](./assets/bowl.jpg)"))

    [recipe] = _list(client)

    assert recipe.body == (
        "![bowl](https://raw.githubusercontent.com/chef/kitchen/main/recipes/ramen/assets/bowl.jpg)"
    )


def test_readmes_fetched_concurrently(fake_github, readme):
    """All README requests are in flight before any of them completes."""
    import httpx

    from cookbook.content.github import GitHubClient

    for rid in ["a", "b", "c"]:
        fake_github.add_recipe(rid, readme(rid))

    in_flight = 0
    peak = 0

    class SlowTransport(httpx.AsyncBaseTransport):
        async def handle_async_request(self, request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            response = fake_github.handler(request)
            return httpx.Response(response.status_code, content=response.content, request=request)

    client = GitHubClient(fake_github.config, http=httpx.AsyncClient(transport=SlowTransport()))
    recipes = asyncio.run(_ingestor(client).list_recipes())

    assert len(recipes) == 3
    assert peak == 3


def test_get_recipe(fake_github, client, readme):
    fake_github.add_recipe("pho", readme("Pho", description="Noodle soup", tags="[soup, vietnamese]"))

    recipe = asyncio.run(_ingestor(client).get_recipe("pho"))

    assert recipe.title == "Pho"
    assert recipe.tags == ("soup", "vietnamese")
    assert fake_github.requests_for("listing") == []


def test_get_recipe_failure_raises(fake_github, client):
    with pytest.raises(IngestionError) as exc:
        asyncio.run(_ingestor(client).get_recipe("ghost"))
    assert "ghost" in exc.value.message


def test_readme_name_from_config(fake_github, readme):
    from cookbook.core.config import SiteConfig

    fake = type(fake_github)(SiteConfig(owner="chef", repo="kitchen", readme="index.md"))
    fake.listing.append({"name": "pie", "type": "dir"})
    fake.files["recipes/pie/index.md"] = readme("Pie")

    [recipe] = asyncio.run(_ingestor(fake.client()).list_recipes())
    assert recipe.title == "Pie"
