"""
Configuration management CLI commands.

Manages the repository settings stored in ~/.config/cookbook/config.yaml.
Environment variables (COOKBOOK_OWNER, COOKBOOK_REPO, COOKBOOK_BRANCH)
override the file.
"""

from __future__ import annotations

import os
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from cookbook.core.config import (
    DEFAULT_BRANCH,
    DEFAULT_OWNER,
    DEFAULT_README,
    DEFAULT_RECIPES_DIR,
    DEFAULT_REPO,
    ENV_OVERRIDES,
    build_config,
    get_global_config_path,
    load_global_config,
    save_global_config,
)

console = Console()


CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "owner": {
        "default": DEFAULT_OWNER,
        "description": "GitHub user or organization that owns the recipe repository",
    },
    "repo": {
        "default": DEFAULT_REPO,
        "description": "Repository holding the recipes",
    },
    "branch": {
        "default": DEFAULT_BRANCH,
        "description": "Branch to read recipes from",
    },
    "recipes_dir": {
        "default": DEFAULT_RECIPES_DIR,
        "description": "Directory with one sub-directory per recipe",
    },
    "readme": {
        "default": DEFAULT_README,
        "description": "Markdown file inside each recipe directory",
    },
}


def _unknown_key(key: str) -> None:
    console.print(f"[red]Unknown setting: {key}[/red]")
    console.print("\nAvailable settings:")
    for k in CONFIG_SCHEMA:
        console.print(f"  - {k}")


@click.group()
def config():
    """Manage cookbook configuration."""
    pass


@config.command(name="show")
def show_cmd():
    """Show the effective configuration and where each value comes from."""
    file_config = load_global_config()
    effective = build_config(file_config)

    table = Table(title="Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")
    table.add_column("Description", style="dim")

    for key, schema in CONFIG_SCHEMA.items():
        env_var = ENV_OVERRIDES.get(key)
        if env_var and os.environ.get(env_var):
            source = f"${env_var}"
        elif file_config.get(key) is not None:
            source = "file"
        else:
            source = "default"
        table.add_row(key, str(getattr(effective, key)), source, schema["description"])

    console.print(table)
    console.print(f"\n[dim]Config file: {get_global_config_path()}[/dim]")


@config.command(name="get")
@click.argument("key")
def get_cmd(key: str):
    """Get a configuration value.

    Examples:
        cookbook config get owner
    """
    if key not in CONFIG_SCHEMA:
        _unknown_key(key)
        return

    value = getattr(build_config(), key)
    if value == CONFIG_SCHEMA[key]["default"]:
        console.print(f"{key} = {value} [dim](default)[/dim]")
    else:
        console.print(f"{key} = {value}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str):
    """Set a configuration value.

    Examples:
        cookbook config set owner octocat
        cookbook config set repo my-recipes
    """
    if key not in CONFIG_SCHEMA:
        _unknown_key(key)
        return

    value = value.strip()
    if not value:
        console.print("[red]Value cannot be empty[/red]")
        return

    file_config = load_global_config()
    file_config[key] = value
    save_global_config(file_config)
    console.print(f"[green]Set {key} = {value}[/green]")


@config.command(name="reset")
@click.argument("key", required=False)
@click.option("--all", "reset_all", is_flag=True, help="Reset all settings to defaults")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
def reset_cmd(key: str | None, reset_all: bool, force: bool):
    """Reset configuration to defaults."""
    if not key and not reset_all:
        console.print("[red]Specify a key or use --all to reset all settings[/red]")
        return

    if reset_all:
        if not force and not click.confirm("Reset all settings to defaults?"):
            console.print("[yellow]Cancelled[/yellow]")
            return
        config_path = get_global_config_path()
        if config_path.exists():
            config_path.unlink()
        console.print("[green]All settings reset to defaults[/green]")
        return

    if key not in CONFIG_SCHEMA:
        _unknown_key(key)
        return

    file_config = load_global_config()
    if key in file_config:
        del file_config[key]
        save_global_config(file_config)
        console.print(f"[green]Reset {key} to default ({CONFIG_SCHEMA[key]['default']})[/green]")
    else:
        console.print(f"[dim]{key} is already at default[/dim]")


@config.command(name="path")
def path_cmd():
    """Show path to config file."""
    console.print(str(get_global_config_path()))
