"""
Configuration for the remote recipe repository.

The only settings are the static identifiers of the GitHub repository that
holds the recipes and where inside it they live.

Resolution order (highest priority first):
  1. COOKBOOK_OWNER / COOKBOOK_REPO / COOKBOOK_BRANCH environment variables
  2. Global config file (~/.config/cookbook/config.yaml)
  3. Built-in defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

DEFAULT_OWNER = "your-github-username"
DEFAULT_REPO = "cooking-blog"
DEFAULT_BRANCH = "main"
DEFAULT_RECIPES_DIR = "recipes"
DEFAULT_README = "README.md"

ENV_OVERRIDES = {
    "owner": "COOKBOOK_OWNER",
    "repo": "COOKBOOK_REPO",
    "branch": "COOKBOOK_BRANCH",
}


@dataclass(frozen=True)
class SiteConfig:
    """Identifiers of the repository that stores the recipes."""

    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH
    recipes_dir: str = DEFAULT_RECIPES_DIR
    readme: str = DEFAULT_README

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def get_global_config_path() -> Path:
    """Return the path to the global cookbook config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/cookbook/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "cookbook" / "config.yaml"


def load_global_config() -> dict[str, Any]:
    """Load the global cookbook configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        text = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
        return {}
    except (OSError, yaml.YAMLError):
        return {}


def save_global_config(config: dict[str, Any]) -> Path:
    """Write the global configuration file (YAML format).

    Returns:
        Path that was written.
    """
    config_path = get_global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.dump(config, default_flow_style=False, sort_keys=False))
    return config_path


def build_config(file_config: dict[str, Any] | None = None) -> SiteConfig:
    """Merge defaults, file values, and environment overrides.

    Args:
        file_config: Values from the global config file (loaded if not given)

    Returns:
        Resolved SiteConfig
    """
    if file_config is None:
        file_config = load_global_config()

    values: dict[str, str] = {}
    for field_name in SiteConfig.__dataclass_fields__:
        raw = file_config.get(field_name)
        if raw is not None and str(raw).strip():
            values[field_name] = str(raw).strip()

    for field_name, env_var in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[field_name] = env_value

    return SiteConfig(**values)


@lru_cache(maxsize=1)
def get_config() -> SiteConfig:
    """Get the cached site configuration."""
    return build_config()
