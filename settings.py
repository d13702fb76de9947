"""
Settings - Single Source of Truth

All environment-derived configuration is read here, once, into a frozen
Settings object. Do not call os.getenv elsewhere.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

DEFAULT_ENVIRONMENT = "master"
DEFAULT_LOCALE = "en-US"

# Files under the site root
SITE_CONFIG_FILE = "site.config.json"
SEO_CONFIG_FILE = "seo.config.json"
SEO_COMPONENT_FILE = Path("src/components/SEO/SEOMetaTags.tsx")
PROJECTS_CACHE_FILE = Path("src/data/github-projects.json")
CONFIG_SOURCE_DIR = Path("src/config")
MOCK_DATA_DIR = Path("src/data/mock")
BACKUP_DIR_NAME = "backups"


@dataclass(frozen=True)
class Settings:
    """Credentials and paths for one server process."""
    space_id: str | None = None
    delivery_token: str | None = None
    management_token: str | None = None
    environment: str = DEFAULT_ENVIRONMENT
    locale: str = DEFAULT_LOCALE
    site_root: Path = Path(".")
    backup_dir: Path | None = None
    github_username: str | None = None
    github_token: str | None = None
    log_level: str = "INFO"

    @property
    def can_read(self) -> bool:
        return bool(self.space_id and self.delivery_token)

    @property
    def can_write(self) -> bool:
        return bool(self.space_id and self.management_token)

    @property
    def site_config_path(self) -> Path:
        return self.site_root / SITE_CONFIG_FILE

    @property
    def seo_config_path(self) -> Path:
        return self.site_root / SEO_CONFIG_FILE

    @property
    def seo_component_path(self) -> Path:
        return self.site_root / SEO_COMPONENT_FILE

    @property
    def projects_cache_path(self) -> Path:
        return self.site_root / PROJECTS_CACHE_FILE

    @property
    def config_source_dir(self) -> Path:
        return self.site_root / CONFIG_SOURCE_DIR

    @property
    def mock_data_dir(self) -> Path:
        return self.site_root / MOCK_DATA_DIR

    @property
    def backup_path(self) -> Path:
        return self.backup_dir or self.site_root / BACKUP_DIR_NAME


def _first(env: Mapping[str, str], *names: str) -> str | None:
    """Return the first non-empty variable among names."""
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def load_settings(env: Mapping[str, str] | None = None, load_env_files: bool = True) -> Settings:
    """
    Build Settings from the process environment.

    Loads .env from the working directory, then from SITE_ROOT if that
    differs. Variables already in the environment are never overridden.

    Args:
        env: Mapping to read instead of os.environ (tests)
        load_env_files: Whether to read .env files first
    """
    if load_env_files:
        load_dotenv()
    if env is None:
        env = os.environ

    site_root = Path(env.get("SITE_ROOT") or Path.cwd())
    if load_env_files and (site_root / ".env").is_file():
        # Updates os.environ in place, so env sees it when it is os.environ
        load_dotenv(site_root / ".env")

    backup_dir = env.get("BACKUP_DIR")

    return Settings(
        space_id=_first(env, "CONTENTFUL_SPACE_ID", "VITE_CONTENTFUL_SPACE_ID"),
        delivery_token=_first(env, "CONTENTFUL_DELIVERY_TOKEN", "VITE_CONTENTFUL_DELIVERY_TOKEN"),
        management_token=_first(env, "CONTENTFUL_MANAGEMENT_TOKEN"),
        environment=env.get("CONTENTFUL_ENVIRONMENT") or DEFAULT_ENVIRONMENT,
        locale=env.get("CONTENTFUL_LOCALE") or DEFAULT_LOCALE,
        site_root=site_root,
        backup_dir=Path(backup_dir) if backup_dir else None,
        github_username=env.get("GITHUB_USERNAME") or None,
        github_token=env.get("GITHUB_TOKEN") or None,
        log_level=env.get("SITE_CONTROL_LOG_LEVEL") or "INFO",
    )
