"""Tests for Settings loading."""

from pathlib import Path

from settings import Settings, load_settings


class TestLoadSettings:

    def test_defaults(self, tmp_path) -> None:
        settings = load_settings({"SITE_ROOT": str(tmp_path)}, load_env_files=False)

        assert settings.space_id is None
        assert settings.environment == "master"
        assert settings.locale == "en-US"
        assert settings.log_level == "INFO"
        assert settings.site_root == tmp_path
        assert not settings.can_read
        assert not settings.can_write

    def test_primary_names(self) -> None:
        settings = load_settings({
            "CONTENTFUL_SPACE_ID": "space123",
            "CONTENTFUL_DELIVERY_TOKEN": "cda",
            "CONTENTFUL_MANAGEMENT_TOKEN": "cma",
            "CONTENTFUL_ENVIRONMENT": "staging",
            "CONTENTFUL_LOCALE": "de-DE",
            "GITHUB_USERNAME": "endlessblink",
            "SITE_CONTROL_LOG_LEVEL": "DEBUG",
        }, load_env_files=False)

        assert settings.can_read and settings.can_write
        assert settings.environment == "staging"
        assert settings.locale == "de-DE"
        assert settings.github_username == "endlessblink"
        assert settings.log_level == "DEBUG"

    def test_vite_fallbacks(self) -> None:
        settings = load_settings({
            "VITE_CONTENTFUL_SPACE_ID": "space123",
            "VITE_CONTENTFUL_DELIVERY_TOKEN": "cda",
        }, load_env_files=False)

        assert settings.space_id == "space123"
        assert settings.delivery_token == "cda"
        assert settings.can_read
        assert not settings.can_write

    def test_primary_name_wins_over_fallback(self) -> None:
        settings = load_settings({
            "CONTENTFUL_SPACE_ID": "primary",
            "VITE_CONTENTFUL_SPACE_ID": "fallback",
        }, load_env_files=False)

        assert settings.space_id == "primary"

    def test_empty_values_are_unset(self) -> None:
        settings = load_settings({"CONTENTFUL_MANAGEMENT_TOKEN": "", "GITHUB_TOKEN": ""}, load_env_files=False)

        assert settings.management_token is None
        assert settings.github_token is None


class TestSitePaths:

    def test_paths_under_site_root(self) -> None:
        settings = Settings(site_root=Path("/srv/site"))

        assert settings.site_config_path == Path("/srv/site/site.config.json")
        assert settings.seo_config_path == Path("/srv/site/seo.config.json")
        assert settings.seo_component_path == Path("/srv/site/src/components/SEO/SEOMetaTags.tsx")
        assert settings.projects_cache_path == Path("/srv/site/src/data/github-projects.json")
        assert settings.backup_path == Path("/srv/site/backups")
        assert settings.config_source_dir == Path("/srv/site/src/config")
        assert settings.mock_data_dir == Path("/srv/site/src/data/mock")

    def test_backup_dir_override(self) -> None:
        settings = load_settings({"BACKUP_DIR": "/var/backups/site"}, load_env_files=False)

        assert settings.backup_path == Path("/var/backups/site")
