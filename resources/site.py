"""
Read-only resources.

contentful://{tools,terms,categories} — published entries as JSON
site://config                         — site.config.json plus src/config source files
site://seo                            — seo.config.json
site://seo-component                  — SEOMetaTags.tsx source ("" when absent)
site://mock-data                      — src/data/mock fallback data files
site://backups                        — backup snapshots, newest first
"""

import json
from typing import Any

from models import CONTENT_TYPES, ErrorKind, SiteContext, SiteError
from workspace import list_backups, read_json, read_source_files, read_text

JSON = "application/json"

# uri → (name, description, mime type)
RESOURCES: dict[str, tuple[str, str, str]] = {
    "contentful://tools": ("AI Tools", "All published AI tools", JSON),
    "contentful://terms": ("AI Terms", "All published AI glossary terms", JSON),
    "contentful://categories": ("Categories", "All published category pages", JSON),
    "site://config": ("Site Configuration", "site.config.json and the src/config source files", JSON),
    "site://seo": ("SEO Configuration", "Current SEO metadata", JSON),
    "site://seo-component": (
        "SEO Component",
        "Source of the SEO meta tags component that domain changes rewrite",
        "text/typescript",
    ),
    "site://mock-data": ("Mock Data", "Fallback mock data for development", JSON),
    "site://backups": ("Backups", "Content backup snapshots, newest first", JSON),
}

# Page sizes when listing a collection
RESOURCE_LIMITS = {"tools": 1000, "terms": 1000, "categories": 100}


def _normalize(uri: str) -> str:
    return uri.rstrip("/")


def resource_mime_type(uri: str) -> str:
    return RESOURCES.get(_normalize(uri), ("", "", JSON))[2]


def read_resource_data(context: SiteContext, uri: str) -> Any:
    """
    Resolve a resource URI to JSON-serializable data, or raw text for
    source-file resources.

    Raises:
        SiteError(NOT_FOUND): Unknown URI
    """
    uri = _normalize(uri)
    scheme, _, name = uri.partition("://")

    if scheme == "contentful" and name in CONTENT_TYPES:
        records = context.backend.list_entries(CONTENT_TYPES[name], limit=RESOURCE_LIMITS[name])
        return [record.to_dict() for record in records]

    if scheme == "site":
        settings = context.settings
        if name == "config":
            return {
                "settings": read_json(settings.site_config_path, default={}),
                "source_files": read_source_files(settings.config_source_dir),
            }
        if name == "seo":
            return read_json(settings.seo_config_path, default={})
        if name == "seo-component":
            return read_text(settings.seo_component_path)
        if name == "mock-data":
            return read_source_files(settings.mock_data_dir)
        if name == "backups":
            return list_backups(settings.backup_path)

    raise SiteError(
        ErrorKind.NOT_FOUND,
        f"Unknown resource URI: {uri}. Available: {sorted(RESOURCES)}",
    )


def read_resource_text(context: SiteContext, uri: str) -> str:
    data = read_resource_data(context, uri)
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)
