"""
Workspace — file I/O under the site root.

Config merges, SEO source rewrites, backup snapshots, projects cache.
"""

from .manager import (
    read_json,
    read_text,
    read_source_files,
    write_json,
    merge_json_file,
    rewrite_seo_domain,
    backup_filename,
    write_backup,
    list_backups,
    read_projects_cache,
    cache_age_seconds,
)

__all__ = [
    "read_json",
    "read_text",
    "read_source_files",
    "write_json",
    "merge_json_file",
    "rewrite_seo_domain",
    "backup_filename",
    "write_backup",
    "list_backups",
    "read_projects_cache",
    "cache_age_seconds",
]
