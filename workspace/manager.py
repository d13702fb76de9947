"""
Workspace Manager — file I/O under the site root.

Handles the few local files the operations read and write:
- site.config.json / seo.config.json: small JSON objects, shallow-merged
- src/config and src/data/mock source files, read for resources
- the SEO component source, when a domain change must be rewritten into it
- backups/contentful-backup-{timestamp}.json snapshots
- the cached GitHub projects list

Everything is plain JSON with 2-space indent so diffs stay readable.
"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from models import ErrorKind, SiteError

BACKUP_PREFIX = "contentful-backup-"

# Site source files exposed as resources
SOURCE_SUFFIXES = (".js", ".ts", ".json")

# `const siteUrl = ...;` in the SEO component
_SITE_URL_PATTERN = re.compile(r"const siteUrl = [^;]+;")
# Hard-coded absolute .com URLs in the same file
_HARDCODED_URL_PATTERN = re.compile(r"https://[^\"'\s]+\.com")


def read_json(path: Path, default: Any = None) -> Any:
    """
    Read a JSON file.

    Args:
        path: File to read
        default: Returned when the file does not exist

    Raises:
        SiteError(INTERNAL_ERROR): File exists but is not valid JSON
    """
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SiteError(ErrorKind.INTERNAL_ERROR, f"{path.name} is not valid JSON: {e}") from e


def read_text(path: Path) -> str:
    """File contents, or "" when the file does not exist."""
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8")


def read_source_files(directory: Path, suffixes: tuple[str, ...] = SOURCE_SUFFIXES) -> dict[str, str]:
    """
    Contents of the matching files directly inside directory, keyed by name.

    Not recursive. Missing directory gives {}.
    """
    if not directory.is_dir():
        return {}
    return {
        path.name: path.read_text(encoding="utf-8")
        for path in sorted(directory.iterdir())
        if path.is_file() and path.suffix in suffixes
    }


def write_json(path: Path, data: Any) -> Path:
    """Write data as indented JSON, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def merge_json_file(path: Path, updates: dict[str, Any]) -> dict[str, Any]:
    """
    Shallow-merge updates into the JSON object stored at path.

    Missing file starts from {}. Returns the merged object.

    Raises:
        SiteError(INTERNAL_ERROR): Existing content is not a JSON object
    """
    current = read_json(path, default={})
    if not isinstance(current, dict):
        raise SiteError(
            ErrorKind.INTERNAL_ERROR,
            f"{path.name} must contain a JSON object, found {type(current).__name__}",
        )
    merged = {**current, **updates}
    write_json(path, merged)
    return merged


def rewrite_seo_domain(source: str, domain: str) -> tuple[str, int]:
    """
    Point the SEO component at a new domain.

    Rewrites the `const siteUrl = ...;` declaration (production URL on the
    new domain, localhost otherwise) and every hard-coded https://*.com URL.

    Returns:
        (rewritten source, number of replacements)
    """
    site_url = (
        "const siteUrl = process.env.NODE_ENV === 'production' "
        f"? 'https://{domain}' : 'http://localhost:8080';"
    )
    # Replace the hard-coded URLs first so the new siteUrl line is not touched
    rewritten, url_count = _HARDCODED_URL_PATTERN.subn(f"https://{domain}", source)
    rewritten, decl_count = _SITE_URL_PATTERN.subn(lambda _: site_url, rewritten)
    return rewritten, url_count + decl_count


# ============================================================================
# BACKUPS
# ============================================================================

def backup_filename(now: datetime) -> str:
    """
    Filesystem-safe, sortable snapshot name.

    Example:
        backup_filename(datetime(2026, 10, 18, 13, 5, 22, tzinfo=timezone.utc))
        -> "contentful-backup-2026-10-18T13-05-22Z.json"
    """
    stamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")
    return f"{BACKUP_PREFIX}{stamp}.json"


def write_backup(backup_dir: Path, snapshot: dict[str, Any], now: datetime | None = None) -> Path:
    """
    Write a backup snapshot.

    Args:
        backup_dir: Folder for snapshots (created if missing)
        snapshot: JSON-serializable backup content
        now: Timestamp for the filename (defaults to current UTC time)

    Returns:
        Path to the written snapshot
    """
    now = now or datetime.now(timezone.utc)
    return write_json(backup_dir / backup_filename(now), snapshot)


def list_backups(backup_dir: Path) -> list[dict[str, Any]]:
    """List snapshots, newest first."""
    if not backup_dir.is_dir():
        return []
    backups = []
    for path in backup_dir.glob(f"{BACKUP_PREFIX}*.json"):
        stat = path.stat()
        backups.append({
            "name": path.name,
            "size": stat.st_size,
            "modified": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
        })
    # Timestamped names sort chronologically
    backups.sort(key=lambda b: b["name"], reverse=True)
    return backups


# ============================================================================
# PROJECTS CACHE
# ============================================================================

def read_projects_cache(path: Path) -> dict[str, Any] | None:
    """Return the cached projects payload, or None if absent or malformed."""
    cached = read_json(path, default=None)
    if not isinstance(cached, dict) or "projects" not in cached or "synced_at" not in cached:
        return None
    return cached


def cache_age_seconds(cached: dict[str, Any], now: datetime | None = None) -> float | None:
    """Seconds since the cache was written, or None if its timestamp is unreadable."""
    now = now or datetime.now(timezone.utc)
    try:
        synced_at = datetime.fromisoformat(cached["synced_at"])
    except (TypeError, ValueError):
        return None
    if synced_at.tzinfo is None:
        synced_at = synced_at.replace(tzinfo=timezone.utc)
    return (now - synced_at).total_seconds()
