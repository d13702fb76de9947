"""
Project sync — cache the site owner's public GitHub repositories.

The cache is a JSON file under the site root that the projects page
reads at build time. A cache younger than CACHE_TTL_SECONDS is reused
unless forceRefresh is set, or it was written for a different user.
"""

from datetime import datetime, timezone

from logging_config import logger
from models import ErrorKind, SiteContext, SiteError, ToolResult
from schemas import SyncExternalProjectsRequest
from workspace import cache_age_seconds, read_projects_cache, write_json

CACHE_TTL_SECONDS = 3600


def do_sync_external_projects(
    ctx: SiteContext,
    request: SyncExternalProjectsRequest,
    now: datetime | None = None,
) -> ToolResult:
    username = request.username or ctx.settings.github_username
    if not username:
        raise SiteError(
            ErrorKind.INVALID_REQUEST,
            "username: required when GITHUB_USERNAME is not set",
            details={"fields": ["username"]},
        )

    now = now or datetime.now(timezone.utc)
    cache_path = ctx.settings.projects_cache_path
    cached = read_projects_cache(cache_path)

    if cached and not request.force_refresh and cached.get("username") == username:
        age = cache_age_seconds(cached, now)
        if age is not None and 0 <= age < CACHE_TTL_SECONDS:
            count = len(cached["projects"])
            return ToolResult(
                operation="sync-external-projects",
                message=f"GitHub projects for user: {username} are up to date ({count} cached)",
                cues={"cached": True, "count": count, "age_seconds": int(age)},
            )

    projects = ctx.projects.list_repositories(username)
    write_json(cache_path, {
        "username": username,
        "synced_at": now.isoformat(),
        "projects": projects,
    })
    logger.info(f"Synced {len(projects)} GitHub projects for {username}")

    return ToolResult(
        operation="sync-external-projects",
        message=f"GitHub projects synced for user: {username} ({len(projects)} projects)",
        cues={"cached": False, "count": len(projects), "path": str(cache_path)},
    )
