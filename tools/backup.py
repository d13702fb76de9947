"""
Backup — snapshot published tools, terms and categories to JSON.

Snapshots land in the backup directory as
contentful-backup-{YYYY-MM-DDTHH-MM-SSZ}.json, so repeated runs on the
same day never overwrite each other.
"""

from datetime import datetime, timezone
from typing import Any

from logging_config import logger
from models import AI_TERM, AI_TOOL, CATEGORY_PAGE, ContentRecord, SiteContext, ToolResult
from schemas import BackupContentRequest
from workspace import write_backup

# collection name → (content type, page size)
BACKUP_SECTIONS: dict[str, tuple[str, int]] = {
    "tools": (AI_TOOL, 1000),
    "terms": (AI_TERM, 1000),
    "categories": (CATEGORY_PAGE, 100),
}

# Fields holding asset URLs, per content type
ASSET_FIELDS: dict[str, tuple[str, ...]] = {
    AI_TOOL: ("logoUrl",),
}


def collect_asset_urls(records: list[ContentRecord]) -> list[str]:
    """Distinct asset URLs referenced by the records, in first-seen order."""
    urls: list[str] = []
    for record in records:
        for name in ASSET_FIELDS.get(record.content_type, ()):
            value = record.fields.get(name)
            if isinstance(value, str) and value and value not in urls:
                urls.append(value)
    return urls


def do_backup_content(
    ctx: SiteContext,
    request: BackupContentRequest,
    now: datetime | None = None,
) -> ToolResult:
    now = now or datetime.now(timezone.utc)
    snapshot: dict[str, Any] = {
        "timestamp": now.isoformat(),
        "space_id": ctx.settings.space_id,
        "environment": ctx.settings.environment,
    }

    all_records: list[ContentRecord] = []
    for section, (content_type, limit) in BACKUP_SECTIONS.items():
        records = ctx.backend.list_entries(content_type, limit=limit)
        all_records.extend(records)
        snapshot[section] = [record.to_dict() for record in records]

    if request.include_assets:
        snapshot["assets"] = collect_asset_urls(all_records)

    path = write_backup(ctx.settings.backup_path, snapshot, now=now)
    counts = {section: len(snapshot[section]) for section in BACKUP_SECTIONS}
    logger.info(f"Backup written to {path} ({counts})")

    lines = [f"Content backup created: {path.name}"]
    lines += [f"{section.capitalize()}: {count}" for section, count in counts.items()]
    if request.include_assets:
        lines.append(f"Assets: {len(snapshot['assets'])}")

    return ToolResult(
        operation="backup-content",
        message="\n".join(lines),
        cues={"path": str(path), "counts": counts},
    )
