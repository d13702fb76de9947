"""
Entry operations — create, update, delete and list backend entries.

Creates are create-then-publish. Updates only touch fields the entry
already has. Deletes unpublish first; if that fails nothing is deleted.
"""

from logging_config import logger
from models import (
    AI_TERM,
    AI_TOOL,
    CATEGORY_PAGE,
    CONTENT_TYPES,
    ErrorKind,
    SiteContext,
    SiteError,
    ToolResult,
)
from schemas import (
    CreateCategoryRequest,
    CreateEntityRequest,
    CreateTermRequest,
    DeleteEntityRequest,
    ListEntriesRequest,
    UpdateEntityRequest,
)
from validation import sanitize_search_query


def _create_and_publish(ctx: SiteContext, content_type: str, fields: dict) -> str:
    entry_id = ctx.backend.create_entry(content_type, fields)
    ctx.backend.publish(entry_id)
    logger.info(f"Created and published {content_type} {entry_id}")
    return entry_id


def do_create_entity(ctx: SiteContext, request: CreateEntityRequest) -> ToolResult:
    """Add an AI tool listing."""
    entry_id = _create_and_publish(ctx, AI_TOOL, request.to_fields())
    return ToolResult(
        operation="create-entity",
        message=f'Successfully added AI tool "{request.name}" (ID: {entry_id})',
        entry_id=entry_id,
        cues={"content_type": AI_TOOL},
    )


def do_create_term(ctx: SiteContext, request: CreateTermRequest) -> ToolResult:
    """Add a glossary term."""
    entry_id = _create_and_publish(ctx, AI_TERM, request.to_fields())
    return ToolResult(
        operation="create-term",
        message=f'Successfully added AI term "{request.term}" (ID: {entry_id})',
        entry_id=entry_id,
        cues={"content_type": AI_TERM},
    )


def do_create_category(ctx: SiteContext, request: CreateCategoryRequest) -> ToolResult:
    """Add a category page."""
    entry_id = _create_and_publish(ctx, CATEGORY_PAGE, request.to_fields())
    return ToolResult(
        operation="create-category",
        message=f'Successfully created category page "{request.name}" (ID: {entry_id})',
        entry_id=entry_id,
        cues={"content_type": CATEGORY_PAGE, "slug": request.slug},
    )


def do_update_entity(ctx: SiteContext, request: UpdateEntityRequest) -> ToolResult:
    """
    Update an entry's existing fields, then republish.

    Field names the entry does not have are skipped and reported in
    cues["ignored_fields"]. If every name is unknown nothing is written.
    """
    current = ctx.backend.get_entry(request.entry_id)

    applied = {name: value for name, value in request.fields.items() if name in current.fields}
    ignored = sorted(name for name in request.fields if name not in current.fields)
    if not applied:
        raise SiteError(
            ErrorKind.INVALID_REQUEST,
            f"fields: none of {ignored} exist on entry {request.entry_id} "
            f"(available: {sorted(current.fields)})",
            details={"fields": ["fields"]},
        )

    ctx.backend.update_entry(request.entry_id, applied)
    ctx.backend.publish(request.entry_id)
    logger.info(f"Updated {request.entry_id}: {sorted(applied)}")

    cues: dict = {"updated_fields": sorted(applied), "content_type": current.content_type}
    if ignored:
        cues["ignored_fields"] = ignored
    return ToolResult(
        operation="update-entity",
        message=f"Successfully updated entry (ID: {request.entry_id})",
        entry_id=request.entry_id,
        cues=cues,
    )


def do_delete_entity(ctx: SiteContext, request: DeleteEntityRequest) -> ToolResult:
    """Unpublish then delete. A failed unpublish propagates before delete is tried."""
    current = ctx.backend.get_entry(request.entry_id)
    ctx.backend.unpublish(request.entry_id)
    ctx.backend.delete_entry(request.entry_id)
    logger.info(f"Deleted {current.content_type} {request.entry_id}")
    return ToolResult(
        operation="delete-entity",
        message=f"Successfully deleted entry (ID: {request.entry_id})",
        entry_id=request.entry_id,
        cues={"content_type": current.content_type},
    )


def do_list_entries(ctx: SiteContext, request: ListEntriesRequest) -> ToolResult:
    """List published entries, optionally full-text searched."""
    content_type = CONTENT_TYPES[request.content_type]
    filters = {}
    query = sanitize_search_query(request.search or "")
    if query:
        filters["query"] = query

    records = ctx.backend.list_entries(content_type, filters or None, limit=request.limit)

    described = f"{len(records)} {request.content_type}"
    if query:
        described += f" matching {query!r}"
    cues: dict = {"content_type": content_type, "count": len(records)}
    if len(records) >= request.limit:
        cues["truncated"] = f"limit of {request.limit} reached; raise limit to see more"
    return ToolResult(
        operation="list-entries",
        message=f"Found {described}",
        records=[record.to_dict() for record in records],
        cues=cues,
    )
