"""
Tools — operation implementations.

Each handler takes (SiteContext, validated request) and returns a
ToolResult, raising SiteError on failure. dispatcher.py routes names to
these; server.py and cli.py are thin front ends over the dispatcher.
"""

from typing import Any, Callable

from models import SiteContext, ToolResult

from .entries import (
    do_create_entity,
    do_update_entity,
    do_delete_entity,
    do_create_term,
    do_create_category,
    do_list_entries,
)
from .site import do_update_site_metadata, do_update_config
from .quality import do_validate_content
from .backup import do_backup_content
from .sync import do_sync_external_projects

Handler = Callable[[SiteContext, Any], ToolResult]

# Operation name → handler. Keys must match schemas.REQUEST_MODELS.
HANDLERS: dict[str, Handler] = {
    "create-entity": do_create_entity,
    "update-entity": do_update_entity,
    "delete-entity": do_delete_entity,
    "create-term": do_create_term,
    "create-category": do_create_category,
    "list-entries": do_list_entries,
    "update-site-metadata": do_update_site_metadata,
    "update-config": do_update_config,
    "validate-content": do_validate_content,
    "backup-content": do_backup_content,
    "sync-external-projects": do_sync_external_projects,
}

# Single source of truth for valid operation names.
OPERATIONS = frozenset(HANDLERS)

__all__ = [
    "do_create_entity", "do_update_entity", "do_delete_entity",
    "do_create_term", "do_create_category", "do_list_entries",
    "do_update_site_metadata", "do_update_config", "do_validate_content",
    "do_backup_content", "do_sync_external_projects",
    "Handler", "HANDLERS", "OPERATIONS",
]
