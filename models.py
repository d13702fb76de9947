"""
Type definitions for site-control.

Dataclasses defining the contracts between layers:
- Adapters produce ContentRecords from backend responses
- Tools consume a SiteContext and return ToolResults
- The dispatcher turns ToolResults and SiteErrors into response envelopes

These types make the adapter→tool contract explicit and IDE-checkable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from settings import Settings


# ============================================================================
# ERROR TYPES
# ============================================================================

class ErrorKind(Enum):
    """Categories of errors for consistent handling."""
    INVALID_REQUEST = "invalid_request"          # Bad arguments
    NOT_FOUND = "not_found"                      # Unknown operation or missing record
    BACKEND_UNAVAILABLE = "backend_unavailable"  # Credentials not configured
    BACKEND_ERROR = "backend_error"              # Backend rejected or failed the call
    INTERNAL_ERROR = "internal_error"            # Unexpected failure


# JSON-RPC error codes per kind
ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_REQUEST: -32602,
    ErrorKind.NOT_FOUND: -32601,
    ErrorKind.INTERNAL_ERROR: -32603,
    ErrorKind.BACKEND_UNAVAILABLE: -32001,
    ErrorKind.BACKEND_ERROR: -32002,
}


class SiteError(Exception):
    """
    Structured error for consistent handling across layers.

    Adapters, validation and tools raise these.
    The dispatcher catches and formats them for the response envelope.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or {}

    @property
    def code(self) -> int:
        return ERROR_CODES[self.kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the error object of a response envelope."""
        return {
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
            **self.details,
        }


# ============================================================================
# CONTENT TYPES
# ============================================================================

AI_TOOL = "aiTool"
AI_TERM = "aiTerm"
CATEGORY_PAGE = "categoryPage"

# Caller-facing collection names → backend content type IDs
CONTENT_TYPES: dict[str, str] = {
    "tools": AI_TOOL,
    "terms": AI_TERM,
    "categories": CATEGORY_PAGE,
}


@dataclass
class ContentRecord:
    """
    One stored entry, de-localized.

    Fields hold plain values for the configured locale, not the
    {"en-US": value} wrappers the backend stores.
    """
    id: str
    content_type: str
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content_type": self.content_type,
            "fields": self.fields,
        }


# ============================================================================
# COLLABORATOR CONTRACTS
# ============================================================================

class ContentBackend(Protocol):
    """CRUD interface the tools need from the content backend."""

    def list_entries(
        self,
        content_type: str,
        filters: dict[str, Any] | None = None,
        limit: int = 1000,
    ) -> list[ContentRecord]: ...

    def create_entry(self, content_type: str, fields: dict[str, Any]) -> str: ...

    def get_entry(self, entry_id: str) -> ContentRecord: ...

    def update_entry(self, entry_id: str, fields: dict[str, Any]) -> None: ...

    def publish(self, entry_id: str) -> None: ...

    def unpublish(self, entry_id: str) -> None: ...

    def delete_entry(self, entry_id: str) -> None: ...


class ProjectSource(Protocol):
    """Where sync-external-projects reads repositories from."""

    def list_repositories(self, username: str) -> list[dict[str, Any]]: ...


@dataclass
class SiteContext:
    """
    Everything a handler may touch, built once at startup.

    Passed explicitly into the dispatcher; handlers never reach for
    module-level clients.
    """
    settings: Settings
    backend: ContentBackend
    projects: ProjectSource


# ============================================================================
# RESULT TYPES
# ============================================================================

@dataclass
class ToolResult:
    """Successful result from an operation.

    Shared return type for all operations. Operation-specific context
    goes in cues; list operations also carry the raw record list.
    """
    operation: str
    message: str
    entry_id: str | None = None
    records: list[dict[str, Any]] | None = None
    cues: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "operation": self.operation,
            "message": self.message,
        }
        if self.entry_id is not None:
            result["entry_id"] = self.entry_id
        if self.records is not None:
            result["records"] = self.records
        if self.cues:
            result["cues"] = self.cues
        return result
