"""
Contentful adapter — the content backend.

Thin wrapper over the two official SDKs:
- contentful (Content Delivery API): reads of published entries
- contentful_management (Content Management API): everything that writes,
  plus get_entry so updates and deletes see drafts too

Field values are localized on the way in ({"name": {"en-US": "..."}})
and de-localized on the way out. No retries: the first failure is
surfaced with the backend's own message.
"""

import copy
from contextlib import contextmanager
from typing import Any, Iterator

import contentful
import contentful_management
from contentful.errors import HTTPError as DeliveryHTTPError
from contentful_management.errors import HTTPError as ManagementHTTPError

from logging_config import log_backend_call, log_backend_result
from models import ContentRecord, ErrorKind, SiteError

__all__ = [
    "ContentfulBackend",
    "record_from_delivery_entry",
    "record_from_management_entry",
]

BACKEND_ERRORS: tuple[type[Exception], ...] = (
    DeliveryHTTPError,
    ManagementHTTPError,
    ConnectionError,
)


def _get_http_status(exception: Exception) -> int | None:
    """Extract HTTP status code from an SDK error if available."""
    status = getattr(exception, "status_code", None)
    if isinstance(status, int):
        return status
    response = getattr(exception, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status
    return None


def _convert_to_site_error(exception: Exception, action: str) -> SiteError:
    """Wrap an SDK failure, keeping the backend's message as-is."""
    status = _get_http_status(exception)
    kind = ErrorKind.NOT_FOUND if status == 404 else ErrorKind.BACKEND_ERROR
    details: dict[str, Any] = {"action": action}
    if status is not None:
        details["status"] = status
    return SiteError(kind, str(exception), details=details)


@contextmanager
def _backend_call(action: str) -> Iterator[None]:
    try:
        yield
    except BACKEND_ERRORS as e:
        raise _convert_to_site_error(e, action) from e


def _content_type_of(raw: dict[str, Any]) -> str:
    return raw.get("sys", {}).get("contentType", {}).get("sys", {}).get("id", "")


def record_from_delivery_entry(entry: Any) -> ContentRecord:
    """
    Build a ContentRecord from a delivery-API Entry.

    Uses the raw JSON so field names stay exactly as modelled in the
    backend (the SDK's attribute access snake_cases them). Delivery
    responses for a single locale are already de-localized.
    """
    raw = entry.raw
    return ContentRecord(
        id=raw.get("sys", {}).get("id", ""),
        content_type=_content_type_of(raw),
        fields=dict(raw.get("fields", {})),
    )


def record_from_management_entry(entry: Any, locale: str) -> ContentRecord:
    """Build a ContentRecord from a management-API Entry for one locale."""
    raw = entry.raw
    localized: dict[str, dict[str, Any]] = raw.get("fields", {})
    return ContentRecord(
        id=raw.get("sys", {}).get("id", ""),
        content_type=_content_type_of(raw),
        fields={
            name: values[locale]
            for name, values in localized.items()
            if isinstance(values, dict) and locale in values
        },
    )


class ContentfulBackend:
    """
    ContentBackend over Contentful.

    Either client may be None: reads then fail with BACKEND_UNAVAILABLE
    when there is no delivery client, writes when there is no
    management client.
    """

    def __init__(
        self,
        space_id: str | None,
        delivery_client: contentful.Client | None = None,
        management_client: contentful_management.Client | None = None,
        environment: str = "master",
        locale: str = "en-US",
    ):
        self.space_id = space_id
        self.environment = environment
        self.locale = locale
        self._delivery = delivery_client
        self._management = management_client

    @property
    def can_read(self) -> bool:
        return self._delivery is not None

    @property
    def can_write(self) -> bool:
        return self._management is not None and bool(self.space_id)

    # ------------------------------------------------------------------
    # Client access
    # ------------------------------------------------------------------

    def _reader(self) -> contentful.Client:
        if self._delivery is None:
            raise SiteError(
                ErrorKind.BACKEND_UNAVAILABLE,
                "Contentful delivery client not available "
                "(set CONTENTFUL_SPACE_ID and CONTENTFUL_DELIVERY_TOKEN)",
            )
        return self._delivery

    def _entries(self) -> Any:
        """Environment-scoped entries proxy of the management client."""
        if self._management is None or not self.space_id:
            raise SiteError(
                ErrorKind.BACKEND_UNAVAILABLE,
                "Contentful management client not available "
                "(set CONTENTFUL_SPACE_ID and CONTENTFUL_MANAGEMENT_TOKEN)",
            )
        return self._management.entries(self.space_id, self.environment)

    def _localize(self, fields: dict[str, Any]) -> dict[str, dict[str, Any]]:
        return {name: {self.locale: value} for name, value in fields.items()}

    # ------------------------------------------------------------------
    # ContentBackend
    # ------------------------------------------------------------------

    def list_entries(
        self,
        content_type: str,
        filters: dict[str, Any] | None = None,
        limit: int = 1000,
    ) -> list[ContentRecord]:
        """List published entries of one content type, in the configured locale."""
        client = self._reader()
        query: dict[str, Any] = {
            "content_type": content_type,
            "limit": limit,
            "locale": self.locale,
        }
        if filters:
            query.update(filters)
        log_backend_call("contentful", "entries", **query)
        with _backend_call(f"list {content_type}"):
            entries = client.entries(query)
        records = [record_from_delivery_entry(entry) for entry in entries]
        log_backend_result("contentful", "entries", len(records))
        return records

    def create_entry(self, content_type: str, fields: dict[str, Any]) -> str:
        """Create a draft entry and return its backend-assigned ID."""
        entries = self._entries()
        log_backend_call("contentful", "entries.create", content_type=content_type)
        with _backend_call(f"create {content_type}"):
            entry = entries.create(None, {
                "content_type_id": content_type,
                "fields": self._localize(fields),
            })
        log_backend_result("contentful", "entries.create")
        return entry.id

    def get_entry(self, entry_id: str) -> ContentRecord:
        entries = self._entries()
        log_backend_call("contentful", "entries.find", entry_id=entry_id)
        with _backend_call(f"get {entry_id}"):
            entry = entries.find(entry_id)
        return record_from_management_entry(entry, self.locale)

    def update_entry(self, entry_id: str, fields: dict[str, Any]) -> None:
        """
        Overwrite the given fields in the configured locale.

        Other fields and other locales are sent back unchanged, since the
        management API replaces the whole fields object on update.
        """
        entries = self._entries()
        log_backend_call("contentful", "entries.update", entry_id=entry_id, fields=sorted(fields))
        with _backend_call(f"update {entry_id}"):
            entry = entries.find(entry_id)
            merged = copy.deepcopy(entry.raw.get("fields", {}))
            for name, value in fields.items():
                merged.setdefault(name, {})[self.locale] = value
            entry.update({"fields": merged})

    def publish(self, entry_id: str) -> None:
        entries = self._entries()
        log_backend_call("contentful", "entries.publish", entry_id=entry_id)
        with _backend_call(f"publish {entry_id}"):
            entries.find(entry_id).publish()

    def unpublish(self, entry_id: str) -> None:
        entries = self._entries()
        log_backend_call("contentful", "entries.unpublish", entry_id=entry_id)
        with _backend_call(f"unpublish {entry_id}"):
            entries.find(entry_id).unpublish()

    def delete_entry(self, entry_id: str) -> None:
        entries = self._entries()
        log_backend_call("contentful", "entries.delete", entry_id=entry_id)
        with _backend_call(f"delete {entry_id}"):
            entries.delete(entry_id)
