"""
Shared test helpers for site-control.

In-memory stand-ins for the backend collaborators, plus the httpx
wiring helper used by adapter tests.
"""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import MagicMock

from models import ContentRecord, ErrorKind, SiteError


class FakeBackend:
    """ContentBackend that keeps entries in a dict and records every call.

    calls holds (method, *args) tuples in call order, so tests can assert
    both which backend methods ran and in what sequence.

    fail_on maps a method name to the exception that method should raise
    (after being recorded).
    """

    def __init__(
        self,
        records: list[ContentRecord] | None = None,
        fail_on: dict[str, Exception] | None = None,
    ):
        self.records: dict[str, ContentRecord] = {r.id: r for r in records or []}
        self.fail_on: dict[str, Exception] = dict(fail_on or {})
        self.calls: list[tuple[Any, ...]] = []
        self.published: set[str] = set()
        self._next_id = 1

    @property
    def method_calls(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, *args))
        if method in self.fail_on:
            raise self.fail_on[method]

    def list_entries(
        self,
        content_type: str,
        filters: dict[str, Any] | None = None,
        limit: int = 1000,
    ) -> list[ContentRecord]:
        self._record("list_entries", content_type, filters, limit)
        matching = [r for r in self.records.values() if r.content_type == content_type]
        return [copy.deepcopy(r) for r in matching[:limit]]

    def create_entry(self, content_type: str, fields: dict[str, Any]) -> str:
        self._record("create_entry", content_type, fields)
        entry_id = f"entry{self._next_id}"
        self._next_id += 1
        self.records[entry_id] = ContentRecord(entry_id, content_type, dict(fields))
        return entry_id

    def get_entry(self, entry_id: str) -> ContentRecord:
        self._record("get_entry", entry_id)
        if entry_id not in self.records:
            raise SiteError(ErrorKind.NOT_FOUND, "The resource could not be found.")
        return copy.deepcopy(self.records[entry_id])

    def update_entry(self, entry_id: str, fields: dict[str, Any]) -> None:
        self._record("update_entry", entry_id, fields)
        self.records[entry_id].fields.update(fields)

    def publish(self, entry_id: str) -> None:
        self._record("publish", entry_id)
        self.published.add(entry_id)

    def unpublish(self, entry_id: str) -> None:
        self._record("unpublish", entry_id)
        self.published.discard(entry_id)

    def delete_entry(self, entry_id: str) -> None:
        self._record("delete_entry", entry_id)
        del self.records[entry_id]


class FakeProjects:
    """ProjectSource returning canned repositories."""

    def __init__(self, projects: list[dict[str, Any]] | None = None):
        self.projects = projects if projects is not None else [
            {"name": "site-control", "url": "https://github.com/octocat/site-control"},
        ]
        self.requested: list[str] = []

    def list_repositories(self, username: str) -> list[dict[str, Any]]:
        self.requested.append(username)
        return list(self.projects)


def tool_record(entry_id: str, **fields: Any) -> ContentRecord:
    return ContentRecord(entry_id, "aiTool", fields)


def term_record(entry_id: str, **fields: Any) -> ContentRecord:
    return ContentRecord(entry_id, "aiTerm", fields)


def category_record(entry_id: str, **fields: Any) -> ContentRecord:
    return ContentRecord(entry_id, "categoryPage", fields)


def wire_httpx_client(mock_client_cls: MagicMock) -> MagicMock:
    """Wire up httpx.Client context manager mock and return the client instance.

    Replaces the repetitive 3-line pattern:
        mock_client = MagicMock()
        mock_client_cls.return_value.__enter__ = MagicMock(return_value=mock_client)
        mock_client_cls.return_value.__exit__ = MagicMock(return_value=False)

    Usage:
        mock_client = wire_httpx_client(mock_client_cls)
    """
    mock_client = MagicMock()
    mock_client_cls.return_value.__enter__ = MagicMock(return_value=mock_client)
    mock_client_cls.return_value.__exit__ = MagicMock(return_value=False)
    return mock_client
