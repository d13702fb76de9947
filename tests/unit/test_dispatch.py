"""Tests for the dispatcher: routing, envelopes, error scoping."""

from unittest.mock import MagicMock

from dispatcher import Dispatcher
from models import ErrorKind, SiteError, ToolResult
from schemas import REQUEST_MODELS
from tools import HANDLERS, OPERATIONS


class TestDispatchConstant:
    """OPERATIONS, HANDLERS and REQUEST_MODELS stay in sync."""

    def test_operations_matches_handler_keys(self) -> None:
        assert set(OPERATIONS) == set(HANDLERS.keys())

    def test_every_operation_has_request_model(self) -> None:
        assert set(OPERATIONS) == set(REQUEST_MODELS.keys())

    def test_operations_is_frozenset(self) -> None:
        assert isinstance(OPERATIONS, frozenset)

    def test_dispatcher_lists_operations_sorted(self, dispatcher) -> None:
        assert dispatcher.operations == sorted(OPERATIONS)
        assert len(dispatcher.operations) == 11


class TestUnknownOperation:

    def test_unknown_operation_returns_not_found(self, dispatcher, backend) -> None:
        envelope = dispatcher.dispatch("explode", {})

        assert "result" not in envelope
        error = envelope["error"]
        assert error["kind"] == "not_found"
        assert error["code"] == -32601
        assert "explode" in error["message"]
        # Error message lists supported operations
        for op in OPERATIONS:
            assert op in error["message"]
        assert backend.calls == []

    def test_unknown_operation_runs_no_handler(self, context) -> None:
        handler = MagicMock()
        dispatcher = Dispatcher(context, handlers={"create-entity": handler})

        envelope = dispatcher.dispatch("create-term", {"term": "RAG"})

        assert envelope["error"]["kind"] == "not_found"
        handler.assert_not_called()


class TestEnvelopes:

    def test_success_envelope_has_only_result(self, dispatcher, valid_tool_params) -> None:
        envelope = dispatcher.dispatch("create-entity", valid_tool_params)

        assert set(envelope) == {"result"}
        assert envelope["result"]["operation"] == "create-entity"

    def test_invalid_arguments_envelope(self, dispatcher, backend) -> None:
        envelope = dispatcher.dispatch("create-entity", {"name": "Whisper"})

        assert set(envelope) == {"error"}
        error = envelope["error"]
        assert error["kind"] == "invalid_request"
        assert error["code"] == -32602
        assert "description" in error["fields"]
        assert backend.calls == []

    def test_none_params_treated_as_empty(self, dispatcher) -> None:
        envelope = dispatcher.dispatch("validate-content", None)

        assert envelope["error"]["kind"] == "invalid_request"
        assert envelope["error"]["fields"] == ["contentType"]

    def test_non_object_params_rejected(self, dispatcher) -> None:
        envelope = dispatcher.dispatch("validate-content", ["tools"])

        assert envelope["error"]["kind"] == "invalid_request"
        assert "JSON object" in envelope["error"]["message"]

    def test_site_error_keeps_kind(self, context) -> None:
        def handler(ctx, request):
            raise SiteError(ErrorKind.BACKEND_UNAVAILABLE, "no token")

        dispatcher = Dispatcher(context, handlers={"validate-content": handler})
        envelope = dispatcher.dispatch("validate-content", {"contentType": "tools"})

        assert envelope["error"] == {
            "code": -32001,
            "kind": "backend_unavailable",
            "message": "no token",
        }

    def test_unexpected_exception_becomes_internal_error(self, context) -> None:
        def handler(ctx, request):
            raise RuntimeError("disk on fire")

        dispatcher = Dispatcher(context, handlers={"validate-content": handler})
        envelope = dispatcher.dispatch("validate-content", {"contentType": "tools"})

        assert envelope["error"]["kind"] == "internal_error"
        assert envelope["error"]["code"] == -32603
        assert envelope["error"]["message"] == "Tool execution failed: disk on fire"

    def test_failure_is_scoped_to_one_call(self, context, valid_tool_params) -> None:
        calls = []

        def flaky(ctx, request):
            calls.append(request)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return ToolResult(operation="create-entity", message="ok")

        dispatcher = Dispatcher(context, handlers={"create-entity": flaky})

        first = dispatcher.dispatch("create-entity", valid_tool_params)
        second = dispatcher.dispatch("create-entity", valid_tool_params)

        assert "error" in first
        assert second == {"result": {"operation": "create-entity", "message": "ok"}}

    def test_handler_receives_injected_context(self, context) -> None:
        seen = {}

        def handler(ctx, request):
            seen["ctx"] = ctx
            return ToolResult(operation="backup-content", message="ok")

        Dispatcher(context, handlers={"backup-content": handler}).dispatch("backup-content", {})

        assert seen["ctx"] is context
