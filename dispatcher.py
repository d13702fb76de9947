"""
Dispatcher — operation name + arguments in, response envelope out.

    {"result": {...}}                                  on success
    {"error": {"code": ..., "kind": ..., "message": ...}}  on failure

Order per call: look up handler (unknown → not_found, nothing runs),
validate arguments (bad → invalid_request, no backend call), run the
handler. SiteErrors keep their kind; anything else is an internal_error
carrying the original message. Every failure is scoped to its call.
"""

from typing import Any

from logging_config import log_operation_error, logger
from models import ErrorKind, SiteContext, SiteError
from schemas import parse_request
from tools import HANDLERS, Handler


class Dispatcher:
    """Routes operation calls to handlers with an injected SiteContext."""

    def __init__(self, context: SiteContext, handlers: dict[str, Handler] | None = None):
        self.context = context
        self.handlers = dict(HANDLERS if handlers is None else handlers)

    @property
    def operations(self) -> list[str]:
        return sorted(self.handlers)

    def dispatch(self, method: str, params: Any = None) -> dict[str, Any]:
        """
        Run one operation.

        Args:
            method: Operation name, e.g. "create-entity"
            params: Argument object (None means no arguments)

        Returns:
            Response envelope with exactly one of "result" or "error"
        """
        try:
            return {"result": self._call(method, params).to_dict()}
        except SiteError as e:
            log_operation_error(method, e.kind.value, e.message)
            return {"error": e.to_dict()}
        except Exception as e:
            logger.exception(f"{method} raised unexpectedly")
            error = SiteError(ErrorKind.INTERNAL_ERROR, f"Tool execution failed: {e}")
            return {"error": error.to_dict()}

    def _call(self, method: str, params: Any):
        handler = self.handlers.get(method)
        if handler is None:
            raise SiteError(
                ErrorKind.NOT_FOUND,
                f"Unknown operation: {method}. Supported: {self.operations}",
            )
        request = parse_request(method, params)
        logger.info(f"Dispatching {method}")
        return handler(self.context, request)
