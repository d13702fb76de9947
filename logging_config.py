"""
Logging configuration for site-control.

Simple setup that adapters, tools and the dispatcher can import.
Everything goes to stderr: stdout carries the protocol stream.
"""

import logging
import sys

# Create logger for the package
logger = logging.getLogger("site_control")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for site-control.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(logging.DEBUG)

        # Concise format for MCP context
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


# NOTE: Call configure_logging() explicitly in server.py, cli.py or test setup.
# We don't auto-configure to avoid side effects on import.


# Convenience functions for common patterns
def log_backend_call(backend: str, method: str, **params: object) -> None:
    """Log a backend call with key parameters."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logger.debug(f"Backend: {backend}.{method}({param_str})")


def log_backend_result(backend: str, method: str, result_count: int | None = None) -> None:
    """Log backend result summary."""
    if result_count is not None:
        logger.debug(f"Backend: {backend}.{method} returned {result_count} results")
    else:
        logger.debug(f"Backend: {backend}.{method} completed")


# Caller mistakes are routine; backend and internal failures need attention
CALLER_ERROR_KINDS = frozenset({"invalid_request", "not_found"})


def log_operation_error(method: str, kind: str, message: str) -> None:
    """Log a failed operation at INFO for caller errors, WARNING otherwise."""
    level = logging.INFO if kind in CALLER_ERROR_KINDS else logging.WARNING
    logger.log(level, f"{method} failed ({kind}): {message}")
