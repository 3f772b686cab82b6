"""Custom exceptions for viewcells with structured error codes."""

from collections.abc import Sequence
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    CELL_ERROR = "CELL_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Rendering errors
    DOUBLE_RENDER = "DOUBLE_RENDER"
    MISSING_TEMPLATE = "MISSING_TEMPLATE"
    UNKNOWN_STATE = "UNKNOWN_STATE"

    # Lookup errors
    CELL_NOT_FOUND = "CELL_NOT_FOUND"

    # Caching errors
    NOT_CACHEABLE = "NOT_CACHEABLE"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"


class CellException(Exception):
    """Base exception for cell errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the host application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CELL_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize cell exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class DoubleRenderError(CellException):
    """render or redirect_to was called more than once in a single state."""

    def __init__(
        self,
        message: str = (
            "render or redirect_to was called multiple times in this state. "
            "Please note that you may only call render/redirect_to at most once per state. "
            "Also note that neither render nor redirect_to terminate execution of the state, "
            "so if you want to exit after rendering, return right after the call."
        ),
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=ErrorCode.DOUBLE_RENDER, status_code=500, details=details)


class MissingTemplateError(CellException):
    """No template file matched the requested name under any search path."""

    def __init__(self, template: str, search_paths: Sequence[str] = ()):
        self.template = template
        self.search_paths = tuple(search_paths)
        super().__init__(
            f"Missing template {template!r} in view paths {list(self.search_paths)!r}",
            code=ErrorCode.MISSING_TEMPLATE,
            status_code=500,
            details={"template": template, "search_paths": list(self.search_paths)},
        )


class NotCacheable(CellException):
    """A render parameter cannot be turned into a cache key."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.NOT_CACHEABLE, status_code=500, details=details)


class CellNotFoundError(CellException):
    """No cell class is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"No cell registered under the name {name!r}",
            code=ErrorCode.CELL_NOT_FOUND,
            status_code=404,
            details={"cell_name": name},
        )


class UnknownStateError(CellException):
    """The requested state is not a public state method of the cell."""

    def __init__(self, cell_name: str, state: str):
        super().__init__(
            f"Cell {cell_name!r} has no state {state!r}",
            code=ErrorCode.UNKNOWN_STATE,
            status_code=404,
            details={"cell_name": cell_name, "state": state},
        )


class ConfigurationException(CellException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
