# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors tell HOW to fix the problem, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError


class OpsBoardException(Exception):
    """
    Base exception for the OpsBoard graph API.

    All HTTP-facing exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "OPSBOARD_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Task Exceptions
# =============================================================================

class TaskNotFoundError(OpsBoardException):
    """Raised when a task ID doesn't exist."""

    def __init__(self, task_id: str):
        super().__init__(
            message=f"Task not found: {task_id}",
            code="TASK_NOT_FOUND",
            status_code=404,
            suggestion="Check that the task_id is correct and the task hasn't been deleted",
            details={"task_id": task_id}
        )


class MalformedTaskDataError(OpsBoardException):
    """Raised when the task store returns records the graph cannot use."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="MALFORMED_TASK_DATA",
            status_code=422,
            suggestion="Every task row needs a non-empty id; fix the offending row in the tasks table",
            details=details,
        )


# =============================================================================
# Dependency Exceptions
# =============================================================================

class DependencyNotFoundError(OpsBoardException):
    """Raised when a dependency ID doesn't exist."""

    def __init__(self, dependency_id: str):
        super().__init__(
            message=f"Dependency not found: {dependency_id}",
            code="DEPENDENCY_NOT_FOUND",
            status_code=404,
            suggestion="Reload the graph; the dependency may already have been removed",
            details={"dependency_id": dependency_id}
        )


class DependencyExistsError(OpsBoardException):
    """Raised when linking two tasks that are already linked."""

    def __init__(self, from_id: str, to_id: str, dependency_id: str | None = None):
        details = {"from_id": from_id, "to_id": to_id}
        if dependency_id:
            details["dependency_id"] = dependency_id
        super().__init__(
            message=f"Dependency already exists: {from_id} -> {to_id}",
            code="DEPENDENCY_EXISTS",
            status_code=409,
            suggestion="These tasks are already linked; no action is needed",
            details=details
        )


class InvalidDependencyError(OpsBoardException):
    """Raised when a requested dependency makes no sense (e.g. a task on itself)."""

    def __init__(self, message: str, from_id: str, to_id: str):
        super().__init__(
            message=message,
            code="INVALID_DEPENDENCY",
            status_code=400,
            suggestion="Pick two different tasks",
            details={"from_id": from_id, "to_id": to_id}
        )


# =============================================================================
# Graph Exceptions
# =============================================================================

class GraphNodeMissingError(OpsBoardException):
    """Raised when moving a node that is not in the caller's graph view."""

    def __init__(self, node_id: str):
        super().__init__(
            message=f"Node not in graph view: {node_id}",
            code="GRAPH_NODE_NOT_FOUND",
            status_code=404,
            suggestion="Load the graph first with GET /api/v1/graph; the task may be filtered out",
            details={"node_id": node_id}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def opsboard_exception_handler(
    request: Request,
    exc: OpsBoardException
) -> JSONResponse:
    """
    Convert OpsBoardException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """
    Convert framework-free ApplicationError (e.g. Supabase failures) to JSON.

    These carry no status code of their own; they surface as 502 because
    they originate from the backing store.
    """
    content = {
        "detail": exc.message,
        "code": exc.code,
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=502, content=content)
