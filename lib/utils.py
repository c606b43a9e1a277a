# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Identifier normalization and the base error type for code that must not
# depend on FastAPI (core/graph, lib/).
# =============================================================================

from typing import Any
from uuid import UUID


# =============================================================================
# Identifier Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Supabase returns ids as strings while FastAPI path parameters arrive as
    UUID objects; queries always use the string form.

    Example:
        normalize_uuid(UUID("550e8400-e29b-41d4-a716-446655440000"))
        # -> "550e8400-e29b-41d4-a716-446655440000"
    """
    return str(value) if isinstance(value, UUID) else value


def normalize_id(value: Any) -> str | None:
    """
    Normalize an opaque record identifier.

    Strings are stripped, UUIDs and integers become strings, anything
    empty becomes None so callers can treat "absent" and "blank" alike.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (UUID, int)):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for framework-independent errors.

    Errors say how to fix the problem, not only what failed.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class GraphNodeNotFoundError(ApplicationError):
            def __init__(self, node_id: str):
                super().__init__(f"Node not in graph: {node_id}", code="GRAPH_NODE_NOT_FOUND")
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
