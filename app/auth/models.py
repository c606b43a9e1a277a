# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    The graph only needs the user id (views and stored positions are
    per user), so nothing beyond the token claims is loaded.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
