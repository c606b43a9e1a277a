# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies Supabase access tokens. Sign-up, login and sessions are handled
# by Supabase Auth on the client; this service only checks the bearer token.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user
from app.auth.models import AuthUser

__all__ = [
    "decode_token",
    "get_current_user",
    "AuthUser",
]
