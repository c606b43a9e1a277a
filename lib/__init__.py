# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for tasks, dependencies and
#   stored graph positions
# - utils.py: Shared utilities (error base class, id normalization)
#
# supabase_client loads application settings on import, so it is imported
# from its module rather than re-exported here. That keeps `lib.utils`
# usable from the framework-free graph core.
# =============================================================================

from lib.utils import ApplicationError, normalize_id, normalize_uuid

__all__ = [
    "ApplicationError",
    "normalize_id",
    "normalize_uuid",
]
