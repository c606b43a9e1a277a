# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for tasks and the derived graph
# - graph/: Graph Builder, Layout Engine, Reconciler and view registry
# - services/: Supabase-backed task, dependency and position operations
#
# models/ and graph/ must NOT import from FastAPI or app/ settings.
# This keeps the graph logic testable and reusable. services/ talk to
# Supabase and raise the API exceptions from app/exceptions.py.
# =============================================================================
