# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - routers/: API endpoint definitions organized by feature
# - websocket/: Live graph updates
#
# The app layer is thin - it handles HTTP concerns and delegates
# graph work to the core/ package.
# =============================================================================
