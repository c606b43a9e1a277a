# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the OpsBoard Graph API:
# - test_models.py: Task and graph model validation
# - test_builder.py / test_layout.py: Graph construction and placement
# - test_reconciler.py / test_registry.py: Incremental updates and views
# - test_services.py: Services with a mocked Supabase client
# - test_api.py / test_auth.py / test_websocket.py: HTTP and WebSocket layer
#
# Run tests with: pytest
# =============================================================================
