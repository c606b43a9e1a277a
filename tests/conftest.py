# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides task collections shaped like Supabase rows
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.graph import GridLayout


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def three_tasks():
    """A -> B, B -> C, no statuses."""
    return [
        {"id": "A", "title": "Design", "dependencies_out": [{"id": "e1", "to_id": "B"}]},
        {"id": "B", "title": "Build", "dependencies_out": [{"id": "e2", "to_id": "C"}]},
        {"id": "C", "title": "Ship", "dependencies_out": []},
    ]


@pytest.fixture
def task_rows():
    """Task rows as returned by the tasks select with embedded dependencies."""
    return [
        {
            "id": "11111111-1111-1111-1111-111111111111",
            "title": "Prepare invoice",
            "status": "in_progress",
            "project_id": "99999999-9999-9999-9999-999999999999",
            "dependencies_out": [
                {"id": "dep-1", "to_id": "22222222-2222-2222-2222-222222222222"},
            ],
        },
        {
            "id": "22222222-2222-2222-2222-222222222222",
            "title": "Collect timesheets",
            "status": "done",
            "project_id": "99999999-9999-9999-9999-999999999999",
            "dependencies_out": [],
        },
        {
            "id": "33333333-3333-3333-3333-333333333333",
            "title": "Unrelated chore",
            "status": None,
            "project_id": "99999999-9999-9999-9999-999999999999",
            "dependencies_out": None,
        },
    ]


@pytest.fixture
def layout():
    """The default 5-wide, 220 x 160 grid."""
    return GridLayout()
