# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - graph.py: Dependency graph view endpoints
# - task_dependencies.py: Create/delete task dependencies
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import graph
from . import task_dependencies

__all__ = [
    "health",
    "graph",
    "task_dependencies",
]
