"""
API Routes - FastAPI route modules.
"""

from makerbench.api.routes.health import router as health_router
from makerbench.api.routes.suggest_tool import router as suggest_tool_router

__all__ = [
    "health_router",
    "suggest_tool_router",
]
