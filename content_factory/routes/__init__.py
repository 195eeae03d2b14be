"""
Routes module - contains all API route handlers
"""

from .auth import router as auth_router
from .workflow import router as workflow_router

__all__ = [
    "auth_router",
    "workflow_router",
]
