"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.mapper import router as mapper_router

__all__ = [
    "mapper_router",
]
