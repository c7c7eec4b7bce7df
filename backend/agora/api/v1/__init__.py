"""
API Version 1 Router.

Combines all API endpoints under /api/v1 prefix.
"""

from fastapi import APIRouter

from agora.api.v1.endpoints import markup

router = APIRouter()

# Include endpoint routers
router.include_router(markup.router, prefix="/markup", tags=["Markup"])
