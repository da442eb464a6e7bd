"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from codeboard.backend.api.v1.endpoints import codenotes, snippets, stats, tags

router = APIRouter()

# Note endpoints
router.include_router(codenotes.router, prefix="/codenotes", tags=["codenotes"])

# Snippet endpoints
router.include_router(snippets.router, prefix="/snippets", tags=["snippets"])

# Aggregates
router.include_router(stats.router, prefix="/stats", tags=["stats"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
