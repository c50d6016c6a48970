"""FastAPI API endpoints under /api.

Endpoint groups: health/settings, and the session under /api/session/
(init, advance, line, tag, autocomplete, is-choice, bookmark). The session
itself lives on app.state.controller; there is one per app.
"""

from fastapi import APIRouter

from .session import router as session_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(session_router)
