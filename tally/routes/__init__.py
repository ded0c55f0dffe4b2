"""FastAPI API endpoints under /api.

Endpoint groups: settings, players (+ stats), templates, sessions (scores,
ranking, completion, progression) and session characters (status, death,
revive, check, replace). Character endpoints are nested under
/api/sessions/{id}/characters/.

Mutating session endpoints take an optional expected_version; a stale one
gets 409. Character rule violations get 422 with {"error", "message"}.
"""

from fastapi import APIRouter

from .characters import router as characters_router
from .players import router as players_router
from .sessions import router as sessions_router
from .settings import router as settings_router
from .templates import router as templates_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(players_router)
router.include_router(templates_router)
router.include_router(sessions_router)
router.include_router(characters_router)
