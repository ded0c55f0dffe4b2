"""Game session endpoints: start, scores, ranking, completion, history."""

from fastapi import APIRouter, HTTPException

from tally import storage
from tally.scoring import ranked_players
from tally.stats import character_progression

from .models import CompleteSession, ScoreAdjustment, StartSession

router = APIRouter()


@router.get("/sessions")
async def list_sessions(completed: bool | None = None):
    """List sessions; ?completed=true gives the history, newest first."""
    return storage.list_sessions(completed)


@router.post("/sessions", status_code=201)
async def start_session(body: StartSession):
    """Start a session from a template with a player roster and optional characters."""
    characters = {pid: c.model_dump() for pid, c in body.characters.items()}
    try:
        session = storage.start_session(
            body.template_slug,
            body.players,
            mode=body.mode,
            characters=characters,
            allow_resurrection=body.allow_resurrection,
            extensions=body.extensions,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not session:
        raise HTTPException(404, "Template not found")
    return session


@router.get("/sessions/{session_id}")
async def get_session(session_id: str):
    """Get a single session by id."""
    session = storage.get_session(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return session


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Abandon an active session or remove one from history."""
    if not storage.delete_session(session_id):
        raise HTTPException(404, "Session not found")
    return {"ok": True}


@router.post("/sessions/{session_id}/scores/{player_id}")
async def adjust_score(session_id: str, player_id: str, body: ScoreAdjustment):
    """Move a player's score by delta (never below the configured floor)."""
    try:
        session = storage.adjust_score(session_id, player_id, body.delta, body.expected_version)
    except storage.StaleSessionError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not session:
        raise HTTPException(404, "Session not found")
    return session


@router.get("/sessions/{session_id}/ranking")
async def get_ranking(session_id: str):
    """Players ordered by score, highest first."""
    session = storage.get_session(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return ranked_players(session)


@router.post("/sessions/{session_id}/complete")
async def complete_session(session_id: str, body: CompleteSession):
    """Finish a session with its duration and, for cooperative play, the result."""
    try:
        session = storage.complete_session(
            session_id,
            body.duration_minutes,
            body.cooperative_result,
            body.expected_version,
        )
    except storage.StaleSessionError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not session:
        raise HTTPException(404, "Session not found")
    return session


@router.get("/sessions/{session_id}/progression")
async def get_progression(session_id: str):
    """Per-player character timeline rebuilt from the stored log."""
    session = storage.get_session(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return character_progression(session)
