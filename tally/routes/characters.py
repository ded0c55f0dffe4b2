"""In-session character endpoints: status, death, revival, replacement."""

from fastapi import APIRouter, HTTPException

from tally import storage
from tally.characters import Outcome
from tally.models import Identity

from .models import CharacterCandidate, VersionedBody

router = APIRouter()


def _respond(result: tuple[dict, Outcome] | None):
    """Turn a storage result into the response, or raise the matching HTTP error."""
    if result is None:
        raise HTTPException(404, "Session not found")
    session, outcome = result
    if not outcome.ok:
        raise HTTPException(422, {"error": outcome.error.value, "message": outcome.message})
    return storage.character_view(session)


@router.get("/sessions/{session_id}/characters")
async def get_characters(session_id: str):
    """Who is alive or dead on which character, plus claimed identities."""
    session = storage.get_session(session_id)
    if not session:
        raise HTTPException(404, "Session not found")
    return storage.character_view(session)


@router.post("/sessions/{session_id}/characters/{player_id}/death")
async def mark_death(session_id: str, player_id: str, body: VersionedBody):
    """Mark the player's active character as dead (repeat calls are no-ops)."""
    try:
        result = storage.record_death(session_id, player_id, body.expected_version)
    except storage.StaleSessionError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _respond(result)


@router.post("/sessions/{session_id}/characters/{player_id}/revive")
async def revive(session_id: str, player_id: str, body: VersionedBody):
    """Bring a dead character back, if the session allows resurrection."""
    try:
        result = storage.revive_character(session_id, player_id, body.expected_version)
    except storage.StaleSessionError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _respond(result)


@router.post("/sessions/{session_id}/characters/check")
async def check_candidate(session_id: str, body: CharacterCandidate):
    """Live validation of a replacement character while the user types."""
    candidate = Identity(name=body.name, type=body.type)
    outcome = storage.propose_character(session_id, candidate)
    if outcome is None:
        raise HTTPException(404, "Session not found")
    return {
        "ok": outcome.ok,
        "error": outcome.error.value if outcome.error else None,
        "message": outcome.message,
    }


@router.post("/sessions/{session_id}/characters/{player_id}/replace")
async def replace(session_id: str, player_id: str, body: CharacterCandidate):
    """Give a dead player a new character that hasn't been used this session."""
    candidate = Identity(name=body.name, type=body.type)
    try:
        result = storage.replace_character(session_id, player_id, candidate, body.expected_version)
    except storage.StaleSessionError as e:
        raise HTTPException(409, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _respond(result)
