"""Player CRUD + stats endpoints."""

from fastapi import APIRouter, HTTPException

from tally import storage
from tally.stats import player_stats

from .models import CreatePlayer, UpdatePlayer

router = APIRouter()


@router.get("/players")
async def list_players():
    """List all players."""
    return storage.list_players()


@router.post("/players", status_code=201)
async def create_player(body: CreatePlayer):
    """Add a player to the roster."""
    try:
        return storage.create_player(body.name, body.description)
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.get("/players/{player_id}")
async def get_player(player_id: str):
    """Get a single player by id."""
    player = storage.get_player(player_id)
    if not player:
        raise HTTPException(404, "Player not found")
    return player


@router.patch("/players/{player_id}")
async def update_player(player_id: str, body: UpdatePlayer):
    """Update player name or description."""
    try:
        updated = storage.update_player(player_id, body.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(400, str(e))
    if not updated:
        raise HTTPException(404, "Player not found")
    return updated


@router.delete("/players/{player_id}")
async def delete_player(player_id: str):
    """Remove a player from the roster (past sessions keep their ids)."""
    if not storage.delete_player(player_id):
        raise HTTPException(404, "Player not found")
    return {"ok": True}


@router.get("/players/{player_id}/stats")
async def get_player_stats(player_id: str):
    """Games played, wins, cooperative results, deaths and characters played."""
    if not storage.get_player(player_id):
        raise HTTPException(404, "Player not found")
    return player_stats(player_id, storage.list_sessions(completed=True))
