"""Player roster storage (single players.json list)."""

import json
from datetime import datetime, timezone
from typing import Any

from .core import players_path, slugify


def _save_players(players: list[dict[str, Any]]) -> None:
    players_path().write_text(json.dumps(players, indent=2))


def list_players() -> list[dict[str, Any]]:
    """Read all players. Returns [] if missing."""
    path = players_path()
    if not path.is_file():
        return []
    return json.loads(path.read_text())


def get_player(player_id: str) -> dict[str, Any] | None:
    for player in list_players():
        if player["id"] == player_id:
            return player
    return None


def create_player(name: str, description: str = "") -> dict[str, Any]:
    """Add a player. Id is the slugified name, suffixed -2, -3… on collision."""
    name = name.strip()
    if not name:
        raise ValueError("Player name is required")
    players = list_players()
    taken = {p["id"] for p in players}
    base_id = slugify(name)
    player_id = base_id
    counter = 2
    while player_id in taken:
        player_id = f"{base_id}-{counter}"
        counter += 1
    player = {
        "id": player_id,
        "name": name,
        "description": description,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    players.append(player)
    _save_players(players)
    return player


def update_player(player_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    """Update mutable player fields (name, description). Returns updated player."""
    players = list_players()
    for player in players:
        if player["id"] == player_id:
            break
    else:
        return None
    if "name" in fields:
        name = (fields["name"] or "").strip()
        if not name:
            raise ValueError("Player name is required")
        player["name"] = name
    if "description" in fields:
        player["description"] = fields["description"]
    _save_players(players)
    return player


def delete_player(player_id: str) -> bool:
    players = list_players()
    remaining = [p for p in players if p["id"] != player_id]
    if len(remaining) == len(players):
        return False
    _save_players(remaining)
    return True
