"""Historical statistics over completed sessions.

Character figures are never stored separately: each session's persisted
character_history is parsed back into CharacterEvents and re-folded with
reconstruct(), so history views always agree with what the engine saw.
"""

from typing import Any, Iterable

from tally.characters import CLAIMING_KINDS, reconstruct
from tally.models import CharacterEvent


def load_log(session: dict[str, Any]) -> list[CharacterEvent]:
    """Parse a session's stored character_history into events."""
    return [CharacterEvent.model_validate(e) for e in session.get("character_history", [])]


def dump_log(log: Iterable[CharacterEvent]) -> list[dict[str, Any]]:
    """Serialise events for JSON storage. load_log(dump_log(x)) == x."""
    return [e.model_dump(mode="json") for e in log]


def player_stats(player_id: str, sessions: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate a player's record across completed sessions."""
    stats: dict[str, Any] = {
        "player_id": player_id,
        "games_played": 0,
        "competitive_wins": 0,
        "cooperative_victories": 0,
        "cooperative_defeats": 0,
        "deaths": 0,
        "characters_played": [],
    }
    seen: set[str] = set()
    for session in sessions:
        if not session.get("completed") or player_id not in session.get("players", []):
            continue
        stats["games_played"] += 1
        if session.get("is_cooperative"):
            if session.get("cooperative_result") == "victory":
                stats["cooperative_victories"] += 1
            elif session.get("cooperative_result") == "defeat":
                stats["cooperative_defeats"] += 1
        elif session.get("winner") == player_id:
            stats["competitive_wins"] += 1

        log = load_log(session)
        stats["deaths"] += reconstruct(log).death_counts.get(player_id, 0)
        for event in log:
            if event.player_id != player_id or event.kind not in CLAIMING_KINDS:
                continue
            if event.identity.key not in seen:
                seen.add(event.identity.key)
                stats["characters_played"].append(event.identity.label())
    return stats


def character_progression(session: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
    """Per-player timeline of character events for one session.

    {player_id: [{"kind", "character", "previous", "timestamp"}, ...]}
    """
    timelines: dict[str, list[dict[str, Any]]] = {pid: [] for pid in session.get("players", [])}
    for event in load_log(session):
        timelines.setdefault(event.player_id, []).append({
            "kind": event.kind,
            "character": event.identity.label(),
            "previous": event.previous_identity.label() if event.previous_identity else None,
            "timestamp": event.timestamp.isoformat(),
        })
    return timelines
