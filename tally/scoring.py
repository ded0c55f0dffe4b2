"""Score helpers for a running session — clamping, ranking, current winner.

Ranking is highest score first; ties keep roster order (stable sort).
"""

from typing import Any


def clamp_score(value: int, floor: int = 0) -> int:
    return max(floor, value)


def adjust(scores: dict[str, int], player_id: str, delta: int, floor: int = 0) -> dict[str, int]:
    """Return a copy of scores with player_id moved by delta, clamped at floor."""
    updated = dict(scores)
    updated[player_id] = clamp_score(updated.get(player_id, 0) + delta, floor)
    return updated


def ranked_players(session: dict[str, Any]) -> list[dict[str, Any]]:
    """Return [{"player_id", "score", "position"}] for the session, best first."""
    scores = session.get("scores", {})
    order = sorted(session["players"], key=lambda pid: scores.get(pid, 0), reverse=True)
    return [
        {"player_id": pid, "score": scores.get(pid, 0), "position": i + 1}
        for i, pid in enumerate(order)
    ]


def current_winner(session: dict[str, Any]) -> str | None:
    """Top scorer's id, or None for a session without players."""
    ranked = ranked_players(session)
    return ranked[0]["player_id"] if ranked else None
