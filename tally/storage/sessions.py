"""Game session storage: start, score, character lifecycle, completion.

Each session is one JSON file, sessions/<id>.json. The character log is
stored verbatim under "character_history"; every character operation loads
it into a CharacterLifecycle, appends, and writes the whole file back.

Every write bumps "version". Mutating calls accept expected_version; a
mismatch raises StaleSessionError instead of overwriting someone else's
change (two browser tabs on one session).
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from tally.characters import CharacterLifecycle, Outcome
from tally.models import Identity
from tally.scoring import adjust, current_winner
from tally.stats import dump_log, load_log

from .config import get_config
from .core import sessions_dir, slugify
from .players import get_player
from .templates import GAME_MODES, get_template

logger = logging.getLogger(__name__)

COOPERATIVE_RESULTS = ("victory", "defeat")


class StaleSessionError(ValueError):
    """The session changed since the caller last read it."""


def _session_path(session_id: str) -> Path:
    return sessions_dir() / f"{session_id}.json"


def _write_session(session: dict[str, Any]) -> None:
    _session_path(session["id"]).write_text(json.dumps(session, indent=2))


def _bump(session: dict[str, Any]) -> None:
    session["version"] = session.get("version", 0) + 1
    _write_session(session)


def list_sessions(completed: bool | None = None) -> list[dict[str, Any]]:
    """All sessions, optionally filtered by completion. Completed ones newest first."""
    results = []
    for path in sorted(sessions_dir().glob("*.json")):
        session = json.loads(path.read_text())
        if completed is None or session["completed"] == completed:
            results.append(session)
    if completed:
        results.sort(key=lambda s: s.get("ended_at") or "", reverse=True)
    return results


def get_session(session_id: str) -> dict[str, Any] | None:
    path = _session_path(session_id)
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def delete_session(session_id: str) -> bool:
    path = _session_path(session_id)
    if not path.is_file():
        return False
    path.unlink()
    return True


def start_session(
    template_slug: str,
    player_ids: list[str],
    mode: str | None = None,
    characters: dict[str, dict[str, Any]] | None = None,
    allow_resurrection: bool | None = None,
    extensions: list[str] | None = None,
) -> dict[str, Any] | None:
    """Create an active session from a template. Returns None if the template is missing.

    characters maps player_id → {"name", "type"}; when given, the character
    log is initialized immediately.
    """
    template = get_template(template_slug)
    if template is None:
        return None

    if len(set(player_ids)) != len(player_ids):
        raise ValueError("A player can only join a session once")
    players = []
    for pid in player_ids:
        player = get_player(pid)
        if player is None:
            raise ValueError(f"Unknown player '{pid}'")
        players.append(player)
    if not template["min_players"] <= len(players) <= template["max_players"]:
        raise ValueError(
            f"{template['name']} needs {template['min_players']}-{template['max_players']} players"
        )

    mode = mode or template["default_mode"]
    if mode not in GAME_MODES:
        raise ValueError(f"Unknown game mode '{mode}'")
    if not template.get(f"supports_{mode}"):
        raise ValueError(f"{template['name']} does not support {mode} play")

    characters = characters or {}
    if characters and not template.get("has_characters"):
        raise ValueError(f"{template['name']} does not use characters")
    for pid in characters:
        if pid not in player_ids:
            raise ValueError(f"Character assigned to player '{pid}' who is not in the session")

    unknown_ext = set(extensions or []) - set(template.get("extensions", []))
    if unknown_ext:
        raise ValueError(f"Unknown extensions: {', '.join(sorted(unknown_ext))}")

    if allow_resurrection is None:
        allow_resurrection = get_config()["default_allow_resurrection"]

    lifecycle = CharacterLifecycle()
    if characters:
        lifecycle.initialize(
            {pid: Identity.model_validate(c) for pid, c in characters.items()},
            player_names={p["id"]: p["name"] for p in players},
        )

    base_id = slugify(template["name"])
    session_id = base_id
    counter = 2
    while _session_path(session_id).exists():
        session_id = f"{base_id}-{counter}"
        counter += 1

    session = {
        "id": session_id,
        "template_slug": template["slug"],
        "game_name": template["name"],
        "mode": mode,
        "is_cooperative": mode != "competitive",
        "players": list(player_ids),
        "scores": {pid: 0 for pid in player_ids},
        "characters": characters,
        "allow_resurrection": allow_resurrection,
        "extensions": list(extensions or []),
        "started_at": datetime.now(timezone.utc).isoformat(),
        "completed": False,
        "character_history": dump_log(lifecycle.log),
        "version": 0,
    }
    _bump(session)
    logger.info("Session started id=%s game=%s mode=%s players=%d", session_id, template["name"], mode, len(players))
    return session


def _load_active(session_id: str, expected_version: int | None) -> dict[str, Any] | None:
    session = get_session(session_id)
    if session is None:
        return None
    if session["completed"]:
        raise ValueError("Session is already completed")
    if expected_version is not None and expected_version != session["version"]:
        logger.warning(
            "Stale write rejected session=%s expected=%s actual=%s",
            session_id, expected_version, session["version"],
        )
        raise StaleSessionError(
            f"Session changed (version {session['version']}, you sent {expected_version}); reload it"
        )
    return session


def adjust_score(
    session_id: str, player_id: str, delta: int, expected_version: int | None = None
) -> dict[str, Any] | None:
    session = _load_active(session_id, expected_version)
    if session is None:
        return None
    if player_id not in session["players"]:
        raise ValueError(f"Player '{player_id}' is not in this session")
    floor = get_config()["score_floor"]
    session["scores"] = adjust(session["scores"], player_id, delta, floor)
    _bump(session)
    return session


# ── Character lifecycle ─────────────────────────────────────


def lifecycle_for(session: dict[str, Any]) -> CharacterLifecycle:
    return CharacterLifecycle(load_log(session))


def _apply(
    session_id: str,
    player_id: str,
    expected_version: int | None,
    operation,
) -> tuple[dict[str, Any], Outcome] | None:
    session = _load_active(session_id, expected_version)
    if session is None:
        return None
    if player_id not in session["players"]:
        raise ValueError(f"Player '{player_id}' is not in this session")
    lifecycle = lifecycle_for(session)
    before = lifecycle.version
    outcome = operation(lifecycle)
    if lifecycle.version != before:
        session["character_history"] = dump_log(lifecycle.log)
        _bump(session)
    return session, outcome


def record_death(
    session_id: str, player_id: str, expected_version: int | None = None
) -> tuple[dict[str, Any], Outcome] | None:
    return _apply(session_id, player_id, expected_version, lambda lc: lc.mark_death(player_id))


def revive_character(
    session_id: str, player_id: str, expected_version: int | None = None
) -> tuple[dict[str, Any], Outcome] | None:
    session = get_session(session_id)
    if session is None:
        return None
    allowed = session["allow_resurrection"]
    return _apply(session_id, player_id, expected_version, lambda lc: lc.revive(player_id, allowed))


def replace_character(
    session_id: str, player_id: str, candidate: Identity, expected_version: int | None = None
) -> tuple[dict[str, Any], Outcome] | None:
    return _apply(
        session_id, player_id, expected_version,
        lambda lc: lc.confirm_replacement(player_id, candidate),
    )


def propose_character(session_id: str, candidate: Identity) -> Outcome | None:
    """Live check of a replacement identity; never writes."""
    session = get_session(session_id)
    if session is None:
        return None
    return lifecycle_for(session).propose_replacement(candidate)


def character_view(session: dict[str, Any]) -> dict[str, Any]:
    """Per-player character status for display: alive/dead/unassigned, current identity, deaths."""
    lifecycle = lifecycle_for(session)
    state = lifecycle.state
    players = {}
    for pid in session["players"]:
        current = lifecycle.current_identity(pid)
        if current is None:
            status = "unassigned"
        elif state.is_dead(pid):
            status = "dead"
        else:
            status = "alive"
        players[pid] = {
            "status": status,
            "character": current.model_dump() if current else None,
            "deaths": state.death_counts.get(pid, 0),
        }
    return {
        "players": players,
        "claimed": sorted(state.claimed_identities),
        "allow_resurrection": session["allow_resurrection"],
        "version": session["version"],
    }


# ── Completion ──────────────────────────────────────────────


def complete_session(
    session_id: str,
    duration_minutes: int,
    cooperative_result: str | None = None,
    expected_version: int | None = None,
) -> dict[str, Any] | None:
    """Finish a session: record duration, outcome and winner; freeze the character log."""
    session = _load_active(session_id, expected_version)
    if session is None:
        return None
    if duration_minutes <= 0:
        raise ValueError("Please enter a valid game duration")
    if session["is_cooperative"]:
        if cooperative_result not in COOPERATIVE_RESULTS:
            raise ValueError("Please select if the scenario was won or lost")
        session["cooperative_result"] = cooperative_result
        session["winner"] = None
    else:
        session["cooperative_result"] = None
        session["winner"] = current_winner(session)
    session["duration_minutes"] = duration_minutes
    session["ended_at"] = datetime.now(timezone.utc).isoformat()
    session["completed"] = True
    _bump(session)
    logger.info("Session completed id=%s winner=%s result=%s", session_id, session["winner"], session["cooperative_result"])
    return session
