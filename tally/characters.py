"""Character lifecycle — death, replacement and revival for one active session.

Event kinds (CharacterEvent.kind):
  initial      — a player's starting character, appended once by initialize()
  death        — the player's active character dies; carries that identity
  replacement  — a new character takes over for a dead player;
                 previous_identity is the one it supersedes
  revival      — a dead character returns with the identity it died with

Per-player state machine (derived, never stored):
  Unassigned → Alive(id) → death → Dead(id) → replacement(new) → Alive(new)
                                   Dead(id) → revival          → Alive(id)

Claimed identities: every identity introduced by an initial or replacement
event, for any player, is claimed for the rest of the session. Deaths and
revivals never claim. Identities compare by Identity.key (trimmed,
lower-cased "name|type", with "|" escaped inside either part). Initial
assignments are not checked against each other; only replacements are.

The log is the only state. reconstruct() folds it with step(); the engine
keeps its projection current by stepping each appended event, which always
equals a full re-fold.

Expected domain failures come back as Outcome.error (LifecycleError).
Programming errors (initialize twice, death for an unknown player) raise
LifecycleMisuse.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Mapping

from pydantic import BaseModel

from tally.models import CharacterEvent, EventKind, Identity, SessionCharacterState

logger = logging.getLogger(__name__)

UNKNOWN_CHARACTER = "Unknown Character"

# Kinds whose identity becomes claimed for the rest of the session
CLAIMING_KINDS = ("initial", "replacement")


class LifecycleError(str, Enum):
    EMPTY_NAME = "empty_name"
    DUPLICATE_IDENTITY = "duplicate_identity"
    NOT_DEAD = "not_dead"
    RESURRECTION_NOT_ALLOWED = "resurrection_not_allowed"


ERROR_MESSAGES = {
    LifecycleError.EMPTY_NAME: "A character name is required",
    LifecycleError.DUPLICATE_IDENTITY: "This character combination is already used in this session",
    LifecycleError.NOT_DEAD: "This player has no dead character",
    LifecycleError.RESURRECTION_NOT_ALLOWED: "Resurrection is not allowed in this session",
}


class LifecycleMisuse(ValueError):
    """Raised when the engine is driven in a way no host should drive it."""


class Outcome(BaseModel):
    """Result of a lifecycle operation: the refreshed log and projection, or an error."""

    error: LifecycleError | None = None
    log: list[CharacterEvent]
    state: SessionCharacterState

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return ERROR_MESSAGES[self.error] if self.error else None


# ── Fold ────────────────────────────────────────────────────


def step(state: SessionCharacterState, event: CharacterEvent) -> SessionCharacterState:
    """Apply one event to a projection and return the new projection.

    The input state is left untouched.
    """
    new = state.model_copy(deep=True)
    pid = event.player_id
    identity = event.identity
    new.last_identity_by_player[pid] = identity

    if event.kind == "death":
        new.active_by_player.pop(pid, None)
        new.dead_by_player[pid] = True
        new.death_counts[pid] = new.death_counts.get(pid, 0) + 1
        return new

    new.active_by_player[pid] = identity
    new.dead_by_player[pid] = False
    new.last_living_by_player[pid] = identity
    if event.kind in CLAIMING_KINDS:
        new.claimed_identities.add(identity.key)
    return new


def reconstruct(log: Iterable[CharacterEvent]) -> SessionCharacterState:
    """Fold a character log, in order, into a SessionCharacterState."""
    state = SessionCharacterState()
    for event in log:
        state = step(state, event)
    return state


def validate_candidate(candidate: Identity, claimed: set[str]) -> LifecycleError | None:
    """Check a replacement identity against the session's claimed set."""
    if not candidate.name.strip():
        return LifecycleError.EMPTY_NAME
    if candidate.key in claimed:
        return LifecycleError.DUPLICATE_IDENTITY
    return None


# ── Engine ──────────────────────────────────────────────────


class CharacterLifecycle:
    """Owns the character log of one session and its derived projection.

    Args:
        log: Events already recorded for the session, e.g. loaded from storage.

    Not thread-safe: callers serialize access per session.
    """

    def __init__(self, log: Iterable[CharacterEvent] = ()) -> None:
        self._log: list[CharacterEvent] = list(log)
        self._state = reconstruct(self._log)

    @property
    def log(self) -> list[CharacterEvent]:
        return list(self._log)

    @property
    def state(self) -> SessionCharacterState:
        return self._state.model_copy(deep=True)

    @property
    def version(self) -> int:
        """Number of events in the log; bumps on every append."""
        return len(self._log)

    def _player_name(self, player_id: str) -> str:
        for event in reversed(self._log):
            if event.player_id == player_id:
                return event.player_name
        return player_id

    def _append(
        self,
        player_id: str,
        identity: Identity,
        kind: EventKind,
        previous_identity: Identity | None = None,
        player_name: str | None = None,
    ) -> CharacterEvent:
        event = CharacterEvent(
            player_id=player_id,
            player_name=player_name or self._player_name(player_id),
            identity=identity,
            kind=kind,
            previous_identity=previous_identity,
        )
        self._log.append(event)
        self._state = step(self._state, event)
        logger.debug("character event kind=%s player=%s identity=%s", kind, player_id, identity.key)
        return event

    def _outcome(self, error: LifecycleError | None = None) -> Outcome:
        return Outcome(error=error, log=self.log, state=self.state)

    def _reject(self, error: LifecycleError, player_id: str | None = None) -> Outcome:
        logger.info("character operation rejected error=%s player=%s", error.value, player_id)
        return self._outcome(error)

    # ── Operations ──────────────────────────────────────────

    def initialize(
        self,
        assignments: Mapping[str, Identity],
        player_names: Mapping[str, str] | None = None,
    ) -> Outcome:
        """Append an initial event for every (player_id → identity) assignment.

        Must run once, on an empty log, with at least one assignment. Initial
        identities are not checked against each other; two players may start
        on the same character.
        """
        if self._log:
            raise LifecycleMisuse("initialize() called on a session that already has character events")
        if not assignments:
            raise LifecycleMisuse("initialize() needs at least one character assignment")
        names = player_names or {}
        for player_id, identity in assignments.items():
            if not identity.name.strip():
                identity = Identity(name=UNKNOWN_CHARACTER, type=identity.type)
            self._append(player_id, identity, "initial", player_name=names.get(player_id, player_id))
        return self._outcome()

    def mark_death(self, player_id: str) -> Outcome:
        """Kill the player's active character. Already dead → no-op."""
        if self._state.is_dead(player_id):
            return self._outcome()
        identity = self._state.active_by_player.get(player_id)
        if identity is None:
            raise LifecycleMisuse(f"Player '{player_id}' has no character in this session")
        self._append(player_id, identity, "death")
        logger.info("Death recorded player=%s identity=%s", player_id, identity.key)
        return self._outcome()

    def revive(self, player_id: str, resurrection_allowed: bool) -> Outcome:
        """Bring a dead player's character back with the identity it died with."""
        if not resurrection_allowed:
            return self._reject(LifecycleError.RESURRECTION_NOT_ALLOWED, player_id)
        if not self._state.is_dead(player_id):
            return self._reject(LifecycleError.NOT_DEAD, player_id)
        restored = self._state.last_living_by_player.get(player_id)
        if restored is None:
            return self._reject(LifecycleError.NOT_DEAD, player_id)
        self._append(player_id, restored, "revival")
        return self._outcome()

    def propose_replacement(self, candidate: Identity) -> Outcome:
        """Validate a replacement identity without touching the log."""
        error = validate_candidate(candidate, self._state.claimed_identities)
        if error:
            return self._reject(error)
        return self._outcome()

    def confirm_replacement(self, player_id: str, candidate: Identity) -> Outcome:
        """Give a dead player a new, never-claimed character."""
        if not self._state.is_dead(player_id):
            return self._reject(LifecycleError.NOT_DEAD, player_id)
        error = validate_candidate(candidate, self._state.claimed_identities)
        if error:
            return self._reject(error, player_id)
        previous = self._state.last_identity_by_player.get(player_id)
        self._append(player_id, candidate, "replacement", previous_identity=previous)
        return self._outcome()

    def current_identity(self, player_id: str) -> Identity | None:
        """Active identity, else the identity of the player's last event, else None."""
        active = self._state.active_by_player.get(player_id)
        if active is not None:
            return active
        return self._state.last_identity_by_player.get(player_id)
