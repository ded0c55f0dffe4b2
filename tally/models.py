"""Core domain models for the character lifecycle.

The engine in tally.characters operates on these types; storage persists
them verbatim inside a session's ``character_history``.
Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EventKind = Literal["initial", "death", "replacement", "revival"]


class Identity(BaseModel):
    """A character's in-fiction persona: name plus optional type/class."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str | None = None

    @property
    def key(self) -> str:
        """Normalized form used for sameness: "name|type", trimmed and lower-cased, with "|" escaped."""
        return identity_key(self.name, self.type)

    def label(self) -> str:
        """Display form, e.g. "Ada (Scholar)"."""
        if self.type:
            return f"{self.name} ({self.type})"
        return self.name


def _key_part(text: str | None) -> str:
    # escape the separator so "a|" + "b" and "a" + "|b" stay distinct
    return (text or "").strip().lower().replace("\\", "\\\\").replace("|", "\\|")


def identity_key(name: str, type: str | None = None) -> str:
    return f"{_key_part(name)}|{_key_part(type)}"


class Player(BaseModel):
    """A roster entry supplied by the host. The engine only keeps the id."""

    id: str
    name: str


class CharacterEvent(BaseModel):
    """A single entry in a session's append-only character log."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    player_name: str  # denormalized for history display
    identity: Identity
    kind: EventKind
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    previous_identity: Identity | None = None  # replacement only


class SessionCharacterState(BaseModel):
    """Projection of a character log. Derived by folding; never authoritative."""

    active_by_player: dict[str, Identity] = Field(default_factory=dict)
    dead_by_player: dict[str, bool] = Field(default_factory=dict)
    claimed_identities: set[str] = Field(default_factory=set)
    last_identity_by_player: dict[str, Identity] = Field(default_factory=dict)
    last_living_by_player: dict[str, Identity] = Field(default_factory=dict)
    death_counts: dict[str, int] = Field(default_factory=dict)

    def is_dead(self, player_id: str) -> bool:
        return self.dead_by_player.get(player_id, False)

    def knows(self, player_id: str) -> bool:
        return player_id in self.last_identity_by_player
