"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel, Field


class CreatePlayer(BaseModel):
    name: str
    description: str = ""


class UpdatePlayer(BaseModel):
    name: str | None = None
    description: str | None = None


class TemplateCharacter(BaseModel):
    name: str
    type: str | None = None


class CreateTemplate(BaseModel):
    name: str
    description: str = ""
    has_characters: bool = False
    characters: list[TemplateCharacter] = Field(default_factory=list)
    supports_cooperative: bool = False
    supports_competitive: bool = True
    supports_campaign: bool = False
    default_mode: str = "competitive"
    min_players: int = 1
    max_players: int = 8
    extensions: list[str] = Field(default_factory=list)


class UpdateTemplate(BaseModel):
    name: str | None = None
    description: str | None = None
    has_characters: bool | None = None
    characters: list[TemplateCharacter] | None = None
    supports_cooperative: bool | None = None
    supports_competitive: bool | None = None
    supports_campaign: bool | None = None
    default_mode: str | None = None
    min_players: int | None = None
    max_players: int | None = None
    extensions: list[str] | None = None


class StartSession(BaseModel):
    template_slug: str
    players: list[str]
    mode: str | None = None
    characters: dict[str, TemplateCharacter] = Field(default_factory=dict)
    allow_resurrection: bool | None = None
    extensions: list[str] = Field(default_factory=list)


class ScoreAdjustment(BaseModel):
    delta: int
    expected_version: int | None = None


class VersionedBody(BaseModel):
    expected_version: int | None = None


class CharacterCandidate(BaseModel):
    name: str
    type: str | None = None
    expected_version: int | None = None


class CompleteSession(BaseModel):
    duration_minutes: int
    cooperative_result: str | None = None
    expected_version: int | None = None
