"""Game template CRUD operations (merged presets + user data, copy-on-write)."""

import json
from datetime import datetime, timezone
from typing import Any

from .core import preset_templates_dir, slugify, templates_dir

GAME_MODES = ("cooperative", "competitive", "campaign")

# Editable fields and their defaults for a new template
TEMPLATE_DEFAULTS: dict[str, Any] = {
    "description": "",
    "has_characters": False,
    "characters": [],
    "supports_cooperative": False,
    "supports_competitive": True,
    "supports_campaign": False,
    "default_mode": "competitive",
    "min_players": 1,
    "max_players": 8,
    "extensions": [],
}


def _check_fields(template: dict[str, Any]) -> None:
    if template["default_mode"] not in GAME_MODES:
        raise ValueError(f"Unknown game mode '{template['default_mode']}'")
    if template["min_players"] < 1 or template["max_players"] < template["min_players"]:
        raise ValueError("Player range must satisfy 1 <= min_players <= max_players")
    for char in template["characters"]:
        if not (char.get("name") or "").strip():
            raise ValueError("Template characters need a name")


def list_templates() -> list[dict[str, Any]]:
    by_slug: dict[str, dict[str, Any]] = {}
    # Presets first (lower priority)
    if preset_templates_dir().is_dir():
        for path in sorted(preset_templates_dir().glob("*.json")):
            data = json.loads(path.read_text())
            slug = path.stem
            data["slug"] = slug
            data["source"] = "preset"
            by_slug[slug] = data
    # User templates override
    for path in sorted(templates_dir().glob("*.json")):
        data = json.loads(path.read_text())
        data["source"] = "user"
        by_slug[path.stem] = data
    return list(by_slug.values())


def get_template(slug: str) -> dict[str, Any] | None:
    user_path = templates_dir() / f"{slug}.json"
    if user_path.is_file():
        data = json.loads(user_path.read_text())
        data["source"] = "user"
        return data
    preset_path = preset_templates_dir() / f"{slug}.json"
    if preset_path.is_file():
        data = json.loads(preset_path.read_text())
        data["slug"] = slug
        data["source"] = "preset"
        return data
    return None


def create_template(name: str, fields: dict[str, Any] | None = None) -> dict[str, Any]:
    slug = slugify(name)
    json_path = templates_dir() / f"{slug}.json"
    if json_path.exists():
        raise FileExistsError(f"Template '{name}' already exists (slug: {slug})")
    if (preset_templates_dir() / f"{slug}.json").is_file():
        raise FileExistsError(f"Template '{name}' already exists as preset (slug: {slug})")
    template: dict[str, Any] = {"name": name, "slug": slug}
    template.update(json.loads(json.dumps(TEMPLATE_DEFAULTS)))
    for key, value in (fields or {}).items():
        if key in TEMPLATE_DEFAULTS:
            template[key] = value
    template["has_characters"] = template["has_characters"] or bool(template["characters"])
    _check_fields(template)
    template["created_at"] = datetime.now(timezone.utc).isoformat()
    json_path.write_text(json.dumps(template, indent=2))
    template["source"] = "user"
    return template


def update_template(slug: str, fields: dict[str, Any]) -> dict[str, Any] | None:
    template = get_template(slug)
    if template is None:
        return None

    allowed = {"name", *TEMPLATE_DEFAULTS}
    for key, value in fields.items():
        if key in allowed:
            template[key] = value
    _check_fields(template)

    new_slug = slugify(template["name"])
    if new_slug != slug and (templates_dir() / f"{new_slug}.json").exists():
        raise FileExistsError(
            f"Cannot rename: '{template['name']}' already exists (slug: {new_slug})"
        )

    # Copy-on-write: a preset is never edited in place, the user copy shadows it
    user_path = templates_dir() / f"{slug}.json"
    if new_slug != slug and user_path.is_file():
        user_path.unlink()
    template["slug"] = new_slug
    template.setdefault("created_at", datetime.now(timezone.utc).isoformat())

    save_data = {k: v for k, v in template.items() if k != "source"}
    (templates_dir() / f"{new_slug}.json").write_text(json.dumps(save_data, indent=2))
    template["source"] = "user"
    return template


def delete_template(slug: str) -> bool:
    """Delete a user template (or user override, revealing the preset)."""
    json_path = templates_dir() / f"{slug}.json"
    if not json_path.is_file():
        return False
    json_path.unlink()
    return True
