"""Global app configuration (session defaults, character types, score floor)."""

import json
from typing import Any

from .core import config_path

CHARACTER_TYPES = [
    "Explorer",
    "Scholar",
    "Occultist",
    "Psychic",
    "Dilettante",
    "Athlete",
    "Detective",
    "Medic",
    "Scientist",
    "Artist",
    "Engineer",
    "Archaeologist",
]

_CONFIG_DEFAULTS: dict[str, Any] = {
    "default_allow_resurrection": False,
    "character_types": CHARACTER_TYPES,
    "score_floor": 0,
}


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config: dict[str, Any] = {
        "default_allow_resurrection": _CONFIG_DEFAULTS["default_allow_resurrection"],
        "character_types": list(_CONFIG_DEFAULTS["character_types"]),
        "score_floor": _CONFIG_DEFAULTS["score_floor"],
    }
    path = config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        for key in config:
            if key in stored:
                config[key] = stored[key]
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Unknown keys are ignored. Returns full config."""
    config = get_config()
    if "default_allow_resurrection" in fields:
        config["default_allow_resurrection"] = bool(fields["default_allow_resurrection"])
    if "character_types" in fields:
        # replaced wholesale, blanks dropped
        config["character_types"] = [t.strip() for t in fields["character_types"] if t.strip()]
    if "score_floor" in fields:
        config["score_floor"] = int(fields["score_floor"])
    config_path().write_text(json.dumps(config, indent=2))
    return config
