"""Data directory layout and slug rules shared by every storage module."""

import re
import shutil
import unicodedata
from pathlib import Path

BUNDLED_PRESETS_DIR = Path(__file__).resolve().parents[2] / "presets"

_data_dir: Path | None = None
_presets_dir: Path = BUNDLED_PRESETS_DIR


def slugify(title: str) -> str:
    """Turn a player, template or session name into a file-safe id.

    "Eldritch Expedition" → "eldritch-expedition"
    """
    ascii_title = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", re.sub(r"['\"]", "", ascii_title.lower())).strip("-")
    return slug or "untitled"


def init_storage(data_dir: Path, presets_dir: Path | None = None) -> None:
    """Point storage at data_dir and create its session and template folders."""
    global _data_dir, _presets_dir

    _data_dir = data_dir
    _presets_dir = presets_dir or BUNDLED_PRESETS_DIR
    for folder in (templates_dir(), sessions_dir()):
        folder.mkdir(parents=True, exist_ok=True)


def reset_data() -> None:
    """Remove every player, template, session and setting, leaving empty folders."""
    root = data_dir()
    if root.exists():
        shutil.rmtree(root)
    init_storage(root, _presets_dir)


def data_dir() -> Path:
    if _data_dir is None:
        raise RuntimeError("Storage has no data directory yet; call init_storage() first")
    return _data_dir


def presets_dir() -> Path:
    return _presets_dir


def players_path() -> Path:
    return data_dir() / "players.json"


def config_path() -> Path:
    return data_dir() / "config.json"


def templates_dir() -> Path:
    return data_dir() / "templates"


def sessions_dir() -> Path:
    return data_dir() / "sessions"


def preset_templates_dir() -> Path:
    return presets_dir() / "templates"
