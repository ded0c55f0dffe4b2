"""File-based JSON storage for players, game templates, sessions and config.

Data layout:
  data/
    players.json         Player roster (id, name, description)
    templates/           User-created and preset-overridden game templates
      <slug>.json
    sessions/            Active and completed game sessions
      <id>.json          Players, scores, mode, outcome, version, and the
                         verbatim character_history event log
    config.json          App settings (resurrection default, character types, score floor)
  presets/
    templates/           Built-in read-only game templates (merged at read time)

Slug rules: name → Unicode normalize → strip non-ASCII → lowercase →
replace non-alnum runs with hyphen → strip leading/trailing hyphens.
Player and session ids are slugs suffixed -2, -3… on collision.

Preset merging: list_templates() and get_template() merge preset + user data;
user data wins on slug collision. Copy-on-write: updating a preset writes a
user copy to data/templates/. Deleting the user copy reveals the preset.

Sessions: every write bumps "version"; mutating calls that pass
expected_version raise StaleSessionError on mismatch.
"""

# Re-export all public symbols so `from tally import storage` keeps working.

from .core import (  # noqa: F401
    config_path,
    data_dir,
    init_storage,
    players_path,
    preset_templates_dir,
    presets_dir,
    reset_data,
    sessions_dir,
    slugify,
    templates_dir,
)

from .players import (  # noqa: F401
    create_player,
    delete_player,
    get_player,
    list_players,
    update_player,
)

from .templates import (  # noqa: F401
    GAME_MODES,
    create_template,
    delete_template,
    get_template,
    list_templates,
    update_template,
)

from .sessions import (  # noqa: F401
    StaleSessionError,
    adjust_score,
    character_view,
    complete_session,
    delete_session,
    get_session,
    lifecycle_for,
    list_sessions,
    propose_character,
    record_death,
    replace_character,
    revive_character,
    start_session,
)

from .config import (  # noqa: F401
    CHARACTER_TYPES,
    get_config,
    update_config,
)
