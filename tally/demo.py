"""Create demo players, templates and one running session for development/testing."""

from tally import storage

DEMO_PLAYERS = ["Alice", "Bruno", "Chen", "Dana"]

DEMO_TEMPLATES = [
    {
        "name": "Sunken Crypts",
        "description": "Campaign dungeon crawl where fallen heroes can be raised by the temple.",
        "characters": [
            {"name": "Brakka", "type": "Warrior"},
            {"name": "Ilse", "type": "Cleric"},
            {"name": "Vesk", "type": "Rogue"},
        ],
        "supports_cooperative": True,
        "supports_competitive": False,
        "supports_campaign": True,
        "default_mode": "campaign",
        "min_players": 1,
        "max_players": 4,
    },
]


def create_demo_data() -> None:
    """Wipe all stored data and create fresh demo players, templates and a session."""
    storage.reset_data()

    players = [storage.create_player(name) for name in DEMO_PLAYERS]
    for tmpl in DEMO_TEMPLATES:
        fields = {k: v for k, v in tmpl.items() if k != "name"}
        storage.create_template(tmpl["name"], fields)

    # A running cooperative session with one death, so the character panel has something to show
    alice, bruno, chen = (p["id"] for p in players[:3])
    session = storage.start_session(
        "eldritch-expedition",
        [alice, bruno, chen],
        characters={
            alice: {"name": "Explorer", "type": "Scout"},
            bruno: {"name": "Scholar", "type": "Scholar"},
            chen: {"name": "Medic", "type": "Medic"},
        },
        allow_resurrection=True,
    )
    storage.record_death(session["id"], alice)

    print(f"Created {len(players)} demo players + {len(DEMO_TEMPLATES)} demo template + 1 running session.")
