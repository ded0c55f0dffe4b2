from tally.characters import CharacterLifecycle
from tally.models import Identity
from tally.stats import character_progression, dump_log, player_stats

EXPLORER = Identity(name="Explorer", type="Scout")
SCHOLAR = Identity(name="Scholar", type="Scholar")
ATHLETE = Identity(name="Athlete", type="Tank")


def _coop_session(result: str = "victory", completed: bool = True) -> dict:
    engine = CharacterLifecycle()
    engine.initialize({"alice": EXPLORER, "bruno": SCHOLAR}, {"alice": "Alice", "bruno": "Bruno"})
    engine.mark_death("alice")
    engine.confirm_replacement("alice", ATHLETE)
    engine.mark_death("alice")
    return {
        "players": ["alice", "bruno"],
        "is_cooperative": True,
        "cooperative_result": result,
        "winner": None,
        "completed": completed,
        "character_history": dump_log(engine.log),
    }


def _competitive_session(winner: str) -> dict:
    return {
        "players": ["alice", "bruno"],
        "is_cooperative": False,
        "winner": winner,
        "completed": True,
        "character_history": [],
    }


# ── player_stats ────────────────────────────────────────────


def test_player_stats_counts_deaths_from_log():
    stats = player_stats("alice", [_coop_session()])
    assert stats["games_played"] == 1
    assert stats["deaths"] == 2
    assert stats["cooperative_victories"] == 1
    assert stats["characters_played"] == ["Explorer (Scout)", "Athlete (Tank)"]


def test_player_stats_other_player_unaffected():
    stats = player_stats("bruno", [_coop_session()])
    assert stats["deaths"] == 0
    assert stats["characters_played"] == ["Scholar (Scholar)"]


def test_player_stats_results_and_wins():
    sessions = [
        _coop_session("victory"),
        _coop_session("defeat"),
        _competitive_session("alice"),
        _competitive_session("bruno"),
    ]
    stats = player_stats("alice", sessions)
    assert stats["games_played"] == 4
    assert stats["cooperative_victories"] == 1
    assert stats["cooperative_defeats"] == 1
    assert stats["competitive_wins"] == 1
    assert stats["deaths"] == 4
    # identities are listed once across sessions
    assert stats["characters_played"] == ["Explorer (Scout)", "Athlete (Tank)"]


def test_player_stats_ignores_active_sessions():
    stats = player_stats("alice", [_coop_session(completed=False)])
    assert stats["games_played"] == 0
    assert stats["deaths"] == 0


def test_player_stats_unknown_player():
    stats = player_stats("nobody", [_coop_session()])
    assert stats["games_played"] == 0


# ── character_progression ───────────────────────────────────


def test_character_progression_timelines():
    timelines = character_progression(_coop_session())
    assert [e["kind"] for e in timelines["alice"]] == ["initial", "death", "replacement", "death"]
    assert timelines["alice"][2]["character"] == "Athlete (Tank)"
    assert timelines["alice"][2]["previous"] == "Explorer (Scout)"
    assert [e["kind"] for e in timelines["bruno"]] == ["initial"]


def test_character_progression_without_characters():
    assert character_progression(_competitive_session("alice")) == {"alice": [], "bruno": []}
