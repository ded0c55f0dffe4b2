from tally.scoring import adjust, clamp_score, current_winner, ranked_players


def _session(scores: dict[str, int]) -> dict:
    return {"players": list(scores), "scores": scores}


def test_clamp_score_floor():
    assert clamp_score(-3) == 0
    assert clamp_score(5) == 5
    assert clamp_score(2, floor=3) == 3


def test_adjust_returns_copy():
    scores = {"alice": 2}
    updated = adjust(scores, "alice", 3)
    assert updated == {"alice": 5}
    assert scores == {"alice": 2}


def test_adjust_never_below_floor():
    assert adjust({"alice": 2}, "alice", -10) == {"alice": 0}


def test_adjust_unscored_player_starts_at_zero():
    assert adjust({}, "bruno", 4) == {"bruno": 4}


def test_ranked_players_highest_first():
    ranked = ranked_players(_session({"alice": 3, "bruno": 9, "chen": 5}))
    assert [r["player_id"] for r in ranked] == ["bruno", "chen", "alice"]
    assert [r["position"] for r in ranked] == [1, 2, 3]


def test_ranked_players_ties_keep_roster_order():
    ranked = ranked_players(_session({"alice": 4, "bruno": 4}))
    assert [r["player_id"] for r in ranked] == ["alice", "bruno"]


def test_current_winner():
    assert current_winner(_session({"alice": 1, "bruno": 2})) == "bruno"
    assert current_winner({"players": [], "scores": {}}) is None
