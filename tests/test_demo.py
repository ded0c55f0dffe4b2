from tally import storage
from tally.demo import DEMO_PLAYERS, create_demo_data


def test_create_demo_data():
    storage.create_player("Leftover")
    create_demo_data()
    assert [p["name"] for p in storage.list_players()] == DEMO_PLAYERS
    assert storage.get_template("sunken-crypts")["has_characters"] is True

    sessions = storage.list_sessions(completed=False)
    assert len(sessions) == 1
    view = storage.character_view(sessions[0])
    assert view["players"]["alice"]["status"] == "dead"
    assert view["players"]["bruno"]["status"] == "alive"
