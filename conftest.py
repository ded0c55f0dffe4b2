import pytest

from tally import storage


@pytest.fixture(autouse=True)
def fresh_storage(tmp_path):
    """Every test gets its own empty data dir; presets come from the repo."""
    storage.init_storage(tmp_path / "data")
    yield storage.data_dir()
