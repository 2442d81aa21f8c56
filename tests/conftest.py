import pytest

from nightcalc.airports import directory
from nightcalc.config import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    '''Every test starts from schema defaults unless it writes its own config.toml.'''
    config_file = tmp_path / 'config.toml'
    monkeypatch.setattr(config, 'config_file', config_file)
    return config_file


@pytest.fixture(autouse=True)
def fresh_directory():
    directory.reset()
    yield directory
    directory.reset()
