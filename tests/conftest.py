"""
Shared pytest fixtures.
"""

import pytest

from saab_quickstart.config.project_config import ProjectConfig, reset_config
from fixtures.sample_track_data import SAMPLE_ROWS, write_track_csv

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep SAAB_* environment variables and the global config out of tests."""
    for key in ('SAAB_TRACKDATA_PATH', 'SAAB_CSV_ENCODING', 'SAAB_LOG_LEVEL', 'SAAB_CONFIG_FILE'):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()

@pytest.fixture
def project_config():
    return ProjectConfig()

@pytest.fixture
def sample_csv(tmp_path):
    return write_track_csv(tmp_path / "trackdata.csv", SAMPLE_ROWS)
