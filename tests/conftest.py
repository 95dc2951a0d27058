import pathlib

import pytest

from envprofiles.config import settings as settings_mod

FIXTURES = pathlib.Path(__file__).parent / "fixtures"

BROKER_ENV_VARS = ("GURU_JMS_SERVER", "GURU_JMS_PORT", "GURU_JMS_USER", "GURU_JMS_PASSWORD")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's shell env out of every test."""
    for name in BROKER_ENV_VARS + (
        settings_mod.PROFILES_ENV,
        settings_mod.PROPERTY_FILES_ENV,
        settings_mod.LOG_LEVEL_ENV,
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(settings_mod.LOG_DIR_ENV, str(tmp_path / "logs"))


@pytest.fixture
def fixtures_dir():
    return FIXTURES
