import pytest

from gister.config import load_app_config


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep the user's real settings, token file and DEBUG out of tests
    monkeypatch.setenv("GISTER_SETTINGS", str(tmp_path / "missing-settings.toml"))
    monkeypatch.setenv("GIST_CONFIG", str(tmp_path / "missing-token"))
    monkeypatch.delenv("GIST_TOKEN", raising=False)
    load_app_config.cache_clear()
    yield
    load_app_config.cache_clear()
