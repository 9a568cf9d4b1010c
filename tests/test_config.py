# ==============================================
# Tests for configuration loading
# ==============================================

import os

import pytest

from uas_parser import config as config_module
from uas_parser.config import AppConfig, UpdateConfig, get_config


@pytest.fixture
def fresh_config(monkeypatch, tmp_path):
    monkeypatch.setattr(config_module, "_config_instance", None)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    names = (
        "UAS_CACHE_DIR",
        "UAS_DATABASE_FILENAME",
        "UAS_UPDATE_INTERVAL_SECONDS",
        "UAS_DO_DOWNLOADS",
        "UAS_LOCK_STALE_SECONDS",
        "UAS_HTTP_TIMEOUT_SECONDS",
        "UAS_DATA_URL",
        "UAS_VERSION_URL",
        "UAS_CHECKSUM_URL",
        "UAS_LOOKUP_MAX_ENTRIES",
    )
    for name in names:
        monkeypatch.delenv(name, raising=False)
    yield
    # load_dotenv writes straight into os.environ
    for name in names:
        os.environ.pop(name, None)
    config_module._config_instance = None


class TestDefaults:
    def test_defaults(self, fresh_config):
        config = get_config()
        assert config.update.cache_directory == "data/"
        assert config.update.update_interval_seconds == 7 * 24 * 60 * 60
        assert config.update.do_downloads is True
        assert config.update.lock_stale_seconds == 60.0
        assert config.lookup.max_entries == 5000
        assert config.provider.version_url.endswith("&ver=y")

    def test_singleton(self, fresh_config):
        assert get_config() is get_config()

    def test_database_path(self):
        update = UpdateConfig(cache_directory="/var/cache/uas", database_filename="db.ini")
        assert str(update.database_path) == "/var/cache/uas/db.ini"

    def test_dataclass_defaults_are_independent(self):
        assert AppConfig().update is not AppConfig().update


class TestEnvironment:
    def test_overrides(self, fresh_config, monkeypatch):
        monkeypatch.setenv("UAS_CACHE_DIR", "/tmp/uas")
        monkeypatch.setenv("UAS_UPDATE_INTERVAL_SECONDS", "3600")
        monkeypatch.setenv("UAS_DO_DOWNLOADS", "false")
        monkeypatch.setenv("UAS_DATA_URL", "http://mirror/data")
        monkeypatch.setenv("UAS_LOOKUP_MAX_ENTRIES", "10")

        config = get_config()
        assert config.update.cache_directory == "/tmp/uas"
        assert config.update.update_interval_seconds == 3600
        assert config.update.do_downloads is False
        assert config.provider.data_url == "http://mirror/data"
        assert config.lookup.max_entries == 10

    @pytest.mark.parametrize("value,expected", [
        ("1", True), ("yes", True), ("TRUE", True), ("0", False), ("off", False), ("", True),
    ])
    def test_boolean_values(self, fresh_config, monkeypatch, value, expected):
        monkeypatch.setenv("UAS_DO_DOWNLOADS", value)
        assert get_config().update.do_downloads is expected

    def test_dotenv_file(self, fresh_config, tmp_path):
        (tmp_path / ".env").write_text("UAS_LOOKUP_MAX_ENTRIES=42\n")
        assert get_config().lookup.max_entries == 42
