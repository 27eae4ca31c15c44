"""
Tests for YAML config loading and env overrides.
"""
import pytest

from mediaindex.config import Config, load_config

ENV_KEYS = [
    "MEDIAINDEX_CONFIG",
    "MEDIAINDEX_RELAY_URL",
    "MEDIAINDEX_REMOTE_RELAY",
    "MEDIAINDEX_TIMEOUT",
    "MEDIAINDEX_MAX_DEPTH",
    "MEDIAINDEX_THROTTLE_MS",
    "TMDB_API_KEY",
    "MEDIAINDEX_TMDB_RATE_LIMIT",
    "MEDIAINDEX_COUNTRY",
    "MEDIAINDEX_GROUP_PREFIX",
    "MEDIAINDEX_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == Config()

    def test_yaml_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max-depth: 2\nrelay_url: ''\ngroup-prefix: IE\nunknown_key: 1\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.max_depth == 2
        assert cfg.relay_url == ""
        assert cfg.group_prefix == "IE"
        assert not hasattr(cfg, "unknown_key")

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("throttle_ms: 100\n", encoding="utf-8")
        monkeypatch.setenv("MEDIAINDEX_THROTTLE_MS", "250")
        monkeypatch.setenv("MEDIAINDEX_TIMEOUT", "3.5")
        monkeypatch.setenv("TMDB_API_KEY", "secret")
        cfg = load_config(path)
        assert cfg.throttle_ms == 250
        assert cfg.request_timeout == 3.5
        assert cfg.tmdb_api_key == "secret"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "other.yaml"
        path.write_text("default_country: FR\n", encoding="utf-8")
        monkeypatch.setenv("MEDIAINDEX_CONFIG", str(path))
        assert load_config().default_country == "FR"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == Config()

    def test_user_config_fallback(self, tmp_path, monkeypatch):
        user_file = tmp_path / "user" / "config.yaml"
        user_file.parent.mkdir()
        user_file.write_text("max_depth: 7\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("mediaindex.config.user_config_file", lambda: user_file)
        assert load_config().max_depth == 7

    def test_local_file_beats_user_config(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("max_depth: 1\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("mediaindex.config.user_config_file", lambda: tmp_path / "missing.yaml")
        assert load_config().max_depth == 1
