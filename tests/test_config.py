"""Tests for settings loading."""

import pytest

from agentkit.config import Settings, load_settings


def _write_config(tmp_path, text: str):
    path = tmp_path / "agentkit.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.model is None
        assert settings.http_timeout_ms == 30000
        assert settings.github_api_url == "https://api.github.com"
        assert settings.cache_tools is True
        assert settings.agents == {}

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown settings"):
            Settings.from_dict({"log_levle": "DEBUG"})

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Invalid log_level"):
            Settings.from_dict({"log_level": "LOUD"})

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="http_timeout_ms"):
            Settings.from_dict({"http_timeout_ms": 0})

    def test_agent_options_returns_copy(self):
        settings = Settings.from_dict({"agents": {"code-review": {"max_files_per_review": 3}}})
        options = settings.agent_options("code-review")
        options["max_files_per_review"] = 99
        assert settings.agents["code-review"]["max_files_per_review"] == 3
        assert settings.agent_options("deployment") == {}


class TestYaml:
    def test_from_yaml(self, tmp_path):
        path = _write_config(tmp_path, """
log_level: DEBUG
http_timeout_ms: 5000
agents:
  deployment:
    allowed_environments: [staging]
""")
        settings = Settings.from_yaml(path)
        assert settings.log_level == "DEBUG"
        assert settings.http_timeout_ms == 5000
        assert settings.agent_options("deployment") == {"allowed_environments": ["staging"]}

    def test_empty_file_gives_defaults(self, tmp_path):
        assert Settings.from_yaml(_write_config(tmp_path, "")) == Settings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "nope.yaml")

    def test_non_mapping(self, tmp_path):
        with pytest.raises(ValueError, match="YAML mapping"):
            Settings.from_yaml(_write_config(tmp_path, "- a\n- b\n"))


class TestEnvironment:
    def test_env_overrides(self):
        overrides = Settings.env_overrides({
            "AGENTKIT_LOG_LEVEL": "ERROR",
            "AGENTKIT_HTTP_TIMEOUT_MS": "1500",
            "AGENTKIT_CACHE_TOOLS": "off",
            "GITHUB_TOKEN": "ghp_test",
            "UNRELATED": "x",
        })
        assert overrides == {
            "log_level": "ERROR",
            "http_timeout_ms": 1500,
            "cache_tools": False,
            "github_token": "ghp_test",
        }

    def test_empty_model_means_none(self):
        assert Settings.from_env({"AGENTKIT_MODEL": ""}).model is None

    def test_bad_integer(self):
        with pytest.raises(ValueError, match="must be an integer"):
            Settings.env_overrides({"AGENTKIT_HTTP_TIMEOUT_MS": "soon"})

    def test_bad_boolean(self):
        with pytest.raises(ValueError, match="must be a boolean"):
            Settings.env_overrides({"AGENTKIT_CACHE_TOOLS": "maybe"})

    def test_load_settings_precedence(self, tmp_path):
        path = _write_config(tmp_path, "log_level: DEBUG\nhttp_timeout_ms: 5000\n")
        settings = load_settings(path, environ={"AGENTKIT_HTTP_TIMEOUT_MS": "250"})
        assert settings.log_level == "DEBUG"
        assert settings.http_timeout_ms == 250

    def test_load_settings_without_file(self):
        assert load_settings(environ={}) == Settings()
