"""
Tests for RemoteThemeConfig.
"""

import pytest

from remotetheme.remotetheme_config import VERSION, RemoteThemeConfig
from remotetheme.remotetheme_exceptions import RemoteThemeException


class TestRemoteThemeConfig:
    """Tests for building and loading configuration."""

    def test_defaults(self):
        """Test the default configuration values."""
        config = RemoteThemeConfig.from_dict({})
        assert config.host == "https://codeload.github.com"
        assert config.archive_marker == "zip"
        assert config.timeout_command == []
        assert config.unzip_command == ["unzip"]
        assert config.extractor == "unzip"
        assert config.allowed_hosts == ["github.com"]
        assert config.download_timeout == 600.0

    def test_user_agent_carries_version(self):
        """Test that the user agent names the package version."""
        assert RemoteThemeConfig().user_agent.startswith(f"remotetheme/{VERSION}")

    def test_from_flat_dict(self):
        """Test building a config from a flat dictionary."""
        config = RemoteThemeConfig.from_dict(
            {"network_timeout": 5, "timeout_command": ["timeout", "30"]}
        )
        assert config.network_timeout == 5.0
        assert config.timeout_command == ["timeout", "30"]

    def test_from_nested_table(self):
        """Test building a config from a remote_theme table."""
        config = RemoteThemeConfig.from_dict({"remote_theme": {"extractor": "builtin"}})
        assert config.extractor == "builtin"

    def test_unknown_key(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(RemoteThemeException, match="Unknown configuration key"):
            RemoteThemeConfig.from_dict({"retries": 3})

    @pytest.mark.parametrize(
        "values",
        [
            {"network_timeout": "soon"},
            {"network_timeout": True},
            {"timeout_command": "timeout 30"},
            {"unzip_command": []},
            {"extractor": "7z"},
            {"chunk_size": 0},
            {"download_timeout": -1},
            {"extraction_timeout": -1},
        ],
    )
    def test_invalid_values(self, values):
        """Test that values of the wrong type or range are rejected."""
        with pytest.raises(RemoteThemeException):
            RemoteThemeConfig.from_dict(values)

    def test_environment_overrides_timeout(self, monkeypatch):
        """Test that REMOTE_THEME_TIMEOUT overrides network_timeout."""
        monkeypatch.setenv("REMOTE_THEME_TIMEOUT", "7")
        config = RemoteThemeConfig.from_dict({"network_timeout": 30})
        assert config.network_timeout == 7.0

    def test_load_toml(self, tmp_path):
        """Test loading configuration from a TOML file."""
        path = tmp_path / "remote_theme.toml"
        path.write_text(
            '[remote_theme]\n'
            'network_timeout = 12\n'
            'timeout_command = ["timeout", "60"]\n'
            'extraction_timeout = 90\n'
        )
        config = RemoteThemeConfig.load(str(path))
        assert config.network_timeout == 12.0
        assert config.timeout_command == ["timeout", "60"]
        assert config.extraction_timeout == 90.0

    def test_load_missing_file(self, tmp_path):
        """Test that a missing config file raises."""
        with pytest.raises(RemoteThemeException, match="not found"):
            RemoteThemeConfig.load(str(tmp_path / "nope.toml"))

    def test_load_invalid_toml(self, tmp_path):
        """Test that malformed TOML raises."""
        path = tmp_path / "broken.toml"
        path.write_text("network_timeout = [\n")
        with pytest.raises(RemoteThemeException, match="Invalid TOML"):
            RemoteThemeConfig.load(str(path))

    def test_to_dict_round_trip(self):
        """Test that to_dict output loads back into an equal config."""
        config = RemoteThemeConfig(network_timeout=3, extractor="builtin")
        assert RemoteThemeConfig.from_dict(config.to_dict()) == config

    def test_download_timeout_can_be_disabled(self):
        """Test that download_timeout accepts None."""
        config = RemoteThemeConfig.from_dict({"download_timeout": None})
        assert config.download_timeout is None
