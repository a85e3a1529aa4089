"""Tests for the Config class."""

import pytest

from quickpush.config import Config, default_config


class TestConfig:
    """Test suite for the Config class."""

    def test_default_config(self):
        config = Config()
        assert config.is_valid()
        assert config.remote == "origin"
        assert config.pathspec == "."
        assert config.message_prefix == "Update"
        assert config.timestamp_format == "%c"
        assert config.git_executable == "git"
        assert config.timeout is None

    def test_default_config_instance(self):
        assert default_config.is_valid()
        assert default_config.remote == "origin"

    def test_custom_config(self):
        config = Config(
            remote="upstream",
            pathspec="src",
            message_prefix="WIP",
            timestamp_format="%Y-%m-%d",
            git_executable="/usr/bin/git",
            timeout=12.5,
        )
        assert config.is_valid()
        assert config.remote == "upstream"
        assert config.pathspec == "src"
        assert config.message_prefix == "WIP"
        assert config.timestamp_format == "%Y-%m-%d"
        assert config.git_executable == "/usr/bin/git"
        assert config.timeout == 12.5

    @pytest.mark.parametrize("field", ["remote", "pathspec", "message_prefix", "timestamp_format", "git_executable"])
    @pytest.mark.parametrize("invalid_value", ["", "   ", None, 3])
    def test_invalid_string_fields(self, field, invalid_value):
        with pytest.raises(ValueError) as excinfo:
            Config(**{field: invalid_value})
        assert f"Invalid configuration: {field} must be a non-empty string" in str(excinfo.value)

    def test_remote_with_whitespace(self):
        with pytest.raises(ValueError, match="remote must not contain whitespace"):
            Config(remote="my remote")

    @pytest.mark.parametrize(
        "invalid_value,expected_error",
        [
            (0, "timeout must be positive"),
            (-1.5, "timeout must be positive"),
            ("10", "timeout must be a number or None"),
            (True, "timeout must be a number or None"),
        ],
    )
    def test_invalid_timeout(self, invalid_value, expected_error):
        with pytest.raises(ValueError) as excinfo:
            Config(timeout=invalid_value)
        assert f"Invalid configuration: {expected_error}" in str(excinfo.value)

    def test_is_valid_after_mutation(self):
        config = Config()
        config.remote = ""
        assert not config.is_valid()

    def test_repr(self):
        assert "remote='origin'" in repr(Config())
