"""
Tests for configuration loading.

Organization
------------
- TestExpandEnvVars: ${VAR} / ${VAR:default} expansion
- TestGetEnvInt: integer environment parsing
- TestLoadConfig: YAML discovery, parsing and env overrides
- TestSaveConfig: writing YAML back out
"""

import logging

import pytest
import yaml

from chunkforge.core.config import Config
from chunkforge.core.config_loaders import (
    expand_env_vars,
    get_env_int,
    load_config,
    save_config,
)
from chunkforge.core.exceptions import ConfigValidationError


class TestExpandEnvVars:
    """Tests for expand_env_vars."""

    def test_expands_set_variable(self, monkeypatch):
        monkeypatch.setenv("CF_TEST_LEVEL", "DEBUG")

        assert expand_env_vars("${CF_TEST_LEVEL}") == "DEBUG"

    def test_uses_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("CF_TEST_MISSING", raising=False)

        assert expand_env_vars("${CF_TEST_MISSING:INFO}") == "INFO"
        assert expand_env_vars("${CF_TEST_MISSING}") == ""

    def test_walks_nested_structures(self, monkeypatch):
        monkeypatch.setenv("CF_TEST_SIZE", "700")

        result = expand_env_vars({"chunking": {"sizes": ["${CF_TEST_SIZE}", 5]}})

        assert result == {"chunking": {"sizes": ["700", 5]}}

    def test_non_strings_unchanged(self):
        assert expand_env_vars(42) == 42
        assert expand_env_vars(None) is None


class TestGetEnvInt:
    """Tests for get_env_int."""

    def test_unset_returns_none(self, monkeypatch):
        monkeypatch.delenv("CF_TEST_INT", raising=False)

        assert get_env_int("CF_TEST_INT") is None

    def test_parses_integer(self, monkeypatch):
        monkeypatch.setenv("CF_TEST_INT", "250")

        assert get_env_int("CF_TEST_INT") == 250

    def test_invalid_value_ignored_with_warning(self, monkeypatch, caplog):
        monkeypatch.setenv("CF_TEST_INT", "lots")

        with caplog.at_level(logging.WARNING):
            assert get_env_int("CF_TEST_INT") is None

        assert "CF_TEST_INT" in caplog.text

    def test_clamps_to_minimum(self, monkeypatch):
        monkeypatch.setenv("CF_TEST_INT", "-3")

        assert get_env_int("CF_TEST_INT", min_value=0) == 0


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, isolated_env):
        assert load_config() == Config()

    def test_discovers_file_in_cwd(self, isolated_env):
        (isolated_env / "chunkforge.yaml").write_text(
            "chunking:\n  max_chunk_size: 400\n"
        )

        assert load_config().chunking.max_chunk_size == 400

    def test_base_path_search(self, isolated_env, temp_dir):
        (temp_dir / "chunkforge.yml").write_text("chunking:\n  overlap_size: 0\n")

        assert load_config(base_path=temp_dir).chunking.overlap_size == 0

    def test_explicit_missing_file_uses_defaults(self, isolated_env):
        config = load_config(isolated_env / "nope.yaml")

        assert config == Config()

    def test_empty_file_uses_defaults(self, isolated_env):
        path = isolated_env / "empty.yaml"
        path.write_text("")

        assert load_config(path) == Config()

    def test_invalid_yaml_raises(self, isolated_env):
        path = isolated_env / "bad.yaml"
        path.write_text("chunking: [unclosed\n")

        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_invalid_value_raises(self, isolated_env):
        path = isolated_env / "bad.yaml"
        path.write_text("chunking:\n  max_chunk_size: 0\n")

        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_env_placeholders_expanded(self, isolated_env, monkeypatch):
        monkeypatch.setenv("CF_TEST_MAX", "321")
        path = isolated_env / "chunkforge.yaml"
        path.write_text("chunking:\n  max_chunk_size: ${CF_TEST_MAX:1000}\n")

        assert load_config(path).chunking.max_chunk_size == 321

    def test_env_overrides_beat_file(self, isolated_env, monkeypatch):
        (isolated_env / "chunkforge.yaml").write_text(
            "chunking:\n  max_chunk_size: 400\n  overlap_size: 50\n"
        )
        monkeypatch.setenv("CHUNKFORGE_MAX_CHUNK_SIZE", "900")

        config = load_config()

        assert config.chunking.max_chunk_size == 900
        assert config.chunking.overlap_size == 50

    def test_env_override_clamped(self, isolated_env, monkeypatch):
        monkeypatch.setenv("CHUNKFORGE_MAX_CHUNK_SIZE", "0")
        monkeypatch.setenv("CHUNKFORGE_OVERLAP_SIZE", "-20")

        config = load_config()

        assert config.chunking.max_chunk_size == 1
        assert config.chunking.overlap_size == 0

    def test_env_log_level(self, isolated_env, monkeypatch):
        monkeypatch.setenv("CHUNKFORGE_LOG_LEVEL", "warning")

        assert load_config().logging.level == "WARNING"

    def test_unknown_env_log_level_ignored(self, isolated_env, monkeypatch):
        monkeypatch.setenv("CHUNKFORGE_LOG_LEVEL", "chatty")

        assert load_config().logging.level == "INFO"


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_then_load(self, isolated_env):
        config = Config.from_dict({"chunking": {"min_chunk_size": 10}})
        path = isolated_env / "nested" / "chunkforge.yaml"

        save_config(config, path)

        assert yaml.safe_load(path.read_text())["chunking"]["min_chunk_size"] == 10
        assert load_config(path) == config
