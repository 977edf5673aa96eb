"""Tests for medistore.config module."""

import tomllib

import pytest

from medistore.config import StoreConfig, generate_config, load_config


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path, capsys):
        config = load_config(str(tmp_path / "nonexistent.toml"))
        assert config == StoreConfig()
        assert "not found" in capsys.readouterr().err

    def test_loads_toml_file(self, tmp_path):
        toml_path = tmp_path / "test.toml"
        toml_path.write_text("""
[storage]
path = "/var/lib/medistore/front-desk.db"

[seed]
enabled = false

[dashboard]
registration_field = "createdAt"
recent_activity_limit = 8
""")
        config = load_config(str(toml_path))
        assert config.db_path == "/var/lib/medistore/front-desk.db"
        assert config.seed_enabled is False
        assert config.registration_field == "createdAt"
        assert config.recent_activity_limit == 8

    def test_partial_config_preserves_defaults(self, tmp_path):
        toml_path = tmp_path / "partial.toml"
        toml_path.write_text('[storage]\npath = "other.db"\n')
        config = load_config(str(toml_path))
        assert config.db_path == "other.db"
        assert config.seed_enabled is True
        assert config.registration_field == "lastVisit"

    def test_empty_config(self, tmp_path):
        toml_path = tmp_path / "empty.toml"
        toml_path.write_text("")
        assert load_config(str(toml_path)) == StoreConfig()

    def test_invalid_registration_field(self, tmp_path):
        toml_path = tmp_path / "bad.toml"
        toml_path.write_text('[dashboard]\nregistration_field = "firstSeen"\n')
        with pytest.raises(ValueError, match="registration_field"):
            load_config(str(toml_path))


class TestGenerateConfig:
    def test_generated_file_is_valid_toml(self, tmp_path):
        out = str(tmp_path / "valid.toml")
        assert generate_config(config_path=out) == out
        with open(out, "rb") as f:
            data = tomllib.load(f)
        assert data["storage"]["path"] == "medistore.db"
        assert data["seed"]["enabled"] is True

    def test_round_trip(self, tmp_path):
        out = str(tmp_path / "custom.toml")
        custom = StoreConfig(db_path="ward.db", seed_enabled=False,
                             registration_field="createdAt", recent_activity_limit=3)
        generate_config(config_path=out, config=custom)
        assert load_config(out) == custom
