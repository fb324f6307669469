"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tradeledger.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DB_PATH,
    AppConfig,
    config_path,
    load_config,
)


class TestLoadConfig:
    """Reading settings from TOML."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")
        assert config == AppConfig()
        assert config.db_path == DEFAULT_DB_PATH
        assert config.daily_trade_limit == 4
        assert config.currency_symbol == "$"

    def test_reads_all_sections(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[storage]\n"
            f'db_path = "{tmp_path / "data" / "ledger.db"}"\n'
            'namespace = "alice"\n'
            "\n"
            "[ledger]\n"
            "daily_trade_limit = 3\n"
            "\n"
            "[display]\n"
            'currency_symbol = "€"\n',
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.db_path == tmp_path / "data" / "ledger.db"
        assert config.namespace == "alice"
        assert config.daily_trade_limit == 3
        assert config.currency_symbol == "€"

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[ledger]\ndaily_trade_limit = 2\n")

        config = load_config(path)

        assert config.daily_trade_limit == 2
        assert config.namespace == "default"
        assert config.db_path == DEFAULT_DB_PATH

    def test_unreadable_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[storage\nnot = toml = at all")
        assert load_config(path) == AppConfig()

    @pytest.mark.parametrize("value", ["0", "6", "\"x\""])
    def test_invalid_trade_limit_falls_back(self, tmp_path, value: str):
        path = tmp_path / "config.toml"
        path.write_text(
            "[storage]\n"
            'namespace = "alice"\n'
            "\n"
            "[ledger]\n"
            f"daily_trade_limit = {value}\n"
        )

        config = load_config(path)

        assert config.daily_trade_limit == 4
        assert config.namespace == "alice"


class TestConfigPath:
    """Locating the config file."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_path() == DEFAULT_CONFIG_PATH

    def test_env_override(self, monkeypatch, tmp_path):
        target = tmp_path / "other.toml"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(target))
        assert config_path() == target

    def test_load_uses_env_override(self, monkeypatch, tmp_path):
        target = tmp_path / "other.toml"
        target.write_text('[storage]\nnamespace = "bob"\n')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(target))

        assert load_config().namespace == "bob"
        assert isinstance(load_config().db_path, Path)
