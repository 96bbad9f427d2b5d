"""
Unit tests for ledger configuration.
"""

import json
from decimal import Decimal

import pytest

from powledger.config import LedgerConfig, DEFAULT_DIFFICULTY
from powledger.exceptions import ConfigError


class TestLedgerConfig:
    """Tests for LedgerConfig."""

    def test_defaults(self):
        config = LedgerConfig.default()
        assert config.difficulty == DEFAULT_DIFFICULTY == 10
        assert config.block_reward == Decimal("10.0")
        assert config.seed is None
        assert config.key_size == 2048

    def test_reward_coerced(self):
        assert LedgerConfig(block_reward=2.5).block_reward == Decimal("2.5")
        assert LedgerConfig(block_reward="3").block_reward == Decimal("3")

    @pytest.mark.parametrize("kwargs", [
        {'difficulty': 0},
        {'difficulty': 257},
        {'block_reward': -1},
        {'block_reward': "abc"},
        {'key_size': 512},
        {'progress_interval': 0},
        {'difficulty': 4.5},
        {'difficulty': "8"},
        {'difficulty': True},
        {'key_size': "2048"},
        {'progress_interval': 1.5},
        {'seed': "abc"},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigError):
            LedgerConfig(**kwargs)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            LedgerConfig(difficulty=0)

    def test_from_env(self):
        config = LedgerConfig.from_env({
            'POWLEDGER_DIFFICULTY': '6',
            'POWLEDGER_BLOCK_REWARD': '12.5',
            'POWLEDGER_SEED': '99',
            'POWLEDGER_PROGRESS_INTERVAL': '',
        })
        assert config.difficulty == 6
        assert config.block_reward == Decimal("12.5")
        assert config.seed == 99
        assert config.progress_interval == 1000

    def test_from_env_empty(self):
        assert LedgerConfig.from_env({}) == LedgerConfig()

    def test_from_env_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv('POWLEDGER_DIFFICULTY', '7')
        assert LedgerConfig.from_env().difficulty == 7

    def test_from_env_invalid(self):
        with pytest.raises(ConfigError):
            LedgerConfig.from_env({'POWLEDGER_DIFFICULTY': 'hard'})
        with pytest.raises(ConfigError):
            LedgerConfig.from_env({'POWLEDGER_BLOCK_REWARD': 'lots'})

    def test_file_roundtrip(self, tmp_path):
        path = tmp_path / "ledger.json"
        original = LedgerConfig(difficulty=5, block_reward=Decimal("1.5"), seed=3)
        path.write_text(json.dumps(original.to_dict()))

        assert LedgerConfig.from_file(str(path)) == original

    def test_file_unknown_key(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps({'difficulty': 5, 'peers': []}))
        with pytest.raises(ConfigError):
            LedgerConfig.from_file(str(path))

    def test_file_wrong_type(self, tmp_path):
        """A string difficulty in JSON is a config error."""
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps({'difficulty': "8"}))
        with pytest.raises(ConfigError):
            LedgerConfig.from_file(str(path))

    def test_file_malformed_json(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("{difficulty: 8")
        with pytest.raises(ConfigError):
            LedgerConfig.from_file(str(path))

    def test_file_not_an_object(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("[8]")
        with pytest.raises(ConfigError):
            LedgerConfig.from_file(str(path))
