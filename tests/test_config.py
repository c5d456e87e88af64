"""
Tests for configuration management.
"""

import json
import logging

import pytest

from sparse_pga.utils.config import Config, get_config, load_config, save_config, set_config


class TestConfig:
    """Tests for the Config dataclass."""

    def test_defaults(self):
        config = Config()
        assert config.print_precision == 7
        assert config.default_backend == 'float'
        assert config.atol == 1e-6

    def test_to_dict_from_dict(self):
        config = Config(print_precision=4, default_backend='torch')
        restored = Config.from_dict(config.to_dict())
        assert restored == config

    def test_unknown_keys_go_to_extra(self):
        config = Config.from_dict({'atol': 1e-3, 'experiment': 'rotors'})
        assert config.atol == 1e-3
        assert config.extra == {'experiment': 'rotors'}

    def test_update_returns_new_config(self):
        config = Config()
        updated = config.update(rtol=0.1)
        assert updated.rtol == 0.1
        assert config.rtol != 0.1

    def test_invalid_precision(self):
        with pytest.raises(ValueError, match="print_precision"):
            Config(print_precision=0)

    def test_invalid_tolerance(self):
        with pytest.raises(ValueError, match="Tolerances"):
            Config(atol=-1.0)


class TestConfigFiles:
    """Tests for JSON load/save."""

    def test_round_trip(self, tmp_path):
        config = Config(print_precision=5, extra={'note': 'x'})
        path = tmp_path / 'nested' / 'config.json'
        save_config(config, str(path))
        assert json.loads(path.read_text())['print_precision'] == 5
        assert load_config(str(path)) == config

    def test_load_logs(self, tmp_path, caplog):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'atol': 0.5}))
        with caplog.at_level(logging.INFO, logger='sparse_pga.utils.config'):
            config = load_config(str(path))
        assert config.atol == 0.5
        assert any('Loaded configuration' in m for m in caplog.messages)


class TestDefaultConfig:
    """Tests for the process-wide configuration."""

    def test_set_config_overrides(self):
        set_config(atol=0.25)
        assert get_config().atol == 0.25

    def test_set_config_replaces(self):
        config = Config(print_precision=3)
        assert set_config(config) is config
        assert get_config() is config
