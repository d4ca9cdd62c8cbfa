"""
Tests for interpreter configuration and logging setup.
"""

import logging
import math
import textwrap

import pytest

from vectorcalc import InterpreterConfig, load_config, configure_logging, EPSILON


class TestInterpreterConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = InterpreterConfig()
        assert config.epsilon == EPSILON
        assert config.symmetric_equality is False
        assert config.guard_division is False
        assert config.max_errors == 20
        assert config.precision == 2
        assert config.log_level == "WARNING"

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            InterpreterConfig(epsilon=0)
        with pytest.raises(ValueError):
            InterpreterConfig(max_errors=0)
        with pytest.raises(ValueError):
            InterpreterConfig(precision=-1)
        with pytest.raises(ValueError):
            InterpreterConfig(log_level="LOUD")
        with pytest.raises(ValueError):
            InterpreterConfig(epsilon=math.nan)
        with pytest.raises(ValueError):
            InterpreterConfig(epsilon=math.inf)

    def test_from_dict_rejects_lossy_numbers(self):
        with pytest.raises(ValueError, match="whole number"):
            InterpreterConfig.from_dict({"precision": 2.5})
        with pytest.raises(ValueError):
            InterpreterConfig.from_dict({"max_errors": True})
        with pytest.raises(ValueError):
            InterpreterConfig.from_dict({"epsilon": True})
        with pytest.raises(ValueError):
            InterpreterConfig.from_dict({"epsilon": "nan"})

    def test_from_dict_accepts_whole_floats(self):
        config = InterpreterConfig.from_dict({"precision": 3.0, "max_errors": "5"})
        assert config.precision == 3
        assert isinstance(config.precision, int)
        assert config.max_errors == 5

    def test_log_level_normalized(self):
        assert InterpreterConfig(log_level="debug").log_level == "DEBUG"

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="tolerance"):
            InterpreterConfig.from_dict({"tolerance": 0.1})

    def test_from_dict_rejects_non_bool_switch(self):
        with pytest.raises(ValueError):
            InterpreterConfig.from_dict({"guard_division": "sometimes"})

    def test_round_trip_dict(self):
        config = InterpreterConfig(symmetric_equality=True, max_errors=5)
        assert InterpreterConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    """Test YAML configuration files."""

    def test_load(self, tmp_path):
        path = tmp_path / "vectorcalc.yaml"
        path.write_text(textwrap.dedent("""
            epsilon: 1e-3
            symmetric_equality: true
            max_errors: 3
            log_level: info
        """))
        config = load_config(path)
        assert config.epsilon == 0.001
        assert config.symmetric_equality is True
        assert config.max_errors == 3
        assert config.log_level == "INFO"
        assert config.guard_division is False

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == InterpreterConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("epsilon: [0.1\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_truncating_values_rejected(self, tmp_path):
        path = tmp_path / "lossy.yaml"
        path.write_text("precision: 2.7\nepsilon: true\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_bad_number(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("max_errors: lots\n")
        with pytest.raises(ValueError):
            load_config(path)


class TestLogging:

    def test_configure_logging_sets_package_level(self):
        logger = configure_logging(InterpreterConfig(log_level="DEBUG"))
        try:
            assert logger.name == "vectorcalc"
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(logging.NOTSET)
