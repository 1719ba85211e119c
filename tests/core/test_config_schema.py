"""Tests for ratesense.core.config_schema and Config.validated()."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from ratesense.core.config import Config
from ratesense.core.config_schema import LoggingConfig, PathsConfig, RateSenseConfig
from ratesense.core.exceptions import ConfigurationError


@pytest.mark.smoke
class TestConfigSchema:
    def test_valid_config_roundtrip(self):
        data = {
            "paths": {"data_dir": "/tmp/test-data", "export_dir": "/tmp/test-exports"},
            "logging": {"level": "info", "file": "/tmp/ratesense.log"},
            "calculator": {"rate_deltas": [0, 0.5, 1.5], "table_rows": 12},
            "stress": {"arm_fixed_years": 7, "arm_adjust_every_months": 6},
        }
        cfg = RateSenseConfig.model_validate(data)
        assert cfg.paths.data_dir == Path("/tmp/test-data")
        assert cfg.paths.export_dir == Path("/tmp/test-exports")
        assert cfg.logging.level == "INFO"
        assert cfg.calculator.rate_deltas == [0.0, 0.5, 1.5]
        assert cfg.calculator.table_rows == 12
        assert cfg.stress.arm_fixed_years == 7.0
        assert cfg.stress.arm_adjust_every_months == 6

    def test_defaults_populate(self):
        cfg = RateSenseConfig()
        assert cfg.paths.data_dir is not None
        assert cfg.logging.level == "WARNING"
        assert cfg.calculator.rate_deltas == [0.0, 0.25, 0.5, 1.0]
        assert cfg.calculator.table_rows == 36
        assert cfg.stress.arm_fixed_years == 5.0

    def test_path_expansion(self):
        cfg = RateSenseConfig.model_validate({"paths": {"data_dir": "~/.ratesense-data"}})
        assert "~" not in str(cfg.paths.data_dir)
        assert cfg.paths.data_dir == Path.home() / ".ratesense-data"

    def test_rate_deltas_from_string(self):
        cfg = RateSenseConfig.model_validate({"calculator": {"rate_deltas": "0, 0.25,1"}})
        assert cfg.calculator.rate_deltas == [0.0, 0.25, 1.0]

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")

    def test_bad_table_rows(self):
        with pytest.raises(ValidationError):
            RateSenseConfig.model_validate({"calculator": {"table_rows": "lots"}})

    def test_extra_sections_allowed(self):
        cfg = RateSenseConfig.model_validate({"custom": {"anything": 1}})
        assert cfg.model_extra["custom"] == {"anything": 1}


class TestValidated:
    def test_validated_from_file(self, tmp_config_file):
        cfg = Config(config_file=tmp_config_file).validated()
        assert isinstance(cfg, RateSenseConfig)
        assert cfg.calculator.rate_deltas == [0.0, 0.5]
        assert cfg.calculator.table_rows == 6

    def test_validated_env_strings_are_coerced(self, tmp_dir, monkeypatch):
        monkeypatch.setenv("RATESENSE_CALCULATOR__TABLE_ROWS", "24")
        monkeypatch.setenv("RATESENSE_CALCULATOR__RATE_DELTAS", "0,1,2")
        cfg = Config(data_dir=tmp_dir).validated()
        assert cfg.calculator.table_rows == 24
        assert cfg.calculator.rate_deltas == [0.0, 1.0, 2.0]

    def test_invalid_raises_configuration_error(self, tmp_dir, monkeypatch):
        monkeypatch.setenv("RATESENSE_LOGGING__LEVEL", "loud")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            Config(data_dir=tmp_dir).validated()


class TestPathPlacement:
    def test_bare_name_goes_under_export_dir(self, tmp_dir):
        paths = PathsConfig(data_dir=tmp_dir, export_dir=os.path.join(tmp_dir, "exports"))
        assert paths.export_path("s.csv") == os.path.join(tmp_dir, "exports", "s.csv")

    def test_paths_with_directory_are_kept(self, tmp_dir):
        paths = PathsConfig(data_dir=tmp_dir, export_dir=os.path.join(tmp_dir, "exports"))
        assert paths.export_path(os.path.join("sub", "s.csv")) == os.path.join("sub", "s.csv")
        absolute = os.path.join(tmp_dir, "elsewhere.csv")
        assert paths.export_path(absolute) == absolute

    def test_no_export_dir(self, tmp_dir):
        assert PathsConfig(data_dir=tmp_dir).export_path("s.csv") == "s.csv"

    def test_log_path(self, tmp_dir):
        paths = PathsConfig(data_dir=tmp_dir, log_dir=os.path.join(tmp_dir, "logs"))
        assert paths.log_path("ratesense.log") == os.path.join(tmp_dir, "logs", "ratesense.log")
        assert paths.log_path("/var/log/rs.log") == "/var/log/rs.log"
        assert PathsConfig(data_dir=tmp_dir).log_path("rs.log") == "rs.log"
