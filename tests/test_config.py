"""
Configuration Tests for PV Derating.

Tests cover:
- Defaults without a configuration file
- YAML configuration files
- Environment variable overrides
- Invalid configuration handling
"""

import pytest

from pv_derating.calculations.efficiency_model import ModelParameters
from pv_derating.utils.config import AppConfig, ConfigurationError, load_config
from pv_derating.utils.constants import CELL_TECHNOLOGIES, CellTechnology


class TestDefaults:
    """Test configuration defaults."""

    def test_no_file(self, temp_dir, monkeypatch):
        """Without a file the reference scenario is used."""
        monkeypatch.chdir(temp_dir)
        config = load_config()

        assert config.technology is None
        assert config.model_parameters() == ModelParameters()
        assert config.decimals == 4
        assert config.output_file.name == "results.csv"
        assert config.stations_file is None

    def test_technology_fallback(self):
        """A fallback technology is used when none is configured."""
        config = AppConfig()
        params = config.model_parameters(CELL_TECHNOLOGIES["CdTe"])

        assert params.reference_efficiency == pytest.approx(0.175)

    def test_configured_technology_wins(self):
        """A configured technology takes precedence over the fallback."""
        config = AppConfig(technology=CELL_TECHNOLOGIES["HJT"])

        assert config.resolve_technology(CELL_TECHNOLOGIES["a-Si"]).name.startswith("Silicon heterojunction")

    def test_explicit_reference_efficiency_wins(self):
        """An explicit reference efficiency ignores the technology."""
        config = AppConfig(technology=CELL_TECHNOLOGIES["a-Si"], reference_efficiency=0.2)

        assert config.model_parameters().reference_efficiency == 0.2


class TestYamlConfig:
    """Test loading YAML configuration files."""

    def test_full_file(self, temp_dir):
        """All sections are read."""
        path = temp_dir / "config.yaml"
        path.write_text(
            "technology: poly-Si\n"
            "model:\n"
            "  reference_temperature: 20.0\n"
            "  temperature_coefficient: 0.004\n"
            "  irradiance: 800\n"
            "  area: 1.6\n"
            "report:\n"
            "  output_file: out/report.csv\n"
            "  decimals: 3\n"
            "  stations_file: stations.yaml\n",
            encoding="utf-8",
        )
        config = load_config(str(path))
        params = config.model_parameters()

        assert params.reference_efficiency == pytest.approx(0.17)
        assert params.reference_temperature == 20.0
        assert params.temperature_coefficient == 0.004
        assert params.irradiance == 800.0
        assert params.area == 1.6
        assert config.decimals == 3
        assert str(config.output_file) == "out/report.csv"
        assert config.stations_file.name == "stations.yaml"

    def test_custom_technology_mapping(self, temp_dir):
        """Technology can be given as a mapping."""
        path = temp_dir / "config.yaml"
        path.write_text(
            "technology:\n  name: Perovskite tandem\n  eta_min: 26.0\n  eta_max: 30.0\n",
            encoding="utf-8",
        )
        config = load_config(str(path))

        assert config.technology == CellTechnology("Perovskite tandem", 26.0, 30.0)
        assert config.model_parameters().reference_efficiency == pytest.approx(0.28)

    def test_default_path_is_used(self, temp_dir, monkeypatch):
        """config/pv_derating.yaml in the working directory is picked up."""
        (temp_dir / "config").mkdir()
        (temp_dir / "config" / "pv_derating.yaml").write_text(
            "model:\n  area: 2.5\n", encoding="utf-8"
        )
        monkeypatch.chdir(temp_dir)

        assert load_config().area == 2.5

    def test_missing_explicit_file(self, temp_dir):
        """A missing explicit file is an error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(str(temp_dir / "missing.yaml"))

    def test_unknown_technology(self, temp_dir):
        """Unknown technology keys are rejected."""
        path = temp_dir / "config.yaml"
        path.write_text("technology: unobtainium\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Unknown technology"):
            load_config(str(path))

    def test_invalid_yaml(self, temp_dir):
        """Malformed YAML is reported as a configuration error."""
        path = temp_dir / "config.yaml"
        path.write_text("model: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_invalid_decimals(self, temp_dir):
        """Unsupported precision is rejected."""
        path = temp_dir / "config.yaml"
        path.write_text("report:\n  decimals: 6\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="decimals"):
            load_config(str(path))

    def test_non_numeric_value(self, temp_dir):
        """Non-numeric model values are rejected."""
        path = temp_dir / "config.yaml"
        path.write_text("model:\n  irradiance: bright\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid configuration value"):
            load_config(str(path))


class TestEnvironmentOverrides:
    """Test PV_DERATE_* environment variables."""

    def test_model_overrides(self, temp_dir, monkeypatch):
        """Environment variables override file values."""
        path = temp_dir / "config.yaml"
        path.write_text("model:\n  irradiance: 800\n", encoding="utf-8")
        monkeypatch.setenv("PV_DERATE_IRRADIANCE", "950")
        monkeypatch.setenv("PV_DERATE_REFERENCE_EFFICIENCY", "0.19")

        params = load_config(str(path)).model_parameters()

        assert params.irradiance == 950.0
        assert params.reference_efficiency == 0.19

    def test_report_overrides(self, temp_dir, monkeypatch):
        """Report settings can be overridden."""
        monkeypatch.chdir(temp_dir)
        monkeypatch.setenv("PV_DERATE_OUTPUT", "ranked.csv")
        monkeypatch.setenv("PV_DERATE_DECIMALS", "3")
        monkeypatch.setenv("PV_DERATE_TECHNOLOGY", "CIGS")

        config = load_config()

        assert config.output_file.name == "ranked.csv"
        assert config.decimals == 3
        assert config.model_parameters().reference_efficiency == pytest.approx(0.16)


class TestLogging:
    """Test logging setup."""

    def test_json_file_logging(self, temp_dir):
        """JSON records are written to the log file."""
        import json
        import logging

        from pv_derating.utils.logging_config import get_calc_logger, setup_logging

        log_file = temp_dir / "logs" / "run.log"
        setup_logging(
            log_level="DEBUG",
            log_file=str(log_file),
            log_format="json",
            enable_console=False,
        )
        get_calc_logger().warning("Only the first 3 entries will be paired.")

        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["level"] == "WARNING"
        assert record["logger"] == "pv_derating.calculations"
        assert record["message"] == "Only the first 3 entries will be paired."

    def test_log_level_names(self):
        """Level names map to logging constants, defaulting to INFO."""
        import logging

        from pv_derating.utils.logging_config import get_log_level

        assert get_log_level("debug") == logging.DEBUG
        assert get_log_level("ERROR") == logging.ERROR
        assert get_log_level("verbose") == logging.INFO

    def test_console_format(self):
        """Console output shows bare info lines and prefixed warnings."""
        import logging

        from pv_derating.utils.logging_config import ConsoleFormatter

        formatter = ConsoleFormatter()
        info = logging.LogRecord(
            "pv_derating.exports", logging.INFO, __file__, 1,
            "Results saved in 'results.csv'", None, None,
        )
        warning = logging.LogRecord(
            "pv_derating.calculations", logging.WARNING, __file__, 1,
            "Only the first 1 entries will be paired.", None, None,
        )

        assert formatter.format(info) == "Results saved in 'results.csv'"
        assert formatter.format(warning) == "WARNING: Only the first 1 entries will be paired."

    def test_console_color(self):
        """Colour codes wrap only the level prefix."""
        import logging

        from pv_derating.utils.logging_config import ConsoleFormatter

        record = logging.LogRecord(
            "pv_derating", logging.ERROR, __file__, 1, "Could not write", None, None,
        )
        text = ConsoleFormatter(use_color=True).format(record)

        assert text == "\033[31mERROR:\033[0m Could not write"

    def test_text_file_logging(self, temp_dir):
        """Text log files carry timestamps, logger names and levels."""
        import logging

        from pv_derating.utils.logging_config import get_data_logger, setup_logging

        log_file = temp_dir / "run.log"
        setup_logging(log_level="INFO", log_file=str(log_file), enable_console=False)
        get_data_logger().info("Loaded 3 stations")

        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").splitlines()[-1]
        assert line.endswith(" - pv_derating.data_input - INFO - Loaded 3 stations")
