"""
Configuration management for PV Derating.

Handles loading the model parameters and run settings from YAML files
and environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from ..calculations.efficiency_model import ModelParameters
from .constants import (
    ALLOWED_DECIMALS,
    CELL_TECHNOLOGIES,
    DEFAULT_AREA,
    DEFAULT_DECIMALS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_TECHNOLOGY_KEY,
    DEFAULT_TEMPERATURE_COEFFICIENT,
    STC_IRRADIANCE,
    STC_TEMPERATURE,
    CellTechnology,
)

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_PATH = "config/pv_derating.yaml"


class ConfigurationError(Exception):
    """Exception raised for invalid configuration files or values."""
    pass


def _parse_technology(value: Any) -> CellTechnology:
    if isinstance(value, CellTechnology):
        return value
    if isinstance(value, str):
        if value not in CELL_TECHNOLOGIES:
            raise ConfigurationError(
                f"Unknown technology '{value}'. Known: {sorted(CELL_TECHNOLOGIES)}"
            )
        return CELL_TECHNOLOGIES[value]
    if isinstance(value, dict):
        try:
            return CellTechnology(
                name=str(value["name"]),
                eta_min=float(value["eta_min"]),
                eta_max=float(value["eta_max"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid technology definition: {e}") from e
    raise ConfigurationError(f"Invalid technology definition: {value!r}")


@dataclass
class AppConfig:
    """Main application configuration."""

    # Cell technology; its mean efficiency is the reference efficiency
    # unless reference_efficiency is set explicitly
    technology: Optional[CellTechnology] = None
    reference_efficiency: Optional[float] = None
    reference_temperature: float = STC_TEMPERATURE             # °C
    temperature_coefficient: float = DEFAULT_TEMPERATURE_COEFFICIENT  # 1/°C
    irradiance: float = STC_IRRADIANCE                         # W/m²
    area: float = DEFAULT_AREA                                 # m²

    # Report settings
    output_file: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_FILE))
    decimals: int = DEFAULT_DECIMALS
    stations_file: Optional[Path] = None

    def __post_init__(self):
        if self.decimals not in ALLOWED_DECIMALS:
            raise ConfigurationError(
                f"decimals must be one of {ALLOWED_DECIMALS}, got {self.decimals}"
            )

    def resolve_technology(
        self,
        fallback: Optional[CellTechnology] = None,
    ) -> CellTechnology:
        """
        Pick the cell technology of a run.

        Args:
            fallback: Technology to use when none is configured, e.g. the
                one shipped with a station dataset

        Returns:
            Configured technology, else fallback, else monocrystalline Si
        """
        return self.technology or fallback or CELL_TECHNOLOGIES[DEFAULT_TECHNOLOGY_KEY]

    def model_parameters(
        self,
        fallback_technology: Optional[CellTechnology] = None,
    ) -> ModelParameters:
        """Build the efficiency model parameters for this configuration."""
        eta_ref = self.reference_efficiency
        if eta_ref is None:
            eta_ref = self.resolve_technology(fallback_technology).reference_efficiency

        return ModelParameters(
            reference_efficiency=eta_ref,
            reference_temperature=self.reference_temperature,
            temperature_coefficient=self.temperature_coefficient,
            irradiance=self.irradiance,
            area=self.area,
        )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary."""
        model = config_dict.get("model", {}) or {}
        report = config_dict.get("report", {}) or {}

        technology = config_dict.get("technology")

        try:
            eta_ref = model.get("reference_efficiency")
            stations_file = report.get("stations_file")
            return cls(
                technology=_parse_technology(technology) if technology is not None else None,
                reference_efficiency=float(eta_ref) if eta_ref is not None else None,
                reference_temperature=float(
                    model.get("reference_temperature", STC_TEMPERATURE)
                ),
                temperature_coefficient=float(
                    model.get("temperature_coefficient", DEFAULT_TEMPERATURE_COEFFICIENT)
                ),
                irradiance=float(model.get("irradiance", STC_IRRADIANCE)),
                area=float(model.get("area", DEFAULT_AREA)),
                output_file=Path(report.get("output_file", DEFAULT_OUTPUT_FILE)),
                decimals=int(report.get("decimals", DEFAULT_DECIMALS)),
                stations_file=Path(stations_file) if stations_file else None,
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_path: Optional path to configuration file.
                    Defaults to config/pv_derating.yaml if it exists.

    Returns:
        AppConfig instance with loaded configuration

    Raises:
        ConfigurationError: If an explicitly given file is missing or
            the file contents are invalid
    """
    config_dict: Dict[str, Any] = {}

    explicit = config_path is not None
    config_file = Path(config_path or DEFAULT_CONFIG_PATH)

    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {config_file}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Could not read {config_file}: {e}") from e
        if not isinstance(config_dict, dict):
            raise ConfigurationError(f"{config_file}: expected a mapping at top level")
    elif explicit:
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    # Override with environment variables
    model_env_mappings = {
        "PV_DERATE_REFERENCE_EFFICIENCY": "reference_efficiency",
        "PV_DERATE_REFERENCE_TEMPERATURE": "reference_temperature",
        "PV_DERATE_TEMPERATURE_COEFFICIENT": "temperature_coefficient",
        "PV_DERATE_IRRADIANCE": "irradiance",
        "PV_DERATE_AREA": "area",
    }
    report_env_mappings = {
        "PV_DERATE_OUTPUT": "output_file",
        "PV_DERATE_DECIMALS": "decimals",
        "PV_DERATE_STATIONS_FILE": "stations_file",
    }

    model = dict(config_dict.get("model") or {})
    for env_var, config_key in model_env_mappings.items():
        if env_var in os.environ:
            model[config_key] = os.environ[env_var]

    report = dict(config_dict.get("report") or {})
    for env_var, config_key in report_env_mappings.items():
        if env_var in os.environ:
            report[config_key] = os.environ[env_var]

    if "PV_DERATE_TECHNOLOGY" in os.environ:
        config_dict["technology"] = os.environ["PV_DERATE_TECHNOLOGY"]

    config_dict["model"] = model
    config_dict["report"] = report

    return AppConfig.from_dict(config_dict)
