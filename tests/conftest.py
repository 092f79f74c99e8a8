"""
Pytest Configuration and Fixtures for PV Derating Tests.

This module provides shared fixtures and configuration for all tests.
"""

import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Generator, List

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pv_derating.calculations.efficiency_model import ModelParameters


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove configuration overrides and undo logging setup after each test."""
    for name in list(os.environ):
        if name.startswith("PV_DERATE_") or name in ("LOG_FILE", "LOG_FORMAT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# MODEL FIXTURES
# =============================================================================

@pytest.fixture
def default_params() -> ModelParameters:
    """Default model parameters (mono-Si midpoint, STC)."""
    return ModelParameters()


@pytest.fixture
def scenario_params() -> ModelParameters:
    """Reference scenario: 21 %, 25 °C, 0.0045 1/°C, 1000 W/m², 1 m²."""
    return ModelParameters(
        reference_efficiency=0.21,
        reference_temperature=25.0,
        temperature_coefficient=0.0045,
        irradiance=1000.0,
        area=1.0,
    )


@pytest.fixture
def large_module_params() -> ModelParameters:
    """Parameters for a 1.92 m² module at reduced irradiance."""
    return ModelParameters(
        reference_efficiency=0.205,
        reference_temperature=25.0,
        temperature_coefficient=0.0035,
        irradiance=800.0,
        area=1.92,
    )


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_station_names() -> List[str]:
    """Station short names."""
    return ["COM", "ABO", "AIG", "ALT", "ANT", "ARO"]


@pytest.fixture
def sample_temperatures() -> List[float]:
    """Mean cell temperatures (°C) matching sample_station_names."""
    return [12.0160, 9.3685, 12.7916, 12.3780, 6.8380, 6.9369]


@pytest.fixture
def scenario_temperatures() -> List[float]:
    """Temperatures covering the reference, derated and clamped regimes."""
    return [25.0, 125.0, 500.0]


@pytest.fixture
def sample_yaml_stations(temp_dir: Path) -> Path:
    """YAML station file with a technology block."""
    path = temp_dir / "stations.yaml"
    path.write_text(
        "technology:\n"
        "  name: Polycrystalline silicon\n"
        "  eta_min: 15.0\n"
        "  eta_max: 19.0\n"
        "stations:\n"
        "  - {name: \"NORTH\", temperature: 8.5}\n"
        "  - {name: \"SOUTH\", temperature: 31.25}\n"
        "  - {name: \"EAST\", temperature: 17.0}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_csv_stations(temp_dir: Path) -> Path:
    """Semicolon-delimited CSV station file."""
    path = temp_dir / "stations.csv"
    path.write_text(
        "Station;Temperature\n"
        "BAS;13.7139\n"
        "BER;12.4287\n"
        "DAV;6.7853\n",
        encoding="utf-8",
    )
    return path


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def assert_sorted_descending(values) -> None:
    """Assert a sequence is non-increasing."""
    for a, b in zip(values, values[1:]):
        assert a >= b, f"{a} < {b}: not sorted by efficiency"


# Make helpers available as fixtures
@pytest.fixture
def assert_sorted():
    """Provide the ordering assertion to tests."""
    return assert_sorted_descending
