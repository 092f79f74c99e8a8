"""
Utilities module for PV Derating.

Modules:
    config: YAML and environment based configuration
    constants: Reference conditions, cell technologies and report layout
    logging_config: Application logging setup
"""

from .constants import (
    CELL_TECHNOLOGIES,
    STC_IRRADIANCE,
    STC_TEMPERATURE,
    CellTechnology,
)
from .logging_config import get_logger, setup_logging

__all__ = [
    "CELL_TECHNOLOGIES",
    "STC_IRRADIANCE",
    "STC_TEMPERATURE",
    "CellTechnology",
    "get_logger",
    "setup_logging",
]
