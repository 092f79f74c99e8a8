"""
Reference constants for PV thermal derating.

This module contains the standard test conditions, default model
coefficients, report layout and common cell technology presets used
throughout the package.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


# =============================================================================
# Standard Test Conditions
# =============================================================================

STC_IRRADIANCE: float = 1000.0   # W/m²
STC_TEMPERATURE: float = 25.0    # °C

# Linear temperature coefficient of efficiency (1/°C), typical for c-Si
DEFAULT_TEMPERATURE_COEFFICIENT: float = 0.0045

# Module area used when none is given (m²)
DEFAULT_AREA: float = 1.0

# Reference efficiency (fraction) of the default technology
DEFAULT_REFERENCE_EFFICIENCY: float = 0.21


# =============================================================================
# Cell Technologies
# =============================================================================

@dataclass(frozen=True)
class CellTechnology:
    """
    PV cell technology descriptor.

    Attributes:
        name: Technology name
        eta_min: Lower bound of typical commercial efficiency (%)
        eta_max: Upper bound of typical commercial efficiency (%)
    """
    name: str
    eta_min: float
    eta_max: float

    @property
    def reference_efficiency(self) -> float:
        """Mean of the efficiency range, as a fraction."""
        return ((self.eta_min + self.eta_max) / 2.0) / 100.0


MONOCRYSTALLINE = CellTechnology(
    name="Monocrystalline silicon (PERC, TOPCon)",
    eta_min=18.0,
    eta_max=24.0,
)

CELL_TECHNOLOGIES: Dict[str, CellTechnology] = {
    "mono-Si": MONOCRYSTALLINE,
    "poly-Si": CellTechnology("Polycrystalline silicon", 15.0, 19.0),
    "HJT": CellTechnology("Silicon heterojunction (HJT)", 21.0, 25.0),
    "CdTe": CellTechnology("Cadmium telluride thin film", 16.0, 19.0),
    "CIGS": CellTechnology("Copper indium gallium selenide thin film", 14.0, 18.0),
    "a-Si": CellTechnology("Amorphous silicon thin film", 6.0, 9.0),
}

DEFAULT_TECHNOLOGY_KEY: str = "mono-Si"


# =============================================================================
# CSV Report Layout
# =============================================================================

CSV_DELIMITER: str = ";"
CSV_ENCODING: str = "utf-8"

CSV_COLUMNS: List[str] = [
    "Index",
    "Station",
    "Tcell(°C)",
    "Efficiency(%)",
    "Power(W)",
]

# Decimal places allowed for the numeric report columns
ALLOWED_DECIMALS: Tuple[int, ...] = (3, 4)
DEFAULT_DECIMALS: int = 4

DEFAULT_OUTPUT_FILE: str = "results.csv"
