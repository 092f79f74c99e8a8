"""
Station efficiency report builder.

Pairs stations with their cell temperatures, evaluates the efficiency
model for each station and ranks the stations by efficiency.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..data_input.stations import StationSample
from ..data_input.validation import check_paired_lengths
from ..utils.logging_config import get_calc_logger
from .efficiency_model import ModelParameters, compute_efficiency

logger = get_calc_logger()


@dataclass(frozen=True)
class ResultRow:
    """Efficiency and power of one station."""

    station: str
    cell_temperature: float  # °C
    efficiency: float        # fraction, >= 0
    power: float             # W


@dataclass
class EfficiencyReport:
    """
    Stations ranked by efficiency, highest first.

    Rows with exactly equal efficiency keep their input order.
    """

    rows: Tuple[ResultRow, ...]
    params: ModelParameters
    warnings: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def efficiencies(self) -> np.ndarray:
        """Efficiency fractions in report order."""
        return np.array([r.efficiency for r in self.rows], dtype=float)

    @property
    def powers(self) -> np.ndarray:
        """Power output (W) in report order."""
        return np.array([r.power for r in self.rows], dtype=float)

    @property
    def cell_temperatures(self) -> np.ndarray:
        """Cell temperatures (°C) in report order."""
        return np.array([r.cell_temperature for r in self.rows], dtype=float)

    @property
    def stations(self) -> List[str]:
        """Station names in report order."""
        return [r.station for r in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert to a DataFrame with one row per station.

        Returns:
            DataFrame with station, cell_temperature, efficiency and power
            columns in report order
        """
        return pd.DataFrame(
            {
                "station": self.stations,
                "cell_temperature": self.cell_temperatures,
                "efficiency": self.efficiencies,
                "power": self.powers,
            }
        )

    def summary(self) -> Dict[str, float]:
        """Basic statistics over the report rows."""
        if not self.rows:
            return {"count": 0}

        eff = self.efficiencies
        return {
            "count": len(self.rows),
            "best_station": self.rows[0].station,
            "worst_station": self.rows[-1].station,
            "max_efficiency": float(eff.max()),
            "min_efficiency": float(eff.min()),
            "mean_efficiency": float(eff.mean()),
            "total_power": float(self.powers.sum()),
        }


def build_row(sample: StationSample, params: ModelParameters) -> ResultRow:
    """Evaluate the efficiency model for a single station."""
    efficiency, power = compute_efficiency(sample.mean_temperature, params)
    return ResultRow(
        station=sample.name,
        cell_temperature=float(sample.mean_temperature),
        efficiency=efficiency,
        power=power,
    )


def rank_rows(rows: Sequence[ResultRow]) -> Tuple[ResultRow, ...]:
    """Sort rows by efficiency, highest first; ties keep input order."""
    return tuple(sorted(rows, key=lambda r: r.efficiency, reverse=True))


def build_report(
    samples: Sequence[StationSample],
    params: Optional[ModelParameters] = None,
    warnings: Optional[List[str]] = None,
) -> EfficiencyReport:
    """
    Build an efficiency report from paired station samples.

    Args:
        samples: Stations with their cell temperatures
        params: Model parameters (uses defaults if None)
        warnings: Warnings already recorded for these inputs

    Returns:
        EfficiencyReport sorted by efficiency, highest first
    """
    params = params or ModelParameters()
    rows = [build_row(sample, params) for sample in samples]

    report = EfficiencyReport(
        rows=rank_rows(rows),
        params=params,
        warnings=list(warnings or []),
    )
    logger.debug(f"Built efficiency report for {len(report)} stations")
    return report


def build_report_from_arrays(
    names: Sequence[str],
    temperatures: Sequence[float],
    params: Optional[ModelParameters] = None,
) -> EfficiencyReport:
    """
    Build an efficiency report from parallel name and temperature sequences.

    Entries are paired by index. If the sequences differ in length only the
    first min(len(names), len(temperatures)) pairs are used and a warning is
    logged and recorded on the report.

    Args:
        names: Station names
        temperatures: Cell temperatures (°C), same order as names
        params: Model parameters (uses defaults if None)

    Returns:
        EfficiencyReport sorted by efficiency, highest first
    """
    check = check_paired_lengths(names, temperatures)
    for message in check.warnings:
        logger.warning(message)

    samples = [
        StationSample(str(names[i]), float(temperatures[i]))
        for i in range(check.usable_count)
    ]
    return build_report(samples, params, warnings=check.warnings)
