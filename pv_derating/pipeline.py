"""
End-to-end station efficiency runs.

Combines the report builder and the CSV exporter: compute the ranked
report in memory, then write it to disk.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .calculations.efficiency_model import ModelParameters
from .calculations.report_builder import EfficiencyReport, build_report_from_arrays
from .data_input.stations import StationDataset
from .exports.csv_export import CSVReportWriter
from .utils.constants import DEFAULT_DECIMALS
from .utils.logging_config import get_logger

logger = get_logger(__name__)


def log_banner(params: ModelParameters, technology_name: Optional[str] = None) -> None:
    """Log the technology and model parameters of a run."""
    logger.info("Automatic PV simulation with CSV export")
    if technology_name:
        logger.info(f"Technology: {technology_name}")
    logger.info(params.describe())


def run_station_report(
    dataset: StationDataset,
    output_path: Union[str, Path],
    params: Optional[ModelParameters] = None,
    decimals: int = DEFAULT_DECIMALS,
) -> EfficiencyReport:
    """
    Compute and export the efficiency report of a station dataset.

    When no parameters are given they are derived from the dataset's
    technology, or the defaults if it has none.

    Args:
        dataset: Stations and temperatures
        output_path: CSV file to write
        params: Model parameters
        decimals: Decimal places in the CSV

    Returns:
        The report that was written

    Raises:
        ReportExportError: If the CSV cannot be written; the computed
            report is available on the exception
    """
    writer = CSVReportWriter(decimals=decimals)

    if params is None:
        if dataset.technology is not None:
            params = ModelParameters.from_technology(dataset.technology)
        else:
            params = ModelParameters()

    log_banner(params, dataset.technology.name if dataset.technology else None)

    report = build_report_from_arrays(dataset.names, dataset.temperatures, params)
    writer.write(report, output_path)
    return report


def compute_station_efficiencies(
    temperatures: Sequence[float],
    stations: Sequence[str],
    filename: Union[str, Path],
    params: Optional[ModelParameters] = None,
    decimals: int = DEFAULT_DECIMALS,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, List[str]]:
    """
    Rank stations by efficiency, write the CSV and return parallel vectors.

    Args:
        temperatures: Mean cell temperature per station (°C)
        stations: Station names, same order as temperatures
        filename: CSV file to write
        params: Model parameters (uses defaults if None)
        decimals: Decimal places in the CSV

    Returns:
        Tuple of (efficiency, power, cell temperature, station names), all
        sorted by efficiency, highest first

    Raises:
        ReportExportError: If the CSV cannot be written
    """
    dataset = StationDataset(tuple(stations), tuple(float(t) for t in temperatures))
    report = run_station_report(
        dataset,
        filename,
        params=params or ModelParameters(),
        decimals=decimals,
    )
    return report.efficiencies, report.powers, report.cell_temperatures, report.stations
