"""
Command line interface for PV Derating.

Usage:
    pv-derate [--stations FILE] [--output PATH] [--config FILE]
              [--decimals {3,4}] [--log-level LEVEL]

Exit codes:
    0  report written
    1  report could not be written
    2  station data or configuration could not be loaded
"""

import argparse
import logging
from dataclasses import replace
from typing import List, Optional

from .data_input.stations import StationDataError, load_builtin_dataset, load_station_file
from .exports.csv_export import ReportExportError
from .pipeline import run_station_report
from .utils.config import ConfigurationError, load_config
from .utils.constants import ALLOWED_DECIMALS
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pv-derate",
        description="Rank PV stations by temperature-derated cell efficiency",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--stations",
        type=str,
        default=None,
        help="YAML or CSV station file (default: built-in station network)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="CSV report path (default: results.csv)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file (default: config/pv_derating.yaml)",
    )
    parser.add_argument(
        "--decimals",
        type=int,
        choices=ALLOWED_DECIMALS,
        default=None,
        help="Decimal places in the report",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the station efficiency report."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)

    try:
        config = load_config(args.config)
        stations_file = args.stations or config.stations_file
        if stations_file:
            dataset = load_station_file(stations_file)
        else:
            dataset = load_builtin_dataset()
    except (ConfigurationError, StationDataError) as e:
        logger.error(str(e))
        return EXIT_BAD_INPUT

    technology = config.resolve_technology(dataset.technology)
    dataset = replace(dataset, technology=technology)
    params = config.model_parameters(technology)

    output = args.output or config.output_file
    decimals = args.decimals or config.decimals

    try:
        run_station_report(dataset, output, params=params, decimals=decimals)
    except ReportExportError as e:
        logger.error(str(e))
        return EXIT_WRITE_FAILED

    return EXIT_OK
