"""
CSV export functionality for PV Derating.

Writes an efficiency report as a semicolon-delimited UTF-8 table:

    Index;Station;Tcell(°C);Efficiency(%);Power(W)
    1;<name>;<Tcell>;<efficiency * 100>;<power>

The report is first written to a temporary file next to the target and
then moved into place, so a failed export never leaves a partial file.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..calculations.report_builder import EfficiencyReport
from ..utils.constants import (
    ALLOWED_DECIMALS,
    CSV_COLUMNS,
    CSV_DELIMITER,
    CSV_ENCODING,
    DEFAULT_DECIMALS,
)
from ..utils.logging_config import get_export_logger

logger = get_export_logger()


class ReportExportError(Exception):
    """
    Exception raised when the report file cannot be written.

    The computed report is kept on the ``report`` attribute so callers
    can still use the in-memory results.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        report: Optional[EfficiencyReport] = None,
    ):
        super().__init__(message)
        self.path = path
        self.report = report


class CSVReportWriter:
    """
    CSV report exporter for station efficiency reports.
    """

    def __init__(self, decimals: int = DEFAULT_DECIMALS):
        """
        Initialize CSV exporter.

        Args:
            decimals: Decimal places for the numeric columns (3 or 4)
        """
        if decimals not in ALLOWED_DECIMALS:
            raise ValueError(f"decimals must be one of {ALLOWED_DECIMALS}, got {decimals}")
        self.decimals = decimals

    def to_dataframe(self, report: EfficiencyReport) -> pd.DataFrame:
        """
        Arrange a report into the CSV column layout.

        Args:
            report: Efficiency report

        Returns:
            DataFrame with the report columns, efficiency in percent
        """
        return pd.DataFrame(
            {
                CSV_COLUMNS[0]: pd.Series(range(1, len(report) + 1), dtype="int64"),
                CSV_COLUMNS[1]: pd.Series(report.stations, dtype="object"),
                CSV_COLUMNS[2]: pd.Series(report.cell_temperatures, dtype="float64"),
                CSV_COLUMNS[3]: pd.Series(report.efficiencies * 100.0, dtype="float64"),
                CSV_COLUMNS[4]: pd.Series(report.powers, dtype="float64"),
            },
            columns=CSV_COLUMNS,
        )

    def to_csv_string(self, report: EfficiencyReport) -> str:
        """Render the report as CSV text."""
        return self.to_dataframe(report).to_csv(
            sep=CSV_DELIMITER,
            index=False,
            float_format=f"%.{self.decimals}f",
            lineterminator="\n",
        )

    def write(self, report: EfficiencyReport, output_path: Union[str, Path]) -> Path:
        """
        Write the report to a CSV file.

        Args:
            report: Efficiency report
            output_path: Destination file

        Returns:
            Path of the written file

        Raises:
            ReportExportError: If the file cannot be created or written
        """
        output_path = Path(output_path)
        content = self.to_csv_string(report)

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{output_path.name}.",
                suffix=".tmp",
                dir=output_path.parent,
            )
            with os.fdopen(fd, "w", encoding=CSV_ENCODING, newline="") as f:
                f.write(content)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, output_path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Error while creating the CSV file {output_path}: {e}")
            raise ReportExportError(
                f"Could not write report to {output_path}: {e}",
                path=output_path,
                report=report,
            ) from e

        logger.info(f"Results saved in '{output_path}'")
        return output_path


def export_report(
    report: EfficiencyReport,
    output_path: Union[str, Path],
    decimals: int = DEFAULT_DECIMALS,
) -> Path:
    """
    Write a report to CSV with the given precision.

    Args:
        report: Efficiency report
        output_path: Destination file
        decimals: Decimal places for numeric columns

    Returns:
        Path of the written file
    """
    return CSVReportWriter(decimals=decimals).write(report, output_path)


def read_report_csv(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a report written by CSVReportWriter.

    Args:
        path: Report file

    Returns:
        DataFrame with the report columns
    """
    return pd.read_csv(
        path,
        sep=CSV_DELIMITER,
        encoding=CSV_ENCODING,
        dtype={CSV_COLUMNS[1]: str},
        keep_default_na=False,
    )
