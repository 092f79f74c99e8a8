"""Export modules for PV Derating."""

from .csv_export import CSVReportWriter, ReportExportError, export_report, read_report_csv

__all__ = [
    "CSVReportWriter",
    "ReportExportError",
    "export_report",
    "read_report_csv",
]
