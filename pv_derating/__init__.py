"""
PV Derating - Thermal efficiency derating of photovoltaic cells

Computes temperature-derated efficiency and power for a network of
stations, ranks them by efficiency and exports a CSV report.

Modules:
    calculations: Efficiency model and report builder
    data_input: Station datasets and input checks
    exports: CSV report export
    utils: Configuration, constants and logging
"""

__version__ = "1.0.0"
__license__ = "MIT"
