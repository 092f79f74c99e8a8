"""
Calculations module for PV Derating.

Modules:
    efficiency_model: Linear temperature-coefficient efficiency model
    report_builder: Per-station evaluation and efficiency ranking
"""

from .efficiency_model import (
    EfficiencyModel,
    ModelParameters,
    compute_efficiency,
)
from .report_builder import (
    EfficiencyReport,
    ResultRow,
    build_report,
    build_report_from_arrays,
)

__all__ = [
    "EfficiencyModel",
    "ModelParameters",
    "compute_efficiency",
    "EfficiencyReport",
    "ResultRow",
    "build_report",
    "build_report_from_arrays",
]
