"""Station data input for PV Derating."""

from .stations import (
    StationDataError,
    StationDataset,
    StationSample,
    load_builtin_dataset,
    load_station_file,
)
from .validation import PairingCheck, check_paired_lengths

__all__ = [
    "StationDataError",
    "StationDataset",
    "StationSample",
    "load_builtin_dataset",
    "load_station_file",
    "PairingCheck",
    "check_paired_lengths",
]
