"""
Station data input and handling.

Provides the station sample record and loaders for station datasets,
either the built-in network shipped with the package or user supplied
YAML/CSV files.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd
import yaml

from ..utils.constants import CellTechnology
from ..utils.logging_config import get_data_logger

logger = get_data_logger()

_BUILTIN_PATH = Path(__file__).parent.parent / "data" / "builtin_stations.yaml"

_NAME_COLUMNS = ("station", "name", "stations")
_TEMPERATURE_COLUMNS = ("temperature", "tcell", "tcell(°c)", "tmean", "mean_temperature")


class StationDataError(ValueError):
    """Exception raised when station data cannot be loaded."""
    pass


@dataclass(frozen=True)
class StationSample:
    """A station with its mean cell temperature (°C)."""

    name: str
    mean_temperature: float


@dataclass(frozen=True)
class StationDataset:
    """
    Station names and temperatures, paired by position.

    The two sequences are kept as loaded so that a length mismatch is
    visible to the report builder, which truncates and warns.
    """

    names: Tuple[str, ...]
    temperatures: Tuple[float, ...]
    technology: Optional[CellTechnology] = None
    source: str = "<memory>"

    def __len__(self) -> int:
        return min(len(self.names), len(self.temperatures))

    @property
    def samples(self) -> List[StationSample]:
        """Paired samples; excess entries on the longer side are dropped."""
        return [
            StationSample(name, temp)
            for name, temp in zip(self.names, self.temperatures)
        ]

    @classmethod
    def from_samples(
        cls,
        samples: Sequence[StationSample],
        technology: Optional[CellTechnology] = None,
        source: str = "<memory>",
    ) -> "StationDataset":
        return cls(
            names=tuple(s.name for s in samples),
            temperatures=tuple(float(s.mean_temperature) for s in samples),
            technology=technology,
            source=source,
        )


def _parse_technology(data: Any) -> Optional[CellTechnology]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise StationDataError("'technology' must be a mapping with name, eta_min and eta_max")
    try:
        return CellTechnology(
            name=str(data["name"]),
            eta_min=float(data["eta_min"]),
            eta_max=float(data["eta_max"]),
        )
    except KeyError as e:
        raise StationDataError(f"Technology is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise StationDataError(f"Invalid technology definition: {e}") from e


def _station_name(value: Any, source: str) -> str:
    # YAML turns unquoted codes like 007 or NO into numbers and booleans
    if not isinstance(value, str):
        raise StationDataError(
            f"{source}: station name {value!r} is not a string; quote it in the file"
        )
    return value


def dataset_from_dict(data: Dict[str, Any], source: str = "<memory>") -> StationDataset:
    """
    Build a dataset from a parsed YAML document.

    Two layouts are accepted: a ``stations`` list of ``{name, temperature}``
    records, or parallel ``names`` and ``temperatures`` lists. Station names
    must be YAML strings, so codes such as ``"007"`` or ``"NO"`` are quoted.

    Args:
        data: Parsed document
        source: Description of where the data came from

    Returns:
        StationDataset

    Raises:
        StationDataError: If the document has neither layout or an entry
            is malformed
    """
    if not isinstance(data, dict):
        raise StationDataError(f"{source}: expected a mapping at top level")

    technology = _parse_technology(data.get("technology"))

    if "stations" not in data and not ("names" in data and "temperatures" in data):
        raise StationDataError(
            f"{source}: expected a 'stations' list or 'names' and 'temperatures' lists"
        )

    try:
        if "stations" in data:
            records = data["stations"] or []
            names = tuple(_station_name(r["name"], source) for r in records)
            temperatures = tuple(float(r["temperature"]) for r in records)
        else:
            names = tuple(_station_name(n, source) for n in data["names"] or [])
            temperatures = tuple(float(t) for t in data["temperatures"] or [])
    except StationDataError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise StationDataError(f"{source}: invalid station entry: {e}") from e

    return StationDataset(names, temperatures, technology, source)


def _find_column(columns: List[str], candidates: Tuple[str, ...]) -> Optional[str]:
    lookup = {c.strip().lower(): c for c in columns}
    for candidate in candidates:
        if candidate in lookup:
            return lookup[candidate]
    return None


def _load_csv(path: Path) -> StationDataset:
    # Every cell is read as text so codes like NA or 007 survive unchanged
    try:
        with open(path, "r", encoding="utf-8") as f:
            header = f.readline()
        sep = ";" if ";" in header else ","
        df = pd.read_csv(
            path,
            sep=sep,
            encoding="utf-8",
            skipinitialspace=True,
            dtype=str,
            keep_default_na=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise StationDataError(f"Could not parse {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise StationDataError(f"Could not read {path}: {e}") from e

    name_col = _find_column(list(df.columns), _NAME_COLUMNS)
    temp_col = _find_column(list(df.columns), _TEMPERATURE_COLUMNS)
    if name_col is None or temp_col is None:
        raise StationDataError(
            f"{path}: could not find station and temperature columns in {list(df.columns)}"
        )

    temps = pd.to_numeric(df[temp_col].str.strip(), errors="coerce")
    if temps.isna().any():
        bad_rows = [int(i) + 2 for i in temps[temps.isna()].index]
        raise StationDataError(f"{path}: non-numeric temperature on line(s) {bad_rows}")

    return StationDataset(
        names=tuple(df[name_col]),
        temperatures=tuple(float(t) for t in temps),
        source=str(path),
    )


def _load_yaml(path: Path) -> StationDataset:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StationDataError(f"Could not parse {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise StationDataError(f"Could not read {path}: {e}") from e

    return dataset_from_dict(data, source=str(path))


def load_station_file(path: Union[str, Path]) -> StationDataset:
    """
    Load a station dataset from a YAML or CSV file.

    Args:
        path: Path to a .yaml/.yml or .csv file

    Returns:
        StationDataset

    Raises:
        StationDataError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise StationDataError(f"Station file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        dataset = _load_yaml(path)
    elif suffix in (".csv", ".txt"):
        dataset = _load_csv(path)
    else:
        raise StationDataError(f"Unsupported station file format: {suffix}")

    logger.info(f"Loaded {len(dataset.names)} stations from {path}")
    return dataset


@lru_cache(maxsize=1)
def load_builtin_dataset() -> StationDataset:
    """
    Load the built-in station network.

    Returns:
        StationDataset with 68 stations and the monocrystalline silicon
        technology descriptor.
    """
    return _load_yaml(_BUILTIN_PATH)
