"""
Input shape checks for station data.

Station names and temperatures arrive as two parallel sequences paired by
position. The only check applied is that both sequences have the same
length. A mismatch is never an error: the extra entries are dropped and a
warning is reported.
"""

from dataclasses import dataclass, field
from typing import List, Sized


@dataclass
class PairingCheck:
    """Outcome of pairing two parallel sequences."""

    usable_count: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0


def check_paired_lengths(names: Sized, temperatures: Sized) -> PairingCheck:
    """
    Check that station names and temperatures can be paired by index.

    Args:
        names: Station names
        temperatures: Cell temperatures (°C)

    Returns:
        PairingCheck with usable_count set to the number of pairs that can
        be formed, and a warning when the lengths differ
    """
    n_names = len(names)
    n_temps = len(temperatures)
    n_pairs = min(n_names, n_temps)

    warnings = []
    if n_names != n_temps:
        warnings.append(
            f"Number of stations ({n_names}) does not match number of "
            f"Tcell values ({n_temps}). Only the first {n_pairs} entries "
            f"will be paired."
        )

    return PairingCheck(usable_count=n_pairs, warnings=warnings)
