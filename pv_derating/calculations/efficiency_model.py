"""
Temperature-coefficient efficiency model for PV cells.

Implements the first-order linear derating model:

    eta(T) = eta_ref * (1 - beta * (T - T_ref))
    P      = eta * G * A

where eta is clamped at zero for very hot cells, since a cell cannot
have negative efficiency.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from ..utils.constants import (
    DEFAULT_AREA,
    DEFAULT_REFERENCE_EFFICIENCY,
    DEFAULT_TEMPERATURE_COEFFICIENT,
    STC_IRRADIANCE,
    STC_TEMPERATURE,
    CellTechnology,
)


@dataclass(frozen=True)
class ModelParameters:
    """Fixed parameters of the efficiency model for one run."""

    reference_efficiency: float = DEFAULT_REFERENCE_EFFICIENCY   # fraction
    reference_temperature: float = STC_TEMPERATURE               # °C
    temperature_coefficient: float = DEFAULT_TEMPERATURE_COEFFICIENT  # 1/°C
    irradiance: float = STC_IRRADIANCE                           # W/m²
    area: float = DEFAULT_AREA                                   # m²

    @classmethod
    def from_technology(
        cls,
        technology: CellTechnology,
        reference_temperature: float = STC_TEMPERATURE,
        temperature_coefficient: float = DEFAULT_TEMPERATURE_COEFFICIENT,
        irradiance: float = STC_IRRADIANCE,
        area: float = DEFAULT_AREA,
    ) -> "ModelParameters":
        """
        Create parameters from a cell technology descriptor.

        The reference efficiency is the midpoint of the technology's
        efficiency range, converted from percent to a fraction.

        Args:
            technology: Cell technology with eta_min/eta_max in %
            reference_temperature: Reference cell temperature (°C)
            temperature_coefficient: Efficiency loss per degree (1/°C)
            irradiance: Incident irradiance (W/m²)
            area: Module area (m²)

        Returns:
            ModelParameters instance
        """
        return cls(
            reference_efficiency=technology.reference_efficiency,
            reference_temperature=reference_temperature,
            temperature_coefficient=temperature_coefficient,
            irradiance=irradiance,
            area=area,
        )

    def describe(self) -> str:
        """One-line human readable summary of the parameters."""
        return (
            f"eta_ref = {self.reference_efficiency * 100:.2f}%, "
            f"Tref = {self.reference_temperature:.1f}°C, "
            f"beta = {self.temperature_coefficient:.4f} 1/°C, "
            f"G = {self.irradiance:.0f} W/m², "
            f"A = {self.area:.1f} m²"
        )


def compute_efficiency(
    temperature: float,
    params: ModelParameters,
) -> Tuple[float, float]:
    """
    Compute efficiency and power output at a given cell temperature.

    Args:
        temperature: Cell temperature (°C)
        params: Model parameters

    Returns:
        Tuple of (efficiency as a fraction, power in W)

    Example:
        >>> compute_efficiency(25.0, ModelParameters())
        (0.21, 210.0)
    """
    efficiency = params.reference_efficiency * (
        1.0 - params.temperature_coefficient * (temperature - params.reference_temperature)
    )
    if efficiency < 0.0:
        efficiency = 0.0

    power = efficiency * params.irradiance * params.area
    return efficiency, power


class EfficiencyModel:
    """
    Vectorised efficiency model.

    Wraps a set of ModelParameters and evaluates the derating model on
    scalars or numpy arrays of cell temperatures.
    """

    def __init__(self, params: Optional[ModelParameters] = None):
        """
        Initialize efficiency model.

        Args:
            params: Model parameters (uses defaults if None)
        """
        self.params = params or ModelParameters()

    def efficiency(
        self,
        temperature: Union[float, np.ndarray],
    ) -> Union[float, np.ndarray]:
        """
        Calculate clamped efficiency.

        Args:
            temperature: Cell temperature(s) (°C)

        Returns:
            Efficiency as a fraction, never negative
        """
        p = self.params
        if np.ndim(temperature) == 0:
            return compute_efficiency(float(temperature), p)[0]

        temps = np.asarray(temperature, dtype=float)
        raw = p.reference_efficiency * (
            1.0 - p.temperature_coefficient * (temps - p.reference_temperature)
        )
        return np.maximum(raw, 0.0)

    def power(
        self,
        temperature: Union[float, np.ndarray],
    ) -> Union[float, np.ndarray]:
        """
        Calculate power output (W).

        Args:
            temperature: Cell temperature(s) (°C)

        Returns:
            Power output
        """
        return self.efficiency(temperature) * self.params.irradiance * self.params.area

    def calculate(
        self,
        temperature: Union[float, np.ndarray],
    ) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
        """
        Calculate efficiency and power in one call.

        Args:
            temperature: Cell temperature(s) (°C)

        Returns:
            Tuple of (efficiency, power)
        """
        eta = self.efficiency(temperature)
        return eta, eta * self.params.irradiance * self.params.area

    @classmethod
    def from_technology(cls, technology: CellTechnology, **kwargs) -> "EfficiencyModel":
        """
        Create model from a cell technology descriptor.

        Args:
            technology: Cell technology
            **kwargs: Remaining ModelParameters fields

        Returns:
            EfficiencyModel instance
        """
        return cls(ModelParameters.from_technology(technology, **kwargs))
