"""
Frequency-domain response engine.

A response binds one driver (with a multiplicity count), one enclosure and
optionally an Environment, and evaluates a scalar quantity (impedance
magnitude, SPL, ...) at a given frequency. `evaluate` and `curve` share the
same numpy implementation, so a curve is exactly the pointwise evaluation.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from boxsim.constants import C_SOUND, RHO0, ResponseType
from boxsim.exceptions import ComputationError, OutOfRange
from boxsim.role_config import RoleConfig


def generate_frequencies(
    start: float = 20.0,
    end: float = 20000.0,
    num_points: int = 500,
) -> np.ndarray:
    """Generate logarithmically-spaced frequency array (Hz)."""
    return np.logspace(np.log10(start), np.log10(end), num_points)


class Response(ABC):
    """Base class of all response calculations."""

    kind: ResponseType

    def __init__(self, enclosure, driver=None, count: int = 1, environment=None):
        self.enclosure = enclosure
        self.environment = environment
        self.driver = None
        self.count = 1
        if driver is not None:
            self.set_driver(driver, count)

    @property
    def type(self) -> ResponseType:
        return self.kind

    def set_driver(self, driver, count: int = 1):
        """Assign a driver and its count, or a RoleConfig carrying both."""
        if isinstance(driver, RoleConfig):
            driver, count = driver.driver, driver.count
        if count < 1:
            raise ValueError(f"Driver count must be at least 1, got {count}")
        self.driver = driver
        self.count = count

    def set_enclosure(self, enclosure):
        self.enclosure = enclosure

    def air(self) -> Tuple[float, float]:
        """(density of air, speed of sound) from the environment or the defaults."""
        if self.environment is None:
            return RHO0, C_SOUND
        return self.environment.density_of_air, self.environment.speed_of_sound

    def evaluate(self, frequency: float) -> float:
        return float(self.curve(np.array([frequency], dtype=float))[0])

    def curve(self, frequencies) -> np.ndarray:
        """Evaluate over an array of frequencies (Hz)."""
        freqs = self._checked_frequencies(frequencies)
        return self._compute(2 * np.pi * freqs)

    def _checked_frequencies(self, frequencies) -> np.ndarray:
        if self.driver is None:
            raise ComputationError(f"No driver assigned to the {self.kind.value} response")
        freqs = np.asarray(frequencies, dtype=float)
        if np.any(freqs <= 0):
            raise ComputationError("Frequencies must be positive")
        return freqs

    @abstractmethod
    def _compute(self, omega: np.ndarray) -> np.ndarray:
        """Scalar response for each angular frequency in `omega`."""


def create_response(
    kind: ResponseType,
    enclosure,
    driver=None,
    count: int = 1,
    environment=None,
) -> Response:
    """Instantiate the response variant for this enclosure type and response kind."""
    from boxsim.impedance import SealedImpedance, VentedImpedance
    from boxsim.spl import SealedSpl

    variants = {
        (SealedImpedance.enclosure_type, SealedImpedance.kind): SealedImpedance,
        (VentedImpedance.enclosure_type, VentedImpedance.kind): VentedImpedance,
        (SealedSpl.enclosure_type, SealedSpl.kind): SealedSpl,
    }
    response_cls: Optional[type] = variants.get((enclosure.type, ResponseType(kind)))
    if response_cls is None:
        raise OutOfRange(
            f"There is no {ResponseType(kind).value} response for {enclosure.type.value} enclosures"
        )
    return response_cls(enclosure, driver, count, environment)
