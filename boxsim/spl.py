"""
Sound pressure level of drivers in a sealed box.

Each of the N drivers is driven by the full `drive_voltage`. The cone
velocity follows from the terminal current and the loaded mechanical
impedance; the radiated pressure is that of a simple source at `distance`:

    u   = Bl·(V / Z) / Zm
    p   = ω·ρ0·|N·Sd·u| / (2π·r)
    SPL = 20·log10(p / 20 µPa)
"""

import numpy as np

from boxsim.constants import P_REF, ResponseType
from boxsim.impedance import SealedBoxModel


class SealedSpl(SealedBoxModel):
    kind = ResponseType.SPL

    def __init__(
        self,
        enclosure,
        driver=None,
        count: int = 1,
        environment=None,
        drive_voltage: float = 2.83,
        distance: float = 1.0,
    ):
        if drive_voltage <= 0:
            raise ValueError("Drive voltage must be positive")
        if distance <= 0:
            raise ValueError("Distance must be positive")
        super().__init__(enclosure, driver, count, environment)
        self.drive_voltage = drive_voltage
        self.distance = distance

    def cone_velocity(self, omega: np.ndarray) -> np.ndarray:
        """Complex cone velocity (m/s) of one driver."""
        d = self.driver
        current = self.drive_voltage / self.voice_coil_impedance(omega)
        return d.bl * current / self.mechanical_impedance(omega)

    def excursion_curve(self, frequencies) -> np.ndarray:
        """Cone displacement (m, RMS at `drive_voltage`) over `frequencies` (Hz)."""
        omega = 2 * np.pi * self._checked_frequencies(frequencies)
        return np.abs(self.cone_velocity(omega)) / omega

    def _compute(self, omega: np.ndarray) -> np.ndarray:
        density, _ = self.air()
        volume_velocity = self.count * self.driver.sd * np.abs(self.cone_velocity(omega))
        pressure = omega * density * volume_velocity / (2 * np.pi * self.distance)
        return 20.0 * np.log10(np.maximum(pressure / P_REF, 1e-12))
