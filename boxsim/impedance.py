"""
Electrical impedance of a driver mounted in an enclosure.

Uses the lumped-parameter equivalent circuit, with the enclosure's acoustic
load reflected into the mechanical domain through the piston area Sd:

    Z(f)      = Re + j·ω·Le + Bl² / Zm(f)
    Zm(f)     = Rms + j·(ω·Mms − 1/(ω·Cms)) + N·Sd²·Zab(f)
    Cab       = Vb / (ρ0·c²)

Sealed box:   Zab = 1 / (j·ω·Cab + 1/Ral),       Ral = Ql / (ωc·Cab)
Vented box:   Zab = 1 / (j·ω·Cab + 1/(j·ω·Map) + 1/Ral),
              Map = 1 / (ωb²·Cab),               Ral = Ql / (ωb·Cab)

ωc is the closed-box resonance, ωb the port tuning. Without Ql the box is
lossless (no Ral branch). N identical drivers share the box, so each cone
sees the load of all N; they are wired in parallel, so the terminal
impedance is Z/N.

ρ0 and c come from the bound Environment, or the defaults without one.
"""

import math

import numpy as np

from boxsim.constants import EnclosureType, ResponseType
from boxsim.exceptions import ComputationError
from boxsim.response import Response


class SealedBoxModel(Response):
    """Mechanical and electrical model of drivers loaded by a closed box."""

    enclosure_type = EnclosureType.SEALED

    def box_compliance(self) -> float:
        """Acoustic compliance Cab of the enclosed air (m⁵/N)."""
        density, speed = self.air()
        vb = self.enclosure.volume_m3()
        if vb <= 0:
            raise ComputationError("Enclosure volume must be positive")
        return vb / (density * speed * speed)

    def _leakage_admittance(self, omega0: float, cab: float) -> float:
        ql = self.enclosure.leakage_q
        if ql is None or ql <= 0:
            return 0.0
        return (omega0 * cab) / ql

    def closed_box_resonance(self) -> float:
        """Angular resonance frequency ωc of the driver on the box air spring."""
        d = self.driver
        if d.cms == 0 or d.mms == 0:
            raise ComputationError("Driver compliance and moving mass must be non-zero")
        stiffness = 1.0 / d.cms + self.count * d.sd ** 2 / self.box_compliance()
        return math.sqrt(stiffness / d.mms)

    def box_load(self, omega: np.ndarray) -> np.ndarray:
        """Acoustic impedance Zab presented by the box (Pa·s/m³)."""
        cab = self.box_compliance()
        admittance = 1j * omega * cab
        if self.enclosure.leakage_q:
            admittance = admittance + self._leakage_admittance(self.closed_box_resonance(), cab)
        return 1.0 / admittance

    def mechanical_impedance(self, omega: np.ndarray) -> np.ndarray:
        """Total mechanical impedance Zm seen by one cone (N·s/m)."""
        d = self.driver
        if d.cms == 0:
            raise ComputationError("Driver compliance is zero")
        z_driver = d.rms + 1j * (omega * d.mms - 1.0 / (omega * d.cms))
        z_mech = z_driver + self.count * d.sd ** 2 * self.box_load(omega)
        if np.any(z_mech == 0):
            raise ComputationError("Mechanical impedance is zero")
        return z_mech

    def voice_coil_impedance(self, omega: np.ndarray) -> np.ndarray:
        """Complex impedance of a single driver, Z_el + Z_mot (Ohms)."""
        d = self.driver
        z_el = d.re + 1j * omega * d.le
        z_mot = d.bl ** 2 / self.mechanical_impedance(omega)
        return z_el + z_mot


class VentedBoxModel(SealedBoxModel):
    """Drivers loaded by a bass-reflex box; the port is a lossless acoustic mass."""

    enclosure_type = EnclosureType.VENTED

    def tuning_resonance(self) -> float:
        """Angular port tuning frequency ωb."""
        fb = self.enclosure.tuning_frequency
        if fb is None or fb <= 0:
            raise ComputationError("Vented enclosure needs a positive tuning frequency")
        return 2 * np.pi * fb

    def port_mass(self) -> float:
        """Acoustic mass Map of the port (kg/m⁴)."""
        return 1.0 / (self.tuning_resonance() ** 2 * self.box_compliance())

    def box_load(self, omega: np.ndarray) -> np.ndarray:
        cab = self.box_compliance()
        admittance = 1j * omega * cab + 1.0 / (1j * omega * self.port_mass())
        admittance = admittance + self._leakage_admittance(self.tuning_resonance(), cab)
        if np.any(admittance == 0):
            raise ComputationError("Box admittance is zero at the tuning frequency")
        return 1.0 / admittance


class _ImpedanceResponse:
    kind = ResponseType.IMPEDANCE

    def complex_curve(self, frequencies) -> np.ndarray:
        """Complex terminal impedance over `frequencies` (Hz)."""
        freqs = self._checked_frequencies(frequencies)
        return self.voice_coil_impedance(2 * np.pi * freqs) / self.count

    def phase_curve(self, frequencies) -> np.ndarray:
        """Impedance phase in degrees."""
        return np.degrees(np.angle(self.complex_curve(frequencies)))

    def _compute(self, omega: np.ndarray) -> np.ndarray:
        return np.abs(self.voice_coil_impedance(omega) / self.count)


class SealedImpedance(_ImpedanceResponse, SealedBoxModel):
    """Impedance magnitude |Z| of drivers in a sealed box."""


class VentedImpedance(_ImpedanceResponse, VentedBoxModel):
    """Impedance magnitude |Z| of drivers in a vented box."""
