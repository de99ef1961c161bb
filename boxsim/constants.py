"""
Physical constants and enumerations shared across the computation engine.

The air constants here are the fixed values used by driver parameter
derivation. Response calculations read the configurable values from an
Environment instead, falling back to these defaults.
"""

import math
from enum import Enum

PI = math.pi
RHO0 = 1.204        # kg/m³, density of air at 20°C
C_SOUND = 343.0     # m/s, speed of sound at 20°C
P_REF = 20e-6       # Pa, SPL reference pressure


class EnclosureType(str, Enum):
    SEALED = "Sealed"
    VENTED = "Vented"


class ResponseType(str, Enum):
    SPL = "Spl"
    IMPEDANCE = "Impedance"


class DriverRole(str, Enum):
    SUBWOOFER = "subwoofer"
    WOOFER = "woofer"
    WOOFER_2 = "woofer-secondary"
    MIDRANGE = "midrange"
    TWEETER = "tweeter"
    FULLRANGE = "fullrange"


class ErrorCode(str, Enum):
    OUT_OF_RANGE = "out_of_range"
    FILE_ACCESS_ERROR = "file_access_error"
    DRIVER_CREATION_ERROR = "driver_creation_error"
    ENCLOSURE_CREATION_ERROR = "enclosure_creation_error"
    COMPUTATION_ERROR = "computation_error"
    SETUP_CREATION_ERROR = "setup_creation_error"


# Both woofer slots accept the same kind of driver record.
_ROLE_NAMES = {
    DriverRole.SUBWOOFER: "SubWoofer",
    DriverRole.WOOFER: "Woofer",
    DriverRole.WOOFER_2: "Woofer",
    DriverRole.MIDRANGE: "Midrange",
    DriverRole.TWEETER: "Tweeter",
    DriverRole.FULLRANGE: "Fullrange",
}

_RESPONSE_NAMES = {
    ResponseType.SPL: "Spl",
    ResponseType.IMPEDANCE: "Impedance",
}


def role_to_string(role) -> str:
    """Display string of a driver role, as used in `speaker_type` fields."""
    return _ROLE_NAMES.get(role, "unknown")


def type_to_string(kind) -> str:
    """Display string of a response type."""
    return _RESPONSE_NAMES.get(kind, "unknown")
