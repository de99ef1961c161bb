"""
BoxSim Compute Engine

Core computation library for loudspeaker driver parameter derivation and
frequency-domain response of drivers mounted in enclosures.

All operations are pure computations over immutable driver data; nothing
here performs I/O except the driver database resolver.
"""

from boxsim.constants import (
    C_SOUND, PI, RHO0, DriverRole, EnclosureType, ResponseType, role_to_string, type_to_string,
)
from boxsim.units import to_length, to_mass, to_area, to_volume
from boxsim.exceptions import (
    BoxSimError, ComputationError, DriverCreationError, EnclosureCreationError,
    FileAccessError, InvalidDriverRoleError, OutOfRange, SetupCreationError,
)
from boxsim.config import Settings, load_settings
from boxsim.environment import DriverResolver, Environment
from boxsim.driver import Driver, create_driver, driver_from_record
from boxsim.enclosure import Enclosure, SealedEnclosure, VentedEnclosure, create_enclosure, enclosure_from_record
from boxsim.response import Response, create_response, generate_frequencies
from boxsim.impedance import SealedImpedance, VentedImpedance
from boxsim.spl import SealedSpl
from boxsim.role_config import RoleConfig
from boxsim.acoustic_setup import AcousticSetup
from boxsim.driver_database import DriverDatabase

__version__ = "0.1.0"
