"""
Execution context for simulations.

An Environment bundles the ambient air constants used by response
calculations with the application-supplied capability that turns a driver
identifier (file path, UUID, ...) into the raw JSON record.
"""

from abc import ABC, abstractmethod
from typing import Optional

from boxsim.config import Settings
from boxsim.constants import C_SOUND, RHO0


class DriverResolver(ABC):
    """Resolves a driver identifier to the text of its JSON record."""

    @abstractmethod
    def resolve(self, identifier: str) -> str:
        """
        Return the record text for `identifier`.

        Implementations try the identifier as a file path first, then as a
        logical key in their own store, and raise FileAccessError if
        neither succeeds.
        """


class Environment:
    """Ambient constants and the driver resolver for one session."""

    DEFAULT_SPEED_OF_SOUND = C_SOUND
    DEFAULT_DENSITY_OF_AIR = RHO0

    def __init__(
        self,
        driver_resolver: DriverResolver,
        speed_of_sound: Optional[float] = None,
        density_of_air: Optional[float] = None,
        strict: bool = False,
    ):
        self._driver_resolver = driver_resolver
        self._speed_of_sound = self.DEFAULT_SPEED_OF_SOUND if speed_of_sound is None else speed_of_sound
        self._density_of_air = self.DEFAULT_DENSITY_OF_AIR if density_of_air is None else density_of_air
        self.strict = strict

    @classmethod
    def from_settings(cls, driver_resolver: DriverResolver, settings: Settings) -> 'Environment':
        return cls(
            driver_resolver,
            speed_of_sound=settings.speed_of_sound,
            density_of_air=settings.density_of_air,
            strict=settings.strict,
        )

    @staticmethod
    def default_speed_of_sound() -> float:
        return Environment.DEFAULT_SPEED_OF_SOUND

    @staticmethod
    def default_density_of_air() -> float:
        return Environment.DEFAULT_DENSITY_OF_AIR

    @property
    def driver_resolver(self) -> DriverResolver:
        return self._driver_resolver

    @property
    def speed_of_sound(self) -> float:
        """Speed of sound in m/s."""
        return self._speed_of_sound

    @speed_of_sound.setter
    def speed_of_sound(self, speed: float):
        self._speed_of_sound = speed

    @property
    def density_of_air(self) -> float:
        """Density of air in kg/m³."""
        return self._density_of_air

    @density_of_air.setter
    def density_of_air(self, density: float):
        self._density_of_air = density

    def reset_speed_of_sound(self):
        self._speed_of_sound = self.DEFAULT_SPEED_OF_SOUND

    def reset_density_of_air(self):
        self._density_of_air = self.DEFAULT_DENSITY_OF_AIR
