"""Runtime settings read from the process environment (and a `.env` file)."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from boxsim.constants import C_SOUND, RHO0

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Settings:
    driver_dir: Optional[str] = None
    speed_of_sound: float = C_SOUND
    density_of_air: float = RHO0
    strict: bool = False
    log_level: str = 'INFO'
    frontend_url: Optional[str] = None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    """Load `.env` (without overriding existing variables) and build Settings."""
    load_dotenv()
    return Settings(
        driver_dir=os.getenv('BOXSIM_DRIVER_DIR') or None,
        speed_of_sound=_float_env('BOXSIM_SPEED_OF_SOUND', C_SOUND),
        density_of_air=_float_env('BOXSIM_DENSITY_OF_AIR', RHO0),
        strict=os.getenv('BOXSIM_STRICT', '').strip().lower() in _TRUTHY,
        log_level=os.getenv('BOXSIM_LOG_LEVEL', 'INFO').upper(),
        frontend_url=os.getenv('FRONTEND_URL') or None,
    )
