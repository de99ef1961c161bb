"""
Enclosure models.

An enclosure holds its type tag and net internal volume in liters. The
sealed variant adds an optional leakage quality factor Ql; the vented
variant adds the port tuning frequency Fb. Enclosures serialize to the same
record shape they are parsed from:

    {"type": "Sealed", "volume": {"value": 20.0, "unit": "L"}, "leakage_q": null}
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from boxsim.constants import EnclosureType
from boxsim.exceptions import EnclosureCreationError
from boxsim.records import EnclosureRecord, first_error
from boxsim.units import to_volume

logger = logging.getLogger(__name__)


class Enclosure(ABC):
    """Base class for all enclosure variants."""

    enclosure_type: EnclosureType

    def __init__(self, volume: float = 0.0, leakage_q: Optional[float] = None):
        self._volume = volume
        self.leakage_q = leakage_q

    @property
    def type(self) -> EnclosureType:
        return self.enclosure_type

    @property
    def volume(self) -> float:
        """Net internal volume in liters."""
        return self._volume

    def set_volume(self, volume: float):
        self._volume = volume

    def volume_m3(self) -> float:
        return self._volume / 1000.0

    @classmethod
    @abstractmethod
    def from_record(cls, record: EnclosureRecord) -> 'Enclosure':
        """Build the variant from a validated record."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.enclosure_type.value,
            'volume': {'value': self._volume, 'unit': 'L'},
            'leakage_q': self.leakage_q,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self):
        return f"{type(self).__name__}(volume={self._volume!r} L)"


class SealedEnclosure(Enclosure):
    """Closed box. `leakage_q=None` means a lossless box."""

    enclosure_type = EnclosureType.SEALED

    @classmethod
    def from_record(cls, record: EnclosureRecord) -> 'SealedEnclosure':
        return cls(
            volume=to_volume(record.volume.value, record.volume.unit) * 1000.0,
            leakage_q=record.leakage_q,
        )


class VentedEnclosure(Enclosure):
    """Bass-reflex box tuned to `tuning_frequency` (Hz)."""

    enclosure_type = EnclosureType.VENTED

    def __init__(
        self,
        volume: float = 0.0,
        tuning_frequency: Optional[float] = None,
        leakage_q: Optional[float] = None,
    ):
        super().__init__(volume, leakage_q)
        self.tuning_frequency = tuning_frequency

    @classmethod
    def from_record(cls, record: EnclosureRecord) -> 'VentedEnclosure':
        fb = record.tuning_frequency.value if record.tuning_frequency is not None else None
        return cls(
            volume=to_volume(record.volume.value, record.volume.unit) * 1000.0,
            tuning_frequency=fb,
            leakage_q=record.leakage_q,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['tuning_frequency'] = (
            None if self.tuning_frequency is None
            else {'value': self.tuning_frequency, 'unit': 'Hz'}
        )
        return data


ENCLOSURE_TYPES = {
    EnclosureType.SEALED: SealedEnclosure,
    EnclosureType.VENTED: VentedEnclosure,
}


def _enclosure_class(enclosure_type: Union[EnclosureType, str]):
    try:
        key = EnclosureType(enclosure_type)
    except ValueError:
        raise EnclosureCreationError(
            f"Enclosure type '{enclosure_type}' is not supported", path='type'
        ) from None
    return ENCLOSURE_TYPES[key]


def create_enclosure(enclosure_type: Union[EnclosureType, str]) -> Enclosure:
    """Fresh enclosure of the given type with zero volume."""
    enclosure = _enclosure_class(enclosure_type)()
    logger.info("Created %s enclosure", enclosure.type.value)
    return enclosure


def enclosure_from_record(data: Union[Dict[str, Any], str]) -> Enclosure:
    """Build an enclosure from a record (or its JSON text), dispatching on `type`."""
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise EnclosureCreationError(f"Enclosure record is not valid JSON: {exc}") from exc

    try:
        record = EnclosureRecord.model_validate(data)
    except ValidationError as exc:
        path, msg = first_error(exc)
        raise EnclosureCreationError(f"Invalid enclosure record at '{path}': {msg}", path=path) from exc

    enclosure = _enclosure_class(record.type).from_record(record)
    logger.info("Loaded %s enclosure, %g L", enclosure.type.value, enclosure.volume)
    return enclosure
