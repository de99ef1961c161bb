"""
Pydantic models for the structured records the engine consumes.

A driver record has four required sections. Every quantitative field is a
{value, unit} pair; scalar types are strict so that a number given as a
string, or a flag given as 0/1, is rejected rather than coerced.
"""

from typing import Optional

from pydantic import BaseModel, StrictBool, StrictStr, ValidationError, field_validator


def _number(value):
    # bool is an int subclass; a flag is not a magnitude
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


class Quantity(BaseModel):
    value: float
    unit: StrictStr

    @field_validator("value", mode="before")
    @classmethod
    def check_number(cls, value):
        return _number(value)


class GeneralInfo(BaseModel):
    uuid: StrictStr
    brand: StrictStr
    manufacturer: StrictStr
    providedby: StrictStr
    comment: StrictStr
    model: StrictStr
    indexed: StrictBool
    speaker_type: StrictStr = ""


class ElectricalParameters(BaseModel):
    re: Quantity
    bl: Quantity
    impedance: Quantity
    le: Quantity
    znom: Quantity
    pe: Quantity
    pmax: Quantity
    motor_constant: Quantity
    flux_density: Quantity
    sensitivity: Optional[Quantity] = None


class ThieleSmallParameters(BaseModel):
    fs: Quantity
    qms: Quantity
    mms: Quantity
    sd: Quantity
    mmd: Quantity
    rms: Quantity
    xmax: Optional[Quantity] = None
    xlim: Optional[Quantity] = None
    # Derivable; computed when absent
    qes: Optional[Quantity] = None
    qts: Optional[Quantity] = None
    cms: Optional[Quantity] = None
    stiffness: Optional[Quantity] = None
    vas: Optional[Quantity] = None
    vd: Optional[Quantity] = None


class PhysicalDimensions(BaseModel):
    nominal_diameter: StrictStr
    vc_diameter: Quantity
    winding_height: Quantity
    air_gap_height: Quantity
    effective_diameter: Quantity
    baffle_cutout_diameter: Quantity
    volume_occupied: Quantity
    net_weight: Quantity
    material: StrictStr


class DriverRecord(BaseModel):
    general_info: GeneralInfo
    electrical_parameters: ElectricalParameters
    thiele_small_parameters: ThieleSmallParameters
    physical_dimensions: PhysicalDimensions


class EnclosureRecord(BaseModel):
    type: StrictStr
    volume: Quantity
    leakage_q: Optional[float] = None
    tuning_frequency: Optional[Quantity] = None

    @field_validator("leakage_q", mode="before")
    @classmethod
    def check_leakage_q(cls, value):
        if value is None:
            return None
        return _number(value)


def first_error(exc: ValidationError):
    """Return (dotted path, message) of the first validation error."""
    err = exc.errors()[0]
    path = '.'.join(str(part) for part in err.get('loc', ()))
    return path, err.get('msg', 'invalid value')
