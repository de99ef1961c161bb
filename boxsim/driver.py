"""
Loudspeaker driver parameter model.

A driver is built from a structured record of manufacturer measurements.
Fundamental values are read as given (converted to SI where the record
carries a unit); derivable Thiele-Small values are taken from the record
when present and otherwise computed from the values already established:

    Qes  = 2π·Fs·Mms·Re / Bl²
    Qts  = Qms·Qes / (Qms + Qes)
    Cms  = 1 / ((2π·Fs)²·Mms)
    Kms  = (2π·Fs)²·Mms
    Vas  = ρ0·c²·Sd²·Cms
    Vd   = Sd·Xmax
    SPL0 = 112 + 10·log10(η0),   η0 = 4π²·Fs³·Vas / (c³·Qes)

The order matters: Qts consumes Qes, Vas consumes Cms and the sensitivity
consumes both Vas and Qes, whether they were supplied or derived.
Derivation uses the fixed air constants, never an Environment's values.

Where a formula is undefined (zero denominator, log of a non-positive
number) the result is 0, or a ComputationError in strict mode.
"""

import json
import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError

from boxsim.constants import C_SOUND, PI, RHO0, role_to_string
from boxsim.exceptions import ComputationError, DriverCreationError, InvalidDriverRoleError
from boxsim.records import DriverRecord, Quantity, first_error
from boxsim.units import to_area, to_length, to_mass, to_volume

logger = logging.getLogger(__name__)


def _undefined(name: str, reason: str, strict: bool) -> float:
    if strict:
        raise ComputationError(f"Cannot derive {name}: {reason}")
    logger.warning("Cannot derive %s (%s), using 0", name, reason)
    return 0.0


def calculate_qes(fs: float, mms: float, re: float, bl: float, strict: bool = False) -> float:
    """Electrical Q from Fs (Hz), Mms (kg), Re (Ohm) and Bl (T·m)."""
    if bl == 0:
        return _undefined('qes', 'Bl is zero', strict)
    return (2 * PI * fs * mms * re) / (bl * bl)


def calculate_qts(qms: float, qes: float, strict: bool = False) -> float:
    """Total Q as the parallel combination of Qms and Qes."""
    if qms + qes == 0:
        return _undefined('qts', 'Qms + Qes is zero', strict)
    return (qms * qes) / (qms + qes)


def calculate_cms(fs: float, mms: float, strict: bool = False) -> float:
    """Suspension compliance (m/N)."""
    term = 2 * PI * fs
    if term == 0 or mms == 0:
        return _undefined('cms', 'Fs or Mms is zero', strict)
    return 1.0 / ((term * term) * mms)


def calculate_kms(fs: float, mms: float) -> float:
    """Suspension stiffness (N/m)."""
    term = 2 * PI * fs
    return (term * term) * mms


def calculate_vas(sd: float, cms: float) -> float:
    """Equivalent air volume (m³) of the suspension compliance."""
    return RHO0 * C_SOUND * C_SOUND * sd * sd * cms


def calculate_vd(sd: float, xmax: Optional[float]) -> Optional[float]:
    """Displacement volume (m³), absent without Xmax."""
    if xmax is None:
        return None
    return sd * xmax


def calculate_sensitivity(
    fs: float,
    vas: float,
    qes: float,
    c: float = C_SOUND,
    strict: bool = False,
) -> float:
    """Reference sensitivity (dB SPL, 1 W / 1 m) from the reference efficiency."""
    if c == 0 or qes == 0:
        return _undefined('sensitivity', 'speed of sound or Qes is zero', strict)

    eta0 = (4 * PI * PI * fs ** 3 * vas) / (c ** 3 * qes)
    if eta0 <= 0:
        return _undefined('sensitivity', 'efficiency is not positive', strict)

    return 112.0 + 10.0 * math.log10(eta0)


def _given(quantity: Optional[Quantity], converter=None) -> Optional[float]:
    if quantity is None:
        return None
    if converter is None:
        return quantity.value
    return converter(quantity.value, quantity.unit)


@dataclass(frozen=True)
class Driver:
    """Complete, SI-normalized parameter set of one loudspeaker driver."""

    # General info
    uuid: str
    brand: str
    manufacturer: str
    provided_by: str
    comment: str
    model: str
    indexed: bool

    # Electrical (Ohm, dB, Ohm, H, Ohm, W, W, T·m, N/√W, T)
    impedance: float
    sensitivity: float
    re: float
    le: float
    znom: float
    pe: float
    pmax: float
    bl: float
    motor_constant: float
    flux_density: float

    # Thiele-Small
    fs: float           # Hz
    qms: float
    qes: float
    qts: float
    mms: float          # kg
    mmd: float          # kg
    stiffness: float    # N/m
    cms: float          # m/N
    vas: float          # m³
    rms: float          # N·s/m
    sd: float           # m²

    # Physical dimensions (m, m³, kg)
    nominal_diameter: str
    vc_diameter: float
    winding_height: float
    air_gap_height: float
    effective_diameter: float
    baffle_cutout_diameter: float
    volume_occupied: float
    net_weight: float
    material: str

    xmax: Optional[float] = None    # m
    xlim: Optional[float] = None    # m
    vd: Optional[float] = None      # m³
    speaker_type: str = ""

    TYPE_NAME = ""

    @classmethod
    def from_record(cls, data: Any, strict: bool = False) -> 'Driver':
        """
        Build a driver from a parsed record.

        Raises DriverCreationError naming the offending field if a required
        section or field is absent or mistyped.
        """
        try:
            record = DriverRecord.model_validate(data)
        except ValidationError as exc:
            path, msg = first_error(exc)
            raise DriverCreationError(
                f"Invalid driver record at '{path}': {msg}", path=path
            ) from exc

        gi = record.general_info
        ep = record.electrical_parameters
        tsp = record.thiele_small_parameters
        pd = record.physical_dimensions

        # Fundamental values
        re = ep.re.value
        bl = ep.bl.value
        fs = tsp.fs.value
        qms = tsp.qms.value
        mms = to_mass(tsp.mms.value, tsp.mms.unit)
        sd = to_area(tsp.sd.value, tsp.sd.unit)
        xmax = _given(tsp.xmax, to_length)

        # Derivable values, in dependency order
        qes = _given(tsp.qes)
        if qes is None:
            qes = calculate_qes(fs, mms, re, bl, strict)
            logger.debug("Derived qes=%g for %s", qes, gi.uuid)

        qts = _given(tsp.qts)
        if qts is None:
            qts = calculate_qts(qms, qes, strict)
            logger.debug("Derived qts=%g for %s", qts, gi.uuid)

        cms = _given(tsp.cms)
        if cms is None:
            cms = calculate_cms(fs, mms, strict)
            logger.debug("Derived cms=%g for %s", cms, gi.uuid)

        stiffness = _given(tsp.stiffness)
        if stiffness is None:
            stiffness = calculate_kms(fs, mms)
            logger.debug("Derived stiffness=%g for %s", stiffness, gi.uuid)

        vas = _given(tsp.vas, to_volume)
        if vas is None:
            vas = calculate_vas(sd, cms)
            logger.debug("Derived vas=%g for %s", vas, gi.uuid)

        # An explicit null vd stays absent
        if 'vd' in tsp.model_fields_set:
            vd = _given(tsp.vd, to_volume)
        else:
            vd = calculate_vd(sd, xmax)

        sensitivity = _given(ep.sensitivity)
        if sensitivity is None:
            sensitivity = calculate_sensitivity(fs, vas, qes, strict=strict)
            logger.debug("Derived sensitivity=%g for %s", sensitivity, gi.uuid)

        return cls(
            uuid=gi.uuid,
            brand=gi.brand,
            manufacturer=gi.manufacturer,
            provided_by=gi.providedby,
            comment=gi.comment,
            model=gi.model,
            indexed=gi.indexed,
            speaker_type=gi.speaker_type,
            impedance=ep.impedance.value,
            sensitivity=sensitivity,
            re=re,
            le=ep.le.value,
            znom=ep.znom.value,
            pe=ep.pe.value,
            pmax=ep.pmax.value,
            bl=bl,
            motor_constant=ep.motor_constant.value,
            flux_density=ep.flux_density.value,
            fs=fs,
            qms=qms,
            qes=qes,
            qts=qts,
            mms=mms,
            mmd=to_mass(tsp.mmd.value, tsp.mmd.unit),
            stiffness=stiffness,
            cms=cms,
            vas=vas,
            rms=tsp.rms.value,
            sd=sd,
            xmax=xmax,
            xlim=_given(tsp.xlim, to_length),
            vd=vd,
            nominal_diameter=pd.nominal_diameter,
            vc_diameter=to_length(pd.vc_diameter.value, pd.vc_diameter.unit),
            winding_height=to_length(pd.winding_height.value, pd.winding_height.unit),
            air_gap_height=to_length(pd.air_gap_height.value, pd.air_gap_height.unit),
            effective_diameter=to_length(pd.effective_diameter.value, pd.effective_diameter.unit),
            baffle_cutout_diameter=to_length(pd.baffle_cutout_diameter.value, pd.baffle_cutout_diameter.unit),
            volume_occupied=to_volume(pd.volume_occupied.value, pd.volume_occupied.unit),
            net_weight=to_mass(pd.net_weight.value, pd.net_weight.unit),
            material=pd.material,
        )

    @classmethod
    def from_json(cls, text: str, strict: bool = False) -> 'Driver':
        return cls.from_record(_parse_json(text), strict=strict)

    def to_dict(self) -> Dict[str, Any]:
        """Flat SI parameter set; absent optionals are None."""
        return asdict(self)


class SubWoofer(Driver):
    TYPE_NAME = "SubWoofer"


class Woofer(Driver):
    TYPE_NAME = "Woofer"


class Midrange(Driver):
    TYPE_NAME = "Midrange"


class Tweeter(Driver):
    TYPE_NAME = "Tweeter"


class Fullrange(Driver):
    TYPE_NAME = "Fullrange"


DRIVER_TYPES = {cls.TYPE_NAME: cls for cls in (SubWoofer, Woofer, Midrange, Tweeter, Fullrange)}


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DriverCreationError(f"Driver record is not valid JSON: {exc}") from exc


def driver_from_record(data: Any, expected_role=None, strict: bool = False) -> Driver:
    """
    Instantiate the driver subtype named by `general_info.speaker_type`.

    If `expected_role` is given, the record's type must match the role's
    display string (e.g. DriverRole.SUBWOOFER -> "SubWoofer").
    """
    if not isinstance(data, dict):
        raise DriverCreationError("Driver record must be a JSON object")
    general_info = data.get('general_info')
    if not isinstance(general_info, dict):
        raise DriverCreationError("Driver record has no 'general_info' section", path='general_info')

    actual = general_info.get('speaker_type', 'unknown')
    if not isinstance(actual, str):
        raise DriverCreationError(
            f"Driver type must be a string, got {type(actual).__name__}",
            path='general_info.speaker_type',
        )
    if expected_role is not None:
        expected = role_to_string(expected_role)
        if actual != expected:
            raise InvalidDriverRoleError(expected, actual)

    driver_cls = DRIVER_TYPES.get(actual)
    if driver_cls is None:
        raise DriverCreationError(
            f"Driver type '{actual}' is not supported", path='general_info.speaker_type'
        )

    driver = driver_cls.from_record(data, strict=strict)
    logger.info("Created %s driver %s %s (%s)", actual, driver.manufacturer, driver.model, driver.uuid)
    return driver


def create_driver(expected_role, identifier: str, environment) -> Driver:
    """Resolve `identifier` through the environment and build the driver for `expected_role`."""
    text = environment.driver_resolver.resolve(identifier)
    return driver_from_record(_parse_json(text), expected_role, strict=environment.strict)
