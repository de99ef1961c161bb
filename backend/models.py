"""Pydantic models for BoxSim API requests and responses."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from boxsim.constants import ResponseType


# --- Driver library ---

class DriverSummary(BaseModel):
    id: str
    manufacturer: str
    brand: str = ""
    model: str
    speaker_type: str = ""


class DriverListResponse(BaseModel):
    drivers: list[DriverSummary]
    total: int


class DriverParameters(BaseModel):
    """Full SI parameter set of a driver, derived values included."""
    id: str
    manufacturer: str
    model: str
    speaker_type: str
    re: float = Field(..., description="DC resistance (Ohms)")
    le: float = Field(..., description="Voice coil inductance (H)")
    bl: float = Field(..., description="Force factor (T·m)")
    fs: float = Field(..., description="Resonance frequency (Hz)")
    qms: float
    qes: float
    qts: float
    mms: float = Field(..., description="Moving mass (kg)")
    cms: float = Field(..., description="Compliance (m/N)")
    stiffness: float = Field(..., description="Suspension stiffness (N/m)")
    rms: float = Field(..., description="Mechanical resistance (kg/s)")
    sd: float = Field(..., description="Effective piston area (m²)")
    vas: float = Field(..., description="Equivalent compliance volume (m³)")
    xmax: Optional[float] = Field(None, description="Maximum excursion (m)")
    vd: Optional[float] = Field(None, description="Displacement volume (m³)")
    sensitivity: float = Field(..., description="Reference sensitivity (dB, 1 W / 1 m)")


# --- Response calculation ---

class ResponseRequest(BaseModel):
    driver_id: str
    enclosure: dict[str, Any]
    response_type: ResponseType = ResponseType.IMPEDANCE
    count: int = Field(1, ge=1)
    freq_start: float = Field(20.0, gt=0)
    freq_end: float = Field(20000.0, gt=0)
    num_points: int = Field(500, gt=10, le=5000)


class ResponseCurve(BaseModel):
    response_type: ResponseType
    frequency: list[float]
    values: list[float]
    unit: str
