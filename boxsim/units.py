"""
Conversion of {value, unit} quantities to SI base units.

Driver datasheets mix metric and imperial conventions (grams or ounces for
moving mass, cm² or in² for piston area, liters or ft³ for Vas). Every
converter returns the value in SI base units: m, kg, m², m³.

An unrecognized unit tag is treated as already being SI and the value is
returned unchanged. No unit validation happens here.
"""

from typing import Dict

LENGTH_FACTORS: Dict[str, float] = {
    'm': 1.0,
    'mm': 1e-3,
    'cm': 1e-2,
    'in': 0.0254,
    'ft': 0.3048,
}

MASS_FACTORS: Dict[str, float] = {
    'kg': 1.0,
    'g': 1e-3,
    'oz': 0.0283495,
    'lb': 0.453592,
}

AREA_FACTORS: Dict[str, float] = {
    'm2': 1.0,
    'cm2': 1e-4,
    'in2': 0.00064516,
    'ft2': 0.092903,
}

VOLUME_FACTORS: Dict[str, float] = {
    'm3': 1.0,
    'L': 1e-3,
    'l': 1e-3,
    'dm3': 1e-3,
    'cm3': 1e-6,
    'in3': 1.63871e-5,
    'ft3': 0.0283168,
}


def _convert(value: float, unit: str, factors: Dict[str, float]) -> float:
    return value * factors.get(unit, 1.0)


def to_length(value: float, unit: str) -> float:
    """Length in meters."""
    return _convert(value, unit, LENGTH_FACTORS)


def to_mass(value: float, unit: str) -> float:
    """Mass in kilograms."""
    return _convert(value, unit, MASS_FACTORS)


def to_area(value: float, unit: str) -> float:
    """Area in square meters."""
    return _convert(value, unit, AREA_FACTORS)


def to_volume(value: float, unit: str) -> float:
    """Volume in cubic meters."""
    return _convert(value, unit, VOLUME_FACTORS)
