"""
Unit normalization into the canonical units used by emission factors.
"""
from typing import Union

from ..enums import EnergyUnit, MassUnit

POUND_IN_KG = 0.453592


def to_kg(quantity: float, unit: Union[MassUnit, str, None] = MassUnit.kg) -> float:
    """Convert a mass to kilograms. Unknown units are treated as kilograms."""
    if unit == MassUnit.g:
        return quantity / 1000
    if unit == MassUnit.lb:
        return quantity * POUND_IN_KG
    return quantity


def to_kwh(energy: float, unit: Union[EnergyUnit, str, None] = EnergyUnit.kwh) -> float:
    """Convert an energy amount to kilowatt-hours."""
    if unit == EnergyUnit.mwh:
        return energy * 1000
    return energy
