"""
Activity variants used by the estimator.

Records are stored flat, with every category's fields on one row. At the
validation boundary they are narrowed into one variant per activity type so
the estimator only sees the fields its category uses.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Union

from ..enums import ActivityType, EnergyUnit, FoodType, MassUnit, TransportMode


class MissingFieldError(ValueError):
    """A category-required quantity is absent."""

    def __init__(self, field: str, alias: str, message: str):
        self.field = field
        self.alias = alias
        super().__init__(message)


@dataclass(frozen=True)
class CommuteActivity:
    distance: float
    transport_mode: TransportMode = TransportMode.car


@dataclass(frozen=True)
class FoodActivity:
    quantity: float
    food_type: FoodType = FoodType.vegetables
    unit: MassUnit = MassUnit.kg


@dataclass(frozen=True)
class ElectricityActivity:
    energy_consumed: float
    energy_unit: EnergyUnit = EnergyUnit.kwh


ActivityVariant = Union[CommuteActivity, FoodActivity, ElectricityActivity]

# Field each category cannot do without: attribute, API name, message when absent
REQUIRED_FIELDS = {
    ActivityType.commute: ("distance", "distance", "Distance is required for commute"),
    ActivityType.food: ("quantity", "quantity", "Quantity is required for food activity"),
    ActivityType.electricity: (
        "energy_consumed", "energyConsumed", "Energy consumed is required for electricity",
    ),
}


def build_activity(activity_type: Union[ActivityType, str], fields: Mapping[str, Any]) -> ActivityVariant:
    """Narrow flat snake_case fields into the variant for ``activity_type``.

    Presence is an ``is None`` check, so a quantity of 0 is valid. Optional
    selectors that are None fall back to their category defaults.
    """
    activity_type = ActivityType(activity_type)
    field, alias, message = REQUIRED_FIELDS[activity_type]
    if fields.get(field) is None:
        raise MissingFieldError(field, alias, message)

    if activity_type == ActivityType.commute:
        return CommuteActivity(
            distance=fields["distance"],
            transport_mode=fields.get("transport_mode") or TransportMode.car,
        )
    if activity_type == ActivityType.food:
        return FoodActivity(
            quantity=fields["quantity"],
            food_type=fields.get("food_type") or FoodType.vegetables,
            unit=fields.get("unit") or MassUnit.kg,
        )
    return ElectricityActivity(
        energy_consumed=fields["energy_consumed"],
        energy_unit=fields.get("energy_unit") or EnergyUnit.kwh,
    )
