"""
Emission factor tables.

Provider ids reference Climatiq emission factors. Static factors are kg co2e
per canonical unit (km, kg of food, kWh) and back the offline fallback.
"""
from typing import Optional, Union

from ..enums import FoodType, TransportMode

# Climatiq factor ids; None marks modes with no direct emissions
COMMUTE_FACTOR_IDS = {
    TransportMode.car: "3b0d35f0-967e-4da1-ae44-30c75e5a1f15",
    TransportMode.bus: "a140eb1a-bb10-4da8-8645-2d93ea0b474d",
    TransportMode.train: "2fca0e4c-9e14-4f87-9af4-dcd5cb1cf14a",
    TransportMode.plane: "8f8ad788-148d-4173-8e04-dfa0e5c94b2b",
    TransportMode.motorcycle: "dc16e39d-8572-432a-8225-5082bcde55e5",
    TransportMode.bicycle: None,
    TransportMode.walking: None,
}

# kg co2e per km
COMMUTE_FALLBACK_FACTORS = {
    TransportMode.car: 0.21,
    TransportMode.bus: 0.089,
    TransportMode.train: 0.041,
    TransportMode.plane: 0.255,
    TransportMode.motorcycle: 0.113,
    TransportMode.bicycle: 0.0,
    TransportMode.walking: 0.0,
}

# kg co2e per kg of food
FOOD_FACTORS = {
    FoodType.beef: 27.0,
    FoodType.pork: 12.1,
    FoodType.chicken: 6.9,
    FoodType.fish: 5.1,
    FoodType.dairy: 3.2,
    FoodType.vegetables: 2.0,
    FoodType.fruits: 1.1,
    FoodType.grains: 2.7,
}
DEFAULT_FOOD_FACTOR = 2.0

ELECTRICITY_FACTOR_ID = "0de2d70a-4704-48f4-b862-1a86da206dd3"
ELECTRICITY_FALLBACK_FACTOR = 0.475  # kg co2e per kWh


def resolve_transport_mode(mode: Union[TransportMode, str, None]) -> TransportMode:
    """Map a raw mode onto a known TransportMode, defaulting to car."""
    try:
        return TransportMode(mode)
    except ValueError:
        return TransportMode.car


def commute_factor_id(mode: Union[TransportMode, str, None]) -> Optional[str]:
    """Provider factor id for a mode, or None when the mode emits nothing."""
    return COMMUTE_FACTOR_IDS[resolve_transport_mode(mode)]


def commute_fallback_factor(mode: Union[TransportMode, str, None]) -> float:
    return COMMUTE_FALLBACK_FACTORS[resolve_transport_mode(mode)]


def food_factor(food_type: Union[FoodType, str, None]) -> float:
    try:
        return FOOD_FACTORS[FoodType(food_type)]
    except ValueError:
        return DEFAULT_FOOD_FACTOR
