"""
Emission estimator with provider-first, static-table fallback behaviour.
"""
import math
from functools import lru_cache
from typing import Callable, Optional

from ..config import get_settings
from ..enums import EnergyUnit, FoodType, MassUnit, TransportMode
from ..logging_config import estimator_logger
from .activities import ActivityVariant, CommuteActivity, ElectricityActivity, FoodActivity
from .factors import commute_factor_id, resolve_transport_mode
from .sources import EstimationSource, ProviderError, RemoteProvider, StaticTable
from .units import to_kg, to_kwh

PRECISION = 6


def _clean(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        return 0.0
    return round(value, PRECISION)


class EmissionEstimator:
    """Estimate kg co2e per activity category.

    The remote source is tried first. When it fails the static table
    answers instead. Every public method returns a finite,
    non-negative float and never raises.
    """

    def __init__(self, remote: EstimationSource, fallback: Optional[StaticTable] = None):
        self.remote = remote
        self.fallback = fallback or StaticTable()

    def _with_fallback(self, category: str, compute: Callable[[EstimationSource], float]) -> float:
        try:
            return _clean(compute(self.remote))
        except ProviderError as exc:
            estimator_logger.warning(
                "Provider unavailable, using static factors",
                category=category,
                cause=str(exc),
                status_code=exc.status_code,
            )
        except Exception as exc:
            estimator_logger.error("Provider call raised unexpectedly", error=exc, category=category)

        try:
            return _clean(compute(self.fallback))
        except Exception as exc:
            estimator_logger.error("Fallback estimate failed", error=exc, category=category)
            return 0.0

    def estimate_commute(self, distance: float, transport_mode=TransportMode.car) -> float:
        mode = resolve_transport_mode(transport_mode)
        if commute_factor_id(mode) is None:
            return 0.0
        return self._with_fallback("commute", lambda source: source.commute(mode, distance))

    def estimate_food(self, food_type=FoodType.vegetables, quantity: float = 0.0, unit=MassUnit.kg) -> float:
        try:
            return _clean(self.fallback.food(food_type, to_kg(quantity, unit)))
        except Exception as exc:
            estimator_logger.error("Food estimate failed", error=exc, category="food")
            return 0.0

    def estimate_electricity(self, energy_consumed: float, energy_unit=EnergyUnit.kwh) -> float:
        kwh = to_kwh(energy_consumed, energy_unit)
        return self._with_fallback("electricity", lambda source: source.electricity(kwh))

    def estimate(self, activity: ActivityVariant) -> float:
        """Dispatch on the activity variant."""
        if isinstance(activity, CommuteActivity):
            return self.estimate_commute(activity.distance, activity.transport_mode)
        if isinstance(activity, FoodActivity):
            return self.estimate_food(activity.food_type, activity.quantity, activity.unit)
        if isinstance(activity, ElectricityActivity):
            return self.estimate_electricity(activity.energy_consumed, activity.energy_unit)
        raise TypeError(f"Unsupported activity: {type(activity).__name__}")


@lru_cache()
def get_estimator() -> EmissionEstimator:
    """Estimator wired to the configured Climatiq endpoint."""
    settings = get_settings()
    remote = RemoteProvider(
        api_key=settings.climatiq_api_key,
        api_url=settings.climatiq_api_url,
        timeout=settings.provider_timeout,
    )
    return EmissionEstimator(remote=remote)
