from .activities import (
    ActivityVariant,
    CommuteActivity,
    ElectricityActivity,
    FoodActivity,
    MissingFieldError,
    build_activity,
)
from .estimator import EmissionEstimator, get_estimator
from .sources import EstimationSource, ProviderError, RemoteProvider, StaticTable
from .units import to_kg, to_kwh

__all__ = [
    "ActivityVariant",
    "CommuteActivity",
    "ElectricityActivity",
    "FoodActivity",
    "MissingFieldError",
    "build_activity",
    "EmissionEstimator",
    "get_estimator",
    "EstimationSource",
    "ProviderError",
    "RemoteProvider",
    "StaticTable",
    "to_kg",
    "to_kwh",
]
