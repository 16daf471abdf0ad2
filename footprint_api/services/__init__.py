from .activity_service import ActivityService
from .aggregation_service import AggregationService

__all__ = [
    "ActivityService",
    "AggregationService",
]
