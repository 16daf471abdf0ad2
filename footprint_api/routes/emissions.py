"""
Emission routes: ad-hoc estimates and aggregates over stored activities.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..enums import Period
from ..estimation import EmissionEstimator, MissingFieldError, build_activity, get_estimator
from ..limiter import limiter
from ..responses import bad_request, success
from ..schemas.activity import EmissionCalculateRequest
from ..services.aggregation_service import MAX_PERIOD_DAYS, AggregationService
from .activities import activity_to_detail

settings = get_settings()

router = APIRouter(prefix="/api/emissions", tags=["emissions"])


def get_aggregation_service(db: Session = Depends(get_db)) -> AggregationService:
    return AggregationService(db, default_user_id=settings.default_user_id)


@router.post("/calculate")
@limiter.limit(settings.rate_limit)
def calculate_emissions(
    request: Request,
    payload: EmissionCalculateRequest,
    estimator: EmissionEstimator = Depends(get_estimator),
):
    """Estimate co2e for an activity without saving it."""
    try:
        activity = build_activity(payload.activity_type, payload.model_dump(exclude={"activity_type"}))
    except MissingFieldError as exc:
        bad_request(str(exc), details={"field": exc.alias})

    return success(co2e=estimator.estimate(activity), unit="kg")


@router.get("/total")
def get_total_emissions(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    service: AggregationService = Depends(get_aggregation_service),
):
    total, activities = service.total(user_id, start_date, end_date)
    return success(
        totalCo2e=total,
        count=len(activities),
        activities=[activity_to_detail(a) for a in activities],
    )


@router.get("/period")
def get_emissions_by_period(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    period: Period = Period.day,
    days: int = Query(default=7, ge=1, le=MAX_PERIOD_DAYS),
    service: AggregationService = Depends(get_aggregation_service),
):
    """co2e per day or per week (Sunday start) over the last ``days`` days."""
    return success(data=service.by_period(user_id, period=period, days=days))
