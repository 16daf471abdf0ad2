"""
Activity routes for recording activities and their emissions.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..enums import ActivityType
from ..estimation import EmissionEstimator, get_estimator
from ..limiter import limiter
from ..models.activity import Activity
from ..responses import created, deleted, success, updated
from ..schemas.activity import ActivityCreate, ActivityUpdate
from ..services.activity_service import DEFAULT_LIST_LIMIT, ActivityService

settings = get_settings()

router = APIRouter(prefix="/api/activities", tags=["activities"])


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + "Z" if value else None


def activity_summary(activity: Activity) -> dict:
    """Short form returned after writes."""
    return {
        "id": activity.id,
        "activityType": activity.activity_type,
        "co2e": activity.co2e,
        "date": isoformat(activity.date),
    }


def activity_to_dict(activity: Activity) -> dict:
    """List form of an activity."""
    return {
        "id": activity.id,
        "activityType": activity.activity_type,
        "distance": activity.distance,
        "transportMode": activity.transport_mode,
        "foodType": activity.food_type,
        "quantity": activity.quantity,
        "unit": activity.unit,
        "energyConsumed": activity.energy_consumed,
        "energyUnit": activity.energy_unit,
        "co2e": activity.co2e,
        "date": isoformat(activity.date),
        "notes": activity.notes,
        "createdAt": isoformat(activity.created_at),
    }


def activity_to_detail(activity: Activity) -> dict:
    """Full record, including ownership and modification time."""
    data = activity_to_dict(activity)
    data["userId"] = activity.user_id
    data["updatedAt"] = isoformat(activity.updated_at)
    return data


def get_activity_service(
    db: Session = Depends(get_db),
    estimator: EmissionEstimator = Depends(get_estimator),
) -> ActivityService:
    return ActivityService(db, estimator, default_user_id=settings.default_user_id)


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit)
def create_activity(
    request: Request,
    payload: ActivityCreate,
    service: ActivityService = Depends(get_activity_service),
):
    """Record an activity; its co2e is estimated before saving."""
    activity = service.create(payload)
    return created("Activity created successfully", activity=activity_summary(activity))


@router.get("")
def list_activities(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    activity_type: Optional[ActivityType] = Query(default=None, alias="activityType"),
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    limit: int = Query(default=DEFAULT_LIST_LIMIT, ge=1, le=1000),
    service: ActivityService = Depends(get_activity_service),
):
    """Activities for a user, newest first."""
    activities = service.list_activities(
        user_id=user_id,
        activity_type=activity_type.value if activity_type else None,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    return success(
        count=len(activities),
        activities=[activity_to_dict(a) for a in activities],
    )


@router.get("/{activity_id}")
def get_activity(activity_id: str, service: ActivityService = Depends(get_activity_service)):
    return success(activity=activity_to_detail(service.get(activity_id)))


@router.put("/{activity_id}")
def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    service: ActivityService = Depends(get_activity_service),
):
    """Merge-update an activity, re-estimating co2e if its inputs changed."""
    activity = service.update(activity_id, payload)
    return updated("Activity updated successfully", activity=activity_summary(activity))


@router.delete("/{activity_id}")
def delete_activity(activity_id: str, service: ActivityService = Depends(get_activity_service)):
    service.delete(activity_id)
    return deleted("Activity deleted successfully")
