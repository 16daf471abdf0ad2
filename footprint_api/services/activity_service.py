"""
Activity record service: validation, emission estimation and persistence.
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..estimation import EmissionEstimator, MissingFieldError, build_activity
from ..logging_config import api_logger, db_logger
from ..models.activity import Activity, to_naive_utc, utcnow
from ..responses import bad_request, not_found
from ..schemas.activity import ActivityCreate, ActivityUpdate

# Inputs that change the estimate when they change
EMISSION_FIELDS = (
    "distance",
    "transport_mode",
    "food_type",
    "quantity",
    "unit",
    "energy_consumed",
    "energy_unit",
)

DEFAULT_LIST_LIMIT = 50


class ActivityService:
    """CRUD over Activity records with co2e kept in step with their inputs."""

    def __init__(self, db: Session, estimator: EmissionEstimator, default_user_id: str = "default-user"):
        self.db = db
        self.estimator = estimator
        self.default_user_id = default_user_id

    def _estimate(self, activity_type: str, fields: Mapping[str, Any]) -> float:
        try:
            variant = build_activity(activity_type, fields)
        except MissingFieldError as exc:
            bad_request(str(exc), details={"field": exc.alias})
        return self.estimator.estimate(variant)

    def _commit(self, action: str, activity_id: Optional[str] = None):
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            db_logger.error(f"Failed to {action} activity", error=exc, activity_id=activity_id)
            raise

    def create(self, payload: ActivityCreate) -> Activity:
        """Validate, estimate and persist a new activity."""
        fields = payload.model_dump(include=set(EMISSION_FIELDS))
        co2e = self._estimate(payload.activity_type, fields)

        values = {key: value for key, value in fields.items() if value is not None}
        activity = Activity(
            user_id=payload.user_id or self.default_user_id,
            activity_type=payload.activity_type,
            co2e=co2e,
            date=to_naive_utc(payload.date) if payload.date else utcnow(),
            notes=payload.notes or "",
            **values,
        )
        self.db.add(activity)
        self._commit("create")
        self.db.refresh(activity)

        api_logger.info(
            "Activity created",
            activity_id=activity.id,
            activity_type=activity.activity_type,
            co2e=activity.co2e,
        )
        return activity

    def list_activities(
        self,
        user_id: Optional[str] = None,
        activity_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[Activity]:
        """Newest-first activities for a user, optionally filtered."""
        query = self.db.query(Activity).filter(Activity.user_id == (user_id or self.default_user_id))

        if activity_type:
            query = query.filter(Activity.activity_type == activity_type)
        if start_date:
            query = query.filter(Activity.date >= to_naive_utc(start_date))
        if end_date:
            query = query.filter(Activity.date <= to_naive_utc(end_date))

        return query.order_by(Activity.date.desc()).limit(limit).all()

    def get(self, activity_id: str) -> Activity:
        activity = self.db.query(Activity).filter(Activity.id == activity_id).first()
        if not activity:
            not_found("Activity")
        return activity

    def update(self, activity_id: str, payload: ActivityUpdate) -> Activity:
        """Merge supplied fields; recompute co2e only when its inputs change."""
        activity = self.get(activity_id)
        changes: Dict[str, Any] = payload.model_dump(exclude_none=True)

        type_changed = (
            "activity_type" in changes and changes["activity_type"] != activity.activity_type
        )
        if type_changed or any(field in changes for field in EMISSION_FIELDS):
            merged = {field: changes.get(field, getattr(activity, field)) for field in EMISSION_FIELDS}
            changes["co2e"] = self._estimate(changes.get("activity_type", activity.activity_type), merged)

        if "date" in changes:
            changes["date"] = to_naive_utc(changes["date"])

        for key, value in changes.items():
            setattr(activity, key, value)
        activity.updated_at = utcnow()

        self._commit("update", activity_id)
        self.db.refresh(activity)

        api_logger.info(
            "Activity updated",
            activity_id=activity.id,
            recalculated="co2e" in changes,
            co2e=activity.co2e,
        )
        return activity

    def delete(self, activity_id: str) -> None:
        activity = self.get(activity_id)
        self.db.delete(activity)
        self._commit("delete", activity_id)
        api_logger.info("Activity deleted", activity_id=activity_id)
