"""
Emission totals and per-period buckets over stored activities.
"""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..enums import Period
from ..models.activity import Activity, to_naive_utc, utcnow

# Widest look-back window accepted by the period endpoint
MAX_PERIOD_DAYS = 3660


def bucket_key(moment: datetime, period: str = Period.day) -> str:
    """ISO date of the bucket holding ``moment``; weeks start on Sunday."""
    day: date = moment.date()
    if period == Period.week:
        day = day - timedelta(days=(day.weekday() + 1) % 7)
    return day.isoformat()


class AggregationService:
    def __init__(self, db: Session, default_user_id: str = "default-user"):
        self.db = db
        self.default_user_id = default_user_id

    def _user_query(self, user_id: Optional[str]):
        return self.db.query(Activity).filter(Activity.user_id == (user_id or self.default_user_id))

    def total(
        self,
        user_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[float, List[Activity]]:
        """Sum of co2e over a user's activities in an inclusive date range."""
        query = self._user_query(user_id)
        if start_date:
            query = query.filter(Activity.date >= to_naive_utc(start_date))
        if end_date:
            query = query.filter(Activity.date <= to_naive_utc(end_date))

        activities = query.order_by(Activity.date.asc()).all()
        total = round(sum(a.co2e or 0.0 for a in activities), 6)
        return total, activities

    def by_period(
        self,
        user_id: Optional[str] = None,
        period: str = Period.day,
        days: int = 7,
        now: Optional[datetime] = None,
    ) -> List[Dict]:
        """Bucket the last ``days`` days of co2e by day or week.

        Only buckets holding at least one activity are returned, oldest first.
        """
        since = (to_naive_utc(now) if now else utcnow()) - timedelta(days=days)
        activities = (
            self._user_query(user_id)
            .filter(Activity.date >= since)
            .order_by(Activity.date.asc())
            .all()
        )

        buckets: Dict[str, float] = {}
        for activity in activities:
            key = bucket_key(activity.date, period)
            buckets[key] = buckets.get(key, 0.0) + (activity.co2e or 0.0)

        return [
            {"date": key, "co2e": round(value, 6)}
            for key, value in sorted(buckets.items())
        ]
