"""
Activity model for emission-tracked user activities.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, String, Text

from ..database import Base


def utcnow() -> datetime:
    """Current time as naive UTC, the form every timestamp is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware timestamp to naive UTC; naive input is assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def new_id() -> str:
    return uuid.uuid4().hex


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(100), nullable=False, default="default-user")
    activity_type = Column(String(20), nullable=False)  # commute, food, electricity

    # Commute
    distance = Column(Float, nullable=True)  # km
    transport_mode = Column(String(20), default="car")

    # Food
    food_type = Column(String(20), default="vegetables")
    quantity = Column(Float, nullable=True)
    unit = Column(String(5), default="kg")

    # Electricity
    energy_consumed = Column(Float, nullable=True)
    energy_unit = Column(String(5), default="kwh")

    co2e = Column(Float, nullable=False, default=0.0)  # kg, always computed
    date = Column(DateTime, nullable=False, default=utcnow)
    notes = Column(Text, default="")

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


# Listing and aggregation filter by user or type and sort newest first
Index("ix_activities_user_date", Activity.user_id, Activity.date.desc())
Index("ix_activities_type_date", Activity.activity_type, Activity.date.desc())
