from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ActivityType, EnergyUnit, FoodType, MassUnit, TransportMode

# Non-negative, finite quantity (km, mass, energy); the upper bound keeps
# unit conversions and factor products finite
MAX_QUANTITY = 1e12

Quantity = Annotated[float, Field(ge=0, le=MAX_QUANTITY, allow_inf_nan=False)]


class ActivityFields(BaseModel):
    """Category fields shared by every activity payload."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    distance: Optional[Quantity] = None
    transport_mode: Optional[TransportMode] = Field(default=None, alias="transportMode")
    food_type: Optional[FoodType] = Field(default=None, alias="foodType")
    quantity: Optional[Quantity] = None
    unit: Optional[MassUnit] = None
    energy_consumed: Optional[Quantity] = Field(default=None, alias="energyConsumed")
    energy_unit: Optional[EnergyUnit] = Field(default=None, alias="energyUnit")


class EmissionCalculateRequest(ActivityFields):
    activity_type: ActivityType = Field(alias="activityType")


class ActivityCreate(EmissionCalculateRequest):
    user_id: Optional[str] = Field(default=None, alias="userId", min_length=1)
    date: Optional[datetime] = None
    notes: Optional[str] = None


class ActivityUpdate(ActivityFields):
    user_id: Optional[str] = Field(default=None, alias="userId", min_length=1)
    activity_type: Optional[ActivityType] = Field(default=None, alias="activityType")
    date: Optional[datetime] = None
    notes: Optional[str] = None
