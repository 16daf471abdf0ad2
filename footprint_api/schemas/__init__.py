from .activity import ActivityCreate, ActivityFields, ActivityUpdate, EmissionCalculateRequest

__all__ = [
    "ActivityCreate", "ActivityFields", "ActivityUpdate",
    "EmissionCalculateRequest",
]
