from .activities import router as activities_router
from .emissions import router as emissions_router

__all__ = [
    "activities_router",
    "emissions_router",
]
