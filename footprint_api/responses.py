"""
Footprint API Response Utilities
Standardized response format and error handling
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_config import api_logger


def _timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(message: Optional[str] = None, **fields) -> Dict:
    """Create success response with top-level payload fields"""
    response: Dict[str, Any] = {"success": True}

    if message:
        response["message"] = message

    response.update(fields)
    return response


def created(message: str = "Created successfully", **fields) -> Dict:
    """201 Created response"""
    return success(message, **fields)


def updated(message: str = "Updated successfully", **fields) -> Dict:
    """200 Updated response"""
    return success(message, **fields)


def deleted(message: str = "Deleted successfully") -> Dict:
    """200 Deleted response"""
    return success(message)


# ============================================================
# ERROR RESPONSES
# ============================================================

class ApiException(HTTPException):
    """API exception carrying a stable error code"""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict] = None,
    ):
        self.error_code = error_code or f"ERR_{status_code}"
        self.details = details
        super().__init__(status_code=status_code, detail=message)


def bad_request(message: str, code: str = "VALIDATION_ERROR", details: Optional[Dict] = None):
    raise ApiException(400, message, code, details)


def not_found(resource: str = "Resource", id: Optional[str] = None):
    message = f"{resource} not found" if not id else f"{resource} '{id}' not found"
    raise ApiException(404, message, "NOT_FOUND")


def _error_body(message: str, error_code: str, details: Optional[Dict] = None) -> Dict:
    return {
        "success": False,
        "error": message,
        "error_code": error_code,
        "details": details,
        "timestamp": _timestamp(),
    }


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for API errors"""

    if isinstance(exc, ApiException):
        api_logger.warning(
            f"API Error: {exc.detail}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail, exc.error_code, exc.details),
        )

    if isinstance(exc, StarletteHTTPException):
        api_logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
        )

    if isinstance(exc, SQLAlchemyError):
        api_logger.error(
            "Persistence error",
            error=exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("A database error occurred", "PERSISTENCE_ERROR"),
        )

    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 with the offending fields"""
    errors = exc.errors()
    fields = [".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in errors]
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    if fields and fields[0]:
        message = f"{fields[0]}: {message}"

    api_logger.warning(
        f"Validation Error: {message}",
        status_code=400,
        path=request.url.path,
        fields=fields,
    )
    return JSONResponse(
        status_code=400,
        content=_error_body(message, "VALIDATION_ERROR", {"fields": fields}),
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Report a tripped rate limit as 429 in the standard error shape"""
    api_logger.warning(
        f"Rate limit exceeded: {exc.detail}",
        status_code=429,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=429,
        content=_error_body(f"Rate limit exceeded: {exc.detail}", "RATE_LIMITED"),
    )
