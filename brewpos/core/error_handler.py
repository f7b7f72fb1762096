"""
Unified error handling
Standard error response body and the FastAPI exception handlers.

- Application errors map to an HTTP status by error class
- Unknown errors become INTERNAL_ERROR and are written to the logs table
"""

import json
import traceback
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from .exceptions import (
    AuthError,
    BaseApplicationError,
    ConcurrencyError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    ValidationError,
)
from .logger import get_logger

logger = get_logger("errors")


class ErrorResponse:
    """Standard error response"""

    def __init__(self, error_code: str, message: str,
                 details: Optional[Dict[str, Any]] = None,
                 http_status: int = 400):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.http_status = http_status

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }

    def to_json_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.http_status,
            content=self.to_dict()
        )


class ErrorHandler:
    """Global error handler"""

    # Error codes whose status differs from their class default
    ERROR_CODE_STATUS_MAP = {
        "USER_ALREADY_EXISTS": 409,
        "CLIENT_TOKEN_CONFLICT": 409,
    }

    # Most specific class first
    ERROR_CLASS_STATUS_MAP = (
        (ValidationError, 400),
        (AuthError, 401),
        (PermissionDeniedError, 403),
        (NotFoundError, 404),
        (ConcurrencyError, 409),
        (ExternalServiceError, 502),
        (PersistenceError, 500),
    )

    @classmethod
    def status_for(cls, error: BaseApplicationError) -> int:
        if error.error_code in cls.ERROR_CODE_STATUS_MAP:
            return cls.ERROR_CODE_STATUS_MAP[error.error_code]
        for error_class, status in cls.ERROR_CLASS_STATUS_MAP:
            if isinstance(error, error_class):
                return status
        return 400

    @classmethod
    def handle_application_error(cls, error: BaseApplicationError) -> ErrorResponse:
        http_status = cls.status_for(error)
        if http_status >= 500:
            logger.error("%s: %s", error.error_code, error.message)
        return ErrorResponse(
            error_code=error.error_code,
            message=error.message,
            details=error.details,
            http_status=http_status
        )

    @classmethod
    def handle_http_exception(cls, error: HTTPException) -> ErrorResponse:
        return ErrorResponse(
            error_code="HTTP_ERROR",
            message=str(error.detail),
            details={"status_code": error.status_code},
            http_status=error.status_code
        )

    @classmethod
    def handle_validation_error(cls, error: Exception) -> ErrorResponse:
        errors = error.errors() if hasattr(error, "errors") else str(error)
        return ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            details={"validation_errors": json.loads(json.dumps(errors, default=str))},
            http_status=422
        )

    @classmethod
    def handle_unknown_error(cls, error: Exception, request: Optional[Request] = None) -> ErrorResponse:
        error_details = {
            "type": type(error).__name__,
            "message": str(error),
            "traceback": traceback.format_exc()
        }
        logger.exception("Unhandled error: %s", error)
        cls._log_system_error(error_details, request)

        return ErrorResponse(
            error_code="INTERNAL_ERROR",
            message=str(error) or "Internal server error",
            details={"error_type": type(error).__name__},
            http_status=500
        )

    @classmethod
    def _log_system_error(cls, error_details: Dict[str, Any], request: Optional[Request]):
        """Write the error to the logs table; fall back to the process log"""
        db = getattr(request.app.state, "db", None) if request is not None else None
        if db is None:
            return
        try:
            db.execute_query(
                "INSERT INTO logs(user_id, actor_id, action, detail_json) VALUES (?,?,?,?)",
                [None, None, "system_error", json.dumps(error_details)]
            )
        except PersistenceError:
            logger.error("Failed to log error to database: %s", error_details["message"])


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    return ErrorHandler.handle_application_error(exc).to_json_response()


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return ErrorHandler.handle_http_exception(exc).to_json_response()


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.handle_validation_error(exc).to_json_response()


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.handle_unknown_error(exc, request).to_json_response()

