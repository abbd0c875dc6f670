import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from datetime import datetime, timezone

from services.exceptions import AttendanceError

logger = logging.getLogger(__name__)


def _now_iso():
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _error_body(code: str, message: str, request: Request):
    return {
        "error": {"code": code, "message": message},
        "generated_at": _now_iso(),
        "latency_ms": getattr(request.state, "latency_ms", 0),
    }


def add_error_handlers(app: FastAPI):
    @app.exception_handler(AttendanceError)
    async def attendance_error_handler(request: Request, exc: AttendanceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, request),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "Server error", request),
        )
