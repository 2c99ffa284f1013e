"""
Hotel reservations - FastAPI Backend Application
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
import structlog

from hotelbook.config import settings
from hotelbook.exceptions import ReservationServiceError
from hotelbook.api import reservations

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(
        "Starting reservations API",
        version="1.0.0",
        hotel=settings.hotel_name,
        status_policy=settings.status_policy,
    )
    yield
    logger.info("Shutting down reservations API")


# Create FastAPI application
app = FastAPI(
    title=f"{settings.hotel_name} Reservations",
    description="Hotel room booking and reservation administration",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_payload(reason: str) -> dict:
    return {"error": reason, "timestamp": datetime.now(timezone.utc).isoformat()}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "Request handled",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


@app.exception_handler(ReservationServiceError)
async def reservation_error_handler(request: Request, exc: ReservationServiceError):
    if exc.status_code >= 500:
        logger.error("Reservation request failed", path=request.url.path, error=exc.reason)
    else:
        logger.warning("Reservation request rejected", path=request.url.path, error=exc.reason)
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.reason))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        details.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    reason = "invalid request: " + "; ".join(details)
    logger.warning("Malformed request", path=request.url.path, error=reason)
    return JSONResponse(status_code=400, content=error_payload(reason))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content=error_payload("internal server error"))


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    from hotelbook.database import SessionLocal

    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Include API routers
app.include_router(reservations.router, prefix="/api", tags=["Reservations"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hotelbook.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
