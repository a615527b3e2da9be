"""Main FastAPI application."""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import SERVICE_VERSION, config
from app.errors import SchedulerError
from app.health import router as health_router
from app.logging_config import logger
from app.metrics import api_requests_total, api_request_duration
from app.routers.availability import router as availability_router
from app.routers.core import router as core_router
from app.routers.meetings import router as meetings_router
from app.scheduler import get_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    # Startup
    logger.info("application_starting", version=SERVICE_VERSION, environment=config.ENVIRONMENT)
    engine = get_engine()
    logger.info("slot_calendar_ready", **engine.slot_summary())
    logger.info("email_configured", configured=config.has_email_config())

    yield

    # Shutdown
    logger.info("application_shutting_down")


app = FastAPI(
    title="Corprex Scheduler API",
    description="Meeting availability and booking service",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_request_metrics(request: Request, call_next):
    """Count requests and time them for /metrics."""
    start = time.perf_counter()
    response = await call_next(request)
    route = request.scope.get("route")
    # Unmatched paths share one label so scans cannot grow the series set.
    endpoint = route.path if route is not None else "unmatched"
    api_requests_total.labels(request.method, endpoint, str(response.status_code)).inc()
    api_request_duration.observe(time.perf_counter() - start)
    return response


@app.exception_handler(SchedulerError)
async def scheduler_error_handler(request: Request, exc: SchedulerError):
    """Render engine errors as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed query/body parameters are reported as 400 {"error": ...}."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("query", "body", "path"))
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    logger.info("request_rejected", path=request.url.path, problems=problems)
    return JSONResponse(status_code=400, content={"error": "; ".join(problems) or "Invalid request"})


app.include_router(core_router)
app.include_router(health_router)
app.include_router(availability_router)
app.include_router(meetings_router)


# GET /metrics
# Gets: nothing
# Returns: Prometheus text exposition
# Example:
#   curl http://localhost:8000/metrics
@app.get("/metrics")
async def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
