"""
Main entry point for the Credit-Flex Minute API.

This module defines the FastAPI application and includes the daily episode
and agent relay routers.  Settings are validated when the application
starts, so a missing API key stops the deployment instead of failing every
request.
"""

from contextlib import asynccontextmanager

from celery.result import AsyncResult
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings, validate_settings
from .log import get_logger, setup_logging
from .routers import credflex, daily
from .tasks import celery_app, generate_daily_episode

_settings = get_settings()
setup_logging(level=_settings.log_level, format=_settings.log_format)
logger = get_logger(__name__)

# Body and Allow header for a wrong verb on the public endpoints.
METHOD_NOT_ALLOWED = {
    "/api/daily": ({"error": "Use GET or POST"}, "GET, POST"),
    "/api/credflex": ({"error": "Use POST"}, "POST"),
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    validate_settings(settings)
    logger.info("startup", provider=settings.provider)
    yield


app = FastAPI(title="Credit-Flex Minute API", version="0.1.0", lifespan=lifespan)

app.include_router(daily.router, prefix="/api", tags=["daily"])
app.include_router(credflex.router, prefix="/api", tags=["credflex"])


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Any verb a public endpoint doesn't take gets its JSON 405."""
    known = METHOD_NOT_ALLOWED.get(request.url.path.rstrip("/"))
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and known is not None:
        body, allow = known
        return JSONResponse(status_code=exc.status_code, content=body, headers={"Allow": allow})
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unhandled errors still answer with the JSON error shape."""
    logger.error(
        "unexpected_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "message": str(exc) or type(exc).__name__},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Return a simple status indicator."""
    return {"status": "ok"}


@app.post("/tasks/daily", status_code=status.HTTP_202_ACCEPTED)
def enqueue_daily_episode() -> dict[str, str]:
    """Enqueue the scheduled episode job and return the task ID."""
    task = generate_daily_episode.delay()
    return {"task_id": task.id}


@app.get("/tasks/{task_id}")
def get_task_status(task_id: str) -> dict:
    """Retrieve the status and, once finished, the episode of a generation task."""
    async_result = AsyncResult(task_id, app=celery_app)
    if async_result is None or async_result.id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    response = {"task_id": task_id, "status": async_result.status.lower()}
    if async_result.successful():
        response["result"] = async_result.result
    return response
