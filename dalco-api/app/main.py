from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import get_db
from app.logging_config import get_logger, setup_logging
from app.routers import analytics, leads, messages, system
from app.services.errors import PipelineError

setup_logging(settings.log_level)
logger = get_logger("main")

APP_VERSION = "1.0.0"

app = FastAPI(
    title="DalCo API",
    description="Conversational-commerce backend: WhatsApp messages, inventory and orders",
    version=APP_VERSION,
)

cors_origins = [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
if not cors_origins:
    cors_origins = ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(messages.router)
app.include_router(leads.router)
app.include_router(analytics.router)
app.include_router(system.router)


def _error_body(error: str, exc: Exception) -> dict:
    body = {"success": False, "error": error}
    if settings.debug:
        body["type"] = type(exc).__name__
    return body


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Route not found",
                "path": request.url.path,
                "method": request.method,
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": str(exc.detail)})


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError):
    logger.error(f"Error: {exc}", extra={"context": {"path": request.url.path}})
    return JSONResponse(status_code=500, content=_error_body(str(exc), exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Error: {exc}", exc_info=exc, extra={"context": {"path": request.url.path}})
    return JSONResponse(status_code=500, content=_error_body(str(exc) or "Server Error", exc))


@app.get("/")
async def root():
    return {
        "success": True,
        "message": "Welcome to DalCo API - Data-Link Co-pilot",
        "version": APP_VERSION,
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error(f"Health check failed: {exc}")
        return JSONResponse(
            status_code=503,
            content={"success": False, "status": "unhealthy", "error": str(exc)},
        )
    return {
        "success": True,
        "status": "healthy",
        "services": {
            "api": "running",
            "database": "connected",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }
