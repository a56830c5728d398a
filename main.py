import json
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from core.errors import AppError, StoreFailure, ValidationError
from core.logging import configure_logging
from db import init_db
from api.auth.views import router as auth_router
from api.assets.views import router as assets_router
from api.maintenance.views import router as maintenance_router
from api.maintenance.views import asset_maintenance_router
from api.dashboard.views import router as dashboard_router

configure_logging()
logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Local runs create tables on the fly; other environments use Alembic
    if settings.APP_ENV in ("local", "dev"):
        await init_db()
    logger.info("Starting maintenance API (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Asset Maintenance API",
    description="API for tracking assets and their maintenance schedules",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Error translation ----------

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]

    error = ValidationError(first.get("msg", "Invalid request"), field=".".join(loc) or None)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    error = StoreFailure("Internal storage error")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Authentication endpoints
app.include_router(auth_router, prefix="/api/v1")

# Business endpoints
app.include_router(assets_router, prefix="/api/v1")
app.include_router(asset_maintenance_router, prefix="/api/v1")
app.include_router(maintenance_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
