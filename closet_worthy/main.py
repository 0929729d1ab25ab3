"""
FastAPI application entry point
Main application factory and configuration
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from closet_worthy.api.api import api_router
from closet_worthy.core.config import settings
from closet_worthy.core.database import engine
from closet_worthy.core.logging_config import setup_logging

logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    Validates database connection on startup
    Reference: https://fastapi.tiangolo.com/advanced/events/
    """
    setup_logging()

    if not settings.ai_enabled:
        logger.warning("ANTHROPIC_API_KEY not set - AI features will be disabled")

    # Startup: Test database connection
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("✓ Database connection successful")
    except Exception as e:
        logger.error(f"✗ Database connection failed: {e}")
        logger.error(
            "Please check:\n"
            "1. DATABASE_URL is set correctly in .env or the environment\n"
            "2. The database accepts connections from this host\n"
            "3. Migrations have been applied (alembic upgrade head)"
        )
        # Don't raise - let the app start so health checks can report it

    yield

    # Shutdown: Dispose of database connections
    await engine.dispose()
    logger.info("Database connections closed")


# Create FastAPI application instance
# Reference: https://fastapi.tiangolo.com/reference/fastapi/
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Wardrobe inventory with AI price estimates and resale listing copy",
    docs_url="/docs",  # Swagger UI documentation
    redoc_url="/redoc",  # ReDoc documentation
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include API routers
app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    AI endpoints answer malformed bodies with their own {"error": ...} shape
    Every other route keeps FastAPI's default 422 {"detail": [...]}
    Reference: https://fastapi.tiangolo.com/tutorial/handling-errors/#reuse-fastapis-exception-handlers
    """
    if request.url.path.startswith(f"{settings.API_PREFIX}/ai/"):
        logger.warning(f"Rejected AI request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": INVALID_BODY})
    return await request_validation_exception_handler(request, exc)


@app.get("/")
async def root():
    """
    Root endpoint
    Provides basic information about the API
    """
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "docs": "/docs",
    }
