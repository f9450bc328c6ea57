from contextlib import asynccontextmanager
from typing import Annotated
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
import time
import logging
from resources_api.api.api_router import api_router
from resources_api.core.config import settings
from resources_api.core.exceptions import DataAccessError
from resources_api.db.session import async_engine, get_async_db, ping, test_database_connection

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events"""
    # Startup
    logger.info(f"🚀 Starting {settings.PROJECT_NAME}...")

    # Continue without a database - requests will fail with StorageError
    if not await test_database_connection():
        logger.warning("⚠️ Database is not reachable, starting anyway")

    logger.info(f"🎉 {settings.PROJECT_NAME} started successfully")

    yield

    # Shutdown
    logger.info(f"🛑 Shutting down {settings.PROJECT_NAME}...")
    await async_engine.dispose()
    logger.info(f"👋 {settings.PROJECT_NAME} shutdown complete")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Register of drivers, identified by their PESEL numbers.",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.4f}s")
    return response

@app.exception_handler(DataAccessError)
async def data_access_exception_handler(request: Request, exc: DataAccessError):
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message}
    )

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/", tags=["Root"])
async def read_root():
    """Entry point of the drivers register, pointing at the resource and its docs."""
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "drivers": f"{settings.API_PREFIX}/drivers",
        "docs": app.docs_url,
    }

@app.get("/health", tags=["Health"])
async def health_check(db: Annotated[AsyncSession, Depends(get_async_db)]):
    """Service health, including whether the drivers database answers."""
    database_up = await ping(db)
    return {
        "status": "healthy" if database_up else "degraded",
        "database": "up" if database_up else "down",
        "timestamp": time.time(),
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION
    }
