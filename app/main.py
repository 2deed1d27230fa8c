import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Import all models to ensure they're registered with SQLAlchemy Base
# This is needed for relationships between models in different files
from . import (
    models,  # noqa: F401
    models_suggestion,  # noqa: F401
    models_visit,  # noqa: F401
)
from .config import ALLOWED_ORIGINS, VISIT_SCHEDULER_ENABLED
from .database import Base, engine
from .domain.customers import router as customers_router
from .domain.products import router as products_router
from .domain.suggestions import router as suggestions_router
from .domain.visits import router as visits_router
from .errors import register_exception_handlers
from .workers.visit_worker import run_visit_worker

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    visit_worker = None
    if VISIT_SCHEDULER_ENABLED:
        visit_worker = asyncio.create_task(run_visit_worker())
        logger.info("Visit scheduler started")
    else:
        logger.info("Visit scheduler disabled")

    yield

    logger.info("Application shutting down...")
    if visit_worker is not None:
        visit_worker.cancel()
        try:
            await visit_worker
        except asyncio.CancelledError:
            logger.info("Visit scheduler stopped")


app = FastAPI(
    title="Sales Management API",
    version="1.0.0",
    docs_url="/api-docs",
    openapi_url="/api-docs/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(customers_router, prefix="/api")
app.include_router(products_router, prefix="/api")
app.include_router(visits_router, prefix="/api")
app.include_router(suggestions_router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Sales Management API"}


@app.get("/health")
def health():
    return {"status": "healthy"}
