from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.config import get_settings
from app.database import engine, Base
from app.api import categories, products, health
from app.api.errors import register_exception_handlers
from app import models  # noqa: F401  registers mappers on Base.metadata

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up application...")

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Catalog backend for a pharmacy inventory.

    - **Categories**: CRUD, name/description search
    - **Products**: CRUD, name/code lookup, expiration triage
    - **Discounts**: percentage price cuts by product, category,
      name/manufacturer or expiration window

    ## Discounts
    A discount always starts from the current stored price and is rounded
    half-up to the cent, so repeated discounts compound (20% twice on 10.00
    gives 8.00, then 6.40). Percentages outside 0-100 are rejected with 400;
    a selection that matches no product returns 404.

    ## Caching
    Product details are cached in Redis and invalidated on every change.
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router, prefix="/api/v1")
app.include_router(categories.router, prefix="/api/v1")
app.include_router(products.router, prefix="/api/v1")


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/api/v1/health"
    }
