"""FastAPI application for the Property Listings API."""
from contextlib import asynccontextmanager
from fastapi import FastAPI

from property_api.database import engine, Base
from property_api.errors import register_exception_handlers
from property_api.logging_config import get_logger, setup_logging
from property_api.routers import properties

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database tables on startup."""
    Base.metadata.create_all(bind=engine)
    logger.info("database_ready", url=engine.url.render_as_string(hide_password=True))
    yield


# Create FastAPI app
app = FastAPI(
    title="Property Listings API",
    description="CRUD, filtering, search and statistics for real-estate property listings",
    version="1.0.0",
    lifespan=lifespan
)

register_exception_handlers(app)
app.include_router(properties.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Property Listings API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "property_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
