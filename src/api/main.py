"""FastAPI application entry point."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Load environment variables from .env file
# Must run before settings are first read
load_dotenv()

from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from api.errors import register_exception_handlers
from api.routes import health, places, users
from utils.logging import setup_structured_logging
from utils.settings import get_settings

SERVICE_NAME = "PlaceShare API"

settings = get_settings()

setup_structured_logging(settings.log_level, service="placeshare-api")

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
# main.py is at <root>/src/api/main.py
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    if not settings.jwt_secret_key:
        logger.warning("JWT_SECRET_KEY not configured; signup, login and protected routes will fail")

    client = get_mongodb_client(settings.mongo_url)
    if client:
        if ensure_all_indexes(client[settings.database_name]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="API service for sharing places: users, places and their images",
    version=VERSION,
    lifespan=lifespan,
)

# Tokens travel in the Authorization header, not cookies, so a wildcard
# origin is fine and credentials stay off
cors_origins = settings.cors_origin_list
if cors_origins == ['*']:
    logger.info("CORS configured with wildcard origin ('*')")
else:
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)

register_exception_handlers(app)

app.include_router(places.router)
app.include_router(users.router)
app.include_router(health.router)

# Stored images are public assets; the directory is created at startup
app.mount(
    "/uploads/images",
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="images",
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        access_log=False,
    )
