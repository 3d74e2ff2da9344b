"""
Offseason API - FastAPI application.

Serves the onboarding endpoints consumed by the mobile app.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from offseason import __version__
from offseason.config import settings
from offseason.web.routes import router as onboarding_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Offseason", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Configure logging and log configuration on startup."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Offseason API starting up...")
    logger.info(f"  Environment: {settings.offseason_env}")
    logger.info(f"  Profiles table: {settings.profiles_table}")


# CORS for the Expo dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8081",
        "http://127.0.0.1:8081",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(onboarding_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
