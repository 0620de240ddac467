"""
FastAPI Main Application

Entry point for the XAI Attribution Engine API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .routes import router
from .schemas import HealthResponse
from ..config import API_CONFIG, LOGGING_CONFIG, STORE_CONFIG
from ..data.store import get_store

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOGGING_CONFIG["level"]),
    format=LOGGING_CONFIG["format"]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    logger.info("Starting XAI Attribution Engine API...")
    if STORE_CONFIG["persist"]:
        get_store().load_all()
    yield
    if STORE_CONFIG["persist"]:
        get_store().save_all()
    logger.info("Shutting down API...")


# Create FastAPI app
app = FastAPI(
    title=API_CONFIG["title"],
    description=API_CONFIG["description"],
    version=API_CONFIG["version"],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(router, prefix=API_CONFIG["prefix"])


@app.get("/", response_model=HealthResponse)
async def root():
    """Root endpoint - health check."""
    return HealthResponse(
        status="healthy",
        version=API_CONFIG["version"],
        datasets_loaded=len(get_store()),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return await root()


def run_server():
    """Run the API server."""
    uvicorn.run(
        "attribution_engine.api.main:app",
        host=API_CONFIG["host"],
        port=API_CONFIG["port"],
        reload=True,
    )


if __name__ == "__main__":
    run_server()
