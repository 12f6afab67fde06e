"""Main FastAPI application for the Seaward backend."""
import logging

from fastapi import FastAPI

from seaward import __version__
from seaward.config import LOG_LEVEL
from seaward.db.init import init_db
from seaward.middleware.cors import add_cors_middleware
from seaward.routers import (
    agent_router,
    auth_router,
    backbone_router,
    delegate_router,
    galatea_router,
    media_router,
    messages_router,
    projects_router,
    sessions_router,
    users_router,
)
from seaward.utils.logger import setup_logging

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Seaward API",
    description="Chat assistant backend: projects, sessions, agent streaming and engine delegation",
    version=__version__,
)

add_cors_middleware(app)


@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup."""
    try:
        init_db()
        logger.info("Database tables initialized successfully.")
    except Exception as e:
        logger.warning(f"Database initialization failed: {str(e)}")
        logger.warning("Server will continue but database operations may fail.")

    logger.info("Application startup complete.")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to the Seaward API",
        "title": "Seaward API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


app.include_router(auth_router, prefix="/auth")  # /auth/sign-up, /auth/sign-in, /auth/me
app.include_router(users_router, prefix="/api")
app.include_router(projects_router, prefix="/api")
app.include_router(sessions_router, prefix="/api")
app.include_router(messages_router, prefix="/api")
app.include_router(media_router, prefix="/api")
app.include_router(agent_router, prefix="/api")
app.include_router(backbone_router, prefix="/api")
app.include_router(delegate_router, prefix="/api")
app.include_router(galatea_router, prefix="/api")
