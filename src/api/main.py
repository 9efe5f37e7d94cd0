"""FastAPI application entry point."""

import logging
import secrets
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from api.routes import auth, health, users
from adapter.mongodb.connection import create_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.oauth.google import GoogleOAuthClient
from services.token_issuer import TokenIssuer
from utils.config import get_settings
from utils.logging import setup_structured_logging

SERVICE_NAME = "Authentication Service"

settings = get_settings()

# Set up structured JSON logging
setup_structured_logging(settings.log_level, service="auth-service")

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build collaborators at startup, release them at shutdown."""
    try:
        app.state.token_issuer = TokenIssuer.from_settings(settings)
    except ValueError as e:
        logger.error("Token issuer unavailable: %s", e)

    try:
        app.state.oauth_client = GoogleOAuthClient(settings)
    except ValueError as e:
        logger.warning("Google sign-in disabled: %s", e)

    client = create_mongodb_client(settings)
    app.state.mongo_client = client
    if client:
        if ensure_all_indexes(client[settings.mongodb_database]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield  # App runs here

    if client:
        client.close()
        app.state.mongo_client = None


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="User registration, login, Google sign-in and profile management",
    version=VERSION,
    lifespan=lifespan,
)
app.state.settings = settings

# Authlib keeps the OAuth state parameter in the session between redirect and callback
session_secret = settings.session_secret_key
if not session_secret:
    session_secret = secrets.token_urlsafe(32)
    logger.warning(
        "SESSION_SECRET_KEY not set; using a per-process key. "
        "Google sign-in breaks across multiple workers."
    )
app.add_middleware(SessionMiddleware, secret_key=session_secret)

# With CORS_ORIGINS="*" browsers refuse credentials, so only allow them for explicit origins
if settings.cors_origins == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)


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
    # Application logs go through structured logging; skip uvicorn's access log
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        access_log=False
    )
