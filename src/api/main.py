"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before anything reads settings from the environment
load_dotenv()

from api.routes import auth, health, phone_otp, questions
from utils.config import get_settings
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import get_mongodb_client, get_database_name
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

# Version lives in pyproject.toml
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Sigmacoder API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: validate configuration and prepare MongoDB."""
    # Fails fast when JWT_SECRET or a numeric setting is missing/invalid
    settings = get_settings()
    if not settings.twilio_configured:
        logger.warning("Twilio Verify not configured, phone OTP routes will return 503")

    client = get_mongodb_client()
    if client:
        if ensure_all_indexes(client[get_database_name()]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Identity service: registration, password login and phone OTP login",
    version=VERSION,
    lifespan=lifespan,
)

# "*" cannot be combined with credentials; explicit origins can
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "HEAD", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "X-Request-With"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(phone_otp.router)
app.include_router(questions.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "ping": "pong",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        access_log=False,
    )
