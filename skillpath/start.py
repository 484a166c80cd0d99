"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from . import __version__
from .auth import auth_backend, fastapi_users, google_oauth_client
from .config import settings
from .db import init_db
from .routers import (
    bookmarks,
    career,
    content,
    custom_roadmaps,
    generation,
    health,
    mentor,
    progress,
    roadmaps,
    suggestions,
    usage,
)
from .schemas.users import UserCreate, UserRead, UserUpdate
from .utils.logging_config import EndpointLoggingRoute, setup_endpoint_logging, setup_logging
from .utils.middleware import setup_middleware

logger = logging.getLogger(__name__)

setup_logging()
setup_endpoint_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application")
    client = await init_db()
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.content.request_timeout,
        headers={"User-Agent": f"skillpath/{__version__}"},
        follow_redirects=True,
    )
    yield
    logger.info("Shutting down application")
    await app.state.http_client.aclose()
    client.close()


route_class = EndpointLoggingRoute if settings.logging.enable_endpoint_logging else APIRoute

app = FastAPI(
    title="Skillpath",
    version=__version__,
    route_class=route_class,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_middleware(app)

app.include_router(health.router)
app.include_router(usage.router)
app.include_router(progress.router)
app.include_router(bookmarks.router)
app.include_router(content.router)
app.include_router(roadmaps.router)
app.include_router(custom_roadmaps.router)
app.include_router(generation.router)
app.include_router(suggestions.router)
app.include_router(career.router)
app.include_router(mentor.router)

# Include FastAPI Users routers
## /login /logout
app.include_router(fastapi_users.get_auth_router(auth_backend), prefix="/auth/jwt", tags=["auth"])
## /register
app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/auth",
    tags=["auth"],
)
## /forgot-password /reset-password
app.include_router(
    fastapi_users.get_reset_password_router(),
    prefix="/auth",
    tags=["auth"],
)
## /request-verify-token /verify
app.include_router(
    fastapi_users.get_verify_router(UserRead),
    prefix="/auth",
    tags=["auth"],
)
app.include_router(
    fastapi_users.get_users_router(UserRead, UserUpdate),
    prefix="/users",
    tags=["users"],
)
app.include_router(
    fastapi_users.get_oauth_router(
        google_oauth_client,
        auth_backend,
        settings.auth.secret_key.get_secret_value(),
        associate_by_email=True,
        is_verified_by_default=True,
    ),
    prefix="/auth/google",
    tags=["auth"],
)
