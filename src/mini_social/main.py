# src/mini_social/main.py
"""Main entry point for the Mini Social application."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import RequestResponseEndpoint

from mini_social.api import (
    auth_router,
    comments_router,
    posts_router,
    stories_router,
    users_router,
)
from mini_social.api.dependencies import enforce_rate_limit
from mini_social.core.settings import settings
from mini_social.db.session import store
from mini_social.services.media import close_media_uploader

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

# Initialize FastAPI app
app = FastAPI(
    title="Mini Social API",
    description="Minimal social network backend",
    version=settings.app_version,
    dependencies=[Depends(enforce_rate_limit)],
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


@app.middleware("http")
async def add_security_headers(request: Request, call_next: RequestResponseEndpoint) -> Response:
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


# Include API routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(stories_router, prefix="/api")


@app.on_event("startup")
async def on_startup() -> None:
    # Handlers reject requests with 503 until the store is connected.
    store.connect(create_tables=settings.auto_create_tables)
    logger.info("%s %s ready", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_media_uploader()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok" if store.ready else "starting"}


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Liveness text response."""
    return "Backend is running!"


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run("mini_social.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()
