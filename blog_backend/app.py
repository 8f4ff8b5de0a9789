"""
FastAPI application entry point for the blog backend.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_backend.config import Settings, get_settings
from blog_backend.dependencies import build_post_store, build_storage_client
from blog_backend.errors import BlogBackendError
from blog_backend.routes import router
from blog_backend.storage import StorageClient
from blog_backend.store import PostStore
from blog_backend.uploads import files_router, router as upload_router

logger = logging.getLogger(__name__)


async def backend_error_handler(request: Request, exc: BlogBackendError):
    logger.exception("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    *,
    post_store: Optional[PostStore] = None,
    storage: Optional[StorageClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Blog Backend (FastAPI)", version="0.1.0")

    app.state.settings = settings
    app.state.post_store = (
        post_store if post_store is not None else build_post_store(settings)
    )
    app.state.storage = (
        storage if storage is not None else build_storage_client(settings)
    )
    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN is not set; admin routes are open")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BlogBackendError, backend_error_handler)

    app.include_router(router, prefix=settings.api_prefix)
    app.include_router(upload_router, prefix=settings.api_prefix)
    app.include_router(files_router, prefix=settings.uploads_path.rstrip("/"))
    return app
