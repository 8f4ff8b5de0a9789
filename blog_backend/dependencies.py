"""
Dependency wiring for the FastAPI app.

The store and storage clients are built once by ``create_app`` and kept on
``app.state``; route handlers receive them through ``Depends``.
"""

from __future__ import annotations

import logging
import secrets

from fastapi import Depends, Header, HTTPException, Request

from blog_backend.config import Settings
from blog_backend.storage import InMemoryStorageClient, LocalStorageClient, StorageClient
from blog_backend.store import (
    FirestorePostStore,
    InMemoryPostStore,
    PostStore,
    SqlPostStore,
)

logger = logging.getLogger(__name__)


def _firestore_client(project_id: str):
    import firebase_admin
    from firebase_admin import firestore

    try:
        firebase_admin.get_app()
    except ValueError:
        firebase_admin.initialize_app(options={"projectId": project_id})
    return firestore.client()


def build_post_store(settings: Settings) -> PostStore:
    if settings.use_in_memory_backends:
        store = InMemoryPostStore()
    elif settings.firestore_project_id:
        store = FirestorePostStore(
            _firestore_client(settings.firestore_project_id),
            collection=settings.posts_collection,
        )
    elif settings.database_url:
        store = SqlPostStore(settings.database_url)
    else:
        store = InMemoryPostStore()
    logger.info("Post store: %s", store.__class__.__name__)
    return store


def build_storage_client(settings: Settings) -> StorageClient:
    if settings.use_in_memory_backends:
        storage = InMemoryStorageClient()
    else:
        storage = LocalStorageClient(settings.upload_dir)
    logger.info("Upload storage: %s", storage.__class__.__name__)
    return storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_post_store(request: Request) -> PostStore:
    return request.app.state.post_store


def get_storage_client(request: Request) -> StorageClient:
    return request.app.state.storage


def require_admin(
    x_admin_token: str | None = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Gate for the admin routes. Open when no admin token is configured."""
    if not settings.admin_token:
        return
    if not x_admin_token or not secrets.compare_digest(
        x_admin_token.encode("utf-8"), settings.admin_token.encode("utf-8")
    ):
        raise HTTPException(status_code=403, detail="Forbidden")
