"""
HTTP routes for posts. The admin surface reuses the public handlers behind
``require_admin``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from blog_backend.dependencies import get_post_store, require_admin
from blog_backend.schemas import HealthResponse, MessageResponse, PostOut, PostPayload
from blog_backend.store import PostStore

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


def _payload_fields(payload: PostPayload) -> dict:
    fields = payload.model_dump(exclude_unset=True)
    if "image" in fields:
        fields["image"] = fields["image"] or ""
    return fields


@router.get("/posts", response_model=list[PostOut], tags=["posts"])
def list_posts(store: PostStore = Depends(get_post_store)):
    return [post.as_dict() for post in store.list()]


@router.get("/posts/{post_id}", response_model=PostOut, tags=["posts"])
def get_post(post_id: str, store: PostStore = Depends(get_post_store)):
    post = store.get(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post.as_dict()


@router.post("/posts", response_model=PostOut, status_code=201, tags=["posts"])
def create_post(payload: PostPayload, store: PostStore = Depends(get_post_store)):
    post = store.create(_payload_fields(payload))
    logger.info("Created post %s", post.id)
    return post.as_dict()


@router.put("/posts/{post_id}", response_model=PostOut, tags=["posts"])
def update_post(
    post_id: str,
    payload: PostPayload,
    store: PostStore = Depends(get_post_store),
):
    """
    Replace the fields present in the body; an omitted ``image`` is kept.
    """
    post = store.update(post_id, _payload_fields(payload))
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post.as_dict()


@router.delete("/posts/{post_id}", response_model=MessageResponse, tags=["posts"])
def delete_post(post_id: str, store: PostStore = Depends(get_post_store)):
    if not store.delete(post_id):
        raise HTTPException(status_code=404, detail="Post not found")
    logger.info("Deleted post %s", post_id)
    return MessageResponse(message="Post deleted successfully")


admin_router.add_api_route(
    "/posts", list_posts, methods=["GET"], response_model=list[PostOut]
)
admin_router.add_api_route(
    "/posts", create_post, methods=["POST"], response_model=PostOut, status_code=201
)
admin_router.add_api_route(
    "/posts/{post_id}",
    delete_post,
    methods=["DELETE"],
    response_model=MessageResponse,
)
router.include_router(admin_router)


@router.get("/health", response_model=HealthResponse, tags=["health"])
def health(store: PostStore = Depends(get_post_store)):
    return HealthResponse(status="healthy", store=store.__class__.__name__)
