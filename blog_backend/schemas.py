"""
Pydantic schemas for the blog backend.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostPayload(BaseModel):
    """Body accepted by both create and update."""

    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    image: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class PostOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    content: str
    image: str = ""


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    message: str
    imageUrl: str


class HealthResponse(BaseModel):
    status: str
    store: str
