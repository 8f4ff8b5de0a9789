"""
Post store abstraction with in-memory, SQLAlchemy and Firestore implementations.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Optional, Protocol

from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from sqlalchemy import Column, Integer, String, Text, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_backend.errors import StoreError

MUTABLE_FIELDS = ("title", "content", "image")


class PostStore(Protocol):
    """Interface for post persistence."""

    def list(self) -> list["PostRecord"]:
        ...

    def get(self, post_id: str) -> Optional["PostRecord"]:
        ...

    def create(self, fields: dict) -> "PostRecord":
        ...

    def update(self, post_id: str, fields: dict) -> Optional["PostRecord"]:
        ...

    def delete(self, post_id: str) -> bool:
        ...


@dataclass(frozen=True)
class PostRecord:
    id: str
    title: str
    content: str
    image: str = ""

    def as_dict(self) -> dict:
        return {
            "_id": self.id,
            "title": self.title,
            "content": self.content,
            "image": self.image,
        }


def _mutable_fields(fields: dict) -> Dict[str, Any]:
    return {key: fields[key] for key in MUTABLE_FIELDS if key in fields}


class InMemoryPostStore:
    """Dict-backed store for development and tests. Keeps insertion order."""

    def __init__(self):
        self.posts: Dict[str, PostRecord] = {}

    def list(self) -> list[PostRecord]:
        return list(self.posts.values())

    def get(self, post_id: str) -> Optional[PostRecord]:
        return self.posts.get(post_id)

    def create(self, fields: dict) -> PostRecord:
        data = _mutable_fields(fields)
        record = PostRecord(
            id=uuid.uuid4().hex,
            title=data["title"],
            content=data["content"],
            image=data.get("image") or "",
        )
        self.posts[record.id] = record
        return record

    def update(self, post_id: str, fields: dict) -> Optional[PostRecord]:
        record = self.posts.get(post_id)
        if record is None:
            return None
        updated = replace(record, **_mutable_fields(fields))
        self.posts[post_id] = updated
        return updated

    def delete(self, post_id: str) -> bool:
        return self.posts.pop(post_id, None) is not None

    def reset(self) -> None:
        """Clear all stored posts (useful in tests)."""
        self.posts.clear()


class SqlPostStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (Postgres in
    production, SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlPostStore")
        engine_kwargs: dict = {"future": True, "pool_pre_ping": True}
        if database_url.startswith("sqlite") and ":memory:" in database_url:
            # One shared connection, otherwise each thread sees an empty database.
            engine_kwargs.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            engine_kwargs["pool_recycle"] = 1800
        self.engine = create_engine(database_url, **engine_kwargs)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.Session() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    @staticmethod
    def _to_record(row: "PostRow") -> PostRecord:
        return PostRecord(
            id=row.post_id,
            title=row.title,
            content=row.content,
            image=row.image or "",
        )

    def _find(self, session: Session, post_id: str) -> Optional["PostRow"]:
        stmt = select(PostRow).where(PostRow.post_id == post_id)
        return session.execute(stmt).scalar_one_or_none()

    def list(self) -> list[PostRecord]:
        with self._session() as session:
            rows = session.execute(select(PostRow).order_by(PostRow.seq.asc()))
            return [self._to_record(row) for row in rows.scalars()]

    def get(self, post_id: str) -> Optional[PostRecord]:
        with self._session() as session:
            row = self._find(session, post_id)
            return self._to_record(row) if row else None

    def create(self, fields: dict) -> PostRecord:
        data = _mutable_fields(fields)
        with self._session() as session:
            row = PostRow(
                post_id=uuid.uuid4().hex,
                title=data["title"],
                content=data["content"],
                image=data.get("image") or "",
            )
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def update(self, post_id: str, fields: dict) -> Optional[PostRecord]:
        with self._session() as session:
            row = self._find(session, post_id)
            if not row:
                return None
            for key, value in _mutable_fields(fields).items():
                setattr(row, key, value)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def delete(self, post_id: str) -> bool:
        with self._session() as session:
            row = self._find(session, post_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True


class FirestorePostStore:
    """
    Firestore-backed implementation. Each post is one document in
    ``collection``; Firestore assigns the document id on create.
    """

    def __init__(self, client, collection: str = "posts"):
        self.client = client
        self.collection = collection

    def _collection(self):
        return self.client.collection(self.collection)

    @contextmanager
    def _wrap_errors(self) -> Iterator[None]:
        try:
            yield
        except google_exceptions.GoogleAPIError as exc:
            raise StoreError(str(exc)) from exc

    @staticmethod
    def _to_record(post_id: str, data: dict) -> PostRecord:
        return PostRecord(
            id=post_id,
            title=data.get("title", ""),
            content=data.get("content", ""),
            image=data.get("image") or "",
        )

    def list(self) -> list[PostRecord]:
        with self._wrap_errors():
            docs = self._collection().order_by("createdAt").stream()
            return [self._to_record(doc.id, doc.to_dict() or {}) for doc in docs]

    def get(self, post_id: str) -> Optional[PostRecord]:
        with self._wrap_errors():
            doc = self._collection().document(post_id).get()
            if not doc.exists:
                return None
            return self._to_record(doc.id, doc.to_dict() or {})

    def create(self, fields: dict) -> PostRecord:
        data = _mutable_fields(fields)
        data["image"] = data.get("image") or ""
        with self._wrap_errors():
            doc_ref = self._collection().document()
            doc_ref.set({**data, "createdAt": SERVER_TIMESTAMP})
        return self._to_record(doc_ref.id, data)

    def update(self, post_id: str, fields: dict) -> Optional[PostRecord]:
        changes = _mutable_fields(fields)
        with self._wrap_errors():
            doc_ref = self._collection().document(post_id)
            doc = doc_ref.get()
            if not doc.exists:
                return None
            if changes:
                doc_ref.update(changes)
            return self._to_record(post_id, {**(doc.to_dict() or {}), **changes})

    def delete(self, post_id: str) -> bool:
        with self._wrap_errors():
            doc_ref = self._collection().document(post_id)
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
            return True


Base = declarative_base()


class PostRow(Base):
    __tablename__ = "posts"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String(32), nullable=False, unique=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    image = Column(String, nullable=False, default="")
