"""
Blog backend package.

A FastAPI service exposing CRUD routes over a post store (in-memory,
SQLAlchemy or Firestore) and a single-image upload endpoint.
"""
