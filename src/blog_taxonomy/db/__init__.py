"""Database module exports."""

from blog_taxonomy.db.base import Base
from blog_taxonomy.db.session import SessionLocal, engine, get_session

__all__ = ["Base", "SessionLocal", "engine", "get_session"]
