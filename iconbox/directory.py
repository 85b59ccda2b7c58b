"""
Directory store mapping icon names to stored filenames.

Supports an in-memory fallback for tests/local runs, a Redis hash for
production, and a SQL table (any SQLAlchemy URL) for deployments that
already run a database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

import redis
from redis import exceptions as redis_exceptions
from sqlalchemy import Column, String, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from iconbox.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class DirectoryStore(Protocol):
    """String-to-string mapping of icon name to stored filename."""

    def put(self, name: str, filename: str) -> None:
        ...

    def get(self, name: str) -> Optional[str]:
        ...

    def list_keys(self) -> list[str]:
        ...


@dataclass
class InMemoryDirectoryStore:
    """Insertion-ordered dict, for testing/dev."""

    entries: dict[str, str] = field(default_factory=dict)

    def put(self, name: str, filename: str) -> None:
        self.entries[name] = filename

    def get(self, name: str) -> Optional[str]:
        return self.entries.get(name)

    def list_keys(self) -> list[str]:
        return list(self.entries)

    def reset(self) -> None:
        self.entries.clear()


@dataclass
class RedisDirectoryStore:
    """Redis-backed directory using a single hash (field = icon name)."""

    url: str
    hash_key: str = "iconbox:icons"

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url, decode_responses=True)

    def put(self, name: str, filename: str) -> None:
        try:
            self.client.hset(self.hash_key, name, filename)
        except redis_exceptions.RedisError as exc:
            logger.exception("Failed to write %s to %s", name, self.hash_key)
            raise StoreUnavailableError("directory store write failed") from exc

    def get(self, name: str) -> Optional[str]:
        try:
            return self.client.hget(self.hash_key, name)
        except redis_exceptions.RedisError as exc:
            logger.exception("Failed to read %s from %s", name, self.hash_key)
            raise StoreUnavailableError("directory store read failed") from exc

    def list_keys(self) -> list[str]:
        try:
            return list(self.client.hkeys(self.hash_key))
        except redis_exceptions.RedisError as exc:
            logger.exception("Failed to list %s", self.hash_key)
            raise StoreUnavailableError("directory store list failed") from exc


Base = declarative_base()


class IconRow(Base):
    __tablename__ = "icons"

    name = Column(String, primary_key=True)
    filename = Column(String, nullable=False)


class SqlDirectoryStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDirectoryStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def put(self, name: str, filename: str) -> None:
        try:
            with self.Session() as session:
                row = session.get(IconRow, name)
                if row:
                    row.filename = filename
                else:
                    session.add(IconRow(name=name, filename=filename))
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Failed to write icon row %s", name)
            raise StoreUnavailableError("directory store write failed") from exc

    def get(self, name: str) -> Optional[str]:
        try:
            with self.Session() as session:
                row = session.get(IconRow, name)
                return row.filename if row else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to read icon row %s", name)
            raise StoreUnavailableError("directory store read failed") from exc

    def list_keys(self) -> list[str]:
        try:
            with self.Session() as session:
                stmt = select(IconRow.name).order_by(IconRow.name.asc())
                return list(session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            logger.exception("Failed to list icon rows")
            raise StoreUnavailableError("directory store list failed") from exc
