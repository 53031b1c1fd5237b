"""Persistent store adapter backed by SQLAlchemy.

Each entity kind is exposed as a collection with document-store style
operations (count/find/insert/update/delete) over plain dict records keyed by
their wire field names, so the fallback resolver can swap it for the in-memory
store without the services noticing.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from sqlalchemy import delete, func, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from kipkuliah.db.models import Discussion, Student
from kipkuliah.db.session import Base, create_store_engine, make_sessionmaker
from kipkuliah.domain.records import DESCENDING, DISCUSSIONS, STUDENTS, as_utc
from kipkuliah.domain.seed import seed_discussions, seed_students

logger = logging.getLogger("kipkuliah.store")


class StoreError(Exception):
    """Base class for persistent store failures."""


class StoreConnectionError(StoreError):
    """Raised when the database cannot be reached or prepared at startup."""


class StoreOperationError(StoreError):
    """Raised when an individual query against a connected store fails."""


class SQLCollection:
    """CRUD helpers for one table, speaking in wire-field records."""

    model: type = None
    columns: dict[str, str] = {}
    datetime_fields: tuple[str, ...] = ()

    def __init__(self, factory: sessionmaker) -> None:
        self._factory = factory

    @property
    def name(self) -> str:
        return self.model.__tablename__

    @contextmanager
    def _session(self):
        session: Session = self._factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            raise StoreOperationError(f"{self.name}: {exc}") from exc
        finally:
            session.close()

    # -------------------------- mapping --------------------------
    def _column(self, field: str):
        try:
            return getattr(self.model, self.columns[field])
        except KeyError:
            raise ValueError(f"Unknown field {field!r} for {self.name}") from None

    def _where(self, stmt, query: Optional[Mapping[str, Any]]):
        for field, value in (query or {}).items():
            stmt = stmt.where(self._column(field) == value)
        return stmt

    def _values(self, record: Mapping[str, Any]) -> dict:
        values = {}
        for field, value in record.items():
            if field not in self.columns:
                raise ValueError(f"Unknown field {field!r} for {self.name}")
            if isinstance(value, datetime):
                value = as_utc(value)
            values[self.columns[field]] = value
        return values

    def _to_record(self, entity) -> dict:
        record = {field: getattr(entity, attr) for field, attr in self.columns.items()}
        for field in self.datetime_fields:
            record[field] = as_utc(record[field])
        return record

    # -------------------------- operations --------------------------
    def count(self) -> int:
        with self._session() as session:
            return session.execute(select(func.count()).select_from(self.model)).scalar_one()

    def insert_many(self, records: Iterable[Mapping[str, Any]]) -> int:
        entities = [self.model(**self._values(record)) for record in records]
        with self._session() as session:
            session.add_all(entities)
            session.commit()
        return len(entities)

    def find(
        self,
        query: Optional[Mapping[str, Any]] = None,
        sort: Optional[Sequence[tuple[str, int]]] = None,
    ) -> list[dict]:
        stmt = self._where(select(self.model), query)
        for field, direction in sort or ():
            column = self._column(field)
            stmt = stmt.order_by(column.desc() if direction == DESCENDING else column.asc())
        with self._session() as session:
            return [self._to_record(entity) for entity in session.execute(stmt).scalars().all()]

    def find_one(self, query: Mapping[str, Any]) -> Optional[dict]:
        stmt = self._where(select(self.model), query).limit(1)
        with self._session() as session:
            entity = session.execute(stmt).scalars().first()
            return self._to_record(entity) if entity else None

    def insert_one(self, record: Mapping[str, Any]) -> dict:
        entity = self.model(**self._values(record))
        with self._session() as session:
            session.add(entity)
            session.commit()
            return self._to_record(entity)

    def update_one(self, query: Mapping[str, Any], patch: Mapping[str, Any]) -> int:
        """Patch the first matching row; returns the number of rows matched."""
        values = self._values(patch)
        with self._session() as session:
            pk = session.execute(self._where(select(self.model.pk), query).limit(1)).scalar_one_or_none()
            if pk is None:
                return 0
            session.execute(update(self.model).where(self.model.pk == pk).values(**values))
            session.commit()
            return 1

    def delete_one(self, query: Mapping[str, Any]) -> int:
        with self._session() as session:
            pk = session.execute(self._where(select(self.model.pk), query).limit(1)).scalar_one_or_none()
            if pk is None:
                return 0
            session.execute(delete(self.model).where(self.model.pk == pk))
            session.commit()
            return 1


class StudentCollection(SQLCollection):
    model = Student
    columns = {"studentId": "student_id", "name": "name", "registered": "registered"}


class DiscussionCollection(SQLCollection):
    model = Discussion
    columns = {
        "id": "discussion_id",
        "name": "name",
        "email": "email",
        "question": "question",
        "createdAt": "created_at",
        "answer": "answer",
        "answeredAt": "answered_at",
    }
    datetime_fields = ("createdAt", "answeredAt")


class SQLStore:
    """A live database connection exposing one collection per entity kind."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        factory = make_sessionmaker(engine)
        self._collections: dict[str, SQLCollection] = {
            STUDENTS: StudentCollection(factory),
            DISCUSSIONS: DiscussionCollection(factory),
        }

    @classmethod
    def connect(cls, url: str) -> "SQLStore":
        """Open the engine, check a round-trip and make sure the tables exist."""
        try:
            engine = create_store_engine(url)
        except (SQLAlchemyError, ImportError, RuntimeError) as exc:
            raise StoreConnectionError(f"cannot create engine: {exc}") from exc
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            engine.dispose()
            raise StoreConnectionError(f"cannot reach database: {exc}") from exc
        return cls(engine)

    def collection(self, kind: str) -> SQLCollection:
        try:
            return self._collections[kind]
        except KeyError:
            raise ValueError(f"Unknown entity kind {kind!r}") from None

    def seed_if_empty(self) -> list[str]:
        """Load the seed records into every empty collection."""
        seeded = []
        for kind, records in ((STUDENTS, seed_students()), (DISCUSSIONS, seed_discussions())):
            collection = self.collection(kind)
            if collection.count() == 0:
                collection.insert_many(records)
                logger.info("Initialized %s collection with seed data", kind)
                seeded.append(kind)
        return seeded

    def close(self) -> None:
        self.engine.dispose()
