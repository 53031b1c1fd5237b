"""SQLAlchemy models for the two record kinds.

The surrogate ``pk`` columns are storage-internal; records handed to callers
are keyed by ``student_id`` / ``discussion_id`` only.
"""
from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, Text

from .session import Base


class Student(Base):
    __tablename__ = "students"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(String(64), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    registered = Column(Boolean, nullable=True)


class Discussion(Base):
    __tablename__ = "discussions"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    discussion_id = Column(BigInteger, unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, default="Anonymous")
    email = Column(String(255), nullable=False, default="")
    question = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    answer = Column(Text, nullable=True)
    answered_at = Column(DateTime(timezone=True), nullable=True)
