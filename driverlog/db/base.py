"""SQLAlchemy Declarative Base: shared base class for the log and stop models.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for the SQLite schema
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all driver log ORM models."""
    pass
