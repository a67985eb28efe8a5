"""LogEntry ORM: persists one driver-day work log header.

Invariants:
    - id is an AUTOINCREMENT integer primary key, never reused
    - created_at is server-assigned ISO-8601 text (UTC)
    - date is YYYY-MM-DD text; filters compare it lexicographically
    - Text columns default to "" and numeric columns to 0, none are nullable
    - Rows are append-only: this service never updates or deletes them

Design Decisions:
    - No ORM relationship to StopEntry: stops are written by log_id and read
      through an explicit join, nothing walks an object graph
    - ON DELETE CASCADE lives on stops.log_id and is enforced by SQLite
      (PRAGMA foreign_keys=ON, see infrastructure/database.py)
"""

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, MappedColumn, mapped_column

from driverlog.db.base import Base


def _text() -> MappedColumn[str]:
    return mapped_column(Text, nullable=False, default="", server_default="")


def _real() -> MappedColumn[float]:
    return mapped_column(Float, nullable=False, default=0.0, server_default="0")


class LogEntry(Base):
    """Work log header, parent of zero or more StopEntry rows."""
    __tablename__ = "logs"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    driver_name: Mapped[str] = _text()
    driver_email: Mapped[str] = _text()
    cc_email: Mapped[str] = _text()
    truck_num: Mapped[str] = _text()
    start_miles: Mapped[float] = _real()
    end_miles: Mapped[float] = _real()
    start_time: Mapped[str] = _text()
    end_time: Mapped[str] = _text()
    rate_mile: Mapped[float] = _real()
    rate_hour: Mapped[float] = _real()
    total_miles: Mapped[float] = _real()
    total_time: Mapped[str] = _text()
    total_detention: Mapped[str] = _text()
    total_value_hours: Mapped[float] = _real()
    gross_pay: Mapped[float] = _real()

    def __repr__(self):
        return f"<LogEntry(id={self.id}, date='{self.date}', driver='{self.driver_name}')>"
