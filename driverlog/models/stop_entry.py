"""StopEntry ORM: persists one stop/event line of a work log.

Invariants:
    - Always belongs to a LogEntry (log_id FK, ON DELETE CASCADE)
    - value_hours is the only nullable payload column (caller sent "")
    - Created only inside the transaction that creates the parent log
"""

from sqlalchemy import Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, MappedColumn, mapped_column

from driverlog.db.base import Base


def _text() -> MappedColumn[str]:
    return mapped_column(Text, nullable=False, default="", server_default="")


class StopEntry(Base):
    """Stop line item, ordered within its log by stop_no."""
    __tablename__ = "stops"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    log_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("logs.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    stop_no: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0",
    )
    type: Mapped[str] = _text()
    location: Mapped[str] = _text()
    arrive: Mapped[str] = _text()
    depart: Mapped[str] = _text()
    duration: Mapped[str] = _text()
    detention: Mapped[str] = _text()
    value_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    grain_phase: Mapped[str] = _text()

    def __repr__(self):
        return f"<StopEntry(id={self.id}, log_id={self.log_id}, stop_no={self.stop_no})>"
