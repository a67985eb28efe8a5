"""ORM Models: SQLAlchemy declarative models for logs and their stops.

Invariants:
    - All models inherit from Base (db/base.py)
    - LogEntry is the aggregate root; StopEntry rows are scoped by log_id

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all runs
"""

from driverlog.models.log_entry import LogEntry  # noqa: F401
from driverlog.models.stop_entry import StopEntry  # noqa: F401
