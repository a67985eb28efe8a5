"""Log Ingestion: coerce one submission and persist the log with its stops atomically.

Invariants:
    - created_at and the default date come from the server clock, never the caller
    - Log row first (to learn its id), then every stop, then ONE commit;
      a failure anywhere leaves nothing persisted
    - Storage errors propagate untouched; the session manager rolls back and
      maps them to DatabaseError
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from driverlog.core.log_coercion import coerce_submission
from driverlog.services.log_repository import SqlLogStore

logger = logging.getLogger(__name__)


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def submit_log(
    db: AsyncSession,
    payload: Any,
    *,
    strict: bool = False,
    now: datetime | None = None,
) -> int:
    """Persist a submission and return the new log id."""
    now = now or datetime.now(timezone.utc)
    submission = coerce_submission(
        payload,
        created_at=iso_timestamp(now),
        today=now.astimezone().date(),
        strict=strict,
    )

    store = SqlLogStore(db)
    log_id = await store.insert_log(submission.log)
    await store.insert_stops(log_id, submission.stops)
    await db.commit()

    logger.info(
        "Stored log %s with %d stop(s)", log_id, len(submission.stops),
        extra={"log_id": log_id, "stop_count": len(submission.stops)},
    )
    return log_id
