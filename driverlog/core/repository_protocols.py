"""Boundary Protocols: contract between the services and the storage layer.

Invariants:
    - Services depend on LogStore, not on a concrete SQLAlchemy session
    - Predicates are lists of SQL boolean clauses AND-ed by the store
    - stream_* methods yield plain row mappings one at a time

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from collections.abc import AsyncIterator, Mapping, Sequence
from typing import Any, Protocol


class LogStore(Protocol):
    """Persistence contract for logs and their stops."""
    async def insert_log(self, fields: Mapping[str, Any]) -> int: ...
    async def insert_stops(
        self, log_id: int, stops: Sequence[Mapping[str, Any]],
    ) -> None: ...
    async def query_logs(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> list[Any]: ...
    def stream_logs(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> AsyncIterator[Mapping[str, Any]]: ...
    async def query_stops_joined(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> list[Mapping[str, Any]]: ...
    def stream_stops_joined(
        self, predicate: Sequence[Any], order: Sequence[Any],
    ) -> AsyncIterator[Mapping[str, Any]]: ...
