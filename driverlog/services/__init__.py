"""Services Layer: ingestion, filtered queries and CSV export over the log store.

Invariants:
    - Services never catch storage errors; they reach the session manager untouched
    - All read paths share build_log_predicate() (log_query.py)
"""
