"""Driver Log Package: daily driver work log ingestion, admin reporting and CSV export.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
