"""Database Package: SQLAlchemy declarative Base for the logs/stops schema.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)
"""
