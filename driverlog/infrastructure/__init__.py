"""Infrastructure Layer: storage session management, logging setup, HTTP middleware.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage exceptions are mapped to DatabaseError at this layer only
"""
