"""Infrastructure Layer — database access, SQL construction and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures surface as core.errors.DatabaseError
"""
