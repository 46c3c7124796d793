"""Infrastructure Layer — database sessions, hashing and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - SQLAlchemy exceptions are mapped to JarbasError subclasses before leaving this layer
"""
