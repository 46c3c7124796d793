"""API Layer — routers, per-request dependency providers, error envelope.

Invariants:
    - Handlers translate HTTP payloads to service calls and ORM objects to response schemas
    - No handler catches domain errors; error_handlers.py renders them
"""
