"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; business rules (email
      uniqueness, password strength) are decided by services
    - Domain types from core/ used for enum fields
    - No response schema exposes password_hash
"""
