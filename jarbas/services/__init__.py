"""Services Layer — identity/profile management and goal registration.

Invariants:
    - Every check of an operation runs before its first write
    - Writes of one operation share a single transaction() boundary
    - Rejections are raised as RejectedError carrying the full RejectionSet

Design Decisions:
    - One service class per aggregate, constructed per request with its AsyncSession
"""
