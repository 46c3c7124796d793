"""Repositories — the persistence contract used by services.

Invariants:
    - Writes are explicit calls (insert, update_fields, replace, delete); services never
      rely on implicit change tracking to decide what gets written
    - Repositories flush, they never commit; the caller owns the transaction
"""
