"""Core Layer — credential and email rules, domain types, error hierarchy.

Invariants:
    - Nothing in core/ opens a session, awaits, or imports services/, api/ or infrastructure/
    - Rule checks return lists of violation messages; deciding what to do with them is the caller's job
"""
