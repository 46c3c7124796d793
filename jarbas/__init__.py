"""Jarbas — personal finance API: user accounts, financial profiles and goals.

Invariants:
    - Package root exposes only __version__ (no import side-effects)
"""

__version__ = "1.0.0"
