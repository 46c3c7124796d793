"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root for Profile; Goal references User and Currency

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from jarbas.models.user import User  # noqa: F401
from jarbas.models.profile import Profile  # noqa: F401
from jarbas.models.currency import Currency  # noqa: F401
from jarbas.models.goal import Goal  # noqa: F401
