"""ORM Models — SQLAlchemy declarative models for ledger entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - A user owns at most one Investment (unique user_id)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from bankroll.models.user import User  # noqa: F401
from bankroll.models.investment import Investment  # noqa: F401
