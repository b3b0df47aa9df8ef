"""
Data-access objects, one per entity.

Each DAO wraps a single table and exposes awaitable CRUD operations
that return entities or raise a ``PersistenceError`` subclass.  DAOs
take a connection factory so callers and tests can point them at any
SQLite database.
"""

from .event_dao import EventDAO
from .team_dao import TeamDAO

__all__ = ["EventDAO", "TeamDAO"]
