"""
Teams data-access object.

Handles requests to the ``teams`` table.  Besides the shared CRUD
operations it offers ``find_by_name`` for exact name lookups.
"""

import sqlite3
from typing import Any, Optional

from ..schemas.team import TeamCriteria, TeamRead
from .base import BaseDAO, Conditions, regex_condition


class TeamDAO(BaseDAO):
    table = "teams"
    model = "Team"
    columns = ("name",)
    required = ("name",)
    sortable = frozenset({"id", "name"})
    criteria_class = TeamCriteria

    def _conditions(self, criteria: TeamCriteria) -> Conditions:
        conditions: Conditions = ([], [])
        regex_condition("name", criteria.name, conditions)
        return conditions

    def _cast(self, field: str, value: Any) -> Any:
        return value if isinstance(value, str) else str(value)

    def _to_entity(self, row: sqlite3.Row) -> TeamRead:
        return TeamRead(id=row["id"], name=row["name"])

    async def find_by_name(self, name: str) -> Optional[TeamRead]:
        """Return the first team whose name equals ``name`` exactly, or ``None``."""
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT id, name FROM teams WHERE name = ? ORDER BY id LIMIT 1", (name,)
            ).fetchone()
        return self._to_entity(row) if row else None
