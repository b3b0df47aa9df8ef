"""
Events data-access object.

Handles requests to the ``events`` table.  ``title`` and ``date`` are
required on create; ``title`` and ``location`` filters are
case-insensitive regular expressions and ``start_date``/``end_date``
bound ``date`` inclusively.
"""

import sqlite3
from typing import Any

from ..core.dates import to_storage
from ..core.errors import CastError
from ..schemas.event import EventCriteria, EventRead
from .base import BaseDAO, Conditions, regex_condition


class EventDAO(BaseDAO):
    table = "events"
    model = "Event"
    columns = ("title", "date", "location")
    required = ("title", "date")
    sortable = frozenset({"id", "title", "date", "location"})
    criteria_class = EventCriteria

    def _conditions(self, criteria: EventCriteria) -> Conditions:
        conditions: Conditions = ([], [])
        regex_condition("title", criteria.title, conditions)
        regex_condition("location", criteria.location, conditions)
        clauses, params = conditions
        if criteria.start_date is not None:
            clauses.append("date >= ?")
            params.append(to_storage(criteria.start_date))
        if criteria.end_date is not None:
            clauses.append("date <= ?")
            params.append(to_storage(criteria.end_date))
        return conditions

    def _cast(self, field: str, value: Any) -> Any:
        if field == "date":
            try:
                return to_storage(value)
            except (TypeError, ValueError) as exc:
                raise CastError("Date", value, field) from exc
        return value if isinstance(value, str) else str(value)

    def _to_entity(self, row: sqlite3.Row) -> EventRead:
        return EventRead(
            id=row["id"],
            title=row["title"],
            date=row["date"],
            location=row["location"],
        )
