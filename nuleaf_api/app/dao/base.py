"""
Common plumbing for the data-access objects.

``BaseDAO`` turns typed criteria into SQL, runs it on a fresh SQLite
connection and converts driver failures into ``PersistenceError``.
Subclasses describe their table (columns, required fields, sortable
fields), how to cast incoming values and how to build filter clauses.
"""

import logging
import re
import sqlite3
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.db import compile_pattern, get_connection
from ..core.errors import CastError, DocumentValidationError, PersistenceError
from ..schemas.common import MAX_INTEGER, PageCriteria


logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^\d+$")

Conditions = Tuple[List[str], List[Any]]


def filter_out_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is ``None`` or an empty string."""
    return {key: value for key, value in data.items() if value is not None and value != ""}


def regex_condition(column: str, pattern: Optional[str], conditions: Conditions) -> None:
    """Append a case-insensitive ``REGEXP`` clause when ``pattern`` is set."""
    if pattern is None:
        return
    try:
        compile_pattern(pattern)
    except re.error as exc:
        raise CastError("RegExp", pattern, column) from exc
    clauses, params = conditions
    clauses.append(f"{column} REGEXP ?")
    params.append(pattern)


class BaseDAO:
    """Shared CRUD operations over a single table."""

    table: str = ""
    model: str = ""
    columns: Sequence[str] = ()
    required: Sequence[str] = ()
    sortable: frozenset = frozenset({"id"})
    criteria_class: type = PageCriteria

    def __init__(self, connect: Callable[[], sqlite3.Connection] = get_connection) -> None:
        self._connect = connect

    # Subclass hooks -------------------------------------------------------

    def _conditions(self, criteria: PageCriteria) -> Conditions:
        return [], []

    def _cast(self, field: str, value: Any) -> Any:
        return value

    def _to_entity(self, row: sqlite3.Row) -> Any:
        raise NotImplementedError

    # Helpers --------------------------------------------------------------

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        conn = self._connect()
        try:
            yield conn.cursor()
            conn.commit()
        except (sqlite3.Error, OverflowError) as exc:
            logger.error("Database error on %s: %s", self.table, exc)
            raise PersistenceError(str(exc)) from exc
        finally:
            conn.close()

    def _parse_id(self, raw: Any) -> int:
        if isinstance(raw, int) and not isinstance(raw, bool):
            parsed = raw
        elif isinstance(raw, str) and _ID_PATTERN.match(raw):
            parsed = int(raw)
        else:
            raise CastError("Integer", raw, "id")
        if not 0 <= parsed <= MAX_INTEGER:
            raise CastError("Integer", raw, "id")
        return parsed

    def _document(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Cast known columns, ignoring unknown keys."""
        return {
            field: self._cast(field, value)
            for field, value in data.items()
            if field in self.columns
        }

    def _where(self, criteria: PageCriteria) -> Tuple[str, List[Any]]:
        clauses, params = self._conditions(criteria)
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def _select_by_id(self, cursor: sqlite3.Cursor, entity_id: int) -> Optional[Any]:
        columns = ", ".join(("id",) + tuple(self.columns))
        row = cursor.execute(
            f"SELECT {columns} FROM {self.table} WHERE id = ?", (entity_id,)
        ).fetchone()
        return self._to_entity(row) if row else None

    # Operations -----------------------------------------------------------

    async def find(self, criteria: Optional[PageCriteria] = None) -> List[Any]:
        """Return documents matching ``criteria``; an empty list when none match.

        Sorting is applied only when ``criteria.sort_by`` names a sortable
        column; any other value is ignored.
        """
        criteria = criteria or self._default_criteria()
        where, params = self._where(criteria)
        columns = ", ".join(("id",) + tuple(self.columns))
        query = f"SELECT {columns} FROM {self.table}{where}"
        if criteria.sort_by in self.sortable:
            direction = "DESC" if criteria.sort < 0 else "ASC"
            query += f" ORDER BY {criteria.sort_by} {direction}"
        query += " LIMIT ? OFFSET ?"
        params.extend([criteria.limit, criteria.skip])
        with self._cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        return [self._to_entity(row) for row in rows]

    async def count(self, criteria: Optional[PageCriteria] = None) -> int:
        """Count documents matching ``criteria``; pagination is ignored."""
        criteria = criteria or self._default_criteria()
        where, params = self._where(criteria)
        with self._cursor() as cursor:
            row = cursor.execute(
                f"SELECT COUNT(*) AS total FROM {self.table}{where}", tuple(params)
            ).fetchone()
        return int(row["total"])

    async def create(self, data: Dict[str, Any]) -> Optional[Any]:
        """Validate and insert a document, returning the stored entity."""
        document = self._document(filter_out_empty(data))
        missing = [field for field in self.required if field not in document]
        if missing:
            raise DocumentValidationError(self.model, missing)
        fields = list(document)
        placeholders = ", ".join("?" for _ in fields)
        with self._cursor() as cursor:
            cursor.execute(
                f"INSERT INTO {self.table} ({', '.join(fields)}) VALUES ({placeholders})",
                tuple(document[field] for field in fields),
            )
            entity = self._select_by_id(cursor, cursor.lastrowid)
        logger.info("Created %s %s", self.model, getattr(entity, "id", None))
        return entity

    async def get(self, entity_id: Any) -> Optional[Any]:
        """Return the entity with ``entity_id`` or ``None``.

        Raises ``CastError`` when the id is not a valid identifier.
        """
        parsed = self._parse_id(entity_id)
        with self._cursor() as cursor:
            return self._select_by_id(cursor, parsed)

    async def update(self, entity_id: Any, changes: Dict[str, Any]) -> Optional[Any]:
        """Apply the non-empty ``changes`` and return the updated entity.

        Returns ``None`` when no entity has ``entity_id``.
        """
        parsed = self._parse_id(entity_id)
        document = self._document(filter_out_empty(changes))
        with self._cursor() as cursor:
            if document:
                assignments = ", ".join(f"{field} = ?" for field in document)
                cursor.execute(
                    f"UPDATE {self.table} SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    tuple(document.values()) + (parsed,),
                )
            entity = self._select_by_id(cursor, parsed)
        if entity is not None and document:
            logger.info("Updated %s %s: %s", self.model, parsed, sorted(document))
        return entity

    async def delete(self, entity_id: Any) -> None:
        """Delete the entity with ``entity_id``.

        Deleting an id that does not exist is not an error.
        """
        parsed = self._parse_id(entity_id)
        with self._cursor() as cursor:
            cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (parsed,))
            removed = cursor.rowcount
        logger.info("Deleted %s %s (%s row(s))", self.model, parsed, removed)

    def _default_criteria(self) -> PageCriteria:
        return self.criteria_class()
