"""
Error kinds raised by the data-access layer.

Endpoints translate these into HTTP responses: a ``CastError`` on an id
lookup becomes a 400, everything else a 500.  Absence of a document is
not an error; DAOs return ``None`` instead.
"""

from typing import Any, Dict


class PersistenceError(Exception):
    """Generic storage failure."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialisable form used in ``{"error": ...}`` response bodies."""
        return {"name": type(self).__name__, "message": str(self)}


class CastError(PersistenceError):
    """A value could not be converted to the type stored for its field."""

    def __init__(self, kind: str, value: Any, path: str) -> None:
        self.kind = kind
        self.value = value
        self.path = path
        super().__init__(f'Cast to {kind} failed for value "{value}" at path "{path}"')


class DocumentValidationError(PersistenceError):
    """A document is missing required fields."""

    def __init__(self, model: str, missing: list) -> None:
        self.model = model
        self.missing = list(missing)
        fields = ", ".join(self.missing)
        super().__init__(f"{model} validation failed: {fields} required")
