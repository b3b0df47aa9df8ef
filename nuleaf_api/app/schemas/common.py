"""
Shared query criteria for list and count endpoints.

``PageCriteria`` carries sorting and pagination.  Paging values are
parsed leniently: anything that is not a usable number falls back to
the default instead of failing the request.
"""

from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.config import settings
from ..core.errors import CastError


# Largest value SQLite can bind as an INTEGER; anything beyond is unusable.
MAX_INTEGER = 2**63 - 1


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if abs(number) <= MAX_INTEGER else None


def blank_to_none(value: Any) -> Any:
    """Treat empty strings as unset filter values."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PageCriteria(BaseModel):
    """Sorting and pagination options.

    ``sort`` is a direction: negative values sort descending, anything
    else ascending.  ``sort_by`` is only honoured by a DAO when it names
    a sortable attribute of the entity.
    """

    sort: int = 1
    sort_by: Optional[str] = None
    skip: int = 0
    limit: int = Field(default_factory=lambda: settings.default_page_limit)

    # Cast kind reported for fields that fail to parse.
    _cast_kinds: ClassVar[Dict[str, str]] = {}

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> int:
        number = _to_int(value)
        return -1 if number is not None and number < 0 else 1

    @field_validator("skip", mode="before")
    @classmethod
    def _parse_skip(cls, value: Any) -> int:
        number = _to_int(value)
        return number if number and number > 0 else 0

    @field_validator("limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: Any) -> int:
        number = _to_int(value)
        return number if number and number > 0 else settings.default_page_limit

    @field_validator("sort_by", mode="before")
    @classmethod
    def _parse_sort_by(cls, value: Any) -> Any:
        return blank_to_none(value)

    @classmethod
    def from_query(cls, **params: Any) -> "PageCriteria":
        """Build criteria from raw query parameters.

        ``None`` values are dropped so field defaults apply.  A value
        that cannot be parsed raises ``CastError``.
        """
        values = {key: value for key, value in params.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as exc:
            error = exc.errors()[0]
            path = ".".join(str(part) for part in error.get("loc", ())) or cls.__name__
            kind = cls._cast_kinds.get(path, "String")
            raise CastError(kind, error.get("input"), path) from exc
