"""
Pydantic models for event data.

``EventIn`` is the request body for create and update; its fields are
all optional because required-field checks belong to ``EventDAO``.
``EventRead`` is the response shape and ``EventCriteria`` the typed
filter used by search and count.
"""

from datetime import datetime
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.dates import parse_datetime
from .common import PageCriteria, blank_to_none


class EventIn(BaseModel):
    """Event attributes sent by clients."""

    title: Optional[str] = Field(None, examples=["Community garden day"])
    date: Optional[str] = Field(None, examples=["2025-09-01T10:00:00Z"])
    location: Optional[str] = Field(None, examples=["Main hall"])


class EventRead(BaseModel):
    """Schema for reading an event from the API."""

    id: int
    title: str
    date: datetime
    location: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class EventCriteria(PageCriteria):
    """Filters for searching and counting events.

    ``title`` and ``location`` are case-insensitive regular expressions.
    ``start_date`` and ``end_date`` are inclusive bounds on ``date``.
    """

    title: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    _cast_kinds: ClassVar[Dict[str, str]] = {"start_date": "Date", "end_date": "Date"}

    @field_validator("title", "location", mode="before")
    @classmethod
    def _blank_filters(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        value = blank_to_none(value)
        if value is None:
            return None
        return parse_datetime(value)
