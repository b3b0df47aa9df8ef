"""
Pydantic models for team data.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .common import PageCriteria, blank_to_none


class TeamIn(BaseModel):
    """Team attributes sent by clients."""

    name: Optional[str] = Field(None, examples=["Compost crew"])


class TeamRead(BaseModel):
    id: int
    name: str

    model_config = {
        "from_attributes": True,
    }


class TeamCriteria(PageCriteria):
    """Filters for searching and counting teams; ``name`` is a case-insensitive regex."""

    name: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name(cls, value: Any) -> Any:
        return blank_to_none(value)
