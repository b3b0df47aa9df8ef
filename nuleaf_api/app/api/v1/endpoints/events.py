"""
Event endpoints for API v1.

These routes handle searching, counting, creating, updating and
deleting events.  Errors are rendered as ``{"error": ...}`` by the
application's HTTP exception handler: fixed messages for invalid ids
and missing events, the serialised persistence error otherwise.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nuleaf_api.app.api.v1.dependencies import get_event_dao
from nuleaf_api.app.core.errors import CastError, PersistenceError
from nuleaf_api.app.dao import EventDAO
from nuleaf_api.app.schemas.event import EventCriteria, EventIn, EventRead


router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_ID = "Not a valid event id."


def _server_error(exc: PersistenceError) -> HTTPException:
    logger.warning("Event request failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.to_dict()
    )


@router.get("", response_model=List[EventRead])
async def search_events(
    title: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    skip: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    dao: EventDAO = Depends(get_event_dao),
) -> List[EventRead]:
    """Search for events.  The response is always an array, possibly empty.

    - **title**, **location**: case-insensitive pattern filters.
    - **start_date**, **end_date**: inclusive bounds on the event date.
    - **sortBy**: `id`, `title`, `date` or `location`; other values are ignored.
    - **sort**: negative for descending order, otherwise ascending.
    - **skip**, **limit**: pagination; unusable values fall back to defaults.
    """
    try:
        criteria = EventCriteria.from_query(
            title=title,
            start_date=start_date,
            end_date=end_date,
            location=location,
            sort=sort,
            sort_by=sort_by,
            skip=skip,
            limit=limit,
        )
        return await dao.find(criteria)
    except PersistenceError as exc:
        raise _server_error(exc) from exc


@router.get("/count", response_model=int)
async def count_events(
    title: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    dao: EventDAO = Depends(get_event_dao),
) -> int:
    """Count events matching the filters.  Always a number, possibly 0."""
    try:
        criteria = EventCriteria.from_query(
            title=title, start_date=start_date, end_date=end_date, location=location
        )
        return await dao.count(criteria)
    except PersistenceError as exc:
        raise _server_error(exc) from exc


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: Optional[EventIn] = None,
    dao: EventDAO = Depends(get_event_dao),
) -> EventRead:
    """Store an event and return it."""
    payload = event.model_dump() if event else {}
    try:
        created = await dao.create(payload)
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create event.",
        )
    return created


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: str, dao: EventDAO = Depends(get_event_dao)) -> EventRead:
    """Retrieve an event by id.  Answers 404 when the event is not found."""
    try:
        event = await dao.get(event_id)
    except CastError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID) from exc
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event does not exists."
        )
    return event


@router.api_route(
    "/{event_id}",
    methods=["PUT", "POST"],
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
)
async def update_event(
    event_id: str,
    updates: Optional[EventIn] = None,
    dao: EventDAO = Depends(get_event_dao),
) -> EventRead:
    """Update an event.  Empty or omitted fields keep their current value.

    An unknown id is reported as a failed update (500), not a 404.
    """
    changes = updates.model_dump() if updates else {}
    try:
        event = await dao.update(event_id, changes)
    except CastError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID) from exc
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update event.",
        )
    return event


@router.delete("/{event_id}")
async def delete_event(event_id: str, dao: EventDAO = Depends(get_event_dao)) -> dict:
    """Delete an event.

    Succeeds whether or not the event existed; any storage failure,
    including a malformed id, is a 500.
    """
    try:
        await dao.delete(event_id)
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    return {"success": True}
