"""
Team endpoints for API v1.

Mirrors the event routes on top of ``TeamDAO`` and adds an exact-name
lookup.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nuleaf_api.app.api.v1.dependencies import get_team_dao
from nuleaf_api.app.core.errors import CastError, PersistenceError
from nuleaf_api.app.dao import TeamDAO
from nuleaf_api.app.schemas.team import TeamCriteria, TeamIn, TeamRead


router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_ID = "Not a valid team id."
NOT_FOUND = "Team does not exists."


def _server_error(exc: PersistenceError) -> HTTPException:
    logger.warning("Team request failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.to_dict()
    )


@router.get("", response_model=List[TeamRead])
async def search_teams(
    name: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    skip: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    dao: TeamDAO = Depends(get_team_dao),
) -> List[TeamRead]:
    """Search for teams by name pattern.  Always an array."""
    try:
        criteria = TeamCriteria.from_query(
            name=name, sort=sort, sort_by=sort_by, skip=skip, limit=limit
        )
        return await dao.find(criteria)
    except PersistenceError as exc:
        raise _server_error(exc) from exc


@router.get("/count", response_model=int)
async def count_teams(
    name: Optional[str] = Query(None),
    dao: TeamDAO = Depends(get_team_dao),
) -> int:
    try:
        return await dao.count(TeamCriteria.from_query(name=name))
    except PersistenceError as exc:
        raise _server_error(exc) from exc


@router.get("/name/{name}", response_model=TeamRead)
async def get_team_by_name(name: str, dao: TeamDAO = Depends(get_team_dao)) -> TeamRead:
    """Look up a team by its exact name."""
    try:
        team = await dao.find_by_name(name)
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if team is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return team


@router.post("", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
async def create_team(
    team: Optional[TeamIn] = None,
    dao: TeamDAO = Depends(get_team_dao),
) -> TeamRead:
    payload = team.model_dump() if team else {}
    try:
        created = await dao.create(payload)
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create team.",
        )
    return created


@router.get("/{team_id}", response_model=TeamRead)
async def get_team(team_id: str, dao: TeamDAO = Depends(get_team_dao)) -> TeamRead:
    try:
        team = await dao.get(team_id)
    except CastError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID) from exc
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if team is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return team


@router.api_route(
    "/{team_id}",
    methods=["PUT", "POST"],
    response_model=TeamRead,
    status_code=status.HTTP_201_CREATED,
)
async def update_team(
    team_id: str,
    updates: Optional[TeamIn] = None,
    dao: TeamDAO = Depends(get_team_dao),
) -> TeamRead:
    changes = updates.model_dump() if updates else {}
    try:
        team = await dao.update(team_id, changes)
    except CastError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID) from exc
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    if team is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update team.",
        )
    return team


@router.delete("/{team_id}")
async def delete_team(team_id: str, dao: TeamDAO = Depends(get_team_dao)) -> dict:
    try:
        await dao.delete(team_id)
    except PersistenceError as exc:
        raise _server_error(exc) from exc
    return {"success": True}
