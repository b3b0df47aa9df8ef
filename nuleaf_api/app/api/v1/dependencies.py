"""
FastAPI dependency providers for the data-access objects.

Endpoints receive their DAO through ``Depends`` so tests (or another
deployment) can swap the storage with ``app.dependency_overrides``.
"""

from nuleaf_api.app.dao import EventDAO, TeamDAO


def get_event_dao() -> EventDAO:
    return EventDAO()


def get_team_dao() -> TeamDAO:
    return TeamDAO()
